"""
Column expressions.

An expression is a small tree evaluated against a PyTable to produce a new
PyColumn of the table's row count. Trees are built with ``col()``, ``lit()``,
``func()`` and ordinary Python operators:

    >>> e = abs(col("x") - col("y"))
    >>> str(e)
    'abs(x - y)'

``str(expr)`` is the canonical rendering used to name unnamed key columns.
Evaluation is elementwise; a missing operand (None) gives a missing result.
"""

import operator
from abc import ABC, abstractmethod
from typing import Any, Callable, List, Optional

from .column import PyColumn
from .errors import PyDistinctTypeError, PyDistinctValueError
from .missing import is_missing
from .naming import _quote_name


# Python operator precedence, lowest first
_PREC_COMPARE = 6
_PREC = {
	'|': 7,
	'^': 8,
	'&': 9,
	'+': 11,
	'-': 11,
	'*': 12,
	'/': 12,
	'//': 12,
	'%': 12,
	'**': 14,
	'==': _PREC_COMPARE,
	'!=': _PREC_COMPARE,
	'<': _PREC_COMPARE,
	'<=': _PREC_COMPARE,
	'>': _PREC_COMPARE,
	'>=': _PREC_COMPARE,
}
_PREC_UNARY = 13
_PREC_ATOM = 100

_BINARY_OPS = {
	'+': operator.add,
	'-': operator.sub,
	'*': operator.mul,
	'/': operator.truediv,
	'//': operator.floordiv,
	'%': operator.mod,
	'**': operator.pow,
	'==': operator.eq,
	'!=': operator.ne,
	'<': operator.lt,
	'<=': operator.le,
	'>': operator.gt,
	'>=': operator.ge,
	'&': operator.and_,
	'|': operator.or_,
	'^': operator.xor,
}

_UNARY_OPS = {
	'-': operator.neg,
	'+': operator.pos,
	'~': operator.invert,
}


class Expr(ABC):
	"""Base class for column expressions."""

	# Expressions override == to build trees, so they cannot be dict keys
	__hash__ = None

	_precedence = _PREC_ATOM

	@abstractmethod
	def _values(self, table) -> List[Any]:
		"""Evaluate to a list of ``len(table)`` values."""

	@abstractmethod
	def __str__(self) -> str:
		"""Canonical text rendering."""

	def __repr__(self):
		return f"<Expr {self}>"

	def __bool__(self):
		raise PyDistinctTypeError(
			f"The truth value of expression '{self}' is ambiguous; use & and | to combine conditions"
		)

	@staticmethod
	def _coerce(value: Any) -> "Expr":
		if isinstance(value, Expr):
			return value
		if isinstance(value, PyColumn):
			return ColumnValues(value)
		return Literal(value)

	def _binary(self, op, other, reflected=False):
		other = Expr._coerce(other)
		if reflected:
			return BinaryOp(op, other, self)
		return BinaryOp(op, self, other)

	def __add__(self, other):
		return self._binary('+', other)

	def __radd__(self, other):
		return self._binary('+', other, reflected=True)

	def __sub__(self, other):
		return self._binary('-', other)

	def __rsub__(self, other):
		return self._binary('-', other, reflected=True)

	def __mul__(self, other):
		return self._binary('*', other)

	def __rmul__(self, other):
		return self._binary('*', other, reflected=True)

	def __truediv__(self, other):
		return self._binary('/', other)

	def __rtruediv__(self, other):
		return self._binary('/', other, reflected=True)

	def __floordiv__(self, other):
		return self._binary('//', other)

	def __rfloordiv__(self, other):
		return self._binary('//', other, reflected=True)

	def __mod__(self, other):
		return self._binary('%', other)

	def __rmod__(self, other):
		return self._binary('%', other, reflected=True)

	def __pow__(self, other):
		return self._binary('**', other)

	def __rpow__(self, other):
		return self._binary('**', other, reflected=True)

	def __eq__(self, other):
		return self._binary('==', other)

	def __ne__(self, other):
		return self._binary('!=', other)

	def __lt__(self, other):
		return self._binary('<', other)

	def __le__(self, other):
		return self._binary('<=', other)

	def __gt__(self, other):
		return self._binary('>', other)

	def __ge__(self, other):
		return self._binary('>=', other)

	def __and__(self, other):
		return self._binary('&', other)

	def __rand__(self, other):
		return self._binary('&', other, reflected=True)

	def __or__(self, other):
		return self._binary('|', other)

	def __ror__(self, other):
		return self._binary('|', other, reflected=True)

	def __xor__(self, other):
		return self._binary('^', other)

	def __rxor__(self, other):
		return self._binary('^', other, reflected=True)

	def __neg__(self):
		return UnaryOp('-', self)

	def __pos__(self):
		return UnaryOp('+', self)

	def __invert__(self):
		return UnaryOp('~', self)

	def __abs__(self):
		return Call(abs, (self,), name='abs')

	def isna(self):
		"""True where the value is missing (None or NaN); never missing itself."""
		return Call(is_missing, (self,), name='isna', propagate_missing=False)


class ColumnRef(Expr):
	"""Reference to a table column by name."""

	def __init__(self, name: str):
		if not isinstance(name, str):
			raise PyDistinctTypeError(f"Column name must be a string, not {type(name).__name__}")
		self.name = name

	def _values(self, table):
		# Unknown columns raise PyDistinctKeyError from the table
		return table.column(self.name)._underlying

	def __str__(self):
		return _quote_name(self.name)


class ColumnValues(Expr):
	"""A ready-made PyColumn used directly as an expression."""

	def __init__(self, column: PyColumn):
		self.column = column

	def _values(self, table):
		return self.column._underlying

	def __str__(self):
		if self.column.name is None:
			return "col"
		return _quote_name(self.column.name)


class Literal(Expr):
	"""A constant, broadcast to every row."""

	def __init__(self, value: Any):
		self.value = value

	def _values(self, table):
		return [self.value] * len(table)

	def __str__(self):
		return repr(self.value)


class BinaryOp(Expr):
	"""Binary operation: +, -, >, ==, &, etc."""

	def __init__(self, op: str, left: Expr, right: Expr):
		if op not in _BINARY_OPS:
			raise PyDistinctValueError(f"Unknown binary operator '{op}'")
		self.op = op
		self.left = left
		self.right = right
		self._precedence = _PREC[op]

	def _values(self, table):
		func = _BINARY_OPS[self.op]
		left = self.left._values(table)
		right = self.right._values(table)
		return [None if (a is None or b is None) else func(a, b) for a, b in zip(left, right)]

	def __str__(self):
		prec = self._precedence
		left, right = str(self.left), str(self.right)
		if self.op == '**':
			# right-associative
			left_paren = self.left._precedence <= prec
			right_paren = self.right._precedence < prec
		elif prec == _PREC_COMPARE:
			# avoid rendering as a chained comparison
			left_paren = self.left._precedence <= prec
			right_paren = self.right._precedence <= prec
		else:
			left_paren = self.left._precedence < prec
			right_paren = self.right._precedence <= prec
		if left_paren:
			left = f"({left})"
		if right_paren:
			right = f"({right})"
		return f"{left} {self.op} {right}"


class UnaryOp(Expr):
	"""Unary operation: -, +, ~."""

	_precedence = _PREC_UNARY

	def __init__(self, op: str, operand: Expr):
		if op not in _UNARY_OPS:
			raise PyDistinctValueError(f"Unknown unary operator '{op}'")
		self.op = op
		self.operand = operand

	def _values(self, table):
		func = _UNARY_OPS[self.op]
		return [None if v is None else func(v) for v in self.operand._values(table)]

	def __str__(self):
		inner = str(self.operand)
		if self.operand._precedence < _PREC_UNARY:
			inner = f"({inner})"
		return f"{self.op}{inner}"


class Call(Expr):
	"""A scalar Python function applied row by row."""

	def __init__(self, fn: Callable, args, name: Optional[str] = None, propagate_missing: bool = True):
		if not callable(fn):
			raise PyDistinctTypeError(f"{fn!r} is not callable")
		self.fn = fn
		self.args = tuple(Expr._coerce(a) for a in args)
		self.name = name or getattr(fn, '__name__', None) or 'func'
		self.propagate_missing = propagate_missing

	def _values(self, table):
		fn = self.fn
		columns = [a._values(table) for a in self.args]
		if not columns:
			return [fn() for _ in range(len(table))]
		out = []
		for row in zip(*columns):
			if self.propagate_missing and any(v is None for v in row):
				out.append(None)
			else:
				out.append(fn(*row))
		return out

	def __str__(self):
		return f"{self.name}({', '.join(str(a) for a in self.args)})"


def col(name: str) -> ColumnRef:
	"""Reference a column by name."""
	return ColumnRef(name)


def lit(value: Any) -> Literal:
	"""A constant value."""
	return Literal(value)


def func(fn: Callable, *args, name: Optional[str] = None) -> Call:
	"""
	Lift a scalar function into an expression.

	Plain strings among ``args`` are column references; use ``lit()`` for
	string constants.

	>>> str(func(round, col("price"), 2))
	'round(price, 2)'
	"""
	args = tuple(ColumnRef(a) if isinstance(a, str) else a for a in args)
	return Call(fn, args, name=name)


def as_expr(key) -> Expr:
	"""Normalize a key given by the caller: a column name, a PyColumn, or an Expr."""
	if isinstance(key, Expr):
		return key
	if isinstance(key, str):
		return ColumnRef(key)
	if isinstance(key, PyColumn):
		return ColumnValues(key)
	raise PyDistinctTypeError(
		f"Keys must be column names, PyColumns or expressions, not {type(key).__name__}"
	)


def evaluate(expr, table) -> PyColumn:
	"""
	Evaluate ``expr`` against ``table``.

	Returns a PyColumn of ``len(table)`` rows named by the expression's
	canonical rendering. Errors from the expression itself (unknown columns,
	failing functions) propagate unchanged.
	"""
	expr = as_expr(expr)
	values = expr._values(table)
	if len(values) != len(table):
		raise PyDistinctValueError(
			f"Expression '{expr}' produced {len(values)} values, but table has {len(table)} rows"
		)
	return PyColumn(values, name=str(expr))
