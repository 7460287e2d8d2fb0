"""
Distinct rows and distinct counts.

``distinct()`` runs in three steps:

  1. ``distinct_vars``: evaluate key expressions into temporary columns and
     work out which columns form the key (``vars``) and which are returned
     (``keep``). Group columns of a GroupedTable are always part of the key.
  2. ``assert_dedupable``: refuse container-typed columns (lists, dicts, ...),
     which have no usable equality/hash.
  3. ``select_distinct``: one forward pass over the rows with a hash set of key
     tuples; the first row of each key wins and output order is order of first
     appearance. No sorting is involved.

``n_distinct()`` counts distinct tuples across parallel sequences with the
same single hashed pass.

Missing values: when selecting rows, None is a key like any other (all Nones
fall together, all NaNs fall together). ``n_distinct(..., na_rm=True)``
instead drops every tuple with a missing component. The two policies differ
on purpose.
"""

from .column import PyColumn
from .errors import LengthMismatch, PyDistinctTypeError, UnsupportedColumnType
from .expr import ColumnRef, ColumnValues, as_expr, evaluate
from .grouping import GroupedTable, with_grouping
from .missing import has_missing, key_tuple, key_value
from .naming import _uniquify
from .table import PyTable
from .typing import CONTAINER_KINDS, is_container_column


def distinct(data, *keys, keep_all=False, **named_keys):
	"""
	Keep only the first row for each distinct combination of key values.

	Args:
		data: PyTable or GroupedTable
		*keys: column names, PyColumns or expressions. With no keys at all,
			every column is part of the key.
		keep_all: if True, keep every column (values come from the first row
			of each combination); otherwise only the key columns
		**named_keys: name -> column name or expression, computed and added
			under that name before deduplicating

	Returns:
		A table of the same kind as ``data``; a GroupedTable keeps its grouping

	Raises:
		UnsupportedColumnType: a returned column holds container values
		PyDistinctKeyError: an expression refers to an unknown column
	"""
	if isinstance(data, GroupedTable):
		table = data.table
		group_vars = data.group_vars
	elif isinstance(data, PyTable):
		table = data
		group_vars = []
	else:
		raise PyDistinctTypeError(f"distinct() needs a PyTable or GroupedTable, not {type(data).__name__}")

	key_specs = [(None, as_expr(k)) for k in keys]
	key_specs.extend((name, as_expr(k)) for name, k in named_keys.items())

	augmented, vars_, keep = distinct_vars(table, key_specs, group_vars, keep_all=keep_all)
	result = select_distinct(augmented, vars_, keep)
	return with_grouping(result, group_vars)


def distinct_vars(table, keys, group_vars=(), keep_all=False):
	"""
	Materialize key columns and decide the key and output columns.

	Args:
		table: PyTable to deduplicate (not modified)
		keys: list of (name or None, expression) pairs, evaluated in order;
			a later key may use a column computed by an earlier one
		group_vars: group column names, always added to the key
		keep_all: return every column rather than only the key columns

	Returns:
		(augmented table, vars, keep)
	"""
	if not keys:
		names = table.names()
		assert_dedupable(table, names)
		return table, names, list(names)

	data = table
	key_names = []
	generated = {}
	for name, expr in keys:
		expr = as_expr(expr)
		if name is None:
			name = _default_key_name(expr)
			if not isinstance(expr, ColumnRef):
				# Different unnamed keys never share a generated name
				if generated.get(name, expr) is not expr:
					name = _uniquify(name, set(generated))
				generated[name] = expr
		# A plain reference to an existing column under its own name needs no copy
		if not (isinstance(expr, ColumnRef) and expr.name == name and name in data):
			# Same name as an existing column: last write wins
			data = data.with_column(name, evaluate(expr, data))
		key_names.append(name)

	present = set(data.names())
	out_vars = []
	for name in list(key_names) + list(group_vars):
		if name in present and name not in out_vars:
			out_vars.append(name)

	if keep_all:
		keep = data.names()
	else:
		keep = list(out_vars)

	assert_dedupable(data, keep)
	return data, out_vars, keep


def _default_key_name(expr):
	"""A bare column keeps its raw name; anything else is named by its text."""
	if isinstance(expr, ColumnRef):
		return expr.name
	if isinstance(expr, ColumnValues) and expr.column.name is not None:
		return expr.column.name
	return str(expr)


def assert_dedupable(table, keep):
	"""Raise UnsupportedColumnType if any column in ``keep`` holds container values."""
	offending = [name for name in keep if is_container_column(table.column(name))]
	if offending:
		raise UnsupportedColumnType(offending)


def select_distinct(table, key_vars, keep):
	"""
	One row per distinct tuple over ``key_vars`` (first row wins), projected onto ``keep``.

	An empty ``key_vars`` uses every column as the key.
	"""
	key_cols = [table.column(name) for name in (key_vars or table.names())]
	indices = _first_occurrences(key_cols)
	return table.take(indices).select(keep)


def _first_occurrences(columns):
	"""Row indices of the first occurrence of each distinct key tuple, in row order."""
	if not columns:
		return []
	data = [c._underlying for c in columns]
	nrows = len(data[0])

	seen = set()
	out = []
	for row_idx in range(nrows):
		key = key_tuple(col[row_idx] for col in data)
		try:
			if key in seen:
				continue
			seen.add(key)
		except TypeError as e:
			raise _unhashable_error(key, [c.name for c in columns], row_idx) from e
		out.append(row_idx)
	return out


def _unhashable_error(key, names, row_idx):
	for component, name in zip(key, names):
		try:
			hash(component)
		except TypeError:
			return UnsupportedColumnType(
				[name],
				f"Value in '{name}' at row {row_idx} is not hashable: "
				f"{type(component).__name__}. Distinct keys must be hashable.",
			)
	return UnsupportedColumnType(names, f"Key at row {row_idx} is not hashable.")


def _reject_containers(row, names, row_idx):
	for component, name in zip(row, names):
		if isinstance(component, CONTAINER_KINDS):
			raise UnsupportedColumnType(
				[name],
				f"Value in '{name}' at row {row_idx} is a {type(component).__name__}; "
				"container values cannot be counted.",
			)


def n_distinct(*sequences, na_rm=False):
	"""
	Count distinct value combinations across parallel sequences.

	A faster, more concise equivalent of ``len(set(zip(*sequences)))`` that
	also treats NaN values as equal to each other.

	Args:
		*sequences: equal-length sequences (lists, tuples, PyColumns, ...)
		na_rm: if True, combinations containing a missing value (None or NaN)
			are not counted at all

	Raises:
		LengthMismatch: the sequences differ in length
		UnsupportedColumnType: a value is a container (list, tuple, dict, set)
			or cannot be hashed

	Examples:
		>>> n_distinct([1, None, None, 2])
		3
		>>> n_distinct([1, None, None, 2], na_rm=True)
		2
		>>> n_distinct([1, 1, 2], ['a', 'b', 'a'])
		3
	"""
	if not sequences:
		return 0

	data = []
	for i, seq in enumerate(sequences):
		if isinstance(seq, (str, bytes)):
			raise PyDistinctTypeError(
				f"n_distinct() takes sequences of values; argument {i} is a {type(seq).__name__}"
			)
		data.append(seq._underlying if isinstance(seq, PyColumn) else tuple(seq))

	lengths = [len(d) for d in data]
	if len(set(lengths)) > 1:
		raise LengthMismatch(lengths)

	names = [
		seq.name if isinstance(seq, PyColumn) and seq.name is not None else f"argument {i}"
		for i, seq in enumerate(sequences)
	]

	seen = set()
	if len(data) == 1:
		for row_idx, value in enumerate(data[0]):
			if na_rm and has_missing((value,)):
				continue
			_reject_containers((value,), names, row_idx)
			try:
				seen.add(key_value(value))
			except TypeError as e:
				raise _unhashable_error((value,), names, row_idx) from e
		return len(seen)

	for row_idx, row in enumerate(zip(*data)):
		if na_rm and has_missing(row):
			continue
		_reject_containers(row, names, row_idx)
		key = key_tuple(row)
		try:
			seen.add(key)
		except TypeError as e:
			raise _unhashable_error(key, names, row_idx) from e
	return len(seen)
