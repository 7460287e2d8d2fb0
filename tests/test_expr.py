"""Key expressions: rendering, evaluation and missing-value propagation."""

import pytest
from py_distinct import PyTable, PyColumn, col, lit, func, evaluate
from py_distinct.expr import Expr, as_expr
from py_distinct.errors import PyDistinctKeyError, PyDistinctTypeError, PyDistinctValueError


class TestRendering:

	@pytest.mark.parametrize('expr,text', [
		(col('x'), 'x'),
		(col('my col'), '`my col`'),
		(col('class'), '`class`'),
		(col('x') + 1, 'x + 1'),
		(1 - col('x'), '1 - x'),
		(abs(col('x') - col('y')), 'abs(x - y)'),
		((col('x') + col('y')) * col('z'), '(x + y) * z'),
		(col('x') + col('y') * col('z'), 'x + y * z'),
		(col('x') - (col('y') - col('z')), 'x - (y - z)'),
		((col('x') - col('y')) - col('z'), 'x - y - z'),
		(col('x') ** col('y') ** 2, 'x ** y ** 2'),
		((col('x') ** col('y')) ** 2, '(x ** y) ** 2'),
		((col('x') > 1) & (col('y') < 2), '(x > 1) & (y < 2)'),
		(-col('x'), '-x'),
		(-(col('x') + 1), '-(x + 1)'),
		(~col('flag'), '~flag'),
		(col('s') == lit('a'), "s == 'a'"),
		(func(round, col('p'), 2), 'round(p, 2)'),
		(func(max, 'a', 'b', name='greatest'), 'greatest(a, b)'),
		(col('x').isna(), 'isna(x)'),
	])
	def test_canonical_text(self, expr, text):
		assert str(expr) == text

	def test_pycolumn_renders_by_name(self):
		assert str(as_expr(PyColumn([1], name='v'))) == 'v'
		assert str(as_expr(PyColumn([1]))) == 'col'


class TestEvaluation:

	def test_arithmetic(self):
		t = PyTable({'x': [1, 2, 3], 'y': [10, 20, 30]})
		result = evaluate(col('y') - col('x') * 2, t)
		assert result.to_list() == [8, 16, 24]
		assert result.name == 'y - x * 2'

	def test_string_key_is_column_reference(self):
		t = PyTable({'x': [1, 2]})
		assert evaluate('x', t).to_list() == [1, 2]

	def test_literal_broadcast(self):
		t = PyTable({'x': [1, 2, 3]})
		assert evaluate(lit(7), t).to_list() == [7, 7, 7]

	def test_missing_propagates(self):
		t = PyTable({'x': [1, None, 3]})
		assert evaluate(col('x') + 1, t).to_list() == [2, None, 4]
		assert evaluate(col('x') > 1, t).to_list() == [False, None, True]
		assert evaluate(-col('x'), t).to_list() == [-1, None, -3]
		assert evaluate(abs(col('x')), t).to_list() == [1, None, 3]

	def test_isna_does_not_propagate(self):
		t = PyTable({'x': [1.0, None, float('nan')]})
		assert evaluate(col('x').isna(), t).to_list() == [False, True, True]

	def test_boolean_combination(self):
		t = PyTable({'x': [1, 2, 3]})
		assert evaluate((col('x') > 1) & (col('x') < 3), t).to_list() == [False, True, False]

	def test_func_with_no_args(self):
		t = PyTable({'x': [1, 2]})
		assert evaluate(func(lambda: 0), t).to_list() == [0, 0]

	def test_unknown_column(self):
		t = PyTable({'x': [1]})
		with pytest.raises(PyDistinctKeyError):
			evaluate(col('y') + 1, t)

	def test_function_errors_propagate_unchanged(self):
		t = PyTable({'x': [1, 0]})
		with pytest.raises(ZeroDivisionError):
			evaluate(1 / col('x'), t)

	def test_wrong_length_column(self):
		t = PyTable({'x': [1, 2, 3]})
		with pytest.raises(PyDistinctValueError):
			evaluate(PyColumn([1, 2], name='short'), t)

	def test_evaluation_is_deterministic(self):
		t = PyTable({'x': [3, 1, 2]})
		e = col('x') * col('x')
		assert evaluate(e, t).to_list() == evaluate(e, t).to_list()


class TestMisuse:

	def test_truth_value_is_ambiguous(self):
		with pytest.raises(PyDistinctTypeError):
			bool(col('x') == 1)

	def test_expressions_are_unhashable(self):
		with pytest.raises(TypeError):
			hash(col('x'))

	def test_col_needs_a_string(self):
		with pytest.raises(PyDistinctTypeError):
			col(1)

	def test_func_needs_a_callable(self):
		with pytest.raises(PyDistinctTypeError):
			func(3, 'x')

	def test_as_expr_passes_expressions_through(self):
		e = col('x') + 1
		assert as_expr(e) is e
		assert isinstance(as_expr('x'), Expr)
