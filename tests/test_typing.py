import warnings
from datetime import date, datetime

import pytest
from py_distinct import PyColumn
from py_distinct.typing import DataType, infer_dtype, is_container_column


@pytest.mark.parametrize('values,expected', [
	([1, 2, 3], DataType(int)),
	([1, 2.5], DataType(float)),
	([True, 1], DataType(int)),
	([1, None], DataType(int, nullable=True)),
	([None, 'a'], DataType(str, nullable=True)),
	([date(2020, 1, 1), datetime(2020, 1, 2)], DataType(datetime)),
	([[1], [2, 3]], DataType(list)),
	([(1,), (2,)], DataType(tuple)),
	([], DataType(object, nullable=True)),
	([None, None], DataType(object, nullable=True)),
])
def test_infer_dtype(values, expected):
	assert infer_dtype(values) == expected


def test_incompatible_values_degrade_to_object_with_warning():
	with pytest.warns(UserWarning):
		dtype = infer_dtype([1, 'a'])
	assert dtype.kind is object


def test_container_kinds():
	for kind in (list, dict, set, frozenset, tuple):
		assert DataType(kind).is_container
	for kind in (int, float, str, bool, date, object):
		assert not DataType(kind).is_container


def test_is_container_column():
	assert is_container_column(PyColumn([[1], None]))
	assert is_container_column(PyColumn([{'a': 1}]))
	assert not is_container_column(PyColumn([1, 2]))
	assert not is_container_column(PyColumn([]))


def test_object_column_with_hidden_container():
	with warnings.catch_warnings():
		warnings.simplefilter("ignore")
		mixed = PyColumn([1, 'a', {1, 2}])
		plain = PyColumn([1, 'a'])
	assert mixed.schema().kind is object
	assert is_container_column(mixed)
	assert not is_container_column(plain)


def test_with_nullable():
	assert DataType(int).with_nullable() == DataType(int, nullable=True)
	dt = DataType(int, nullable=True)
	assert dt.with_nullable(True) is dt


def test_repr():
	assert repr(DataType(int)) == '<int>'
	assert repr(DataType(str, nullable=True)) == '<str nullable>'
