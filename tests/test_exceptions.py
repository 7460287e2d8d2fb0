import pytest
from py_distinct import PyTable, n_distinct
from py_distinct.errors import (
    PyDistinctError,
    PyDistinctKeyError,
    PyDistinctValueError,
    PyDistinctTypeError,
    UnsupportedColumnType,
    LengthMismatch,
)


def test_missing_column_raises_pydistinct_keyerror():
    t = PyTable({'a': [1, 2], 'b': [3, 4]})
    with pytest.raises(PyDistinctKeyError):
        _ = t['missing']


def test_missing_column_is_also_a_builtin_keyerror():
    t = PyTable({'a': [1, 2]})
    with pytest.raises(KeyError):
        _ = t['missing']


def test_mismatched_lengths_raise_pydistinct_valueerror():
    with pytest.raises(PyDistinctValueError):
        PyTable({'id': [1, 2], 'date': ['a']})


def test_unsupported_column_type_hierarchy():
    assert issubclass(UnsupportedColumnType, PyDistinctTypeError)
    assert issubclass(UnsupportedColumnType, TypeError)
    assert issubclass(UnsupportedColumnType, PyDistinctError)


def test_length_mismatch_hierarchy():
    assert issubclass(LengthMismatch, PyDistinctValueError)
    assert issubclass(LengthMismatch, ValueError)
    with pytest.raises(PyDistinctError):
        n_distinct([1, 2], [1])


def test_unsupported_column_type_message_names_columns():
    err = UnsupportedColumnType(['a', 'b'])
    assert err.columns == ('a', 'b')
    assert "'a', 'b'" in str(err)
