import pytest
from py_distinct import PyTable, GroupedTable, group_columns, with_grouping
from py_distinct.errors import PyDistinctKeyError, PyDistinctTypeError, UnsupportedColumnType


def test_group_by_records_group_vars():
	g = PyTable({'a': [1, 2], 'b': [3, 4]}).group_by('b', 'a')
	assert isinstance(g, GroupedTable)
	assert g.group_vars == ['b', 'a']


def test_group_by_accepts_a_list():
	g = PyTable({'a': [1], 'b': [2]}).group_by(['a', 'b'])
	assert g.group_vars == ['a', 'b']


def test_duplicate_group_vars_collapse():
	g = PyTable({'a': [1]}).group_by('a', 'a')
	assert g.group_vars == ['a']


def test_unknown_group_column():
	with pytest.raises(PyDistinctKeyError):
		PyTable({'a': [1]}).group_by('b')


def test_only_tables_can_be_grouped():
	with pytest.raises(PyDistinctTypeError):
		GroupedTable({'a': [1]}, ['a'])


def test_groups_in_first_seen_order():
	g = PyTable({'k': ['b', 'a', 'b', None, None]}).group_by('k')
	assert g.groups() == {('b',): [0, 2], ('a',): [1], (None,): [3, 4]}
	assert g.n_groups == 3


def test_group_by_container_column():
	g = PyTable({'k': [[1], [1]]}).group_by('k')
	with pytest.raises(UnsupportedColumnType):
		g.groups()


def test_ungroup_returns_table():
	t = PyTable({'a': [1]})
	assert t.group_by('a').ungroup() is t


def test_group_columns():
	t = PyTable({'a': [1], 'b': [2]})
	assert group_columns(t) == []
	assert group_columns(t.group_by('b')) == ['b']


def test_with_grouping():
	t = PyTable({'a': [1], 'b': [2]})
	assert with_grouping(t, []) is t
	g = with_grouping(t, ['a'])
	assert isinstance(g, GroupedTable)
	assert g.table is t
	assert g.group_vars == ['a']


def test_equals():
	t = PyTable({'a': [1, 1], 'b': [2, 3]})
	assert t.group_by('a').equals(t.group_by('a'))
	assert not t.group_by('a').equals(t.group_by('b'))
	assert not t.group_by('a').equals(t)


def test_repr_mentions_groups():
	g = PyTable({'a': [1, 1, 2]}).group_by('a')
	assert repr(g).startswith('# Groups: a [2]')
