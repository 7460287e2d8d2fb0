"""
Grouped tables.

Grouping is carried explicitly: a GroupedTable pairs a PyTable with the
ordered names of its group columns. Nothing is stored on the table itself,
so ungrouping is just taking ``.table`` back.
"""

from .errors import PyDistinctKeyError, PyDistinctTypeError, UnsupportedColumnType
from .missing import key_tuple
from .table import PyTable


class GroupedTable:
	""" A PyTable partitioned by one or more of its columns """

	def __init__(self, table, group_vars):
		if isinstance(table, GroupedTable):
			table = table.table
		if not isinstance(table, PyTable):
			raise PyDistinctTypeError(f"Can only group a PyTable, not {type(table).__name__}")
		if isinstance(group_vars, str):
			group_vars = (group_vars,)

		ordered = []
		for name in group_vars:
			if name not in table:
				raise PyDistinctKeyError(f"Grouping column '{name}' not found in PyTable")
			if name not in ordered:
				ordered.append(name)

		self._table = table
		self._group_vars = tuple(ordered)
		self._groups = None

	@property
	def table(self):
		return self._table

	@property
	def group_vars(self):
		return list(self._group_vars)

	def names(self):
		return self._table.names()

	def __len__(self):
		return len(self._table)

	def __getitem__(self, key):
		return self._table[key]

	def __contains__(self, name):
		return name in self._table

	def groups(self):
		"""
		Group-level metadata: key tuple -> row indices, in first-seen order.

		Missing values form their own group, like any other key.
		"""
		if self._groups is None:
			data = [self._table.column(n)._underlying for n in self._group_vars]
			index = {}
			for row_idx in range(len(self._table)):
				key = key_tuple(col[row_idx] for col in data)
				try:
					bucket = index.get(key)
				except TypeError as e:
					raise UnsupportedColumnType(
						self._group_vars,
						f"Cannot group by container values in {list(self._group_vars)} at row {row_idx}",
					) from e
				if bucket is None:
					index[key] = [row_idx]
				else:
					bucket.append(row_idx)
			self._groups = index
		return self._groups

	@property
	def n_groups(self):
		return len(self.groups())

	def ungroup(self):
		return self._table

	def equals(self, other):
		if not isinstance(other, GroupedTable):
			return False
		return self._group_vars == other._group_vars and self._table.equals(other._table)

	def distinct(self, *keys, keep_all=False, **named_keys):
		"""Same as PyTable.distinct, with the group columns always part of the key."""
		from .distinct import distinct
		return distinct(self, *keys, keep_all=keep_all, **named_keys)

	def __repr__(self):
		return f"# Groups: {', '.join(self._group_vars)} [{self.n_groups}]\n{self._table!r}"


def group_columns(data):
	"""Ordered group column names of ``data`` (empty for an ungrouped table)."""
	if isinstance(data, GroupedTable):
		return data.group_vars
	return []


def with_grouping(table, cols):
	"""Attach grouping to ``table``; with no columns the plain table comes back."""
	if not cols:
		return table
	return GroupedTable(table, cols)
