from .column import PyColumn
from .naming import _sanitize_user_name, _uniquify
from .errors import PyDistinctKeyError, PyDistinctValueError, PyDistinctTypeError


def _missing_col_error(name, context="PyTable"):
	return PyDistinctKeyError(f"Column '{name}' not found in {context}")


class _RowView:
	"""Lightweight row view for iterating over table rows with attribute access."""
	__slots__ = ('_cols', '_column_map', '_index')
	
	def __init__(self, table, index):
		# Cache direct handles to underlying data (bypasses PyColumn method dispatch)
		self._cols = [col._underlying for col in table._columns]
		self._column_map = table._column_map
		self._index = index
	
	def set_index(self, index):
		"""Reuse this row view for a different index (avoids allocation during iteration)."""
		self._index = index
		return self
	
	def __getattr__(self, attr):
		col_idx = self._column_map.get(attr.lower())
		if col_idx is None:
			raise AttributeError(f"Row has no attribute '{attr}'")
		return self._cols[col_idx][self._index]
	
	def __getitem__(self, key):
		# Fast path: integer indexing
		try:
			return self._cols[key][self._index]
		except TypeError:
			if isinstance(key, str):
				return getattr(self, key)
			raise TypeError(f"Row indices must be int or str, not {type(key).__name__}")
	
	def __iter__(self):
		idx = self._index
		for col in self._cols:
			yield col[idx]
	
	def __len__(self):
		return len(self._cols)
	
	def __repr__(self):
		idx = self._index
		values = [repr(col[idx]) for col in self._cols]
		return f"Row({idx}: {', '.join(values)})"


class PyTable():
	""" Ordered, uniquely named columns of the same length.

	Tables are values: every transforming method returns a new PyTable and
	leaves the original untouched.
	"""

	def __init__(self, initial=()):
		if isinstance(initial, PyTable):
			initial = initial._columns
		# Handle dict initialization {name: values, ...}
		if isinstance(initial, dict):
			initial = [PyColumn(values, name=col_name) for col_name, values in initial.items()]

		columns = []
		for idx, col in enumerate(initial):
			if not isinstance(col, PyColumn):
				raise PyDistinctTypeError(
					f"PyTable columns must be PyColumn instances, got {type(col).__name__} at position {idx}"
				)
			if col._name is None:
				# Unnamed column, use system name
				col = col.rename(f'col{idx}_')
			columns.append(col)

		lengths = {len(col) for col in columns}
		if len(lengths) > 1:
			raise PyDistinctValueError(
				f"All columns must have the same length, got lengths {[len(c) for c in columns]}"
			)

		names = [col._name for col in columns]
		if len(set(names)) != len(names):
			dupes = sorted({n for n in names if names.count(n) > 1})
			raise PyDistinctValueError(f"Duplicate column names: {dupes}")

		self._columns = tuple(columns)
		self._length = lengths.pop() if lengths else 0
		self._column_map = self._build_column_map()

	def __len__(self):
		return self._length

	@property
	def ncols(self):
		return len(self._columns)

	def size(self):
		return (len(self), len(self._columns))

	def names(self):
		"""Column names in table order."""
		return [col._name for col in self._columns]

	def cols(self):
		return self._columns

	def _build_column_map(self):
		"""Build mapping from sanitized column names to column indices.
		
		Computed once per table and used by _RowView and attribute access
		for O(1) lookups.
		"""
		column_map = {}
		seen = set()
		for idx, col in enumerate(self._columns):
			base = _sanitize_user_name(col._name)
			if base is None:
				# Empty after sanitization, use system name
				sanitized = f'col{idx}_'
			else:
				sanitized = _uniquify(base, seen)
				seen.add(sanitized)
			column_map[sanitized] = idx
		return column_map

	def __dir__(self):
		base_attrs = object.__dir__(self)
		return sorted(set(base_attrs + list(self._column_map.keys())))

	def __getattr__(self, attr):
		"""Access columns by sanitized attribute name using pre-computed column map."""
		if attr.startswith('_'):
			raise AttributeError(attr)
		col_idx = self._column_map.get(attr.lower())
		if col_idx is not None:
			return self._columns[col_idx]
		raise AttributeError(f"{self.__class__.__name__!s} object has no attribute '{attr}'")

	def __contains__(self, name):
		return any(col._name == name for col in self._columns)

	def _index_of(self, name):
		for idx, col in enumerate(self._columns):
			if col._name == name:
				return idx
		return None

	def column(self, name):
		"""Exact-name column lookup, falling back to the sanitized attribute name."""
		idx = self._index_of(name)
		if idx is None and isinstance(name, str):
			idx = self._column_map.get(name.lower())
		if idx is None:
			raise _missing_col_error(name)
		return self._columns[idx]

	def __getitem__(self, key):
		if isinstance(key, str):
			return self.column(key)

		# Multiple column selection by names
		if isinstance(key, (tuple, list)) and all(isinstance(k, str) for k in key):
			return self.select(key)

		if isinstance(key, int) and not isinstance(key, bool):
			if not -len(self) <= key < len(self):
				raise PyDistinctKeyError(f"Row {key} out of range for table with {len(self)} rows")
			return tuple(col._underlying[key] for col in self._columns)

		if isinstance(key, slice):
			return PyTable([col[key] for col in self._columns])

		raise PyDistinctTypeError(f'Table indices must be column names, integers or slices, not {str(type(key))}')

	def __iter__(self):
		"""Iterate over rows using a reusable _RowView for memory efficiency."""
		row_view = _RowView(self, 0)
		for i in range(len(self)):
			row_view.set_index(i)
			yield row_view

	def __repr__(self):
		from .display import _printr
		return _printr(self)

	def rows(self):
		"""Materialize rows as a list of tuples."""
		return list(zip(*(col._underlying for col in self._columns)))

	def to_dict(self):
		return {col._name: list(col._underlying) for col in self._columns}

	def equals(self, other):
		"""Same column names (in order) and same values in every row."""
		if not isinstance(other, PyTable):
			return False
		return self.names() == other.names() and self.rows() == other.rows()

	def with_column(self, name, column):
		"""
		Return a new table with ``column`` stored under ``name``.

		An existing column of that name is replaced in place (keeping its
		position); otherwise the column is appended.
		"""
		if not isinstance(column, PyColumn):
			column = PyColumn(column)
		if self._columns and len(column) != len(self):
			raise PyDistinctValueError(
				f"Column '{name}' has length {len(column)}, but table has {len(self)} rows"
			)
		column = column.rename(name)
		idx = self._index_of(name)
		if idx is None:
			return PyTable(self._columns + (column,))
		columns = list(self._columns)
		columns[idx] = column
		return PyTable(columns)

	def select(self, names):
		"""New table restricted to ``names``, in the order given."""
		if isinstance(names, str):
			names = [names]
		return PyTable([self.column(n) for n in names])

	def take(self, indices):
		"""New table holding the rows at ``indices``, in that order."""
		indices = list(indices)
		return PyTable([col.take(indices) for col in self._columns])

	def group_by(self, *names):
		"""Group this table by one or more columns."""
		from .grouping import GroupedTable
		if len(names) == 1 and isinstance(names[0], (list, tuple)):
			names = tuple(names[0])
		return GroupedTable(self, names)

	def distinct(self, *keys, keep_all=False, **named_keys):
		"""
		Keep the first row for each distinct combination of ``keys``.

		Args:
			*keys: column names or expressions; if omitted, all columns are used
			keep_all: keep every column, not only the keys
			**named_keys: new column name -> column name or expression

		Returns:
			PyTable with one row per distinct key combination, in order of
			first appearance

		Examples:
			table.distinct()
			table.distinct('x', 'y')
			table.distinct('x', keep_all=True)
			table.distinct(diff=abs(col('x') - col('y')))
		"""
		from .distinct import distinct
		return distinct(self, *keys, keep_all=keep_all, **named_keys)
