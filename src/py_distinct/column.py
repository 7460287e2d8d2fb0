from .errors import PyDistinctIndexError
from .errors import PyDistinctTypeError
from .errors import PyDistinctValueError
from .errors import UnsupportedColumnType
from .missing import is_missing
from .typing import DataType
from .typing import infer_dtype
from .typing import is_container_column

from typing import Any
from typing import Iterable
from typing import List


class PyColumn():
	""" Immutable, named column of values with an inferred dtype """
	_dtype = None  # DataType instance (private)
	_underlying = ()
	_name = None

	def __init__(self, initial=(), dtype=None, name=None):
		if isinstance(initial, PyColumn):
			if name is None:
				name = initial._name
			if dtype is None:
				dtype = initial._dtype
			initial = initial._underlying
		self._underlying = tuple(initial)
		self._name = name

		# Convert Python types to DataType if needed
		if dtype is not None and not isinstance(dtype, DataType):
			dtype = DataType(dtype)
		if dtype is None:
			dtype = infer_dtype(self._underlying)
		self._dtype = dtype

	def schema(self):
		"""Get the DataType schema of this column."""
		return self._dtype

	@property
	def name(self):
		return self._name

	def copy(self, new_values=None, name=...):
		# Use sentinel value (...) to distinguish between name=None (clear) and not passing name (preserve)
		use_name = self._name if name is ... else name
		if new_values is None:
			return PyColumn(self._underlying, dtype=self._dtype, name=use_name)
		# Values may be a subset (no Nones left) or new data, so re-infer
		return PyColumn(new_values, name=use_name)

	def rename(self, new_name):
		"""Return a copy of this column under a new name."""
		return self.copy(name=new_name)

	def to_list(self) -> List[Any]:
		return list(self._underlying)

	def __repr__(self):
		from .display import _printr
		return _printr(self)

	def __iter__(self):
		return iter(self._underlying)

	def __len__(self):
		return len(self._underlying)

	def size(self):
		if not self._underlying:
			return tuple()
		return (len(self),)

	def __getitem__(self, key):
		""" Get item(s) from self. Behavior varies by input type:
			# Int: a single value
			# Slice: a column with the elements of the slice
			# List of bool: logical indexing (masking)
		"""
		if isinstance(key, int) and not isinstance(key, bool):
			try:
				return self._underlying[key]
			except IndexError:
				raise PyDistinctIndexError(f"Index {key} out of range for column of length {len(self)}")

		if isinstance(key, slice):
			return PyColumn(self._underlying[key], dtype=self._dtype, name=self._name)

		if isinstance(key, (list, tuple)) and key and {type(e) for e in key} == {bool}:
			if len(key) != len(self):
				raise PyDistinctValueError(f"Boolean mask of length {len(key)} does not match column of length {len(self)}")
			return self.copy((x for x, keep in zip(self._underlying, key) if keep))

		raise PyDistinctTypeError(f'Column indices must be boolean lists, slices or integers, not {str(type(key))}')

	def take(self, indices: Iterable[int]):
		"""Gather the rows at ``indices`` (in that order) into a new column of the same dtype."""
		data = self._underlying
		try:
			values = tuple(data[i] for i in indices)
		except IndexError:
			raise PyDistinctIndexError(f"Row index out of range for column of length {len(self)}")
		return PyColumn(values, dtype=self._dtype, name=self._name)

	def isna(self):
		"""
		Return boolean mask of missing values (None or NaN).

		>>> PyColumn([1, None, 3]).isna().to_list()
		[False, True, False]
		"""
		return PyColumn(tuple(is_missing(x) for x in self._underlying), dtype=DataType(bool))

	def dropna(self):
		return self.copy(x for x in self._underlying if not is_missing(x))

	def unique(self):
		"""Distinct values in first-seen order (missing values kept once)."""
		from .distinct import _first_occurrences
		if is_container_column(self):
			raise UnsupportedColumnType([self._name or "value"])
		return self.take(_first_occurrences([self]))

	def n_distinct(self, na_rm=False):
		"""Count distinct values; with ``na_rm`` missing values are not counted."""
		from .distinct import n_distinct
		return n_distinct(self, na_rm=na_rm)
