"""
Missing-value handling shared by distinct() and n_distinct().

``None`` is the missing value. A float ``NaN`` is also reported as missing by
``is_missing`` but, like in most dataframe libraries, stays a separate key
from ``None`` when grouping.

Two policies use these helpers:
  - grouping (distinct): every missing value is a concrete key; all ``None``s
    share one key and all ``NaN``s share another
  - counting with ``na_rm`` (n_distinct): any tuple with a missing component
    is dropped
"""

import math
from typing import Any, Iterable, Tuple


class _NaNKey:
	"""Hashable stand-in for float NaN, equal only to itself."""
	__slots__ = ()

	def __repr__(self):
		return "NaN"


_NAN_KEY = _NaNKey()


def is_missing(x: Any) -> bool:
	if x is None:
		return True
	return isinstance(x, float) and math.isnan(x)


def key_value(x: Any) -> Any:
	"""Normalize a single value into something with total equality and a stable hash."""
	if isinstance(x, float) and x != x:
		return _NAN_KEY
	return x


def key_tuple(values: Iterable[Any]) -> Tuple[Any, ...]:
	return tuple(key_value(x) for x in values)


def has_missing(values: Iterable[Any]) -> bool:
	return any(is_missing(x) for x in values)
