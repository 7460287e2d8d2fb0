"""
DataType system for PyColumn / PyTable.

Pure metadata design:
  - DataType describes column semantics (type + nullable flag)
  - Promotion is functional (immutable DataType instances)
  - Container kinds (list, dict, set, tuple) are tracked so that
    deduplication can refuse them up front
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Iterable, Optional, Type
import warnings

CONTAINER_KINDS = (list, dict, set, frozenset, tuple)

@dataclass(frozen=True)
class DataType:
    """
    Describes the semantic type of a PyColumn.

    Attributes
    ----------
    kind : Type
        Python type (int, float, str, date, list, etc.)
    nullable : bool
        Whether the column may contain None values

    Examples
    --------
    >>> DataType(int)
    <int>
    >>> DataType(int, nullable=True)
    <int nullable>
    >>> DataType(float).promote_with(None)
    <float nullable>
    >>> DataType(list).is_container
    True
    """

    kind: Type[Any]
    nullable: bool = False

    def __repr__(self):
        if self.nullable:
            return f"<{self.kind.__name__} nullable>"
        return f"<{self.kind.__name__}>"

    @property
    def is_numeric(self) -> bool:
        """True if kind is bool, int, float, or complex."""
        try:
            return issubclass(self.kind, (int, float, complex, bool))
        except TypeError:
            return False

    @property
    def is_temporal(self) -> bool:
        """True if kind is date or datetime."""
        try:
            return issubclass(self.kind, (date, datetime))
        except TypeError:
            return False

    @property
    def is_container(self) -> bool:
        """True if kind is a nested collection (list, dict, set, frozenset, tuple)."""
        try:
            return issubclass(self.kind, CONTAINER_KINDS)
        except TypeError:
            return False

    def with_nullable(self, nullable: bool = True) -> "DataType":
        if nullable == self.nullable:
            return self
        return DataType(self.kind, nullable)

    def promote_with(self, value: Any) -> "DataType":
        """
        Promote this DataType to accommodate a new Python value.

        Never mutates; always returns new DataType.
        """
        # None just lifts nullability
        if value is None:
            return self.with_nullable(True)

        vtype = type(value)

        if vtype is self.kind:
            return self

        # Numeric ladder (bool → int → float → complex)
        if self.is_numeric and isinstance(value, (int, float, complex, bool)):
            if self.kind is complex or vtype is complex:
                new_kind = complex
            elif self.kind is float or vtype is float:
                new_kind = float
            elif self.kind is int or vtype is int:
                new_kind = int
            else:
                new_kind = bool

            if new_kind != self.kind:
                return DataType(new_kind, self.nullable)
            return self

        # Temporal ladder (date → datetime)
        if self.is_temporal and isinstance(value, (date, datetime)):
            if self.kind is datetime or vtype is datetime:
                new_kind = datetime
            else:
                new_kind = date

            if new_kind != self.kind:
                return DataType(new_kind, self.nullable)
            return self

        # Degrade to object
        if self.kind is not object:
            warnings.warn(
                f"Degrading column<{self.kind.__name__}> to column<object> "
                f"due to incompatible value of type {vtype.__name__}",
                stacklevel=3,
            )
            return DataType(object, self.nullable)

        return self

def infer_kind(value: Any) -> Optional[Type]:
    """
    Infer Python type for a single scalar.

    Returns None for None values.
    """
    if value is None:
        return None

    # Check bool BEFORE int (bool is subclass of int)
    if isinstance(value, bool):
        return bool
    if isinstance(value, int):
        return int
    if isinstance(value, float):
        return float
    if isinstance(value, complex):
        return complex
    if isinstance(value, str):
        return str
    if isinstance(value, bytes):
        return bytes

    # Check datetime BEFORE date (datetime is subclass of date)
    if isinstance(value, datetime):
        return datetime
    if isinstance(value, date):
        return date

    for kind in CONTAINER_KINDS:
        if isinstance(value, kind):
            return kind

    return object

def infer_dtype(values: Iterable[Any]) -> DataType:
    """
    Infer a DataType from an iterable of Python scalars.

    Examples
    --------
    >>> infer_dtype([1, 2, 3])
    <int>
    >>> infer_dtype([1, 2.5, 3])
    <float>
    >>> infer_dtype([1, None, 3])
    <int nullable>
    >>> infer_dtype([[1], [2, 3]])
    <list>
    """
    dtype: Optional[DataType] = None
    saw_none = False

    for v in values:
        if v is None:
            saw_none = True
            if dtype is not None:
                dtype = dtype.with_nullable(True)
            continue
        if dtype is None:
            # Leading Nones: the first real value decides the kind
            dtype = DataType(infer_kind(v), nullable=saw_none)
        else:
            dtype = dtype.promote_with(v)

    if dtype is None:
        return DataType(object, nullable=True)

    return dtype


def is_container_column(column) -> bool:
    """
    True if a column holds nested collection values.

    A column is container-typed when its dtype kind is a container, or when it
    degraded to ``object`` and any of its values is a container.
    """
    dtype = column.schema()
    if dtype is None:
        return False
    if dtype.is_container:
        return True
    if dtype.kind is object:
        return any(isinstance(v, CONTAINER_KINDS) for v in column)
    return False
