class PyDistinctError(Exception):
    """Base exception for py-distinct."""
    pass


class PyDistinctKeyError(PyDistinctError, KeyError):
    """Raised when a column/key is missing."""
    pass


class PyDistinctTypeError(PyDistinctError, TypeError):
    """Raised for invalid types in API calls."""
    pass


class PyDistinctValueError(PyDistinctError, ValueError):
    """Raised for invalid values or mismatched lengths."""
    pass


class PyDistinctIndexError(PyDistinctError, IndexError):
    """Raised for invalid indexing operations."""
    pass


class UnsupportedColumnType(PyDistinctTypeError):
    """Raised when a column holds values with no usable equality/hash (lists, dicts, ...)."""

    def __init__(self, columns, message=None):
        self.columns = tuple(columns)
        if message is None:
            names = ", ".join(f"'{c}'" for c in self.columns)
            message = f"distinct() does not support columns of container type: {names}"
        super().__init__(message)


class LengthMismatch(PyDistinctValueError):
    """Raised when parallel sequences differ in length."""

    def __init__(self, lengths):
        self.lengths = tuple(lengths)
        super().__init__(
            f"All inputs must have the same length, got lengths {list(self.lengths)}"
        )
