"""
py-distinct: distinct rows and distinct counts for a small pure-Python table library

Main classes:
    - PyColumn: immutable named column with an inferred dtype
    - PyTable: ordered named columns of equal length
    - GroupedTable: a PyTable plus its group columns

Main functions:
    - distinct(): first row for each distinct combination of keys
    - n_distinct(): number of distinct value combinations
    - col(), lit(), func(): build key expressions

Zero external dependencies - pure Python stdlib only.
"""

from .column import PyColumn
from .table import PyTable
from .grouping import GroupedTable, group_columns, with_grouping
from .expr import Expr, col, lit, func, evaluate
from .distinct import distinct, n_distinct, distinct_vars, select_distinct, assert_dedupable
from .errors import (
	PyDistinctError,
	PyDistinctKeyError,
	PyDistinctValueError,
	PyDistinctTypeError,
	PyDistinctIndexError,
	UnsupportedColumnType,
	LengthMismatch,
)

__version__ = "0.1.0"
__all__ = [
	"PyColumn",
	"PyTable",
	"GroupedTable",
	"group_columns",
	"with_grouping",
	"Expr",
	"col",
	"lit",
	"func",
	"evaluate",
	"distinct",
	"n_distinct",
	"distinct_vars",
	"select_distinct",
	"assert_dedupable",
	"PyDistinctError",
	"PyDistinctKeyError",
	"PyDistinctValueError",
	"PyDistinctTypeError",
	"PyDistinctIndexError",
	"UnsupportedColumnType",
	"LengthMismatch",
]
