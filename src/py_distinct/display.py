"""Display and repr logic for PyColumn and PyTable."""

from __future__ import annotations
from datetime import date
from typing import List


# How many rows/columns to show before inserting "..."
MAX_HEAD_ROWS = 5
MAX_HEAD_COLS = 5

_ELLIPSIS = object()


def _needs_quoting(name: str) -> bool:
	"""A name needs quoting if it contains anything outside [A-Za-z0-9_]
	OR has leading/trailing whitespace."""
	if not name:
		return False
	if name != name.strip():
		return True
	return not all(c.isalnum() or c == "_" for c in name)


def _kind_name(col) -> str:
	dtype = col.schema()
	return dtype.kind.__name__ if dtype is not None else "object"


def _format_column(col, max_preview: int = MAX_HEAD_ROWS) -> List[str]:
	"""Returns a list of strings representing that column, truncated for display."""
	vals = col._underlying
	if len(vals) > max_preview * 2:
		preview = list(vals[:max_preview]) + [_ELLIPSIS] + list(vals[-max_preview:])
	else:
		preview = list(vals)

	kind = col.schema().kind if col.schema() is not None else object
	out = []
	for v in preview:
		if v is _ELLIPSIS:
			out.append('...')
		elif v is None:
			out.append('None')
		elif kind is float:
			out.append(f"{v:.1f}" if isinstance(v, float) and v.is_integer() else f"{v:g}")
		elif kind is date:
			out.append(v.isoformat())
		elif kind is str:
			out.append(repr(v))
		else:
			out.append(str(v))
	return out


def _align(cells: List[str], width: int, kind: str) -> List[str]:
	# numeric right, others left
	if kind in ('int', 'float'):
		return [s.rjust(width) for s in cells]
	return [s.ljust(width) for s in cells]


def _header(name) -> str:
	if not name:
		return ""
	return repr(name) if _needs_quoting(name) else name


def _footer(obj, dtype_list=None, truncated=False, shown=MAX_HEAD_COLS) -> str:
	"""Generate footer line based on shape and dtypes."""
	shape = obj.size()
	if not shape:
		return "# empty"

	if len(shape) == 1:
		return f"# {len(obj)} element column <{_kind_name(obj)}>"

	if truncated:
		d = ", ".join(dtype_list[:shown]) + ", ..., " + ", ".join(dtype_list[-shown:])
	else:
		d = ", ".join(dtype_list)
	rows, cols = shape
	return f"# {rows}×{cols} table <{d}>"


def _repr_column(c) -> str:
	"""Pretty repr for a PyColumn."""
	formatted = _format_column(c)
	header_text = _header(c.name)
	kind = _kind_name(c)
	width = max([len(s) for s in formatted] + [len(header_text)])

	lines = []
	if header_text:
		lines.extend(_align([header_text], width, kind))
	lines.extend(_align(formatted, width, kind))
	lines.append("")
	lines.append(_footer(c))
	return "\n".join(lines)


def _repr_table(tbl) -> str:
	"""Pretty repr for a PyTable."""
	cols = tbl.cols()
	num_cols = len(cols)

	if num_cols == 0:
		return "# 0×0 table"

	truncated = num_cols > MAX_HEAD_COLS * 2
	if truncated:
		col_indices = list(range(MAX_HEAD_COLS)) + list(range(num_cols - MAX_HEAD_COLS, num_cols))
	else:
		col_indices = list(range(num_cols))

	dtypes_all = [_kind_name(col) for col in cols]

	blocks = []
	for idx in col_indices:
		col = cols[idx]
		kind = dtypes_all[idx]
		cells = [_header(col.name)] + _format_column(col)
		width = max(len(s) for s in cells)
		blocks.append(_align(cells, width, kind))

	if truncated:
		blocks.insert(MAX_HEAD_COLS, ["..."] * len(blocks[0]))

	lines = ["  ".join(block[r] for block in blocks).rstrip() for r in range(len(blocks[0]))]
	lines.append("")
	lines.append(_footer(tbl, dtypes_all, truncated, MAX_HEAD_COLS))
	return "\n".join(lines)


def _printr(obj) -> str:
	"""Entry point used by PyColumn.__repr__ and PyTable.__repr__."""
	if len(obj.size()) == 2 or hasattr(obj, 'cols'):
		return _repr_table(obj)
	return _repr_column(obj)
