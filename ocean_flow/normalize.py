# region Imports
from __future__ import annotations
import logging
import math
from numbers import Real
from typing import Any, List, Sequence
import numpy as np

from ocean_flow.config import MAX_GRID_DIM, LARGE_GRID_CELLS
from ocean_flow.errors import EmptyGrid, MalformedGrid, InvalidCellValue, GridTooLarge
from ocean_flow.models import ElevationGrid
# endregion

logger = logging.getLogger(__name__)


# region Cell Coercion
def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value.strip() == "")


def coerce_elevation(value: Any, row: int, col: int) -> float:
    """Spreadsheet cell -> finite non-negative float, or InvalidCellValue."""
    if isinstance(value, bool) or _is_blank(value):
        raise InvalidCellValue(row, col, value)
    if isinstance(value, Real):
        try:
            v = float(value)
        except (OverflowError, ValueError, TypeError):
            raise InvalidCellValue(row, col, value) from None
    elif isinstance(value, str):
        try:
            v = float(value.strip())
        except ValueError:
            raise InvalidCellValue(row, col, value) from None
    else:
        raise InvalidCellValue(row, col, value)
    if not math.isfinite(v) or v < 0:
        raise InvalidCellValue(row, col, value)
    return v
# endregion

# region Row Shaping
def _populated(cells: Sequence[Any]) -> int:
    """Width of a row once the trailing blanks an export pads it with are dropped."""
    n = len(cells)
    while n and _is_blank(cells[n - 1]):
        n -= 1
    return n


def _as_rows(raw: Any) -> List[Any]:
    if raw is None or isinstance(raw, (str, bytes, dict)):
        raise EmptyGrid("Grid must be a non-empty 2D array")
    if isinstance(raw, np.ndarray):
        return raw.tolist() if raw.ndim == 2 else []
    try:
        return list(raw)
    except TypeError:
        raise EmptyGrid("Grid must be a non-empty 2D array") from None
# endregion

# region Normalizer
def normalize_grid(raw: Any) -> ElevationGrid:
    """
    Convert a raw 2D value matrix (as read from a spreadsheet tab) into an
    ElevationGrid.

    Fully blank rows before the first / after the last populated row are
    ignored, and so are trailing columns that are blank in every row.
    The width is that of the first row, up to the widest populated row.
    Everything else must be a rectangular block of finite non-negative
    numbers: rows too short or too long raise MalformedGrid, bad or blank
    cells inside the width raise InvalidCellValue. Row and column indices
    in errors refer to the raw input.
    """
    raw_rows = _as_rows(raw)

    shaped = []
    for i, row in enumerate(raw_rows):
        if row is None:
            shaped.append((i, [], 0))
            continue
        if isinstance(row, (str, bytes, dict)) or not hasattr(row, "__iter__"):
            raise MalformedGrid(i, None, None)
        cells = list(row)
        shaped.append((i, cells, _populated(cells)))

    # trim blank rows at both ends
    while shaped and not shaped[0][2]:
        shaped.pop(0)
    while shaped and not shaped[-1][2]:
        shaped.pop()
    if not shaped:
        raise EmptyGrid()

    rows = len(shaped)
    cols = min(len(shaped[0][1]), max(n for _, _, n in shaped))
    if rows > MAX_GRID_DIM or cols > MAX_GRID_DIM:
        raise GridTooLarge(rows, cols, MAX_GRID_DIM)
    if rows * cols > LARGE_GRID_CELLS:
        logger.warning("Large grid detected: %dx%d = %d cells", rows, cols, rows * cols)

    heights = np.empty((rows, cols), dtype=np.float64)
    for r, (i, cells, n) in enumerate(shaped):
        if n > cols or len(cells) < cols:
            raise MalformedGrid(i, cols, n)
        for j in range(cols):
            heights[r, j] = coerce_elevation(cells[j], i, j)

    heights.setflags(write=False)
    logger.debug("Normalized %dx%d elevation grid", rows, cols)
    return ElevationGrid(heights=heights)
# endregion
