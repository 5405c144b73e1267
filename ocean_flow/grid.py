# region Imports
from typing import Iterable, Iterator, List
import numpy as np
from ocean_flow.config import EDGES
from ocean_flow.errors import InvalidOptions
from ocean_flow.models import Cell, OceanBorder
# endregion

# up, down, left, right
STEPS_4 = ((-1, 0), (1, 0), (0, -1), (0, 1))

# region Index Helpers
def rc_to_idx(r: int, c: int, W: int) -> int:
    return r * W + c


def idx_to_rc(i: int, W: int) -> Cell:
    return Cell(i // W, i % W)
# endregion

# region Ocean Borders
def make_border(name: str, edges: Iterable[str]) -> OceanBorder:
    if isinstance(edges, str):
        edges = (edges,)
    picked: List[str] = []
    for e in edges:
        key = str(e).strip().lower()
        if key not in EDGES:
            raise InvalidOptions(f"Unknown edge {e!r} for {name}; expected one of {', '.join(EDGES)}",
                                 ocean=name, edge=e)
        if key not in picked:
            picked.append(key)
    if not picked:
        raise InvalidOptions(f"{name} needs at least one edge", ocean=name)
    return OceanBorder(name=name, edges=tuple(picked))


def edge_cells(edge: str, H: int, W: int) -> Iterator[Cell]:
    if edge == "top":
        return (Cell(0, c) for c in range(W))
    if edge == "bottom":
        return (Cell(H - 1, c) for c in range(W))
    if edge == "left":
        return (Cell(r, 0) for r in range(H))
    if edge == "right":
        return (Cell(r, W - 1) for r in range(H))
    raise InvalidOptions(f"Unknown edge {edge!r}", edge=edge)


def border_seeds(border: OceanBorder, H: int, W: int) -> List[Cell]:
    """Cells on any of the border's edges, each listed once (shared corners included once)."""
    seen = np.zeros(H * W, dtype=bool)
    seeds: List[Cell] = []
    for edge in border.edges:
        for cell in edge_cells(edge, H, W):
            i = rc_to_idx(cell.row, cell.col, W)
            if not seen[i]:
                seen[i] = True
                seeds.append(cell)
    return seeds
# endregion
