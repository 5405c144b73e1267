# models.py
from dataclasses import dataclass, field
from typing import Mapping, NamedTuple, Optional, Tuple
import numpy as np


class Cell(NamedTuple):
    row: int
    col: int


@dataclass(frozen=True, eq=False)
class ElevationGrid:
    heights: np.ndarray   # (rows, cols) float64, read-only, finite, >= 0

    @property
    def rows(self) -> int:
        return int(self.heights.shape[0])

    @property
    def cols(self) -> int:
        return int(self.heights.shape[1])

    @property
    def total_cells(self) -> int:
        return self.rows * self.cols

    def height(self, cell: Cell) -> float:
        return float(self.heights[cell[0], cell[1]])


@dataclass(frozen=True)
class OceanBorder:
    name: str
    edges: Tuple[str, ...]


@dataclass(frozen=True, eq=False)
class ReachabilitySet:
    mask: np.ndarray      # (rows, cols) bool
    parent: np.ndarray    # (rows*cols,) int64 flat index we came from, -1 for seeds/unreached

    @property
    def size(self) -> int:
        return int(self.mask.sum())

    def __contains__(self, cell) -> bool:
        r, c = cell
        return bool(self.mask[r, c])


@dataclass(frozen=True)
class DrainageStats:
    total_cells: int
    flow_cells: int
    coverage: float
    processing_time_ms: float
    ocean_a_cells: int
    ocean_b_cells: int
    ocean_a_only: float
    ocean_b_only: float


@dataclass(frozen=True, eq=False)
class DrainageResult:
    cells: Tuple[Cell, ...]
    stats: DrainageStats
    metadata: Mapping[str, object]    # read-only views
    heights: np.ndarray = field(repr=False)
    paths: Optional[Mapping[Cell, Mapping[str, Tuple[Cell, ...]]]] = None

    @property
    def grid_dimensions(self) -> Mapping[str, int]:
        return self.metadata["grid_dimensions"]
