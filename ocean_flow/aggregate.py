# aggregate.py
import time
from typing import Tuple
import numpy as np
from ocean_flow.models import Cell, DrainageStats, ReachabilitySet


def intersect(a: ReachabilitySet, b: ReachabilitySet) -> Tuple[Cell, ...]:
    """Cells reached from both oceans, ascending row then column."""
    both = np.logical_and(a.mask, b.mask)
    # argwhere walks the array in C order, which is row-major
    return tuple(Cell(int(r), int(c)) for r, c in np.argwhere(both))


def drainage_stats(
    a: ReachabilitySet,
    b: ReachabilitySet,
    cells: Tuple[Cell, ...],
    rows: int,
    cols: int,
    started_at: float,
) -> DrainageStats:
    total = rows * cols
    flow = len(cells)
    a_n, b_n = a.size, b.size
    elapsed_ms = (time.perf_counter() - started_at) * 1000.0
    return DrainageStats(
        total_cells=total,
        flow_cells=flow,
        coverage=flow / total,
        processing_time_ms=elapsed_ms,
        ocean_a_cells=a_n,
        ocean_b_cells=b_n,
        ocean_a_only=(a_n - flow) / total,
        ocean_b_only=(b_n - flow) / total,
    )


def aggregate(a: ReachabilitySet, b: ReachabilitySet, rows: int, cols: int, started_at: float):
    cells = intersect(a, b)
    return cells, drainage_stats(a, b, cells, rows, cols, started_at)
