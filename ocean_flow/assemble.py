# region Imports
from __future__ import annotations
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

from ocean_flow.config import ALGORITHM_NAME
from ocean_flow.models import Cell, DrainageResult, DrainageStats, ElevationGrid, OceanBorder
# endregion

# region Result Assembly
def assemble_result(
    cells: Tuple[Cell, ...],
    stats: DrainageStats,
    grid: ElevationGrid,
    ocean_a: OceanBorder,
    ocean_b: OceanBorder,
    paths: Optional[Mapping[Cell, Mapping[str, Tuple[Cell, ...]]]] = None,
) -> DrainageResult:
    # read-only all the way down
    metadata = MappingProxyType({
        "grid_dimensions": MappingProxyType({"rows": grid.rows, "cols": grid.cols}),
        "algorithm": ALGORITHM_NAME,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "oceans": MappingProxyType({"a": tuple(ocean_a.edges), "b": tuple(ocean_b.edges)}),
    })
    if paths is not None:
        paths = MappingProxyType({cell: MappingProxyType(dict(routes)) for cell, routes in paths.items()})
    return DrainageResult(cells=cells, stats=stats, metadata=metadata, heights=grid.heights, paths=paths)
# endregion

# region Wire Format
def _cell_json(cell: Cell, heights) -> Dict[str, Any]:
    # x is the column, y is the row; nothing below this boundary uses x/y
    r, c = cell
    return {"row": r, "col": c, "x": c, "y": r, "elevation": float(heights[r, c])}


def _path_json(path) -> list:
    return [{"row": r, "col": c} for r, c in path]


def stats_to_json(stats: DrainageStats) -> Dict[str, Any]:
    return {
        "totalCells": stats.total_cells,
        "flowCells": stats.flow_cells,
        "coverage": stats.coverage,
        "processingTimeMs": stats.processing_time_ms,
        "oceanReachability": {
            "oceanA": stats.ocean_a_cells,
            "oceanB": stats.ocean_b_cells,
            "intersection": stats.flow_cells,
            "oceanAOnly": stats.ocean_a_only,
            "oceanBOnly": stats.ocean_b_only,
        },
    }


def result_to_json(result: DrainageResult) -> Dict[str, Any]:
    """Serialize a DrainageResult into the JSON body the HTTP API returns."""
    md = result.metadata
    out = {
        "cells": [_cell_json(cell, result.heights) for cell in result.cells],
        "stats": stats_to_json(result.stats),
        "metadata": {
            "gridDimensions": dict(md["grid_dimensions"]),
            "algorithm": md["algorithm"],
            "timestamp": md["timestamp"],
            "oceans": {k: list(v) for k, v in md["oceans"].items()},
        },
    }
    if result.paths is not None:
        out["paths"] = [
            {
                "row": cell.row,
                "col": cell.col,
                "toOceanA": _path_json(routes["a"]),
                "toOceanB": _path_json(routes["b"]),
            }
            for cell, routes in result.paths.items()
        ]
    return out
# endregion
