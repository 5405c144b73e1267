# region Imports
from __future__ import annotations
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple
import logging
import time

from ocean_flow.config import OCEAN_A_EDGES, OCEAN_B_EDGES
from ocean_flow.errors import EngineError, InvalidOptions
from ocean_flow.models import DrainageResult
from ocean_flow.normalize import normalize_grid
from ocean_flow.grid import make_border
from ocean_flow.flood import reach_ocean, reconstruct
from ocean_flow.aggregate import aggregate
from ocean_flow.assemble import assemble_result
# endregion

logger = logging.getLogger(__name__)

# region Options
@dataclass(frozen=True)
class AnalysisOptions:
    ocean_a_edges: Tuple[str, ...] = OCEAN_A_EDGES
    ocean_b_edges: Tuple[str, ...] = OCEAN_B_EDGES
    include_paths: bool = False
    parallel: bool = False


def _flag(data: Mapping[str, Any], key: str, default: bool) -> bool:
    v = data.get(key, default)
    if v in (None, "", "null"):
        return default
    if isinstance(v, bool):
        return v
    if isinstance(v, str) and v.lower() in ("true", "1", "yes"):
        return True
    if isinstance(v, str) and v.lower() in ("false", "0", "no"):
        return False
    raise InvalidOptions(f"Option {key} must be a boolean", option=key, value=v)


def _edges(data: Mapping[str, Any], keys, default) -> Tuple[str, ...]:
    for k in keys:
        v = data.get(k)
        if v not in (None, "", []):
            if isinstance(v, str):
                return (v,)
            if not isinstance(v, (list, tuple)):
                raise InvalidOptions(f"Option {k} must be a list of edge names", option=k, value=v)
            return tuple(v)
    return default


def options_from_json(data: Optional[Mapping[str, Any]]) -> AnalysisOptions:
    """Build AnalysisOptions from an API `options` object (camelCase keys)."""
    if data is None:
        return AnalysisOptions()
    if not isinstance(data, Mapping):
        raise InvalidOptions("options must be an object")
    return AnalysisOptions(
        ocean_a_edges=_edges(data, ("oceanAEdges", "pacificEdges"), OCEAN_A_EDGES),
        ocean_b_edges=_edges(data, ("oceanBEdges", "atlanticEdges"), OCEAN_B_EDGES),
        include_paths=_flag(data, "includePaths", False),
        parallel=_flag(data, "parallel", False),
    )
# endregion

# region Analysis
def analyze(raw_grid: Any, options: Optional[AnalysisOptions] = None) -> DrainageResult:
    """
    Find every cell whose water can reach both Ocean A and Ocean B.

    Raises an EngineError subclass when the grid or options are invalid;
    nothing past normalization can fail.
    """
    opts = options or AnalysisOptions()
    ocean_a = make_border("Ocean A", opts.ocean_a_edges)
    ocean_b = make_border("Ocean B", opts.ocean_b_edges)
    grid = normalize_grid(raw_grid)

    t0 = time.perf_counter()
    if opts.parallel:
        with ThreadPoolExecutor(max_workers=2) as pool:
            fa = pool.submit(reach_ocean, grid, ocean_a)
            fb = pool.submit(reach_ocean, grid, ocean_b)
            reach_a, reach_b = fa.result(), fb.result()
    else:
        reach_a = reach_ocean(grid, ocean_a)
        reach_b = reach_ocean(grid, ocean_b)
    cells, stats = aggregate(reach_a, reach_b, grid.rows, grid.cols, t0)

    paths = None
    if opts.include_paths:
        paths = {
            cell: {"a": reconstruct(reach_a, cell, grid.cols), "b": reconstruct(reach_b, cell, grid.cols)}
            for cell in cells
        }

    logger.debug(
        "Analyzed %dx%d grid: %d flow cells (coverage %.4f) in %.2f ms",
        grid.rows, grid.cols, stats.flow_cells, stats.coverage, stats.processing_time_ms,
    )
    return assemble_result(cells, stats, grid, ocean_a, ocean_b, paths)


def analyze_many(raw_grids, options: Optional[AnalysisOptions] = None) -> Tuple[Dict[str, Any], ...]:
    """
    Analyze each grid independently. One bad grid does not stop the rest:
    each entry is {"index", "success", "result"} or {"index", "success", "error"}.
    """
    out = []
    for i, raw in enumerate(raw_grids):
        try:
            out.append({"index": i, "success": True, "result": analyze(raw, options)})
        except EngineError as e:
            logger.info("Batch item %d rejected: %s", i, e.message)
            out.append({"index": i, "success": False, "error": e})
    return tuple(out)
# endregion
