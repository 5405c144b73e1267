"""Pacific/Atlantic style drainage analysis over spreadsheet elevation grids."""
from ocean_flow.engine import AnalysisOptions, analyze, analyze_many, options_from_json
from ocean_flow.assemble import result_to_json
from ocean_flow.errors import (
    OceanFlowError, EngineError, EmptyGrid, MalformedGrid, InvalidCellValue,
    GridTooLarge, InvalidOptions,
)
from ocean_flow.models import Cell, DrainageResult, DrainageStats, ElevationGrid

__all__ = [
    "AnalysisOptions", "analyze", "analyze_many", "options_from_json", "result_to_json",
    "OceanFlowError", "EngineError", "EmptyGrid", "MalformedGrid", "InvalidCellValue",
    "GridTooLarge", "InvalidOptions",
    "Cell", "DrainageResult", "DrainageStats", "ElevationGrid",
]
