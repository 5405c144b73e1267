# region Imports
from __future__ import annotations
import math
from datetime import datetime, timezone
from typing import Any, Dict, Optional
# endregion

# region Base
class OceanFlowError(Exception):
    """Base for every error the service reports to a caller."""
    code = "WATER_FLOW_ERROR"
    status_code = 500

    def __init__(self, message: str, **details: Any):
        super().__init__(message)
        self.message = message
        self.details: Dict[str, Any] = details


def error_to_json(err: OceanFlowError, *, kind: Optional[str] = None) -> Dict[str, Any]:
    details = dict(err.details)
    details["timestamp"] = datetime.now(timezone.utc).isoformat()
    if kind:
        details["type"] = kind
    return {"error": err.message, "code": err.code, "details": details}
# endregion

# region Engine (input) Errors
class EngineError(OceanFlowError):
    """The grid or options handed to the engine are unusable. Never retryable."""
    code = "ENGINE_ERROR"
    status_code = 400


class EmptyGrid(EngineError):
    code = "EMPTY_GRID"

    def __init__(self, message: str = "Grid must have at least one row and one column"):
        super().__init__(message)


class MalformedGrid(EngineError):
    code = "MALFORMED_GRID"

    def __init__(self, row: int, expected: Optional[int], actual: Optional[int]):
        if actual is None:
            message = f"Row {row} must be a list of cells"
        else:
            message = f"All rows must have the same length. Row {row} has {actual} columns, expected {expected}"
        super().__init__(message, row=row, expected=expected, actual=actual)
        self.row, self.expected, self.actual = row, expected, actual


def _json_safe(value: Any) -> Any:
    # NaN/Infinity are not valid JSON
    if isinstance(value, bool) or value is None or isinstance(value, (int, str)):
        return value
    if isinstance(value, float) and math.isfinite(value):
        return value
    return repr(value)


class InvalidCellValue(EngineError):
    code = "INVALID_CELL_VALUE"

    def __init__(self, row: int, col: int, value: Any):
        super().__init__(
            f"Invalid elevation at ({row},{col}): {value!r}",
            row=row, col=col, value=_json_safe(value),
        )
        self.row, self.col, self.value = row, col, value


class GridTooLarge(EngineError):
    code = "GRID_TOO_LARGE"

    def __init__(self, rows: int, cols: int, limit: int):
        super().__init__(
            f"Grid too large: {rows}x{cols}. Maximum supported size is {limit}x{limit}",
            rows=rows, cols=cols, limit=limit,
        )


class InvalidOptions(EngineError):
    code = "INVALID_OPTIONS"
# endregion

# region Sheet Access Errors
class SheetAccessError(OceanFlowError):
    code = "PUBLIC_ACCESS_ERROR"
    status_code = 502


class InvalidSheetUrl(SheetAccessError):
    code = "INVALID_SHEET_URL"
    status_code = 400


class PrivateSheet(SheetAccessError):
    code = "PRIVATE_SHEET"
    status_code = 403


class SheetNotFound(SheetAccessError):
    code = "SHEET_NOT_FOUND"
    status_code = 404


class SheetRateLimited(SheetAccessError):
    code = "RATE_LIMIT_EXCEEDED"
    status_code = 429


class SheetNetworkError(SheetAccessError):
    code = "NETWORK_ERROR"
    status_code = 503
# endregion
