# app.py — Slim Flask API around the drainage engine
# deps: pip install flask numpy requests

from __future__ import annotations
from typing import Any, Dict
from datetime import datetime, timezone
import logging
import secrets
import time

from flask import Flask, request, jsonify
from werkzeug.exceptions import HTTPException

from ocean_flow.config import ALGORITHM_NAME, HOST, PORT, LOG_LEVEL, MAX_BATCH_GRIDS
from ocean_flow.errors import OceanFlowError, error_to_json
from ocean_flow.engine import analyze, analyze_many, options_from_json
from ocean_flow.assemble import result_to_json
from ocean_flow.sheet_url import parse_sheet_url, sheet_urls
from ocean_flow.sheets import fetch_from_url

logger = logging.getLogger(__name__)

app = Flask(__name__)
_STARTED = time.monotonic()


def configure_logging(level: str = LOG_LEVEL) -> None:
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _request_id() -> str:
    return f"wf_{int(time.time() * 1000)}_{secrets.token_hex(3)}"


def _bad_request(message: str, code: str, **details):
    details["timestamp"] = _now_iso()
    return jsonify({"error": message, "code": code, "details": details}), 400


def _body() -> Dict[str, Any]:
    data = request.get_json(force=True, silent=True)
    return data if isinstance(data, dict) else {}


def _input_size(grid: Any) -> Dict[str, int]:
    rows = len(grid) if isinstance(grid, list) else 0
    cols = len(grid[0]) if rows and isinstance(grid[0], list) else 0
    return {"rows": rows, "cols": cols, "totalCells": rows * cols}

# ======= CORS =======
@app.after_request
def _cors(resp):
    resp.headers["Access-Control-Allow-Origin"]  = "*"
    resp.headers["Access-Control-Allow-Headers"] = "*"
    resp.headers["Access-Control-Allow-Methods"] = "GET,POST,OPTIONS"
    return resp

# ======= errors =======
@app.errorhandler(OceanFlowError)
def _ocean_flow_error(err: OceanFlowError):
    if err.status_code >= 500:
        logger.error("[WaterFlow] %s: %s", err.code, err.message)
    else:
        logger.info("[WaterFlow] rejected %s: %s", err.code, err.message)
    return jsonify(error_to_json(err, kind="water-flow-analysis-error")), err.status_code


@app.errorhandler(Exception)
def _unexpected_error(err: Exception):
    # 404, 405, ... keep their own response
    if isinstance(err, HTTPException):
        return err
    logger.exception("[WaterFlow] unexpected failure")
    body = {
        "error": "An unexpected error occurred during water flow analysis",
        "code": "WATER_FLOW_ERROR",
        "details": {"timestamp": _now_iso(), "type": "water-flow-analysis-error"},
    }
    return jsonify(body), 500

# ======= info endpoints =======
@app.route("/", methods=["GET"])
def root():
    return {
        "ok": True,
        "algorithm": ALGORITHM_NAME,
        "endpoints": [
            "GET /health",
            "POST /api/water-flow/analyze",
            "POST /api/water-flow/batch",
            "POST /api/water-flow/from-sheet-url",
            "POST /api/sheets/parse-url",
        ],
    }


@app.route("/health", methods=["GET"])
def health():
    return {"status": "OK", "timestamp": _now_iso(), "uptime": time.monotonic() - _STARTED}

# ======= water flow API =======
@app.route("/api/water-flow/analyze", methods=["POST"])
def analyze_grid():
    """
    JSON body:
    {
      "grid": [[1, 2, 2], [3, 2, 3], ...],   // rows of numbers / numeric strings
      "options": {
        "oceanAEdges": ["top", "left"],     // alias pacificEdges
        "oceanBEdges": ["bottom", "right"], // alias atlanticEdges
        "includePaths": false,
        "parallel": false
      }
    }
    """
    data = _body()
    grid = data.get("grid")
    if grid is None:
        return _bad_request("Grid data is required in request body", "MISSING_GRID_DATA")

    opts = options_from_json(data.get("options"))
    rid = _request_id()
    t0 = time.perf_counter()
    size = _input_size(grid)
    logger.info("[WaterFlow] Starting analysis %s for %dx%d grid", rid, size["rows"], size["cols"])

    result = analyze(grid, opts)
    resp = result_to_json(result)
    resp["requestInfo"] = {
        "requestId": rid,
        "totalProcessingTimeMs": (time.perf_counter() - t0) * 1000.0,
        "timestamp": _now_iso(),
        "inputSize": size,
    }
    logger.info("[WaterFlow] Completed analysis %s in %.1fms", rid, resp["requestInfo"]["totalProcessingTimeMs"])
    return jsonify(resp)


@app.route("/api/water-flow/batch", methods=["POST"])
def batch_analyze():
    data = _body()
    grids = data.get("grids")
    if not isinstance(grids, list) or not grids:
        return _bad_request("Array of grids is required", "MISSING_BATCH_DATA",
                            provided=len(grids) if isinstance(grids, list) else "not an array")
    if len(grids) > MAX_BATCH_GRIDS:
        return _bad_request(f"Batch size limited to {MAX_BATCH_GRIDS} grids per request", "BATCH_SIZE_EXCEEDED",
                            provided=len(grids), maximum=MAX_BATCH_GRIDS)

    opts = options_from_json(data.get("options"))
    bid = _request_id()
    t0 = time.perf_counter()
    logger.info("[WaterFlow] Starting batch analysis %s for %d grids", bid, len(grids))

    results = []
    for item in analyze_many(grids, opts):
        if item["success"]:
            results.append({"index": item["index"], "success": True, "result": result_to_json(item["result"])})
        else:
            results.append({"index": item["index"], "success": False, **error_to_json(item["error"])})

    elapsed_ms = (time.perf_counter() - t0) * 1000.0
    ok = sum(1 for r in results if r["success"])
    logger.info("[WaterFlow] Completed batch analysis %s in %.1fms", bid, elapsed_ms)
    return jsonify({
        "batchId": bid,
        "totalGrids": len(grids),
        "successful": ok,
        "failed": len(grids) - ok,
        "results": results,
        "batchStats": {
            "totalProcessingTimeMs": elapsed_ms,
            "averageTimePerGridMs": elapsed_ms / len(grids),
            "timestamp": _now_iso(),
        },
    })


@app.route("/api/water-flow/from-sheet-url", methods=["POST"])
def analyze_sheet_url():
    """
    JSON body: {"url": "<sheet link or id>", "tabName": "<gid>", "options": {...}}
    Only publicly exported sheets are supported.
    """
    data = _body()
    url = data.get("url")
    if not url:
        return _bad_request("Sheet URL is required in request body", "MISSING_SHEET_URL")

    opts = options_from_json(data.get("options"))
    rid = _request_id()
    t0 = time.perf_counter()
    sheet_id, gid, rows = fetch_from_url(url, data.get("tabName"))
    fetched = time.perf_counter()

    result = analyze(rows, opts)
    resp = result_to_json(result)
    resp["sheetInfo"] = {
        "sheetId": sheet_id,
        "gid": gid,
        "extractedDimensions": {
            "originalRows": len(rows),
            "originalCols": max((len(r) for r in rows), default=0),
            "processedRows": result.grid_dimensions["rows"],
            "processedCols": result.grid_dimensions["cols"],
        },
    }
    resp["processingInfo"] = {
        "requestId": rid,
        "dataExtractionTimeMs": (fetched - t0) * 1000.0,
        "totalTimeMs": (time.perf_counter() - t0) * 1000.0,
        "timestamp": _now_iso(),
    }
    resp["urlInfo"] = parse_sheet_url(url)
    logger.info("[WaterFlow] Completed sheet analysis %s for %s/%s", rid, sheet_id, gid)
    return jsonify(resp)

# ======= sheets helpers =======
@app.route("/api/sheets/parse-url", methods=["POST"])
def parse_url():
    data = _body()
    url = data.get("url")
    if not url or not isinstance(url, str):
        return _bad_request("Sheet URL is required in request body", "MISSING_SHEET_URL")
    info = parse_sheet_url(url)
    if info["sheetId"]:
        info["urls"] = sheet_urls(info["sheetId"])
    return jsonify(info)


if __name__ == "__main__":
    configure_logging()
    app.run(host=HOST, port=PORT, threaded=True)
