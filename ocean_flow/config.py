# config.py
import os

ALGORITHM_NAME = "optimized-reverse-bfs"

# Edge names an ocean border can be built from
EDGES = ("top", "bottom", "left", "right")
OCEAN_A_EDGES = ("top", "left")      # "Pacific"
OCEAN_B_EDGES = ("bottom", "right")  # "Atlantic"

# Hard limit on either grid side; above LARGE_GRID_CELLS we only warn
MAX_GRID_DIM = int(os.environ.get("OCEAN_FLOW_MAX_GRID_DIM", "10000"))
LARGE_GRID_CELLS = 1_000_000

MAX_BATCH_GRIDS = int(os.environ.get("OCEAN_FLOW_MAX_BATCH", "10"))

SHEETS_BASE_URL = "https://docs.google.com/spreadsheets/d"
SHEETS_TIMEOUT_SEC = float(os.environ.get("OCEAN_FLOW_SHEETS_TIMEOUT", "10"))
DEFAULT_TAB_GID = "0"

HOST = os.environ.get("OCEAN_FLOW_HOST", "0.0.0.0")
PORT = int(os.environ.get("OCEAN_FLOW_PORT", "8081"))
LOG_LEVEL = os.environ.get("OCEAN_FLOW_LOG_LEVEL", "INFO")
