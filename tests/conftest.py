"""Shared grids and the Flask test client."""
import pytest

from ocean_flow.app import app as flask_app


# Classic Pacific/Atlantic example; the row-major answer is CLASSIC_EXPECTED
CLASSIC_GRID = [
    [1, 2, 2, 3, 5],
    [3, 2, 3, 4, 4],
    [2, 4, 5, 3, 1],
    [6, 7, 1, 4, 5],
    [5, 1, 1, 2, 4],
]
CLASSIC_EXPECTED = [(0, 4), (1, 3), (1, 4), (2, 2), (3, 0), (3, 1), (4, 0)]

# High corners and a central pit: nothing flows across, only the two shared
# corners (top-right, bottom-left) touch both oceans
RIDGE_GRID = [
    [2, 2, 9],
    [2, 1, 2],
    [9, 2, 2],
]
RIDGE_EXPECTED = [(0, 2), (2, 0)]


@pytest.fixture
def classic():
    return [row[:] for row in CLASSIC_GRID], list(CLASSIC_EXPECTED)


@pytest.fixture
def ridge():
    return [row[:] for row in RIDGE_GRID], list(RIDGE_EXPECTED)


@pytest.fixture
def client():
    flask_app.config["TESTING"] = True
    with flask_app.test_client() as c:
        yield c
