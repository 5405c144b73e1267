# region Imports and Typing
from typing import Callable, Iterable, List, Tuple
from collections import deque
import logging
import numpy as np

from ocean_flow.grid import STEPS_4, border_seeds, idx_to_rc, rc_to_idx
from ocean_flow.models import Cell, ElevationGrid, OceanBorder, ReachabilitySet
# endregion

logger = logging.getLogger(__name__)

Admit = Callable[[float, float], bool]


def uphill_or_flat(h_current: float, h_neighbor: float) -> bool:
    """Reverse flow edge: water on the neighbor could run down (or across) to us."""
    return h_neighbor >= h_current


# region Multi-source Flood
def flood_from_seeds(
    heights: np.ndarray,
    seeds: Iterable[Tuple[int, int]],
    admit: Admit,
) -> ReachabilitySet:
    """
    Breadth-first flood over 4-neighbors starting from every seed at once.

    A neighbor v of u is entered when admit(h[u], h[v]) holds. Each call owns
    its visited/parent arrays, so floods never share state. Membership does
    not depend on seed or queue order.
    """
    H, W = heights.shape
    flat: List[float] = heights.ravel().tolist()
    visited = bytearray(H * W)
    parent = np.full(H * W, -1, dtype=np.int64)

    queue = deque()
    for r, c in seeds:
        i = rc_to_idx(r, c, W)
        if not visited[i]:
            visited[i] = 1
            queue.append(i)

    while queue:
        i = queue.popleft()
        r, c = divmod(i, W)
        h = flat[i]
        for dr, dc in STEPS_4:
            rr, cc = r + dr, c + dc
            if rr < 0 or rr >= H or cc < 0 or cc >= W:
                continue
            j = rr * W + cc
            if visited[j]:
                continue
            if admit(h, flat[j]):
                visited[j] = 1
                parent[j] = i
                queue.append(j)

    mask = np.frombuffer(bytes(visited), dtype=np.uint8).astype(bool).reshape(H, W)
    mask.setflags(write=False)
    parent.setflags(write=False)
    return ReachabilitySet(mask=mask, parent=parent)
# endregion

# region Ocean Reachability
def reach_ocean(grid: ElevationGrid, border: OceanBorder) -> ReachabilitySet:
    seeds = border_seeds(border, grid.rows, grid.cols)
    reach = flood_from_seeds(grid.heights, seeds, uphill_or_flat)
    logger.debug("%s %s: %d seeds, %d reachable", border.name, "+".join(border.edges), len(seeds), reach.size)
    return reach
# endregion

# region Path Reconstruction
def reconstruct(reach: ReachabilitySet, cell: Tuple[int, int], W: int) -> Tuple[Cell, ...]:
    """
    Follow the flood's parent links from `cell` back to the seed it grew
    from. Read forwards this is the route water takes: every step goes to a
    cell no higher than the one before, ending on the border.
    """
    if not reach.mask[cell[0], cell[1]]:
        return ()
    path = []
    v = rc_to_idx(cell[0], cell[1], W)
    while v != -1:
        path.append(idx_to_rc(v, W))
        v = int(reach.parent[v])
    return tuple(path)
# endregion
