"""
Territory partitioning.

Splits a team's rectangular territory into a 3x3 grid of zones using
randomized proportional cuts. Rows are Top/Mid/Bottom, columns are
Rear/Mid/Front (column 0 is the team's back wall).
"""

import math
from typing import List

import structlog

from .errors import InfeasiblePartitionError
from .lcg_prng import LcgPRNG
from .models import Grid, GridMode, Zone

logger = structlog.get_logger()

MIN_CELL_WIDTH = 20
MIN_CELL_HEIGHT = 20
GRID_SIZE = 3


def pick_cuts(prng: LcgPRNG, total: float, num_cuts: int, min_size: float) -> List[float]:
    """
    Place num_cuts cut positions along [0, total].

    Every resulting segment is at least min_size long; the space left over is
    shared out in random proportions.

    Args:
        prng: Random source
        total: Length to cut
        num_cuts: Number of cuts (segments = num_cuts + 1)
        min_size: Minimum segment length

    Returns:
        Increasing list of cut positions

    Raises:
        InfeasiblePartitionError: if total < min_size * (num_cuts + 1)
    """
    available = total - min_size * (num_cuts + 1)
    if available < 0:
        raise InfeasiblePartitionError(total, min_size)

    # All draws happen before any cut is placed
    random_values = [prng.next() for _ in range(num_cuts)]
    value_sum = 0
    for value in random_values:
        value_sum += value
    proportions = [value / value_sum for value in random_values]

    cuts = []
    last_cut = 0
    for proportion in proportions:
        cut = last_cut + min_size + proportion * available
        cuts.append(cut)
        last_cut = cut
    return cuts


def _segments(cuts: List[float], total: float) -> List[float]:
    return [cuts[0], cuts[1] - cuts[0], total - cuts[1]]


def create_grid(
    prng: LcgPRNG,
    width: float,
    height: float,
    grid_mode: GridMode = GridMode.STANDARD,
    symmetrical: bool = False,
) -> Grid:
    """
    Build the 3x3 zone grid for one territory.

    With symmetrical set, the bottom row mirrors the top row exactly and
    row-independent columns are disabled, so the territory has a true
    horizontal mirror axis through the middle row.
    """
    if symmetrical:
        max_top_row_height = math.floor((height - MIN_CELL_HEIGHT) / 2)
        if MIN_CELL_HEIGHT > max_top_row_height:
            raise InfeasiblePartitionError(
                height,
                MIN_CELL_HEIGHT,
                f"Cannot create symmetrical grid. Map height {height} is too small "
                f"for the minimum cell height of {MIN_CELL_HEIGHT}.",
            )
        top_row_height = prng.next_int(MIN_CELL_HEIGHT, max_top_row_height)
        h_cuts = [top_row_height, height - top_row_height]
    else:
        h_cuts = pick_cuts(prng, height, GRID_SIZE - 1, MIN_CELL_HEIGHT)
    row_heights = _segments(h_cuts, height)

    # Shared column cuts are always drawn, even when each row redraws its own
    shared_v_cuts = pick_cuts(prng, width, GRID_SIZE - 1, MIN_CELL_WIDTH)
    row_independent = grid_mode == GridMode.ROW_INDEPENDENT and not symmetrical

    grid: Grid = []
    y = 0
    for row in range(GRID_SIZE):
        if row_independent:
            v_cuts = pick_cuts(prng, width, GRID_SIZE - 1, MIN_CELL_WIDTH)
        else:
            v_cuts = shared_v_cuts
        col_widths = _segments(v_cuts, width)

        zones = []
        x = 0
        for col in range(GRID_SIZE):
            zones.append(
                Zone(x=x, y=y, width=col_widths[col], height=row_heights[row], row=row, col=col)
            )
            x += col_widths[col]
        grid.append(zones)
        y += row_heights[row]

    logger.debug(
        "Created territory grid",
        width=width,
        height=height,
        grid_mode=grid_mode.value,
        symmetrical=symmetrical,
        row_heights=row_heights,
    )
    return grid


def zone_row_at(grid: Grid, y: float):
    """Row of the first zone (row-major) whose vertical span contains y, or None."""
    for zones in grid:
        for zone in zones:
            if zone.y <= y < zone.y + zone.height:
                return zone.row
    return None
