"""
Strategic point placement.

Fills a territory grid with typed nodes. Objectives (Spawn, Wool, FrontLine)
always come with a paired entry point at a constrained distance; hubs are
single points. Draw order matters: changing the order in which zones are
visited changes every layout produced from a given seed.
"""

from typing import List, Tuple

import structlog

from .generator_config import DistanceConstraint, GeneratorConfig
from .errors import InfeasibleTerritoryError
from .geometry import mirror_across_y
from .lcg_prng import LcgPRNG
from .models import Grid, Node, NodeIdCounter, Point, StrategicPointType, Team, Zone

logger = structlog.get_logger()

MIN_TEAM_WIDTH = 80
POINT_PADDING = 10
CENTER_HUB_COUNT = 4

# Zones (row, col) holding a hub in the 4-team reference quadrant, in draw order
QUADRANT_HUB_ZONES = [(1, 1), (0, 2), (2, 0), (1, 2), (2, 1)]


def check_territory_width(team_width: float) -> None:
    """Reject territories too narrow for point placement."""
    if team_width < MIN_TEAM_WIDTH:
        raise InfeasibleTerritoryError(team_width, MIN_TEAM_WIDTH)


def place_paired_points(
    prng: LcgPRNG,
    zone: Zone,
    distance: DistanceConstraint,
    padding: float = POINT_PADDING,
) -> Tuple[Point, Point]:
    """
    Place an objective and its entry point inside zone.

    The entry sits to the right of the objective, between distance.min and
    distance.max away horizontally (clamped to the zone). When the zone is
    too narrow for distance.min the two points go to opposite horizontal
    edges of the zone instead.

    Returns:
        (objective, entry)
    """
    top = zone.y + padding
    bottom = zone.y + zone.height - padding
    left = zone.x + padding
    right = zone.x + zone.width - padding

    objective_max_x = right - distance.min
    if objective_max_x <= left:
        objective = Point(left, prng.next_int(top, bottom))
        entry = Point(right, prng.next_int(top, bottom))
        return objective, entry

    objective_x = prng.next_int(left, objective_max_x)
    objective = Point(objective_x, prng.next_int(top, bottom))

    entry_min_x = max(objective_x + distance.min, left)
    entry_max_x = min(objective_x + distance.max, right)
    if entry_min_x >= entry_max_x:
        return objective, Point(right, prng.next_int(top, bottom))

    entry_x = prng.next_int(entry_min_x, entry_max_x)
    entry = Point(entry_x, prng.next_int(top, bottom))
    return objective, entry


def place_points_in_zone(prng: LcgPRNG, zone: Zone, count: int, padding: float = 5) -> List[Point]:
    """Place count uniformly random points inside zone, inset by padding."""
    points = []
    for _ in range(count):
        x = zone.x + prng.next_int(padding, zone.width - padding)
        y = zone.y + prng.next_int(padding, zone.height - padding)
        points.append(Point(x, y))
    return points


def _objective_pair(
    counter: NodeIdCounter,
    team: Team,
    objective_type: StrategicPointType,
    entry_type: StrategicPointType,
    objective: Point,
    entry: Point,
) -> List[Node]:
    return [
        counter.new_node(team, objective_type, objective),
        counter.new_node(team, entry_type, entry),
    ]


def _frontline_pair(counter: NodeIdCounter, team: Team, near: Point, far: Point) -> List[Node]:
    # The entry is the point closer to the spawn (smaller x); the frontline
    # objective faces the center gap.
    return [
        counter.new_node(team, StrategicPointType.FRONT_LINE_ENTRY, near),
        counter.new_node(team, StrategicPointType.FRONT_LINE, far),
    ]


def place_team_nodes(
    prng: LcgPRNG,
    grid: Grid,
    team: Team,
    config: GeneratorConfig,
    counter: NodeIdCounter,
) -> List[Node]:
    """
    Place all nodes of one 2-team territory.

    Dispatches on config.symmetrical_team_layout.
    """
    if config.symmetrical_team_layout:
        nodes = _place_symmetrical(prng, grid, team, config, counter)
    else:
        nodes = _place_asymmetrical(prng, grid, team, config, counter)
    logger.debug("Placed team nodes", team=team.value, nodes=len(nodes))
    return nodes


def _place_asymmetrical(
    prng: LcgPRNG,
    grid: Grid,
    team: Team,
    config: GeneratorConfig,
    counter: NodeIdCounter,
) -> List[Node]:
    nodes: List[Node] = []

    # Wools go in the two rear corners, in random order
    wool_zones = prng.shuffle([grid[0][0], grid[2][0]])
    for zone in wool_zones:
        wool, entry = place_paired_points(prng, zone, config.wool_entry_distance)
        nodes += _objective_pair(
            counter, team, StrategicPointType.WOOL, StrategicPointType.WOOL_ENTRY, wool, entry
        )

    spawn, spawn_entry = place_paired_points(prng, grid[1][0], config.spawn_entry_distance)
    nodes += _objective_pair(
        counter, team, StrategicPointType.SPAWN, StrategicPointType.SPAWN_ENTRY, spawn, spawn_entry
    )

    for row in range(3):
        hub_pos = place_points_in_zone(prng, grid[row][1], 1, POINT_PADDING)[0]
        nodes.append(counter.new_node(team, StrategicPointType.HUB, hub_pos))

    rows = prng.shuffle([0, 1, 2])
    frontline_rows = rows[: prng.next_int(2, 3)]
    for row in frontline_rows:
        near, far = place_paired_points(prng, grid[row][2], config.frontline_entry_distance)
        nodes += _frontline_pair(counter, team, near, far)

    return nodes


def _place_symmetrical(
    prng: LcgPRNG,
    grid: Grid,
    team: Team,
    config: GeneratorConfig,
    counter: NodeIdCounter,
) -> List[Node]:
    nodes: List[Node] = []

    # The spawn pair sits on the territory's horizontal mirror axis
    spawn_zone = grid[1][0]
    mirror_y = spawn_zone.y + prng.next_int(POINT_PADDING, spawn_zone.height - POINT_PADDING)

    spawn, spawn_entry = place_paired_points(prng, spawn_zone, config.spawn_entry_distance)
    nodes += _objective_pair(
        counter,
        team,
        StrategicPointType.SPAWN,
        StrategicPointType.SPAWN_ENTRY,
        Point(spawn.x, mirror_y),
        Point(spawn_entry.x, mirror_y),
    )

    wool, wool_entry = place_paired_points(prng, grid[0][0], config.wool_entry_distance)
    wool_pairs = [
        (wool, wool_entry),
        (mirror_across_y(wool, mirror_y), mirror_across_y(wool_entry, mirror_y)),
    ]
    for objective, entry in wool_pairs:
        nodes += _objective_pair(
            counter, team, StrategicPointType.WOOL, StrategicPointType.WOOL_ENTRY, objective, entry
        )

    top_hub = place_points_in_zone(prng, grid[0][1], 1, POINT_PADDING)[0]
    mid_zone = grid[1][1]
    mid_hub = Point(mid_zone.x + prng.next_int(POINT_PADDING, mid_zone.width - POINT_PADDING), mirror_y)
    for hub_pos in (top_hub, mid_hub, mirror_across_y(top_hub, mirror_y)):
        nodes.append(counter.new_node(team, StrategicPointType.HUB, hub_pos))

    near, far = place_paired_points(prng, grid[0][2], config.frontline_entry_distance)
    nodes += _frontline_pair(counter, team, near, far)
    nodes += _frontline_pair(
        counter, team, mirror_across_y(near, mirror_y), mirror_across_y(far, mirror_y)
    )

    return nodes


def place_quadrant_nodes(
    prng: LcgPRNG,
    grid: Grid,
    team: Team,
    config: GeneratorConfig,
    counter: NodeIdCounter,
) -> List[Node]:
    """
    Place the nodes of the 4-team reference quadrant.

    The quadrant's (0, 0) corner is the map corner and (2, 2) faces the map
    center: spawn in the corner, wools next to it, hubs around the diagonal
    and a single frontline pair toward the center.
    """
    nodes: List[Node] = []

    spawn, spawn_entry = place_paired_points(prng, grid[0][0], config.spawn_entry_distance)
    nodes += _objective_pair(
        counter, team, StrategicPointType.SPAWN, StrategicPointType.SPAWN_ENTRY, spawn, spawn_entry
    )

    wool_zones = [grid[0][1]] if config.wools_per_team == 1 else [grid[0][1], grid[1][0]]
    for zone in wool_zones:
        wool, entry = place_paired_points(prng, zone, config.wool_entry_distance)
        nodes += _objective_pair(
            counter, team, StrategicPointType.WOOL, StrategicPointType.WOOL_ENTRY, wool, entry
        )

    for row, col in QUADRANT_HUB_ZONES:
        hub_pos = place_points_in_zone(prng, grid[row][col], 1, POINT_PADDING)[0]
        nodes.append(counter.new_node(team, StrategicPointType.HUB, hub_pos))

    near, far = place_paired_points(prng, grid[2][2], config.frontline_entry_distance)
    nodes += _frontline_pair(counter, team, near, far)

    logger.debug("Placed quadrant nodes", team=team.value, nodes=len(nodes))
    return nodes


def place_center_hubs(
    prng: LcgPRNG,
    center: Point,
    center_gap: float,
    team: Team,
    counter: NodeIdCounter,
    count: int = CENTER_HUB_COUNT,
) -> List[Node]:
    """Scatter the shared center hubs within a third of the gap around center."""
    spread = center_gap / 3
    hubs = []
    for _ in range(count):
        x = center.x + prng.next_int(-spread, spread)
        y = center.y + prng.next_int(-spread, spread)
        hubs.append(counter.new_node(team, StrategicPointType.CENTER_HUB, Point(x, y)))
    return hubs
