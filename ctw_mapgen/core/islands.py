"""
Island generation.

Adds short chains of minor nodes in map space the main layout leaves
unused, each bridged back to the existing graph by one bridgeable edge.
Three spawn strategies exist; each is tried at most once, in random order,
until the per-team budget is spent.
"""

from typing import Callable, List, Optional, Tuple

import structlog

from .generator_config import GeneratorConfig
from .geometry import find_nearest
from .lcg_prng import LcgPRNG
from .models import Edge, EdgeType, Grid, Node, NodeIdCounter, Point, StrategicPointType, Team, Zone
from .partition import zone_row_at

logger = structlog.get_logger()

ISLAND_STEP = 20
FOURTH_COLUMN_WIDTH = 30
ZONE_PADDING = 10

IslandResult = Tuple[List[Node], List[Edge]]


def create_island_chain(
    prng: LcgPRNG,
    start: Point,
    bounds: Zone,
    team: Team,
    counter: NodeIdCounter,
) -> IslandResult:
    """
    Lay out 2-3 island nodes as a random walk starting at start.

    Each step moves at most ISLAND_STEP along each axis and is clamped to
    bounds (the start point itself is taken as given). Consecutive nodes are
    joined by walkable edges.
    """
    num_points = prng.next_int(2, 3)
    chain = [start]
    for _ in range(1, num_points):
        prev = chain[-1]
        x = prng.next_int(
            max(bounds.x, prev.x - ISLAND_STEP), min(bounds.x + bounds.width, prev.x + ISLAND_STEP)
        )
        y = prng.next_int(
            max(bounds.y, prev.y - ISLAND_STEP), min(bounds.y + bounds.height, prev.y + ISLAND_STEP)
        )
        chain.append(Point(x, y))

    nodes = [counter.new_node(team, StrategicPointType.ISLAND, p) for p in chain]
    edges = [Edge.between(a, b) for a, b in zip(nodes, nodes[1:])]
    return nodes, edges


def _bridged_chain(
    prng: LcgPRNG,
    anchor: Node,
    start: Point,
    bounds: Zone,
    team: Team,
    counter: NodeIdCounter,
) -> IslandResult:
    nodes, edges = create_island_chain(prng, start, bounds, team, counter)
    edges.append(Edge.between(anchor, nodes[0], EdgeType.BRIDGEABLE))
    return nodes, edges


def generate_islands(
    prng: LcgPRNG,
    config: GeneratorConfig,
    grid: Grid,
    existing_nodes: List[Node],
    total_width: float,
    total_height: float,
    counter: NodeIdCounter,
    team: Team = Team.BLUE,
) -> IslandResult:
    """
    Generate islands for the reference team.

    Args:
        prng: Random source
        config: Generator configuration (island_generation section)
        grid: Reference team grid
        existing_nodes: Nodes placed so far; anchors are chosen among these
        total_width: Full map width
        total_height: Full map height
        counter: Node id counters
        team: Team that owns the islands

    Returns:
        (nodes, edges) to append to the reference team
    """
    options = config.island_generation
    if not options.enabled or options.max_islands_per_team == 0:
        return [], []

    def in_empty_frontline_zone() -> Optional[IslandResult]:
        used_rows = {
            zone_row_at(grid, n.pos.y)
            for n in existing_nodes
            if n.type == StrategicPointType.FRONT_LINE
        }
        empty_zones = [grid[row][2] for row in range(3) if row not in used_rows]
        if not empty_zones:
            return None

        zone = prng.shuffle(empty_zones)[0]
        anchor = find_nearest(Point(zone.x, zone.y + zone.height / 2), existing_nodes)
        start = Point(
            zone.x + prng.next_int(ZONE_PADDING, zone.width - ZONE_PADDING),
            zone.y + prng.next_int(ZONE_PADDING, zone.height - ZONE_PADDING),
        )
        return _bridged_chain(prng, anchor, start, zone, team, counter)

    def in_fourth_column() -> Optional[IslandResult]:
        zone = Zone(x=config.team_width, y=0, width=FOURTH_COLUMN_WIDTH, height=total_height, row=-1, col=3)
        candidates = [
            n
            for n in existing_nodes
            if n.type in (StrategicPointType.FRONT_LINE, StrategicPointType.FRONT_LINE_ENTRY)
        ]
        if not candidates:
            return None

        anchor = prng.shuffle(candidates)[0]
        start = Point(anchor.pos.x + prng.next_int(15, 25), anchor.pos.y + prng.next_int(-10, 10))
        return _bridged_chain(prng, anchor, start, zone, team, counter)

    def in_center_gap() -> Optional[IslandResult]:
        # The reference team's half of the gap
        zone = Zone(
            x=(total_width - config.team_gap) / 2,
            y=0,
            width=config.team_gap / 2,
            height=total_height,
            row=-1,
            col=-1,
        )
        frontlines = [n for n in existing_nodes if n.type == StrategicPointType.FRONT_LINE]
        if not frontlines:
            return None

        start_y = prng.next_int(20, total_height - 20)
        start = Point(zone.x + prng.next_int(5, zone.width - 5), start_y)
        anchor = find_nearest(start, frontlines)
        return _bridged_chain(prng, anchor, start, zone, team, counter)

    strategies: List[Callable[[], Optional[IslandResult]]] = []
    if options.spawn_in_empty_zones:
        strategies.append(in_empty_frontline_zone)
    if options.spawn_in_fourth_column and config.num_teams == 2:
        strategies.append(in_fourth_column)
    if options.spawn_in_center_gap:
        strategies.append(in_center_gap)

    prng.shuffle(strategies)

    new_nodes: List[Node] = []
    new_edges: List[Edge] = []
    island_count = 0
    while island_count < options.max_islands_per_team and strategies:
        strategy = strategies.pop()
        result = strategy()
        if result is None:
            continue
        nodes, edges = result
        new_nodes += nodes
        new_edges += edges
        island_count += 1
        logger.debug("Spawned island", strategy=strategy.__name__, nodes=len(nodes))

    return new_nodes, new_edges
