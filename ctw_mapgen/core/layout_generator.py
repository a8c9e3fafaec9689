"""
Layout generation entry point.

Runs the stages for one reference team, then derives the remaining team(s)
by symmetry:

    partition -> placement -> graph -> pathing -> islands -> symmetry

A run is a pure function of its GeneratorConfig. All randomness comes from
a single LcgPRNG seeded from config.seed and consumed in a fixed order.
"""

import structlog

from .generator_config import GeneratorConfig
from .geometry import find_nearest
from .graph_builder import build_team_edges
from .islands import generate_islands
from .lcg_prng import LcgPRNG
from .models import (
    Edge,
    GridMode,
    MapLayout,
    NodeIdCounter,
    Point,
    StrategicPointType,
    Team,
    TeamLayout,
)
from .partition import create_grid
from .pathing import add_pathing_enhancements
from .placement import (
    check_territory_width,
    place_center_hubs,
    place_quadrant_nodes,
    place_team_nodes,
)
from .symmetry import apply_symmetry, rotate_team_layout, transform_grid

logger = structlog.get_logger()

REFERENCE_TEAM = Team.BLUE
TWO_TEAM_OPPONENT = Team.ORANGE
# Teams derived from the 4-team reference quadrant, with their rotation
QUADRANT_ROTATIONS = [(Team.ORANGE, 90), (Team.GREEN, 180), (Team.YELLOW, 270)]


def generate_layout(config: GeneratorConfig) -> MapLayout:
    """
    Generate a complete map layout.

    Args:
        config: Generator configuration

    Returns:
        MapLayout with one TeamLayout per team

    Raises:
        InfeasibleTerritoryError: team width below the placement minimum
        InfeasiblePartitionError: territory too small for the 3x3 grid
    """
    prng = LcgPRNG(config.seed)
    logger.debug("Generating layout", seed=config.seed, num_teams=config.num_teams)

    if config.num_teams == 4:
        layout = _generate_four_team_layout(config, prng)
    else:
        layout = _generate_two_team_layout(config, prng)

    logger.info(
        "Layout generated",
        seed=config.seed,
        teams=len(layout.teams),
        width=layout.width,
        height=layout.height,
        random_draws=prng.call_count,
    )
    return layout


def _generate_two_team_layout(config: GeneratorConfig, prng: LcgPRNG) -> MapLayout:
    total_width = config.team_width * 2 + config.team_gap
    total_height = config.team_height

    check_territory_width(config.team_width)

    counter = NodeIdCounter()
    team = REFERENCE_TEAM

    grid = create_grid(
        prng, config.team_width, config.team_height, config.effective_grid_mode, config.symmetrical_team_layout
    )
    nodes = place_team_nodes(prng, grid, team, config, counter)
    edges = build_team_edges(nodes, prng)

    nodes, edges = add_pathing_enhancements(
        nodes, edges, config.pathing_enhancements, config.team_height, prng, team, counter
    )
    island_nodes, island_edges = generate_islands(
        prng, config, grid, nodes, total_width, total_height, counter, team
    )
    nodes = nodes + island_nodes
    edges = edges + island_edges

    opponent_nodes, opponent_edges = apply_symmetry(
        nodes, edges, TWO_TEAM_OPPONENT, config.symmetry_mode, total_width, total_height
    )
    opponent_grid = transform_grid(grid, config.symmetry_mode, total_width, total_height)

    return MapLayout(
        width=total_width,
        height=total_height,
        team_gap=config.team_gap,
        lane_width=config.lane_width,
        teams={
            team: TeamLayout(grid=grid, nodes=nodes, edges=edges),
            TWO_TEAM_OPPONENT: TeamLayout(grid=opponent_grid, nodes=opponent_nodes, edges=opponent_edges),
        },
    )


def _generate_four_team_layout(config: GeneratorConfig, prng: LcgPRNG) -> MapLayout:
    # teamWidth doubles as the (square) quadrant size
    quadrant_size = config.team_width
    center_gap = config.team_gap
    total_size = quadrant_size * 2 + center_gap
    center = Point(total_size / 2, total_size / 2)

    counter = NodeIdCounter()
    team = REFERENCE_TEAM

    grid = create_grid(prng, quadrant_size, quadrant_size, GridMode.STANDARD, False)
    nodes = place_quadrant_nodes(prng, grid, team, config, counter)
    edges = build_team_edges(nodes, prng)

    center_hubs = place_center_hubs(prng, center, center_gap, team, counter)
    for frontline in (n for n in nodes if n.type == StrategicPointType.FRONT_LINE):
        hub = find_nearest(frontline.pos, center_hubs)
        edges.append(Edge.between(frontline, hub, is_cross_team=True))

    reference = TeamLayout(grid=grid, nodes=nodes + center_hubs, edges=edges)
    teams = {team: reference}
    for rotated_team, angle in QUADRANT_ROTATIONS:
        teams[rotated_team] = rotate_team_layout(reference, angle, rotated_team, center)

    return MapLayout(
        width=total_size,
        height=total_size,
        team_gap=center_gap,
        lane_width=config.lane_width,
        teams=teams,
    )
