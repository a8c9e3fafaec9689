"""
Route enhancements applied to one team before symmetry.

- Wool flank routes: replace the hub -> wool entry -> wool chain with a
  diamond of helper nodes, offering a bypass around the wool entry.
- Spawn -> wool rush route: one extra edge from the spawn exit toward the
  nearest wool entry (or its flank helper).
"""

from typing import Dict, List, Tuple

import structlog

from .generator_config import PathingEnhancements
from .geometry import find_nearest, midpoint
from .lcg_prng import LcgPRNG
from .models import Edge, Node, NodeIdCounter, Point, StrategicPointType, Team

logger = structlog.get_logger()

FLANK_OFFSET = 25
FLANK_PADDING = 10


def add_pathing_enhancements(
    nodes: List[Node],
    edges: List[Edge],
    enhancements: PathingEnhancements,
    team_height: float,
    prng: LcgPRNG,
    team: Team,
    counter: NodeIdCounter,
) -> Tuple[List[Node], List[Edge]]:
    """
    Apply the enabled route enhancements.

    The input lists are not modified.

    Returns:
        (nodes, edges) including any new helper nodes and edges
    """
    new_nodes = list(nodes)
    new_edges = list(edges)
    flank_points: Dict[str, Node] = {}

    if enhancements.enable_wool_flank_routes:
        new_nodes, new_edges, flank_points = _add_wool_flank_routes(
            new_nodes, new_edges, team_height, prng, team, counter
        )

    if enhancements.enable_spawn_wool_rush_route:
        rush = _rush_route(new_nodes, flank_points)
        if rush is not None:
            new_edges.append(rush)

    logger.debug(
        "Applied pathing enhancements",
        team=team.value,
        helpers=len(new_nodes) - len(nodes),
        edges=len(new_edges),
    )
    return new_nodes, new_edges


def _add_wool_flank_routes(
    nodes: List[Node],
    edges: List[Edge],
    team_height: float,
    prng: LcgPRNG,
    team: Team,
    counter: NodeIdCounter,
) -> Tuple[List[Node], List[Edge], Dict[str, Node]]:
    nodes_by_id = {n.id: n for n in nodes}
    hub_ids = {n.id for n in nodes if n.type == StrategicPointType.HUB}
    wool_ids = {n.id for n in nodes if n.type == StrategicPointType.WOOL}
    wool_entries = [n for n in nodes if n.type == StrategicPointType.WOOL_ENTRY]
    flank_points: Dict[str, Node] = {}

    for entry in wool_entries:
        hub_edge = next((e for e in edges if e.to_id == entry.id and e.from_id in hub_ids), None)
        wool_edge = next((e for e in edges if e.from_id == entry.id and e.to_id in wool_ids), None)
        if hub_edge is None or wool_edge is None:
            continue

        hub = nodes_by_id[hub_edge.from_id]
        wool = nodes_by_id[wool_edge.to_id]
        # Identity, not equality: a duplicate edge elsewhere must survive
        edges = [e for e in edges if e is not hub_edge and e is not wool_edge]

        offset = FLANK_OFFSET if prng.next_int(0, 1) == 0 else -FLANK_OFFSET
        flank_y = max(FLANK_PADDING, min(entry.pos.y + offset, team_height - FLANK_PADDING))

        inbound = counter.new_node(team, StrategicPointType.HELPER, midpoint(hub.pos, entry.pos))
        outbound = counter.new_node(team, StrategicPointType.HELPER, midpoint(entry.pos, wool.pos))
        bypass = counter.new_node(team, StrategicPointType.HELPER, Point(entry.pos.x, flank_y))
        nodes += [inbound, outbound, bypass]
        flank_points[entry.id] = bypass

        edges += [
            Edge.between(hub, inbound),
            Edge.between(inbound, entry),
            Edge.between(entry, outbound),
            Edge.between(outbound, wool),
            Edge.between(inbound, bypass),
            Edge.between(bypass, outbound),
        ]

    return nodes, edges, flank_points


def _rush_route(nodes: List[Node], flank_points: Dict[str, Node]):
    """Edge from the spawn exit to the nearest wool entry, or None."""
    spawn_entry = next((n for n in nodes if n.type == StrategicPointType.SPAWN_ENTRY), None)
    wool_entries = [n for n in nodes if n.type == StrategicPointType.WOOL_ENTRY]
    if spawn_entry is None or not wool_entries:
        return None

    closest = find_nearest(spawn_entry.pos, wool_entries)
    target = closest

    # Feed into the flank bypass when it lies strictly between the two ends
    bypass = flank_points.get(closest.id)
    if bypass is not None:
        low, high = sorted((spawn_entry.pos.y, closest.pos.y))
        if low < bypass.pos.y < high:
            target = bypass

    return Edge.between(spawn_entry, target, is_rush_route=True)
