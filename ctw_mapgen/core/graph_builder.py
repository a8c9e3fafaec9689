"""
Navigation graph construction for one team.

Connects placed nodes with nearest-neighbour rules around a single hub
spine. The middle hub is the only one reachable from the spawn exit, so
every route out of spawn starts on the same "main street".
"""

from dataclasses import replace
from typing import List

import structlog

from .geometry import find_nearest
from .lcg_prng import LcgPRNG
from .models import Edge, EdgeType, Node, StrategicPointType

logger = structlog.get_logger()


def _of_type(nodes: List[Node], node_type: StrategicPointType) -> List[Node]:
    return [n for n in nodes if n.type == node_type]


def _is_gap_candidate(edge: Edge) -> bool:
    # Hub -> frontline entry, recognised by id
    return (
        StrategicPointType.HUB.abbreviation in edge.from_id
        and StrategicPointType.FRONT_LINE_ENTRY.abbreviation in edge.to_id
    )


def build_team_edges(nodes: List[Node], prng: LcgPRNG) -> List[Edge]:
    """
    Connect one team's nodes into a walkable graph.

    Edges are added in a fixed order: spawn exit, main street, wool
    branches, frontline branches, the hub spine, then frontline objectives.
    Finally 1-2 hub -> frontline entry edges become bridgeable gaps.

    Args:
        nodes: Placed nodes of one team (insertion order matters for ties)
        prng: Random source, used only for the tactical gaps

    Returns:
        List of edges
    """
    spawn = next(n for n in nodes if n.type == StrategicPointType.SPAWN)
    spawn_entry = next(n for n in nodes if n.type == StrategicPointType.SPAWN_ENTRY)
    wools = _of_type(nodes, StrategicPointType.WOOL)
    wool_entries = _of_type(nodes, StrategicPointType.WOOL_ENTRY)
    front_entries = _of_type(nodes, StrategicPointType.FRONT_LINE_ENTRY)
    frontlines = _of_type(nodes, StrategicPointType.FRONT_LINE)
    # Stable sort; every later nearest-hub search walks hubs in this order
    hubs = sorted(_of_type(nodes, StrategicPointType.HUB), key=lambda n: n.pos.y)

    edges: List[Edge] = [Edge.between(spawn, spawn_entry)]

    if hubs:
        mid_hub = hubs[len(hubs) // 2] if len(hubs) > 1 else hubs[0]
        edges.append(Edge.between(spawn_entry, mid_hub))

    for wool in wools:
        if not wool_entries or not hubs:
            continue
        entry = find_nearest(wool.pos, wool_entries)
        hub = find_nearest(entry.pos, hubs)
        edges.append(Edge.between(hub, entry))
        edges.append(Edge.between(entry, wool))

    if hubs:
        for front_entry in front_entries:
            edges.append(Edge.between(find_nearest(front_entry.pos, hubs), front_entry))

    # Lateral lane switching along the spine
    for upper, lower in zip(hubs, hubs[1:]):
        edges.append(Edge.between(upper, lower))

    if frontlines:
        for front_entry in front_entries:
            edges.append(Edge.between(front_entry, find_nearest(front_entry.pos, frontlines)))

    edges = _add_tactical_gaps(edges, prng)

    logger.debug("Built team edges", nodes=len(nodes), edges=len(edges))
    return edges


def _add_tactical_gaps(edges: List[Edge], prng: LcgPRNG) -> List[Edge]:
    """Turn 1-2 randomly chosen hub -> frontline entry edges bridgeable."""
    candidates = [i for i, edge in enumerate(edges) if _is_gap_candidate(edge)]
    if not candidates:
        return edges

    prng.shuffle(candidates)
    chosen = candidates[: prng.next_int(1, 2)]

    gapped = list(edges)
    for i in chosen:
        gapped[i] = replace(gapped[i], edge_type=EdgeType.BRIDGEABLE)
    return gapped
