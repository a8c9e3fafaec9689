"""
Layout analysis utilities.

Read-only metrics over generated layouts: path lengths per edge, node type
counts and a per-team summary. Nothing here mutates a layout.
"""

from collections import Counter
from typing import Any, Dict, List

import numpy as np

from .models import Edge, EdgeType, MapLayout, Node, StrategicPointType, TeamLayout


def all_nodes(layout: MapLayout) -> List[Node]:
    """
    Flatten the nodes of every team, in team order.

    Shared 4-team center hubs appear in every team's node list; only their
    first occurrence is kept.
    """
    seen = set()
    nodes = []
    for team_layout in layout.teams.values():
        for node in team_layout.nodes:
            if node.id in seen:
                continue
            seen.add(node.id)
            nodes.append(node)
    return nodes


def all_edges(layout: MapLayout) -> List[Edge]:
    """Flatten the edges of every team, in team order."""
    return [edge for team_layout in layout.teams.values() for edge in team_layout.edges]


def edge_lengths(team_layout: TeamLayout) -> np.ndarray:
    """Length of every edge polyline, in edge order."""
    if not team_layout.edges:
        return np.zeros(0)
    starts = np.array([[e.points[0].x, e.points[0].y] for e in team_layout.edges], dtype=np.float64)
    ends = np.array([[e.points[1].x, e.points[1].y] for e in team_layout.edges], dtype=np.float64)
    return np.hypot(ends[:, 0] - starts[:, 0], ends[:, 1] - starts[:, 1])


def node_type_counts(team_layout: TeamLayout) -> Dict[StrategicPointType, int]:
    """Number of nodes per type (types with no nodes are omitted)."""
    return dict(Counter(node.type for node in team_layout.nodes))


def summarize_team(team_layout: TeamLayout) -> Dict[str, Any]:
    lengths = edge_lengths(team_layout)
    bridgeable = np.array(
        [e.edge_type == EdgeType.BRIDGEABLE for e in team_layout.edges], dtype=bool
    )
    walkable_lengths = lengths[~bridgeable]
    bridgeable_lengths = lengths[bridgeable]

    return {
        "nodes": len(team_layout.nodes),
        "edges": len(team_layout.edges),
        "node_types": {t.value: c for t, c in node_type_counts(team_layout).items()},
        "walkable_edges": int(walkable_lengths.size),
        "bridgeable_edges": int(bridgeable_lengths.size),
        "rush_routes": sum(1 for e in team_layout.edges if e.is_rush_route),
        "total_length": float(lengths.sum()),
        "mean_walkable_length": float(walkable_lengths.mean()) if walkable_lengths.size else 0.0,
        "mean_bridgeable_length": float(bridgeable_lengths.mean()) if bridgeable_lengths.size else 0.0,
    }


def summarize_layout(layout: MapLayout) -> Dict[str, Any]:
    """
    Summary statistics for a whole layout.

    Returns:
        Dict with map dimensions, the de-duplicated node count and one
        summary dict per team keyed by team name
    """
    return {
        "width": layout.width,
        "height": layout.height,
        "teams": {team.value: summarize_team(tl) for team, tl in layout.teams.items()},
        "unique_nodes": len(all_nodes(layout)),
    }
