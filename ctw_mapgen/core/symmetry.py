"""
Derive the other teams' layouts from the reference team.

No randomness is consumed here: every derived node, edge and zone is a
rigid transform of the reference copy with its id re-tagged to the new
team (4-team center hubs excepted, see rotate_team_layout). The reference
data is never modified.
"""

from dataclasses import replace
from typing import Dict, List, Tuple

from .geometry import find_nearest, rotate_point, transform_point
from .models import Edge, Grid, Node, Point, StrategicPointType, SymmetryMode, Team, TeamLayout, Zone


def retag_id(node_id: str, team: Team) -> str:
    """Swap the team prefix of a node id: BLUE-WOOL-1 -> ORANGE-WOOL-1."""
    _, rest = node_id.split("-", 1)
    return f"{team.value}-{rest}"


def apply_symmetry(
    nodes: List[Node],
    edges: List[Edge],
    team: Team,
    mode: SymmetryMode,
    total_width: float,
    total_height: float,
) -> Tuple[List[Node], List[Edge]]:
    """
    Build the opposing team of a 2-team map.

    Args:
        nodes: Reference team nodes
        edges: Reference team edges
        team: Team to create
        mode: MIRROR (reflect across the vertical center line) or ROTATION
            (180 degrees about the map center)
        total_width: Full map width
        total_height: Full map height

    Returns:
        (nodes, edges) of the new team
    """
    id_map: Dict[str, str] = {}
    new_nodes = []
    for node in nodes:
        new_id = retag_id(node.id, team)
        id_map[node.id] = new_id
        new_nodes.append(
            replace(node, id=new_id, team=team, pos=transform_point(node.pos, mode, total_width, total_height))
        )

    new_edges = [
        replace(
            edge,
            from_id=id_map[edge.from_id],
            to_id=id_map[edge.to_id],
            points=tuple(transform_point(p, mode, total_width, total_height) for p in edge.points),
        )
        for edge in edges
    ]
    return new_nodes, new_edges


def transform_grid(grid: Grid, mode: SymmetryMode, total_width: float, total_height: float) -> Grid:
    """Mirror or rotate a 2-team grid analytically; zones keep their row/col labels."""
    new_grid = []
    for zones in grid:
        row = []
        for zone in zones:
            x = total_width - (zone.x + zone.width)
            if mode == SymmetryMode.MIRROR:
                row.append(replace(zone, x=x))
            else:
                row.append(replace(zone, x=x, y=total_height - (zone.y + zone.height)))
        new_grid.append(row)
    return new_grid


def _rotate_zone(zone: Zone, angle: int, center: Point) -> Zone:
    x, y, w, h = zone.x, zone.y, zone.width, zone.height
    if angle == 90:
        corner = rotate_point(Point(x, y + h), angle, center)
        return replace(zone, x=corner.x, y=corner.y, width=h, height=w)
    if angle == 180:
        corner = rotate_point(Point(x + w, y + h), angle, center)
        return replace(zone, x=corner.x, y=corner.y)
    if angle == 270:
        corner = rotate_point(Point(x + w, y), angle, center)
        return replace(zone, x=corner.x, y=corner.y, width=h, height=w)
    return zone


def rotate_team_layout(base: TeamLayout, angle: int, team: Team, center: Point) -> TeamLayout:
    """
    Rotate a 4-team reference quadrant by angle (90, 180 or 270) about center.

    Center hubs are shared by all four teams: they keep their id, team and
    position and appear once in each rotated layout. Edges into a center hub
    are re-aimed at the hub nearest to the rotated frontline.

    The re-aim is intentional. Rotating such an edge verbatim would keep the
    original hub id while moving its drawn endpoint to a spot that hub does
    not occupy.
    """
    id_map: Dict[str, str] = {}
    new_nodes = []
    for node in base.nodes:
        if node.type == StrategicPointType.CENTER_HUB:
            if node.id not in id_map:
                id_map[node.id] = node.id
                new_nodes.append(node)
            continue
        new_id = retag_id(node.id, team)
        id_map[node.id] = new_id
        new_nodes.append(replace(node, id=new_id, team=team, pos=rotate_point(node.pos, angle, center)))

    nodes_by_id = {n.id: n for n in new_nodes}
    center_hubs = [n for n in new_nodes if n.type == StrategicPointType.CENTER_HUB]

    new_edges = []
    for edge in base.edges:
        start = nodes_by_id[id_map[edge.from_id]]
        end = nodes_by_id[id_map[edge.to_id]]
        if end.type == StrategicPointType.CENTER_HUB and start.type != StrategicPointType.CENTER_HUB:
            # Center hubs stay put, so the rotated frontline picks its own nearest one
            end = find_nearest(start.pos, center_hubs)
            new_edges.append(replace(edge, from_id=start.id, to_id=end.id, points=(start.pos, end.pos)))
            continue
        new_edges.append(
            replace(
                edge,
                from_id=start.id,
                to_id=end.id,
                points=tuple(rotate_point(p, angle, center) for p in edge.points),
            )
        )

    new_grid = [[_rotate_zone(zone, angle, center) for zone in zones] for zones in base.grid]
    return TeamLayout(grid=new_grid, nodes=new_nodes, edges=new_edges)
