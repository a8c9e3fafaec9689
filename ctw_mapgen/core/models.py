"""Layout data structures shared by every generation stage."""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple


class StrategicPointType(str, Enum):
    """Node type; the value is the short code used in exports."""

    WOOL = "W"
    WOOL_ENTRY = "WE"
    SPAWN = "S"
    SPAWN_ENTRY = "SE"
    FRONT_LINE = "FL"
    FRONT_LINE_ENTRY = "FE"
    HUB = "HUB"
    ISLAND = "I"
    HELPER = "HELPER"
    CENTER_HUB = "CH"

    @property
    def abbreviation(self) -> str:
        """Abbreviation used inside node ids."""
        return NODE_TYPE_ABBREVIATIONS[self]


NODE_TYPE_ABBREVIATIONS: Dict[StrategicPointType, str] = {
    StrategicPointType.SPAWN: "SPAWN",
    StrategicPointType.SPAWN_ENTRY: "S_EXIT",
    StrategicPointType.WOOL: "WOOL",
    StrategicPointType.WOOL_ENTRY: "W_ENTRY",
    StrategicPointType.FRONT_LINE: "FRNT",
    StrategicPointType.FRONT_LINE_ENTRY: "F_ENTRY",
    StrategicPointType.HUB: "HUB",
    StrategicPointType.HELPER: "HLPR",
    StrategicPointType.ISLAND: "ISLE",
    StrategicPointType.CENTER_HUB: "C_HUB",
}


class Team(str, Enum):
    BLUE = "BLUE"
    ORANGE = "ORANGE"
    GREEN = "GREEN"
    YELLOW = "YELLOW"


class EdgeType(str, Enum):
    WALKABLE = "walkable"
    BRIDGEABLE = "bridgeable"


class GridMode(str, Enum):
    """Column partitioning mode for the 3x3 territory grid."""

    STANDARD = "Standard"
    ROW_INDEPENDENT = "Row-Independent"

    @classmethod
    def _missing_(cls, value):
        # Accept "RowIndependent", "row_independent", etc.
        if isinstance(value, str):
            key = value.replace("-", "").replace("_", "").lower()
            for member in cls:
                if member.value.replace("-", "").lower() == key:
                    return member
        return None


class SymmetryMode(str, Enum):
    """How the opposing team is derived in 2-team layouts."""

    MIRROR = "Mirror"
    ROTATION = "Rotation"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            for member in cls:
                if member.value.lower() == value.lower():
                    return member
        return None


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class Zone:
    """One cell of a territory grid.

    row/col are the grid coordinates (rows Top/Mid/Bottom, columns
    Rear/Mid/Front). Ad-hoc regions outside the grid use -1 or 3.
    """

    x: float
    y: float
    width: float
    height: float
    row: int
    col: int

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height


@dataclass(frozen=True)
class Node:
    """A strategic point of the navigation graph."""

    id: str
    type: StrategicPointType
    pos: Point
    team: Team


@dataclass(frozen=True)
class Edge:
    """
    Connection between two nodes.

    The polyline is captured from the endpoint positions when the edge is
    created and is not recomputed afterwards.
    """

    from_id: str
    to_id: str
    points: Tuple[Point, Point]
    edge_type: EdgeType = EdgeType.WALKABLE
    is_rush_route: bool = False
    is_cross_team: bool = False
    purpose: Optional[str] = None

    @classmethod
    def between(cls, start: Node, end: Node, edge_type: EdgeType = EdgeType.WALKABLE, **kwargs) -> "Edge":
        """Create an edge whose polyline is the segment start -> end."""
        return cls(
            from_id=start.id,
            to_id=end.id,
            points=(start.pos, end.pos),
            edge_type=edge_type,
            **kwargs,
        )

    @property
    def length(self) -> float:
        a, b = self.points
        return math.hypot(b.x - a.x, b.y - a.y)


Grid = List[List[Zone]]


@dataclass
class TeamLayout:
    """Complete subgraph of one team."""

    grid: Grid
    nodes: List[Node]
    edges: List[Edge]

    def nodes_of_type(self, node_type: StrategicPointType) -> List[Node]:
        return [n for n in self.nodes if n.type == node_type]


@dataclass
class MapLayout:
    """Result of one generation run."""

    width: float
    height: float
    team_gap: float
    lane_width: float
    teams: Dict[Team, TeamLayout] = field(default_factory=dict)


class NodeIdCounter:
    """
    Per-(team, type) sequence numbers for node ids.

    Ids look like ``BLUE-WOOL-1``. One counter table is threaded through a
    whole run so ids stay unique across stages.
    """

    def __init__(self):
        self._counters: Dict[Tuple[Team, StrategicPointType], int] = {}

    def next_id(self, team: Team, node_type: StrategicPointType) -> str:
        key = (team, node_type)
        index = self._counters.get(key, 0) + 1
        self._counters[key] = index
        return f"{team.value}-{node_type.abbreviation}-{index}"

    def new_node(self, team: Team, node_type: StrategicPointType, pos: Point) -> Node:
        """Allocate an id and build the node in one step."""
        return Node(id=self.next_id(team, node_type), type=node_type, pos=pos, team=team)
