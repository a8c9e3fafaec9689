"""Shared fixtures for layout generator tests."""

import pytest

from ctw_mapgen.core import Point, StrategicPointType, Team
from ctw_mapgen.core.models import NodeIdCounter
from layout_helpers import make_config


@pytest.fixture
def minimal_config():
    return make_config()


@pytest.fixture
def full_config():
    """Every optional feature switched on."""
    return make_config(
        islandGeneration={
            "enabled": True,
            "maxIslandsPerTeam": 3,
            "spawnInFourthColumn": True,
            "spawnInCenterGap": True,
            "spawnInEmptyZones": True,
        },
        pathingEnhancements={
            "enableWoolFlankRoutes": True,
            "enableSpawnWoolRushRoute": True,
        },
    )


@pytest.fixture
def hand_placed_nodes():
    """
    A small hand-placed team (x grows toward the center gap).

    Hubs are listed out of y order on purpose.
    """
    counter = NodeIdCounter()
    team = Team.BLUE

    def node(node_type, x, y):
        return counter.new_node(team, node_type, Point(x, y))

    return [
        node(StrategicPointType.WOOL, 10, 20),
        node(StrategicPointType.WOOL_ENTRY, 25, 20),
        node(StrategicPointType.WOOL, 10, 140),
        node(StrategicPointType.WOOL_ENTRY, 25, 140),
        node(StrategicPointType.SPAWN, 10, 80),
        node(StrategicPointType.SPAWN_ENTRY, 25, 80),
        node(StrategicPointType.HUB, 45, 140),
        node(StrategicPointType.HUB, 45, 20),
        node(StrategicPointType.HUB, 45, 80),
        node(StrategicPointType.FRONT_LINE_ENTRY, 65, 30),
        node(StrategicPointType.FRONT_LINE, 80, 30),
        node(StrategicPointType.FRONT_LINE_ENTRY, 65, 130),
        node(StrategicPointType.FRONT_LINE, 80, 130),
    ]

