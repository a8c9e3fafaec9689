"""End-to-end tests for layout generation."""

import pytest

from ctw_mapgen.core import (
    EdgeType,
    GridMode,
    InfeasiblePartitionError,
    InfeasibleTerritoryError,
    LayoutGenerationError,
    Point,
    StrategicPointType,
    SymmetryMode,
    Team,
    generate_layout,
)
from ctw_mapgen.core.layout_analysis import all_nodes
from layout_helpers import (
    TEST_TEAM_GAP,
    TEST_TEAM_HEIGHT,
    TEST_TEAM_WIDTH,
    make_config,
    nodes_by_id,
    of_type,
)

TOTAL_WIDTH = TEST_TEAM_WIDTH * 2 + TEST_TEAM_GAP

# Blue territory for seed 42 with islands and route enhancements off
SEED_42_NODES = [
    ("BLUE-WOOL-1", StrategicPointType.WOOL, 22, 150),
    ("BLUE-W_ENTRY-1", StrategicPointType.WOOL_ENTRY, 32, 150),
    ("BLUE-WOOL-2", StrategicPointType.WOOL, 11, 10),
    ("BLUE-W_ENTRY-2", StrategicPointType.WOOL_ENTRY, 31, 10),
    ("BLUE-SPAWN-1", StrategicPointType.SPAWN, 13, 54.06262090755415),
    ("BLUE-S_EXIT-1", StrategicPointType.SPAWN_ENTRY, 24, 62.06262090755415),
    ("BLUE-HUB-1", StrategicPointType.HUB, 52.09078174383933, 10),
    ("BLUE-HUB-2", StrategicPointType.HUB, 56.09078174383933, 115.06262090755415),
    ("BLUE-HUB-3", StrategicPointType.HUB, 58.09078174383933, 150),
    ("BLUE-F_ENTRY-1", StrategicPointType.FRONT_LINE_ENTRY, 80, 150),
    ("BLUE-FRNT-1", StrategicPointType.FRONT_LINE, 80, 150),
    ("BLUE-F_ENTRY-2", StrategicPointType.FRONT_LINE_ENTRY, 80, 10),
    ("BLUE-FRNT-2", StrategicPointType.FRONT_LINE, 80, 10),
]

SEED_42_EDGES = [
    ("BLUE-SPAWN-1", "BLUE-S_EXIT-1", EdgeType.WALKABLE),
    ("BLUE-S_EXIT-1", "BLUE-HUB-2", EdgeType.WALKABLE),
    ("BLUE-HUB-3", "BLUE-W_ENTRY-1", EdgeType.WALKABLE),
    ("BLUE-W_ENTRY-1", "BLUE-WOOL-1", EdgeType.WALKABLE),
    ("BLUE-HUB-1", "BLUE-W_ENTRY-2", EdgeType.WALKABLE),
    ("BLUE-W_ENTRY-2", "BLUE-WOOL-2", EdgeType.WALKABLE),
    ("BLUE-HUB-3", "BLUE-F_ENTRY-1", EdgeType.BRIDGEABLE),
    ("BLUE-HUB-1", "BLUE-F_ENTRY-2", EdgeType.BRIDGEABLE),
    ("BLUE-HUB-1", "BLUE-HUB-2", EdgeType.WALKABLE),
    ("BLUE-HUB-2", "BLUE-HUB-3", EdgeType.WALKABLE),
    ("BLUE-F_ENTRY-1", "BLUE-FRNT-1", EdgeType.WALKABLE),
    ("BLUE-F_ENTRY-2", "BLUE-FRNT-2", EdgeType.WALKABLE),
]

# Same seed with a top/bottom mirrored territory
SEED_42_SYMMETRICAL_NODES = [
    ("BLUE-SPAWN-1", StrategicPointType.SPAWN, 11, 56),
    ("BLUE-S_EXIT-1", StrategicPointType.SPAWN_ENTRY, 23, 56),
    ("BLUE-WOOL-1", StrategicPointType.WOOL, 11, 10),
    ("BLUE-W_ENTRY-1", StrategicPointType.WOOL_ENTRY, 21, 10),
    ("BLUE-WOOL-2", StrategicPointType.WOOL, 11, 102),
    ("BLUE-W_ENTRY-2", StrategicPointType.WOOL_ENTRY, 21, 102),
    ("BLUE-HUB-1", StrategicPointType.HUB, 58.49006367949369, 10),
    ("BLUE-HUB-2", StrategicPointType.HUB, 46.49006367949369, 56),
    ("BLUE-HUB-3", StrategicPointType.HUB, 58.49006367949369, 102),
    ("BLUE-F_ENTRY-1", StrategicPointType.FRONT_LINE_ENTRY, 80, 10),
    ("BLUE-FRNT-1", StrategicPointType.FRONT_LINE, 80, 10),
    ("BLUE-F_ENTRY-2", StrategicPointType.FRONT_LINE_ENTRY, 80, 102),
    ("BLUE-FRNT-2", StrategicPointType.FRONT_LINE, 80, 102),
]

SEED_42_SYMMETRICAL_EDGES = [
    ("BLUE-SPAWN-1", "BLUE-S_EXIT-1", EdgeType.WALKABLE),
    ("BLUE-S_EXIT-1", "BLUE-HUB-2", EdgeType.WALKABLE),
    ("BLUE-HUB-1", "BLUE-W_ENTRY-1", EdgeType.WALKABLE),
    ("BLUE-W_ENTRY-1", "BLUE-WOOL-1", EdgeType.WALKABLE),
    ("BLUE-HUB-3", "BLUE-W_ENTRY-2", EdgeType.WALKABLE),
    ("BLUE-W_ENTRY-2", "BLUE-WOOL-2", EdgeType.WALKABLE),
    ("BLUE-HUB-1", "BLUE-F_ENTRY-1", EdgeType.BRIDGEABLE),
    ("BLUE-HUB-3", "BLUE-F_ENTRY-2", EdgeType.BRIDGEABLE),
    ("BLUE-HUB-1", "BLUE-HUB-2", EdgeType.WALKABLE),
    ("BLUE-HUB-2", "BLUE-HUB-3", EdgeType.WALKABLE),
    ("BLUE-F_ENTRY-1", "BLUE-FRNT-1", EdgeType.WALKABLE),
    ("BLUE-F_ENTRY-2", "BLUE-FRNT-2", EdgeType.WALKABLE),
]


def assert_edges_resolve(team_layout):
    ids = {n.id for n in team_layout.nodes}
    for edge in team_layout.edges:
        assert edge.from_id in ids
        assert edge.to_id in ids


class TestTwoTeamLayout:
    """Test the default 2-team scenario."""

    def test_minimal_scenario(self, minimal_config):
        """Default 2-team map: two territories around a 24-wide gap, with the full set of per-type node counts."""
        layout = generate_layout(minimal_config)
        assert layout.width == TOTAL_WIDTH
        assert layout.height == TEST_TEAM_HEIGHT
        assert layout.team_gap == TEST_TEAM_GAP
        assert layout.lane_width == 4
        assert list(layout.teams) == [Team.BLUE, Team.ORANGE]

        blue = layout.teams[Team.BLUE]
        assert len(of_type(blue.nodes, StrategicPointType.WOOL)) == 2
        assert len(of_type(blue.nodes, StrategicPointType.WOOL_ENTRY)) == 2
        assert len(of_type(blue.nodes, StrategicPointType.SPAWN)) == 1
        assert len(of_type(blue.nodes, StrategicPointType.SPAWN_ENTRY)) == 1
        assert len(of_type(blue.nodes, StrategicPointType.HUB)) == 3
        frontlines = len(of_type(blue.nodes, StrategicPointType.FRONT_LINE))
        assert frontlines in (2, 3)
        assert len(of_type(blue.nodes, StrategicPointType.FRONT_LINE_ENTRY)) == frontlines
        assert len(blue.nodes) == 9 + 2 * frontlines
        assert len(of_type(blue.nodes, StrategicPointType.HELPER)) == 0
        assert len(of_type(blue.nodes, StrategicPointType.ISLAND)) == 0
        assert len(layout.teams[Team.ORANGE].nodes) == len(blue.nodes)
        assert len(layout.teams[Team.ORANGE].edges) == len(blue.edges)

    def test_node_count_across_seeds(self):
        """Two or three frontline pairs give 13 or 15 nodes, and both counts occur."""
        counts = {len(generate_layout(make_config(seed=seed)).teams[Team.BLUE].nodes) for seed in range(1, 31)}
        assert counts == {13, 15}

    def test_deterministic(self, full_config):
        """Equal configs give equal layouts."""
        assert generate_layout(full_config) == generate_layout(full_config)

    def test_seed_changes_layout(self):
        """Different seeds, different maps."""
        a = generate_layout(make_config(seed=1))
        b = generate_layout(make_config(seed=2))
        assert a != b

    @pytest.mark.parametrize("seed", [1, 7, 42, 99, 123456])
    def test_ids_unique(self, full_config, seed):
        """Node ids are unique across all teams."""
        layout = generate_layout(full_config.model_copy(update={"seed": seed}))
        ids = [n.id for tl in layout.teams.values() for n in tl.nodes]
        assert len(ids) == len(set(ids))

    @pytest.mark.parametrize("seed", [1, 7, 42, 99, 123456])
    def test_edges_resolve_within_team(self, full_config, seed):
        """Every edge endpoint names a node of the same team."""
        layout = generate_layout(full_config.model_copy(update={"seed": seed}))
        for team_layout in layout.teams.values():
            assert_edges_resolve(team_layout)

    @pytest.mark.parametrize("mode", list(SymmetryMode))
    def test_opponent_is_transformed_copy(self, full_config, mode):
        """Orange is Blue moved through the configured symmetry, node for node."""
        layout = generate_layout(full_config.model_copy(update={"symmetry_mode": mode}))
        blue = layout.teams[Team.BLUE]
        orange = nodes_by_id(layout.teams[Team.ORANGE].nodes)
        for node in blue.nodes:
            twin = orange[node.id.replace("BLUE-", "ORANGE-", 1)]
            assert twin.type == node.type
            expected_y = node.pos.y if mode == SymmetryMode.MIRROR else TEST_TEAM_HEIGHT - node.pos.y
            assert twin.pos == Point(TOTAL_WIDTH - node.pos.x, expected_y)

    def test_nodes_inside_map(self, minimal_config):
        """No node leaves the map bounds."""
        layout = generate_layout(minimal_config)
        for node in all_nodes(layout):
            assert 0 <= node.pos.x <= layout.width
            assert 0 <= node.pos.y <= layout.height

    def test_blue_stays_on_left(self, minimal_config):
        """Blue never crosses into the center gap."""
        layout = generate_layout(minimal_config)
        for node in layout.teams[Team.BLUE].nodes:
            assert node.pos.x <= TEST_TEAM_WIDTH

    def test_tactical_gaps_present(self, minimal_config):
        """Each team gets one or two bridgeable gaps."""
        layout = generate_layout(minimal_config)
        for team_layout in layout.teams.values():
            gaps = [e for e in team_layout.edges if e.edge_type == EdgeType.BRIDGEABLE]
            assert 1 <= len(gaps) <= 2

    def test_full_features(self, full_config):
        """Flank routes add three helpers per wool route, the rush route is flagged once."""
        layout = generate_layout(full_config)
        for team_layout in layout.teams.values():
            assert len(of_type(team_layout.nodes, StrategicPointType.HELPER)) in (3, 6)
            assert len(of_type(team_layout.nodes, StrategicPointType.ISLAND)) >= 2
            assert sum(1 for e in team_layout.edges if e.is_rush_route) == 1

    def test_symmetrical_team_layout(self):
        """Mirrored territories force Standard columns."""
        config = make_config(symmetricalTeamLayout=True, gridMode="Row-Independent")
        assert config.effective_grid_mode == GridMode.STANDARD
        layout = generate_layout(config)
        blue = layout.teams[Team.BLUE]
        assert len(blue.nodes) == 13
        widths = [[z.width for z in row] for row in blue.grid]
        assert widths[0] == widths[1] == widths[2]

    def test_orange_grid_mirrors_blue(self, minimal_config):
        """Orange zones are Blue's zones rotated into the right territory."""
        layout = generate_layout(minimal_config)
        blue = layout.teams[Team.BLUE].grid
        orange = layout.teams[Team.ORANGE].grid
        for blue_row, orange_row in zip(blue, orange):
            for b, o in zip(blue_row, orange_row):
                assert o.x == pytest.approx(TOTAL_WIDTH - b.right)
                assert o.y == pytest.approx(TEST_TEAM_HEIGHT - b.bottom)
                assert (o.width, o.height) == (b.width, b.height)


def assert_matches(team_layout, expected_nodes, expected_edges):
    assert [(n.id, n.type) for n in team_layout.nodes] == [(i, t) for i, t, _, _ in expected_nodes]
    for node, (_, _, x, y) in zip(team_layout.nodes, expected_nodes):
        assert node.pos.x == pytest.approx(x)
        assert node.pos.y == pytest.approx(y)
    assert [(e.from_id, e.to_id, e.edge_type) for e in team_layout.edges] == expected_edges


class TestSeededLayout:
    """
    Pin exact layouts for a fixed seed.

    Every stage draws from one shared stream, so moving any placement
    step (e.g. the spawn pair ahead of the wools) changes these values.
    """

    def test_seed_42(self, minimal_config):
        """Default config: ids, types, positions and edges in creation order."""
        layout = generate_layout(minimal_config)
        assert_matches(layout.teams[Team.BLUE], SEED_42_NODES, SEED_42_EDGES)

    def test_seed_42_symmetrical(self):
        """Mirrored territory: spawn first, then the wool pair and its mirror."""
        layout = generate_layout(make_config(symmetricalTeamLayout=True))
        assert_matches(layout.teams[Team.BLUE], SEED_42_SYMMETRICAL_NODES, SEED_42_SYMMETRICAL_EDGES)

    def test_seed_42_orange_is_rotated_blue(self, minimal_config):
        """Rotation mode maps (x, y) to (width - x, height - y)."""
        orange = nodes_by_id(generate_layout(minimal_config).teams[Team.ORANGE].nodes)
        for node_id, node_type, x, y in SEED_42_NODES:
            twin = orange[node_id.replace("BLUE-", "ORANGE-", 1)]
            assert twin.type == node_type
            assert twin.pos.x == pytest.approx(TOTAL_WIDTH - x)
            assert twin.pos.y == pytest.approx(TEST_TEAM_HEIGHT - y)


class TestFourTeamLayout:
    """Test the 4-team rotational layout."""

    @pytest.fixture
    def layout(self):
        return generate_layout(make_config(numTeams=4))

    def test_teams_and_size(self, layout):
        """Four teams on a square map."""
        assert list(layout.teams) == [Team.BLUE, Team.ORANGE, Team.GREEN, Team.YELLOW]
        assert layout.width == layout.height == TOTAL_WIDTH

    def test_center_hubs_shared(self, layout):
        """All teams reference the same four center hubs around the map center."""
        hub_sets = [
            [n for n in tl.nodes if n.type == StrategicPointType.CENTER_HUB]
            for tl in layout.teams.values()
        ]
        assert len(hub_sets[0]) == 4
        for hubs in hub_sets[1:]:
            assert hubs == hub_sets[0]
        center = TOTAL_WIDTH / 2
        for hub in hub_sets[0]:
            assert abs(hub.pos.x - center) <= TEST_TEAM_GAP / 3 + 1e-9
            assert abs(hub.pos.y - center) <= TEST_TEAM_GAP / 3 + 1e-9

    def test_unique_nodes(self, layout):
        """Thirteen nodes per quadrant plus the four shared center hubs."""
        nodes = all_nodes(layout)
        assert len(nodes) == 4 * 13 + 4
        assert len({n.id for n in nodes}) == len(nodes)

    def test_edges_resolve(self, layout):
        """Edges resolve within each rotated team."""
        for team_layout in layout.teams.values():
            assert_edges_resolve(team_layout)

    def test_cross_team_edges(self, layout):
        """The frontline links into the center area exactly once per team."""
        for team, team_layout in layout.teams.items():
            cross = [e for e in team_layout.edges if e.is_cross_team]
            assert len(cross) == 1
            assert cross[0].from_id == f"{team.value}-FRNT-1"
            assert "C_HUB" in cross[0].to_id

    def test_no_islands_or_helpers(self):
        """Islands and route enhancements are 2-team features."""
        config = make_config(
            numTeams=4,
            islandGeneration={"enabled": True, "maxIslandsPerTeam": 3},
            pathingEnhancements={"enableWoolFlankRoutes": True, "enableSpawnWoolRushRoute": True},
        )
        for team_layout in generate_layout(config).teams.values():
            assert not of_type(team_layout.nodes, StrategicPointType.ISLAND)
            assert not of_type(team_layout.nodes, StrategicPointType.HELPER)

    def test_one_wool(self):
        """One wool per team."""
        layout = generate_layout(make_config(numTeams=4, woolsPerTeam=1))
        for team_layout in layout.teams.values():
            assert len(of_type(team_layout.nodes, StrategicPointType.WOOL)) == 1

    def test_rotated_quadrants_keep_distances(self, layout):
        """Rotation about the map center preserves each node's distance to it."""
        blue = nodes_by_id(layout.teams[Team.BLUE].nodes)
        center = Point(TOTAL_WIDTH / 2, TOTAL_WIDTH / 2)
        for team in (Team.ORANGE, Team.GREEN, Team.YELLOW):
            for node in layout.teams[team].nodes:
                if node.type == StrategicPointType.CENTER_HUB:
                    continue
                original = blue[node.id.replace(f"{team.value}-", "BLUE-", 1)]
                assert (node.pos.x - center.x) ** 2 + (node.pos.y - center.y) ** 2 == pytest.approx(
                    (original.pos.x - center.x) ** 2 + (original.pos.y - center.y) ** 2
                )

    def test_narrow_quadrant_fails_in_partition(self):
        """A 50-wide quadrant passes the territory check but not the partitioner."""
        with pytest.raises(InfeasiblePartitionError):
            generate_layout(make_config(numTeams=4, teamWidth=50))


class TestInfeasibleConfigs:
    """Test configurations that cannot produce a layout."""

    def test_narrow_territory(self, monkeypatch):
        """Width is checked before any grid is built."""
        def fail(*args, **kwargs):
            raise AssertionError("grid must not be built")

        monkeypatch.setattr("ctw_mapgen.core.layout_generator.create_grid", fail)
        with pytest.raises(InfeasibleTerritoryError) as exc_info:
            generate_layout(make_config(teamWidth=50))
        assert "at least 80" in str(exc_info.value)

    def test_short_territory(self):
        """Too short for three 20-high rows."""
        with pytest.raises(InfeasiblePartitionError):
            generate_layout(make_config(teamHeight=50))

    def test_errors_share_base(self):
        """Both failure kinds derive from LayoutGenerationError."""
        with pytest.raises(LayoutGenerationError):
            generate_layout(make_config(teamWidth=79))
