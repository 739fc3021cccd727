"""Tests for RouteShaper - simplify, smooth, validate and merge."""

import pytest

from route_learner.config import PipelineSettings
from route_learner.routing.route_shaper import RouteShaper

from conftest import FailingOracle, GridTileOracle, wp


def coords(points):
    return [(p.x, p.y) for p in points]


@pytest.fixture
def shaper():
    return RouteShaper()


class TestSimplify:
    """Douglas-Peucker with an explicit stack."""

    def test_straight_line_keeps_endpoints(self, shaper):
        line = [wp(x, 0) for x in range(8)]
        assert coords(shaper.simplify(line)) == [(0, 0), (7, 0)]

    def test_corner_is_preserved(self, shaper):
        corner = [wp(x, 0) for x in range(5)] + [wp(4, y) for y in range(1, 5)]
        assert coords(shaper.simplify(corner)) == [(0, 0), (4, 0), (4, 4)]

    def test_ties_split_at_earliest_point(self):
        shaper = RouteShaper(simplification_tolerance=1.5)
        zigzag = [wp(0, 0), wp(1, 2), wp(2, 0), wp(3, 2), wp(4, 0)]

        assert coords(shaper.simplify(zigzag)) == [(0, 0), (1, 2), (4, 0)]

    def test_short_inputs_unchanged(self, shaper):
        assert shaper.simplify([]) == []
        assert shaper.simplify([wp(1, 1), wp(5, 5)]) == [wp(1, 1), wp(5, 5)]

    def test_output_is_ordered_subset(self, shaper):
        points = [wp(x, (x * 3) % 5) for x in range(12)]
        simplified = shaper.simplify(points)

        indices = [points.index(p) for p in simplified]
        assert indices == sorted(indices)
        assert simplified[0] == points[0]
        assert simplified[-1] == points[-1]


class TestSmooth:
    """Catmull-Rom at t = 0 and t = 0.5."""

    def test_collinear_window(self, shaper):
        points = [wp(0, 0), wp(2, 0), wp(4, 0), wp(6, 0)]
        assert coords(shaper.smooth(points)) == [(0, 0), (2, 0), (3, 0), (6, 0)]

    def test_two_windows(self, shaper):
        points = [wp(0, 0), wp(2, 0), wp(4, 2), wp(6, 2), wp(8, 2)]

        assert coords(shaper.smooth(points)) == [
            (0, 0), (2, 0), (3, 1), (4, 2), (5, 2), (8, 2),
        ]

    def test_fewer_than_four_points_unchanged(self, shaper):
        points = [wp(0, 0), wp(3, 3), wp(6, 0)]
        assert shaper.smooth(points) == points

    def test_smoothed_points_take_window_floor(self, shaper):
        points = [wp(0, 0, z=7), wp(2, 0, z=8), wp(4, 0, z=8), wp(6, 0, z=9)]
        smoothed = shaper.smooth(points)

        assert [p.z for p in smoothed] == [7, 8, 8, 9]


class TestValidate:
    def test_without_oracle_everything_is_walkable(self, shaper):
        points = [wp(0, 0), wp(1, 1)]
        assert shaper.validate(points) == points

    def test_drops_blocked_tiles(self):
        oracle = GridTileOracle(blocked={(1, 1, 7)})
        shaper = RouteShaper(tile_oracle=oracle)

        assert coords(shaper.validate([wp(0, 0), wp(1, 1), wp(2, 2)])) == [(0, 0), (2, 2)]

    def test_failing_oracle_fails_open(self):
        shaper = RouteShaper(tile_oracle=FailingOracle())
        points = [wp(0, 0), wp(1, 1)]

        assert shaper.validate(points) == points


class TestMerge:
    def test_drops_points_closer_than_min_distance(self, shaper):
        points = [wp(0, 0), wp(0, 1), wp(0, 5)]
        assert coords(shaper.merge_close_points(points)) == [(0, 0), (0, 5)]

    def test_distance_measured_from_last_kept_point(self, shaper):
        points = [wp(0, 0), wp(1, 0), wp(2, 0), wp(3, 0)]
        assert coords(shaper.merge_close_points(points)) == [(0, 0), (2, 0)]

    def test_identical_points_collapse(self, shaper):
        assert shaper.merge_close_points([wp(3, 3)] * 4) == [wp(3, 3)]


class TestOptimizeRoute:
    def test_single_point_returned_unchanged(self, shaper):
        assert shaper.optimize_route([wp(4, 4)]) == [wp(4, 4)]
        assert shaper.optimize_route([]) == []

    def test_two_cluster_route(self, shaper):
        points = [wp(1, 0), wp(2, 3)]
        assert shaper.optimize_route(points) == points

    def test_corner_route(self, shaper):
        corner = [wp(x, 0) for x in range(5)] + [wp(4, y) for y in range(1, 5)]
        assert coords(shaper.optimize_route(corner)) == [(0, 0), (4, 0), (4, 4)]

    def test_full_pipeline(self, shaper):
        shaper.set_tolerance(0.5)
        points = [wp(0, 0), wp(2, 0), wp(4, 2), wp(6, 2), wp(8, 2)]

        # simplify -> (0,0) (2,0) (4,2) (8,2); smooth adds (3,1); merge drops it
        assert coords(shaper.optimize_route(points)) == [(0, 0), (2, 0), (8, 2)]

    def test_full_pipeline_with_blocked_tile(self):
        oracle = GridTileOracle(blocked={(2, 0, 7)})
        shaper = RouteShaper(tile_oracle=oracle, simplification_tolerance=0.5)
        points = [wp(0, 0), wp(2, 0), wp(4, 2), wp(6, 2), wp(8, 2)]

        assert coords(shaper.optimize_route(points)) == [(0, 0), (3, 1), (8, 2)]

    def test_all_identical_points(self, shaper):
        assert shaper.optimize_route([wp(5, 5)] * 6) == [wp(5, 5)]

    def test_consecutive_waypoints_respect_min_distance(self, shaper):
        points = [wp(x, (x * x) % 7) for x in range(15)]
        route = shaper.optimize_route(points)

        for prev, curr in zip(route, route[1:]):
            assert ((curr.x - prev.x) ** 2 + (curr.y - prev.y) ** 2) ** 0.5 >= 2.0


class TestConfiguration:
    def test_setters_clamp(self, shaper):
        shaper.set_tolerance(0.1)
        shaper.set_min_distance(0.0)

        assert shaper.simplification_tolerance == 0.5
        assert shaper.min_waypoint_distance == 1.0

    def test_from_settings(self):
        settings = PipelineSettings(
            _env_file=None, simplification_tolerance=2.0, min_waypoint_distance=3.0
        )
        oracle = GridTileOracle()
        shaper = RouteShaper.from_settings(settings, tile_oracle=oracle)

        assert shaper.tile_oracle is oracle
        assert shaper.simplification_tolerance == 2.0
        assert shaper.min_waypoint_distance == 3.0
