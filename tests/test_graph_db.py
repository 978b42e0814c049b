"""
Unit tests for GeoGraph.

Covers:
- add_point / add_edge: overwrite, idempotent undirected edges
- cleanup(): removes exactly the isolated points
- adjacent / lon / lat / distance / bearing: values and PointNotFoundError
- closest(): brute-force agreement, tie-break, no leaked state, empty graph
"""

import random

import pytest

from mapgraph.graph import EmptyGraphError, GeoGraph, PointNotFoundError, Way
from mapgraph.graph.geodesy import haversine_miles


# ---------------------------------------------------------------------------
# Ingestion
# ---------------------------------------------------------------------------

class TestIngestion:
    def test_add_point_marks_live(self):
        g = GeoGraph()
        g.add_point(1, 37.87, -122.26)
        assert g.vertices() == {1}
        assert 1 in g
        assert len(g) == 1

    def test_missing_tags_default_to_empty(self):
        g = GeoGraph()
        g.add_point(1, 37.87, -122.26)
        assert g.point(1).tags == {}

    def test_overwrite_replaces_coordinates_but_keeps_edges(self):
        g = GeoGraph()
        g.add_point(1, 37.87, -122.26)
        g.add_point(2, 37.88, -122.26)
        g.add_edge(1, 2)
        g.add_point(1, 37.90, -122.20, {"name": "moved"})
        assert g.lat(1) == 37.90
        assert g.lon(1) == -122.20
        assert g.adjacent(1) == {2}

    def test_edges_are_undirected_and_idempotent(self):
        g = GeoGraph()
        g.add_point(1, 37.87, -122.26)
        g.add_point(2, 37.88, -122.26)
        g.add_edge(1, 2)
        g.add_edge(2, 1)
        g.add_edge(1, 2)
        assert g.adjacent(1) == {2}
        assert g.adjacent(2) == {1}

    def test_edge_to_unknown_point_raises(self):
        g = GeoGraph()
        g.add_point(1, 37.87, -122.26)
        with pytest.raises(PointNotFoundError):
            g.add_edge(1, 2)

    def test_ways_are_stored(self):
        g = GeoGraph()
        way = Way(id=7, tags={"highway": "primary"}, valid=True, node_ids=[1, 2, 3])
        g.add_way(way)
        assert g.way(7) is way
        assert list(g.ways()) == [way]
        assert list(way.segments()) == [(1, 2), (2, 3)]


# ---------------------------------------------------------------------------
# cleanup()
# ---------------------------------------------------------------------------

class TestCleanup:
    def test_isolated_point_removed(self, small_graph):
        assert 50 in small_graph.vertices()
        removed = small_graph.cleanup()
        assert removed == [50]
        assert small_graph.vertices() == {10, 20, 30, 40}

    def test_removed_point_is_no_longer_known(self, small_graph):
        small_graph.cleanup()
        with pytest.raises(PointNotFoundError):
            small_graph.lat(50)

    def test_every_remaining_point_has_a_neighbor(self, small_graph):
        small_graph.cleanup()
        for v in small_graph.vertices():
            assert small_graph.adjacent(v)

    def test_removes_exactly_the_degree_zero_points(self):
        rng = random.Random(3)
        g = GeoGraph()
        for i in range(200):
            g.add_point(i, 37.8 + rng.random() / 10, -122.3 + rng.random() / 10)
        for _ in range(120):
            a, b = rng.randrange(200), rng.randrange(200)
            if a != b:
                g.add_edge(a, b)
        isolated = {v for v in g.vertices() if not g.adjacent(v)}
        connected = g.vertices() - isolated

        removed = g.cleanup()

        assert set(removed) == isolated
        assert g.vertices() == connected


# ---------------------------------------------------------------------------
# Accessors, distance and bearing
# ---------------------------------------------------------------------------

class TestQueries:
    def test_coordinates(self, small_graph):
        assert small_graph.lat(10) == 37.8700
        assert small_graph.lon(10) == -122.2600

    def test_unknown_ids_raise_not_found(self, small_graph):
        for call in (small_graph.lat, small_graph.lon, small_graph.adjacent):
            with pytest.raises(PointNotFoundError):
                call(999)
        with pytest.raises(PointNotFoundError):
            small_graph.distance(10, 999)
        with pytest.raises(PointNotFoundError):
            small_graph.bearing(999, 10)

    def test_not_found_is_a_key_error(self, small_graph):
        with pytest.raises(KeyError):
            small_graph.adjacent(999)

    def test_adjacent(self, small_graph):
        assert small_graph.adjacent(20) == {10, 30, 40}

    def test_distance_symmetric_and_zero_on_self(self, small_graph):
        ids = [10, 20, 30, 40, 50]
        for v in ids:
            assert small_graph.distance(v, v) == 0.0
            for w in ids:
                assert small_graph.distance(v, w) == small_graph.distance(w, v)

    def test_small_separation(self):
        g = GeoGraph()
        g.add_point(1, 37.870, -122.260)
        g.add_point(2, 37.871, -122.259)
        g.add_edge(1, 2)
        d = g.distance(1, 2)
        assert 0.08 < d < 0.1
        assert d == pytest.approx(haversine_miles(-122.260, 37.870, -122.259, 37.871))
        assert g.distance(2, 1) == d

    def test_bearing_range(self, small_graph):
        ids = [10, 20, 30, 40, 50]
        for v in ids:
            for w in ids:
                assert -180.0 < small_graph.bearing(v, w) <= 180.0

    def test_bearing_northeast(self, small_graph):
        # 30 is north-east of 20
        assert 0.0 < small_graph.bearing(20, 30) < 90.0


# ---------------------------------------------------------------------------
# closest()
# ---------------------------------------------------------------------------

class TestClosest:
    def test_exact_location_returns_that_point(self, small_graph):
        small_graph.cleanup()
        assert small_graph.closest(-122.2580, 37.8720) == 30

    def test_matches_brute_force_scan(self):
        rng = random.Random(11)
        g = GeoGraph()
        for i in range(1, 301):
            g.add_point(i, 37.82 + rng.random() * 0.07, -122.30 + rng.random() * 0.09)
        for i in range(1, 300):
            g.add_edge(i, i + 1)
        g.cleanup()

        for _ in range(100):
            lon = -122.30 + rng.random() * 0.09
            lat = 37.82 + rng.random() * 0.07
            found = g.closest(lon, lat)
            best = min(haversine_miles(lon, lat, g.lon(v), g.lat(v)) for v in g.vertices())
            assert haversine_miles(lon, lat, g.lon(found), g.lat(found)) == pytest.approx(best, rel=1e-9)

    def test_agrees_exactly_with_scalar_distance(self):
        rng = random.Random(23)
        g = GeoGraph()
        for i in range(1, 201):
            g.add_point(i, 37.86 + rng.random() * 0.002, -122.26 + rng.random() * 0.002)
        # coincident pairs force exact ties
        for i in range(201, 221):
            g.add_point(i, g.lat(i - 200), g.lon(i - 200))
        for i in range(1, 220):
            g.add_edge(i, i + 1)
        g.cleanup()

        for _ in range(200):
            lon = -122.26 + rng.random() * 0.002
            lat = 37.86 + rng.random() * 0.002
            expected = min(g.vertices(), key=lambda v: (haversine_miles(lon, lat, g.lon(v), g.lat(v)), v))
            assert g.closest(lon, lat) == expected

    def test_non_finite_location_raises(self, small_graph):
        small_graph.cleanup()
        for lon, lat in [(float("nan"), 37.87), (-122.26, float("inf"))]:
            with pytest.raises(ValueError):
                small_graph.closest(lon, lat)

    def test_tie_goes_to_smaller_id(self):
        g = GeoGraph()
        g.add_point(9, 37.87, -122.26)
        g.add_point(4, 37.87, -122.26)
        g.add_point(6, 37.90, -122.26)
        g.add_edge(9, 6)
        g.add_edge(4, 6)
        g.cleanup()
        assert g.closest(-122.25, 37.87) == 4

    def test_only_live_points_considered(self, small_graph):
        small_graph.cleanup()
        # 50 was nearest to this location before cleanup
        assert small_graph.closest(-122.2500, 37.8800) != 50

    def test_does_not_leak_points(self, small_graph):
        small_graph.cleanup()
        before = small_graph.vertices()
        small_graph.closest(-122.0, 38.0)
        assert small_graph.vertices() == before
        assert len(small_graph) == len(before)

    def test_sees_points_added_after_previous_query(self):
        g = GeoGraph()
        g.add_point(1, 37.87, -122.26)
        assert g.closest(-122.20, 37.87) == 1
        g.add_point(2, 37.87, -122.20)
        assert g.closest(-122.20, 37.87) == 2

    def test_empty_graph_raises(self):
        with pytest.raises(EmptyGraphError):
            GeoGraph().closest(-122.26, 37.87)

    def test_graph_emptied_by_cleanup_raises(self):
        g = GeoGraph()
        g.add_point(1, 37.87, -122.26)
        g.cleanup()
        with pytest.raises(EmptyGraphError):
            g.closest(-122.26, 37.87)
