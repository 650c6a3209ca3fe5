# skygap/coverage/tests/test_spatial_index.py
import random
import unittest

from skygap.coverage.spatial_index import StationGrid
from skygap.stations.data_models import ReferenceStation
from skygap.utils.coordinates import CoordinateCalculations


def make_station(idx, lat, lon):
    return ReferenceStation(id=f"S{idx}", name=f"Station {idx}", country="XX", latitude=lat, longitude=lon)


def brute_force_ids(stations, lat, lon, radius_km):
    return {
        s.id for s in stations
        if CoordinateCalculations.distance_km(lat, lon, s.latitude, s.longitude) <= radius_km
    }


class TestGridConstruction(unittest.TestCase):
    def test_empty_index(self):
        """An empty station list builds an index that answers with no candidates"""
        grid = StationGrid.build([])
        self.assertEqual(grid.cell_count, 0)
        self.assertEqual(grid.station_count, 0)
        self.assertEqual(grid.candidates_within_radius(0, 0, 200), [])

    def test_invalid_cell_size(self):
        with self.assertRaises(ValueError):
            StationGrid.build([], cell_size_deg=0)
        with self.assertRaises(ValueError):
            StationGrid.build([], cell_size_deg=-5)
        with self.assertRaises(ValueError):
            StationGrid.build([make_station(0, 1, 1)], cell_size_deg=0)

    def test_cell_index_needs_no_grid(self):
        """Cell indices are computed from the cell size alone"""
        self.assertEqual(StationGrid.cell_index(3, 7, 5.0), (0, 1))
        self.assertEqual(StationGrid.cell_index(-0.1, 180, 5.0), (-1, -36))
        self.assertEqual(StationGrid.cell_index(12, 185, 10.0), (1, -18))
        self.assertEqual(StationGrid.wrap_column(36, 5.0), -36)

    def test_cell_keys(self):
        grid = StationGrid.build([])
        self.assertEqual(grid.cell_key(3, 7), (0, 5))
        self.assertEqual(grid.cell_key(-0.1, -0.1), (-5, -5))
        self.assertEqual(grid.cell_key(45, 90), (45, 90))
        # The antimeridian column has a single key.
        self.assertEqual(grid.cell_key(10, 180), (10, -180))
        self.assertEqual(grid.cell_key(10, -180), (10, -180))

    def test_each_station_in_exactly_one_cell(self):
        stations = [make_station(0, 1, 1), make_station(1, 2, 2), make_station(2, 6, 1)]
        grid = StationGrid.build(stations)
        self.assertEqual(grid.cell_count, 2)
        self.assertEqual(grid.station_count, 3)
        self.assertEqual({s.id for s in grid.stations_in_cell(0.5, 0.5)}, {"S0", "S1"})
        self.assertEqual({s.id for s in grid.stations_in_cell(7, 4)}, {"S2"})

    def test_index_is_read_only(self):
        grid = StationGrid.build([make_station(0, 1, 1)])
        with self.assertRaises(TypeError):
            grid._cells[(9, 9)] = ()


class TestRadiusQuery(unittest.TestCase):
    def test_neighbouring_cells_only(self):
        """A 200 km query looks at the 3x3 block around the point"""
        near = make_station(0, 0.5, 0.5)
        adjacent = make_station(1, 0.5, 6.0)
        far = make_station(2, 0.5, 20.0)
        grid = StationGrid.build([near, adjacent, far])
        candidates = grid.candidates_within_radius(1.0, 1.0, 200)
        self.assertEqual({s.id for s in candidates}, {"S0", "S1"})

    def test_no_duplicate_candidates(self):
        stations = [make_station(i, 0.1 * i, 0.1 * i) for i in range(20)]
        grid = StationGrid.build(stations)
        candidates = grid.candidates_within_radius(0.5, 0.5, 200)
        self.assertEqual(len(candidates), len({s.id for s in candidates}))

    def test_longitude_wraps_at_antimeridian(self):
        """Queries near +180 find stations just west of -180 and vice versa"""
        west = make_station(0, 0.0, -179.5)
        edge = make_station(1, 0.0, 180.0)
        grid = StationGrid.build([west, edge])

        from_east = {s.id for s in grid.candidates_within_radius(0.0, 179.5, 200)}
        self.assertEqual(from_east, {"S0", "S1"})

        from_west = {s.id for s in grid.candidates_within_radius(0.0, -176.0, 200)}
        self.assertIn("S0", from_west)
        self.assertIn("S1", from_west)

    def test_latitude_does_not_wrap(self):
        grid = StationGrid.build([make_station(0, -89.0, 0.0)])
        self.assertEqual(grid.candidates_within_radius(89.0, 0.0, 200), [])

    def test_superset_of_brute_force(self):
        """No false negatives against a full scan, mid latitudes"""
        rng = random.Random(7)
        stations = [make_station(i, rng.uniform(-90, 90), rng.uniform(-180, 180)) for i in range(3000)]
        grid = StationGrid.build(stations)
        for _ in range(200):
            lat, lon = rng.uniform(-60, 60), rng.uniform(-180, 180)
            candidate_ids = {s.id for s in grid.candidates_within_radius(lat, lon, 200)}
            self.assertTrue(brute_force_ids(stations, lat, lon, 200) <= candidate_ids)

    def test_scaled_longitude_superset_near_poles(self):
        """Latitude-scaled spans keep the no-false-negative contract everywhere"""
        rng = random.Random(11)
        stations = [make_station(i, rng.uniform(70, 90), rng.uniform(-180, 180)) for i in range(2000)]
        stations += [make_station(2000 + i, rng.uniform(-90, -70), rng.uniform(-180, 180)) for i in range(2000)]
        grid = StationGrid.build(stations, scale_longitude=True)
        for _ in range(200):
            lat = rng.choice([1, -1]) * rng.uniform(72, 89.9)
            lon = rng.uniform(-180, 180)
            for radius in (200, 500):
                candidate_ids = {s.id for s in grid.candidates_within_radius(lat, lon, radius)}
                self.assertTrue(brute_force_ids(stations, lat, lon, radius) <= candidate_ids)

    def test_scaling_widens_high_latitude_queries(self):
        """At 80N a station 7 degrees of longitude away is within 200 km"""
        station = make_station(0, 80.0, 12.0)
        self.assertLess(CoordinateCalculations.distance_km(80.0, 4.9, 80.0, 12.0), 200)
        plain = StationGrid.build([station])
        scaled = StationGrid.build([station], scale_longitude=True)
        self.assertEqual(plain.candidates_within_radius(80.0, 4.9, 200), [])
        self.assertEqual(scaled.candidates_within_radius(80.0, 4.9, 200), [station])


class TestGlobalScale(unittest.TestCase):
    def setUp(self):
        """13,443 stations spread over every one of the 2,592 five degree cells"""
        rng = random.Random(2024)
        self.stations = []
        for idx in range(13443):
            cell = idx % 2592
            lat_cell, lon_cell = divmod(cell, 72)
            lat = -90 + lat_cell * 5 + rng.uniform(0.25, 4.75)
            lon = -180 + lon_cell * 5 + rng.uniform(0.25, 4.75)
            self.stations.append(make_station(idx, lat, lon))
        self.grid = StationGrid.build(self.stations)

    def test_every_cell_populated(self):
        self.assertEqual(self.grid.cell_count, 2592)
        self.assertEqual(self.grid.station_count, 13443)

    def test_equatorial_query(self):
        """A 200 km query returns the true neighbours without a full scan"""
        candidates = self.grid.candidates_within_radius(1.0, 1.0, 200)
        candidate_ids = {s.id for s in candidates}
        self.assertTrue(brute_force_ids(self.stations, 1.0, 1.0, 200) <= candidate_ids)
        self.assertLess(len(candidates), 100)


if __name__ == '__main__':
    unittest.main()
