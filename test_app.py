# test_app.py
"""
Tests the HTTP layer with Flask's test client. The constellation client is
replaced with a mock so no network access happens.
"""
import importlib
import json
import os
import tempfile
import unittest
from unittest.mock import MagicMock, patch

import app as server
from skygap.constellation.data_models import ConstellationSnapshot, FetchError, Position
from skygap.stations.data_models import ReferenceStation


def pos(lat, lon, hour):
    return Position(latitude=lat, longitude=lon, altitude=14.0, hour=hour, timestamp=0.0)


class TestApi(unittest.TestCase):
    def setUp(self):
        self.saved_state = dict(server.state)
        self.client_mock = MagicMock()
        self.client_mock.fetch_all_hours.return_value = ConstellationSnapshot(
            positions_by_hour={0: [pos(0, 0, 0)], 1: [pos(0, 0.5, 1)]},
            errors=[FetchError(hour=2, reason="HTTP 500")],
            success_count=2,
            total_requests=3
        )
        server.state['client'] = self.client_mock
        server.state['stations'] = [
            ReferenceStation(id="A", name="Alpha", country="XX", latitude=0.1, longitude=0.1)
        ]
        self.http = server.app.test_client()

    def tearDown(self):
        server.state.clear()
        server.state.update(self.saved_state)

    def test_health(self):
        body = self.http.get('/api/health').get_json()
        self.assertTrue(body['success'])
        self.assertEqual(body['status'], 'healthy')
        self.assertEqual(body['stationsLoaded'], 1)

    def test_stations(self):
        body = self.http.get('/api/stations').get_json()
        self.assertEqual(body['count'], 1)
        self.assertEqual(body['stations'][0]['id'], 'A')

    def test_windborne(self):
        body = self.http.get('/api/windborne').get_json()
        self.assertTrue(body['success'])
        self.assertEqual(body['data']['successCount'], 2)
        self.assertEqual(body['data']['uniqueBalloonCount'], 1)
        self.assertEqual(len(body['data']['balloonPaths'][0]), 2)

    def test_coverage(self):
        response = self.http.get('/api/coverage')
        self.assertEqual(response.status_code, 200)
        body = response.get_json()
        stats = body['statistics']
        self.assertEqual(stats['totalBalloonPositions'], 2)
        self.assertEqual(stats['uniqueBalloons'], 1)
        self.assertEqual(stats['uniqueCoveragePositions'], 0)
        self.assertEqual(stats['weatherStationCount'], 1)
        self.assertEqual(stats['dataQuality']['hoursAvailable'], 2)
        self.assertEqual(stats['dataQuality']['hoursMissing'], 1)
        self.assertEqual(body['errors'], [{'hour': '02', 'error': 'HTTP 500'}])

    def test_coverage_failure_is_reported(self):
        self.client_mock.fetch_all_hours.side_effect = RuntimeError("boom")
        response = self.http.get('/api/coverage')
        self.assertEqual(response.status_code, 500)
        body = response.get_json()
        self.assertFalse(body['success'])
        self.assertEqual(body['message'], 'boom')

    def test_missing_station_file_is_not_fatal(self):
        count = server.load_stations(os.path.join(os.path.dirname(os.path.abspath(__file__)), 'does-not-exist.json'))
        self.assertEqual(count, 0)
        self.assertEqual(server.state['stations'], [])


class TestStartup(unittest.TestCase):
    def test_stations_load_on_import(self):
        """Importing the app reads the station cache without running __main__"""
        records = [{"id": "B", "name": "Bravo", "country": "YY", "latitude": 10.0, "longitude": 20.0}]
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "stations.json")
            with open(path, "w", encoding="utf-8") as f:
                json.dump(records, f)
            with patch.dict(os.environ, {"SKYGAP_STATIONS_PATH": path}):
                importlib.reload(server)
        try:
            self.assertEqual([s.id for s in server.state["stations"]], ["B"])
            body = server.app.test_client().get("/api/health").get_json()
            self.assertEqual(body["stationsLoaded"], 1)
        finally:
            importlib.reload(server)


if __name__ == '__main__':
    unittest.main()
