# skygap/stations/loader.py
"""
Loads weather station reference data. Stations come from the NOAA ISD
`isd-history.txt` fixed-width listing, which is parsed once and cached as
JSON; the analysis server only ever reads the JSON cache.
"""
import os
import json
import logging
from typing import List, Optional, Iterable

import requests

from .data_models import ReferenceStation
from .exceptions import StationFileNotFound, StationDownloadError, StationDataError
from ..constants.sources import StationSourceConstants
from ..utils.coordinates import CoordinateCalculations


class StationLoader:
    """Parses, caches and reloads the ISD weather station list."""

    # (start, end) slices of the fixed-width isd-history columns
    COLUMNS = {
        'usaf': (0, 6), 'wban': (7, 12), 'name': (13, 42), 'country': (43, 45),
        'state': (48, 50), 'lat': (57, 64), 'lon': (65, 73), 'elev': (74, 81),
        'begin': (82, 90), 'end': (91, 99)
    }

    def __init__(self, min_active_year: int = StationSourceConstants.MIN_ACTIVE_YEAR,
                 header_lines: int = StationSourceConstants.HEADER_LINES):
        self.min_active_year = min_active_year
        self.header_lines = header_lines
        if not logging.getLogger().hasHandlers():
            logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')

    def download(self, url: str = StationSourceConstants.ISD_HISTORY_URL,
                 timeout: float = StationSourceConstants.DOWNLOAD_TIMEOUT_SEC) -> str:
        """Fetches the raw station history text."""
        logging.info(f"Fetching weather station history from {url}...")
        try:
            response = requests.get(url, timeout=timeout)
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            raise StationDownloadError(f"Failed to download station history: {e}") from e
        return response.text

    def parse_isd_history(self, text: str) -> List[ReferenceStation]:
        """
        Parses the fixed-width listing. Header lines are skipped, records with
        unusable coordinates or an end year before `min_active_year` are
        dropped, and duplicate station ids keep their first occurrence.
        """
        lines = text.splitlines()[self.header_lines:]
        return self._deduplicate(
            station for station in (self._parse_line(line) for line in lines) if station
        )

    def load_json(self, path: str = StationSourceConstants.DEFAULT_JSON_PATH) -> List[ReferenceStation]:
        if not os.path.exists(path):
            raise StationFileNotFound(path)
        try:
            with open(path, 'r', encoding='utf-8') as f:
                records = json.load(f)
        except (json.JSONDecodeError, IOError) as e:
            raise StationDataError(f"Could not read station file {path}: {e}") from e

        stations = []
        for record in records:
            try:
                station = ReferenceStation.from_dict(record)
            except (KeyError, TypeError, ValueError):
                continue
            if CoordinateCalculations.is_valid_coord(station.latitude, station.longitude):
                stations.append(station)
        logging.info(f"Loaded {len(stations):,} weather stations from {path}")
        return self._deduplicate(stations)

    def save_json(self, stations: List[ReferenceStation],
                  path: str = StationSourceConstants.DEFAULT_JSON_PATH) -> None:
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump([s.to_dict() for s in stations], f, indent=2)
        logging.info(f"Saved {len(stations):,} stations to {path}")

    def _field(self, line: str, name: str) -> str:
        start, end = self.COLUMNS[name]
        return line[start:end].strip()

    def _parse_line(self, line: str) -> Optional[ReferenceStation]:
        if not line.strip():
            return None
        try:
            latitude = float(self._field(line, 'lat'))
            longitude = float(self._field(line, 'lon'))
        except ValueError:
            return None
        if not CoordinateCalculations.is_valid_coord(latitude, longitude):
            return None

        # An unreadable END date does not disqualify the station.
        end_year = self._field(line, 'end')[:4]
        if end_year.isdigit() and int(end_year) < self.min_active_year:
            return None

        try:
            elevation = float(self._field(line, 'elev')) * StationSourceConstants.ELEVATION_SCALE
        except ValueError:
            elevation = 0.0

        usaf = self._field(line, 'usaf')
        wban = self._field(line, 'wban')
        return ReferenceStation(
            id=f"{usaf}-{wban}",
            name=self._field(line, 'name') or StationSourceConstants.DEFAULT_NAME,
            country=self._field(line, 'country'),
            state=self._field(line, 'state'),
            latitude=latitude,
            longitude=longitude,
            elevation=elevation,
            active=True
        )

    @staticmethod
    def _deduplicate(stations: Iterable[ReferenceStation]) -> List[ReferenceStation]:
        seen = set()
        unique = []
        for station in stations:
            if station.id in seen:
                continue
            seen.add(station.id)
            unique.append(station)
        return unique
