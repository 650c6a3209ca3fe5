# skygap/constellation/core.py
"""
Network client for the hourly balloon constellation snapshots. Each of the
24 hours is an independent request with its own timeout; failures are
isolated per hour and reported alongside whatever did arrive.
"""
import json
import time
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Tuple

import requests

from .data_models import ConstellationSnapshot, FetchError, Position
from .exceptions import HourFetchError, SnapshotFormatError
from .validation import parse_positions
from ..constants.sources import ConstellationConfig


class ConstellationClient:
    """Fetches and validates the last 24 hours of balloon positions."""

    def __init__(self, base_url: str = ConstellationConfig.BASE_URL,
                 timeout: float = ConstellationConfig.REQUEST_TIMEOUT_SEC,
                 max_workers: int = ConstellationConfig.MAX_PARALLEL_REQUESTS,
                 session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.max_workers = max(1, max_workers)
        self.session = session or requests.Session()
        if not logging.getLogger().hasHandlers():
            logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')

    def fetch_all_hours(self, hours=ConstellationConfig.HOURS) -> ConstellationSnapshot:
        """Fetches every hour in parallel. Never raises for a single bad hour."""
        hours = list(hours)
        logging.info(f"Fetching constellation data from {len(hours)} endpoints...")
        start = time.time()
        fetched_at = start

        with ThreadPoolExecutor(max_workers=min(self.max_workers, len(hours) or 1)) as pool:
            outcomes = list(pool.map(lambda h: self._fetch_hour_safely(h, fetched_at), hours))

        snapshot = ConstellationSnapshot(total_requests=len(hours))
        for hour, positions, error in outcomes:
            if error is not None:
                snapshot.errors.append(error)
                continue
            snapshot.positions_by_hour[hour] = positions
            snapshot.success_count += 1

        elapsed_ms = (time.time() - start) * 1000
        logging.info(
            f"Fetched {len(snapshot.positions):,} positions in {elapsed_ms:.0f}ms "
            f"({snapshot.success_count}/{snapshot.total_requests} endpoints succeeded)"
        )
        return snapshot

    def fetch_hour(self, hour: int, fetched_at: Optional[float] = None) -> List[Position]:
        """
        Fetches and validates a single hour. Raises HourFetchError for transport
        and HTTP failures and SnapshotFormatError for a non-array payload.
        """
        fetched_at = time.time() if fetched_at is None else fetched_at
        url = f"{self.base_url}/{hour:02d}.json"
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise HourFetchError(hour, str(e) or 'Unknown error') from e

        if response.status_code != 200:
            raise HourFetchError(hour, f"HTTP {response.status_code}")

        try:
            payload = response.json()
        except (json.JSONDecodeError, ValueError) as e:
            raise HourFetchError(hour, f"Invalid JSON: {e}") from e

        if not isinstance(payload, list):
            raise SnapshotFormatError('Invalid data structure (not an array)')

        return parse_positions(payload, hour, fetched_at)

    def _fetch_hour_safely(self, hour: int, fetched_at: float) -> Tuple[int, List[Position], Optional[FetchError]]:
        try:
            return hour, self.fetch_hour(hour, fetched_at), None
        except HourFetchError as e:
            reason = e.reason
        except SnapshotFormatError as e:
            reason = str(e)
        except Exception as e:
            reason = str(e) or "Unknown error"
        logging.warning(f"Constellation hour {hour:02d} unavailable: {reason}")
        return hour, [], FetchError(hour=hour, reason=reason)
