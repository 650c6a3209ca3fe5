# skygap/constants/sources.py
import os


class ConstellationConfig:
    """Where and how the hourly constellation snapshots are fetched."""

    BASE_URL = "https://a.windbornesystems.com/treasure"
    HOURS = tuple(range(24))
    REQUEST_TIMEOUT_SEC = 5
    MAX_PARALLEL_REQUESTS = 8


class StationSourceConstants:
    """NOAA Integrated Surface Database station history source."""

    ISD_HISTORY_URL = "https://www.ncei.noaa.gov/pub/data/noaa/isd-history.txt"
    HEADER_LINES = 20
    MIN_ACTIVE_YEAR = 2024
    DOWNLOAD_TIMEOUT_SEC = 120
    # The ELEV column is read in tenths of a metre.
    ELEVATION_SCALE = 0.1
    DEFAULT_NAME = "Unknown Station"
    DEFAULT_JSON_PATH = os.path.join("data", "weather-stations.json")
