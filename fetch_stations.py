# fetch_stations.py
"""
Downloads the NOAA ISD station history, keeps the stations active in recent
years and writes them to the JSON cache read by the analysis server.
"""
import os
import sys
import logging

from skygap.constants.sources import StationSourceConstants
from skygap.stations.loader import StationLoader
from skygap.stations.exceptions import StationDataError

PROJECT_ROOT = os.path.dirname(os.path.abspath(__file__))


def main() -> int:
    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
    output_path = os.path.join(PROJECT_ROOT, StationSourceConstants.DEFAULT_JSON_PATH)
    loader = StationLoader()

    try:
        text = loader.download()
        stations = loader.parse_isd_history(text)
        logging.info(f"Parsed {len(stations)} active weather stations")
        loader.save_json(stations, output_path)
    except (StationDataError, OSError) as e:
        logging.error(f"Error fetching stations: {e}")
        return 1

    for station in stations[:5]:
        logging.info(f"  - {station.name} ({station.country}) at {station.latitude}, {station.longitude}")

    if stations:
        countries = {s.country for s in stations}
        average_elevation = sum(s.elevation for s in stations) / len(stations)
        logging.info(f"Total stations: {len(stations)}")
        logging.info(f"Countries: {len(countries)}")
        logging.info(f"Average elevation: {average_elevation:.0f}m")
    return 0


if __name__ == '__main__':
    sys.exit(main())
