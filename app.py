# app.py
import os
import logging
import datetime
from flask import Flask, jsonify

# Core Application Imports
from skygap.constants.sources import StationSourceConstants
from skygap.constellation.core import ConstellationClient
from skygap.coverage.core import CoverageAnalyzer
from skygap.stations.loader import StationLoader
from skygap.stations.exceptions import StationDataError, StationFileNotFound

if not logging.getLogger().handlers:
    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')

app = Flask(__name__)
log = logging.getLogger('werkzeug')
log.setLevel(logging.WARNING)
PROJECT_ROOT = os.path.dirname(os.path.abspath(__file__))
SERVICE_NAME = 'skygap-coverage-analyzer'

# Global State Dictionary
state = {
    'stations': [],
    'client': ConstellationClient(),
    'analyzer': CoverageAnalyzer(),
}


def _now_iso() -> str:
    return datetime.datetime.now(datetime.timezone.utc).isoformat()


def load_stations(path: str = None) -> int:
    """Loads the station JSON cache into the global state. Missing data is not fatal."""
    path = path or os.environ.get(
        'SKYGAP_STATIONS_PATH', os.path.join(PROJECT_ROOT, StationSourceConstants.DEFAULT_JSON_PATH)
    )
    try:
        state['stations'] = StationLoader().load_json(path)
    except StationFileNotFound:
        logging.warning("Weather stations data file not found. Run: python fetch_stations.py")
        logging.warning("Using empty dataset for now.")
        state['stations'] = []
    except StationDataError as e:
        logging.error(f"Could not load weather stations: {e}")
        state['stations'] = []
    return len(state['stations'])


# Loaded at import so every server entry point starts with the station set.
load_stations()


@app.route('/api/health')
def health():
    return jsonify({
        'success': True,
        'status': 'healthy',
        'timestamp': _now_iso(),
        'stationsLoaded': len(state['stations']),
        'service': SERVICE_NAME
    })


@app.route('/api/windborne')
def windborne():
    try:
        logging.info("Fetching constellation data...")
        snapshot = state['client'].fetch_all_hours()
        paths = state['analyzer'].reconstructor.reconstruct(snapshot.positions)
        data = snapshot.to_dict()
        data['uniqueBalloonCount'] = len(paths)
        data['balloonPaths'] = [path.to_list() for path in paths]
        return jsonify({'success': True, 'timestamp': _now_iso(), 'data': data})
    except Exception as e:
        logging.error(f"Error fetching constellation data: {e}", exc_info=True)
        return jsonify({
            'success': False,
            'error': 'Failed to fetch constellation data',
            'message': str(e)
        }), 500


@app.route('/api/stations')
def stations():
    return jsonify({
        'success': True,
        'count': len(state['stations']),
        'stations': [s.to_dict() for s in state['stations']]
    })


@app.route('/api/coverage')
def coverage():
    try:
        logging.info("Calculating coverage statistics...")
        snapshot = state['client'].fetch_all_hours()
        report = state['analyzer'].run(snapshot, state['stations'])
        payload = report.to_dict()
        return jsonify({'success': True, 'timestamp': _now_iso(), **payload})
    except Exception as e:
        logging.error(f"Error calculating coverage: {e}", exc_info=True)
        return jsonify({
            'success': False,
            'error': 'Failed to calculate coverage',
            'message': str(e)
        }), 500


if __name__ == '__main__':
    logging.info(f"Serving {len(state['stations']):,} weather stations")
    port = int(os.environ.get('PORT', 3000))
    logging.info(f"SkyGap coverage analyzer running on http://localhost:{port}")
    app.run(host='0.0.0.0', port=port, debug=False, use_reloader=False)
