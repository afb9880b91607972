"""Environment-driven defaults for the loaders and the map builder."""
from __future__ import annotations

import os
from pathlib import Path

DATASETS_DIR = Path(os.environ.get('IM_DATASETS_DIR', Path.cwd() / 'datasets'))
OUTPUT_DIR = Path(os.environ.get('IM_OUTPUT_DIR', Path.cwd() / 'incident_map'))

# Local copies written by build_incident_dataset; the map builder prefers them when present.
PROCESSED_TOPOLOGY_FILE = DATASETS_DIR / 'world' / 'processed' / 'world_topology.json'
PROCESSED_INCIDENTS_FILE = DATASETS_DIR / 'incidents' / 'processed' / 'incidents.csv'

TOPOLOGY_SOURCE = os.environ.get(
    'IM_TOPOLOGY_SOURCE',
    'https://unpkg.com/world-atlas@2.0.2/countries-50m.json',
)
LAND_OBJECT = os.environ.get('IM_LAND_OBJECT', 'land')
BORDER_OBJECT = os.environ.get('IM_BORDER_OBJECT', 'countries')

INCIDENTS_SOURCE = os.environ.get(
    'IM_INCIDENTS_SOURCE',
    'https://gist.githubusercontent.com/curran/a9656d711a8ad31d812b8f9963ac441c/raw/'
    'MissingMigrants-Global-2019-10-08T09-47-14-subset.csv',
)
MAGNITUDE_COLUMN = os.environ.get('IM_MAGNITUDE_COLUMN', 'Total Dead and Missing')
COORDINATES_COLUMN = os.environ.get('IM_COORDINATES_COLUMN', 'Location Coordinates')
# Order in which the combined coordinates column stores its pair.
COORDINATES_ORDER = os.environ.get('IM_COORDINATES_ORDER', 'latlon')

WIDTH = float(os.environ.get('IM_WIDTH', 960))
HEIGHT = float(os.environ.get('IM_HEIGHT', 500))
MAX_RADIUS = float(os.environ.get('IM_MAX_RADIUS', 15))
GRATICULE_STEP = float(os.environ.get('IM_GRATICULE_STEP', 10))

REQUEST_TIMEOUT = 30
MAP_TITLE = os.environ.get('IM_MAP_TITLE', 'Missing migrants')


def display_path(path: Path) -> Path:
    """Path relative to the working directory when possible, for status lines."""
    try:
        return path.relative_to(Path.cwd())
    except ValueError:
        return path
