"""Incident CSV loading with coordinates normalized to (longitude, latitude)."""
from __future__ import annotations

import io
import math
from pathlib import Path
from typing import Optional, Sequence, Tuple, Union

import pandas as pd
import requests

from . import config
from .errors import InvalidCoordinateError
from .model import IncidentRecord
from .projection import validate_coordinates

Source = Union[str, Path]

COORDINATE_ORDERS = ('latlon', 'lonlat')
LONGITUDE_CANDIDATES = ['longitude', 'lon', 'lng', 'Longitude']
LATITUDE_CANDIDATES = ['latitude', 'lat', 'Latitude']


def read_incident_frame(source: Source) -> pd.DataFrame:
    if isinstance(source, str) and source.startswith(('http://', 'https://')):
        response = requests.get(source, timeout=config.REQUEST_TIMEOUT)
        response.raise_for_status()
        return pd.read_csv(io.StringIO(response.text))
    path = Path(source)
    if not path.exists():
        raise FileNotFoundError(f"Missing incident file: {path}")
    return pd.read_csv(path)


def parse_coordinates(value: object, order: str = 'latlon') -> Tuple[float, float]:
    """Split a combined ``"a, b"`` cell and return it as (longitude, latitude).

    ``order`` names how the cell stores the pair; it is never guessed from the
    values, since a swapped pair is usually still in range.
    """
    if order not in COORDINATE_ORDERS:
        raise ValueError(f"Unknown coordinate order '{order}'. Use one of {COORDINATE_ORDERS}")
    if not isinstance(value, str):
        raise InvalidCoordinateError(f"Coordinates cell is not text: {value!r}")
    parts = [part.strip() for part in value.split(',')]
    if len(parts) != 2:
        raise InvalidCoordinateError(f"Expected two comma-separated numbers, got {value!r}")
    try:
        first, second = (float(part) for part in parts)
    except ValueError as exc:
        raise InvalidCoordinateError(f"Non-numeric coordinates {value!r}") from exc
    if order == 'latlon':
        return validate_coordinates(second, first)
    return validate_coordinates(first, second)


def _first_present(df: pd.DataFrame, candidates: Sequence[str]) -> Optional[str]:
    for candidate in candidates:
        if candidate in df.columns:
            return candidate
    return None


def _coordinate_pairs(
    df: pd.DataFrame,
    coordinates_column: Optional[str],
    order: str,
) -> list:
    if coordinates_column and coordinates_column in df.columns:
        pairs = []
        for value in df[coordinates_column]:
            try:
                pairs.append(parse_coordinates(value, order))
            except InvalidCoordinateError as exc:
                pairs.append(exc)
        return pairs
    lon_col = _first_present(df, LONGITUDE_CANDIDATES)
    lat_col = _first_present(df, LATITUDE_CANDIDATES)
    if lon_col is None or lat_col is None:
        raise ValueError('Missing coordinate columns: need a combined coordinates column or longitude/latitude')
    lons = pd.to_numeric(df[lon_col], errors='coerce')
    lats = pd.to_numeric(df[lat_col], errors='coerce')
    pairs = []
    for lon, lat in zip(lons, lats):
        try:
            pairs.append(validate_coordinates(lon, lat))
        except InvalidCoordinateError as exc:
            pairs.append(exc)
    return pairs


def records_from_frame(
    df: pd.DataFrame,
    magnitude_column: str = config.MAGNITUDE_COLUMN,
    coordinates_column: Optional[str] = config.COORDINATES_COLUMN,
    order: str = config.COORDINATES_ORDER,
    id_column: Optional[str] = None,
) -> Tuple[IncidentRecord, ...]:
    """Validated records in file order; rows with bad coordinates or magnitude are skipped."""
    if magnitude_column not in df.columns:
        raise ValueError(f"Incident data missing magnitude column '{magnitude_column}'")
    if id_column and id_column not in df.columns:
        raise ValueError(f"Incident data missing id column '{id_column}'")
    magnitudes = pd.to_numeric(df[magnitude_column], errors='coerce')
    pairs = _coordinate_pairs(df, coordinates_column, order)
    identities = df[id_column].tolist() if id_column else list(range(len(df)))

    records = []
    skipped = 0
    for identity, pair, magnitude in zip(identities, pairs, magnitudes):
        if isinstance(pair, InvalidCoordinateError):
            print(f"⚠️  Skipping incident {identity}: {pair}")
            skipped += 1
            continue
        if pd.isna(magnitude) or not math.isfinite(magnitude) or magnitude < 0:
            print(f"⚠️  Skipping incident {identity}: invalid magnitude {magnitude!r}")
            skipped += 1
            continue
        lon, lat = pair
        records.append(IncidentRecord(longitude=lon, latitude=lat, magnitude=float(magnitude), identity=identity))
    if skipped:
        print(f"⚠️  Skipped {skipped} of {len(df)} incident rows")
    return tuple(records)


def load_incidents(
    source: Source = config.INCIDENTS_SOURCE,
    magnitude_column: str = config.MAGNITUDE_COLUMN,
    coordinates_column: Optional[str] = config.COORDINATES_COLUMN,
    order: str = config.COORDINATES_ORDER,
    id_column: Optional[str] = None,
) -> Tuple[IncidentRecord, ...]:
    df = read_incident_frame(source)
    return records_from_frame(df, magnitude_column, coordinates_column, order, id_column)
