"""Layer renderers producing ordered draw operations, plus the fixed composition order."""
from __future__ import annotations

import math
from typing import Dict, List, Sequence

from .model import (
    LAYER_BACKGROUND,
    LAYER_BORDERS,
    LAYER_LAND,
    LAYER_SYMBOLS,
    BorderMesh,
    CircleOp,
    DrawOp,
    GeoFeature,
    IncidentRecord,
    PathOp,
)
from .paths import build_path
from .projection import GeoProjector
from .scales import RadiusScale

# Meridians stop short of the poles except every 90 degrees.
GRATICULE_MINOR_EXTENT = 80.0
GRATICULE_PRECISION = 2.5


def _frange(start: float, stop: float, step: float) -> List[float]:
    # Never steps past ``stop`` when ``step`` does not divide the range.
    count = math.floor((stop - start) / step + 1e-9)
    return [start + idx * step for idx in range(count + 1)]


def sphere_outline() -> Dict:
    east = [(180.0, lat) for lat in _frange(-90.0, 90.0, GRATICULE_PRECISION)]
    west = [(-180.0, lat) for lat in _frange(90.0, -90.0, -GRATICULE_PRECISION)]
    return {'type': 'Polygon', 'coordinates': [east + west + [east[0]]]}


def graticule(step: float = 10.0) -> Dict:
    """Meridians and parallels every ``step`` degrees as a MultiLineString."""
    if not step > 0:
        raise ValueError(f"Graticule step must be positive, got {step!r}")
    lines = []
    for lon in _frange(-180.0, 180.0, step):
        extent = 90.0 if lon % 90 == 0 else GRATICULE_MINOR_EXTENT
        lines.append([(lon, lat) for lat in _frange(-extent, extent, GRATICULE_PRECISION)])
    for lat in _frange(-GRATICULE_MINOR_EXTENT, GRATICULE_MINOR_EXTENT, step):
        lines.append([(lon, lat) for lon in _frange(-180.0, 180.0, GRATICULE_PRECISION)])
    return {'type': 'MultiLineString', 'coordinates': lines}


def render_background(projector: GeoProjector, step: float = 10.0) -> List[DrawOp]:
    return [
        PathOp(LAYER_BACKGROUND, 'sphere', build_path(sphere_outline(), projector)),
        PathOp(LAYER_BACKGROUND, 'graticule', build_path(graticule(step), projector)),
    ]


def render_land(land: Sequence[GeoFeature], projector: GeoProjector) -> List[DrawOp]:
    """One path per feature, keyed by feature index; undrawable features are left out."""
    ops: List[DrawOp] = []
    for idx, feature in enumerate(land):
        commands = build_path(feature.geometry, projector)
        if commands:
            ops.append(PathOp(LAYER_LAND, idx, commands))
    return ops


def render_borders(mesh: BorderMesh, projector: GeoProjector) -> List[DrawOp]:
    commands = build_path(mesh, projector)
    if not commands:
        return []
    return [PathOp(LAYER_BORDERS, 0, commands)]


def render_symbols(
    records: Sequence[IncidentRecord],
    projector: GeoProjector,
    scale: RadiusScale,
) -> List[DrawOp]:
    """One circle per record, keyed by record index; unprojectable records are left out."""
    ops: List[DrawOp] = []
    for idx, record in enumerate(records):
        center = projector.project(record.longitude, record.latitude)
        if center is None:
            continue
        ops.append(CircleOp(LAYER_SYMBOLS, idx, center[0], center[1], scale.radius(record.magnitude)))
    return ops


def compose(
    background: Sequence[DrawOp],
    land: Sequence[DrawOp],
    borders: Sequence[DrawOp],
    symbols: Sequence[DrawOp],
) -> List[DrawOp]:
    """Concatenate layers bottom to top: background, land, borders, symbols."""
    return [*background, *land, *borders, *symbols]


def render_map(
    land: Sequence[GeoFeature],
    borders: BorderMesh,
    records: Sequence[IncidentRecord],
    projector: GeoProjector,
    scale: RadiusScale,
    graticule_step: float = 10.0,
) -> List[DrawOp]:
    return compose(
        render_background(projector, graticule_step),
        render_land(land, projector),
        render_borders(borders, projector),
        render_symbols(records, projector, scale),
    )
