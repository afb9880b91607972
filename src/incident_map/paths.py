"""Turn GeoJSON-shaped geometries into move/line/close path commands."""
from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple

from .model import Geometry, PathCommand
from .projection import GeoProjector

Ring = Sequence[Sequence[float]]


def _ring_commands(ring: Ring, projector: GeoProjector) -> List[PathCommand]:
    points = [point for point in projector.project_many(ring) if point is not None]
    # GeoJSON rings repeat the first vertex at the end; Z closes it instead.
    if len(points) > 1 and points[0] == points[-1]:
        points = points[:-1]
    if len(points) < 3:
        return []
    commands: List[PathCommand] = [('M', points[0][0], points[0][1])]
    commands.extend(('L', x, y) for x, y in points[1:])
    commands.append(('Z',))
    return commands


def _line_commands(line: Ring, projector: GeoProjector) -> List[PathCommand]:
    commands: List[PathCommand] = []
    run: List[Tuple[float, float]] = []

    def _flush() -> None:
        if len(run) >= 2:
            commands.append(('M', run[0][0], run[0][1]))
            commands.extend(('L', x, y) for x, y in run[1:])
        run.clear()

    # A skipped vertex breaks the line rather than bridging the gap.
    for point in projector.project_many(line):
        if point is None:
            _flush()
            continue
        run.append(point)
    _flush()
    return commands


def _polygon_commands(rings: Iterable[Ring], projector: GeoProjector) -> List[PathCommand]:
    commands: List[PathCommand] = []
    for ring in rings:
        commands.extend(_ring_commands(ring, projector))
    return commands


def build_path(geometry: Geometry, projector: GeoProjector) -> Tuple[PathCommand, ...]:
    """Path commands for a geometry, vertices projected through ``projector``.

    Handles Polygon, MultiPolygon, LineString, MultiLineString (border meshes)
    and GeometryCollection. Unknown or empty geometries yield an empty path.
    """
    if not geometry:
        return ()
    geom_type = geometry.get('type')
    coords = geometry.get('coordinates') or []
    commands: List[PathCommand] = []
    if geom_type == 'Polygon':
        commands = _polygon_commands(coords, projector)
    elif geom_type == 'MultiPolygon':
        for polygon in coords:
            commands.extend(_polygon_commands(polygon, projector))
    elif geom_type == 'LineString':
        commands = _line_commands(coords, projector)
    elif geom_type == 'MultiLineString':
        for line in coords:
            commands.extend(_line_commands(line, projector))
    elif geom_type == 'GeometryCollection':
        for member in geometry.get('geometries') or []:
            commands.extend(build_path(member, projector))
    return tuple(commands)


def fmt(value: float, precision: int = 2) -> str:
    text = f"{value:.{precision}f}"
    if '.' in text:
        text = text.rstrip('0').rstrip('.')
    if text == '-0':
        return '0'
    return text


def format_path(commands: Sequence[PathCommand], precision: int = 2) -> str:
    """SVG ``d`` attribute for a command sequence."""
    parts = []
    for command in commands:
        if command[0] == 'Z':
            parts.append('Z')
        else:
            parts.append(f"{command[0]}{fmt(command[1], precision)},{fmt(command[2], precision)}")
    return ''.join(parts)
