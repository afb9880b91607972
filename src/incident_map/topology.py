"""TopoJSON loading: land features and the interior border mesh."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple, Union

import requests

from . import config
from .errors import TopologyError
from .model import BorderMesh, GeoFeature, LandCollection

Position = List[float]
Source = Union[str, Path]


def _is_url(source: Source) -> bool:
    return isinstance(source, str) and source.startswith(('http://', 'https://'))


def read_topology(source: Source) -> Dict:
    if _is_url(source):
        response = requests.get(source, timeout=config.REQUEST_TIMEOUT)
        response.raise_for_status()
        topology = response.json()
    else:
        path = Path(source)
        if not path.exists():
            raise FileNotFoundError(f"Missing topology file: {path}")
        topology = json.loads(path.read_text(encoding='utf-8'))
    if topology.get('type') != 'Topology':
        raise TopologyError(f"Not a TopoJSON topology: {source}")
    return topology


def decode_arcs(topology: Dict) -> List[List[Position]]:
    """Absolute lon/lat positions for every arc, undoing quantization and delta encoding."""
    transform = topology.get('transform')
    arcs = topology.get('arcs') or []
    if not transform:
        return [[[float(x), float(y)] for x, y, *_ in arc] for arc in arcs]
    scale_x, scale_y = transform['scale']
    translate_x, translate_y = transform['translate']
    decoded = []
    for arc in arcs:
        points = []
        x = y = 0
        for dx, dy, *_ in arc:
            x += dx
            y += dy
            points.append([x * scale_x + translate_x, y * scale_y + translate_y])
        decoded.append(points)
    return decoded


def _arc_points(arcs: Sequence[List[Position]], index: int) -> List[Position]:
    arc_index = index if index >= 0 else ~index
    if arc_index >= len(arcs):
        raise TopologyError(f"Arc index {index} out of range ({len(arcs)} arcs)")
    points = arcs[arc_index]
    return list(reversed(points)) if index < 0 else list(points)


def _stitch(arcs: Sequence[List[Position]], indexes: Sequence[int]) -> List[Position]:
    line: List[Position] = []
    for index in indexes:
        points = _arc_points(arcs, index)
        # Consecutive arcs share their joining vertex.
        if line:
            points = points[1:]
        line.extend(points)
    return line


def _ring(arcs: Sequence[List[Position]], indexes: Sequence[int]) -> List[Position]:
    ring = _stitch(arcs, indexes)
    if ring and ring[0] != ring[-1]:
        ring.append(list(ring[0]))
    return ring


def _transform_point(topology: Dict, position: Sequence[float]) -> Position:
    transform = topology.get('transform')
    if not transform:
        return [float(position[0]), float(position[1])]
    scale_x, scale_y = transform['scale']
    translate_x, translate_y = transform['translate']
    return [position[0] * scale_x + translate_x, position[1] * scale_y + translate_y]


def _geometry(topology: Dict, arcs: Sequence[List[Position]], obj: Dict) -> Optional[Dict]:
    geom_type = obj.get('type')
    if geom_type is None:
        return None
    if geom_type == 'GeometryCollection':
        members = [_geometry(topology, arcs, child) for child in obj.get('geometries') or []]
        return {'type': 'GeometryCollection', 'geometries': [m for m in members if m]}
    if geom_type == 'Point':
        return {'type': 'Point', 'coordinates': _transform_point(topology, obj['coordinates'])}
    if geom_type == 'MultiPoint':
        return {
            'type': 'MultiPoint',
            'coordinates': [_transform_point(topology, p) for p in obj['coordinates']],
        }
    refs = obj.get('arcs') or []
    if geom_type == 'LineString':
        coordinates = _stitch(arcs, refs)
    elif geom_type == 'MultiLineString':
        coordinates = [_stitch(arcs, line) for line in refs]
    elif geom_type == 'Polygon':
        coordinates = [_ring(arcs, ring) for ring in refs]
    elif geom_type == 'MultiPolygon':
        coordinates = [[_ring(arcs, ring) for ring in polygon] for polygon in refs]
    else:
        raise TopologyError(f"Unsupported geometry type: {geom_type}")
    return {'type': geom_type, 'coordinates': coordinates}


def _object(topology: Dict, name: str) -> Dict:
    objects = topology.get('objects') or {}
    if name not in objects:
        raise TopologyError(f"Topology has no object '{name}'. Available: {', '.join(objects)}")
    return objects[name]


def feature(topology: Dict, name: str) -> LandCollection:
    """Features of a named object, in the order the topology lists them."""
    obj = _object(topology, name)
    arcs = decode_arcs(topology)
    members = obj.get('geometries') if obj.get('type') == 'GeometryCollection' else [obj]
    features = []
    for member in members or []:
        geometry = _geometry(topology, arcs, member)
        if geometry is None:
            continue
        features.append(GeoFeature(geometry=geometry, properties=dict(member.get('properties') or {})))
    return tuple(features)


def _collect_arc_owners(obj: Dict, owner: int, owners: Dict[int, List[int]]) -> None:
    refs = obj.get('arcs') or []
    geom_type = obj.get('type')
    if geom_type == 'LineString':
        groups: List[Sequence[int]] = [refs]
    elif geom_type in ('MultiLineString', 'Polygon'):
        groups = refs
    elif geom_type == 'MultiPolygon':
        groups = [ring for polygon in refs for ring in polygon]
    else:
        groups = []
    for group in groups:
        for index in group:
            owners.setdefault(index if index >= 0 else ~index, []).append(owner)


def mesh(topology: Dict, name: str, interior: bool = True) -> BorderMesh:
    """Merged MultiLineString of the object's arcs, each arc emitted once.

    With ``interior`` only arcs shared by two different geometries are kept,
    which drops coastlines and leaves the country-to-country boundaries.
    """
    obj = _object(topology, name)
    members = obj.get('geometries') if obj.get('type') == 'GeometryCollection' else [obj]
    owners: Dict[int, List[int]] = {}
    for owner, member in enumerate(members or []):
        _collect_arc_owners(member, owner, owners)
    arcs = decode_arcs(topology)
    lines = []
    for arc_index in sorted(owners):
        geometries = owners[arc_index]
        if interior and geometries[0] == geometries[-1]:
            continue
        lines.append(_arc_points(arcs, arc_index))
    return {'type': 'MultiLineString', 'coordinates': lines}


def load_world(
    source: Source = config.TOPOLOGY_SOURCE,
    land_object: str = config.LAND_OBJECT,
    border_object: str = config.BORDER_OBJECT,
) -> Tuple[LandCollection, BorderMesh]:
    """Land features and interior border mesh from one topology fetch."""
    topology = read_topology(source)
    return feature(topology, land_object), mesh(topology, border_object)
