"""Immutable snapshot and draw-operation types shared by loaders and renderers."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Tuple, Union

Geometry = Mapping[str, Any]
PathCommand = Tuple[Any, ...]

LAYER_BACKGROUND = 'background'
LAYER_LAND = 'land'
LAYER_BORDERS = 'borders'
LAYER_SYMBOLS = 'symbols'

LAYER_ORDER = (LAYER_BACKGROUND, LAYER_LAND, LAYER_BORDERS, LAYER_SYMBOLS)


@dataclass(frozen=True)
class GeoFeature:
    geometry: Geometry
    properties: Mapping[str, Any] = field(default_factory=dict)


LandCollection = Tuple[GeoFeature, ...]
BorderMesh = Geometry


@dataclass(frozen=True)
class IncidentRecord:
    """A single incident, already normalized to (longitude, latitude) order."""

    longitude: float
    latitude: float
    magnitude: float
    identity: Any = None

    @property
    def coordinates(self) -> Tuple[float, float]:
        return self.longitude, self.latitude


@dataclass(frozen=True)
class PathOp:
    layer: str
    key: Union[int, str]
    commands: Tuple[PathCommand, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': 'path',
            'layer': self.layer,
            'key': self.key,
            'commands': [list(command) for command in self.commands],
        }


@dataclass(frozen=True)
class CircleOp:
    layer: str
    key: Union[int, str]
    cx: float
    cy: float
    r: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': 'circle',
            'layer': self.layer,
            'key': self.key,
            'cx': self.cx,
            'cy': self.cy,
            'r': self.r,
        }


DrawOp = Union[PathOp, CircleOp]
