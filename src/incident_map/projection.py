"""Natural Earth projection from longitude/latitude (degrees) to screen pixels."""
from __future__ import annotations

import math
from typing import List, Optional, Sequence, Tuple

from pyproj import Proj

from .errors import InvalidCoordinateError

Point = Tuple[float, float]

# Unit-sphere Natural Earth I; outputs are in radians of the unit sphere.
_UNIT_PROJ = Proj(proj='natearth', R=1)
_SPHERE_HALF_WIDTH = _UNIT_PROJ(180.0, 0.0)[0]
_SPHERE_HALF_HEIGHT = _UNIT_PROJ(0.0, 90.0)[1]


def is_valid_coordinate(longitude: float, latitude: float) -> bool:
    try:
        lon = float(longitude)
        lat = float(latitude)
    except (TypeError, ValueError):
        return False
    if not (math.isfinite(lon) and math.isfinite(lat)):
        return False
    return -180.0 <= lon <= 180.0 and -90.0 <= lat <= 90.0


def validate_coordinates(longitude: float, latitude: float) -> Point:
    """Return the pair as floats or raise InvalidCoordinateError."""
    if not is_valid_coordinate(longitude, latitude):
        raise InvalidCoordinateError(f"Invalid coordinates (lon={longitude!r}, lat={latitude!r})")
    return float(longitude), float(latitude)


class GeoProjector:
    """Natural Earth I fitted to a viewport.

    The projection is a compromise world projection (neither conformal nor
    equal-area). With ``scale=None`` the whole sphere is fitted inside
    ``width`` x ``height``; ``center`` lands on the middle of the viewport.
    Screen y grows downward. Build one instance per render pass and hand it
    to every layer so land, borders and symbols line up exactly.
    """

    def __init__(
        self,
        width: float = 960.0,
        height: float = 500.0,
        center: Point = (0.0, 0.0),
        scale: Optional[float] = None,
    ) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"Viewport must be positive, got {width}x{height}")
        center_lon, center_lat = validate_coordinates(*center)
        self.width = float(width)
        self.height = float(height)
        self.center = (center_lon, center_lat)
        if scale is None:
            scale = min(
                self.width / (2 * _SPHERE_HALF_WIDTH),
                self.height / (2 * _SPHERE_HALF_HEIGHT),
            )
        self.scale = float(scale)
        self._proj = _UNIT_PROJ
        center_x, center_y = self._proj(center_lon, center_lat)
        self._tx = self.width / 2 - self.scale * center_x
        self._ty = self.height / 2 + self.scale * center_y

    def __repr__(self) -> str:
        return (
            f"GeoProjector(width={self.width}, height={self.height}, "
            f"center={self.center}, scale={self.scale})"
        )

    def project(self, longitude: float, latitude: float) -> Optional[Point]:
        """Screen position of one point, or None when the input is invalid."""
        if not is_valid_coordinate(longitude, latitude):
            return None
        x, y = self._proj(float(longitude), float(latitude))
        return self._to_screen(x, y)

    def project_many(self, points: Sequence[Sequence[float]]) -> List[Optional[Point]]:
        """Project a run of (lon, lat) pairs in one call; invalid pairs map to None."""
        results: List[Optional[Point]] = [None] * len(points)
        positions = []
        lons = []
        lats = []
        for idx, point in enumerate(points):
            if len(point) < 2 or not is_valid_coordinate(point[0], point[1]):
                continue
            positions.append(idx)
            lons.append(float(point[0]))
            lats.append(float(point[1]))
        if not positions:
            return results
        xs, ys = self._proj(lons, lats)
        for idx, x, y in zip(positions, xs, ys):
            results[idx] = self._to_screen(x, y)
        return results

    def _to_screen(self, x: float, y: float) -> Optional[Point]:
        if not (math.isfinite(x) and math.isfinite(y)):
            return None
        return self._tx + self.scale * x, self._ty - self.scale * y
