"""Exceptions raised at the data boundary and by the render orchestrator."""
from __future__ import annotations


class MissingDataError(RuntimeError):
    """Raised by the orchestrator when a snapshot is absent at render time."""


class InvalidCoordinateError(ValueError):
    """Longitude/latitude pair that is out of range or not finite."""


class TopologyError(ValueError):
    """TopoJSON document that cannot be decoded."""
