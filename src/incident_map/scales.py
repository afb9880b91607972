"""Square-root radius scale: circle area grows linearly with magnitude."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable

from .model import IncidentRecord

DEFAULT_MAX_RADIUS = 15.0


@dataclass(frozen=True)
class RadiusScale:
    """Maps ``[0, domain_max]`` onto radii ``[0, range_max]`` via ``R * sqrt(v / M)``.

    Readers compare circle areas, not radii, so the square root keeps a 2x
    magnitude at 2x area. A non-positive ``domain_max`` gives radius 0 for
    every input. Inputs outside the domain are clamped to it.
    """

    domain_max: float
    range_max: float = DEFAULT_MAX_RADIUS

    @classmethod
    def from_records(
        cls,
        records: Iterable[IncidentRecord],
        range_max: float = DEFAULT_MAX_RADIUS,
    ) -> 'RadiusScale':
        magnitudes = [record.magnitude for record in records if math.isfinite(record.magnitude)]
        return cls(domain_max=max(magnitudes, default=0.0), range_max=range_max)

    @property
    def is_degenerate(self) -> bool:
        return not (math.isfinite(self.domain_max) and self.domain_max > 0)

    def radius(self, value: float) -> float:
        if self.is_degenerate or not math.isfinite(value) or value <= 0:
            return 0.0
        if value >= self.domain_max:
            return float(self.range_max)
        return self.range_max * math.sqrt(value / self.domain_max)

    def area(self, value: float) -> float:
        return math.pi * self.radius(value) ** 2

    def __call__(self, value: float) -> float:
        return self.radius(value)
