import math

import pytest

from incident_map.model import IncidentRecord
from incident_map.scales import RadiusScale


def test_radius_matches_reference_scenario():
    scale = RadiusScale(domain_max=100, range_max=15)

    assert scale.radius(25) == pytest.approx(7.5)


def test_radius_endpoints_are_exact():
    scale = RadiusScale(domain_max=37.0, range_max=15.0)

    assert scale.radius(0) == 0.0
    assert scale.radius(37.0) == 15.0


def test_radius_is_monotonic_over_domain():
    scale = RadiusScale(domain_max=250.0)
    values = [i * 2.5 for i in range(101)]

    radii = [scale.radius(v) for v in values]

    assert all(a <= b for a, b in zip(radii, radii[1:]))


def test_area_is_linear_in_magnitude():
    scale = RadiusScale(domain_max=80.0, range_max=12.0)
    expected = math.pi * 12.0 ** 2 / 80.0

    for value in [0.5, 1, 3, 10, 42.5, 80]:
        assert math.pi * scale.radius(value) ** 2 / value == pytest.approx(expected, rel=1e-12)
        assert scale.area(value) / value == pytest.approx(expected, rel=1e-12)


def test_zero_domain_gives_zero_radius_without_error():
    scale = RadiusScale(domain_max=0)

    assert scale.is_degenerate
    assert [scale.radius(v) for v in (0, 1, 1000)] == [0.0, 0.0, 0.0]


def test_out_of_domain_values_are_clamped():
    scale = RadiusScale(domain_max=10.0, range_max=15.0)

    assert scale.radius(-3) == 0.0
    assert scale.radius(40) == 15.0
    assert scale.radius(float('nan')) == 0.0


def test_from_records_uses_snapshot_maximum():
    records = [
        IncidentRecord(0.0, 0.0, 4.0),
        IncidentRecord(10.0, 10.0, 64.0),
        IncidentRecord(20.0, 20.0, 16.0),
    ]

    scale = RadiusScale.from_records(records, range_max=8.0)

    assert scale.domain_max == 64.0
    assert scale(16.0) == pytest.approx(4.0)


def test_from_empty_snapshot_is_degenerate():
    scale = RadiusScale.from_records([])

    assert scale.domain_max == 0.0
    assert scale.radius(5) == 0.0
