"""Tests for parameter snapshots."""

import pytest

from galaxy_cloud.params import (
    InvalidParameter,
    ParameterSet,
    color_to_hex,
    parse_color,
)


def test_defaults_match_original_app():
    params = ParameterSet()

    assert params.count == 100000
    assert params.branches == 12
    assert params.radius == 4.0
    assert color_to_hex(params.color_inside) == "#bc027f"
    assert color_to_hex(params.color_outside) == "#004ca3"
    assert params.validate() is params


def test_parse_color():
    assert parse_color("#ff0000") == (1.0, 0.0, 0.0)
    assert parse_color("#0f0") == (0.0, 1.0, 0.0)
    assert parse_color([0, 0, 1]) == (0.0, 0.0, 1.0)

    for bad in ("#12", "#gggggg", [1, 2], None):
        with pytest.raises(InvalidParameter):
            parse_color(bad)


def test_equality_and_replace():
    """Snapshots compare by value; replace returns a new snapshot."""
    a = ParameterSet(color_inside="#ff0000")
    b = ParameterSet(color_inside=(1.0, 0.0, 0.0))
    assert a == b

    c = a.replace(spin=-1.0)
    assert c != a
    assert a.spin == 1.25


def test_frozen():
    params = ParameterSet()
    with pytest.raises(AttributeError):
        params.count = 5


@pytest.mark.parametrize("changes,field", [
    ({"count": 0}, "count"),
    ({"count": 2.5}, "count"),
    ({"count": 1_000_001}, "count"),
    ({"randomness_power": 0.5}, "randomness_power"),
    ({"randomness_power": -2.0}, "randomness_power"),
    ({"branches": 0}, "branches"),
    ({"radius": 0}, "radius"),
    ({"size": 0}, "size"),
    ({"randomness": -1}, "randomness"),
    ({"spin": float("inf")}, "spin"),
    ({"color_outside": (0, 0, 2)}, "color_outside"),
])
def test_validate_reports_field(changes, field):
    with pytest.raises(InvalidParameter) as excinfo:
        ParameterSet(**changes).validate()
    assert excinfo.value.field == field


def test_dict_round_trip_and_aliases():
    params = ParameterSet(count=500, spin=-2.0)
    assert ParameterSet.from_dict(params.to_dict()) == params

    legacy = ParameterSet.from_dict({
        "count": 1000.0,
        "randomnessPower": 3,
        "colorIn": "#ffffff",
        "colorOut": "#000000",
    })
    assert legacy.count == 1000
    assert isinstance(legacy.count, int)
    assert legacy.randomness_power == 3
    assert legacy.color_inside == (1.0, 1.0, 1.0)

    with pytest.raises(InvalidParameter):
        ParameterSet.from_dict({"mass": 1.0})


def test_clamped_to_control_ranges():
    params = ParameterSet(count=5, branches=50, spin=-9.0, randomness_power=0.5).clamped()

    assert params.count == 100
    assert params.branches == 20
    assert params.spin == -5.0
    assert params.randomness_power == 1.0


def test_clamped_snapshot_passes_validation():
    """Out-of-range control values become a snapshot the generator accepts."""
    raw = ParameterSet(count=2_000_000, branches=1, randomness_power=-3.0, color_inside="#ffffff")
    with pytest.raises(InvalidParameter):
        raw.validate()

    params = raw.clamped()
    assert params.validate() is params
    assert params.count == 1_000_000
    assert params.branches == 2
    assert params.color_inside == (1.0, 1.0, 1.0)
