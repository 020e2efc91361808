"""Parameter snapshots for galaxy generation."""

import math
from dataclasses import dataclass, asdict, fields, replace as _replace
from typing import Any, Dict, Sequence, Tuple, Union

Color = Tuple[float, float, float]
ColorLike = Union[str, Sequence[float]]


class InvalidParameter(ValueError):
    """Raised when a parameter set violates a domain invariant."""

    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field


# Slider domains of the control panel: (min, max, step)
PARAMETER_RANGES = {
    "count": (100, 1_000_000, 100),
    "size": (0.001, 0.1, 0.001),
    "radius": (0.01, 20.0, 0.01),
    "branches": (2, 20, 1),
    "spin": (-5.0, 5.0, 0.001),
    "randomness": (0.0, 2.0, 0.001),
    "randomness_power": (1.0, 10.0, 0.001),
}

# Keys used by the original web front end
_ALIASES = {
    "randomnessPower": "randomness_power",
    "colorIn": "color_inside",
    "colorOut": "color_outside",
    "colorInside": "color_inside",
    "colorOutside": "color_outside",
}


def parse_color(value: ColorLike) -> Color:
    """Convert a hex string or an RGB sequence to a float triple in [0, 1].

    Args:
        value: '#RRGGBB', '#RGB' or a sequence of three floats

    Returns:
        (r, g, b) tuple of floats

    Raises:
        InvalidParameter: If the value cannot be interpreted as a color
    """
    if isinstance(value, str):
        text = value.strip().lstrip('#')
        if len(text) == 3:
            text = ''.join(c * 2 for c in text)
        if len(text) != 6:
            raise InvalidParameter("color", f"cannot parse {value!r}")
        try:
            return tuple(int(text[i:i + 2], 16) / 255.0 for i in (0, 2, 4))
        except ValueError:
            raise InvalidParameter("color", f"cannot parse {value!r}") from None

    try:
        channels = tuple(float(c) for c in value)
    except (TypeError, ValueError):
        raise InvalidParameter("color", f"cannot parse {value!r}") from None
    if len(channels) != 3:
        raise InvalidParameter("color", f"expected 3 channels, got {len(channels)}")
    return channels


def color_to_hex(color: Color) -> str:
    """Format a float RGB triple as '#rrggbb'."""
    return '#' + ''.join(f"{int(round(c * 255)):02x}" for c in color)


@dataclass(frozen=True)
class ParameterSet:
    """Immutable inputs of one generation pass."""
    count: int = 100000
    size: float = 0.001
    radius: float = 4.0
    branches: int = 12
    spin: float = 1.25
    randomness: float = 0.25
    randomness_power: float = 4.0
    color_inside: Color = (188 / 255.0, 2 / 255.0, 127 / 255.0)
    color_outside: Color = (0.0, 76 / 255.0, 163 / 255.0)

    def __post_init__(self):
        # Normalize colors so equality compares float triples
        object.__setattr__(self, 'color_inside', parse_color(self.color_inside))
        object.__setattr__(self, 'color_outside', parse_color(self.color_outside))

    def validate(self) -> "ParameterSet":
        """Check the invariants the generator relies on.

        Returns:
            self, so calls can be chained

        Raises:
            InvalidParameter: On the first violated invariant
        """
        for name in ("count", "branches", "size", "radius", "spin", "randomness", "randomness_power"):
            value = getattr(self, name)
            if isinstance(value, (bool, str)):
                raise InvalidParameter(name, f"must be a number, got {value!r}")
            try:
                finite = math.isfinite(value)
            except TypeError:
                raise InvalidParameter(name, f"must be a number, got {value!r}") from None
            if not finite:
                raise InvalidParameter(name, "must be finite")
            if name in ("count", "branches") and not float(value).is_integer():
                raise InvalidParameter(name, f"must be an integer, got {value!r}")

        if self.count <= 0:
            raise InvalidParameter("count", f"must be positive, got {self.count}")
        max_count = PARAMETER_RANGES["count"][1]
        if self.count > max_count:
            raise InvalidParameter("count", f"must be at most {max_count}, got {self.count}")
        if self.branches < 1:
            raise InvalidParameter("branches", f"must be at least 1, got {self.branches}")
        if self.radius <= 0:
            raise InvalidParameter("radius", f"must be positive, got {self.radius}")
        if self.size <= 0:
            raise InvalidParameter("size", f"must be positive, got {self.size}")
        if self.randomness < 0:
            raise InvalidParameter("randomness", f"must be non-negative, got {self.randomness}")
        # Negative powers make u ** power unbounded near u = 0
        if self.randomness_power < 1:
            raise InvalidParameter(
                "randomness_power", f"must be at least 1, got {self.randomness_power}"
            )

        for name in ("color_inside", "color_outside"):
            for channel in getattr(self, name):
                if not (0.0 <= channel <= 1.0):
                    raise InvalidParameter(name, f"channels must lie in [0, 1], got {channel}")
        return self

    def replace(self, **changes) -> "ParameterSet":
        """Return a new snapshot with some fields changed."""
        return _replace(self, **changes)

    def clamped(self) -> "ParameterSet":
        """Return a copy with numeric fields clamped to the control-panel ranges."""
        changes = {}
        for name, (low, high, _step) in PARAMETER_RANGES.items():
            value = min(max(getattr(self, name), low), high)
            if name in ("count", "branches"):
                value = int(value)
            changes[name] = value
        return self.replace(**changes)

    def to_dict(self) -> Dict[str, Any]:
        """Plain-dict form with hex colors (JSON/YAML friendly)."""
        data = asdict(self)
        data['color_inside'] = color_to_hex(self.color_inside)
        data['color_outside'] = color_to_hex(self.color_outside)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ParameterSet":
        """Build a snapshot from a dict, accepting the original camelCase keys.

        Raises:
            InvalidParameter: On unknown keys
        """
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in data.items():
            name = _ALIASES.get(key, key)
            if name not in known:
                raise InvalidParameter(key, "unknown parameter")
            kwargs[name] = value
        for name in ("count", "branches"):
            if name in kwargs and isinstance(kwargs[name], float) and kwargs[name].is_integer():
                kwargs[name] = int(kwargs[name])
        return cls(**kwargs)
