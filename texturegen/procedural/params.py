"""
Texture parameters: palette, pattern family, roughness, contrast, material.
One TextureParams drives exactly one rendered buffer.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any

RGB = tuple[int, int, int]


class Pattern(str, Enum):
    """Closed set of pattern families. Anything unrecognized renders as RANDOM."""

    NOISE = "noise"
    GRID = "grid"
    ORGANIC = "organic"
    GEOMETRIC = "geometric"
    RANDOM = "random"

    @classmethod
    def parse(cls, name: Any) -> Pattern:
        try:
            return cls(name)
        except ValueError:
            return cls.RANDOM


def hex_to_rgb(hex_color: str) -> RGB:
    """Convert '#RRGGBB' or 'RRGGBB' to (r, g, b). Handles shorthand '#RGB' too."""
    h = hex_color.strip().lstrip("#")
    if len(h) == 3:
        h = "".join(c * 2 for c in h)
    if len(h) != 6:
        raise ValueError(f"Invalid hex color: {hex_color!r}")
    try:
        return int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16)
    except ValueError:
        raise ValueError(f"Invalid hex color: {hex_color!r}") from None


def rgb_to_hex(rgb: RGB) -> str:
    return "#{:02X}{:02X}{:02X}".format(*rgb)


def _parse_color(value: Any) -> RGB:
    if isinstance(value, str):
        return hex_to_rgb(value)
    if isinstance(value, (list, tuple)) and len(value) == 3:
        try:
            return tuple(max(0, min(255, int(c))) for c in value)  # type: ignore[return-value]
        except (TypeError, ValueError):
            pass
    raise ValueError(f"Invalid color: {value!r}")


def _parse_number(data: dict[str, Any], key: str) -> float:
    value = data.get(key)
    if value is None or isinstance(value, bool):
        raise ValueError(f"Missing or invalid {key!r}: {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"Missing or invalid {key!r}: {value!r}") from None
    if not math.isfinite(number):
        raise ValueError(f"Non-finite {key!r}: {value!r}")
    return number


@dataclass(frozen=True)
class TextureParams:
    """Result of prompt analysis. colors[0] is the base fill; roughness is not clamped here."""

    colors: tuple[RGB, ...]
    pattern: str
    roughness: float
    contrast: float
    material: str = "abstract"

    def __post_init__(self) -> None:
        if not self.colors:
            raise ValueError("TextureParams.colors must not be empty")

    @property
    def pattern_kind(self) -> Pattern:
        return Pattern.parse(self.pattern)

    @classmethod
    def from_dict(cls, data: Any) -> TextureParams:
        """
        Build from an advisory-style payload:
        {"colors": ["#RRGGBB", ...], "pattern": str, "roughness": num, "contrast": num, "type": str}.
        Raises ValueError when a required field is missing or unusable.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Expected an object, got {type(data).__name__}")
        raw_colors = data.get("colors")
        if not isinstance(raw_colors, (list, tuple)) or not raw_colors:
            raise ValueError(f"Missing or empty 'colors': {raw_colors!r}")
        colors = tuple(_parse_color(c) for c in raw_colors)
        pattern = data.get("pattern")
        if not isinstance(pattern, str) or not pattern.strip():
            raise ValueError(f"Missing or invalid 'pattern': {pattern!r}")
        material = data.get("type", data.get("material")) or "abstract"
        return cls(
            colors=colors,
            pattern=pattern.strip().lower(),
            roughness=_parse_number(data, "roughness"),
            contrast=_parse_number(data, "contrast"),
            material=str(material),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize for logging and display (same shape as from_dict accepts)."""
        return {
            "colors": [rgb_to_hex(c) for c in self.colors],
            "pattern": self.pattern,
            "roughness": self.roughness,
            "contrast": self.contrast,
            "type": self.material,
        }
