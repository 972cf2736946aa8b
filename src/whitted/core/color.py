"""RGB color used for light transport accumulation.

Colors stay unclamped while contributions are summed and are clamped to the
unit range only when a final sample is produced.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


@dataclass(frozen=True)
class Color:
    """An RGB triple of floats.

    Attributes:
        r: Red channel.
        g: Green channel.
        b: Blue channel.
    """

    r: float
    g: float
    b: float

    @classmethod
    def black(cls) -> Color:
        """Return (0, 0, 0)."""
        return cls(0.0, 0.0, 0.0)

    @classmethod
    def gray(cls, value: float) -> Color:
        """Return a color with all three channels set to ``value``."""
        return cls(value, value, value)

    def __add__(self, other: Color) -> Color:
        if not isinstance(other, Color):
            return NotImplemented
        return Color(self.r + other.r, self.g + other.g, self.b + other.b)

    def __mul__(self, other: Color | float) -> Color:
        # Channel-wise product for colors, uniform scale for scalars
        if isinstance(other, Color):
            return Color(self.r * other.r, self.g * other.g, self.b * other.b)
        if isinstance(other, (int, float)):
            return Color(self.r * other, self.g * other, self.b * other)
        return NotImplemented

    __rmul__ = __mul__

    def __iter__(self) -> Iterator[float]:
        yield self.r
        yield self.g
        yield self.b

    def clamp_to_unit(self) -> Color:
        """Return a copy with every channel truncated to [0, 1]."""
        return Color(
            _clamp(self.r, 0.0, 1.0),
            _clamp(self.g, 0.0, 1.0),
            _clamp(self.b, 0.0, 1.0),
        )

    def to_tuple(self) -> tuple[float, float, float]:
        """Return the channels as a plain (r, g, b) tuple."""
        return (self.r, self.g, self.b)
