"""Vector and point algebra for the scalar ray tracing path.

This module provides the two 3-component value types used throughout the
host-side renderer:

- Vector3: a displacement or direction. Has no fixed location.
- Point3: a position in world space.

The types are deliberately kept distinct so that nonsensical operations fail
loudly instead of producing silently wrong geometry:

    Point3 - Point3  -> Vector3
    Point3 + Vector3 -> Point3
    Point3 - Vector3 -> Point3
    Vector3 +/- Vector3 -> Vector3

Points never take part in dot or cross products.

Precondition violations (zero-length normalize, division by a zero scalar,
NaN operands to dot/cross, out-of-range component index) raise immediately.

Example:
    >>> from whitted.core.vector import Point3, Vector3, cross, normalize
    >>> p = Point3(1.0, 2.0, 3.0)
    >>> q = p + Vector3(0.0, 0.0, 1.0)
    >>> q - p
    Vector3(x=0.0, y=0.0, z=1.0)
    >>> cross(Vector3(1.0, 0.0, 0.0), Vector3(0.0, 1.0, 0.0))
    Vector3(x=0.0, y=0.0, z=1.0)
"""

from __future__ import annotations

import math
from collections.abc import Iterator
from dataclasses import dataclass


def _check_scalar_divisor(scalar: float) -> None:
    """Raise if a scalar divisor is zero."""
    if scalar == 0.0:
        raise ZeroDivisionError("Cannot divide a vector or point by zero")


def _component(obj: Vector3 | Point3, index: int) -> float:
    if index == 0:
        return obj.x
    if index == 1:
        return obj.y
    if index == 2:
        return obj.z
    raise IndexError(f"Component index must be 0, 1 or 2, got {index}")


# =============================================================================
# Vector3
# =============================================================================


@dataclass(frozen=True)
class Vector3:
    """A 3D displacement or direction.

    Attributes:
        x: The x component.
        y: The y component.
        z: The z component.
    """

    x: float
    y: float
    z: float

    @classmethod
    def zeros(cls) -> Vector3:
        """Return the zero vector."""
        return cls(0.0, 0.0, 0.0)

    def __add__(self, other: Vector3) -> Vector3:
        if not isinstance(other, Vector3):
            return NotImplemented
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector3) -> Vector3:
        if not isinstance(other, Vector3):
            return NotImplemented
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> Vector3:
        return Vector3(-self.x, -self.y, -self.z)

    def __mul__(self, scalar: float) -> Vector3:
        if not isinstance(scalar, (int, float)):
            return NotImplemented
        return Vector3(self.x * scalar, self.y * scalar, self.z * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Vector3:
        if not isinstance(scalar, (int, float)):
            return NotImplemented
        _check_scalar_divisor(scalar)
        return Vector3(self.x / scalar, self.y / scalar, self.z / scalar)

    def __getitem__(self, index: int) -> float:
        return _component(self, index)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def scale(self, scalar: float) -> Vector3:
        """Return the vector scaled by ``scalar``."""
        return self * scalar

    def length_squared(self) -> float:
        """Return the squared Euclidean length.

        Cheaper than length() when only comparing magnitudes.
        """
        return self.x * self.x + self.y * self.y + self.z * self.z

    def length(self) -> float:
        """Return the Euclidean length."""
        return math.sqrt(self.length_squared())

    def has_nans(self) -> bool:
        """Return True if any component is NaN."""
        return math.isnan(self.x) or math.isnan(self.y) or math.isnan(self.z)

    def to_tuple(self) -> tuple[float, float, float]:
        """Return the components as a plain tuple."""
        return (self.x, self.y, self.z)


# =============================================================================
# Point3
# =============================================================================


@dataclass(frozen=True)
class Point3:
    """A position in 3D space.

    Attributes:
        x: The x coordinate.
        y: The y coordinate.
        z: The z coordinate.
    """

    x: float
    y: float
    z: float

    @classmethod
    def origin(cls) -> Point3:
        """Return the world origin."""
        return cls(0.0, 0.0, 0.0)

    def __add__(self, other: Vector3) -> Point3:
        if isinstance(other, Point3):
            raise TypeError("Cannot add two points; add a Vector3 displacement instead")
        if not isinstance(other, Vector3):
            return NotImplemented
        return Point3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Point3 | Vector3) -> Vector3 | Point3:
        if isinstance(other, Point3):
            return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)
        if isinstance(other, Vector3):
            return Point3(self.x - other.x, self.y - other.y, self.z - other.z)
        return NotImplemented

    def __neg__(self) -> Point3:
        return Point3(-self.x, -self.y, -self.z)

    def __mul__(self, scalar: float) -> Point3:
        if not isinstance(scalar, (int, float)):
            return NotImplemented
        return Point3(self.x * scalar, self.y * scalar, self.z * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Point3:
        if not isinstance(scalar, (int, float)):
            return NotImplemented
        _check_scalar_divisor(scalar)
        return Point3(self.x / scalar, self.y / scalar, self.z / scalar)

    def __getitem__(self, index: int) -> float:
        return _component(self, index)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def has_nans(self) -> bool:
        """Return True if any coordinate is NaN."""
        return math.isnan(self.x) or math.isnan(self.y) or math.isnan(self.z)

    def to_tuple(self) -> tuple[float, float, float]:
        """Return the coordinates as a plain tuple."""
        return (self.x, self.y, self.z)


# =============================================================================
# Vector Utility Functions
# =============================================================================


def _check_vector_operands(a: Vector3, b: Vector3, op: str) -> None:
    if not isinstance(a, Vector3) or not isinstance(b, Vector3):
        raise TypeError(f"{op} is only defined for Vector3 operands")
    if a.has_nans() or b.has_nans():
        raise ValueError(f"{op} called with NaN operand: {a!r}, {b!r}")


def dot(a: Vector3, b: Vector3) -> float:
    """Compute the dot product of two vectors.

    Args:
        a: First vector.
        b: Second vector.

    Returns:
        The dot product a . b.

    Raises:
        ValueError: If either operand has a NaN component.
        TypeError: If either operand is not a Vector3.
    """
    _check_vector_operands(a, b, "dot")
    return a.x * b.x + a.y * b.y + a.z * b.z


def cross(a: Vector3, b: Vector3) -> Vector3:
    """Compute the right-handed cross product of two vectors.

    Args:
        a: First vector.
        b: Second vector.

    Returns:
        The cross product a x b.

    Raises:
        ValueError: If either operand has a NaN component.
        TypeError: If either operand is not a Vector3.
    """
    _check_vector_operands(a, b, "cross")
    return Vector3(
        a.y * b.z - a.z * b.y,
        a.z * b.x - a.x * b.z,
        a.x * b.y - a.y * b.x,
    )


def length(v: Vector3) -> float:
    """Compute the length (magnitude) of a vector."""
    return v.length()


def length_squared(v: Vector3) -> float:
    """Compute the squared length of a vector."""
    return v.length_squared()


def normalize(v: Vector3) -> Vector3:
    """Normalize a vector to unit length.

    Args:
        v: The input vector.

    Returns:
        A unit vector in the same direction as v.

    Raises:
        ValueError: If v has zero length.
    """
    n = v.length()
    if n == 0.0:
        raise ValueError("Cannot normalize a zero-length vector")
    return v / n


def has_nans(v: Vector3 | Point3) -> bool:
    """Return True if any component of ``v`` is NaN."""
    return v.has_nans()


def isclose(a: Vector3 | Point3, b: Vector3 | Point3, abs_tol: float = 1e-9) -> bool:
    """Compare two vectors or points component-wise within an absolute tolerance."""
    if type(a) is not type(b):
        return False
    return all(math.isclose(p, q, rel_tol=0.0, abs_tol=abs_tol) for p, q in zip(a, b))
