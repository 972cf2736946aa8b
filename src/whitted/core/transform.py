"""Affine transforms for placing geometry and generating rays.

A Transform wraps a Matrix4 and distinguishes how it acts on the two kinds
of 3-component values:

- apply_point: the full affine map (linear block plus translation), for
  positions.
- apply_vector: the 3x3 linear block only, for directions. Translation is
  ignored.

The homogeneous bottom row is implicitly (0, 0, 0, 1) for every transform
built by this module.

Composition order matters. ``a.compose(b)`` has matrix ``a.matrix * b.matrix``,
so applying the result applies ``b`` first and ``a`` second.

Example:
    >>> from whitted.core.transform import Transform
    >>> from whitted.core.vector import Point3, Vector3
    >>> spin = Transform.rotate(90.0, Vector3(0.0, 1.0, 0.0))
    >>> lift = Transform.translate(Vector3(0.0, 2.0, 0.0))
    >>> lift.compose(spin).apply_point(Point3(0.0, 0.0, 1.0))  # spin, then lift
    Point3(x=1.0, y=2.0, z=6.123233995736766e-17)
"""

from __future__ import annotations

import math

from whitted.core.matrix import Matrix4
from whitted.core.vector import Point3, Vector3, normalize


class Transform:
    """An affine transform backed by a 4x4 matrix.

    Attributes:
        matrix: The row-major matrix of the transform.
    """

    __slots__ = ("matrix",)

    def __init__(self, matrix: Matrix4) -> None:
        self.matrix = matrix

    def __repr__(self) -> str:
        return f"Transform({self.matrix!r})"

    # =========================================================================
    # Constructors
    # =========================================================================

    @classmethod
    def identity(cls) -> Transform:
        """Return the transform that leaves every point and vector unchanged."""
        return cls(Matrix4.identity())

    @classmethod
    def translate(cls, delta: Vector3) -> Transform:
        """Return a translation by ``delta``.

        The displacement is stored in the last column of the matrix, so it
        affects points only.
        """
        return cls(
            Matrix4(
                [
                    [1.0, 0.0, 0.0, delta.x],
                    [0.0, 1.0, 0.0, delta.y],
                    [0.0, 0.0, 1.0, delta.z],
                    [0.0, 0.0, 0.0, 1.0],
                ]
            )
        )

    @classmethod
    def translate_point(cls, point: Point3) -> Transform:
        """Return the translation that carries the world origin to ``point``."""
        return cls.translate(point - Point3.origin())

    @classmethod
    def rotate(cls, theta: float, axis: Vector3) -> Transform:
        """Return a rotation of ``theta`` degrees about ``axis``.

        Builds the Rodrigues rotation matrix about the normalized axis. The
        rotation is counter-clockwise when looking down the axis toward the
        origin (right-hand rule).

        Args:
            theta: Rotation angle in degrees.
            axis: Rotation axis. Need not be unit length.

        Returns:
            The rotation transform.

        Raises:
            ValueError: If ``axis`` has zero length.
        """
        a = normalize(axis)
        radians = math.radians(theta)
        s = math.sin(radians)
        c = math.cos(radians)
        k = 1.0 - c

        return cls(
            Matrix4(
                [
                    [
                        a.x * a.x + (1.0 - a.x * a.x) * c,
                        a.x * a.y * k - a.z * s,
                        a.x * a.z * k + a.y * s,
                        0.0,
                    ],
                    [
                        a.x * a.y * k + a.z * s,
                        a.y * a.y + (1.0 - a.y * a.y) * c,
                        a.y * a.z * k - a.x * s,
                        0.0,
                    ],
                    [
                        a.x * a.z * k - a.y * s,
                        a.y * a.z * k + a.x * s,
                        a.z * a.z + (1.0 - a.z * a.z) * c,
                        0.0,
                    ],
                    [0.0, 0.0, 0.0, 1.0],
                ]
            )
        )

    # =========================================================================
    # Composition and Application
    # =========================================================================

    def compose(self, other: Transform) -> Transform:
        """Return the transform that applies ``other`` first, then ``self``."""
        return Transform(self.matrix @ other.matrix)

    def apply_vector(self, v: Vector3) -> Vector3:
        """Apply the linear 3x3 block to a direction (no translation)."""
        m = self.matrix.rows
        return Vector3(
            float(m[0, 0] * v.x + m[0, 1] * v.y + m[0, 2] * v.z),
            float(m[1, 0] * v.x + m[1, 1] * v.y + m[1, 2] * v.z),
            float(m[2, 0] * v.x + m[2, 1] * v.y + m[2, 2] * v.z),
        )

    def apply_point(self, p: Point3) -> Point3:
        """Apply the full affine map (rotation/scale plus translation) to a point."""
        m = self.matrix.rows
        return Point3(
            float(m[0, 0] * p.x + m[0, 1] * p.y + m[0, 2] * p.z + m[0, 3]),
            float(m[1, 0] * p.x + m[1, 1] * p.y + m[1, 2] * p.z + m[1, 3]),
            float(m[2, 0] * p.x + m[2, 1] * p.y + m[2, 2] * p.z + m[2, 3]),
        )
