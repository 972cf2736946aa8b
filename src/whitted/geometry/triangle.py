"""Triangle primitive with barycentric ray-triangle intersection.

Writing the hit point as ``p0 + u * v1 + v * v2`` with edge vectors
``v1 = p1 - p0`` and ``v2 = p2 - p0``, the ray equation is solved with
scalar triple products:

    v_tmpd = cross(d, v2)
    v_tmpp = cross(origin - p0, v1)
    s = 1 / dot(v_tmpd, v1)
    u = s * dot(v_tmpd, origin - p0)
    v = s * dot(v_tmpp, d)
    t = s * dot(v_tmpp, v2)

The point is inside the triangle when u, v and u + v all lie in [0, 1].

A ray parallel to the triangle's plane makes ``dot(v_tmpd, v1)`` vanish. The
reciprocal then follows IEEE-754 semantics (infinite, later NaN after being
multiplied by zero) rather than being special-cased. Infinite barycentrics
fail the range checks; NaN ones slip past them but leave ``t`` as NaN, which
the final ``t >= 0`` acceptance rejects. The observable result is a miss.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from whitted.core.ray import Ray
from whitted.core.vector import Point3, Vector3, cross, dot, normalize
from whitted.geometry.shape import Hit


def _reciprocal(x: float) -> float:
    """Return 1 / x with IEEE-754 behavior at zero (signed infinity)."""
    if x == 0.0:
        return math.copysign(math.inf, x)
    return 1.0 / x


@dataclass(frozen=True)
class Triangle:
    """A triangle defined by three non-collinear vertices.

    Attributes:
        p0: First vertex. Barycentric coordinates are measured from here.
        p1: Second vertex.
        p2: Third vertex.
    """

    p0: Point3
    p1: Point3
    p2: Point3

    def __post_init__(self) -> None:
        for vertex in (self.p0, self.p1, self.p2):
            if not isinstance(vertex, Point3):
                raise TypeError("Triangle vertices must be Point3")
        if cross(self.p1 - self.p0, self.p2 - self.p0).length_squared() == 0.0:
            raise ValueError("Triangle vertices must not be collinear")

    def geometric_normal(self) -> Vector3:
        """Return the unit normal cross(p1 - p0, p2 - p0), normalized."""
        return normalize(cross(self.p1 - self.p0, self.p2 - self.p0))

    def intersect(self, ray: Ray) -> Hit | None:
        """Test for ray-triangle intersection.

        Args:
            ray: The ray to test. Its direction need not be normalized.

        Returns:
            A Hit whose normal faces against the ray direction, or None if the
            ray misses the triangle or hits it behind the origin.
        """
        d = ray.direction
        vp = ray.origin - self.p0
        v1 = self.p1 - self.p0
        v2 = self.p2 - self.p0

        v_tmpd = cross(d, v2)
        v_tmpp = cross(vp, v1)

        s = _reciprocal(dot(v_tmpd, v1))

        u = s * dot(v_tmpd, vp)
        if u < 0.0 or u > 1.0:
            return None

        v = s * dot(v_tmpp, d)
        if v < 0.0 or v > 1.0:
            return None

        if u + v > 1.0:
            return None

        t = s * dot(v_tmpp, v2)
        if not t >= 0.0:
            return None

        normal = normalize(cross(v1, v2))
        if dot(-d, normal) < 0.0:
            normal = -normal

        return Hit(t=t, point=ray.at(t), normal=normal)
