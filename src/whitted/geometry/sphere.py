"""Sphere primitive with ray-sphere intersection.

The ray-sphere intersection solves

    |origin + t * d - center|^2 = radius^2

which expands to the quadratic a*t^2 + b*t + c = 0 with

    v = origin - center
    a = dot(d, d)
    b = 2 * dot(d, v)
    c = dot(v, v) - radius^2

The ray direction is used as given (not normalized), the same convention
applied to shadow and reflection rays, so ``t`` is always measured in units of
the caller's direction vector.

Only the smaller root is considered. If it lies behind the ray origin the
sphere is reported as missed, even when the larger root is in front (a ray
starting inside the sphere does not see its far wall).

Example:
    >>> from whitted.core.ray import Ray
    >>> from whitted.core.vector import Point3, Vector3
    >>> from whitted.geometry.sphere import Sphere
    >>> sphere = Sphere(center=Point3(0.0, 0.0, 10.0), radius=5.0)
    >>> hit = sphere.intersect(Ray(Point3(0.0, 0.0, 1.0), Vector3(0.0, 0.0, 1.0)))
    >>> hit.point
    Point3(x=0.0, y=0.0, z=5.0)
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from whitted.core.ray import Ray
from whitted.core.vector import Point3, dot, normalize
from whitted.geometry.shape import Hit


@dataclass(frozen=True)
class Sphere:
    """A sphere defined by center point and radius.

    Attributes:
        center: The center point of the sphere.
        radius: The radius of the sphere (positive float).
    """

    center: Point3
    radius: float

    def __post_init__(self) -> None:
        if not isinstance(self.center, Point3):
            raise TypeError("Sphere center must be a Point3")
        if not (math.isfinite(self.radius) and self.radius > 0.0):
            raise ValueError(f"Sphere radius must be positive, got {self.radius}")

    def intersect(self, ray: Ray) -> Hit | None:
        """Test for ray-sphere intersection.

        Args:
            ray: The ray to test. Its direction need not be normalized.

        Returns:
            A Hit at the smaller quadratic root with an outward normal, or
            None if the discriminant is negative or the smaller root is
            behind the ray origin.
        """
        d = ray.direction
        v = ray.origin - self.center

        a = dot(d, d)
        b = 2.0 * dot(d, v)
        c = dot(v, v) - self.radius * self.radius

        discriminant = b * b - 4.0 * a * c
        if discriminant < 0.0:
            return None

        if discriminant == 0.0:
            t = -b / (2.0 * a)
        else:
            sqrt_d = math.sqrt(discriminant)
            t = min((-b - sqrt_d) / (2.0 * a), (-b + sqrt_d) / (2.0 * a))

        if t < 0.0:
            return None

        point = ray.at(t)
        return Hit(t=t, point=point, normal=normalize(point - self.center))
