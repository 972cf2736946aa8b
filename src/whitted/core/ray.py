"""Ray data structure for the scalar tracing path.

A ray is the parametric half-line ``origin + t * direction``; only ``t >= 0``
counts as a forward hit. Directions are not normalized on construction: camera,
reflection and shadow rays all keep whatever length their caller gave them, and
every intersection routine works with the un-normalized parametrization.

Example:
    >>> from whitted.core.ray import Ray, ray_at
    >>> from whitted.core.vector import Point3, Vector3
    >>> ray = Ray(origin=Point3(0.0, 0.0, 0.0), direction=Vector3(0.0, 0.0, 2.0))
    >>> ray_at(ray, 1.5)
    Point3(x=0.0, y=0.0, z=3.0)
"""

from __future__ import annotations

from dataclasses import dataclass

from whitted.core.vector import Point3, Vector3, dot


@dataclass(frozen=True)
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray.
        direction: The direction of travel. Need not be unit length.
    """

    origin: Point3
    direction: Vector3

    def __post_init__(self) -> None:
        if not isinstance(self.origin, Point3):
            raise TypeError(f"Ray origin must be a Point3, got {type(self.origin).__name__}")
        if not isinstance(self.direction, Vector3):
            raise TypeError(
                f"Ray direction must be a Vector3, got {type(self.direction).__name__}"
            )

    def at(self, t: float) -> Point3:
        """Return the point at parameter ``t`` along the ray."""
        return self.origin + self.direction * t


def ray_at(ray: Ray, t: float) -> Point3:
    """Compute the point along the ray at parameter t.

    Args:
        ray: The ray to evaluate.
        t: The parameter value. Positive values are in front of the origin.

    Returns:
        The point ray.origin + t * ray.direction.
    """
    return ray.at(t)


def reflect(incident: Vector3, normal: Vector3) -> Vector3:
    """Reflect an incident vector about a normal.

    Args:
        incident: The incoming direction (pointing toward the surface).
        normal: The surface normal. Must be unit length for a correct mirror
            direction.

    Returns:
        The mirrored direction ``incident - 2 * dot(incident, normal) * normal``.
    """
    return incident - normal * (2.0 * dot(incident, normal))
