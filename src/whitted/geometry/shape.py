"""Shape intersection protocol and hit record.

Every primitive exposes a single capability::

    intersect(ray) -> Hit | None

Intersection is a pure function of (shape, ray). A miss is an ordinary
``None`` result, not an error.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from whitted.core.ray import Ray
from whitted.core.vector import Point3, Vector3


@dataclass(frozen=True)
class Hit:
    """Record of a forward ray-shape intersection.

    Attributes:
        t: The ray parameter of the intersection (t >= 0).
        point: The intersection point, ``ray.origin + t * ray.direction``.
        normal: Unit surface normal at the intersection. Spheres report the
            outward normal; triangles flip theirs to face the incoming ray.
    """

    t: float
    point: Point3
    normal: Vector3


@runtime_checkable
class Shape(Protocol):
    """Anything a ray can be intersected with."""

    def intersect(self, ray: Ray) -> Hit | None:
        """Return the nearest forward hit of ``ray``, or None on a miss."""
        ...
