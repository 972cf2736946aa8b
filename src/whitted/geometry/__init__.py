"""Geometry module for shape primitives.

Components:
    shape: Hit record and the Shape intersection protocol
    sphere: Sphere primitive with ray-sphere intersection
    triangle: Triangle primitive with barycentric ray-triangle intersection
    kernels: Taichi device functions mirroring the scalar intersections

Ray-object intersection follows the pattern:
    hit = shape.intersect(ray)  # Hit or None
"""

from .shape import Hit, Shape
from .sphere import Sphere
from .triangle import Triangle

__all__ = [
    "Hit",
    "Shape",
    "Sphere",
    "Triangle",
]
