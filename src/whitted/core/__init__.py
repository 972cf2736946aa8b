"""Core rendering module.

This module contains the fundamental building blocks for ray tracing:

Components:
    vector: Vector3/Point3 algebra with strict precondition checks
    matrix: Row-major 4x4 matrices
    transform: Affine transforms applied to points and directions
    color: RGB accumulation and unit clamping
    ray: Ray data structure and reflection
    config: Shading constants and ShadingConfig
    integrator: The recursive Whitted integrator (scalar, pure Python)
    batch: Parallel batch shading with Taichi kernels
"""

from .color import Color
from .config import DEFAULT_CONFIG, ShadingConfig
from .matrix import Matrix4
from .ray import Ray, ray_at, reflect
from .transform import Transform
from .vector import (
    Point3,
    Vector3,
    cross,
    dot,
    has_nans,
    isclose,
    length,
    length_squared,
    normalize,
)

# Note: integrator and batch are NOT imported here. The integrator depends on
# the scene package (circular import), and batch allocates Taichi fields on
# import, which must happen after ti.init(). Import them directly:
#   from whitted.core.integrator import li
#   from whitted.core.batch import render_rays

__all__ = [
    "Vector3",
    "Point3",
    "dot",
    "cross",
    "length",
    "length_squared",
    "normalize",
    "has_nans",
    "isclose",
    "Matrix4",
    "Transform",
    "Color",
    "Ray",
    "ray_at",
    "reflect",
    "ShadingConfig",
    "DEFAULT_CONFIG",
]
