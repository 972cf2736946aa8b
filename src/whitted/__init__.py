"""Whitted-style ray tracer core.

This package turns a ray and a small static scene of spheres and triangles
into a single shaded color sample, with support for:
- Exact ray-sphere and barycentric ray-triangle intersection
- Binary shadow rays toward point lights
- Blinn-Phong local illumination
- Bounded-depth mirror reflection
- Parallel batch shading with Taichi

Subpackages:
    core: Vector/point algebra, transforms, colors, rays and the integrators
    geometry: Shape primitives, the intersection protocol and device kernels
    scene: Scene description, device-side scene storage and preset scenes
"""

__version__ = "0.1.0"
