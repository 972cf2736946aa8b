"""Scene module for scene description and ray-scene queries.

Components:
    scene: Materials, scene objects, point lights and host-side queries
    intersection: Taichi field storage of an uploaded scene (import after
        ti.init())
    presets: Canonical scenes for demos and tests
"""

from .presets import create_mirror_scene, create_triangle_scene, make_quad
from .scene import Material, Scene, SceneObject

__all__ = [
    "Material",
    "Scene",
    "SceneObject",
    "create_mirror_scene",
    "create_triangle_scene",
    "make_quad",
]
