"""Canonical scenes for demos and tests.

Each factory returns a ``(Scene, camera_position)`` pair. Geometry is placed
with Transform so that the same unit shapes can be reused at any position and
orientation.

Example:
    >>> from whitted.scene.presets import create_mirror_scene
    >>> scene, camera = create_mirror_scene()
    >>> len(scene.objects), len(scene.lights)
    (4, 1)
"""

from __future__ import annotations

from whitted.core.color import Color
from whitted.core.transform import Transform
from whitted.core.vector import Point3, Vector3
from whitted.geometry.sphere import Sphere
from whitted.geometry.triangle import Triangle
from whitted.scene.scene import Material, Scene, SceneObject

# =============================================================================
# Scene Constants
# =============================================================================

MIRROR_ALBEDO = (0.2, 0.2, 0.25)
RED_ALBEDO = (0.8, 0.1, 0.1)
FLOOR_ALBEDO = (0.6, 0.6, 0.6)

FLOOR_HEIGHT = -1.0
FLOOR_HALF_SIZE = 10.0


def make_quad(transform: Transform, half_size: float) -> tuple[Triangle, Triangle]:
    """Build a square as two triangles.

    The square spans [-half_size, half_size] in x and y of its local frame,
    lies in the local z = 0 plane and is then placed with ``transform``.

    Args:
        transform: Local-to-world transform applied to the corners.
        half_size: Half of the square's edge length.

    Returns:
        The two triangles covering the square.
    """
    corners = [
        transform.apply_point(Point3(x, y, 0.0))
        for x, y in (
            (-half_size, -half_size),
            (half_size, -half_size),
            (half_size, half_size),
            (-half_size, half_size),
        )
    ]
    return (
        Triangle(corners[0], corners[1], corners[2]),
        Triangle(corners[0], corners[2], corners[3]),
    )


def create_mirror_scene() -> tuple[Scene, Point3]:
    """Create a mirror sphere next to a red sphere above a gray floor.

    The camera sits at the origin looking down +z. One point light is placed
    above and to the left of the camera.

    Returns:
        Tuple of (scene, camera_position).
    """
    # Local z = 0 square tipped onto the horizontal plane, then lowered
    floor_transform = Transform.translate(Vector3(0.0, FLOOR_HEIGHT, 8.0)).compose(
        Transform.rotate(90.0, Vector3(1.0, 0.0, 0.0))
    )
    floor = Material.matte(Color(*FLOOR_ALBEDO))

    objects = [
        SceneObject(Sphere(Point3(0.0, 0.0, 6.0), 1.0), Material.mirror(Color(*MIRROR_ALBEDO))),
        SceneObject(Sphere(Point3(2.5, 0.0, 7.0), 1.0), Material.matte(Color(*RED_ALBEDO))),
    ]
    objects.extend(
        SceneObject(triangle, floor) for triangle in make_quad(floor_transform, FLOOR_HALF_SIZE)
    )

    scene = Scene(objects=objects, lights=[Point3(-4.0, 6.0, 0.0)])
    return scene, Point3.origin()


def create_triangle_scene() -> tuple[Scene, Point3]:
    """Create a single white triangle facing a camera placed on the z = 5 plane.

    The triangle lies in the z = 10 plane; the light sits at the camera.

    Returns:
        Tuple of (scene, camera_position).
    """
    triangle = Triangle(
        Point3(-2.5, -2.5, 10.0),
        Point3(2.5, -2.5, 10.0),
        Point3(0.0, 2.5, 10.0),
    )
    camera = Point3(0.0, 0.0, 5.0)
    scene = Scene(
        objects=[SceneObject(triangle, Material.matte(Color.gray(1.0)))],
        lights=[camera],
    )
    return scene, camera
