"""Static scene description: materials, objects and point lights.

A Scene is assembled once before rendering and is read-only afterwards. It is
passed explicitly to the integrator so that shading stays a pure function of
(ray, scene, depth).

Example:
    >>> from whitted.core.color import Color
    >>> from whitted.core.vector import Point3
    >>> from whitted.geometry.sphere import Sphere
    >>> from whitted.scene.scene import Material, Scene, SceneObject
    >>> red = Material.matte(Color(0.8, 0.1, 0.1))
    >>> scene = Scene(
    ...     objects=[SceneObject(Sphere(Point3(0.0, 0.0, 5.0), 1.0), red)],
    ...     lights=[Point3(0.0, 5.0, 0.0)],
    ... )
    >>> len(scene.objects)
    1
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from whitted.core.color import Color
from whitted.core.ray import Ray
from whitted.core.vector import Point3
from whitted.geometry.shape import Hit, Shape
from whitted.geometry.sphere import Sphere
from whitted.geometry.triangle import Triangle

# Ambient term used by the convenience constructors
DEFAULT_AMBIENT_SCALE = 0.1


@dataclass(frozen=True)
class Material:
    """Blinn-Phong surface description.

    Attributes:
        ambient: Color added unconditionally at every hit.
        diffuse: Color scaled by max(dot(light_dir, normal), 0) per visible light.
        specular: Color scaled by the Blinn-Phong highlight per visible light.
        reflective: Whether the surface spawns a mirror reflection ray.
    """

    ambient: Color
    diffuse: Color
    specular: Color
    reflective: bool = False

    def __post_init__(self) -> None:
        for name in ("ambient", "diffuse", "specular"):
            if not isinstance(getattr(self, name), Color):
                raise TypeError(f"Material {name} must be a Color")

    @classmethod
    def matte(cls, albedo: Color, ambient_scale: float = DEFAULT_AMBIENT_SCALE) -> Material:
        """Create a diffuse material with a small ambient term and no highlight."""
        return cls(
            ambient=albedo * ambient_scale,
            diffuse=albedo,
            specular=Color.black(),
        )

    @classmethod
    def mirror(
        cls,
        albedo: Color,
        specular: Color | None = None,
        ambient_scale: float = DEFAULT_AMBIENT_SCALE,
    ) -> Material:
        """Create a reflective material with a white highlight by default."""
        return cls(
            ambient=albedo * ambient_scale,
            diffuse=albedo,
            specular=specular if specular is not None else Color.gray(1.0),
            reflective=True,
        )


@dataclass(frozen=True)
class SceneObject:
    """A shape paired with the material it is shaded with.

    Attributes:
        shape: Any object implementing the Shape protocol.
        material: The surface material.
    """

    shape: Shape
    material: Material

    def __post_init__(self) -> None:
        if not isinstance(self.shape, Shape):
            raise TypeError(f"{type(self.shape).__name__} does not implement intersect()")
        if not isinstance(self.material, Material):
            raise TypeError("SceneObject material must be a Material")


class Scene:
    """An immutable, ordered collection of objects and point lights.

    Attributes:
        objects: Scene objects in scan order. Nearest-hit ties are won by the
            object that comes first.
        lights: Point light positions.
    """

    __slots__ = ("objects", "lights")

    def __init__(self, objects: Iterable[SceneObject], lights: Iterable[Point3]) -> None:
        """Build a scene.

        Args:
            objects: The objects to render.
            lights: Point light positions.

        Raises:
            TypeError: If an object is not a SceneObject or a light is not a
                Point3.
        """
        objects = tuple(objects)
        lights = tuple(lights)
        for obj in objects:
            if not isinstance(obj, SceneObject):
                raise TypeError(f"Expected SceneObject, got {type(obj).__name__}")
        for light in lights:
            if not isinstance(light, Point3):
                raise TypeError(f"Lights must be Point3, got {type(light).__name__}")
        object.__setattr__(self, "objects", objects)
        object.__setattr__(self, "lights", lights)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("Scene is immutable")

    def __repr__(self) -> str:
        return f"Scene(objects={len(self.objects)}, lights={len(self.lights)})"

    # =========================================================================
    # Ray Queries
    # =========================================================================

    def nearest_hit(self, ray: Ray) -> tuple[SceneObject, Hit] | None:
        """Find the closest forward intersection of ``ray`` with the scene.

        Every object is tested; the hit with the smallest ``t`` wins and ties
        go to the earlier object.

        Args:
            ray: The ray to trace.

        Returns:
            (object, hit) for the closest intersection, or None on a miss.
        """
        closest: tuple[SceneObject, Hit] | None = None
        for obj in self.objects:
            hit = obj.shape.intersect(ray)
            if hit is not None and (closest is None or hit.t < closest[1].t):
                closest = (obj, hit)
        return closest

    def is_occluded(self, ray: Ray) -> bool:
        """Return True if ``ray`` hits any object at all.

        The test is binary and unbounded: an occluder anywhere along the
        forward ray counts, including one farther away than the light the
        ray was aimed at.
        """
        return any(obj.shape.intersect(ray) is not None for obj in self.objects)

    # =========================================================================
    # Primitive Enumeration
    # =========================================================================

    def sphere_objects(self) -> list[SceneObject]:
        """Return the objects whose shape is a Sphere, in scan order."""
        return [obj for obj in self.objects if isinstance(obj.shape, Sphere)]

    def triangle_objects(self) -> list[SceneObject]:
        """Return the objects whose shape is a Triangle, in scan order."""
        return [obj for obj in self.objects if isinstance(obj.shape, Triangle)]
