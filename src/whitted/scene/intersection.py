"""Device-side scene storage and scene-level ray queries.

This module mirrors a host-side Scene into Taichi fields so that the batch
integrator can intersect rays against it inside a kernel. Primitives are kept
in a Structure-of-Arrays layout per primitive type. Every primitive records
the scan-order index of the SceneObject it came from; that index selects its
material and breaks nearest-hit ties exactly as Scene.nearest_hit does.

Fields are preallocated to fixed capacities to avoid kernel recompilation.
Import this module only after ``ti.init()`` has been called.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from whitted.scene.intersection import upload_scene
    >>> from whitted.scene.presets import create_mirror_scene
    >>> scene, camera = create_mirror_scene()
    >>> upload_scene(scene)
    >>> # Use intersect_scene within a Taichi kernel
"""

import logging

import taichi as ti
import taichi.math as tm

from whitted.geometry.kernels import hit_sphere, hit_triangle
from whitted.geometry.sphere import Sphere
from whitted.geometry.triangle import Triangle
from whitted.scene.scene import Scene

logger = logging.getLogger(__name__)

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3


@ti.dataclass
class SceneHitRecord:
    """Record of a ray-scene intersection with the owning object.

    Attributes:
        hit: Whether the ray intersected any primitive (1 if hit, 0 if miss).
        t: The ray parameter of the closest intersection.
        point: The closest intersection point.
        normal: The unit surface normal at the intersection.
        object_id: Scan-order index of the hit SceneObject, -1 on a miss.
    """

    hit: ti.i32
    t: ti.f32
    point: vec3
    normal: vec3
    object_id: ti.i32


# Maximum number of primitives and lights supported on the device
MAX_SPHERES = 1024
MAX_TRIANGLES = 4096
MAX_OBJECTS = MAX_SPHERES + MAX_TRIANGLES
MAX_LIGHTS = 64

# Sphere storage
sphere_centers = ti.Vector.field(3, dtype=ti.f32, shape=MAX_SPHERES)
sphere_radii = ti.field(dtype=ti.f32, shape=MAX_SPHERES)
sphere_object_ids = ti.field(dtype=ti.i32, shape=MAX_SPHERES)
num_spheres = ti.field(dtype=ti.i32, shape=())

# Triangle storage
triangle_p0 = ti.Vector.field(3, dtype=ti.f32, shape=MAX_TRIANGLES)
triangle_p1 = ti.Vector.field(3, dtype=ti.f32, shape=MAX_TRIANGLES)
triangle_p2 = ti.Vector.field(3, dtype=ti.f32, shape=MAX_TRIANGLES)
triangle_object_ids = ti.field(dtype=ti.i32, shape=MAX_TRIANGLES)
num_triangles = ti.field(dtype=ti.i32, shape=())

# Per-object material storage, indexed by object_id
material_ambient = ti.Vector.field(3, dtype=ti.f32, shape=MAX_OBJECTS)
material_diffuse = ti.Vector.field(3, dtype=ti.f32, shape=MAX_OBJECTS)
material_specular = ti.Vector.field(3, dtype=ti.f32, shape=MAX_OBJECTS)
material_reflective = ti.field(dtype=ti.i32, shape=MAX_OBJECTS)

# Point lights
light_positions = ti.Vector.field(3, dtype=ti.f32, shape=MAX_LIGHTS)
num_lights = ti.field(dtype=ti.i32, shape=())


def clear_scene() -> None:
    """Clear all primitives and lights from the device scene.

    Resets the counts to zero. Field data is overwritten by the next upload.
    """
    num_spheres[None] = 0
    num_triangles[None] = 0
    num_lights[None] = 0


def get_sphere_count() -> int:
    """Get the number of spheres on the device."""
    return int(num_spheres[None])


def get_triangle_count() -> int:
    """Get the number of triangles on the device."""
    return int(num_triangles[None])


def get_light_count() -> int:
    """Get the number of point lights on the device."""
    return int(num_lights[None])


def _check_capacity(scene: Scene) -> None:
    spheres = len(scene.sphere_objects())
    triangles = len(scene.triangle_objects())
    if spheres > MAX_SPHERES:
        raise RuntimeError(f"Maximum number of spheres ({MAX_SPHERES}) exceeded: {spheres}")
    if triangles > MAX_TRIANGLES:
        raise RuntimeError(
            f"Maximum number of triangles ({MAX_TRIANGLES}) exceeded: {triangles}"
        )
    if len(scene.lights) > MAX_LIGHTS:
        raise RuntimeError(
            f"Maximum number of lights ({MAX_LIGHTS}) exceeded: {len(scene.lights)}"
        )
    unsupported = [
        type(obj.shape).__name__
        for obj in scene.objects
        if not isinstance(obj.shape, (Sphere, Triangle))
    ]
    if unsupported:
        raise TypeError(f"Shapes not supported on the device: {sorted(set(unsupported))}")


def upload_scene(scene: Scene) -> None:
    """Copy a host Scene into the device fields, replacing any previous one.

    Args:
        scene: The scene to upload.

    Raises:
        RuntimeError: If the scene exceeds a device capacity.
        TypeError: If the scene holds a shape with no device counterpart.
    """
    _check_capacity(scene)
    clear_scene()

    n_spheres = 0
    n_triangles = 0
    for object_id, obj in enumerate(scene.objects):
        shape = obj.shape
        if isinstance(shape, Sphere):
            sphere_centers[n_spheres] = list(shape.center)
            sphere_radii[n_spheres] = shape.radius
            sphere_object_ids[n_spheres] = object_id
            n_spheres += 1
        else:
            triangle_p0[n_triangles] = list(shape.p0)
            triangle_p1[n_triangles] = list(shape.p1)
            triangle_p2[n_triangles] = list(shape.p2)
            triangle_object_ids[n_triangles] = object_id
            n_triangles += 1

        material = obj.material
        material_ambient[object_id] = list(material.ambient)
        material_diffuse[object_id] = list(material.diffuse)
        material_specular[object_id] = list(material.specular)
        material_reflective[object_id] = int(material.reflective)

    for i, light in enumerate(scene.lights):
        light_positions[i] = list(light)

    num_spheres[None] = n_spheres
    num_triangles[None] = n_triangles
    num_lights[None] = len(scene.lights)

    logger.debug(
        "Uploaded scene: %d spheres, %d triangles, %d lights",
        n_spheres,
        n_triangles,
        len(scene.lights),
    )


@ti.func
def _make_miss_record() -> SceneHitRecord:
    """Create a SceneHitRecord indicating no intersection."""
    return SceneHitRecord(
        hit=0,
        t=0.0,
        point=vec3(0.0, 0.0, 0.0),
        normal=vec3(0.0, 0.0, 0.0),
        object_id=-1,
    )


@ti.func
def _is_closer(t: ti.f32, object_id: ti.i32, best: SceneHitRecord) -> ti.i32:
    """Whether a hit at (t, object_id) beats the current best record."""
    closer = 0
    if best.hit == 0 or t < best.t:
        closer = 1
    elif t == best.t and object_id < best.object_id:
        closer = 1
    return closer


@ti.func
def intersect_scene(ray_origin: vec3, ray_direction: vec3) -> SceneHitRecord:
    """Test a ray against every primitive and keep the closest hit.

    Ties in ``t`` are won by the lower object_id, matching the host-side scan
    order.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The direction of the ray (not normalized).

    Returns:
        The closest SceneHitRecord, or a miss record.
    """
    result = _make_miss_record()

    for i in range(num_spheres[None]):
        rec = hit_sphere(ray_origin, ray_direction, sphere_centers[i], sphere_radii[i])
        if rec.hit == 1 and _is_closer(rec.t, sphere_object_ids[i], result) == 1:
            result = SceneHitRecord(
                hit=1,
                t=rec.t,
                point=rec.point,
                normal=rec.normal,
                object_id=sphere_object_ids[i],
            )

    for i in range(num_triangles[None]):
        rec = hit_triangle(
            ray_origin, ray_direction, triangle_p0[i], triangle_p1[i], triangle_p2[i]
        )
        if rec.hit == 1 and _is_closer(rec.t, triangle_object_ids[i], result) == 1:
            result = SceneHitRecord(
                hit=1,
                t=rec.t,
                point=rec.point,
                normal=rec.normal,
                object_id=triangle_object_ids[i],
            )

    return result


@ti.func
def intersect_scene_any(ray_origin: vec3, ray_direction: vec3) -> ti.i32:
    """Test if a ray hits any primitive at all (shadow ray query).

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The direction of the ray (not normalized).

    Returns:
        1 if any primitive was hit, 0 otherwise.
    """
    hit_any = 0

    for i in range(num_spheres[None]):
        if hit_any == 0:
            rec = hit_sphere(ray_origin, ray_direction, sphere_centers[i], sphere_radii[i])
            if rec.hit == 1:
                hit_any = 1

    for i in range(num_triangles[None]):
        if hit_any == 0:
            rec = hit_triangle(
                ray_origin, ray_direction, triangle_p0[i], triangle_p1[i], triangle_p2[i]
            )
            if rec.hit == 1:
                hit_any = 1

    return hit_any
