"""Device-side ray-primitive intersection for the Taichi batch path.

These are Taichi functions (@ti.func) mirroring the scalar Sphere.intersect
and Triangle.intersect routines, so a whole batch of rays can be intersected
inside one kernel. They use the same conventions:

    - the ray direction is used un-normalized
    - spheres report the smaller quadratic root only, rejecting t < 0
    - triangles use the barycentric triple-product test, with the division
      by dot(v_tmpd, v1) left unguarded; NaN parameters are rejected by the
      final t >= 0 acceptance

Every function returns a DeviceHit whose ``hit`` field is 1 on an intersection
and 0 on a miss (Taichi functions cannot return None).

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from whitted.geometry.kernels import hit_sphere, vec3
    >>> # Use hit_sphere within a Taichi kernel
"""

import taichi as ti
import taichi.math as tm

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3


@ti.dataclass
class DeviceHit:
    """Record of a device-side ray-primitive intersection.

    Attributes:
        hit: Whether the ray intersected the primitive (1 if hit, 0 if miss).
        t: The ray parameter of the intersection. Only valid if hit == 1.
        point: The intersection point. Only valid if hit == 1.
        normal: The unit normal at the intersection, facing against the ray
            for triangles and outward for spheres. Only valid if hit == 1.
    """

    hit: ti.i32
    t: ti.f32
    point: vec3
    normal: vec3


@ti.func
def hit_sphere(
    ray_origin: vec3,
    ray_direction: vec3,
    center: vec3,
    radius: ti.f32,
) -> DeviceHit:
    """Test for ray-sphere intersection at the smaller quadratic root.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The direction of the ray (not normalized).
        center: The center of the sphere.
        radius: The radius of the sphere.

    Returns:
        A DeviceHit. A negative discriminant or a smaller root behind the
        origin is a miss.
    """
    v = ray_origin - center

    a = tm.dot(ray_direction, ray_direction)
    b = 2.0 * tm.dot(ray_direction, v)
    c = tm.dot(v, v) - radius * radius

    discriminant = b * b - 4.0 * a * c

    # Initialize result fields (Taichi requires outer-scope declaration)
    did_hit = 0
    hit_t = 0.0
    hit_point = vec3(0.0, 0.0, 0.0)
    hit_normal = vec3(0.0, 0.0, 0.0)

    if discriminant >= 0.0:
        sqrt_d = ti.sqrt(discriminant)
        t = tm.min((-b - sqrt_d) / (2.0 * a), (-b + sqrt_d) / (2.0 * a))

        if t >= 0.0:
            did_hit = 1
            hit_t = t
            hit_point = ray_origin + t * ray_direction
            hit_normal = tm.normalize(hit_point - center)

    return DeviceHit(hit=did_hit, t=hit_t, point=hit_point, normal=hit_normal)


@ti.func
def hit_triangle(
    ray_origin: vec3,
    ray_direction: vec3,
    p0: vec3,
    p1: vec3,
    p2: vec3,
) -> DeviceHit:
    """Test for ray-triangle intersection with barycentric coordinates.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The direction of the ray (not normalized).
        p0: First vertex.
        p1: Second vertex.
        p2: Third vertex.

    Returns:
        A DeviceHit whose normal is flipped to face against the ray.
    """
    vp = ray_origin - p0
    v1 = p1 - p0
    v2 = p2 - p0

    v_tmpd = tm.cross(ray_direction, v2)
    v_tmpp = tm.cross(vp, v1)

    s = 1.0 / tm.dot(v_tmpd, v1)

    u = s * tm.dot(v_tmpd, vp)
    v = s * tm.dot(v_tmpp, ray_direction)
    t = s * tm.dot(v_tmpp, v2)

    accept = 1
    if u < 0.0 or u > 1.0:
        accept = 0
    if v < 0.0 or v > 1.0:
        accept = 0
    if u + v > 1.0:
        accept = 0
    if tm.isnan(t) or t < 0.0:
        accept = 0

    hit_t = 0.0
    hit_point = vec3(0.0, 0.0, 0.0)
    hit_normal = vec3(0.0, 0.0, 0.0)

    if accept == 1:
        hit_t = t
        hit_point = ray_origin + t * ray_direction
        hit_normal = tm.normalize(tm.cross(v1, v2))
        if tm.dot(-ray_direction, hit_normal) < 0.0:
            hit_normal = -hit_normal

    return DeviceHit(hit=accept, t=hit_t, point=hit_point, normal=hit_normal)
