"""Whitted-style recursive shading integrator.

This module implements the scalar light transport function ``li``: given a
ray and a static scene it returns one clamped color sample by combining

    - nearest-hit selection over every scene object
    - per-light binary shadow rays
    - Blinn-Phong local illumination (ambient + diffuse + specular)
    - bounded-depth mirror reflection with a fixed weight

The evaluation is a pure function of (ray, scene, camera position, depth
budget, configuration). Recursion depth strictly decreases, so every call
terminates regardless of scene topology.

Example:
    >>> from whitted.core.integrator import li
    >>> from whitted.core.ray import Ray
    >>> from whitted.core.vector import Point3, Vector3
    >>> from whitted.scene.presets import create_mirror_scene
    >>> scene, camera = create_mirror_scene()
    >>> color = li(Ray(camera, Vector3(0.0, 0.0, 1.0)), scene, camera, max_depth=3)
"""

from __future__ import annotations

from whitted.core.color import Color
from whitted.core.config import DEFAULT_CONFIG, ShadingConfig
from whitted.core.ray import Ray, reflect
from whitted.core.vector import Point3, dot, normalize
from whitted.geometry.shape import Hit
from whitted.scene.scene import Material, Scene


def offset_origin(hit: Hit, epsilon: float) -> Point3:
    """Push a hit point off the surface along its normal.

    The normal faces the side the incoming ray arrived from, which is the side
    every secondary ray spawned here starts on.
    """
    return hit.point + hit.normal * epsilon


def shade_direct(
    hit: Hit,
    material: Material,
    scene: Scene,
    camera_position: Point3,
    config: ShadingConfig = DEFAULT_CONFIG,
) -> Color:
    """Evaluate ambient plus unshadowed diffuse and specular light at a hit.

    For each light a shadow ray is cast from the offset hit point toward the
    light position (un-normalized direction). If any object intersects it the
    light contributes nothing; otherwise the Lambertian term
    ``max(dot(l, n), 0) * diffuse`` and the Blinn-Phong term
    ``max(dot(n, h), 0) ** shininess * specular`` are added.

    Args:
        hit: The surface hit being shaded.
        material: The material of the hit object.
        scene: The scene providing lights and occluders.
        camera_position: Eye position used for the view direction.
        config: Shading parameters.

    Returns:
        The unclamped local color.
    """
    color = material.ambient
    normal = hit.normal
    shadow_origin = offset_origin(hit, config.shadow_epsilon)
    view_dir = normalize(camera_position - hit.point)

    for light in scene.lights:
        shadow_ray = Ray(origin=shadow_origin, direction=light - shadow_origin)
        if scene.is_occluded(shadow_ray):
            continue

        light_dir = normalize(light - hit.point)
        diffuse = max(dot(light_dir, normal), 0.0)

        half_vector = normalize(light_dir + view_dir)
        specular = max(dot(normal, half_vector), 0.0) ** config.shininess

        color = color + material.diffuse * diffuse + material.specular * specular

    return color


def li(
    ray: Ray,
    scene: Scene,
    camera_position: Point3,
    max_depth: int,
    config: ShadingConfig = DEFAULT_CONFIG,
) -> Color:
    """Compute the color carried back along ``ray``.

    Args:
        ray: The ray to trace. Its direction need not be normalized.
        scene: The static scene.
        camera_position: Eye position used for specular highlights. It stays
            fixed through reflection bounces.
        max_depth: Number of mirror bounces still allowed. Zero disables
            reflection entirely.
        config: Shading parameters.

    Returns:
        The shaded color with each channel clamped to [0, 1], or
        ``config.background`` if the ray hits nothing.

    Raises:
        ValueError: If max_depth is negative.
        TypeError: If max_depth is not an int.
    """
    if not isinstance(max_depth, int):
        raise TypeError(f"max_depth must be an int, got {max_depth!r}")
    if max_depth < 0:
        raise ValueError(f"max_depth must be non-negative, got {max_depth}")

    found = scene.nearest_hit(ray)
    if found is None:
        return config.background

    obj, hit = found
    material = obj.material
    color = shade_direct(hit, material, scene, camera_position, config)

    if material.reflective and max_depth > 0:
        direction = reflect(normalize(ray.direction), hit.normal)
        # Start off the surface; a flat mirror would otherwise re-hit itself at t = 0
        reflected = li(
            Ray(origin=offset_origin(hit, config.shadow_epsilon), direction=direction),
            scene,
            camera_position,
            max_depth - 1,
            config,
        )
        color = color + reflected * config.reflection_weight

    return color.clamp_to_unit()


def render_ray(
    ray: Ray,
    scene: Scene,
    camera_position: Point3,
    config: ShadingConfig = DEFAULT_CONFIG,
) -> Color:
    """Shade a camera ray using the reflection budget stored in ``config``."""
    return li(ray, scene, camera_position, config.max_depth, config)
