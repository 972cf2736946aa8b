"""Unit tests for triangle intersection.

Tests cover:
- Ray hitting triangle from either side (normal faces the ray)
- Rays missing outside the edges or behind the origin
- Rays parallel to the triangle's plane
- Device-side hit_triangle agreeing with Triangle.intersect
"""

import pytest
import taichi as ti

from whitted.core.ray import Ray
from whitted.core.vector import Point3, Vector3
from whitted.geometry.shape import Shape
from whitted.geometry.triangle import Triangle


def make_triangle(z: float) -> Triangle:
    """Create the test triangle lying in the given z plane."""
    return Triangle(Point3(-1.0, -1.0, z), Point3(1.0, -1.0, z), Point3(0.0, 1.0, z))


FORWARD = Vector3(0.0, 0.0, 1.0)


class TestTriangleBasics:
    """Tests for Triangle construction."""

    def test_triangle_is_a_shape(self):
        """Test that Triangle satisfies the Shape protocol."""
        assert isinstance(make_triangle(2.0), Shape)

    def test_collinear_vertices_raise(self):
        """Test that degenerate triangles are rejected."""
        with pytest.raises(ValueError):
            Triangle(Point3(0.0, 0.0, 0.0), Point3(1.0, 1.0, 1.0), Point3(2.0, 2.0, 2.0))
        with pytest.raises(ValueError):
            Triangle(Point3(0.0, 0.0, 0.0), Point3(0.0, 0.0, 0.0), Point3(1.0, 0.0, 0.0))

    def test_vertices_must_be_points(self):
        """Test that vertices must be positions."""
        with pytest.raises(TypeError):
            Triangle(Vector3(0.0, 0.0, 0.0), Point3(1.0, 0.0, 0.0), Point3(0.0, 1.0, 0.0))

    def test_geometric_normal(self):
        """Test the winding-order normal."""
        assert make_triangle(2.0).geometric_normal() == Vector3(0.0, 0.0, 1.0)


class TestTriangleIntersection:
    """Tests for Triangle.intersect."""

    def test_hit_from_front(self):
        """Test a ray along +z hitting the triangle at z = 2."""
        hit = make_triangle(2.0).intersect(Ray(Point3.origin(), FORWARD))

        assert hit is not None
        assert hit.t == pytest.approx(2.0)
        assert hit.point == Point3(0.0, 0.0, 2.0)
        # Geometric normal is +z, flipped to face the incoming ray
        assert hit.normal == Vector3(0.0, 0.0, -1.0)

    def test_hit_from_back(self):
        """Test that a ray from the other side sees the opposite normal."""
        hit = make_triangle(2.0).intersect(Ray(Point3(0.0, 0.0, 4.0), -FORWARD))

        assert hit is not None
        assert hit.t == pytest.approx(2.0)
        assert hit.normal == Vector3(0.0, 0.0, 1.0)

    def test_unnormalized_direction_scales_t(self):
        """Test that t is measured in units of the direction's length."""
        hit = make_triangle(2.0).intersect(Ray(Point3.origin(), Vector3(0.0, 0.0, 2.0)))

        assert hit is not None
        assert hit.t == pytest.approx(1.0)
        assert hit.point == Point3(0.0, 0.0, 2.0)

    def test_triangle_behind_origin(self):
        """Test that a triangle behind the ray is not hit."""
        assert make_triangle(-2.0).intersect(Ray(Point3.origin(), FORWARD)) is None

    @pytest.mark.parametrize(
        "origin",
        [
            Point3(-2.0, 2.0, 0.0),
            Point3(2.0, 2.0, 0.0),
            Point3(0.0, -2.0, 0.0),
            Point3(0.9, 0.9, 0.0),
        ],
    )
    def test_miss_outside_edges(self, origin):
        """Test rays passing outside each edge."""
        assert make_triangle(2.0).intersect(Ray(origin, FORWARD)) is None

    def test_parallel_ray_off_plane(self):
        """Test a ray parallel to the plane but offset from it."""
        triangle = make_triangle(2.0)
        assert triangle.intersect(Ray(Point3.origin(), Vector3(1.0, 0.0, 0.0))) is None

    def test_parallel_ray_in_plane(self):
        """Test a ray travelling inside the triangle's plane."""
        triangle = make_triangle(2.0)
        ray = Ray(Point3(-5.0, 0.0, 2.0), Vector3(1.0, 0.0, 0.0))
        assert triangle.intersect(ray) is None

    def test_normal_is_unit(self):
        """Test the normal of an oblique hit on a large, tilted triangle."""
        triangle = Triangle(
            Point3(-10.0, -10.0, 5.0), Point3(10.0, -10.0, 9.0), Point3(0.0, 10.0, 7.0)
        )
        ray = Ray(Point3.origin(), Vector3(0.1, 0.2, 1.0))
        hit = triangle.intersect(ray)

        assert hit is not None
        assert hit.normal.length() == pytest.approx(1.0)
        assert hit.point == ray.at(hit.t)


class TestDeviceTriangleIntersection:
    """Tests for the Taichi hit_triangle function."""

    def test_hit_triangle_front(self):
        """Test a device ray hitting the triangle at z = 2."""
        from whitted.geometry.kernels import hit_triangle, vec3

        hit = ti.field(dtype=ti.i32, shape=())
        t_val = ti.field(dtype=ti.f32, shape=())
        normal = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            record = hit_triangle(
                vec3(0.0, 0.0, 0.0),
                vec3(0.0, 0.0, 1.0),
                vec3(-1.0, -1.0, 2.0),
                vec3(1.0, -1.0, 2.0),
                vec3(0.0, 1.0, 2.0),
            )
            hit[None] = record.hit
            t_val[None] = record.t
            normal[None] = record.normal

        test_kernel()
        assert hit[None] == 1
        assert abs(t_val[None] - 2.0) < 1e-5
        n = normal[None]
        assert abs(n[0]) < 1e-5
        assert abs(n[1]) < 1e-5
        assert abs(n[2] + 1.0) < 1e-5

    def test_hit_triangle_behind(self):
        """Test that the device rejects triangles behind the origin."""
        from whitted.geometry.kernels import hit_triangle, vec3

        hit = ti.field(dtype=ti.i32, shape=())

        @ti.kernel
        def test_kernel():
            record = hit_triangle(
                vec3(0.0, 0.0, 0.0),
                vec3(0.0, 0.0, 1.0),
                vec3(-1.0, -1.0, -2.0),
                vec3(1.0, -1.0, -2.0),
                vec3(0.0, 1.0, -2.0),
            )
            hit[None] = record.hit

        test_kernel()
        assert hit[None] == 0

    def test_hit_triangle_outside_edge(self):
        """Test that the device rejects rays outside the edges."""
        from whitted.geometry.kernels import hit_triangle, vec3

        hit = ti.field(dtype=ti.i32, shape=())

        @ti.kernel
        def test_kernel():
            record = hit_triangle(
                vec3(-2.0, 2.0, 0.0),
                vec3(0.0, 0.0, 1.0),
                vec3(-1.0, -1.0, 2.0),
                vec3(1.0, -1.0, 2.0),
                vec3(0.0, 1.0, 2.0),
            )
            hit[None] = record.hit

        test_kernel()
        assert hit[None] == 0

    def test_hit_triangle_parallel_in_plane(self):
        """Test that the NaN parameters of an in-plane ray are rejected."""
        from whitted.geometry.kernels import hit_triangle, vec3

        hit = ti.field(dtype=ti.i32, shape=())

        @ti.kernel
        def test_kernel():
            record = hit_triangle(
                vec3(-5.0, 0.0, 2.0),
                vec3(1.0, 0.0, 0.0),
                vec3(-1.0, -1.0, 2.0),
                vec3(1.0, -1.0, 2.0),
                vec3(0.0, 1.0, 2.0),
            )
            hit[None] = record.hit

        test_kernel()
        assert hit[None] == 0
