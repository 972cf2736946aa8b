"""Unit tests for colors, rays and shading configuration."""

import math

import pytest

from whitted.core.color import Color
from whitted.core.config import (
    DEFAULT_CONFIG,
    DEFAULT_MAX_DEPTH,
    REFLECTION_WEIGHT,
    SHADOW_EPSILON,
    SHININESS,
    ShadingConfig,
)
from whitted.core.ray import Ray, ray_at, reflect
from whitted.core.vector import Point3, Vector3


class TestColor:
    """Tests for Color arithmetic and clamping."""

    def test_constructors(self):
        """Test the black and gray helpers."""
        assert Color.black() == Color(0.0, 0.0, 0.0)
        assert Color.gray(0.5) == Color(0.5, 0.5, 0.5)

    def test_add(self):
        """Test channel-wise addition."""
        total = Color(0.1, 0.2, 0.3) + Color(0.5, 0.5, 0.5)
        assert total.to_tuple() == pytest.approx((0.6, 0.7, 0.8))

    def test_multiply_by_color_is_channel_wise(self):
        """Test the channel-wise product of two colors."""
        assert Color(0.5, 1.0, 2.0) * Color(2.0, 0.5, 0.25) == Color(1.0, 0.5, 0.5)

    def test_multiply_by_scalar(self):
        """Test uniform scaling from both sides."""
        assert Color(0.5, 1.0, 2.0) * 2.0 == Color(1.0, 2.0, 4.0)
        assert 0.5 * Color(0.5, 1.0, 2.0) == Color(0.25, 0.5, 1.0)

    def test_clamp_to_unit(self):
        """Test that every channel is truncated to [0, 1]."""
        assert Color(-0.5, 0.25, 3.0).clamp_to_unit() == Color(0.0, 0.25, 1.0)

    def test_clamp_is_identity_inside_range(self):
        """Test that in-range colors are unchanged by clamping."""
        c = Color(0.0, 0.5, 1.0)
        assert c.clamp_to_unit() == c

    def test_iteration(self):
        """Test unpacking into channels."""
        r, g, b = Color(0.1, 0.2, 0.3)
        assert (r, g, b) == (0.1, 0.2, 0.3)

    def test_colors_are_immutable(self):
        """Test that channels cannot be reassigned."""
        c = Color.black()
        with pytest.raises(AttributeError):
            c.r = 1.0


class TestRay:
    """Tests for rays and mirror reflection."""

    def test_ray_at(self):
        """Test evaluation of origin + t * direction."""
        ray = Ray(Point3(1.0, 0.0, 0.0), Vector3(0.0, 2.0, 0.0))
        assert ray.at(0.0) == Point3(1.0, 0.0, 0.0)
        assert ray.at(1.5) == Point3(1.0, 3.0, 0.0)
        assert ray_at(ray, 1.5) == ray.at(1.5)

    def test_direction_is_not_normalized(self):
        """Test that the stored direction keeps its length."""
        ray = Ray(Point3.origin(), Vector3(0.0, 0.0, 5.0))
        assert ray.direction == Vector3(0.0, 0.0, 5.0)

    def test_type_checks(self):
        """Test that origin and direction must be a point and a vector."""
        with pytest.raises(TypeError):
            Ray(Vector3(0.0, 0.0, 0.0), Vector3(0.0, 0.0, 1.0))
        with pytest.raises(TypeError):
            Ray(Point3.origin(), Point3(0.0, 0.0, 1.0))

    def test_reflect(self):
        """Test mirror reflection about a unit normal."""
        incident = Vector3(1.0, -1.0, 0.0)
        normal = Vector3(0.0, 1.0, 0.0)
        assert reflect(incident, normal) == Vector3(1.0, 1.0, 0.0)

    def test_reflect_head_on(self):
        """Test that a head-on ray bounces straight back."""
        assert reflect(Vector3(0.0, 0.0, 1.0), Vector3(0.0, 0.0, -1.0)) == Vector3(
            0.0, 0.0, -1.0
        )


class TestShadingConfig:
    """Tests for ShadingConfig defaults and validation."""

    def test_defaults(self):
        """Test the module-level defaults."""
        assert DEFAULT_CONFIG.shadow_epsilon == SHADOW_EPSILON == 1e-3
        assert DEFAULT_CONFIG.shininess == SHININESS == 100.0
        assert DEFAULT_CONFIG.reflection_weight == REFLECTION_WEIGHT == 0.3
        assert DEFAULT_CONFIG.max_depth == DEFAULT_MAX_DEPTH
        assert DEFAULT_CONFIG.background == Color.black()

    def test_custom_values(self):
        """Test overriding individual parameters."""
        config = ShadingConfig(background=Color(0.1, 0.1, 0.2), max_depth=2)
        assert config.background == Color(0.1, 0.1, 0.2)
        assert config.max_depth == 2
        assert config.shininess == SHININESS

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"shadow_epsilon": 0.0},
            {"shadow_epsilon": -1e-3},
            {"shininess": 0.0},
            {"reflection_weight": -0.1},
            {"reflection_weight": math.nan},
            {"max_depth": -1},
        ],
    )
    def test_invalid_values_raise(self, kwargs):
        """Test that out-of-range parameters are rejected."""
        with pytest.raises(ValueError):
            ShadingConfig(**kwargs)

    @pytest.mark.parametrize("max_depth", [1.5, 2.0, "3"])
    def test_non_integer_depth_raises(self, max_depth):
        """Test that the depth budget must be a whole number."""
        with pytest.raises(TypeError):
            ShadingConfig(max_depth=max_depth)

    def test_background_must_be_color(self):
        """Test that the background type is checked."""
        with pytest.raises(TypeError):
            ShadingConfig(background=(0.0, 0.0, 0.0))

    def test_config_is_immutable(self):
        """Test that a config cannot be modified after creation."""
        with pytest.raises(AttributeError):
            DEFAULT_CONFIG.max_depth = 10
