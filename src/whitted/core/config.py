"""Shading configuration for the Whitted integrator.

The constants below are the fixed values of the local illumination model.
ShadingConfig bundles them so tests and callers can pass an explicit,
immutable configuration instead of relying on process-wide state.

Example:
    >>> from whitted.core.config import ShadingConfig
    >>> from whitted.core.color import Color
    >>> config = ShadingConfig(background=Color(0.1, 0.1, 0.2), max_depth=2)
    >>> config.shininess
    100.0
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from whitted.core.color import Color

# =============================================================================
# Shading Constants
# =============================================================================

# Offset along the surface normal for secondary ray origins ("shadow acne")
SHADOW_EPSILON = 1e-3

# Blinn-Phong specular exponent
SHININESS = 100.0

# Fixed, non-physical weight applied to the mirror reflection term
REFLECTION_WEIGHT = 0.3

# Default recursion budget for reflections
DEFAULT_MAX_DEPTH = 5


@dataclass(frozen=True)
class ShadingConfig:
    """Parameters of the local illumination model.

    Attributes:
        shadow_epsilon: Distance secondary ray origins are pushed along the
            hit normal. Must be positive.
        shininess: Blinn-Phong exponent applied to max(dot(n, h), 0).
        reflection_weight: Scale applied to the recursively traced mirror
            reflection before it is added to the local color.
        background: Color returned for rays that hit nothing.
        max_depth: Default reflection budget used by render_ray().
    """

    shadow_epsilon: float = SHADOW_EPSILON
    shininess: float = SHININESS
    reflection_weight: float = REFLECTION_WEIGHT
    background: Color = field(default_factory=Color.black)
    max_depth: int = DEFAULT_MAX_DEPTH

    def __post_init__(self) -> None:
        if not (math.isfinite(self.shadow_epsilon) and self.shadow_epsilon > 0.0):
            raise ValueError(f"shadow_epsilon must be positive, got {self.shadow_epsilon}")
        if not (math.isfinite(self.shininess) and self.shininess > 0.0):
            raise ValueError(f"shininess must be positive, got {self.shininess}")
        if not (math.isfinite(self.reflection_weight) and self.reflection_weight >= 0.0):
            raise ValueError(
                f"reflection_weight must be non-negative, got {self.reflection_weight}"
            )
        if not isinstance(self.background, Color):
            raise TypeError("background must be a Color")
        if not isinstance(self.max_depth, int):
            raise TypeError(f"max_depth must be an int, got {self.max_depth!r}")
        if self.max_depth < 0:
            raise ValueError(f"max_depth must be non-negative, got {self.max_depth}")


DEFAULT_CONFIG = ShadingConfig()
