"""Render configuration."""

from __future__ import annotations
from dataclasses import dataclass
import math

from .constants import DEFAULT_RECURSION_DEPTH


@dataclass
class RenderSettings:
    """Configuration for a render.

    Attributes:
        width: Image width in pixels
        height: Image height in pixels
        field_of_view: Horizontal/vertical extent of the wider side, in radians
        max_depth: Reflection/refraction bounces per primary ray
        gamma: Gamma applied when saving through Pillow
    """
    width: int = 400
    height: int = 200
    field_of_view: float = math.pi / 3
    max_depth: int = DEFAULT_RECURSION_DEPTH
    gamma: float = 1.0

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Image size must be positive, got {self.width}x{self.height}")
        if self.max_depth < 0:
            raise ValueError(f"max_depth must be non-negative, got {self.max_depth}")
        if not 0 < self.field_of_view < math.pi:
            raise ValueError(f"field_of_view must be in (0, pi) radians, got {self.field_of_view}")
        if self.gamma <= 0:
            raise ValueError(f"gamma must be positive, got {self.gamma}")
