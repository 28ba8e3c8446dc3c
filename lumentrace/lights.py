"""
Light sources for the ray tracer.

A World holds exactly one point light. It has no size and no falloff:
shadows are hard and brightness does not depend on distance.
"""

from __future__ import annotations
from dataclasses import dataclass

from .color import Color
from .vec4 import Vec4


@dataclass
class PointLight:
    """A point light source.

    Attributes:
        position: Position of the light in world space
        intensity: Color and brightness of the light
    """
    position: Vec4
    intensity: Color

    def distance_to(self, world_point: Vec4) -> float:
        """Distance from ``world_point`` to the light."""
        return (self.position - world_point).magnitude()
