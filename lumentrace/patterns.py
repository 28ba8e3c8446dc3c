"""
Procedural color patterns.

Implements:
- Stripes along x
- Linear gradient along x
- Concentric rings in the xz-plane
- 3D checkers
- A test pattern that returns its input point as a color

A pattern has its own transform, applied after the owning shape's transform,
so it can be scaled or rotated independently of the geometry.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Optional, TYPE_CHECKING
import math

from .color import Color
from .matrix import Matrix
from .vec4 import Vec4

if TYPE_CHECKING:
    from .shapes import Shape


class Pattern(ABC):
    """Abstract base class for patterns."""

    def __init__(self, transform: Optional[Matrix] = None):
        self.transform = transform if transform is not None else Matrix.identity()

    @abstractmethod
    def pattern_at(self, pattern_point: Vec4) -> Color:
        """Get the pattern color at a point in pattern space.

        Args:
            pattern_point: Point already mapped into pattern space

        Returns:
            Color at this location
        """
        pass

    def pattern_at_shape(self, shape: Shape, world_point: Vec4) -> Color:
        """Sample the pattern for a world-space point on ``shape``.

        The point goes world -> object space (shape transform) -> pattern
        space (pattern transform) before evaluation.

        Raises:
            NonInvertibleMatrixError: If either transform is singular
        """
        object_point = shape.transform.inverse() * world_point
        pattern_point = self.transform.inverse() * object_point
        return self.pattern_at(pattern_point)


class TwoColorPattern(Pattern):
    """Base for patterns alternating or blending between two colors."""

    def __init__(self, a: Color, b: Color, transform: Optional[Matrix] = None):
        super().__init__(transform)
        self.a = a
        self.b = b

    def __repr__(self) -> str:
        return f"{type(self).__name__}(a={self.a}, b={self.b})"


class StripePattern(TwoColorPattern):
    """Alternating stripes, one unit wide, along the x axis."""

    def pattern_at(self, pattern_point: Vec4) -> Color:
        if math.floor(pattern_point.x) % 2 == 0:
            return self.a
        return self.b


class GradientPattern(TwoColorPattern):
    """Linear blend from ``a`` to ``b`` over each unit of x."""

    def pattern_at(self, pattern_point: Vec4) -> Color:
        fraction = pattern_point.x - math.floor(pattern_point.x)
        return self.a + (self.b - self.a) * fraction


class RingPattern(TwoColorPattern):
    """Concentric rings around the y axis."""

    def pattern_at(self, pattern_point: Vec4) -> Color:
        distance = math.sqrt(pattern_point.x ** 2 + pattern_point.z ** 2)
        if math.floor(distance) % 2 == 0:
            return self.a
        return self.b


class CheckerPattern(TwoColorPattern):
    """Unit cubes of alternating color in all three dimensions."""

    def pattern_at(self, pattern_point: Vec4) -> Color:
        total = (
            math.floor(pattern_point.x)
            + math.floor(pattern_point.y)
            + math.floor(pattern_point.z)
        )
        if total % 2 == 0:
            return self.a
        return self.b


class PointPattern(Pattern):
    """Returns the pattern-space point itself as a color.

    Used to check that shape and pattern transforms compose correctly.
    """

    def pattern_at(self, pattern_point: Vec4) -> Color:
        return Color(pattern_point.x, pattern_point.y, pattern_point.z)

    def __repr__(self) -> str:
        return "PointPattern()"
