"""
Surface materials and the Phong local illumination model.

A material carries:
- A flat color, or a pattern sampled per point that overrides it
- Phong coefficients (ambient, diffuse, specular, shininess)
- Reflectivity, transparency and refractive index for the recursive
  reflection and refraction rays traced by the World
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional, TYPE_CHECKING
import math

from .color import Color
from .constants import VACUUM
from .lights import PointLight
from .patterns import Pattern
from .vec4 import Vec4

if TYPE_CHECKING:
    from .shapes import Shape


@dataclass
class Material:
    """Surface description used by ``lighting`` and the World's recursive tracing.

    Attributes:
        color: Base color, used when no pattern is set
        ambient: Fraction of light reflected regardless of orientation
        diffuse: Lambertian reflection coefficient
        specular: Strength of the highlight
        shininess: Highlight exponent (higher is smaller and sharper)
        reflective: 0 (matte) to 1 (perfect mirror)
        transparency: 0 (opaque) to 1 (fully transparent)
        refractive_index: Index of refraction, 1.0 for vacuum
        pattern: Optional pattern overriding ``color``
    """
    color: Color = field(default_factory=Color.white)
    ambient: float = 0.1
    diffuse: float = 0.9
    specular: float = 0.9
    shininess: float = 200.0
    reflective: float = 0.0
    transparency: float = 0.0
    refractive_index: float = VACUUM
    pattern: Optional[Pattern] = None

    def __post_init__(self):
        if not 0.0 <= self.reflective <= 1.0:
            raise ValueError(f"reflective must be in [0, 1], got {self.reflective}")
        if not 0.0 <= self.transparency <= 1.0:
            raise ValueError(f"transparency must be in [0, 1], got {self.transparency}")
        if self.refractive_index <= 0:
            raise ValueError(f"refractive_index must be positive, got {self.refractive_index}")

    def color_at(self, shape: Shape, world_point: Vec4) -> Color:
        """Base color at a point: the pattern if set, otherwise ``color``."""
        if self.pattern is not None:
            return self.pattern.pattern_at_shape(shape, world_point)
        return self.color

    def lighting(
        self,
        shape: Shape,
        light: PointLight,
        point: Vec4,
        eye: Vec4,
        normal: Vec4,
        in_shadow: bool = False
    ) -> Color:
        """Phong shading of ``point`` as seen from ``eye``.

        Args:
            shape: The shape being shaded (for pattern space)
            light: The light source
            point: Point being lit, in world space
            eye: Unit vector toward the viewer
            normal: Unit surface normal
            in_shadow: If True only the ambient term contributes

        Returns:
            Unclamped color
        """
        effective_color = self.color_at(shape, point) * light.intensity
        ambient = effective_color * self.ambient

        if in_shadow:
            return ambient

        light_dir = (light.position - point).normalize()
        light_dot_normal = light_dir.dot(normal)

        # Light on the other side of the surface
        if light_dot_normal < 0:
            return ambient

        diffuse = effective_color * self.diffuse * light_dot_normal

        reflect_dir = (-light_dir).reflect(normal)
        reflect_dot_eye = reflect_dir.dot(eye)
        if reflect_dot_eye <= 0:
            return ambient + diffuse

        factor = math.pow(reflect_dot_eye, self.shininess)
        specular = light.intensity * self.specular * factor
        return ambient + diffuse + specular
