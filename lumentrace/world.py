"""
The World: every shape in a scene plus its light.

Implements:
- Ray/scene intersection with hit selection
- Shadow tests toward the point light
- Recursive shading: Phong surface color plus reflected and refracted
  contributions, blended with Schlick's Fresnel approximation

The recursion ``color_at -> shade_hit -> reflected_color/refracted_color ->
color_at`` decrements ``remaining`` on every re-entry and returns black once
it reaches zero, so mutually reflective surfaces always terminate.
"""

from __future__ import annotations
from operator import attrgetter
from typing import Optional
import math

from .color import Color
from .constants import DEFAULT_RECURSION_DEPTH
from .errors import SceneConfigurationError
from .intersection import Intersection, IntersectionComputations, hit, prepare_computations
from .lights import PointLight
from .materials import Material
from .ray import Ray
from .shapes import Shape, Sphere
from .transformations import scaling
from .vec4 import Vec4, point


class World:
    """A collection of shapes lit by a single point light.

    The World owns its shapes. Shapes, materials and the light are set up
    before rendering and treated as read-only while a render is running.
    """

    def __init__(self, objects: Optional[list[Shape]] = None, light: Optional[PointLight] = None):
        self.objects: list[Shape] = objects if objects is not None else []
        self.light = light

    def add(self, shape: Shape) -> None:
        """Add a shape to the world."""
        self.objects.append(shape)

    def __len__(self) -> int:
        return len(self.objects)

    def __iter__(self):
        return iter(self.objects)

    def __contains__(self, shape: object) -> bool:
        return any(obj is shape for obj in self.objects)

    def intersect(self, ray: Ray) -> list[Intersection]:
        """Intersect ``ray`` with every shape, sorted by ascending ``t``.

        The sort is stable, so equal ``t`` values keep shape insertion order.
        """
        xs: list[Intersection] = []
        for obj in self.objects:
            xs.extend(obj.intersect(ray))
        xs.sort(key=attrgetter('t'))
        return xs

    def _require_light(self) -> PointLight:
        if self.light is None:
            raise SceneConfigurationError("World has no light source")
        return self.light

    def is_shadowed(self, world_point: Vec4) -> bool:
        """Is any shape between ``world_point`` and the light?"""
        light = self._require_light()
        distance = light.distance_to(world_point)
        ray = Ray(world_point, (light.position - world_point).normalize())

        h = hit(self.intersect(ray))
        return h is not None and h.t < distance

    def shade_hit(self, comps: IntersectionComputations, remaining: int = DEFAULT_RECURSION_DEPTH) -> Color:
        """Color at a prepared hit: surface lighting plus reflection and refraction.

        Args:
            comps: Precomputed hit data
            remaining: Recursion budget left for secondary rays

        Returns:
            The combined color
        """
        light = self._require_light()
        material = comps.object.material

        # over_point keeps the shadow ray from re-hitting its own surface
        in_shadow = self.is_shadowed(comps.over_point)
        surface = material.lighting(
            comps.object, light, comps.over_point, comps.eye, comps.normal, in_shadow
        )

        reflected = self.reflected_color(comps, remaining)
        refracted = self.refracted_color(comps, remaining)

        if material.reflective > 0 and material.transparency > 0:
            reflectance = comps.schlick()
            return surface + reflected * reflectance + refracted * (1 - reflectance)
        return surface + reflected + refracted

    def reflected_color(self, comps: IntersectionComputations, remaining: int = DEFAULT_RECURSION_DEPTH) -> Color:
        """Color arriving along the reflection vector, scaled by reflectivity."""
        reflective = comps.object.material.reflective
        if remaining <= 0 or reflective == 0:
            return Color.black()

        reflect_ray = Ray(comps.over_point, comps.reflection_vector)
        color = self.color_at(reflect_ray, remaining - 1)
        return color * reflective

    def refracted_color(self, comps: IntersectionComputations, remaining: int = DEFAULT_RECURSION_DEPTH) -> Color:
        """Color arriving through the surface, bent by Snell's law.

        Returns black on total internal reflection.
        """
        transparency = comps.object.material.transparency
        if remaining <= 0 or transparency == 0:
            return Color.black()

        n_ratio = comps.n1 / comps.n2
        cos_i = comps.eye.dot(comps.normal)
        sin2_t = n_ratio ** 2 * (1 - cos_i ** 2)
        if sin2_t > 1:
            return Color.black()

        cos_t = math.sqrt(1.0 - sin2_t)
        direction = comps.normal * (n_ratio * cos_i - cos_t) - comps.eye * n_ratio
        refract_ray = Ray(comps.under_point, direction)

        color = self.color_at(refract_ray, remaining - 1)
        return color * transparency

    def color_at(self, ray: Ray, remaining: int = DEFAULT_RECURSION_DEPTH) -> Color:
        """Trace ``ray`` into the world and return the color it sees.

        Returns black when the ray hits nothing.

        Raises:
            SceneConfigurationError: For singular transforms, degenerate rays
                or a missing light
        """
        xs = self.intersect(ray)
        h = hit(xs)
        if h is None:
            return Color.black()

        # The full list is needed for n1/n2 when transparent shapes overlap
        comps = prepare_computations(h, ray, xs)
        return self.shade_hit(comps, remaining)

    def __repr__(self) -> str:
        return f"World(objects={len(self.objects)}, light={self.light!r})"


def default_world() -> World:
    """Two concentric spheres lit from the upper left.

    The outer unit sphere is green-ish with diffuse 0.7 and specular 0.2;
    the inner sphere is a default sphere scaled by 0.5.
    """
    light = PointLight(point(-10, 10, -10), Color(1, 1, 1))

    outer = Sphere(material=Material(color=Color(0.8, 1.0, 0.6), diffuse=0.7, specular=0.2))
    inner = Sphere(transform=scaling(0.5, 0.5, 0.5))

    return World([outer, inner], light)
