"""
Intersection records, hit selection and per-hit shading data.

An Intersection pairs a ray parameter ``t`` with the shape that was hit.
It never owns the shape: the World does, and it outlives every
intersection produced while rendering.
"""

from __future__ import annotations
from dataclasses import dataclass
from operator import attrgetter
from typing import Iterable, Optional, Sequence, TYPE_CHECKING
import math

from .constants import EPSILON, VACUUM
from .ray import Ray
from .vec4 import Vec4

if TYPE_CHECKING:
    from .shapes import Shape


@dataclass(eq=False)
class Intersection:
    """A ray parameter and the shape hit at that parameter.

    Equality is identity: two records at the same ``t`` on the same shape
    are still distinct entries in an intersection list.
    """
    t: float
    object: Shape


def intersections(*xs: Intersection) -> list[Intersection]:
    """Collect intersections into a list sorted by ``t``."""
    return sorted(xs, key=attrgetter('t'))


def hit(xs: Iterable[Intersection]) -> Optional[Intersection]:
    """Return the visible intersection: the lowest non-negative ``t``.

    Negative ``t`` values lie behind the ray origin and are skipped.
    The input need not be sorted; for equal ``t`` the earliest entry wins.
    """
    return min((i for i in xs if i.t >= 0), key=attrgetter('t'), default=None)


@dataclass
class IntersectionComputations:
    """Precomputed values at a hit, used for shading.

    Attributes:
        t: The ray parameter at the hit
        object: The shape that was hit
        point: The hit point in world space
        over_point: ``point`` nudged along the normal, origin for
            reflection and shadow rays
        under_point: ``point`` nudged against the normal, origin for
            refraction rays
        eye: Vector from the hit back toward the ray origin
        normal: Surface normal, flipped to face the eye when ``inside``
        reflection_vector: Incoming direction reflected about the normal
        inside: True if the ray hit the surface from inside the shape
        n1: Refractive index of the medium being left
        n2: Refractive index of the medium being entered
    """
    t: float
    object: Shape
    point: Vec4
    over_point: Vec4
    under_point: Vec4
    eye: Vec4
    normal: Vec4
    reflection_vector: Vec4
    inside: bool
    n1: float = VACUUM
    n2: float = VACUUM

    def schlick(self) -> float:
        """Schlick's approximation of the Fresnel reflectance at this hit.

        Returns 1.0 under total internal reflection.
        """
        cos = self.eye.dot(self.normal)
        if self.n1 > self.n2:
            n = self.n1 / self.n2
            sin2_t = n * n * (1.0 - cos * cos)
            if sin2_t > 1.0:
                return 1.0
            cos = math.sqrt(1.0 - sin2_t)

        r0 = ((self.n1 - self.n2) / (self.n1 + self.n2)) ** 2
        return r0 + (1.0 - r0) * (1.0 - cos) ** 5


def _refractive_indices(
    intersection: Intersection,
    xs: Sequence[Intersection],
) -> tuple[float, float]:
    """Walk the sorted intersections to find the media on each side of the hit.

    ``containers`` holds the shapes the ray is currently inside, in order of
    entry. Membership is by shape identity, never by value, so two shapes
    with identical geometry and material stay distinct.
    """
    containers: list[Shape] = []
    n1 = n2 = VACUUM

    for i in xs:
        if i is intersection:
            n1 = containers[-1].material.refractive_index if containers else VACUUM

        for index, shape in enumerate(containers):
            if shape is i.object:
                del containers[index]
                break
        else:
            containers.append(i.object)

        if i is intersection:
            n2 = containers[-1].material.refractive_index if containers else VACUUM
            break

    return n1, n2


def prepare_computations(
    intersection: Intersection,
    ray: Ray,
    xs: Optional[Sequence[Intersection]] = None,
) -> IntersectionComputations:
    """Build the shading data for ``intersection`` along ``ray``.

    Args:
        intersection: The hit being shaded
        ray: The ray that produced it
        xs: All intersections along the ray, sorted by ``t``. Required for
            correct ``n1``/``n2`` when transparent shapes overlap; when omitted
            the hit is treated as the only surface on the ray.

    Returns:
        IntersectionComputations for the hit
    """
    if xs is None:
        xs = [intersection]

    shape = intersection.object
    point = ray.position(intersection.t)
    eye = -ray.direction
    normal = shape.normal_at(point)

    inside = normal.dot(eye) < 0
    if inside:
        normal = -normal

    offset = normal * EPSILON
    n1, n2 = _refractive_indices(intersection, xs)

    return IntersectionComputations(
        t=intersection.t,
        object=shape,
        point=point,
        over_point=point + offset,
        under_point=point - offset,
        eye=eye,
        normal=normal,
        reflection_vector=ray.direction.reflect(normal),
        inside=inside,
        n1=n1,
        n2=n2,
    )
