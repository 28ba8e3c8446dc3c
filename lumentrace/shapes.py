"""
Geometric shapes for the ray tracer.

Every shape is defined once in its own object space (a unit sphere at the
origin, the xz-plane, the [-1, 1] cube, ...) and placed in the world by an
affine ``transform``. The base class maps rays and points between the two
spaces; subclasses only implement the object-space ``local_intersect`` and
``local_normal_at``.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Optional
import math

from .constants import EPSILON, NEAR_ZERO
from .errors import DegenerateRayError
from .intersection import Intersection
from .materials import Material
from .matrix import Matrix
from .ray import Ray
from .vec4 import Vec4, point, vector


class Shape(ABC):
    """Abstract base class for all objects that can be hit by rays."""

    def __init__(self, transform: Optional[Matrix] = None, material: Optional[Material] = None):
        """Create a shape.

        Args:
            transform: Object-to-world transform (identity if None)
            material: Material for shading (default material if None)
        """
        self.transform = transform if transform is not None else Matrix.identity()
        self.material = material if material is not None else Material()

    def intersect(self, ray: Ray) -> list[Intersection]:
        """Intersect a world-space ray with this shape.

        Returns:
            Intersections in no particular order

        Raises:
            NonInvertibleMatrixError: If the transform is singular
        """
        local_ray = ray.transform(self.transform.inverse())
        return self.local_intersect(local_ray)

    def normal_at(self, world_point: Vec4) -> Vec4:
        """Get the unit surface normal at a world-space point.

        Normals go back to world space through the inverse-transpose of the
        transform, which keeps them perpendicular under non-uniform scaling.
        """
        inverse = self.transform.inverse()
        local_point = inverse * world_point
        local_normal = self.local_normal_at(local_point)
        world_normal = inverse.transpose() * local_normal
        return vector(world_normal.x, world_normal.y, world_normal.z).normalize()

    @abstractmethod
    def local_intersect(self, ray: Ray) -> list[Intersection]:
        """Intersect an object-space ray with the canonical shape."""
        pass

    @abstractmethod
    def local_normal_at(self, local_point: Vec4) -> Vec4:
        """Get the object-space normal at an object-space point."""
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}(transform={self.transform!r})"


class Sphere(Shape):
    """A unit sphere centered at the object-space origin."""

    def local_intersect(self, ray: Ray) -> list[Intersection]:
        """Solve |origin + t * direction|^2 = 1 for t.

        Raises:
            DegenerateRayError: If the ray direction has zero length
        """
        sphere_to_ray = ray.origin - point(0, 0, 0)
        a = ray.direction.dot(ray.direction)
        if a < NEAR_ZERO:
            raise DegenerateRayError(ray)

        b = 2 * ray.direction.dot(sphere_to_ray)
        c = sphere_to_ray.dot(sphere_to_ray) - 1

        discriminant = b * b - 4 * a * c
        if discriminant < 0:
            return []

        sqrtd = math.sqrt(discriminant)
        return [
            Intersection((-b - sqrtd) / (2 * a), self),
            Intersection((-b + sqrtd) / (2 * a), self),
        ]

    def local_normal_at(self, local_point: Vec4) -> Vec4:
        return (local_point - point(0, 0, 0)).normalize()


class Plane(Shape):
    """The infinite xz-plane (y = 0)."""

    def local_intersect(self, ray: Ray) -> list[Intersection]:
        # Parallel or coplanar rays never hit
        if abs(ray.direction.y) < NEAR_ZERO:
            return []
        return [Intersection(-ray.origin.y / ray.direction.y, self)]

    def local_normal_at(self, local_point: Vec4) -> Vec4:
        return vector(0, 1, 0)


class Cube(Shape):
    """An axis-aligned cube spanning [-1, 1] on every axis."""

    @staticmethod
    def _check_axis(origin: float, direction: float) -> tuple[float, float]:
        """Return the entry and exit ``t`` of one pair of parallel faces."""
        t_min_numerator = -1 - origin
        t_max_numerator = 1 - origin

        if abs(direction) >= NEAR_ZERO:
            t_min = t_min_numerator / direction
            t_max = t_max_numerator / direction
        else:
            t_min = math.copysign(math.inf, t_min_numerator)
            t_max = math.copysign(math.inf, t_max_numerator)

        if t_min > t_max:
            t_min, t_max = t_max, t_min
        return t_min, t_max

    def local_intersect(self, ray: Ray) -> list[Intersection]:
        """Slab test against the three pairs of faces."""
        x_min, x_max = self._check_axis(ray.origin.x, ray.direction.x)
        y_min, y_max = self._check_axis(ray.origin.y, ray.direction.y)
        z_min, z_max = self._check_axis(ray.origin.z, ray.direction.z)

        t_min = max(x_min, y_min, z_min)
        t_max = min(x_max, y_max, z_max)

        if t_min > t_max:
            return []
        return [Intersection(t_min, self), Intersection(t_max, self)]

    def local_normal_at(self, local_point: Vec4) -> Vec4:
        """The face normal is the axis of the largest coordinate."""
        x, y, z = local_point.x, local_point.y, local_point.z
        max_c = max(abs(x), abs(y), abs(z))

        if max_c == abs(x):
            return vector(x, 0, 0)
        if max_c == abs(y):
            return vector(0, y, 0)
        return vector(0, 0, z)


class Cylinder(Shape):
    """A unit-radius cylinder around the y axis.

    Infinite by default; ``minimum``/``maximum`` truncate it (both bounds
    exclusive) and ``closed`` adds end caps at the truncation planes.
    """

    def __init__(
        self,
        transform: Optional[Matrix] = None,
        material: Optional[Material] = None,
        minimum: float = -math.inf,
        maximum: float = math.inf,
        closed: bool = False
    ):
        super().__init__(transform, material)
        self.minimum = minimum
        self.maximum = maximum
        self.closed = closed

    @staticmethod
    def _check_cap(ray: Ray, t: float) -> bool:
        """Is the ray within radius 1 of the y axis at ``t``?"""
        x = ray.origin.x + t * ray.direction.x
        z = ray.origin.z + t * ray.direction.z
        return x * x + z * z <= 1

    def _intersect_caps(self, ray: Ray, xs: list[Intersection]) -> None:
        if not self.closed or abs(ray.direction.y) < NEAR_ZERO:
            return

        t = (self.minimum - ray.origin.y) / ray.direction.y
        if self._check_cap(ray, t):
            xs.append(Intersection(t, self))

        t = (self.maximum - ray.origin.y) / ray.direction.y
        if self._check_cap(ray, t):
            xs.append(Intersection(t, self))

    def local_intersect(self, ray: Ray) -> list[Intersection]:
        xs: list[Intersection] = []
        dx, dz = ray.direction.x, ray.direction.z
        ox, oz = ray.origin.x, ray.origin.z

        a = dx * dx + dz * dz
        # a == 0 means the ray is parallel to the y axis: only the caps can be hit
        if abs(a) >= NEAR_ZERO:
            b = 2 * ox * dx + 2 * oz * dz
            c = ox * ox + oz * oz - 1

            discriminant = b * b - 4 * a * c
            if discriminant < 0:
                return []

            sqrtd = math.sqrt(discriminant)
            t0 = (-b - sqrtd) / (2 * a)
            t1 = (-b + sqrtd) / (2 * a)
            if t0 > t1:
                t0, t1 = t1, t0

            for t in (t0, t1):
                y = ray.origin.y + t * ray.direction.y
                if self.minimum < y < self.maximum:
                    xs.append(Intersection(t, self))

        self._intersect_caps(ray, xs)
        return xs

    def local_normal_at(self, local_point: Vec4) -> Vec4:
        dist = local_point.x ** 2 + local_point.z ** 2

        if dist < 1 and local_point.y >= self.maximum - EPSILON:
            return vector(0, 1, 0)
        if dist < 1 and local_point.y <= self.minimum + EPSILON:
            return vector(0, -1, 0)
        return vector(local_point.x, 0, local_point.z)

    def __repr__(self) -> str:
        return (
            f"Cylinder(minimum={self.minimum}, maximum={self.maximum}, "
            f"closed={self.closed}, transform={self.transform!r})"
        )


class Cone(Shape):
    """A double-napped cone x^2 - y^2 + z^2 = 0 with its apex at the origin.

    Truncation and caps work as for Cylinder, except that the cap radius at
    a cap plane equals ``|y|`` of that plane.
    """

    def __init__(
        self,
        transform: Optional[Matrix] = None,
        material: Optional[Material] = None,
        minimum: float = -math.inf,
        maximum: float = math.inf,
        closed: bool = False
    ):
        super().__init__(transform, material)
        self.minimum = minimum
        self.maximum = maximum
        self.closed = closed

    @staticmethod
    def _check_cap(ray: Ray, t: float, y: float) -> bool:
        x = ray.origin.x + t * ray.direction.x
        z = ray.origin.z + t * ray.direction.z
        return x * x + z * z <= y * y

    def _intersect_caps(self, ray: Ray, xs: list[Intersection]) -> None:
        if not self.closed or abs(ray.direction.y) < NEAR_ZERO:
            return

        t = (self.minimum - ray.origin.y) / ray.direction.y
        if self._check_cap(ray, t, self.minimum):
            xs.append(Intersection(t, self))

        t = (self.maximum - ray.origin.y) / ray.direction.y
        if self._check_cap(ray, t, self.maximum):
            xs.append(Intersection(t, self))

    def local_intersect(self, ray: Ray) -> list[Intersection]:
        xs: list[Intersection] = []
        dx, dy, dz = ray.direction.x, ray.direction.y, ray.direction.z
        ox, oy, oz = ray.origin.x, ray.origin.y, ray.origin.z

        a = dx * dx - dy * dy + dz * dz
        b = 2 * ox * dx - 2 * oy * dy + 2 * oz * dz
        c = ox * ox - oy * oy + oz * oz

        if abs(a) >= NEAR_ZERO:
            discriminant = b * b - 4 * a * c
            # A ray missing both nappes can still cross the caps near the apex
            if discriminant >= 0:
                sqrtd = math.sqrt(discriminant)
                t0 = (-b - sqrtd) / (2 * a)
                t1 = (-b + sqrtd) / (2 * a)
                if t0 > t1:
                    t0, t1 = t1, t0

                for t in (t0, t1):
                    y = oy + t * dy
                    if self.minimum < y < self.maximum:
                        xs.append(Intersection(t, self))
        elif abs(b) >= NEAR_ZERO:
            # Ray parallel to one of the nappes: a single linear root
            t = -c / (2 * b)
            y = oy + t * dy
            if self.minimum < y < self.maximum:
                xs.append(Intersection(t, self))

        self._intersect_caps(ray, xs)
        return xs

    def local_normal_at(self, local_point: Vec4) -> Vec4:
        x, y, z = local_point.x, local_point.y, local_point.z
        dist = x * x + z * z

        if dist < y * y and y >= self.maximum - EPSILON:
            return vector(0, 1, 0)
        if dist < y * y and y <= self.minimum + EPSILON:
            return vector(0, -1, 0)

        # The apex has no defined normal and yields the zero vector
        radial = math.sqrt(dist)
        normal_y = -radial if y > 0 else radial
        return vector(x, normal_y, z)

    def __repr__(self) -> str:
        return (
            f"Cone(minimum={self.minimum}, maximum={self.maximum}, "
            f"closed={self.closed}, transform={self.transform!r})"
        )


def glass_sphere(transform: Optional[Matrix] = None, refractive_index: float = 1.5) -> Sphere:
    """A fully transparent sphere, handy for refraction scenes and tests."""
    material = Material(transparency=1.0, refractive_index=refractive_index)
    return Sphere(transform, material)
