"""
Homogeneous 4-tuple for points and vectors.

Points carry w=1 and vectors w=0, so transforms translate points but
leave directions alone. Arithmetic keeps the w discriminator consistent:
- point - point = vector
- point + vector = point
- vector +/- vector = vector
"""

from __future__ import annotations
import math
import numpy as np

from .constants import EPSILON


class Vec4:
    """A homogeneous (x, y, z, w) tuple.

    Uses numpy internally for efficient computation while providing
    a clean, Pythonic API.
    """

    __slots__ = ('_data',)

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0, w: float = 0.0):
        self._data = np.array([x, y, z, w], dtype=np.float64)

    @classmethod
    def from_array(cls, arr: np.ndarray) -> Vec4:
        """Create Vec4 from numpy array."""
        v = cls.__new__(cls)
        v._data = np.asarray(arr, dtype=np.float64)
        return v

    @property
    def x(self) -> float:
        return float(self._data[0])

    @property
    def y(self) -> float:
        return float(self._data[1])

    @property
    def z(self) -> float:
        return float(self._data[2])

    @property
    def w(self) -> float:
        return float(self._data[3])

    def is_point(self) -> bool:
        return self.w == 1.0

    def is_vector(self) -> bool:
        return self.w == 0.0

    def __repr__(self) -> str:
        kind = 'point' if self.is_point() else 'vector' if self.is_vector() else 'Vec4'
        return f"{kind}({self.x:.5f}, {self.y:.5f}, {self.z:.5f})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vec4):
            return NotImplemented
        return bool(np.allclose(self._data, other._data, rtol=0.0, atol=EPSILON))

    def __neg__(self) -> Vec4:
        return Vec4.from_array(-self._data)

    def __add__(self, other: Vec4) -> Vec4:
        return Vec4.from_array(self._data + other._data)

    def __sub__(self, other: Vec4) -> Vec4:
        return Vec4.from_array(self._data - other._data)

    def __mul__(self, scalar: float) -> Vec4:
        return Vec4.from_array(self._data * scalar)

    def __rmul__(self, scalar: float) -> Vec4:
        return Vec4.from_array(scalar * self._data)

    def __truediv__(self, scalar: float) -> Vec4:
        return Vec4.from_array(self._data / scalar)

    def __getitem__(self, index: int) -> float:
        return float(self._data[index])

    def magnitude(self) -> float:
        """Return the length of the vector."""
        return math.sqrt(self.dot(self))

    def normalize(self) -> Vec4:
        """Return a unit vector in the same direction."""
        length = self.magnitude()
        if length == 0:
            return Vec4.from_array(self._data.copy())
        return Vec4.from_array(self._data / length)

    def dot(self, other: Vec4) -> float:
        """Compute dot product with another tuple (w included)."""
        return float(np.dot(self._data, other._data))

    def cross(self, other: Vec4) -> Vec4:
        """Compute cross product with another vector; the result is a vector."""
        xyz = np.cross(self._data[:3], other._data[:3])
        return Vec4.from_array(np.append(xyz, 0.0))

    def reflect(self, normal: Vec4) -> Vec4:
        """Reflect this vector around the given normal."""
        return self - normal * (2 * self.dot(normal))

    def to_array(self) -> np.ndarray:
        """Return the underlying numpy array (copy)."""
        return self._data.copy()


def point(x: float, y: float, z: float) -> Vec4:
    """Create a point (w=1)."""
    return Vec4(x, y, z, 1.0)


def vector(x: float, y: float, z: float) -> Vec4:
    """Create a vector (w=0)."""
    return Vec4(x, y, z, 0.0)
