"""
Factory functions for the 4x4 affine transforms used to place shapes,
patterns and the camera.

Transforms compose right to left: ``translation(...) * scaling(...)``
scales first, then translates.
"""

from __future__ import annotations
import math

from .matrix import Matrix
from .vec4 import Vec4


def translation(x: float, y: float, z: float) -> Matrix:
    return Matrix([
        [1, 0, 0, x],
        [0, 1, 0, y],
        [0, 0, 1, z],
        [0, 0, 0, 1],
    ])


def scaling(x: float, y: float, z: float) -> Matrix:
    return Matrix([
        [x, 0, 0, 0],
        [0, y, 0, 0],
        [0, 0, z, 0],
        [0, 0, 0, 1],
    ])


def rotation_x(radians: float) -> Matrix:
    c, s = math.cos(radians), math.sin(radians)
    return Matrix([
        [1, 0, 0, 0],
        [0, c, -s, 0],
        [0, s, c, 0],
        [0, 0, 0, 1],
    ])


def rotation_y(radians: float) -> Matrix:
    c, s = math.cos(radians), math.sin(radians)
    return Matrix([
        [c, 0, s, 0],
        [0, 1, 0, 0],
        [-s, 0, c, 0],
        [0, 0, 0, 1],
    ])


def rotation_z(radians: float) -> Matrix:
    c, s = math.cos(radians), math.sin(radians)
    return Matrix([
        [c, -s, 0, 0],
        [s, c, 0, 0],
        [0, 0, 1, 0],
        [0, 0, 0, 1],
    ])


def shearing(xy: float, xz: float, yx: float, yz: float, zx: float, zy: float) -> Matrix:
    """Shear each axis in proportion to the other two.

    ``xy`` moves x in proportion to y, ``xz`` moves x in proportion to z, and so on.
    """
    return Matrix([
        [1, xy, xz, 0],
        [yx, 1, yz, 0],
        [zx, zy, 1, 0],
        [0, 0, 0, 1],
    ])


def view_transform(from_point: Vec4, to_point: Vec4, up: Vec4) -> Matrix:
    """Orient the world relative to an eye at ``from_point`` looking at ``to_point``.

    Args:
        from_point: Eye position
        to_point: Point the eye looks at
        up: Approximate up direction (need not be perpendicular)

    Returns:
        The world-to-camera transform
    """
    forward = (to_point - from_point).normalize()
    left = forward.cross(up.normalize())
    true_up = left.cross(forward)
    orientation = Matrix([
        [left.x, left.y, left.z, 0],
        [true_up.x, true_up.y, true_up.z, 0],
        [-forward.x, -forward.y, -forward.z, 0],
        [0, 0, 0, 1],
    ])
    return orientation * translation(-from_point.x, -from_point.y, -from_point.z)
