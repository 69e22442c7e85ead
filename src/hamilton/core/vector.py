"""
3-tuple vector helpers used to build the quaternion algebra.

The vector part of a quaternion and the targets of a rotation are plain
``(x, y, z)`` tuples of scalars. These functions are pure and total; they
never validate or coerce their inputs, so they work for any scalar type
honoring the contract in :mod:`hamilton.core.scalar`.
"""

from __future__ import annotations

from typing import Callable, Tuple

from hamilton.core.scalar import T, U

Vec3 = Tuple[T, T, T]


def cross(a: Vec3, b: Vec3) -> Vec3:
    """
    Right-handed cross product ``a x b``.

        a x b = (a_y*b_z - a_z*b_y,
                 a_z*b_x - a_x*b_z,
                 a_x*b_y - a_y*b_x)
    """
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def add(a: Vec3, b: Vec3) -> Vec3:
    """Component-wise sum."""
    return (a[0] + b[0], a[1] + b[1], a[2] + b[2])


def scale(a: Vec3, s: T) -> Vec3:
    """Multiply every component by the scalar ``s``."""
    return (a[0] * s, a[1] * s, a[2] * s)


def dot(a: Vec3, b: Vec3) -> T:
    """Euclidean inner product."""
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def map_vec(a: Vec3, f: Callable[[T], U]) -> Tuple[U, U, U]:
    """Apply ``f`` to each component, possibly changing the scalar type."""
    return (f(a[0]), f(a[1]), f(a[2]))
