"""
===============================================================================
HAMILTON - Euler Angle Conversions
===============================================================================

Conversions between quaternions and Tait-Bryan Euler angles.

Angle convention
----------------
An order code such as "XYZ" lists the axes in the order the elementary
rotations are applied. Angle triples are always ordered the same way:
(angle about the first axis, angle about the second, angle about the
third). ``from_euler(roll, pitch, yaw, order)`` therefore takes ``roll`` as
the first-applied rotation, and the middle ("pitch-like") angle is the one
limited to [-pi/2, pi/2].

External (extrinsic) order "ABC": every rotation is about the fixed axes.

    q = q_C(yaw) * q_B(pitch) * q_A(roll)

Internal (intrinsic) order "ABC": every rotation is about the axes already
rotated by the previous steps. This is the same rotation as external order
"CBA" with the angle triple reversed, and the internal extractors below are
implemented exactly that way so the two conventions cannot drift apart.

For the aerospace yaw-pitch-roll (3-2-1) sequence use internal "ZYX"
(equivalently external "XYZ" with (roll, pitch, yaw)).

Gimbal lock
-----------
When the middle rotation approaches +/-90 deg, the first and third axes
line up and only their combination is observable. Once the asin argument
exceeds GIMBAL_LOCK_THRESHOLD in magnitude the extraction pins the middle
angle to +/-pi/2, sets the third angle to exactly 0 and folds the whole
remaining rotation into the first angle. A warning is logged; no exception
is raised.

References
----------
    [1] Diebel, "Representing Attitude: Euler Angles, Unit Quaternions, and
        Rotation Vectors", Stanford, 2006.
    [2] Shuster, "A Survey of Attitude Representations", JASS, 1993.

===============================================================================
"""

from __future__ import annotations

import logging
import math
from enum import Enum
from typing import Callable, Dict, Sequence, Tuple, Union

import numpy as np

from hamilton.core.constants import (
    CONSTRUCTION_ORDERS,
    DEFAULT_CONSTRUCTION_ORDER,
    DEFAULT_EXTERNAL,
    DEFAULT_EXTRACTION_ORDER,
    EXTRACTION_ORDERS,
    GIMBAL_LOCK_THRESHOLD,
    HALF_PI,
)
from hamilton.core.errors import UnsupportedRotationOrder
from hamilton.core.quaternion import Quaternion
from hamilton.core.scalar import ScalarKind, T

logger = logging.getLogger(__name__)

Angles = Tuple[T, T, T]


class EulerOrder(Enum):
    """Tait-Bryan rotation sequences, named by axis application order."""
    XYZ = "XYZ"
    XZY = "XZY"
    YXZ = "YXZ"
    YZX = "YZX"
    ZXY = "ZXY"
    ZYX = "ZYX"

    @classmethod
    def parse(cls, code: Union[str, 'EulerOrder'],
              supported: Sequence[str] = ()) -> 'EulerOrder':
        """
        Resolve an order code, rejecting anything outside ``supported``.

        Parameters
        ----------
        code : str or EulerOrder
            Order code such as ``"ZYX"``. Matching is exact.
        supported : sequence of str, optional
            Codes accepted by the calling operation. Empty means all members.

        Raises
        ------
        UnsupportedRotationOrder
            If ``code`` is unknown or not in ``supported``.
        """
        if not supported:
            supported = tuple(m.value for m in cls)

        if isinstance(code, cls):
            order = code
        else:
            try:
                order = cls(code)
            except ValueError:
                raise UnsupportedRotationOrder(code, supported) from None

        if order.value not in supported:
            raise UnsupportedRotationOrder(code, supported)
        return order


# =============================================================================
# QUATERNION -> EULER (EXTERNAL / EXTRINSIC)
# =============================================================================

def _unit_components(q: Quaternion) -> Tuple[ScalarKind, float, float, float, float]:
    """Normalize ``q`` and return its kind plus float (w, x, y, z)."""
    n = q.normalize()
    kind = n.kind
    return (kind, kind.to_float(n.r), kind.to_float(n.vec[0]),
            kind.to_float(n.vec[1]), kind.to_float(n.vec[2]))


def _tait_bryan(order: EulerOrder, kind: ScalarKind, sin_middle: float,
                first: Tuple[float, float], third: Tuple[float, float],
                first_at_pole: Tuple[float, float]) -> Angles:
    """
    Shared angle resolution for one extrinsic order.

    ``first``, ``third`` and ``first_at_pole`` are (numerator, denominator)
    pairs for atan2. ``first_at_pole`` reads the first angle off the row of
    the middle axis, which is the only part of the rotation still
    well-defined when the outer axes align.
    """
    # Clamp to [-1, 1] to prevent NaN from arcsin due to float rounding
    sin_middle = float(np.clip(sin_middle, -1.0, 1.0))

    if abs(sin_middle) > GIMBAL_LOCK_THRESHOLD:
        logger.warning(
            "Gimbal lock in %s Euler extraction (asin argument %.6f); "
            "third angle set to 0", order.value, sin_middle
        )
        first_angle = float(np.arctan2(*first_at_pole))
        middle_angle = math.copysign(HALF_PI, sin_middle)
        third_angle = 0.0
    else:
        first_angle = float(np.arctan2(*first))
        middle_angle = float(np.arcsin(sin_middle))
        third_angle = float(np.arctan2(*third))

    return (kind.from_float(first_angle), kind.from_float(middle_angle),
            kind.from_float(third_angle))


def to_euler_external_XYZ(q: Quaternion) -> Angles:
    """
    Extrinsic X-Y-Z angles ``(about X, about Y, about Z)``.

        pitch = asin(2(wy - xz))
        roll  = atan2(2(yz + wx), 1 - 2(x^2 + y^2))
        yaw   = atan2(2(xy + wz), 1 - 2(y^2 + z^2))
    """
    kind, w, x, y, z = _unit_components(q)
    return _tait_bryan(
        EulerOrder.XYZ, kind,
        sin_middle=2.0 * (w * y - x * z),
        first=(2.0 * (y * z + w * x), 1.0 - 2.0 * (x * x + y * y)),
        third=(2.0 * (x * y + w * z), 1.0 - 2.0 * (y * y + z * z)),
        first_at_pole=(2.0 * (w * x - y * z), 1.0 - 2.0 * (x * x + z * z)),
    )


def to_euler_external_XZY(q: Quaternion) -> Angles:
    """
    Extrinsic X-Z-Y angles ``(about X, about Z, about Y)``.

        middle = asin(2(xy + wz))
        first  = atan2(2(wx - yz), 1 - 2(x^2 + z^2))
        third  = atan2(2(wy - xz), 1 - 2(y^2 + z^2))
    """
    kind, w, x, y, z = _unit_components(q)
    return _tait_bryan(
        EulerOrder.XZY, kind,
        sin_middle=2.0 * (x * y + w * z),
        first=(2.0 * (w * x - y * z), 1.0 - 2.0 * (x * x + z * z)),
        third=(2.0 * (w * y - x * z), 1.0 - 2.0 * (y * y + z * z)),
        first_at_pole=(2.0 * (y * z + w * x), 1.0 - 2.0 * (x * x + y * y)),
    )


def to_euler_external_YZX(q: Quaternion) -> Angles:
    """
    Extrinsic Y-Z-X angles ``(about Y, about Z, about X)``.

        middle = asin(2(wz - xy))
        first  = atan2(2(xz + wy), 1 - 2(y^2 + z^2))
        third  = atan2(2(yz + wx), 1 - 2(x^2 + z^2))
    """
    kind, w, x, y, z = _unit_components(q)
    return _tait_bryan(
        EulerOrder.YZX, kind,
        sin_middle=2.0 * (w * z - x * y),
        first=(2.0 * (x * z + w * y), 1.0 - 2.0 * (y * y + z * z)),
        third=(2.0 * (y * z + w * x), 1.0 - 2.0 * (x * x + z * z)),
        first_at_pole=(2.0 * (w * y - x * z), 1.0 - 2.0 * (x * x + y * y)),
    )


def to_euler_external_ZYX(q: Quaternion) -> Angles:
    """
    Extrinsic Z-Y-X angles ``(about Z, about Y, about X)``.

        middle = asin(2(xz + wy))
        first  = atan2(2(wz - xy), 1 - 2(y^2 + z^2))
        third  = atan2(2(wx - yz), 1 - 2(x^2 + y^2))
    """
    kind, w, x, y, z = _unit_components(q)
    return _tait_bryan(
        EulerOrder.ZYX, kind,
        sin_middle=2.0 * (x * z + w * y),
        first=(2.0 * (w * z - x * y), 1.0 - 2.0 * (y * y + z * z)),
        third=(2.0 * (w * x - y * z), 1.0 - 2.0 * (x * x + y * y)),
        first_at_pole=(2.0 * (x * y + w * z), 1.0 - 2.0 * (x * x + z * z)),
    )


# =============================================================================
# QUATERNION -> EULER (INTERNAL / INTRINSIC)
# =============================================================================
# Intrinsic "ABC" is extrinsic "CBA" read backwards.

def to_euler_internal_XYZ(q: Quaternion) -> Angles:
    """Intrinsic X-Y'-Z'' angles ``(about X, about Y', about Z'')``."""
    a, b, c = to_euler_external_ZYX(q)
    return (c, b, a)


def to_euler_internal_YZX(q: Quaternion) -> Angles:
    a, b, c = to_euler_external_XZY(q)
    return (c, b, a)


def to_euler_internal_XZY(q: Quaternion) -> Angles:
    a, b, c = to_euler_external_YZX(q)
    return (c, b, a)


def to_euler_internal_ZYX(q: Quaternion) -> Angles:
    """Intrinsic Z-Y'-X'' angles, i.e. aerospace (yaw, pitch, roll)."""
    a, b, c = to_euler_external_XYZ(q)
    return (c, b, a)


_EXTERNAL_EXTRACTORS: Dict[EulerOrder, Callable[[Quaternion], Angles]] = {
    EulerOrder.XYZ: to_euler_external_XYZ,
    EulerOrder.XZY: to_euler_external_XZY,
    EulerOrder.YZX: to_euler_external_YZX,
    EulerOrder.ZYX: to_euler_external_ZYX,
}

_INTERNAL_EXTRACTORS: Dict[EulerOrder, Callable[[Quaternion], Angles]] = {
    EulerOrder.XYZ: to_euler_internal_XYZ,
    EulerOrder.XZY: to_euler_internal_XZY,
    EulerOrder.YZX: to_euler_internal_YZX,
    EulerOrder.ZYX: to_euler_internal_ZYX,
}


def to_euler(q: Quaternion, order: Union[str, EulerOrder] = DEFAULT_EXTRACTION_ORDER,
             external: bool = DEFAULT_EXTERNAL) -> Angles:
    """
    Convert a quaternion to Euler angles.

    Parameters
    ----------
    q : Quaternion
        Orientation. Normalized before extraction.
    order : str or EulerOrder, optional
        One of "XYZ", "XZY", "YZX", "ZYX". Default "ZYX".
    external : bool, optional
        True (default) for extrinsic rotations about fixed axes, False for
        intrinsic rotations about the moving axes.

    Returns
    -------
    tuple
        Angles in radians, ordered like ``order``. The middle angle is in
        [-pi/2, pi/2], the outer two in [-pi, pi].

    Raises
    ------
    UnsupportedRotationOrder
        If ``order`` is not one of the supported extraction orders.
    """
    resolved = EulerOrder.parse(order, EXTRACTION_ORDERS)
    table = _EXTERNAL_EXTRACTORS if external else _INTERNAL_EXTRACTORS
    return table[resolved](q)


# =============================================================================
# EULER -> QUATERNION
# =============================================================================
# Closed forms of q_C(yaw) * q_B(pitch) * q_A(roll) for each order "ABC",
# written in half-angle cosines (c*) and sines (s*). Each returns (w, x, y, z).

def _compose_XYZ(cr, sr, cp, sp, cy, sy):
    return (
        cy * cp * cr + sy * sp * sr,
        cy * cp * sr - sy * sp * cr,
        cy * sp * cr + sy * cp * sr,
        sy * cp * cr - cy * sp * sr,
    )


def _compose_YXZ(cr, sr, cp, sp, cy, sy):
    return (
        cy * cp * cr - sy * sp * sr,
        cy * sp * cr - sy * cp * sr,
        cy * cp * sr + sy * sp * cr,
        sy * cp * cr + cy * sp * sr,
    )


def _compose_ZYX(cr, sr, cp, sp, cy, sy):
    return (
        cy * cp * cr - sy * sp * sr,
        sy * cp * cr + cy * sp * sr,
        cy * sp * cr - sy * cp * sr,
        cy * cp * sr + sy * sp * cr,
    )


def _compose_YZX(cr, sr, cp, sp, cy, sy):
    return (
        cy * cp * cr + sy * sp * sr,
        sy * cp * cr - cy * sp * sr,
        cy * cp * sr - sy * sp * cr,
        cy * sp * cr + sy * cp * sr,
    )


def _compose_ZXY(cr, sr, cp, sp, cy, sy):
    return (
        cy * cp * cr + sy * sp * sr,
        cy * sp * cr + sy * cp * sr,
        sy * cp * cr - cy * sp * sr,
        cy * cp * sr - sy * sp * cr,
    )


_COMPOSERS = {
    EulerOrder.XYZ: _compose_XYZ,
    EulerOrder.YXZ: _compose_YXZ,
    EulerOrder.ZYX: _compose_ZYX,
    EulerOrder.YZX: _compose_YZX,
    EulerOrder.ZXY: _compose_ZXY,
}


def from_euler(roll: T, pitch: T, yaw: T,
               order: Union[str, EulerOrder] = DEFAULT_CONSTRUCTION_ORDER) -> Quaternion:
    """
    Create a quaternion from extrinsic Euler angles.

    Parameters
    ----------
    roll : T
        Angle about the first axis of ``order`` (radians).
    pitch : T
        Angle about the second axis (radians).
    yaw : T
        Angle about the third axis (radians).
    order : str or EulerOrder, optional
        One of "XYZ", "YXZ", "ZYX", "YZX", "ZXY". Default "XYZ", which is
        the aerospace 3-2-1 sequence with (roll, pitch, yaw) about (X, Y, Z).

    Returns
    -------
    Quaternion
        Unit quaternion in the scalar type the three angles promote to.

    Raises
    ------
    UnsupportedRotationOrder
        If ``order`` is not one of the supported construction orders.
    """
    resolved = EulerOrder.parse(order, CONSTRUCTION_ORDERS)
    kind = ScalarKind.common(roll, pitch, yaw)

    # Half-angles, each trig function called once
    half_roll = kind.to_float(roll) / 2.0
    half_pitch = kind.to_float(pitch) / 2.0
    half_yaw = kind.to_float(yaw) / 2.0

    w, x, y, z = _COMPOSERS[resolved](
        math.cos(half_roll), math.sin(half_roll),
        math.cos(half_pitch), math.sin(half_pitch),
        math.cos(half_yaw), math.sin(half_yaw),
    )
    return Quaternion(kind.from_float(w),
                      (kind.from_float(x), kind.from_float(y), kind.from_float(z)))
