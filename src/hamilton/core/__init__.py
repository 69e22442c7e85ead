"""
===============================================================================
HAMILTON - Core Module
===============================================================================
The quaternion value type and everything it is built from.

Submodules:
    constants   -- Numerical thresholds, rotation-order tables, defaults
    errors      -- HamiltonError and UnsupportedRotationOrder
    scalar      -- Scalar capability protocol and the float bridge
    vector      -- 3-tuple cross, dot, add, scale helpers
    quaternion  -- Quaternion algebra, rotation, slerp, powers
    euler       -- Quaternion <-> Euler angle conversions
===============================================================================
"""

from hamilton.core.errors import HamiltonError, UnsupportedRotationOrder
from hamilton.core.quaternion import Quaternion
from hamilton.core.euler import EulerOrder, from_euler, to_euler

__all__ = [
    "Quaternion",
    "EulerOrder",
    "to_euler",
    "from_euler",
    "HamiltonError",
    "UnsupportedRotationOrder",
]
