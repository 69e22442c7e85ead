"""
===============================================================================
HAMILTON - Generic Quaternion Algebra
===============================================================================
Quaternion value type with the algebra, rotation, Euler-angle and
interpolation operations used for 3D rotation math.

Submodules:
    core      -- Scalar contract, Quaternion, Euler conversions
    settings  -- Euler conventions loaded from YAML
===============================================================================
"""

from hamilton.core import (
    EulerOrder,
    HamiltonError,
    Quaternion,
    UnsupportedRotationOrder,
    from_euler,
    to_euler,
)
from hamilton.core.scalar import Scalar, ScalarKind
from hamilton.settings import EulerSettings, load_settings

__version__ = "0.1.0"

__all__ = [
    "Quaternion",
    "Scalar",
    "ScalarKind",
    "EulerOrder",
    "to_euler",
    "from_euler",
    "EulerSettings",
    "load_settings",
    "HamiltonError",
    "UnsupportedRotationOrder",
]
