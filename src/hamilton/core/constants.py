"""
===============================================================================
HAMILTON - Numeric Thresholds and Conversion Defaults
===============================================================================
Central repository for the constants shared by the quaternion algebra,
the Euler-angle conversions, and the interpolation routines.

All angles are in radians.
===============================================================================
"""

import numpy as np


# =============================================================================
# MATHEMATICAL CONSTANTS
# =============================================================================
HALF_PI = 0.5 * np.pi

# =============================================================================
# NUMERICAL THRESHOLDS
# =============================================================================
# |asin argument| above which an Euler extraction is treated as gimbal-locked
# (pitch within ~1.15 deg of +/-90 deg).
GIMBAL_LOCK_THRESHOLD = 0.9998

# Quaternion dot product above which slerp falls back to normalized lerp,
# since sin(theta) -> 0 makes the slerp weights 0/0.
SLERP_DOT_THRESHOLD = 0.9995

# Default tolerance for Quaternion.is_unit()
UNIT_TOLERANCE = 1e-8

# =============================================================================
# EULER ROTATION ORDERS
# =============================================================================
# Orders understood by the quaternion -> Euler extraction
EXTRACTION_ORDERS = ("XYZ", "XZY", "YZX", "ZYX")

# Orders understood by the Euler -> quaternion construction
CONSTRUCTION_ORDERS = ("XYZ", "YXZ", "ZYX", "YZX", "ZXY")

DEFAULT_EXTRACTION_ORDER = "ZYX"
DEFAULT_CONSTRUCTION_ORDER = "XYZ"
DEFAULT_EXTERNAL = True
