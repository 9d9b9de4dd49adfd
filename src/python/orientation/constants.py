"""
===============================================================================
ORIENTATION - Numerical Constants
===============================================================================
Central repository for the tolerances and thresholds used by the quaternion
and vector code. Angles are in radians throughout.
===============================================================================
"""

import numpy as np


# =============================================================================
# MATHEMATICAL CONSTANTS
# =============================================================================
PI = np.pi
TWO_PI = 2.0 * np.pi
HALF_PI = 0.5 * np.pi
DEG2RAD = PI / 180.0
RAD2DEG = 180.0 / PI

# =============================================================================
# TOLERANCES
# =============================================================================
NORM_EPSILON = 1e-12                   # below this |q| cannot be normalized
AXIS_EPSILON = 1e-12                   # below this |axis| means "no axis"
COMPARISON_TOLERANCE = 1e-9            # component-wise equality of values
UNIT_TOLERANCE = 1e-8                  # |q| - 1 accepted as unit length

# =============================================================================
# INTERPOLATION
# =============================================================================
# SLERP falls back to a plain linear blend once (1 - cos(omega)) drops to
# this value; sin(omega) is too small to divide by beyond it.
SLERP_LINEAR_THRESHOLD = 1e-6
