"""
Unit-quaternion rotations: construction, composition, SLERP and vector rotation.
"""

from orientation.constants import SLERP_LINEAR_THRESHOLD
from orientation.quaternion import (
    IDENTITY,
    DegenerateQuaternionError,
    Quaternion,
    from_axis_angle,
    multiply,
    normalized,
    rotate_vec3,
    slerp,
)
from orientation.vector import Vec3

__all__ = [
    'IDENTITY',
    'DegenerateQuaternionError',
    'Quaternion',
    'SLERP_LINEAR_THRESHOLD',
    'Vec3',
    'from_axis_angle',
    'multiply',
    'normalized',
    'rotate_vec3',
    'slerp',
]

__version__ = '0.1.0'
