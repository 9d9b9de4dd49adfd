"""
===============================================================================
ORIENTATION - Configuration
===============================================================================
Loads the rotation settings used by the command-line driver from YAML.

Example file (the packaged default, orientation/rotation_config.yaml):

    slerp_linear_threshold: 1.0e-6
    comparison_tolerance: 1.0e-9
    steps: 4
    vector: [1.0, 0.0, 0.0]
    keyframes:
      - {axis: [0, 0, 1], angle_deg: 0}
      - {axis: [0, 0, 1], angle_deg: 90}

The path can be given explicitly, through the ORIENTATION_CONFIG environment
variable, or left to default to rotation_config.yaml shipped inside the
package.
===============================================================================
"""

import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import List, Optional

import numpy as np
import yaml

from orientation.constants import (
    COMPARISON_TOLERANCE, DEG2RAD, SLERP_LINEAR_THRESHOLD,
)
from orientation.quaternion import Quaternion, from_axis_angle
from orientation.vector import Vec3

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = 'ORIENTATION_CONFIG'
DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent / 'rotation_config.yaml'


def _as_int(name: str, value) -> int:
    """Accept ints and integral floats; bools and strings are rejected."""
    if isinstance(value, bool) or not isinstance(value, (int, float, np.integer, np.floating)):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    if not float(value).is_integer():
        raise ValueError(f"{name} must be an integer, got {value!r}")
    return int(value)


def _as_float(name: str, value) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float, np.integer, np.floating)):
        raise ValueError(f"{name} must be a number, got {value!r}")
    return float(value)


@dataclass
class Keyframe:
    """
    One orientation in the interpolation sequence.

    Attributes:
        axis: Rotation axis (3,), any non-zero length.
        angle_deg: Rotation angle about the axis [deg].
    """
    axis: np.ndarray
    angle_deg: float

    def to_quaternion(self) -> Quaternion:
        return from_axis_angle(self.axis, self.angle_deg * DEG2RAD)


@dataclass
class RotationConfig:
    """
    Settings for the interpolation demo.

    Attributes:
        slerp_linear_threshold: (1 - cos) below which SLERP blends linearly.
        comparison_tolerance: Tolerance used when reporting equal orientations.
        steps: Number of interpolation intervals between two keyframes.
        vector: Vector rotated by every interpolated orientation (3,).
        keyframes: Orientations visited in order.
    """
    slerp_linear_threshold: float = SLERP_LINEAR_THRESHOLD
    comparison_tolerance: float = COMPARISON_TOLERANCE
    steps: int = 4
    vector: np.ndarray = field(
        default_factory=lambda: np.array([1.0, 0.0, 0.0])
    )
    keyframes: List[Keyframe] = field(default_factory=lambda: [
        Keyframe(axis=np.array([0.0, 0.0, 1.0]), angle_deg=0.0),
        Keyframe(axis=np.array([0.0, 0.0, 1.0]), angle_deg=90.0),
    ])

    def __post_init__(self) -> None:
        self.steps = _as_int('steps', self.steps)
        self.slerp_linear_threshold = _as_float(
            'slerp_linear_threshold', self.slerp_linear_threshold)
        self.comparison_tolerance = _as_float(
            'comparison_tolerance', self.comparison_tolerance)

        if self.steps < 1:
            raise ValueError(f"steps must be >= 1, got {self.steps}")
        if self.comparison_tolerance < 0.0:
            raise ValueError("comparison_tolerance must be non-negative")
        if self.slerp_linear_threshold < 0.0:
            raise ValueError("slerp_linear_threshold must be non-negative")
        try:
            self.vector = Vec3.from_array(self.vector).to_array()
        except TypeError as exc:
            raise ValueError(f"vector must be 3 numbers, got {self.vector!r}") from exc

    @property
    def vector3(self) -> Vec3:
        return Vec3.from_array(self.vector)

    def orientations(self) -> List[Quaternion]:
        """Keyframes converted to unit quaternions."""
        return [kf.to_quaternion() for kf in self.keyframes]

    @classmethod
    def from_dict(cls, data: dict) -> 'RotationConfig':
        """
        Build a config from a parsed YAML mapping.

        Raises:
            ValueError: On unknown keys or malformed keyframes.
        """
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown configuration keys: {sorted(unknown)}")

        kwargs = dict(data)
        if 'keyframes' in kwargs:
            entries = kwargs['keyframes']
            if not isinstance(entries, list):
                raise ValueError(
                    f"keyframes must be a list, got {type(entries).__name__}"
                )
            keyframes = []
            for i, entry in enumerate(entries):
                if not isinstance(entry, dict):
                    raise ValueError(
                        f"Keyframe {i} must be a mapping with 'axis' and "
                        f"'angle_deg', got {entry!r}"
                    )
                try:
                    axis = Vec3.from_array(entry['axis']).to_array()
                    angle = float(entry['angle_deg'])
                except (KeyError, TypeError, ValueError) as exc:
                    raise ValueError(
                        f"Keyframe {i} needs 'axis' and 'angle_deg': {entry!r}"
                    ) from exc
                keyframes.append(Keyframe(axis=axis, angle_deg=angle))
            kwargs['keyframes'] = keyframes
        return cls(**kwargs)


def resolve_config_path(config_path: Optional[str] = None) -> Path:
    if config_path is not None:
        return Path(config_path)
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)
    return DEFAULT_CONFIG_PATH


def load_config(config_path: Optional[str] = None) -> RotationConfig:
    """
    Load rotation settings from a YAML file.

    Args:
        config_path: Path to YAML config. Defaults to $ORIENTATION_CONFIG,
                     then the packaged rotation_config.yaml.

    Returns:
        Parsed RotationConfig. An empty file yields the defaults.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the contents are not a valid configuration.
    """
    path = resolve_config_path(config_path)
    logger.debug("Loading configuration from: %s", path)

    with open(path, 'r') as f:
        data = yaml.safe_load(f)

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError(f"Configuration root must be a mapping, got {type(data).__name__}")

    config = RotationConfig.from_dict(data)
    logger.debug("Loaded %d keyframes, %d steps", len(config.keyframes), config.steps)
    return config
