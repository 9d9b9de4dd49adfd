#!/usr/bin/env python3
"""
===============================================================================
ORIENTATION - COMMAND-LINE DRIVER
===============================================================================
Sweeps SLERP between the configured keyframe orientations and reports each
interpolated quaternion together with the vector it rotates.

USAGE:
    python main.py                                   # Sweep configured keyframes
    python main.py --steps 10                        # Finer sweep
    python main.py --config my_rotations.yaml        # Alternate config file
    python main.py --vector 0 1 0                    # Sweep with another vector
    python main.py --axis 0 1 0 --angle 180 --vector 1 0 0
                                                     # Rotate a single vector

DEPENDENCIES:
    numpy, pyyaml
===============================================================================
"""

import sys
import argparse
import logging
from pathlib import Path
from typing import List, Optional

import numpy as np

# ---------------------------------------------------------------------------
# Path setup: ensure the package is importable when run from a checkout
# ---------------------------------------------------------------------------
PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

from orientation.config import RotationConfig, load_config
from orientation.constants import DEG2RAD
from orientation.quaternion import (
    Quaternion, from_axis_angle, rotate_vec3, slerp,
)
from orientation.vector import Vec3

logger = logging.getLogger('ORIENTATION_MAIN')


def setup_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def sweep(config: RotationConfig, steps: Optional[int] = None) -> List[Quaternion]:
    """
    Interpolate between consecutive keyframes.

    Args:
        config: Loaded rotation configuration.
        steps: Intervals per keyframe pair; defaults to config.steps.

    Returns:
        All interpolated orientations in order, both ends of every segment
        included once.
    """
    steps = config.steps if steps is None else steps
    if steps < 1:
        raise ValueError(f"steps must be >= 1, got {steps}")

    keyframes = config.orientations()
    vector = config.vector3
    path = []

    for seg, (q_start, q_end) in enumerate(zip(keyframes[:-1], keyframes[1:])):
        if q_start.same_rotation(q_end, tolerance=config.comparison_tolerance):
            logger.warning(f"Segment {seg}: keyframes describe the same orientation")
        logger.info(f"Segment {seg}: angle {np.degrees(q_start.angle_to(q_end)):.2f} deg")
        first = 0 if seg == 0 else 1
        for i in range(first, steps + 1):
            t = i / steps
            q = slerp(q_start, q_end, t,
                      threshold=config.slerp_linear_threshold)
            v = rotate_vec3(q, vector)
            logger.info(f"  t={t:.3f}  q={q}  v=({v.x:+.4f}, {v.y:+.4f}, {v.z:+.4f})")
            path.append(q)

    if len(keyframes) == 1:
        path.append(keyframes[0])

    return path


def rotate_once(axis: List[float], angle_deg: float, vector: List[float]) -> Vec3:
    """Rotate one vector by angle_deg about axis and log the result."""
    q = from_axis_angle(Vec3.from_array(axis), angle_deg * DEG2RAD)
    result = rotate_vec3(q, Vec3.from_array(vector))
    logger.info(f"q = {q}")
    logger.info(f"rotated = ({result.x:+.6f}, {result.y:+.6f}, {result.z:+.6f})")
    return result


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Quaternion rotation and SLERP driver',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument('--config', type=str, default=None,
                        help='Path to YAML config (default: packaged rotation_config.yaml)')
    parser.add_argument('--steps', type=int, default=None,
                        help='Interpolation intervals between keyframes')
    parser.add_argument('--axis', type=float, nargs=3, default=None,
                        metavar=('X', 'Y', 'Z'), help='Rotation axis for a single rotation')
    parser.add_argument('--angle', type=float, default=0.0,
                        help='Rotation angle in degrees for a single rotation')
    parser.add_argument('--vector', type=float, nargs=3, default=None,
                        metavar=('X', 'Y', 'Z'),
                        help='Vector to rotate (default: the config vector, '
                             'or 1 0 0 with --axis)')
    parser.add_argument('--verbose', action='store_true',
                        help='Enable debug logging')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    try:
        if args.axis is not None:
            vector = args.vector if args.vector is not None else [1.0, 0.0, 0.0]
            rotate_once(args.axis, args.angle, vector)
            return 0

        config = load_config(args.config)
        if args.vector is not None:
            config.vector = Vec3.from_array(args.vector).to_array()
        path = sweep(config, args.steps)
        logger.info(f"Interpolated {len(path)} orientations")
    except FileNotFoundError as exc:
        logger.error(f"Configuration file not found: {exc.filename}")
        return 1
    except ValueError as exc:
        # DegenerateQuaternionError included
        logger.error(str(exc))
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
