"""
===============================================================================
ORIENTATION - Quaternion Mathematics
===============================================================================

Unit quaternions for orienting objects in 3D space without gimbal lock and for
interpolating smoothly between orientations.

Convention
----------
Components are stored scalar-last:

    q = [x, y, z, w] = x*i + y*j + z*k + w

where [x, y, z] is the vector (imaginary) part and w the scalar (real) part.
A rotation by angle theta about unit axis n is

    q = [sin(theta/2) * n, cos(theta/2)]

and it acts on a vector v through the sandwich product

    v' = q * v_pure * q_conjugate

Composition follows the Hamilton product: multiply(a, b) rotates by b first,
then by a.

Unit length is a precondition of every rotation operation, NOT something the
type enforces. Construction never normalizes; call ``normalized()`` or
``normalize_in_place()`` explicitly. Interpolation and rotation never
normalize their results either, so a non-unit input produces a scaled output.

The operations are available both as free functions (``multiply``, ``slerp``,
``rotate_vec3``, ``from_axis_angle``, ``normalized``) and as methods on
``Quaternion``; the methods delegate to the functions.

References
----------
    [1] Shoemake, "Animating Rotation with Quaternion Curves", SIGGRAPH 1985.
    [2] Kuipers, "Quaternions and Rotation Sequences", Princeton, 1999.
    [3] Shoemake, "Uniform Random Rotations", Graphics Gems III, 1992.
===============================================================================
"""

import logging
import numpy as np
from typing import Optional, Union

from orientation.constants import (
    AXIS_EPSILON, COMPARISON_TOLERANCE, NORM_EPSILON, SLERP_LINEAR_THRESHOLD,
    UNIT_TOLERANCE,
)
from orientation.vector import Vec3

logger = logging.getLogger(__name__)


class DegenerateQuaternionError(ValueError):
    """Raised when a quaternion is too close to zero to be normalized."""


class Quaternion:
    """
    Quaternion with value semantics, used as a 3D rotation when unit length.

    Parameters
    ----------
    x, y, z : float
        Vector part. Default 0.
    w : float
        Scalar part. Default 1, so ``Quaternion()`` is the identity rotation.

    Examples
    --------
    >>> q = from_axis_angle(Vec3(0.0, 0.0, 1.0), np.pi / 2)   # 90 deg about Z
    >>> q.rotate(Vec3(1.0, 0.0, 0.0))                         # -> ~(0, 1, 0)
    """

    __slots__ = ("_q",)

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0,
                 w: float = 1.0) -> None:
        self._q = np.array([x, y, z, w], dtype=np.float64)

    # =========================================================================
    # PROPERTIES
    # =========================================================================

    @property
    def x(self) -> float:
        return float(self._q[0])

    @property
    def y(self) -> float:
        return float(self._q[1])

    @property
    def z(self) -> float:
        return float(self._q[2])

    @property
    def w(self) -> float:
        """Scalar (real) part."""
        return float(self._q[3])

    @property
    def vector(self) -> Vec3:
        """Vector (imaginary) part as a Vec3."""
        return Vec3(self._q[0], self._q[1], self._q[2])

    @property
    def components(self) -> np.ndarray:
        """Copy of the components as a float64 array [x, y, z, w]."""
        return self._q.copy()

    @property
    def norm(self) -> float:
        """Magnitude sqrt(x^2 + y^2 + z^2 + w^2)."""
        return float(np.linalg.norm(self._q))

    @property
    def rotation_angle(self) -> float:
        """
        Rotation angle in radians, in [0, pi].

        Assumes unit length: theta = 2 * arccos(|w|).
        """
        # Clamp against floating-point overshoot before arccos
        return float(2.0 * np.arccos(np.clip(abs(self._q[3]), 0.0, 1.0)))

    @property
    def read_only(self) -> bool:
        """True for shared constants such as IDENTITY."""
        return not self._q.flags.writeable

    # =========================================================================
    # CONSTRUCTION
    # =========================================================================

    @staticmethod
    def identity() -> 'Quaternion':
        """A fresh (mutable) identity quaternion (0, 0, 0, 1)."""
        return Quaternion(0.0, 0.0, 0.0, 1.0)

    @staticmethod
    def from_array(values) -> 'Quaternion':
        """
        Build a quaternion from a 4-element array-like in [x, y, z, w] order.

        Raises
        ------
        ValueError
            If ``values`` does not hold exactly four numbers.
        """
        arr = np.asarray(values, dtype=np.float64).reshape(-1)
        if arr.shape != (4,):
            raise ValueError(
                f"Quaternion needs exactly 4 components, got shape {np.shape(values)}"
            )
        return Quaternion(arr[0], arr[1], arr[2], arr[3])

    @staticmethod
    def from_axis_angle(axis, angle: float) -> 'Quaternion':
        """See :func:`from_axis_angle`."""
        return from_axis_angle(axis, angle)

    @staticmethod
    def random(rng: Optional[np.random.Generator] = None) -> 'Quaternion':
        """
        Uniformly distributed random unit quaternion.

        Uses the subgroup algorithm (Shoemake, 1992). Normalizing a random
        4-vector does NOT give a uniform distribution over rotations.

        Parameters
        ----------
        rng : numpy.random.Generator, optional
            Source of randomness; a fresh default generator when omitted.
        """
        if rng is None:
            rng = np.random.default_rng()
        u1, u2, u3 = rng.random(3)

        sqrt_u1 = np.sqrt(u1)
        sqrt_1_minus_u1 = np.sqrt(1.0 - u1)

        return Quaternion(
            sqrt_1_minus_u1 * np.cos(2.0 * np.pi * u2),
            sqrt_u1 * np.sin(2.0 * np.pi * u3),
            sqrt_u1 * np.cos(2.0 * np.pi * u3),
            sqrt_1_minus_u1 * np.sin(2.0 * np.pi * u2),
        )

    # =========================================================================
    # NORMALIZATION
    # =========================================================================

    def normalize_in_place(self, epsilon: float = NORM_EPSILON) -> 'Quaternion':
        """
        Scale this quaternion to unit magnitude, mutating it.

        Returns the receiver so calls can be chained. The caller must hold
        exclusive access to the instance for the duration of the call.

        Raises
        ------
        DegenerateQuaternionError
            If |q| < epsilon. The receiver is left unchanged.
        TypeError
            If the quaternion is a read-only constant such as IDENTITY.
        """
        if self.read_only:
            raise TypeError(
                "Cannot normalize a read-only quaternion in place; "
                "use normalized() to get a new value"
            )

        n = np.linalg.norm(self._q)
        if n < epsilon:
            raise DegenerateQuaternionError(
                f"Cannot normalize near-zero quaternion (norm = {n:.2e})"
            )

        self._q *= 1.0 / n
        return self

    def normalized(self, epsilon: float = NORM_EPSILON) -> 'Quaternion':
        """Unit-length copy of this quaternion; the receiver is unchanged."""
        return self.clone().normalize_in_place(epsilon)

    def is_unit(self, tolerance: float = UNIT_TOLERANCE) -> bool:
        return abs(self.norm - 1.0) < tolerance

    # =========================================================================
    # ARITHMETIC
    # =========================================================================

    def clone(self) -> 'Quaternion':
        """Independent (mutable) copy of this quaternion."""
        return Quaternion(self._q[0], self._q[1], self._q[2], self._q[3])

    copy = clone

    def dot(self, other: 'Quaternion') -> float:
        """Four-component dot product; cos of the half-angle between rotations."""
        return float(np.dot(self._q, other._q))

    def conjugate(self) -> 'Quaternion':
        """
        [-x, -y, -z, w]. For unit quaternions this is the inverse rotation.
        """
        return Quaternion(-self._q[0], -self._q[1], -self._q[2], self._q[3])

    def inverse(self) -> 'Quaternion':
        """
        Multiplicative inverse q* / |q|^2.

        Raises
        ------
        DegenerateQuaternionError
            If the quaternion is (near) zero.
        """
        norm_sq = float(np.dot(self._q, self._q))
        if norm_sq < NORM_EPSILON ** 2:
            raise DegenerateQuaternionError(
                "Cannot invert a near-zero quaternion"
            )
        return Quaternion.from_array(self.conjugate()._q / norm_sq)

    def negated(self) -> 'Quaternion':
        """-q: same rotation, opposite hemisphere of the hypersphere."""
        return Quaternion.from_array(-self._q)

    def multiply(self, other: 'Quaternion') -> 'Quaternion':
        """Hamilton product self * other; see :func:`multiply`."""
        return multiply(self, other)

    def rotate(self, v):
        """Rotate a vector by this quaternion; see :func:`rotate_vec3`."""
        return rotate_vec3(self, v)

    def angle_to(self, other: 'Quaternion') -> float:
        """
        Smallest rotation angle in radians taking self onto other.

        Both quaternions are assumed unit length. The sign ambiguity is
        removed by taking |dot|, so the result lies in [0, pi].
        """
        d = min(abs(self.dot(other)), 1.0)
        return float(2.0 * np.arccos(d))

    def same_rotation(self, other: 'Quaternion',
                      tolerance: float = COMPARISON_TOLERANCE) -> bool:
        """
        True if self and other represent the same rotation (q or -q).
        """
        diff_pos = np.max(np.abs(self._q - other._q))
        diff_neg = np.max(np.abs(self._q + other._q))
        return bool(min(diff_pos, diff_neg) <= tolerance)

    # =========================================================================
    # OPERATOR OVERLOADS
    # =========================================================================

    def __mul__(self, other: Union['Quaternion', float, int]) -> 'Quaternion':
        """
        - Quaternion * Quaternion -> Hamilton product (rotation composition)
        - Quaternion * scalar -> component-wise scaling
        """
        if isinstance(other, Quaternion):
            return multiply(self, other)
        elif isinstance(other, (int, float)):
            return Quaternion.from_array(self._q * float(other))
        return NotImplemented

    def __rmul__(self, other: Union[float, int]) -> 'Quaternion':
        if isinstance(other, (int, float)):
            return Quaternion.from_array(self._q * float(other))
        return NotImplemented

    def __neg__(self) -> 'Quaternion':
        return self.negated()

    def __eq__(self, other: object) -> bool:
        """
        Component-wise equality within COMPARISON_TOLERANCE.

        Sign-sensitive: q and -q are different values even though they are
        the same rotation. Use same_rotation() to compare rotations.
        Vec3 compares exactly instead, since it is hashable.
        """
        if not isinstance(other, Quaternion):
            return NotImplemented
        return bool(np.max(np.abs(self._q - other._q)) <= COMPARISON_TOLERANCE)

    # Mutable through normalize_in_place, so not hashable.
    __hash__ = None

    def __iter__(self):
        return iter((self.x, self.y, self.z, self.w))

    def __repr__(self) -> str:
        return (f"Quaternion(x={self.x:+.8f}, y={self.y:+.8f}, "
                f"z={self.z:+.8f}, w={self.w:+.8f})")

    def __str__(self) -> str:
        angle_deg = np.degrees(self.rotation_angle)
        return (f"[{self.x:+.6f}, {self.y:+.6f}, {self.z:+.6f}, "
                f"{self.w:+.6f}] (rot={angle_deg:.2f} deg)")


def _frozen_identity() -> Quaternion:
    q = Quaternion(0.0, 0.0, 0.0, 1.0)
    q._q.setflags(write=False)
    return q


# "No rotation". Read-only: in-place normalization raises TypeError and the
# backing array rejects writes.
IDENTITY = _frozen_identity()


# =============================================================================
# FREE FUNCTIONS
# =============================================================================

def normalized(q: Quaternion, epsilon: float = NORM_EPSILON) -> Quaternion:
    """
    Unit-length copy of ``q``.

    Raises
    ------
    DegenerateQuaternionError
        If |q| < epsilon.
    """
    return q.normalized(epsilon)


def from_axis_angle(axis, angle: float) -> Quaternion:
    """
    Create a rotation of ``angle`` radians about ``axis`` (right-handed).

        q = [sin(angle/2) * n, cos(angle/2)]

    where n is ``axis`` scaled to unit length. Only the direction of the axis
    matters, so (2, 0, 0) and (1, 0, 0) give the same rotation. The result is
    normalized once more to absorb rounding.

    Parameters
    ----------
    axis : Vec3 or array-like
        Rotation axis, any non-zero length.
    angle : float
        Rotation angle in radians.

    Returns
    -------
    Quaternion
        Unit quaternion. An axis shorter than AXIS_EPSILON defines no
        rotation, and the identity is returned for every angle.
    """
    if isinstance(axis, Vec3):
        axis_arr = axis.to_array()
    else:
        axis_arr = Vec3.from_array(axis).to_array()

    axis_norm = np.linalg.norm(axis_arr)
    if axis_norm < AXIS_EPSILON:
        logger.debug("Zero-length rotation axis (|axis| = %.2e); "
                     "returning identity", axis_norm)
        return Quaternion.identity()

    n = axis_arr / axis_norm
    half = 0.5 * angle
    sin_half = np.sin(half)

    return Quaternion(
        sin_half * n[0],
        sin_half * n[1],
        sin_half * n[2],
        np.cos(half),
    ).normalize_in_place()


def multiply(a: Quaternion, b: Quaternion) -> Quaternion:
    """
    Hamilton product a * b.

    The product composes rotations: rotating by the result is the same as
    rotating by ``b`` first and then by ``a``. Not commutative. The result is
    not renormalized; callers chaining many products should renormalize
    periodically to remove drift.
    """
    ax, ay, az, aw = a._q
    bx, by, bz, bw = b._q

    return Quaternion(
        ax * bw + aw * bx + ay * bz - az * by,
        ay * bw + aw * by + az * bx - ax * bz,
        az * bw + aw * bz + ax * by - ay * bx,
        aw * bw - ax * bx - ay * by - az * bz,
    )


def slerp(a: Quaternion, b: Quaternion, t: float,
          threshold: float = SLERP_LINEAR_THRESHOLD) -> Quaternion:
    """
    Spherical linear interpolation from ``a`` (t=0) to ``b`` (t=1).

    Follows the shorter great-circle arc on the unit hypersphere at constant
    angular velocity:

        slerp(a, b, t) = a * sin((1-t)*omega) / sin(omega)
                       + b * sin(t*omega) / sin(omega)

    with cos(omega) = a . b.

    Parameters
    ----------
    a, b : Quaternion
        Endpoints. Must be unit length; this is not checked and the result
        is not normalized.
    t : float
        Interpolation parameter. Not clamped: values outside [0, 1]
        extrapolate along the same arc.
    threshold : float
        When (1 - cos(omega)) <= threshold the endpoints nearly coincide and
        a plain linear blend (1-t)*a + t*b is used instead, avoiding division
        by a vanishing sin(omega).

    Returns
    -------
    Quaternion
        Interpolated quaternion. At t == 1 this is ``b`` itself (copied), even
        when the short arc runs through -b.

    Notes
    -----
    q and -q are the same rotation. If a . b < 0, -b is used as the far
    endpoint, otherwise the path would take the long way around.
    """
    if t == 1.0:
        return b.clone()

    qa = a._q
    qb = b._q.copy()

    cosom = float(np.dot(qa, qb))
    if cosom < 0.0:
        cosom = -cosom
        qb = -qb

    if (1.0 - cosom) > threshold:
        omega = np.arccos(cosom)
        sinom = np.sin(omega)
        scale0 = np.sin((1.0 - t) * omega) / sinom
        scale1 = np.sin(t * omega) / sinom
    else:
        logger.debug("slerp endpoints nearly coincide (1 - cos = %.2e); "
                     "using linear blend", 1.0 - cosom)
        scale0 = 1.0 - t
        scale1 = t

    return Quaternion.from_array(scale0 * qa + scale1 * qb)


def rotate_vec3(q: Quaternion, v):
    """
    Rotate vector ``v`` by quaternion ``q``.

    Expands the sandwich product q * v * q_conjugate directly instead of
    building two quaternion products:

        u = [q.x, q.y, q.z],  s = q.w
        v' = u * (2 * u.v) + v * (s^2 - u.u) + (u x v) * (2 * s)

    Parameters
    ----------
    q : Quaternion
        Rotation. For a non-unit q the result is additionally scaled by
        |q|^2; no normalization is applied.
    v : Vec3 or array-like
        Vector to rotate. Not modified.

    Returns
    -------
    Vec3 or numpy.ndarray
        A new Vec3 when ``v`` is a Vec3, otherwise a new float64 array.
    """
    vec = v if isinstance(v, Vec3) else Vec3.from_array(v)
    u = q.vector
    s = q.w

    result = (u.scale(2.0 * u.dot(vec))
              .add(vec.scale(s * s - u.dot(u)))
              .add(u.cross(vec).scale(2.0 * s)))

    if isinstance(v, Vec3):
        return result
    return result.to_array()
