"""
===============================================================================
ORIENTATION - 3D Vector
===============================================================================

Small value type for 3-vectors, the collaborator the quaternion code rotates
and builds axis-angle rotations from. Components are held in a float64 numpy
array; every arithmetic operation returns a new Vec3 and leaves its operands
untouched, which is what keeps Quaternion rotation a pure function.

The static helpers ``Vec3.dot`` and ``Vec3.cross`` mirror the instance
methods so both call styles read naturally:

    >>> a = Vec3(1.0, 0.0, 0.0)
    >>> b = Vec3(0.0, 1.0, 0.0)
    >>> a.cross(b)
    Vec3(x=+0.00000000, y=+0.00000000, z=+1.00000000)
===============================================================================
"""

import numpy as np
from typing import Iterator, Union


class Vec3:
    """
    Three-component vector with value semantics.

    Attributes
    ----------
    x, y, z : float
        Cartesian components (read-only properties).
    """

    __slots__ = ("_v",)

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0) -> None:
        self._v = np.array([x, y, z], dtype=np.float64)

    @staticmethod
    def from_array(values) -> 'Vec3':
        """
        Build a Vec3 from any 3-element array-like.

        Raises
        ------
        ValueError
            If ``values`` does not hold exactly three numbers.
        """
        arr = np.asarray(values, dtype=np.float64).reshape(-1)
        if arr.shape != (3,):
            raise ValueError(
                f"Vec3 needs exactly 3 components, got shape {np.shape(values)}"
            )
        return Vec3(arr[0], arr[1], arr[2])

    @staticmethod
    def zero() -> 'Vec3':
        return Vec3(0.0, 0.0, 0.0)

    # =========================================================================
    # PROPERTIES
    # =========================================================================

    @property
    def x(self) -> float:
        return float(self._v[0])

    @property
    def y(self) -> float:
        return float(self._v[1])

    @property
    def z(self) -> float:
        return float(self._v[2])

    def to_array(self) -> np.ndarray:
        """Copy of the components as a float64 array [x, y, z]."""
        return self._v.copy()

    # =========================================================================
    # ARITHMETIC
    # =========================================================================

    def dot(self, other: 'Vec3') -> float:
        return float(np.dot(self._v, other._v))

    def cross(self, other: 'Vec3') -> 'Vec3':
        return Vec3.from_array(np.cross(self._v, other._v))

    def scale(self, s: float) -> 'Vec3':
        return Vec3.from_array(self._v * float(s))

    def add(self, other: 'Vec3') -> 'Vec3':
        return Vec3.from_array(self._v + other._v)

    def sub(self, other: 'Vec3') -> 'Vec3':
        return Vec3.from_array(self._v - other._v)

    def norm(self) -> float:
        """Euclidean length."""
        return float(np.linalg.norm(self._v))

    def normalized(self) -> 'Vec3':
        """
        Unit vector in the same direction.

        Raises
        ------
        ValueError
            If the vector has zero length.
        """
        n = self.norm()
        if n == 0.0:
            raise ValueError("Cannot normalize a zero-length vector")
        return self.scale(1.0 / n)

    # =========================================================================
    # OPERATOR OVERLOADS
    # =========================================================================

    def __add__(self, other: 'Vec3') -> 'Vec3':
        if isinstance(other, Vec3):
            return self.add(other)
        return NotImplemented

    def __sub__(self, other: 'Vec3') -> 'Vec3':
        if isinstance(other, Vec3):
            return self.sub(other)
        return NotImplemented

    def __mul__(self, other: Union[float, int]) -> 'Vec3':
        if isinstance(other, (int, float)):
            return self.scale(other)
        return NotImplemented

    def __rmul__(self, other: Union[float, int]) -> 'Vec3':
        return self.__mul__(other)

    def __neg__(self) -> 'Vec3':
        return self.scale(-1.0)

    def __iter__(self) -> Iterator[float]:
        return iter((self.x, self.y, self.z))

    def __eq__(self, other: object) -> bool:
        """
        Exact component equality, consistent with __hash__.

        Vec3 is immutable and hashable, so unlike Quaternion (mutable,
        compared within COMPARISON_TOLERANCE) no tolerance is applied here.
        Compare rotated results with numpy.testing or np.allclose.
        """
        if not isinstance(other, Vec3):
            return NotImplemented
        return bool(np.array_equal(self._v, other._v))

    def __hash__(self) -> int:
        return hash((self.x, self.y, self.z))

    def __repr__(self) -> str:
        return f"Vec3(x={self.x:+.8f}, y={self.y:+.8f}, z={self.z:+.8f})"

