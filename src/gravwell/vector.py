"""
Vector2 value type for planar physics.

Vector2 is immutable: every operation returns a new instance and the
receiver is never modified. Positions and velocities can therefore be shared
between planets, the rocket and flight logs without aliasing surprises.
"""

import math
from typing import Iterator, Tuple

import numpy as np

from .config import config
from .utils import validation_error


class Vector2:
    """
    Immutable 2D vector with double-precision components.

    Parameters
    ----------
    x : float
        First component
    y : float
        Second component

    Notes
    -----
    Degenerate inputs follow a no-exception policy:

    - ``normalized()`` of the zero vector is the zero vector
    - ``divide(0)`` returns the vector unchanged
    - ``projection_onto(v)`` with a zero-length ``v`` is the zero vector
    """
    __slots__ = ('_x', '_y')

    def __init__(self, x: float = 0.0, y: float = 0.0):
        x = float(x)
        y = float(y)
        if not (math.isfinite(x) and math.isfinite(y)):
            validation_error(f"Vector2 components must be finite, got ({x}, {y})")
            x = x if math.isfinite(x) else 0.0
            y = y if math.isfinite(y) else 0.0
        object.__setattr__(self, '_x', x)
        object.__setattr__(self, '_y', y)

    # ========== ALTERNATE CONSTRUCTORS ==========
    @classmethod
    def zero(cls) -> "Vector2":
        return cls(0.0, 0.0)

    @classmethod
    def from_angle(cls, angle: float, length: float = 1.0) -> "Vector2":
        """Vector of the given length pointing along ``angle`` [rad]."""
        return cls(math.cos(angle) * length, math.sin(angle) * length)

    @classmethod
    def from_numpy(cls, array) -> "Vector2":
        """Create from any 2-element array-like."""
        array = np.asarray(array, dtype=float)
        if array.shape != (2,):
            raise ValueError(f"Vector2 requires shape (2,), got {array.shape}")
        return cls(array[0], array[1])

    # ========== PROPERTY ACCESS ==========
    @property
    def x(self) -> float:
        return self._x

    @property
    def y(self) -> float:
        return self._y

    # ========== ARITHMETIC ==========
    def add(self, other: "Vector2") -> "Vector2":
        return Vector2(self._x + other.x, self._y + other.y)

    def subtract(self, other: "Vector2") -> "Vector2":
        return Vector2(self._x - other.x, self._y - other.y)

    def scale(self, k: float) -> "Vector2":
        return Vector2(self._x * k, self._y * k)

    def divide(self, k: float) -> "Vector2":
        """Divide by a scalar; dividing by zero returns the vector unchanged."""
        if k == 0:
            return self
        return Vector2(self._x / k, self._y / k)

    def dot(self, other: "Vector2") -> float:
        return self._x * other.x + self._y * other.y

    def cross(self, other: "Vector2") -> float:
        """z-component of the 3D cross product."""
        return self._x * other.y - self._y * other.x

    # ========== GEOMETRY ==========
    def magnitude(self) -> float:
        return math.hypot(self._x, self._y)

    def magnitude_squared(self) -> float:
        return self._x * self._x + self._y * self._y

    def normalized(self) -> "Vector2":
        """Unit vector in the same direction, or the zero vector."""
        mag = self.magnitude()
        if mag == 0:
            return Vector2(0.0, 0.0)
        return Vector2(self._x / mag, self._y / mag)

    def projection_onto(self, other: "Vector2") -> "Vector2":
        """
        Component of this vector parallel to ``other``.

        Returns the zero vector when ``other`` has zero magnitude.
        """
        denom = other.magnitude_squared()
        if denom == 0:
            return Vector2(0.0, 0.0)
        return other.scale(self.dot(other) / denom)

    def distance_to(self, other: "Vector2") -> float:
        return math.hypot(self._x - other.x, self._y - other.y)

    def rotated(self, angle: float) -> "Vector2":
        """Copy rotated ``angle`` radians counter-clockwise."""
        c = math.cos(angle)
        s = math.sin(angle)
        return Vector2(self._x * c - self._y * s, self._x * s + self._y * c)

    def clone(self) -> "Vector2":
        return Vector2(self._x, self._y)

    def to_tuple(self) -> Tuple[float, float]:
        return (self._x, self._y)

    def to_numpy(self) -> np.ndarray:
        return np.array([self._x, self._y])

    # ========== SPECIAL METHODS ==========
    def __setattr__(self, name, value):
        raise AttributeError("Vector2 is immutable")

    def __add__(self, other: "Vector2") -> "Vector2":
        return self.add(other)

    def __sub__(self, other: "Vector2") -> "Vector2":
        return self.subtract(other)

    def __mul__(self, k: float) -> "Vector2":
        return self.scale(k)

    def __rmul__(self, k: float) -> "Vector2":
        return self.scale(k)

    def __truediv__(self, k: float) -> "Vector2":
        return self.divide(k)

    def __neg__(self) -> "Vector2":
        return Vector2(-self._x, -self._y)

    def __abs__(self) -> float:
        return self.magnitude()

    def __iter__(self) -> Iterator[float]:
        yield self._x
        yield self._y

    def __len__(self):
        return 2

    def __getitem__(self, key):
        return (self._x, self._y)[key]

    def __repr__(self):
        return f"Vector2({self._x!r}, {self._y!r})"

    def __eq__(self, other):
        #Check equality with tolerance
        if not isinstance(other, Vector2):
            return NotImplemented
        return (
            math.isclose(self._x, other.x, rel_tol=config.EQUALITY_RTOL,
                         abs_tol=config.EQUALITY_ATOL) and
            math.isclose(self._y, other.y, rel_tol=config.EQUALITY_RTOL,
                         abs_tol=config.EQUALITY_ATOL)
        )

    def __hash__(self):
        #Hash with rounding to match equality
        decimals = config.HASH_DECIMALS
        return hash((round(self._x, decimals), round(self._y, decimals)))
