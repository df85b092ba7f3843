"""Provide the immutable real vector used for ODE states.

The vector wraps a read-only one-dimensional ``float64`` NumPy array.  All
arithmetic returns a new instance; operands are never modified.  Indexing is
0-based, following NumPy.
"""

from typing import Iterable, Iterator, Union

import numpy as np

from orbiter.utils.exceptions import DimensionError


class Vector:
    """Fixed-length ordered tuple of real numbers.

    Parameters
    ----------
    values : iterable of float or numpy.ndarray
        Components of the vector.  Must be one-dimensional and non-empty.

    Raises
    ------
    :class:`~orbiter.utils.exceptions.DimensionError`
        If *values* is empty or not one-dimensional.

    Examples
    --------
    >>> v = Vector([3.0, 4.0])
    >>> v.norm()
    5.0
    >>> (v + Vector.zeros(2)).scale(2.0)
    Vector([6.0, 8.0])
    """

    __slots__ = ("_data",)

    def __init__(self, values: Union["Vector", Iterable[float], np.ndarray]):
        if isinstance(values, Vector):
            data = values._data
        else:
            data = np.array(values, dtype=np.float64)
            if data.ndim != 1:
                raise DimensionError(
                    f"Vector components must be one-dimensional, got shape {data.shape}"
                )
            if data.size == 0:
                raise DimensionError("Vector must have at least one component")
            data.flags.writeable = False
        self._data = data

    @classmethod
    def zeros(cls, size: int) -> "Vector":
        """Return the zero vector of length *size*."""
        if size <= 0:
            raise DimensionError(f"Vector length must be positive, got {size}")
        return cls(np.zeros(size, dtype=np.float64))

    @property
    def size(self) -> int:
        return self._data.size

    def add(self, other: "Vector") -> "Vector":
        """Return the element-wise sum ``self + other``.

        Raises
        ------
        :class:`~orbiter.utils.exceptions.DimensionError`
            If the vectors differ in length.
        """
        other = _as_vector(other)
        self._ensure_same_size(other, "add")
        return Vector(self._data + other._data)

    def sub(self, other: "Vector") -> "Vector":
        """Return the element-wise difference ``self - other``."""
        other = _as_vector(other)
        self._ensure_same_size(other, "subtract")
        return Vector(self._data - other._data)

    def scale(self, t: float) -> "Vector":
        """Return the vector multiplied component-wise by the scalar *t*."""
        return Vector(self._data * float(t))

    def norm(self) -> float:
        """Return the Euclidean (L2) norm."""
        return float(np.sqrt(np.dot(self._data, self._data)))

    def to_numpy(self) -> np.ndarray:
        """Return a writable copy of the components."""
        return self._data.copy()

    def _ensure_same_size(self, other: "Vector", op: str) -> None:
        if self.size != other.size:
            raise DimensionError(
                f"Cannot {op} vectors of different lengths: {self.size} != {other.size}"
            )

    def __add__(self, other):
        return self.add(other)

    def __radd__(self, other):
        return _as_vector(other).add(self)

    def __sub__(self, other):
        return self.sub(other)

    def __rsub__(self, other):
        return _as_vector(other).sub(self)

    def __mul__(self, t):
        if isinstance(t, (Vector, np.ndarray, list, tuple)):
            return NotImplemented
        return self.scale(t)

    __rmul__ = __mul__

    def __neg__(self):
        return self.scale(-1.0)

    def __len__(self) -> int:
        return self._data.size

    def __getitem__(self, key):
        if isinstance(key, slice):
            return Vector(self._data[key])
        return float(self._data[key])

    def __iter__(self) -> Iterator[float]:
        return (float(v) for v in self._data)

    def __array__(self, dtype=None, copy=None):
        if dtype is None:
            return self._data.copy() if copy else self._data
        return self._data.astype(dtype)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Vector):
            return NotImplemented
        return self.size == other.size and bool(np.array_equal(self._data, other._data))

    def __hash__(self) -> int:
        return hash(tuple(self._data.tolist()))

    def __repr__(self) -> str:
        return f"Vector({self._data.tolist()})"


def _as_vector(value) -> Vector:
    if isinstance(value, Vector):
        return value
    return Vector(value)
