"""
Square matrices for affine transforms.

Determinants are computed by cofactor expansion so that singular
transforms (a zero scale, a flattened shear) come out as exactly zero
instead of a tiny floating point residue.
"""

from __future__ import annotations
from typing import Optional, Sequence, Union
import numpy as np

from .constants import EPSILON
from .errors import NonInvertibleMatrixError
from .vec4 import Vec4


class Matrix:
    """An immutable square matrix.

    The inverse is computed once and cached, since every shape, pattern
    and camera inverts its transform for each ray.
    """

    __slots__ = ('_data', '_inverse')

    def __init__(self, rows: Union[Sequence[Sequence[float]], np.ndarray]):
        data = np.array(rows, dtype=np.float64)
        if data.ndim != 2 or data.shape[0] != data.shape[1]:
            raise ValueError(f"Matrix must be square, got shape {data.shape}")
        data.setflags(write=False)
        self._data = data
        self._inverse: Optional[Matrix] = None

    @classmethod
    def identity(cls, size: int = 4) -> Matrix:
        return cls(np.identity(size))

    @property
    def size(self) -> int:
        return self._data.shape[0]

    def __getitem__(self, index: tuple[int, int]) -> float:
        return float(self._data[index])

    def __repr__(self) -> str:
        rows = ', '.join(str(list(row)) for row in self._data)
        return f"Matrix([{rows}])"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        if self._data.shape != other._data.shape:
            return False
        return bool(np.allclose(self._data, other._data, rtol=0.0, atol=EPSILON))

    def __mul__(self, other: Union[Matrix, Vec4]) -> Union[Matrix, Vec4]:
        if isinstance(other, Matrix):
            return Matrix(self._data @ other._data)
        if isinstance(other, Vec4):
            return Vec4.from_array(self._data @ other.to_array())
        return NotImplemented

    def transpose(self) -> Matrix:
        return Matrix(self._data.T)

    def submatrix(self, row: int, col: int) -> Matrix:
        """Return a copy with the given row and column removed."""
        data = np.delete(np.delete(self._data, row, axis=0), col, axis=1)
        return Matrix(data)

    def minor(self, row: int, col: int) -> float:
        return self.submatrix(row, col).determinant()

    def cofactor(self, row: int, col: int) -> float:
        minor = self.minor(row, col)
        return -minor if (row + col) % 2 else minor

    def determinant(self) -> float:
        """Determinant by cofactor expansion along the first row."""
        if self.size == 1:
            return float(self._data[0, 0])
        if self.size == 2:
            a, b = self._data[0]
            c, d = self._data[1]
            return float(a * d - b * c)
        return float(sum(
            self._data[0, col] * self.cofactor(0, col)
            for col in range(self.size)
        ))

    def is_invertible(self) -> bool:
        return self.determinant() != 0

    def inverse(self) -> Matrix:
        """Return the inverse matrix.

        Raises:
            NonInvertibleMatrixError: If the determinant is zero
        """
        if self._inverse is None:
            det = self.determinant()
            if det == 0:
                raise NonInvertibleMatrixError(self)

            cofactors = np.array([
                [self.cofactor(row, col) for col in range(self.size)]
                for row in range(self.size)
            ])
            self._inverse = Matrix(cofactors.T / det)
        return self._inverse

    def to_array(self) -> np.ndarray:
        """Return the underlying numpy array (copy)."""
        return self._data.copy()
