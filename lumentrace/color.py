"""
RGB color values.

Colors are unclamped while shading (lighting may exceed 1.0); clamping to
the displayable range happens only when the canvas is written out.
"""

from __future__ import annotations
from typing import Union
import numpy as np

from .constants import EPSILON


class Color:
    """An RGB color with float components."""

    __slots__ = ('_data',)

    def __init__(self, red: float = 0.0, green: float = 0.0, blue: float = 0.0):
        self._data = np.array([red, green, blue], dtype=np.float64)

    @classmethod
    def from_array(cls, arr: np.ndarray) -> Color:
        """Create Color from numpy array."""
        c = cls.__new__(cls)
        c._data = np.asarray(arr, dtype=np.float64)
        return c

    @classmethod
    def black(cls) -> Color:
        return cls(0.0, 0.0, 0.0)

    @classmethod
    def white(cls) -> Color:
        return cls(1.0, 1.0, 1.0)

    @property
    def red(self) -> float:
        return float(self._data[0])

    @property
    def green(self) -> float:
        return float(self._data[1])

    @property
    def blue(self) -> float:
        return float(self._data[2])

    def __repr__(self) -> str:
        return f"Color({self.red:.5f}, {self.green:.5f}, {self.blue:.5f})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Color):
            return NotImplemented
        return bool(np.allclose(self._data, other._data, rtol=0.0, atol=EPSILON))

    def __add__(self, other: Color) -> Color:
        return Color.from_array(self._data + other._data)

    def __sub__(self, other: Color) -> Color:
        return Color.from_array(self._data - other._data)

    def __mul__(self, other: Union[Color, float]) -> Color:
        # Color * Color is the Hadamard (component-wise) product
        if isinstance(other, Color):
            return Color.from_array(self._data * other._data)
        return Color.from_array(self._data * other)

    def __rmul__(self, other: float) -> Color:
        return Color.from_array(other * self._data)

    def __getitem__(self, index: int) -> float:
        return float(self._data[index])

    def is_close(self, other: Color, tolerance: float = EPSILON) -> bool:
        """Compare with an explicit tolerance."""
        return bool(np.allclose(self._data, other._data, rtol=0.0, atol=tolerance))

    def clamp(self, min_val: float = 0.0, max_val: float = 1.0) -> Color:
        """Clamp all components to the given range."""
        return Color.from_array(np.clip(self._data, min_val, max_val))

    def to_bytes(self, max_value: int = 255) -> tuple[int, int, int]:
        """Scale to [0, max_value] integers, clamping out-of-range components."""
        scaled = np.rint(np.clip(self._data, 0.0, 1.0) * max_value).astype(int)
        return int(scaled[0]), int(scaled[1]), int(scaled[2])

    def to_array(self) -> np.ndarray:
        """Return the underlying numpy array (copy)."""
        return self._data.copy()
