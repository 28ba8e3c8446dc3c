"""
Pixel buffer and image output.

Supports:
- Plain-text PPM (P3) with the 70 character line limit
- Any format Pillow can write (PNG, JPEG, ...), with optional gamma
"""

from __future__ import annotations
import logging
from pathlib import Path
from typing import Union
import numpy as np

from .color import Color

logger = logging.getLogger(__name__)

MAX_PPM_LINE_WIDTH = 70


class Canvas:
    """A width x height grid of colors, initialised to black.

    Pixels are stored unclamped in a float64 array of shape (height, width, 3);
    clamping happens on output.
    """

    def __init__(self, width: int, height: int):
        if width <= 0 or height <= 0:
            raise ValueError(f"Canvas size must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self._pixels = np.zeros((height, width, 3), dtype=np.float64)

    def _check_bounds(self, x: int, y: int) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) outside {self.width}x{self.height} canvas")

    def write_pixel(self, x: int, y: int, color: Color) -> None:
        """Set the pixel at column ``x``, row ``y``."""
        self._check_bounds(x, y)
        self._pixels[y, x] = color.to_array()

    def pixel_at(self, x: int, y: int) -> Color:
        """Get the pixel at column ``x``, row ``y``."""
        self._check_bounds(x, y)
        return Color.from_array(self._pixels[y, x].copy())

    def to_array(self) -> np.ndarray:
        """Return the pixels as a (height, width, 3) array (copy)."""
        return self._pixels.copy()

    def to_ldr(self, max_value: int = 255, gamma: float = 1.0) -> np.ndarray:
        """Clamp to [0, 1], apply gamma and scale to integers in [0, max_value]."""
        clamped = np.clip(self._pixels, 0.0, 1.0)
        if gamma != 1.0:
            clamped = np.power(clamped, 1.0 / gamma)
        return np.rint(clamped * max_value).astype(np.int64)

    def to_ppm(self, max_color_value: int = 255) -> str:
        """Serialize as plain PPM text.

        Lines never exceed 70 characters and each pixel row starts on a new
        line. The result ends with a newline.
        """
        header = f"P3\n{self.width} {self.height}\n{max_color_value}\n"
        values = self.to_ldr(max_color_value)
        lines = []

        for row in values:
            line = ''
            for component in row.reshape(-1):
                token = str(int(component))
                if not line:
                    line = token
                elif len(line) + 1 + len(token) > MAX_PPM_LINE_WIDTH:
                    lines.append(line)
                    line = token
                else:
                    line = f"{line} {token}"
            lines.append(line)

        return header + '\n'.join(lines) + '\n'

    def save(self, filename: Union[str, Path], gamma: float = 1.0) -> None:
        """Save the canvas; the extension picks the format.

        Args:
            filename: Output path (``.ppm`` for plain PPM, anything else via Pillow)
            gamma: Gamma for Pillow output (1.0 leaves values linear)
        """
        from PIL import Image as PILImage

        path = Path(filename)
        path.parent.mkdir(parents=True, exist_ok=True)

        if path.suffix.lower() == '.ppm':
            path.write_text(self.to_ppm())
        else:
            ldr = self.to_ldr(255, gamma).astype(np.uint8)
            PILImage.fromarray(ldr, 'RGB').save(path)

        logger.info("Saved %dx%d image to %s", self.width, self.height, path)

    def __repr__(self) -> str:
        return f"Canvas({self.width}x{self.height})"
