"""
Camera module for generating primary rays and driving the render loop.

The camera sits at the origin of its own space looking down -z, with the
image plane one unit in front of it. ``transform`` (usually built with
``view_transform``) orients the world relative to the camera.
"""

from __future__ import annotations
import logging
import math
import time
from typing import Callable, Optional

from .canvas import Canvas
from .constants import DEFAULT_RECURSION_DEPTH
from .errors import SceneConfigurationError
from .matrix import Matrix
from .ray import Ray
from .vec4 import point
from .world import World

logger = logging.getLogger(__name__)


class Camera:
    """A pinhole camera mapping pixels to world-space rays."""

    def __init__(
        self,
        hsize: int,
        vsize: int,
        field_of_view: float,
        transform: Optional[Matrix] = None
    ):
        """Create a camera.

        Args:
            hsize: Horizontal size of the canvas in pixels
            vsize: Vertical size of the canvas in pixels
            field_of_view: Angle covered by the wider side, in radians
            transform: World-to-camera transform (identity if None)
        """
        if hsize <= 0 or vsize <= 0:
            raise ValueError(f"Camera size must be positive, got {hsize}x{vsize}")

        self.hsize = hsize
        self.vsize = vsize
        self.field_of_view = field_of_view
        self.transform = transform if transform is not None else Matrix.identity()
        self._progress_callback: Optional[Callable[[float], None]] = None

        half_view = math.tan(field_of_view / 2)
        aspect = hsize / vsize
        if aspect >= 1:
            self.half_width = half_view
            self.half_height = half_view / aspect
        else:
            self.half_width = half_view * aspect
            self.half_height = half_view

        self.pixel_size = (self.half_width * 2) / hsize

    def set_progress_callback(self, callback: Callable[[float], None]) -> None:
        """Set a callback function for progress updates.

        Args:
            callback: Function that takes progress as float (0.0 to 1.0),
                called after each completed row
        """
        self._progress_callback = callback

    def ray_for_pixel(self, px: float, py: float) -> Ray:
        """Build the world-space ray through the center of pixel (px, py).

        Raises:
            NonInvertibleMatrixError: If the camera transform is singular
        """
        x_offset = (px + 0.5) * self.pixel_size
        y_offset = (py + 0.5) * self.pixel_size

        # Looking down -z puts +x on the left
        world_x = self.half_width - x_offset
        world_y = self.half_height - y_offset

        inverse = self.transform.inverse()
        pixel = inverse * point(world_x, world_y, -1)
        origin = inverse * point(0, 0, 0)
        direction = (pixel - origin).normalize()
        return Ray(origin, direction)

    def render(self, world: World, remaining: int = DEFAULT_RECURSION_DEPTH) -> Canvas:
        """Render ``world`` into a new canvas.

        Args:
            world: The scene; must not change while rendering
            remaining: Recursion budget for each primary ray

        Returns:
            Canvas of hsize x vsize pixels

        Raises:
            SceneConfigurationError: A malformed scene aborts the whole render
        """
        image = Canvas(self.hsize, self.vsize)
        logger.info(
            "Rendering %dx%d, %d objects, depth %d",
            self.hsize, self.vsize, len(world), remaining
        )
        start_time = time.perf_counter()

        for y in range(self.vsize):
            for x in range(self.hsize):
                try:
                    color = world.color_at(self.ray_for_pixel(x, y), remaining)
                except SceneConfigurationError:
                    logger.error("Render aborted at pixel (%d, %d)", x, y)
                    raise
                image.write_pixel(x, y, color)

            if self._progress_callback:
                self._progress_callback((y + 1) / self.vsize)

        elapsed = time.perf_counter() - start_time
        logger.info("Render completed in %.2f seconds", elapsed)
        return image

    def __repr__(self) -> str:
        return (
            f"Camera(hsize={self.hsize}, vsize={self.vsize}, "
            f"field_of_view={self.field_of_view:.4f})"
        )
