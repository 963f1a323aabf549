"""Binary dilation of RGB frames with a configurable kernel."""

from __future__ import annotations

import numpy as np


def _as_rgb(image, width: int, height: int) -> np.ndarray:
    if isinstance(image, (bytes, bytearray, memoryview)):
        arr = np.frombuffer(image, dtype=np.uint8)
    else:
        arr = np.asarray(image, dtype=np.uint8)
    if arr.size != width * height * 3:
        raise ValueError(
            f"image has {arr.size} values, expected {width * height * 3} "
            f"for a {width}x{height} RGB frame"
        )
    return arr.reshape(height, width, 3)


class Dilate:
    """Dilates the white (255) pixels of a frame by a kernel around a hot spot."""

    def __init__(self, width: int, height: int) -> None:
        if width < 0 or height < 0:
            raise ValueError("image dimensions must not be negative")
        self.width = width
        self.height = height
        self._kernel = np.zeros((0, 0), dtype=np.int64)
        self._hot_x = 0
        self._hot_y = 0

    @property
    def kernel(self) -> np.ndarray:
        return self._kernel.copy()

    @property
    def hot_spot(self) -> tuple[int, int]:
        return self._hot_x, self._hot_y

    def set_kernel(self, kernel, kernel_width: int, kernel_height: int) -> None:
        """Set the structuring element from ``kernel_height`` rows of ``kernel_width`` values."""
        arr = np.asarray(kernel, dtype=np.int64)
        if kernel_width < 0 or kernel_height < 0 or arr.size != kernel_width * kernel_height:
            raise ValueError(
                f"kernel has {arr.size} values, expected {kernel_width}x{kernel_height}"
            )
        self._kernel = arr.reshape(kernel_height, kernel_width)

    def set_hot_spot(self, x: int, y: int) -> None:
        """Set the kernel cell that is placed on each white pixel."""
        self._hot_x = x
        self._hot_y = y

    def execute(self, image) -> np.ndarray:
        """Return a dilated copy of ``image`` as a (height, width, 3) array."""
        img = _as_rgb(image, self.width, self.height)
        h, w = self.height, self.width
        hot = img[:, :, 0] == 255
        mask = np.zeros((h, w), dtype=bool)
        for r, c in zip(*np.nonzero(self._kernel)):
            dy = int(r) - self._hot_y
            dx = int(c) - self._hot_x
            if abs(dy) >= h or abs(dx) >= w:
                continue
            src = hot[max(0, -dy) : h - max(0, dy), max(0, -dx) : w - max(0, dx)]
            mask[max(0, dy) : h - max(0, -dy), max(0, dx) : w - max(0, -dx)] |= src
        result = img.copy()
        result[mask] = 255
        return result