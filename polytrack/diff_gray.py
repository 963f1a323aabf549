"""Edge-preserving diffusion filters for gray frames stored as RGB."""

from __future__ import annotations

import numpy as np

_TIME_STEP = 0.5

# Offsets of the eight neighbours as (row, column).
_NEIGHBOURS = ((-1, -1), (-1, 0), (-1, 1), (0, -1), (0, 1), (1, -1), (1, 0), (1, 1))


def conductance(v, w, lam):
    """Diffusivity between two gray values: ``exp(-(|v - w| / lam) ** 5 / 5)``."""
    if lam <= 0:
        raise ValueError("lam must be positive")
    diff = np.abs(np.asarray(v, dtype=np.float64) - np.asarray(w, dtype=np.float64))
    result = np.exp(-((diff / lam) ** 5) / 5.0)
    return float(result) if np.ndim(result) == 0 else result


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


def _shifted(plane: np.ndarray, dy: int, dx: int) -> np.ndarray:
    h, w = plane.shape
    return plane[1 + dy : h - 1 + dy, 1 + dx : w - 1 + dx]


class DiffGray:
    """Filters the first channel of a frame; border pixels are left as they are."""

    def __init__(self, width: int, height: int) -> None:
        if width < 0 or height < 0:
            raise ValueError("image dimensions must not be negative")
        self.width = width
        self.height = height

    def _has_interior(self) -> bool:
        return self.width >= 3 and self.height >= 3

    def execute(self, image, iterations: int, lam: float) -> np.ndarray:
        """Run nonlinear diffusion; interior pixels get the result in all channels."""
        if iterations < 0:
            raise ValueError("iterations must not be negative")
        if lam <= 0:
            raise ValueError("lam must be positive")
        current = _as_rgb(image, self.width, self.height).astype(np.float64)
        if not self._has_interior():
            return current.astype(np.uint8)
        for _ in range(iterations):
            gray = current[:, :, 0]
            centre = _shifted(gray, 0, 0)
            total = np.zeros_like(centre)
            weight_sum = np.zeros_like(centre)
            for dy, dx in _NEIGHBOURS:
                neighbour = _shifted(gray, dy, dx)
                weight = (1.0 - np.exp(-8.0 * _TIME_STEP * conductance(centre, neighbour, lam))) / 8.0
                total += weight * neighbour
                weight_sum += weight
            smoothed = total + (1.0 - weight_sum) * centre
            following = current.copy()
            following[1:-1, 1:-1, :] = smoothed[:, :, None]
            current = following
        return np.clip(current, 0, 255).astype(np.uint8)

    def box_average(self, image, iterations: int, lam: float) -> np.ndarray:
        """Weighted 3x3 averaging of the first channel (centre counts three times).

        ``lam`` is accepted for symmetry with :meth:`execute` and is not used.
        """
        if iterations < 0:
            raise ValueError("iterations must not be negative")
        current = _as_rgb(image, self.width, self.height).astype(np.int64)
        if not self._has_interior():
            return current.astype(np.uint8)
        for _ in range(iterations):
            gray = current[:, :, 0]
            total = 3 * _shifted(gray, 0, 0)
            for dy, dx in _NEIGHBOURS:
                total = total + _shifted(gray, dy, dx)
            following = current.copy()
            following[1:-1, 1:-1, 0] = total // 11
            current = following
        return current.astype(np.uint8)