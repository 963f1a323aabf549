"""Running background model built from the most recent frames."""

from __future__ import annotations

from collections import deque

import numpy as np

_FRAME_LIMIT = 20
_CHANGE_THRESHOLD = 1000


class BackgroundModel:
    """Keeps recent RGB frames and replaces changing pixels of the newest by the mean."""

    def __init__(self, width: int, height: int) -> None:
        if width < 0 or height < 0:
            raise ValueError("image dimensions must not be negative")
        self.width = width
        self.height = height
        self._frames: deque[np.ndarray] = deque()

    def __len__(self) -> int:
        return len(self._frames)

    def add_image(self, data) -> None:
        """Add a frame; once enough frames are held, correct the newest one."""
        if isinstance(data, (bytes, bytearray, memoryview)):
            arr = np.frombuffer(data, dtype=np.uint8)
        else:
            arr = np.asarray(data, dtype=np.uint8)
        expected = self.width * self.height * 3
        if arr.size != expected:
            raise ValueError(f"image has {arr.size} values, expected {expected}")
        frame = arr.reshape(-1, 3).copy()

        if len(self._frames) > _FRAME_LIMIT:
            self._frames.popleft()
        self._frames.append(frame)
        if len(self._frames) < _FRAME_LIMIT:
            return

        last = frame.astype(np.int64)
        prior = np.stack(list(self._frames)[:-1]).astype(np.int64)
        change = np.abs(prior - last).sum(axis=0).sum(axis=1)
        moving = change > _CHANGE_THRESHOLD
        if not moving.any():
            return
        mean = prior.sum(axis=0) // (len(self._frames) - 1)
        corrected = mean * 0.9 + last * 0.1
        frame[moving] = corrected[moving].astype(np.uint8)

    def model(self) -> np.ndarray:
        """Return a (height, width, 3) copy of the current background estimate."""
        if not self._frames:
            raise RuntimeError("no image has been added yet")
        return self._frames[-1].reshape(self.height, self.width, 3).copy()