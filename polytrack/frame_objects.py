"""Extraction of large bright objects from a gray frame."""

from __future__ import annotations

import numpy as np

from polytrack.dilate import Dilate
from polytrack.labeling import LabeledObject, Labeling

_BINARY_THRESHOLD = 128
_LABEL_THRESHOLD = 50
_DEFAULT_MIN_AREA = 200


def _as_rgb(frame, width: int, height: int) -> np.ndarray:
    if isinstance(frame, (bytes, bytearray, memoryview)):
        arr = np.frombuffer(frame, dtype=np.uint8)
    else:
        arr = np.asarray(frame, dtype=np.uint8)
    if arr.size != width * height * 3:
        raise ValueError(
            f"frame has {arr.size} values, expected {width * height * 3} "
            f"for a {width}x{height} RGB frame"
        )
    return arr.reshape(height, width, 3)


class FrameObjects:
    """Binarises, dilates and labels a frame, keeping objects larger than ``min_area``."""

    def __init__(self, width: int, height: int) -> None:
        if width < 0 or height < 0:
            raise ValueError("image dimensions must not be negative")
        self.width = width
        self.height = height
        self.min_area = _DEFAULT_MIN_AREA
        self._labeling: Labeling | None = None

    def execute(self, frame) -> np.ndarray:
        """Return a (height, width, 3) frame with the kept objects painted white."""
        filtered = self._filter(frame)
        return self._label(filtered)

    def object_list(self) -> list[LabeledObject]:
        """Objects of the last executed frame whose area exceeds ``min_area``."""
        if self._labeling is None:
            raise RuntimeError("no frame has been executed yet")
        return [obj for obj in self._labeling if obj.area > self.min_area]

    def _filter(self, frame) -> np.ndarray:
        rgb = _as_rgb(frame, self.width, self.height)
        binary = np.where(rgb > _BINARY_THRESHOLD, 255, 0).astype(np.uint8)
        dilation = Dilate(self.width, self.height)
        dilation.set_kernel([1] * 9, 3, 3)
        dilation.set_hot_spot(1, 1)
        return dilation.execute(binary)

    def _label(self, frame: np.ndarray) -> np.ndarray:
        binary = np.where(frame > _LABEL_THRESHOLD, 0, 1).astype(np.uint8)
        labeling = Labeling(self.width, self.height)
        labeling.execute(binary)
        self._labeling = labeling

        result = np.zeros((self.height, self.width, 3), dtype=np.uint8)
        kept = [obj.index for obj in labeling if obj.area > self.min_area]
        if kept:
            result[np.isin(labeling.index_map, kept)] = 255
        return result