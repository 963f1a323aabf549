"""Tracking of labelled objects across binary frames."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from enum import Enum, auto

import numpy as np

from polytrack.labeling import Labeling, Point
from polytrack.trajectories import Trajectories

log = logging.getLogger(__name__)

_LABEL_THRESHOLD = 50
_SEARCH_DEPTH = 5
_MAX_DISTANCE = 80.0
_NO_DISTANCE = 999999.0


class CorrespondenceMethod(Enum):
    """How an object is matched with one in earlier frames."""

    MINIMAL_DISTANCE = auto()
    VECTOR_FIELD = auto()


@dataclass(eq=False)
class TrackedObject:
    """An object in one frame, linked to its predecessor and successor."""

    labeling_index: int
    area: int
    center: Point
    tr_index: int = 0
    prior: TrackedObject | None = field(default=None, repr=False)
    next: TrackedObject | None = field(default=None, repr=False)


@dataclass(eq=False)
class TrackedFrame:
    """The objects found in one frame."""

    objects: list[TrackedObject] = field(default_factory=list)


def _as_rgb(frame, width: int, height: int) -> np.ndarray:
    if isinstance(frame, (bytes, bytearray, memoryview)):
        arr = np.frombuffer(frame, dtype=np.uint8)
    else:
        arr = np.asarray(frame)
    if arr.size != width * height * 3:
        raise ValueError(
            f"frame has {arr.size} values, expected {width * height * 3} "
            f"for a {width}x{height} RGB frame"
        )
    return arr.reshape(height, width, 3)


class Tracker:
    """Labels bright regions of each frame and links them into trajectories."""

    def __init__(self, width: int, height: int) -> None:
        if width < 0 or height < 0:
            raise ValueError("image dimensions must not be negative")
        self.width = width
        self.height = height
        self.correspondence_method = CorrespondenceMethod.MINIMAL_DISTANCE
        self._frames: list[TrackedFrame] = []
        self._max_index = 0

    @property
    def frames(self) -> tuple[TrackedFrame, ...]:
        return tuple(self._frames)

    def add_bin_frame(self, frame) -> TrackedFrame:
        """Label a frame (values above 50 are objects) and track its objects."""
        rgb = _as_rgb(frame, self.width, self.height)
        binary = np.where(rgb > _LABEL_THRESHOLD, 0, 1).astype(np.uint8)
        labeling = Labeling(self.width, self.height)
        labeling.execute(binary)

        first = not self._frames
        new_frame = TrackedFrame(
            [TrackedObject(obj.index, obj.area, obj.center) for obj in labeling]
        )
        if first:
            for obj in new_frame.objects:
                obj.tr_index = self._next_index()
        self._frames.append(new_frame)

        if not first:
            for obj in new_frame.objects:
                match = self._find_correspondence(obj)
                if match is not None:
                    obj.prior = match
                    match.next = obj
                    obj.tr_index = match.tr_index
                else:
                    obj.tr_index = self._next_index()
                    log.info("new trajectory with index %d", obj.tr_index)
        return new_frame

    def trajectories(self, n_last_frames: int, time_step: int) -> Trajectories:
        """Collect trajectories seen in the last frames; ``time_step`` -1 means no limit."""
        result = Trajectories()
        used: set[int] = set()
        recent = self._frames[-n_last_frames:] if n_last_frames > 0 else []
        for frame_limit, frame in enumerate(reversed(recent), start=1):
            for obj in frame.objects:
                if obj.tr_index in used:
                    continue
                used.add(obj.tr_index)
                result.new_trajectory()
                step = frame_limit
                node = obj
                while node is not None and (time_step == -1 or step < time_step):
                    result.add_coordinate(node.center.x, node.center.y, node.tr_index, step)
                    step += 1
                    node = node.prior
        return result

    def _next_index(self) -> int:
        self._max_index += 1
        return self._max_index

    def _find_correspondence(self, query: TrackedObject) -> TrackedObject | None:
        if self.correspondence_method is CorrespondenceMethod.MINIMAL_DISTANCE:
            return self._minimal_distance(query)
        return None

    def _minimal_distance(self, query: TrackedObject) -> TrackedObject | None:
        earlier = self._frames[-2::-1][:_SEARCH_DEPTH]
        for frame in earlier:
            min_distance = _NO_DISTANCE
            best: TrackedObject | None = None
            for candidate in frame.objects:
                dx = candidate.center.x - query.center.x
                dy = candidate.center.y - query.center.y
                distance = math.sqrt(dx * dx + dy * dy)
                if distance < min_distance:
                    min_distance = distance
                    best = candidate
            if best is not None and min_distance < _MAX_DISTANCE and best.next is None:
                return best
        return None