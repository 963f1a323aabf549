"""Connected-component labelling of binary frames (4-connectivity)."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

_NONE, _UP, _RIGHT, _DOWN, _LEFT = 0, 1, 2, 3, 4


@dataclass(frozen=True)
class Point:
    """An integer pixel position."""

    x: int
    y: int


@dataclass(frozen=True)
class LabeledObject:
    """A connected region found by :class:`Labeling`.

    ``limits`` holds the leftmost, rightmost, upper and bottom points.
    """

    index: int
    area: int
    center: Point
    limits: tuple[Point, Point, Point, Point]

    @property
    def leftmost(self) -> Point:
        return self.limits[0]

    @property
    def rightmost(self) -> Point:
        return self.limits[1]

    @property
    def top(self) -> Point:
        return self.limits[2]

    @property
    def bottom(self) -> Point:
        return self.limits[3]


def _first_channel(image, width: int, height: int) -> np.ndarray:
    if isinstance(image, (bytes, bytearray, memoryview)):
        arr = np.frombuffer(image, dtype=np.uint8)
    else:
        arr = np.asarray(image)
    if arr.shape == (height, width):
        return arr
    if arr.size != width * height * 3:
        raise ValueError(
            f"image has {arr.size} values, expected {width * height * 3} "
            f"for a {width}x{height} RGB frame"
        )
    return arr.reshape(height, width, 3)[:, :, 0]


class Labeling:
    """Labels regions whose first channel is zero in a binary frame."""

    def __init__(self, width: int, height: int) -> None:
        if width < 0 or height < 0:
            raise ValueError("image dimensions must not be negative")
        self.width = width
        self.height = height
        self.index_map = np.zeros((height, width), dtype=np.int64)
        self._objects: list[LabeledObject] = []

    def execute(self, image) -> list[LabeledObject]:
        """Label every region of zero pixels, scanning in row-major order."""
        channel = _first_channel(image, self.width, self.height)
        foreground = (channel == 0).tolist()
        labels = [[0] * self.width for _ in range(self.height)]
        self._objects = []
        index = 1
        for i in range(self.height):
            for j in range(self.width):
                if foreground[i][j] and labels[i][j] == 0:
                    self._objects.append(self._flood(foreground, labels, i, j, index))
                    index += 1
        self.index_map = np.array(labels, dtype=np.int64).reshape(self.height, self.width)
        return list(self._objects)

    def __len__(self) -> int:
        return len(self._objects)

    def __getitem__(self, index: int) -> LabeledObject:
        if not 0 <= index < len(self._objects):
            raise IndexError(f"object index {index} out of range")
        return self._objects[index]

    def __iter__(self):
        return iter(self._objects)

    def _free_neighbour(self, foreground, labels, i: int, j: int) -> int:
        if i - 1 >= 0 and foreground[i - 1][j] and labels[i - 1][j] == 0:
            return _UP
        if j + 1 < self.width and foreground[i][j + 1] and labels[i][j + 1] == 0:
            return _RIGHT
        if i + 1 < self.height and foreground[i + 1][j] and labels[i + 1][j] == 0:
            return _DOWN
        if j - 1 >= 0 and foreground[i][j - 1] and labels[i][j - 1] == 0:
            return _LEFT
        return _NONE

    @staticmethod
    def _step(pos: int, i: int, j: int, limits: list[tuple[int, int]]) -> tuple[int, int]:
        if pos == _UP:
            i -= 1
            if i < limits[2][1]:
                limits[2] = (j, i)
        elif pos == _RIGHT:
            j += 1
            if j > limits[1][0]:
                limits[1] = (j, i)
        elif pos == _DOWN:
            i += 1
            if i > limits[3][1]:
                limits[3] = (j, i)
        elif pos == _LEFT:
            j -= 1
            if j < limits[0][0]:
                limits[0] = (j, i)
        return i, j

    def _flood(self, foreground, labels, i: int, j: int, index: int) -> LabeledObject:
        limits = [(j, i)] * 4
        sum_x, sum_y = j, i
        area = 1
        labels[i][j] = index

        pos = self._free_neighbour(foreground, labels, i, j)
        if pos == _NONE:
            start = Point(j, i)
            return LabeledObject(index, 1, start, (start, start, start, start))

        stack = [(j, i)]
        i, j = self._step(pos, i, j, limits)
        while stack:
            labels[i][j] = index
            pos = self._free_neighbour(foreground, labels, i, j)
            if stack[-1] != (j, i):
                stack.append((j, i))
                sum_x += j
                sum_y += i
                area += 1
            if pos != _NONE:
                i, j = self._step(pos, i, j, limits)
            else:
                stack.pop()
                if stack:
                    j, i = stack[-1]

        center = Point(sum_x // area, sum_y // area)
        points = tuple(Point(x, y) for x, y in limits)
        return LabeledObject(index, area, center, points)