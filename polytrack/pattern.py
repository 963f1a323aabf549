"""Training patterns: pixel coordinates paired with colour vectors."""

from __future__ import annotations

from enum import Enum, auto
from pathlib import Path

import numpy as np

from polytrack.labeling import Point

_PATTERN_DIM = 3


class ColorSpaceModel(Enum):
    """Colour space that the pattern vectors are expressed in."""

    RGB = auto()
    HSV = auto()
    HSI = auto()
    LAB = auto()


class Pattern:
    """A list of samples, each a 2-D coordinate and a d-dimensional vector."""

    def __init__(self, coordinates, data) -> None:
        points = [p if isinstance(p, Point) else Point(int(p[0]), int(p[1])) for p in coordinates]
        arr = np.asarray(data, dtype=np.float64)
        if arr.ndim == 1:
            arr = arr.reshape(len(points), -1) if points else arr.reshape(0, 0)
        if arr.ndim != 2:
            raise ValueError("pattern data must be a two-dimensional array")
        if arr.shape[0] != len(points):
            raise ValueError(
                f"{len(points)} coordinates but {arr.shape[0]} data vectors"
            )
        self.coordinates: list[Point] = points
        self.data: np.ndarray = arr
        self.color_model = ColorSpaceModel.RGB

    def size(self) -> int:
        """Number of samples."""
        return self.data.shape[0]

    def dim(self) -> int:
        """Number of components of each data vector."""
        return self.data.shape[1]

    def __len__(self) -> int:
        return self.size()


def _tokens(text: str) -> list[str]:
    words: list[str] = []
    for line in text.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        words.extend(stripped.split())
    return words


def load_pattern(filename) -> Pattern:
    """Read a pattern file: a sample count, then ``x y v1 v2 v3`` per sample.

    Lines starting with ``#`` are comments.
    """
    text = Path(filename).read_text()
    words = _tokens(text)
    if not words:
        raise ValueError(f"{filename}: missing number of patterns")
    try:
        count = int(words[0])
    except ValueError as exc:
        raise ValueError(f"{filename}: invalid number of patterns {words[0]!r}") from exc
    if count <= 0:
        raise ValueError(f"{filename}: the file holds no patterns")

    per_sample = 2 + _PATTERN_DIM
    body = words[1:]
    if len(body) < count * per_sample:
        raise ValueError(
            f"{filename}: expected {count} patterns, found data for "
            f"{len(body) // per_sample}"
        )

    coordinates: list[Point] = []
    vectors: list[list[float]] = []
    try:
        for start in range(0, count * per_sample, per_sample):
            fields = body[start : start + per_sample]
            coordinates.append(Point(int(fields[0]), int(fields[1])))
            vectors.append([float(v) for v in fields[2:]])
    except ValueError as exc:
        raise ValueError(f"{filename}: malformed pattern entry") from exc

    # Values are read at single precision, as the format stores them.
    data = np.array(vectors, dtype=np.float32).astype(np.float64)
    return Pattern(coordinates, data)