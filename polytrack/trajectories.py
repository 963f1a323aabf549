"""Storage of object trajectories as lists of timed points."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TrajectoryPoint:
    """A tracked position with its trajectory index and time step."""

    x: int
    y: int
    tr_index: int
    time_step: int


class Trajectories:
    """An ordered collection of trajectories, each a list of points."""

    def __init__(self) -> None:
        self._trajectories: list[list[TrajectoryPoint]] = []

    def new_trajectory(self) -> None:
        """Start a new, empty trajectory that receives later coordinates."""
        self._trajectories.append([])

    def add_coordinate(self, x: int, y: int, tr_index: int, time_step: int) -> None:
        """Append a point to the most recently started trajectory."""
        if not self._trajectories:
            raise IndexError("no trajectory has been started")
        self._trajectories[-1].append(TrajectoryPoint(x, y, tr_index, time_step))

    def __len__(self) -> int:
        return len(self._trajectories)

    def __getitem__(self, index: int) -> list[TrajectoryPoint]:
        if not 0 <= index < len(self._trajectories):
            raise IndexError(f"trajectory index {index} out of range")
        return list(self._trajectories[index])

    def __iter__(self):
        return (list(t) for t in self._trajectories)