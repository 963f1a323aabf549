"""Pan, tilt and focus control of UVC cameras through the uvcdynctrl tool."""

from __future__ import annotations

import logging
import subprocess

log = logging.getLogger(__name__)

_TOOL = "uvcdynctrl"
DEFAULT_DEVICE = "/dev/video0"


def _run(args: list[str]) -> int | None:
    try:
        completed = subprocess.run(
            args, stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL, check=False
        )
    except OSError:
        return None
    return completed.returncode


class CameraControl:
    """Sends control commands to a camera when uvcdynctrl is available."""

    def __init__(self, device: str = DEFAULT_DEVICE) -> None:
        self._device = device
        self._x = 0
        self._y = 0
        self.available = _run([_TOOL]) == 0
        if self.available:
            log.info("camera control is available")
            _run([_TOOL, "-c", "-d", self._device])
        else:
            log.info("camera control is not available")

    @property
    def device(self) -> str:
        return self._device

    @property
    def position(self) -> tuple[int, int]:
        return self._x, self._y

    def set_device(self, device: str) -> None:
        """Select another camera device."""
        if not self.available:
            return
        self._device = device

    def reset_positions(self, code: int) -> None:
        """Reset pan (1), tilt (2) or both (3)."""
        if not self.available:
            return
        _run([_TOOL, "-d", self._device, "-s", "Pan/tilt Reset", str(code)])
        if code in (1, 3):
            self._x = 0
        if code in (2, 3):
            self._y = 0

    def set_pan_rel(self, value: int) -> None:
        """Pan by a relative amount."""
        if not self.available:
            return
        _run(self._relative("Pan (relative)", value))

    def set_tilt_rel(self, value: int) -> None:
        """Tilt by a relative amount."""
        if not self.available:
            return
        _run(self._relative("Tilt (relative)", value))

    def set_focus(self, value: int) -> None:
        """Set the focus value."""
        _run([_TOOL, "-d", self._device, "-s", "Focus", str(value)])

    def _relative(self, control: str, value: int) -> list[str]:
        base = [_TOOL, "-d", self._device, "-s", control]
        if value < 0:
            return base + ["--", f"-{-value}"]
        return base + [str(value)]