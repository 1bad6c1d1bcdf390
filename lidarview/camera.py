"""Orbit camera driven by mouse input, with fixed preset views."""

from __future__ import annotations

import math
from enum import Enum, IntEnum

Vec3 = tuple[float, float, float]

MIN_DISTANCE = 0.5
MAX_DISTANCE = 200.0
SCROLL_SPEED = 2.0
ROTATION_SENSITIVITY = 0.35
PITCH_LIMIT = 89.0


class CameraMode(Enum):
    """How the camera is placed around the origin."""

    FREE_ORBIT = 0
    BIRDS_EYE = 1
    FRONT = 2
    SIDE = 3
    REAR = 4

    @property
    def label(self) -> str:
        """Name shown in the camera selector."""
        return _MODE_LABELS[self]


_MODE_LABELS = {
    CameraMode.FREE_ORBIT: "Free orbit",
    CameraMode.BIRDS_EYE: "Bird's eye",
    CameraMode.FRONT: "Front",
    CameraMode.SIDE: "Side",
    CameraMode.REAR: "Rear",
}

_FIXED_DIRECTIONS: dict[CameraMode, Vec3] = {
    CameraMode.BIRDS_EYE: (0.0, 0.0, -1.0),
    CameraMode.FRONT: (0.0, -1.0, 0.0),
    CameraMode.SIDE: (1.0, 0.0, 0.0),
    CameraMode.REAR: (0.0, 1.0, 0.0),
}


class MouseButton(IntEnum):
    """Mouse buttons that rotate the free-orbit camera."""

    LEFT = 0
    RIGHT = 1
    MIDDLE = 2


class CameraController:
    """Camera state that reacts to cursor, scroll and button events."""

    def __init__(self) -> None:
        self.mode = CameraMode.FREE_ORBIT
        self.distance = 0.5
        self.yaw = 90.0
        self.pitch = -25.0
        self.fov = 45.0
        self.rotating = False
        self.last_x = 0.0
        self.last_y = 0.0
        self.active_button: MouseButton | None = None

    def set_mode(self, mode: CameraMode) -> None:
        """Switch to ``mode`` and stop any rotation in progress."""
        self.mode = CameraMode(mode)
        self.rotating = False
        self.active_button = None

    def cursor_moved(self, x: float, y: float) -> None:
        """Rotate the free-orbit camera by the cursor movement while a button is held."""
        if (
            self.mode is not CameraMode.FREE_ORBIT
            or not self.rotating
            or self.active_button is None
        ):
            self.last_x, self.last_y = x, y
            return

        dx = x - self.last_x
        dy = y - self.last_y
        self.last_x, self.last_y = x, y
        self.yaw += dx * ROTATION_SENSITIVITY
        self.pitch -= dy * ROTATION_SENSITIVITY
        self.pitch = min(max(self.pitch, -PITCH_LIMIT), PITCH_LIMIT)

    def scrolled(self, offset: float) -> None:
        """Zoom in (positive offset) or out, within the distance limits."""
        self.distance = min(
            max(self.distance - offset * SCROLL_SPEED, MIN_DISTANCE), MAX_DISTANCE
        )

    def button_pressed(
        self, button: int, x: float, y: float, ui_captures_mouse: bool = False
    ) -> None:
        """Start rotating with ``button`` at cursor position (x, y)."""
        if self.mode is not CameraMode.FREE_ORBIT:
            return
        try:
            pressed = MouseButton(button)
        except ValueError:
            return
        if ui_captures_mouse:
            return
        self.rotating = True
        self.active_button = pressed
        self.last_x, self.last_y = x, y

    def button_released(self, button: int) -> None:
        """Stop rotating when the button that started it is released."""
        if self.mode is not CameraMode.FREE_ORBIT:
            return
        if self.active_button is not None and button == self.active_button:
            self.rotating = False
            self.active_button = None

    def direction(self) -> Vec3:
        """Unit vector from the camera towards the origin."""
        fixed = _FIXED_DIRECTIONS.get(self.mode)
        if fixed is not None:
            return fixed
        pitch = math.radians(self.pitch)
        yaw = math.radians(self.yaw)
        return (
            math.cos(pitch) * math.cos(yaw),
            math.cos(pitch) * math.sin(yaw),
            math.sin(pitch),
        )

    def up(self) -> Vec3:
        """Up vector of the view."""
        if self.mode is CameraMode.BIRDS_EYE:
            return (0.0, 1.0, 0.0)
        return (0.0, 0.0, 1.0)

    def position(self) -> Vec3:
        """Camera position: ``distance`` back from the origin along the view direction."""
        dx, dy, dz = self.direction()
        return (-dx * self.distance, -dy * self.distance, -dz * self.distance)