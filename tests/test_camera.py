import math

import pytest

from lidarview.camera import (
    MAX_DISTANCE,
    MIN_DISTANCE,
    PITCH_LIMIT,
    CameraController,
    CameraMode,
    MouseButton,
)


def _norm(vector):
    return math.sqrt(sum(c * c for c in vector))


@pytest.mark.parametrize(
    "mode, expected",
    [
        (CameraMode.BIRDS_EYE, (0.0, 0.0, -1.0)),
        (CameraMode.FRONT, (0.0, -1.0, 0.0)),
        (CameraMode.SIDE, (1.0, 0.0, 0.0)),
        (CameraMode.REAR, (0.0, 1.0, 0.0)),
    ],
)
def test_fixed_mode_directions(mode, expected):
    camera = CameraController()
    camera.set_mode(mode)
    assert camera.direction() == expected


def test_up_vector_depends_on_mode():
    camera = CameraController()
    assert camera.up() == (0.0, 0.0, 1.0)
    camera.set_mode(CameraMode.BIRDS_EYE)
    assert camera.up() == (0.0, 1.0, 0.0)
    camera.set_mode(CameraMode.SIDE)
    assert camera.up() == (0.0, 0.0, 1.0)


def test_free_orbit_direction_is_unit_and_faces_down():
    camera = CameraController()
    direction = camera.direction()
    assert _norm(direction) == pytest.approx(1.0)
    assert direction[0] == pytest.approx(0.0, abs=1e-9)
    assert direction[2] < 0.0


def test_position_is_distance_along_negated_direction():
    camera = CameraController()
    camera.scrolled(-10.0)
    position = camera.position()
    direction = camera.direction()
    assert _norm(position) == pytest.approx(camera.distance)
    for p, d in zip(position, direction):
        assert p == pytest.approx(-d * camera.distance)


def test_scroll_clamps_distance():
    camera = CameraController()
    camera.scrolled(5.0)
    assert camera.distance == MIN_DISTANCE
    camera.scrolled(-1000.0)
    assert camera.distance == MAX_DISTANCE


def test_scroll_out_moves_camera_back():
    camera = CameraController()
    camera.scrolled(-10.0)
    assert camera.distance == pytest.approx(20.5)


def test_drag_rotates_yaw():
    camera = CameraController()
    camera.button_pressed(MouseButton.LEFT, 0.0, 0.0)
    camera.cursor_moved(100.0, 0.0)
    assert camera.yaw == pytest.approx(125.0)
    assert camera.pitch == pytest.approx(-25.0)


def test_pitch_is_clamped():
    camera = CameraController()
    camera.button_pressed(MouseButton.RIGHT, 0.0, 0.0)
    camera.cursor_moved(0.0, -10000.0)
    assert camera.pitch == PITCH_LIMIT
    camera.cursor_moved(0.0, 10000.0)
    assert camera.pitch == -PITCH_LIMIT


def test_cursor_without_button_only_tracks_position():
    camera = CameraController()
    camera.cursor_moved(40.0, 60.0)
    assert camera.yaw == 90.0
    assert (camera.last_x, camera.last_y) == (40.0, 60.0)


def test_ui_capture_blocks_rotation():
    camera = CameraController()
    camera.button_pressed(MouseButton.LEFT, 0.0, 0.0, ui_captures_mouse=True)
    assert camera.rotating is False
    camera.cursor_moved(50.0, 50.0)
    assert camera.yaw == 90.0


def test_unknown_button_is_ignored():
    camera = CameraController()
    camera.button_pressed(7, 0.0, 0.0)
    assert camera.rotating is False
    assert camera.active_button is None


def test_release_of_other_button_keeps_rotating():
    camera = CameraController()
    camera.button_pressed(MouseButton.MIDDLE, 0.0, 0.0)
    camera.button_released(MouseButton.LEFT)
    assert camera.rotating is True
    camera.button_released(MouseButton.MIDDLE)
    assert camera.rotating is False
    assert camera.active_button is None


def test_buttons_ignored_outside_free_orbit():
    camera = CameraController()
    camera.set_mode(CameraMode.FRONT)
    camera.button_pressed(MouseButton.LEFT, 0.0, 0.0)
    assert camera.rotating is False
    camera.cursor_moved(100.0, 100.0)
    assert camera.yaw == 90.0


def test_set_mode_stops_rotation():
    camera = CameraController()
    camera.button_pressed(MouseButton.LEFT, 0.0, 0.0)
    camera.set_mode(CameraMode.FREE_ORBIT)
    assert camera.rotating is False
    assert camera.active_button is None
    camera.cursor_moved(100.0, 0.0)
    assert camera.yaw == 90.0