"""Point-cloud scene state: display settings, ground classification and vertex layout."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable

from lidarview.camera import CameraMode
from lidarview.geometry import Vec2, distance_to_contour, zone_index_from_height
from lidarview.profile import VehicleProfile
from lidarview.sensors import LidarPoint

GRID_HALF_SPAN = 50.0
INITIAL_GRID_HALF_SPAN = 5.0
MIN_HEIGHT_RANGE = 1e-3
MIN_FRAME_SPEED_SCALE = 0.01
DEFAULT_GRID_SPACING = 10.0
DEFAULT_FLOOR_HEIGHT = -1.5
DEFAULT_MOUNT_HEIGHT = 1.8


class ColorMode(Enum):
    """How points are coloured."""

    CLASSIFICATION = 0
    HEIGHT = 1
    INTENSITY = 2

    @property
    def label(self) -> str:
        """Name shown in the colour-mode selector."""
        return _COLOR_LABELS[self]


class AlphaMode(Enum):
    """Where point transparency comes from."""

    USER_VALUE = 0
    INTENSITY = 1

    @property
    def label(self) -> str:
        """Name shown in the alpha-mode selector."""
        return _ALPHA_LABELS[self]


_COLOR_LABELS = {
    ColorMode.CLASSIFICATION: "Classification",
    ColorMode.HEIGHT: "Height",
    ColorMode.INTENSITY: "Intensity",
}

_ALPHA_LABELS = {
    AlphaMode.USER_VALUE: "User value",
    AlphaMode.INTENSITY: "Intensity",
}


@dataclass
class WorldFrameSettings:
    """User-adjustable options of the world view."""

    enable_world_visualization: bool = True
    enable_ground_plane: bool = True
    enable_non_ground_plane: bool = True
    point_size: float = 3.0
    color_mode: ColorMode = ColorMode.HEIGHT
    alpha_mode: AlphaMode = AlphaMode.USER_VALUE
    clip_height: float = 5.0
    clip_intensity: float = 1.0
    common_transparency: float = 0.65
    ground_plane_transparency: float = 0.75
    non_ground_plane_transparency: float = 0.9
    ground_classification_height: float = -1.208
    replay_speed: float = 0.1
    ground_plane_color: tuple[float, float, float] = (0.1, 0.7, 0.1)
    non_ground_plane_color: tuple[float, float, float] = (1.0, 0.35, 0.0)
    show_virtual_sensor_map: bool = False
    show_free_space_map: bool = False
    show_bspline_free_space_map: bool = False
    show_vehicle_contour: bool = True
    vehicle_contour_color: tuple[float, float, float] = (0.15, 0.7, 1.0)
    vehicle_contour_transparency: float = 0.65
    vehicle_contour_rotation: float = 0.0


@dataclass(frozen=True)
class Vertex:
    """One point as laid out for drawing."""

    x: float
    y: float
    z: float
    intensity: float
    classification: float


@dataclass
class PointCloudScene:
    """Holds the classified point cloud and the vehicle placement for display."""

    settings: WorldFrameSettings = field(default_factory=WorldFrameSettings)
    camera_mode: CameraMode = CameraMode.FREE_ORBIT
    grid_spacing: float = DEFAULT_GRID_SPACING

    vertices: list[Vertex] = field(default_factory=list)
    ground_count: int = 0
    non_ground_count: int = 0
    obstacle_points: list[LidarPoint] = field(default_factory=list)
    gpu_capacity: int = 0
    needs_reallocation: bool = False
    min_height: float = 0.0
    max_height: float = 1.0
    grid_min: Vec2 = (-INITIAL_GRID_HALF_SPAN, -INITIAL_GRID_HALF_SPAN)
    grid_max: Vec2 = (INITIAL_GRID_HALF_SPAN, INITIAL_GRID_HALF_SPAN)
    closest_contour_distance: float = math.inf
    closest_contour_point: Vec2 = (0.0, 0.0)

    profile: VehicleProfile = field(default_factory=VehicleProfile)
    vehicle_contour: list[Vec2] = field(default_factory=list)
    translated_contour: list[Vec2] = field(default_factory=list)
    contour_translation: Vec2 = (0.0, 0.0)
    mount_height: float = DEFAULT_MOUNT_HEIGHT
    floor_height: float = DEFAULT_FLOOR_HEIGHT
    lidar_sensor_offset: Vec2 = (0.0, 0.0)
    lidar_vcs_position: Vec2 = (0.0, 0.0)
    lidar_orientation_deg: float = 0.0

    def apply_profile(self, profile: VehicleProfile) -> None:
        """Place the vehicle contour and sensor mount according to ``profile``."""
        self.profile = profile
        self.vehicle_contour = list(profile.contour)
        self.mount_height = profile.lidar_height_above_ground
        self.floor_height = profile.floor_height()
        self.lidar_sensor_offset = profile.lidar_sensor_offset()
        self.lidar_vcs_position = (-self.lidar_sensor_offset[0], -self.lidar_sensor_offset[1])
        self.lidar_orientation_deg = profile.lidar_orientation
        self.contour_translation = (0.0, 0.0)
        tx, ty = self.contour_translation
        self.translated_contour = [(x + tx, y + ty) for x, y in self.vehicle_contour]

    def update_points(self, points: Iterable[LidarPoint]) -> list[Vertex]:
        """Classify a new frame, move it into the vehicle frame and refresh derived state."""
        ground: list[Vertex] = []
        non_ground: list[Vertex] = []
        obstacles: list[LidarPoint] = []
        zone_colors = self.camera_mode is CameraMode.FREE_ORBIT
        offset_x, offset_y = self.lidar_sensor_offset

        self.closest_contour_distance = math.inf
        min_x = min_y = math.inf
        max_x = max_y = -math.inf

        for point in points:
            position = (point.x - offset_x, point.y - offset_y)
            is_ground = self.is_ground_point(point)
            classification = 0.0 if is_ground else 1.0
            if zone_colors:
                classification = float(zone_index_from_height(point.z))

            if not is_ground and self.translated_contour:
                distance = distance_to_contour(self.translated_contour, position)
                if distance < self.closest_contour_distance:
                    self.closest_contour_distance = distance
                    self.closest_contour_point = position

            vertex = Vertex(position[0], position[1], point.z, point.intensity, classification)
            if is_ground:
                ground.append(vertex)
            else:
                non_ground.append(vertex)
                if point.z >= self.floor_height:
                    obstacles.append(point)

            min_x, max_x = min(min_x, position[0]), max(max_x, position[0])
            min_y, max_y = min(min_y, position[1]), max(max_y, position[1])

        self.obstacle_points = obstacles
        self.ground_count = len(ground)
        self.non_ground_count = len(non_ground)
        self.vertices = ground + non_ground

        if len(self.vertices) > self.gpu_capacity:
            self.gpu_capacity = len(self.vertices)
            self.needs_reallocation = True

        if self.vertices:
            heights = [vertex.z for vertex in self.vertices]
            self.min_height = min(heights)
            self.max_height = max(heights)
            if abs(self.max_height - self.min_height) < MIN_HEIGHT_RANGE:
                self.max_height = self.min_height + MIN_HEIGHT_RANGE

        if min_x <= max_x and min_y <= max_y:
            self.grid_min = (min(min_x, -GRID_HALF_SPAN), min(min_y, -GRID_HALF_SPAN))
            self.grid_max = (max(max_x, GRID_HALF_SPAN), max(max_y, GRID_HALF_SPAN))
        else:
            self.grid_min = (-GRID_HALF_SPAN, -GRID_HALF_SPAN)
            self.grid_max = (GRID_HALF_SPAN, GRID_HALF_SPAN)

        return self.vertices

    def is_ground_point(self, point: LidarPoint) -> bool:
        """True when the point lies at or below the ground threshold."""
        return point.z <= self.settings.ground_classification_height

    def clip_value(self) -> float:
        """Clip limit for the active colour mode."""
        if self.settings.color_mode is ColorMode.HEIGHT:
            return self.settings.clip_height
        return self.settings.clip_intensity

    def uses_zone_colors(self) -> bool:
        """True when points are coloured by altitude zone."""
        return (
            self.camera_mode is CameraMode.FREE_ORBIT
            and self.settings.color_mode is ColorMode.CLASSIFICATION
        )

    def frame_speed_scale(self) -> float:
        """Replay speed factor, never below a small positive minimum."""
        return max(MIN_FRAME_SPEED_SCALE, self.settings.replay_speed)