"""Vehicle profiles: INI parsing, contour preparation and profile discovery."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from os import PathLike
from pathlib import Path
from typing import Sequence

from lidarview.geometry import Vec2

DEFAULT_MOUNT_HEIGHT = 1.8
CONTOUR_EXPANSION: Vec2 = (0.1, 0.1)
PROFILE_DIRECTORY = Path("data")
PROFILE_PREFIX = "VehicleProfile"
PROFILE_EXTENSION = ".ini"
DEFAULT_PROFILE_FILENAME = "VehicleProfileCustom.ini"

_CONTOUR_SECTION = "[Contour]"
_CONTOUR_PREFIX = "contourPt"
_WHITESPACE = " \t\r\n"
_FLOAT32_MAX = 3.4028234663852886e38
_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1

_SECTION_KEYS: dict[str, dict[str, str]] = {
    "[Geometry]": {
        "distRearAxle": "dist_rear_axle",
        "height": "height",
        "length": "length",
        "trackFront": "track_front",
        "trackRear": "track_rear",
        "wheelBase": "wheel_base",
        "width": "width",
        "widthIncludingMirrors": "width_including_mirrors",
    },
    "[LiDAR]": {
        "heightAboveGround": "lidar_height_above_ground",
        "latPos": "lidar_lat_pos",
        "lonPos": "lidar_lon_pos",
        "orientation": "lidar_orientation",
    },
}

_FLOAT_PREFIX = re.compile(
    r"-?(?:inf(?:inity)?|nan(?:\([0-9A-Za-z_]*\))?|(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)",
    re.IGNORECASE,
)
_INT_PREFIX = re.compile(r"-?\d+")


@dataclass
class VehicleProfile:
    """Vehicle geometry and LiDAR mounting read from a profile file."""

    contour: list[Vec2] = field(default_factory=list)
    dist_rear_axle: float = 0.0
    lidar_height_above_ground: float = DEFAULT_MOUNT_HEIGHT
    lidar_lat_pos: float = 0.0
    lidar_lon_pos: float = 0.0
    lidar_orientation: float = 0.0
    height: float = 0.0
    length: float = 0.0
    track_front: float = 0.0
    track_rear: float = 0.0
    wheel_base: float = 0.0
    width: float = 0.0
    width_including_mirrors: float = 0.0

    def lidar_sensor_offset(self) -> Vec2:
        """Offset that moves points from the sensor frame into the vehicle frame."""
        return (self.lidar_lat_pos, -self.lidar_lon_pos - self.dist_rear_axle)

    def floor_height(self) -> float:
        """Ground level below the sensor."""
        return -abs(self.lidar_height_above_ground)


def _parse_float(text: str) -> float | None:
    match = _FLOAT_PREFIX.match(text)
    if match is None:
        return None
    literal = match.group().lower()
    if "nan" in literal:
        return -math.nan if literal.startswith("-") else math.nan
    if "inf" in literal:
        return float(literal)
    value = float(literal)
    if abs(value) > _FLOAT32_MAX:
        return None
    return value


def _parse_int(text: str) -> int | None:
    match = _INT_PREFIX.match(text)
    if match is None:
        return None
    value = int(match.group())
    if not _INT32_MIN <= value <= _INT32_MAX:
        return None
    return value


def _parse_contour_point(key: str, value: str) -> tuple[int, Vec2] | None:
    if not key.startswith(_CONTOUR_PREFIX):
        return None
    index = _parse_int(key[len(_CONTOUR_PREFIX):])
    if index is None or "," not in value:
        return None
    x_text, y_text = (part.strip(_WHITESPACE) for part in value.split(",", 1))
    if not x_text or not y_text:
        return None
    lon = _parse_float(x_text)
    lat = _parse_float(y_text)
    if lon is None or lat is None:
        return None
    # Columns are [longitude, latitude]; the vehicle frame uses x = lat, y = lon.
    return index, (lat, lon)


def _expand(point: Vec2) -> Vec2:
    x, y = point
    return (
        x + math.copysign(1.0, x) * CONTOUR_EXPANSION[0],
        y + math.copysign(1.0, y) * CONTOUR_EXPANSION[1],
    )


def parse_vehicle_profile(text: str) -> VehicleProfile:
    """Build a profile from INI text; malformed entries are skipped."""
    section = ""
    values: dict[str, float] = {}
    contour_points: dict[int, Vec2] = {}

    for raw_line in text.split("\n"):
        line = raw_line.strip(_WHITESPACE)
        if not line or line[0] in ";#":
            continue
        if line[0] == "[":
            section = line
            continue
        if "=" not in line:
            continue

        raw_key, raw_value = line.split("=", 1)
        key = raw_key.strip(_WHITESPACE)
        value = raw_value.strip(_WHITESPACE).split(";", 1)[0].strip(_WHITESPACE)
        if not value:
            continue

        if section == _CONTOUR_SECTION:
            entry = _parse_contour_point(key, value)
            if entry is not None:
                index, point = entry
                contour_points[index] = point
            continue

        attribute = _SECTION_KEYS.get(section, {}).get(key)
        if attribute is not None:
            number = _parse_float(value)
            if number is not None:
                values[attribute] = number

    contour = [_expand(contour_points[index]) for index in sorted(contour_points)]
    return VehicleProfile(contour=contour, **values)


def load_vehicle_profile(path: str | PathLike[str]) -> VehicleProfile:
    """Read a profile file; an unreadable file yields the default profile."""
    try:
        text = Path(path).read_text(encoding="utf-8", errors="replace")
    except OSError:
        return VehicleProfile()
    return parse_vehicle_profile(text)


def list_vehicle_profiles(directory: str | PathLike[str] = PROFILE_DIRECTORY) -> list[str]:
    """Sorted profile file names in ``directory``, or the default name when there are none."""
    folder = Path(directory)
    entries: list[str] = []
    if folder.is_dir():
        entries = [
            entry.name
            for entry in folder.iterdir()
            if entry.is_file()
            and entry.name.startswith(PROFILE_PREFIX)
            and entry.suffix == PROFILE_EXTENSION
        ]
    if not entries:
        entries = [DEFAULT_PROFILE_FILENAME]
    return sorted(entries)


def default_profile_index(entries: Sequence[str], current: int) -> int:
    """Index to select after listing profiles: the default profile if present."""
    if DEFAULT_PROFILE_FILENAME in entries:
        return list(entries).index(DEFAULT_PROFILE_FILENAME)
    if current >= len(entries):
        return 0
    return current