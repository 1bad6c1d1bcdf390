"""Velodyne sensor model: hardware tables, scan-to-point conversion and the sensor factory."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Iterator

from lidarview.sensors import BaseLidarSensor, LidarPoint, PointCloud

logger = logging.getLogger(__name__)

RADIANS_PER_TICK = 1.745329251994329e-04
METERS_PER_TICK = 0.002
SPIN_RATE_RAD_PER_US = 600.0 * (1.0 / 60.0 * math.tau / 1e6)
MIN_RANGE_LIMIT = 0.01
DEFAULT_VERTICAL_FOV_DEG = 30.0
DEFAULT_MAX_RANGE_M = 120.0
MAX_REFLECTIVITY = 255.0

HDL32_VERTICAL_ANGLES_RAD: tuple[float, ...] = (
    -0.535293, -0.162839, -0.511905, -0.139626, -0.488692, -0.116239, -0.465305, -0.093026,
    -0.442092, -0.069813, -0.418879, -0.046600, -0.395666, -0.023213, -0.372279, 0.0,
    -0.349066, 0.023213, -0.325853, 0.046600, -0.302466, 0.069813, -0.279253, 0.093026,
    -0.256040, 0.116413, -0.232652, 0.139626, -0.209440, 0.162839, -0.186227, 0.186227,
)

VLP16_VERTICAL_ANGLES_RAD: tuple[float, ...] = (
    -0.261799, 0.0174533, -0.226893, 0.0523599, -0.191986, 0.0872665, -0.15708, 0.122173,
    -0.122173, 0.15708, -0.0872665, 0.191986, -0.0523599, 0.226893, -0.0174533, 0.261799,
)


class LidarHardware(Enum):
    """Sensor models a scan can come from."""

    HDL32 = "HDL-32E"
    VLP16 = "VLP-16"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class HardwareConfig:
    """Beam layout and timing of one sensor model."""

    hardware: LidarHardware
    vertical_angles_rad: tuple[float, ...]
    microseconds_per_laser_firing: float
    meters_per_tick: float = METERS_PER_TICK
    spin_rate: float = SPIN_RATE_RAD_PER_US

    @property
    def num_beams(self) -> int:
        """Number of lasers fired per firing sequence."""
        return len(self.vertical_angles_rad)

    @classmethod
    def for_hardware(cls, hardware: LidarHardware) -> HardwareConfig:
        """Configuration for ``hardware``; unknown models fall back to the HDL-32E layout."""
        if hardware is LidarHardware.VLP16:
            return cls(LidarHardware.VLP16, VLP16_VERTICAL_ANGLES_RAD, 2.304)
        return cls(LidarHardware.HDL32, HDL32_VERTICAL_ANGLES_RAD, 1.152)


@dataclass(frozen=True)
class LaserReturn:
    """Raw return of one laser: range in ticks and reflectivity 0..255."""

    range: int
    refl: int


@dataclass(frozen=True)
class Firing:
    """One firing sequence at an azimuth given in hundredths of a degree."""

    azimuth: int
    lasers: tuple[LaserReturn, ...]


@dataclass(frozen=True)
class LidarScan:
    """A full revolution of firings."""

    timestamp_us: int
    hardware: LidarHardware = LidarHardware.HDL32
    firings: tuple[Firing, ...] = field(default_factory=tuple)


def scan_to_points(scan: LidarScan, config: HardwareConfig, max_range_m: float) -> PointCloud:
    """Convert the raw returns of ``scan`` into Cartesian points, dropping empty and far returns."""
    points: PointCloud = []
    for firing in scan.firings:
        base_theta = firing.azimuth * RADIANS_PER_TICK
        beams = zip(range(config.num_beams), firing.lasers, config.vertical_angles_rad)
        for beam, laser, phi in beams:
            if laser.range == 0:
                continue
            range_m = laser.range * config.meters_per_tick
            if range_m > max_range_m:
                continue
            theta = base_theta + config.spin_rate * beam * config.microseconds_per_laser_firing
            cos_phi = math.cos(phi)
            points.append(
                LidarPoint(
                    x=range_m * cos_phi * math.cos(theta),
                    y=-range_m * cos_phi * math.sin(theta),
                    z=range_m * math.sin(phi),
                    intensity=laser.refl / MAX_REFLECTIVITY,
                )
            )
    return points


class VelodyneLidar(BaseLidarSensor):
    """Velodyne sensor replaying a sequence of recorded scans."""

    def __init__(self, identifier: str, scans: Iterable[LidarScan] | None) -> None:
        self._identifier = identifier
        self._scans = scans
        self._iterator: Iterator[LidarScan] | None = None
        self._scan: LidarScan | None = None
        self.config = HardwareConfig.for_hardware(LidarHardware.HDL32)
        self.vertical_fov_deg = DEFAULT_VERTICAL_FOV_DEG
        self.max_range_m = DEFAULT_MAX_RANGE_M
        self.initialized = False
        self.pending_scan = False

    def __enter__(self) -> VelodyneLidar:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def identifier(self) -> str:
        return self._identifier

    def configure(self, vertical_fov_deg: float, max_range_m: float) -> None:
        self.vertical_fov_deg = vertical_fov_deg
        self.max_range_m = max(MIN_RANGE_LIMIT, max_range_m)
        if not self.initialized:
            self._initialize()

    def read_next_scan(self) -> tuple[PointCloud, int] | None:
        if not self.initialized or not self.pending_scan or self._scan is None:
            return None
        points = scan_to_points(self._scan, self.config, self.max_range_m)
        timestamp = self._scan.timestamp_us

        next_scan = next(self._iterator, None) if self._iterator is not None else None
        if next_scan is None:
            self.pending_scan = False
            self.close()
        else:
            self._scan = next_scan
            self.pending_scan = True
        return points, timestamp

    def close(self) -> None:
        """Stop replaying and release the scan source."""
        if self.initialized:
            self.initialized = False
            self.pending_scan = False
            self._iterator = None
            self._scan = None

    def _initialize(self) -> None:
        if self.initialized or self._scans is None:
            return
        self._iterator = iter(self._scans)
        first = next(self._iterator, None)
        if first is None:
            logger.error("%s: no scans available", self._identifier)
            self._iterator = None
            return

        self._scan = first
        self.initialized = True
        self.pending_scan = True
        if first.hardware not in (LidarHardware.HDL32, LidarHardware.VLP16):
            logger.warning("%s: unsupported hardware - defaulting to HDL32 config", self._identifier)
        self.config = HardwareConfig.for_hardware(first.hardware)


def create_sensor(sensor_type: str, scans: Iterable[LidarScan] | None) -> VelodyneLidar:
    """Create a sensor of ``sensor_type`` replaying ``scans``."""
    if scans is None:
        raise ValueError("no scan source given")
    kind = sensor_type.lower()
    if kind in ("velodyne", "velodyne_hdl"):
        return VelodyneLidar("Velodyne HDL-32E", scans)
    if kind == "velodyne_vlp":
        sensor = VelodyneLidar("Velodyne VLP-16", scans)
        sensor.configure(DEFAULT_VERTICAL_FOV_DEG, DEFAULT_MAX_RANGE_M)
        return sensor
    raise ValueError(f"unknown sensor type: {sensor_type!r}")