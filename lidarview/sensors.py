"""Point type and the interface every LiDAR sensor implements."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class LidarPoint:
    """One LiDAR return in the sensor frame, with intensity in [0, 1]."""

    x: float
    y: float
    z: float
    intensity: float


PointCloud = list[LidarPoint]


class BaseLidarSensor(ABC):
    """A source of LiDAR frames."""

    @abstractmethod
    def identifier(self) -> str:
        """Human-readable name of the sensor."""

    @abstractmethod
    def configure(self, vertical_fov_deg: float, max_range_m: float) -> None:
        """Configure the sensor before a run."""

    @abstractmethod
    def read_next_scan(self) -> tuple[PointCloud, int] | None:
        """Return the next frame and its timestamp in microseconds, or None when no data is left."""