"""Frame loop that pulls scans from a sensor and hands them to a view."""

from __future__ import annotations

import logging
import time
from typing import Callable, Protocol, runtime_checkable

from lidarview.sensors import BaseLidarSensor, PointCloud

logger = logging.getLogger(__name__)

TARGET_FRAME_DURATION_S = 0.033
SENSOR_VERTICAL_FOV_DEG = 30.0
SENSOR_MAX_RANGE_M = 120.0


@runtime_checkable
class FrameView(Protocol):
    """Anything that can show point-cloud frames."""

    def initialize(self) -> bool: ...

    def update_points(self, points: PointCloud) -> object: ...

    def render(self) -> None: ...

    def window_should_close(self) -> bool: ...

    def frame_speed_scale(self) -> float: ...


class LidarEngine:
    """Reads frames from a sensor into a double buffer and paces them for a view."""

    def __init__(
        self,
        sensor: BaseLidarSensor | None,
        view: FrameView,
        target_frame_duration: float = TARGET_FRAME_DURATION_S,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.sensor = sensor
        self.view = view
        self.target_frame_duration = target_frame_duration
        self._clock = clock
        self._sleep = sleep
        self.buffers: tuple[PointCloud, PointCloud] = ([], [])
        self.read_index = 0
        self.latest_timestamp = 0

    def initialize(self) -> bool:
        """Configure the sensor and start the view; False when either is unavailable."""
        if self.sensor is None:
            logger.error("No sensor configured for the LiDAR engine")
            return False
        self.sensor.configure(SENSOR_VERTICAL_FOV_DEG, SENSOR_MAX_RANGE_M)
        logger.info("Preparing sensor %s", self.sensor.identifier())
        return bool(self.view.initialize())

    def run(self) -> None:
        """Show frames until the view asks to close."""
        if not self.initialize():
            return
        while not self.view.window_should_close():
            frame_start = self._clock()

            self.capture_frame()
            self.view.update_points(self.buffers[self.read_index])
            self.view.render()
            self.read_index = (self.read_index + 1) % len(self.buffers)

            scaled_target = self.target_frame_duration / self.view.frame_speed_scale()
            elapsed = self._clock() - frame_start
            if elapsed < scaled_target:
                self._sleep(scaled_target - elapsed)

    def capture_frame(self) -> bool:
        """Read the next scan into the current buffer; False when the sensor had no data."""
        buffer = self.buffers[self.read_index]
        buffer.clear()
        if self.sensor is None:
            logger.error("Sensor returned no data")
            return False
        result = self.sensor.read_next_scan()
        if result is None:
            logger.error("Sensor returned no data")
            return False
        points, timestamp = result
        buffer.extend(points)
        self.latest_timestamp = timestamp
        return True