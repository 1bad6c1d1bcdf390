import math

import pytest

from lidarview.velodyne import (
    HDL32_VERTICAL_ANGLES_RAD,
    VLP16_VERTICAL_ANGLES_RAD,
    Firing,
    HardwareConfig,
    LaserReturn,
    LidarHardware,
    LidarScan,
    VelodyneLidar,
    create_sensor,
    scan_to_points,
)


def single_beam_scan(raw_range, refl=128, azimuth=0, beam=0, hardware=LidarHardware.HDL32, ts=1):
    lasers = [LaserReturn(0, 0)] * beam + [LaserReturn(raw_range, refl)]
    return LidarScan(ts, hardware, (Firing(azimuth, tuple(lasers)),))


def test_config_beam_counts():
    assert HardwareConfig.for_hardware(LidarHardware.HDL32).num_beams == 32
    assert HardwareConfig.for_hardware(LidarHardware.VLP16).num_beams == 16
    unknown = HardwareConfig.for_hardware(LidarHardware.UNKNOWN)
    assert unknown.vertical_angles_rad == HDL32_VERTICAL_ANGLES_RAD


def test_vlp16_angles_table():
    config = HardwareConfig.for_hardware(LidarHardware.VLP16)
    assert config.vertical_angles_rad[0] == -0.261799
    assert config.vertical_angles_rad[15] == 0.261799


def test_point_range_matches_raw_ticks():
    config = HardwareConfig.for_hardware(LidarHardware.HDL32)
    points = scan_to_points(single_beam_scan(500, azimuth=1234), config, 120.0)
    assert len(points) == 1
    p = points[0]
    assert math.hypot(p.x, p.y, p.z) == pytest.approx(500 * config.meters_per_tick)


def test_intensity_is_normalized():
    config = HardwareConfig.for_hardware(LidarHardware.HDL32)
    full = scan_to_points(single_beam_scan(100, refl=255), config, 120.0)
    none = scan_to_points(single_beam_scan(100, refl=0), config, 120.0)
    assert full[0].intensity == pytest.approx(1.0)
    assert none[0].intensity == pytest.approx(0.0)


def test_zero_range_and_far_returns_are_dropped():
    config = HardwareConfig.for_hardware(LidarHardware.HDL32)
    assert scan_to_points(single_beam_scan(0), config, 120.0) == []
    assert scan_to_points(single_beam_scan(1000), config, 1.0) == []
    assert len(scan_to_points(single_beam_scan(500), config, 1.0)) == 1


def test_quarter_turn_azimuth_points_to_negative_y():
    config = HardwareConfig.for_hardware(LidarHardware.HDL32)
    points = scan_to_points(single_beam_scan(500, azimuth=9000), config, 120.0)
    assert points[0].x == pytest.approx(0.0, abs=1e-6)
    assert points[0].y < 0.0


def test_extra_lasers_beyond_beam_count_are_ignored():
    config = HardwareConfig.for_hardware(LidarHardware.VLP16)
    lasers = tuple(LaserReturn(100, 10) for _ in range(config.num_beams + 8))
    scan = LidarScan(0, LidarHardware.VLP16, (Firing(0, lasers),))
    assert len(scan_to_points(scan, config, 120.0)) == config.num_beams


def test_reads_scans_in_order_then_stops():
    scans = [single_beam_scan(100, ts=10), single_beam_scan(200, ts=20)]
    sensor = VelodyneLidar("test", scans)
    sensor.configure(30.0, 120.0)
    first = sensor.read_next_scan()
    second = sensor.read_next_scan()
    assert first[1] == 10 and second[1] == 20
    assert len(first[0]) == 1 and len(second[0]) == 1
    assert sensor.read_next_scan() is None
    assert sensor.initialized is False


def test_read_before_configure_returns_none():
    sensor = VelodyneLidar("test", [single_beam_scan(100)])
    assert sensor.read_next_scan() is None
    sensor.configure(30.0, 120.0)
    assert sensor.read_next_scan() is not None and sensor.initialized is False


def test_empty_source_never_initializes():
    sensor = VelodyneLidar("test", [])
    sensor.configure(30.0, 120.0)
    assert sensor.initialized is False
    assert sensor.read_next_scan() is None


def test_max_range_is_clamped_to_minimum():
    sensor = VelodyneLidar("test", [single_beam_scan(1), single_beam_scan(10)])
    sensor.configure(30.0, -5.0)
    assert sensor.max_range_m == 0.01
    kept, _ = sensor.read_next_scan()
    dropped, _ = sensor.read_next_scan()
    assert len(kept) == 1
    assert dropped == []


def test_hardware_detected_from_first_scan():
    sensor = VelodyneLidar("test", [single_beam_scan(500, beam=1, hardware=LidarHardware.VLP16)])
    sensor.configure(30.0, 120.0)
    assert sensor.config.vertical_angles_rad == VLP16_VERTICAL_ANGLES_RAD
    points, _ = sensor.read_next_scan()
    assert points[0].z > 0.0


def test_close_stops_reading():
    with VelodyneLidar("test", [single_beam_scan(100), single_beam_scan(100)]) as sensor:
        sensor.configure(30.0, 120.0)
        sensor.close()
        assert sensor.read_next_scan() is None


def test_factory_names_and_case():
    hdl = create_sensor("Velodyne", [single_beam_scan(100)])
    assert hdl.identifier() == "Velodyne HDL-32E"
    assert hdl.read_next_scan() is None
    vlp = create_sensor("VELODYNE_VLP", [single_beam_scan(100)])
    assert vlp.identifier() == "Velodyne VLP-16"
    assert vlp.read_next_scan() is not None


def test_factory_rejects_unknown_type_and_missing_source():
    with pytest.raises(ValueError):
        create_sensor("ouster", [])
    with pytest.raises(ValueError):
        create_sensor("velodyne", None)