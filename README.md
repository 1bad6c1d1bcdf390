# lidarview

`lidarview` turns frames from a spinning Velodyne LiDAR into a scene that is
ready to draw. It converts raw scans into points and separates ground returns
from the rest. It colours points by altitude zone, places the cloud in the
vehicle frame using a vehicle profile, and keeps an orbit camera. A small engine
pulls frames from a sensor and paces them for a view. Everything is plain Python
with no dependencies.

## What is in the package

| Module                | Contents                                                                                      |
|-----------------------|-----------------------------------------------------------------------------------------------|
| `lidarview.geometry`  | Distances to segments and contours, rotation, altitude zones, colour ramps, sector mid-angles, grid lines |
| `lidarview.sensors`   | `LidarPoint` and the abstract `BaseLidarSensor`                                               |
| `lidarview.profile`   | `VehicleProfile`, the INI-style profile reader and profile discovery                          |
| `lidarview.camera`    | `CameraMode`, `MouseButton` and `CameraController` (free orbit plus fixed views)              |
| `lidarview.scene`     | `PointCloudScene`, `WorldFrameSettings`, `Vertex`, `ColorMode`, `AlphaMode`                   |
| `lidarview.velodyne`  | HDL-32E / VLP-16 hardware tables, `LidarScan` and friends, `scan_to_points`, `VelodyneLidar`, `create_sensor` |
| `lidarview.engine`    | `FrameView` protocol and `LidarEngine`, the capture → update → render loop                    |

## Geometry helpers

```python
from lidarview.geometry import distance_to_segment, zone_index_from_height, grid_lines

distance_to_segment((0.0, 0.0), (2.0, 0.0), (1.0, 1.0))   # 1.0
zone_index_from_height(0.6)                               # 8, the "0.50 m <= z < 0.75 m" zone
grid_lines((-5.0, -5.0), (5.0, 5.0), 5.0)                 # vertical segments first, then horizontal
```

There are 14 altitude zones, listed in `ZONE_LABELS` with colours in
`ZONE_COLORS`. The lowest is "z < -1.75 m" and the highest is "z >= 1.75 m".
Zone boundaries fall every 0.25 m, except that one zone covers -0.50 m to
0.00 m and the next 0.00 m to 0.50 m.

`distance_to_contour` treats the contour as a closed polygon and returns
`math.inf` when it has fewer than two points. `rotate_point` leaves a point
untouched when the rotation is 0.001° or less. `sample_height_color` and
`sample_intensity_color` clamp their input to `[0, 1]`.

## Vehicle profiles

A profile is an INI-style file with the sections `[Geometry]`, `[LiDAR]` and
`[Contour]`:

```ini
[Geometry]
distRearAxle = 3.9
width = 1.9

[LiDAR]
heightAboveGround = 1.8   ; metres
latPos = 0.0
lonPos = 1.2
orientation = 0

[Contour]
contourPt0 = 0.0, 0.95
contourPt1 = -4.8, 0.95
contourPt2 = -4.8, -0.95
contourPt3 = 0.0, -0.95
```

```python
from lidarview.profile import load_vehicle_profile, parse_vehicle_profile

profile = parse_vehicle_profile(text)
profile.lidar_sensor_offset()   # (latPos, -lonPos - distRearAxle)
profile.floor_height()          # -abs(heightAboveGround)
```

Contour columns are `longitude, latitude`. The reader swaps them into
vehicle-frame `(x, y)` order, sorts the points by their `contourPt` index, and
pushes each point 0.1 m outwards on both axes. Comments start with `;` or `#`,
and inline `;` comments are stripped. Lines it cannot read are skipped. When the
LiDAR height is missing, 1.8 m is used. `load_vehicle_profile` returns the
default `VehicleProfile()` when the file cannot be read.

`list_vehicle_profiles(directory)` returns the sorted names of the
`VehicleProfile*.ini` files in a directory (by default `data`). When there are
none it returns `["VehicleProfileCustom.ini"]`. `default_profile_index(entries,
current)` picks `VehicleProfileCustom.ini` if it is listed. Otherwise it keeps
`current`, or resets it to 0 when it is out of range.

## Sensors

A Velodyne sensor replays recorded scans that you supply as `LidarScan`
objects. Each scan is made of `Firing`s of `LaserReturn`s.

```python
from lidarview.velodyne import create_sensor

with create_sensor("velodyne", scans) as sensor:
    sensor.configure(30.0, 120.0)
    frame = sensor.read_next_scan()   # (points, timestamp_us) or None when done
```

`create_sensor` accepts `"velodyne"` and `"velodyne_hdl"` for an HDL-32E, and
`"velodyne_vlp"` for a VLP-16 (which comes back already configured). Case does
not matter. It raises `ValueError` for any other type and when `scans` is
`None`. On `configure`, the sensor reads the first scan and chooses its beam
layout from that scan's `hardware`. An unknown model falls back to the HDL-32E
layout.

`scan_to_points` turns a scan into `LidarPoint`s in sensor coordinates. It drops
zero-range returns and returns beyond the maximum range, and scales reflectivity
into `[0, 1]`.

To write your own sensor, subclass `lidarview.sensors.BaseLidarSensor` and
implement `identifier`, `configure` and `read_next_scan`.

## Scene and camera

`PointCloudScene.apply_profile(profile)` places the vehicle contour and the
sensor mount. `PointCloudScene.update_points(points)` then does the following
and returns the vertices, ground first:

- classifies each point (ground when `z` is at or below
  `settings.ground_classification_height`, -1.208 m by default);
- moves the points into the vehicle frame;
- records the non-ground point closest to the contour;
- collects the obstacle points above the floor;
- updates the height range and the grid bounds (at least ±50 m).

`clip_value`, `uses_zone_colors` and `frame_speed_scale` derive values from the
current `WorldFrameSettings`.

`CameraController` handles mouse input. In free-orbit mode, holding a
`MouseButton` and moving the cursor changes yaw and pitch, with pitch clamped to
±89°. A press is ignored when `ui_captures_mouse` is true. Scrolling zooms, with
the distance clamped to between 0.5 and 200. The bird's-eye, front, side and
rear modes use fixed view directions. `direction`, `up` and `position` give the
view vectors.

## Frame loop

`LidarEngine(sensor, view)` configures the sensor with a 30° field of view and a
120 m range, then calls `view.initialize()`. `run()` repeats capture → update →
render over two alternating buffers until `view.window_should_close()`. It
sleeps so that each frame lasts 33 ms divided by `view.frame_speed_scale()`. The
view is anything that satisfies the `FrameView` protocol. The clock and sleep
functions can be passed in.

## What the package does not do

There is no window, renderer, shader or on-screen control panel. The package
provides the scene, camera and loop, and you must supply a `FrameView` that
draws. It does not read PCAP capture files either, so scans must come from your
own decoder as `LidarScan` objects. There is no command-line program.

## Running the tests

Install the `test` extra, then run `pytest`.