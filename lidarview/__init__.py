"""Point-cloud scene model for Velodyne LiDAR replay: sensors, vehicle profiles, camera and frame loop."""

__version__ = "0.1.0"

__all__ = ["camera", "engine", "geometry", "profile", "scene", "sensors", "velodyne"]