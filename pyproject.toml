[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "lidarview"
version = "0.1.0"
description = "Point-cloud scene model for Velodyne LiDAR replay: ground classification, vehicle profiles, orbit camera and a paced frame loop"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "lidar",
    "velodyne",
    "point-cloud",
    "visualization",
    "vehicle",
    "ground-segmentation",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Visualization",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["lidarview"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
