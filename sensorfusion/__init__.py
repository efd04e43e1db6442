"""
Device orientation estimation by sensor fusion.

This package provides platform-independent implementations of:
- Tilt-compass orientation from accelerometer and magnetic field sensor
- Gyroscope integration with periodic complementary-filter drift correction
- Rotation matrix utilities
"""

__version__ = "2.1.0"
__author__ = "Sensor Fusion Team"

from .config import Config
from .errors import SensorFusionError, DimensionMismatch, DegenerateOrientation, MissingCapability
from .fusion import MotionSensor, PublishedOrientation
from .sensors import SensorKind, SensorSample, SampleSource

__all__ = [
    "Config",
    "MotionSensor",
    "PublishedOrientation",
    "SensorKind",
    "SensorSample",
    "SampleSource",
    "SensorFusionError",
    "DimensionMismatch",
    "DegenerateOrientation",
    "MissingCapability",
]
