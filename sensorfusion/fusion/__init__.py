"""
Orientation fusion: tilt-compass estimate, gyroscope integral and the
complementary filter that blends them.
"""

from .state import FusionState, PublishedOrientation
from .tilt_compass import TiltCompassEstimator
from .gyroscope import GyroscopeIntegrator
from .complementary import ComplementaryFuser, fuse_axis
from .publisher import OrientationPublisher
from .scheduler import FixedRateScheduler
from .engine import MotionSensor

__all__ = [
    "FusionState",
    "PublishedOrientation",
    "TiltCompassEstimator",
    "GyroscopeIntegrator",
    "ComplementaryFuser",
    "fuse_axis",
    "OrientationPublisher",
    "FixedRateScheduler",
    "MotionSensor",
]
