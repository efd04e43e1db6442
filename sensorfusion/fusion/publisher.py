"""
Conversion of fused orientations into published integer degrees.
"""

import math
import threading
from typing import Optional

from ..math.constants import PITCH_HYSTERESIS_DEG
from ..math.utils import wrap_degrees
from .state import PublishedOrientation


class OrientationPublisher:
    """
    Publishes orientations in degrees with a noise gate on pitch.

    The approximate pitch keeps its value until the accurate pitch moves
    more than ``hysteresis_deg`` away from it, giving consumers a visually
    stable angle next to the instantaneous one.
    """

    def __init__(self, hysteresis_deg: int = PITCH_HYSTERESIS_DEG,
                 initial: Optional[PublishedOrientation] = None):
        self.hysteresis_deg = hysteresis_deg
        self._lock = threading.Lock()
        self._current = initial or PublishedOrientation()
        self.publish_count = 0

    @property
    def current(self) -> PublishedOrientation:
        with self._lock:
            return self._current

    def gate_pitch(self, previous_approx: int, accurate: int) -> int:
        """Approximate pitch after observing a new accurate pitch."""
        if abs(previous_approx - accurate) > self.hysteresis_deg:
            return accurate
        return previous_approx

    def publish(self, orientation) -> PublishedOrientation:
        """
        Publish an orientation.

        Args:
            orientation: ``[azimuth, pitch, roll]`` in radians

        Returns:
            PublishedOrientation: The new published values
        """
        azimuth_deg = wrap_degrees(int(round(math.degrees(orientation[0]))))
        roll_deg = wrap_degrees(int(round(math.degrees(orientation[2]))) + 90)
        accurate_pitch = int(round(math.degrees(orientation[1]))) + 180

        with self._lock:
            approx_pitch = self.gate_pitch(self._current.approx_pitch_deg, accurate_pitch)
            self._current = PublishedOrientation(
                azimuth_deg=azimuth_deg,
                roll_deg=roll_deg,
                accurate_pitch_deg=accurate_pitch,
                approx_pitch_deg=approx_pitch,
            )
            self.publish_count += 1
            return self._current
