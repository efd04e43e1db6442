"""
State shared between the gyroscope integrator and the complementary fuser.
"""

import numpy as np
from dataclasses import dataclass, field
from typing import Optional

from ..math.rotation import identity


@dataclass
class FusionState:
    """
    Mutable fusion state, created when the engine starts.

    - gyro_matrix: accumulated gyroscope rotation (flattened 3x3)
    - gyro_orientation: ``[azimuth, pitch, roll]`` decomposed from gyro_matrix
    - fused_orientation: last complementary filter output
    - last_gyro_timestamp: timestamp of the previous gyroscope sample (ns)
    - gyro_ready: a tilt-compass estimate has been produced at least once
    - gyro_seeded: gyro_matrix has been seeded from that estimate
    """

    gyro_matrix: np.ndarray = field(default_factory=identity)
    gyro_orientation: np.ndarray = field(default_factory=lambda: np.zeros(3))
    fused_orientation: np.ndarray = field(default_factory=lambda: np.zeros(3))
    last_gyro_timestamp: Optional[int] = None
    gyro_ready: bool = False
    gyro_seeded: bool = False

    def reset(self) -> None:
        """Return to the start-up state."""
        self.gyro_matrix = identity()
        self.gyro_orientation = np.zeros(3)
        self.fused_orientation = np.zeros(3)
        self.last_gyro_timestamp = None
        self.gyro_ready = False
        self.gyro_seeded = False

    def is_finite(self) -> bool:
        """True when no field holds NaN or infinity."""
        return bool(
            np.all(np.isfinite(self.gyro_matrix))
            and np.all(np.isfinite(self.gyro_orientation))
            and np.all(np.isfinite(self.fused_orientation))
        )


@dataclass(frozen=True)
class PublishedOrientation:
    """
    Orientation in integer degrees as exposed to consumers.

    azimuth_deg and roll_deg lie in [0, 360). accurate_pitch_deg follows
    every update; approx_pitch_deg only moves when the accurate value leaves
    the hysteresis band around it.
    """

    azimuth_deg: int = 0
    roll_deg: int = 0
    accurate_pitch_deg: int = 0
    approx_pitch_deg: int = 0

    def __str__(self) -> str:
        return (
            f"PublishedOrientation(azimuth={self.azimuth_deg}, "
            f"pitch={self.accurate_pitch_deg} (~{self.approx_pitch_deg}), "
            f"roll={self.roll_deg})"
        )
