"""
Complementary filter blending gyroscope and tilt-compass orientations.
"""

import logging
import numpy as np

from ..math.constants import FILTER_COEFFICIENT, HALF_PI, PI, TWO_PI
from ..math.rotation import from_orientation
from .state import FusionState

logger = logging.getLogger(__name__)


def fuse_axis(gyro: float, tilt: float, coefficient: float = FILTER_COEFFICIENT) -> float:
    """
    Blend one orientation angle.

    When the two estimates sit on opposite sides of the +-pi seam the
    negative one is shifted by 2*pi before blending and the result is
    wrapped back into (-pi, pi].

    Args:
        gyro: Gyroscope angle in radians
        tilt: Tilt-compass angle in radians
        coefficient: Weight of the gyroscope angle

    Returns:
        float: Fused angle in radians
    """
    one_minus_coeff = 1.0 - coefficient

    if gyro < -HALF_PI and tilt > 0.0:
        fused = coefficient * (gyro + TWO_PI) + one_minus_coeff * tilt
        if fused > PI:
            fused -= TWO_PI
    elif tilt < -HALF_PI and gyro > 0.0:
        fused = coefficient * gyro + one_minus_coeff * (tilt + TWO_PI)
        if fused > PI:
            fused -= TWO_PI
    else:
        fused = coefficient * gyro + one_minus_coeff * tilt

    return fused


class ComplementaryFuser:
    """
    Periodic drift correction for the gyroscope integral.

    Each tick blends the gyroscope orientation (weight ``coefficient``) with
    the tilt-compass orientation per axis, then re-seeds the gyroscope
    matrix with the result so accumulated error decays at rate
    ``1 - coefficient`` per tick.
    """

    def __init__(self, state: FusionState, coefficient: float = FILTER_COEFFICIENT):
        if not 0.0 <= coefficient <= 1.0:
            raise ValueError(f"filter coefficient must be in [0, 1], got {coefficient}")
        self.state = state
        self.coefficient = coefficient
        self.tick_count = 0

    def blend(self, gyro_orientation, tilt_orientation) -> np.ndarray:
        """Fuse two ``[azimuth, pitch, roll]`` vectors axis by axis."""
        return np.array([
            fuse_axis(float(g), float(t), self.coefficient)
            for g, t in zip(gyro_orientation, tilt_orientation)
        ])

    def tick(self, tilt_orientation) -> np.ndarray:
        """
        Run one fusion cycle against the current tilt-compass orientation.

        Returns:
            np.ndarray: The fused orientation
        """
        state = self.state
        fused = self.blend(state.gyro_orientation, tilt_orientation)

        # Reset the gyroscope to the fused orientation to cancel its drift
        state.fused_orientation = fused
        state.gyro_matrix = from_orientation(fused)
        state.gyro_orientation = fused.copy()

        self.tick_count += 1
        logger.debug("Fused orientation %s", np.round(fused, 4).tolist())
        return fused
