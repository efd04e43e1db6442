"""
Orientation estimate from the accelerometer and magnetic field sensor.
"""

import logging
import numpy as np
from typing import Optional

from ..errors import DegenerateOrientation
from ..math.constants import MIN_FIELD_NORM, MIN_VECTOR_NORM
from ..math.rotation import to_euler

logger = logging.getLogger(__name__)


class TiltCompassEstimator:
    """
    Builds a rotation matrix from gravity and the geomagnetic field.

    Gravity defines "down"; the cross product of the magnetic field with
    gravity gives "east", and gravity crossed with east gives "north". The
    result is noisy but drift free, and is the baseline the gyroscope
    integral is pulled back to.
    """

    def __init__(self, min_field_norm: float = MIN_FIELD_NORM):
        """
        Initialize the estimator.

        Args:
            min_field_norm: Smallest acceptable |E x A| before the east axis
                is considered undefined
        """
        self.min_field_norm = min_field_norm

        # Last good estimate
        self.matrix: Optional[np.ndarray] = None
        self.orientation = np.zeros(3)

        # Statistics
        self.update_count = 0
        self.rejected_count = 0

    @property
    def has_estimate(self) -> bool:
        return self.matrix is not None

    def estimate(self, accel, mag) -> np.ndarray:
        """
        Compute the rotation matrix for a gravity and magnetic vector pair.

        Args:
            accel: Accelerometer vector [x, y, z]
            mag: Magnetic field vector [x, y, z]

        Returns:
            np.ndarray: Flattened 3x3 rotation matrix with rows east, north, up

        Raises:
            DegenerateOrientation: If either vector is near zero, non-finite,
                or both are nearly parallel
        """
        a = np.asarray(accel, dtype=np.float64)
        e = np.asarray(mag, dtype=np.float64)

        if not (np.all(np.isfinite(a)) and np.all(np.isfinite(e))):
            raise DegenerateOrientation("non-finite sensor vector")

        norm_a = np.linalg.norm(a)
        norm_e = np.linalg.norm(e)
        if norm_a < MIN_VECTOR_NORM:
            raise DegenerateOrientation(f"gravity vector too small ({norm_a:.3g})")
        if norm_e < MIN_VECTOR_NORM:
            raise DegenerateOrientation(f"magnetic vector too small ({norm_e:.3g})")

        h = np.cross(e, a)
        norm_h = np.linalg.norm(h)
        if norm_h < self.min_field_norm:
            # Free fall, or gravity and field (nearly) parallel
            raise DegenerateOrientation(
                f"gravity and magnetic field nearly parallel (|E x A| = {norm_h:.3g})")

        h = h / norm_h
        a = a / norm_a
        m = np.cross(a, h)

        return np.concatenate([h, m, a])

    def to_euler(self, matrix) -> np.ndarray:
        """Decompose a rotation matrix into ``[azimuth, pitch, roll]``."""
        return to_euler(matrix)

    def update(self, accel, mag) -> bool:
        """
        Recompute the estimate from the latest sensor vectors.

        On degenerate input the previous estimate is kept unchanged.

        Returns:
            True if a new estimate was produced
        """
        try:
            matrix = self.estimate(accel, mag)
        except DegenerateOrientation as e:
            self.rejected_count += 1
            logger.debug("Keeping previous tilt-compass estimate: %s", e)
            return False

        self.matrix = matrix
        self.orientation = self.to_euler(matrix)
        self.update_count += 1
        return True
