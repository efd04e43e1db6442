"""
Gyroscope integration into an accumulated rotation matrix.
"""

import logging
import math
import numpy as np

from ..math.constants import GYRO_EPSILON, NS_TO_S
from ..math.rotation import identity, multiply, from_orientation, rotation_from_vector, to_euler
from .state import FusionState

logger = logging.getLogger(__name__)


def delta_rotation_vector(angular_velocity, half_dt: float,
                          epsilon: float = GYRO_EPSILON) -> np.ndarray:
    """
    Axis-angle increment for one gyroscope step.

    Args:
        angular_velocity: Gyroscope vector [x, y, z] in rad/s
        half_dt: Half of the time step in seconds
        epsilon: Angular speed below which the axis is taken as zero

    Returns:
        np.ndarray: ``[axis * sin(theta/2), cos(theta/2)]``
    """
    omega = np.asarray(angular_velocity, dtype=np.float64)
    magnitude = float(np.linalg.norm(omega))

    axis = np.zeros(3)
    if magnitude > epsilon:
        axis = omega / magnitude

    half_theta = magnitude * half_dt
    return np.append(axis * math.sin(half_theta), math.cos(half_theta))


class GyroscopeIntegrator:
    """
    Integrates angular velocity samples into the fusion state.

    The gyroscope has no absolute reference, so its matrix is seeded once
    from the first tilt-compass orientation. After that every sample
    multiplies in a small delta rotation. Drift is removed externally by the
    complementary fuser, which overwrites the matrix on each tick.
    """

    def __init__(self, state: FusionState, epsilon: float = GYRO_EPSILON):
        self.state = state
        self.epsilon = epsilon
        self.sample_count = 0
        self.rejected_count = 0

    def seed(self, orientation) -> None:
        """Align the gyroscope frame with a tilt-compass orientation."""
        self.state.gyro_matrix = multiply(identity(), from_orientation(orientation))
        self.state.gyro_seeded = True
        logger.info("Gyroscope seeded from tilt-compass orientation %s",
                    np.round(orientation, 4).tolist())

    def integrate(self, angular_velocity, timestamp_ns: int, tilt_orientation) -> bool:
        """
        Apply one gyroscope sample.

        Args:
            angular_velocity: Gyroscope vector [x, y, z] in rad/s
            timestamp_ns: Sample timestamp in nanoseconds
            tilt_orientation: Current tilt-compass orientation, used for the
                one-time seeding

        Returns:
            True if the sample was integrated, False while no tilt-compass
            estimate exists yet or the sample is not finite
        """
        state = self.state
        if not state.gyro_ready:
            return False

        omega = np.asarray(angular_velocity, dtype=np.float64)

        # The first sample has no time step and contributes no rotation
        half_dt = 0.0
        if state.last_gyro_timestamp is not None:
            half_dt = (timestamp_ns - state.last_gyro_timestamp) * NS_TO_S / 2.0

        # A rejected sample leaves the timestamp alone so the next good one
        # spans the gap
        if not (np.all(np.isfinite(omega)) and math.isfinite(half_dt)):
            self.rejected_count += 1
            logger.debug("Rejected non-finite gyroscope sample %s at %s ns",
                         omega.tolist(), timestamp_ns)
            return False

        if not state.gyro_seeded:
            self.seed(tilt_orientation)
        state.last_gyro_timestamp = timestamp_ns

        delta_vector = delta_rotation_vector(omega, half_dt, self.epsilon)
        delta_matrix = rotation_from_vector(delta_vector)

        state.gyro_matrix = multiply(state.gyro_matrix, delta_matrix)
        state.gyro_orientation = to_euler(state.gyro_matrix)
        self.sample_count += 1
        return True
