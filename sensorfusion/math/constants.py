"""
Mathematical and sensor fusion constants.
"""

import math

# Mathematical constants
PI = math.pi
TWO_PI = 2 * math.pi
HALF_PI = math.pi / 2

# Conversion factors
NS_TO_S = 1.0e-9

# Gyroscope integration
GYRO_EPSILON = 1.0e-9   # Angular speeds below this are treated as no rotation

# Tilt-compass estimation
MIN_FIELD_NORM = 0.1    # Minimum |E x A| before the basis is ill-defined
MIN_VECTOR_NORM = 1.0e-6

# Complementary filter
FILTER_COEFFICIENT = 0.98   # Weight of the gyroscope orientation

# Fuser periods (milliseconds)
FREQUENCY_HIGH = 30
FREQUENCY_MID = 100
FREQUENCY_LOW = 250
FUSER_RATES = {
    "high": FREQUENCY_HIGH,
    "mid": FREQUENCY_MID,
    "low": FREQUENCY_LOW,
}
FUSER_INITIAL_DELAY_MS = 1000

# Publisher
PITCH_HYSTERESIS_DEG = 2
