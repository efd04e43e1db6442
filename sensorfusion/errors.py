"""
Error kinds raised by the orientation fusion engine.
"""


class SensorFusionError(Exception):
    """Base class for all sensor fusion errors."""
    pass


class DimensionMismatch(SensorFusionError, ValueError):
    """Raised when matrix operands do not describe square matrices of equal size."""
    pass


class DegenerateOrientation(SensorFusionError):
    """
    Raised when accelerometer and magnetic vectors cannot define an orientation.

    This happens when either vector is (close to) zero, e.g. in free fall or
    on a sensor fault, or when both vectors are nearly parallel.
    """
    pass


class MissingCapability(SensorFusionError):
    """Raised when an operation needs a gyroscope but none is configured."""
    pass
