"""
Sensor sample handling.
"""

from .samples import SensorKind, SensorSample, SampleIngest
from .source import SampleSource, ReplaySource

__all__ = ["SensorKind", "SensorSample", "SampleIngest", "SampleSource", "ReplaySource"]
