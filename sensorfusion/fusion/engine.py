"""
Orientation fusion engine combining accelerometer, compass and gyroscope.
"""

import logging
import threading
import numpy as np
from typing import Callable, Optional, Dict, Any

from ..config import Config
from ..errors import MissingCapability
from ..sensors.samples import SensorKind, SensorSample, SampleIngest
from ..sensors.source import SampleSource
from .complementary import ComplementaryFuser
from .gyroscope import GyroscopeIntegrator
from .publisher import OrientationPublisher
from .scheduler import FixedRateScheduler
from .state import FusionState, PublishedOrientation
from .tilt_compass import TiltCompassEstimator

logger = logging.getLogger(__name__)

OrientationListener = Callable[["MotionSensor"], None]


class MotionSensor:
    """
    Estimates device orientation from three motion sensors.

    Without a gyroscope the orientation comes from the accelerometer and
    compass alone and is republished on every accelerometer sample. With a
    gyroscope, samples are integrated as they arrive and a periodic
    complementary filter blends the gyroscope and tilt-compass estimates,
    resetting gyroscope drift on every tick.

    Raw samples, the fusion state and the published output are each guarded
    by their own lock, so samples may be submitted from any thread while the
    fuser runs.
    """

    def __init__(self, config: Optional[Config] = None,
                 listener: Optional[OrientationListener] = None,
                 source: Optional[SampleSource] = None,
                 scheduler_factory: Callable[..., Any] = FixedRateScheduler):
        """
        Initialize the engine.

        Args:
            config: Engine configuration (defaults if None)
            listener: Called with the engine each time new angles are ready
            source: Sample source subscribed to while the engine runs
            scheduler_factory: Builds the periodic fuser task; called as
                ``factory(task, period_s, initial_delay_s)``
        """
        self.config = config or Config()
        self._listener = listener
        self._source = source
        self._scheduler_factory = scheduler_factory

        self.has_gyroscope = self.config.has_gyroscope
        self.fuser_period_ms = self.config.fuser_period_ms

        # Components
        self.ingest = SampleIngest()
        self.tilt_compass = TiltCompassEstimator(self.config.min_field_norm)
        self.state = FusionState()
        self.integrator = GyroscopeIntegrator(self.state, self.config.gyro_epsilon)
        self.fuser = ComplementaryFuser(self.state, self.config.filter_coefficient)
        self.publisher = OrientationPublisher(self.config.pitch_hysteresis_deg)

        # Synchronization
        self._state_lock = threading.Lock()
        self._angles_lock = threading.Lock()
        self._angles_ready = False

        # Lifecycle
        self._scheduler = None
        self._running = False

        # Statistics
        self.notification_count = 0

    # ------------------------------------------------------------------
    # configuration and lifecycle
    # ------------------------------------------------------------------

    def configure(self, has_gyroscope: bool, fuser_period_ms: Optional[float] = None) -> None:
        """
        Select the operating mode. Must be called before :meth:`start`.

        Args:
            has_gyroscope: Whether gyroscope samples will be delivered
            fuser_period_ms: Period of the complementary fuser
        """
        if self._running:
            raise RuntimeError("configure() must be called before start()")
        if fuser_period_ms is not None and fuser_period_ms <= 0:
            raise ValueError(f"fuser period must be positive, got {fuser_period_ms}")

        self.has_gyroscope = bool(has_gyroscope)
        if fuser_period_ms is not None:
            self.fuser_period_ms = fuser_period_ms

    @property
    def is_running(self) -> bool:
        return self._running

    def start(self) -> None:
        """Start receiving samples and, with a gyroscope, the periodic fuser."""
        if self._running:
            logger.debug("Motion sensor already running")
            return

        with self._state_lock:
            self.state.reset()

        self._running = True
        if self._source is not None:
            self._source.subscribe(self.on_sample)

        if self.has_gyroscope:
            self._scheduler = self._scheduler_factory(
                self._fusion_tick,
                self.fuser_period_ms / 1000.0,
                self.config.fuser_initial_delay_ms / 1000.0,
            )
            self._scheduler.start()
            logger.info("Motion sensor started with sensor fusion (period %s ms)",
                        self.fuser_period_ms)
        else:
            logger.info("Motion sensor started without gyroscope, "
                        "using accelerometer and compass only")

    def stop(self) -> None:
        """Stop sample delivery and the fuser; a running tick completes first."""
        if not self._running:
            return

        if self._source is not None:
            self._source.unsubscribe(self.on_sample)
        if self._scheduler is not None:
            self._scheduler.cancel()
            self._scheduler = None

        self._running = False
        logger.info("Motion sensor stopped")

    def set_listener(self, listener: Optional[OrientationListener]) -> None:
        self._listener = listener

    def reset_listener(self) -> None:
        self._listener = None

    # ------------------------------------------------------------------
    # sample input
    # ------------------------------------------------------------------

    def submit_sample(self, kind, vector, timestamp_ns: int) -> None:
        """
        Deliver one raw sensor reading.

        Args:
            kind: SensorKind (or its value string)
            vector: Three sensor values
            timestamp_ns: Sample timestamp in nanoseconds
        """
        self.on_sample(SensorSample(SensorKind(kind), tuple(vector), timestamp_ns))

    def on_sample(self, sample: SensorSample) -> None:
        self.ingest.store(sample)

        if sample.kind is SensorKind.ACCELEROMETER:
            self._update_tilt_compass()
        elif sample.kind is SensorKind.GYROSCOPE:
            if self.has_gyroscope:
                self._update_gyroscope(sample)
            else:
                logger.debug("Ignoring gyroscope sample, no gyroscope configured")

        self._dispatch_if_ready()

    def _update_tilt_compass(self) -> None:
        accel = self.ingest.vector(SensorKind.ACCELEROMETER)
        mag = self.ingest.vector(SensorKind.MAGNETIC_FIELD)
        if accel is None or mag is None:
            return

        with self._state_lock:
            if not self.tilt_compass.update(accel, mag):
                return
            if not self.state.gyro_ready:
                self.state.gyro_ready = True
                logger.info("First tilt-compass orientation available")
            orientation = self.tilt_compass.orientation.copy()

        if not self.has_gyroscope:
            self._publish(orientation)

    def _update_gyroscope(self, sample: SensorSample) -> None:
        with self._state_lock:
            self.integrator.integrate(
                sample.vector, sample.timestamp_ns, self.tilt_compass.orientation)

    # ------------------------------------------------------------------
    # fusion
    # ------------------------------------------------------------------

    def fuse(self) -> Optional[np.ndarray]:
        """
        Run one complementary filter cycle and publish the result.

        Returns:
            The fused orientation, or None while the gyroscope is not yet
            seeded

        Raises:
            MissingCapability: If no gyroscope is configured
        """
        if not self.has_gyroscope:
            raise MissingCapability("sensor fusion requires a gyroscope")

        with self._state_lock:
            if not self.state.gyro_seeded:
                return None
            fused = self.fuser.tick(self.tilt_compass.orientation)

        self._publish(fused)
        return fused

    def _fusion_tick(self) -> None:
        self.fuse()
        self._dispatch_if_ready()

    # ------------------------------------------------------------------
    # output
    # ------------------------------------------------------------------

    def _publish(self, orientation) -> None:
        published = self.publisher.publish(orientation)
        logger.debug("New angles: %s", published)
        with self._angles_lock:
            self._angles_ready = True

    def _take_angles_ready(self) -> bool:
        with self._angles_lock:
            ready = self._angles_ready
            self._angles_ready = False
            if ready:
                self.notification_count += 1
            return ready

    def _dispatch_if_ready(self) -> None:
        listener = self._listener
        if listener is None or not self._take_angles_ready():
            return

        try:
            listener(self)
        except Exception:
            logger.warning("Orientation listener failed", exc_info=True)

    def current_orientation(self) -> PublishedOrientation:
        """Snapshot of the latest published orientation."""
        return self.publisher.current

    @property
    def roll(self) -> int:
        """Rotation around the y axis in degrees."""
        return self.current_orientation().roll_deg

    @property
    def azimuth(self) -> int:
        """Rotation around the z axis in degrees."""
        return self.current_orientation().azimuth_deg

    @property
    def approx_pitch(self) -> int:
        """Noise-gated rotation around the x axis in degrees."""
        return self.current_orientation().approx_pitch_deg

    @property
    def accurate_pitch(self) -> int:
        """Rotation around the x axis in degrees."""
        return self.current_orientation().accurate_pitch_deg

    def orientations(self) -> Dict[str, np.ndarray]:
        """Snapshot of the internal orientation estimates in radians."""
        with self._state_lock:
            return {
                'tilt_compass': self.tilt_compass.orientation.copy(),
                'gyroscope': self.state.gyro_orientation.copy(),
                'fused': self.state.fused_orientation.copy(),
            }

    def get_statistics(self) -> dict:
        """Get engine statistics."""
        return {
            'running': self._running,
            'has_gyroscope': self.has_gyroscope,
            'samples': self.ingest.sample_count,
            'tilt_compass_updates': self.tilt_compass.update_count,
            'degenerate_samples': self.tilt_compass.rejected_count,
            'gyroscope_updates': self.integrator.sample_count,
            'rejected_gyroscope_samples': self.integrator.rejected_count,
            'fusion_ticks': self.fuser.tick_count,
            'notifications': self.notification_count,
            'gyroscope_seeded': self.state.gyro_seeded,
        }
