#!/usr/bin/env python3
"""
Basic usage example of the orientation fusion engine.

This example simulates a device turning on a table next to an electric
motor: the compass is disturbed, the gyroscope has a small bias. It shows
how the fused orientation stays close to the truth where neither sensor
alone does.
"""

import sys
import os
import numpy as np

# Add package to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from sensorfusion import Config, MotionSensor, SensorKind
from sensorfusion.config import setup_logging
from sensorfusion.math import from_orientation, normalize_angle

GRAVITY = np.array([0.0, 0.0, 9.81])
EARTH_FIELD = np.array([0.0, 20.0, -40.0])  # uT, north and down


def simulate_device_motion(duration=20.0, dt=0.01, turn_rate=0.3):
    """
    Simulate a device slowly turning about its vertical axis.

    Args:
        duration: Simulation duration in seconds
        dt: Sensor sampling interval in seconds
        turn_rate: Angular velocity about z in rad/s

    Yields:
        (timestamp_ns, true_orientation, accel, mag, gyro) tuples
    """
    rng = np.random.default_rng(1)

    # Noise parameters
    accel_noise = 0.05     # m/s²
    mag_noise = 4.0        # uT, motor interference
    gyro_noise = 0.005     # rad/s
    gyro_bias = np.array([0.0, 0.0, 0.02])

    steps = int(duration / dt)
    for i in range(steps):
        t = i * dt
        orientation = np.array([-turn_rate * t, 0.0, 0.0])
        device_to_world = from_orientation(orientation).reshape(3, 3)

        accel = device_to_world.T @ GRAVITY + rng.normal(0, accel_noise, 3)
        mag = device_to_world.T @ EARTH_FIELD + rng.normal(0, mag_noise, 3)
        gyro = np.array([0.0, 0.0, turn_rate]) + gyro_bias + rng.normal(0, gyro_noise, 3)

        yield int(t * 1e9), orientation, accel, mag, gyro


def main():
    """Main example function."""
    config = Config()
    setup_logging(config.log_level)

    print("Orientation Fusion - Basic Usage Example")
    print("=" * 50)

    sensor = MotionSensor(config)
    sensor.configure(has_gyroscope=True, fuser_period_ms=config.fuser_period_ms)

    # Fuser ticks are driven by simulated time instead of a timer thread
    period_ns = int(config.fuser_period_ms * 1e6)
    next_tick = period_ns
    print_interval_ns = int(2e9)
    next_print = 0

    for timestamp, truth, accel, mag, gyro in simulate_device_motion():
        sensor.submit_sample(SensorKind.MAGNETIC_FIELD, mag, timestamp)
        sensor.submit_sample(SensorKind.ACCELEROMETER, accel, timestamp)
        sensor.submit_sample(SensorKind.GYROSCOPE, gyro, timestamp)

        if timestamp >= next_tick:
            sensor.fuse()
            next_tick += period_ns

        if timestamp >= next_print:
            print_status(sensor, truth, timestamp)
            next_print += print_interval_ns

    print("\nSimulation completed!")
    print("\n=== Final Statistics ===")
    for key, value in sensor.get_statistics().items():
        print(f"{key}: {value}")


def print_status(sensor: MotionSensor, truth: np.ndarray, timestamp: int):
    """Print current estimates against the simulated truth."""
    estimates = sensor.orientations()
    truth_deg = np.degrees(normalize_angle(truth[0]))

    print(f"Time: {timestamp / 1e9:.1f}s")
    print(f"  True azimuth:     {truth_deg:7.1f}°")
    print(f"  Tilt-compass:     {np.degrees(estimates['tilt_compass'][0]):7.1f}°")
    print(f"  Fused:            {np.degrees(estimates['fused'][0]):7.1f}°")
    print(f"  Published:        {sensor.current_orientation()}")
    print()


if __name__ == "__main__":
    main()
