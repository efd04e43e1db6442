#!/usr/bin/env python3
"""
Replay a recorded sensor log through the fusion engine and plot the
tilt-compass, gyroscope and fused orientation.

CSV columns: timestamp_ns, kind, x, y, z
where kind is accelerometer, magnetic_field or gyroscope.
"""

import argparse
import csv
import logging
import os
import sys

import numpy as np
import matplotlib.pyplot as plt

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from sensorfusion import Config, MotionSensor, SensorKind, SensorSample
from sensorfusion.config import setup_logging
from sensorfusion.math.constants import FUSER_RATES

logger = logging.getLogger("plot_orientation")


def read_samples(csvfile):
    """Read sensor samples from a CSV log, skipping malformed rows."""
    samples = []
    with open(csvfile, "r") as f:
        reader = csv.reader(f)
        next(reader, None)   # skip header

        for line_no, row in enumerate(reader, start=2):
            if len(row) < 5:
                continue
            try:
                samples.append(SensorSample(
                    SensorKind(row[1].strip()),
                    (float(row[2]), float(row[3]), float(row[4])),
                    int(row[0]),
                ))
            except ValueError as e:
                logger.warning("Skipping line %d: %s", line_no, e)
    return samples


def replay(samples, config):
    """
    Feed samples through the engine with fuser ticks on sample time.

    Returns:
        (times_s, tilt_compass, gyroscope, fused) numpy arrays
    """
    sensor = MotionSensor(config)
    has_gyroscope = any(s.kind is SensorKind.GYROSCOPE for s in samples)
    sensor.configure(has_gyroscope=has_gyroscope and config.has_gyroscope)

    period_ns = int(config.fuser_period_ms * 1e6)
    next_tick = None
    times, tilt, gyro, fused = [], [], [], []

    for sample in samples:
        sensor.on_sample(sample)
        if next_tick is None:
            next_tick = sample.timestamp_ns + period_ns
        if sample.timestamp_ns < next_tick:
            continue

        if sensor.has_gyroscope:
            sensor.fuse()
        next_tick += period_ns

        estimates = sensor.orientations()
        times.append(sample.timestamp_ns * 1e-9)
        tilt.append(estimates['tilt_compass'])
        gyro.append(estimates['gyroscope'])
        fused.append(estimates['fused'] if sensor.has_gyroscope else estimates['tilt_compass'])

    logger.info("Replay statistics: %s", sensor.get_statistics())
    return np.array(times), np.degrees(tilt), np.degrees(gyro), np.degrees(fused)


def plot(times, tilt, gyro, fused):
    fig, axes = plt.subplots(3, 1, figsize=(10, 8), sharex=True)
    for axis, name, ax in zip(range(3), ("Azimuth", "Pitch", "Roll"), axes):
        ax.plot(times, tilt[:, axis], 'r-', alpha=0.5, label="Accelerometer + compass")
        ax.plot(times, gyro[:, axis], 'g-', alpha=0.5, label="Gyroscope")
        ax.plot(times, fused[:, axis], 'b-', linewidth=2, label="Fused")
        ax.set_ylabel(f"{name} (°)")
        ax.grid(True)

    axes[0].legend(loc="upper right")
    axes[-1].set_xlabel("Time (s)")
    fig.suptitle("Device Orientation")
    fig.tight_layout()
    plt.show()


def main():
    parser = argparse.ArgumentParser(description=__doc__,
                                     formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("logfile", help="CSV sensor log")
    parser.add_argument("--config", help="JSON configuration file")
    parser.add_argument("--rate", choices=sorted(FUSER_RATES),
                        help="Fuser rate, overriding the configured period")
    args = parser.parse_args()

    config = Config(args.config)
    if args.rate:
        config.set_fuser_rate(args.rate)
    setup_logging(config.log_level)

    samples = read_samples(args.logfile)
    if not samples:
        print("No samples found in log!")
        sys.exit(1)

    times, tilt, gyro, fused = replay(samples, config)
    if len(times) == 0:
        print("Log too short to plot.")
        sys.exit(1)
    plot(times, tilt, gyro, fused)


if __name__ == "__main__":
    main()


# Sample run command: python3 plot_orientation.py sensors_2025-01-20_14-33-10.csv
