#!/usr/bin/env python3
"""
Unit tests for the complementary fuser and orientation publisher.
"""

import math
import unittest
import numpy as np
import sys
import os

# Add package to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from sensorfusion.fusion import (
    ComplementaryFuser, FusionState, OrientationPublisher, PublishedOrientation, fuse_axis,
)
from sensorfusion.math import from_orientation


def pitch_for(accurate_deg):
    """Orientation whose published accurate pitch is accurate_deg."""
    return [0.0, math.radians(accurate_deg - 180), 0.0]


class TestFuseAxis(unittest.TestCase):
    """Test fuse_axis function."""

    def test_plain_blend(self):
        """Estimates on the same side are blended linearly."""
        self.assertAlmostEqual(fuse_axis(1.0, 0.5), 0.98 * 1.0 + 0.02 * 0.5)
        self.assertAlmostEqual(fuse_axis(-0.2, -0.4), 0.98 * -0.2 + 0.02 * -0.4)

    def test_gyro_across_seam(self):
        """Gyroscope just past -pi, tilt-compass positive."""
        result = fuse_axis(-3.0, 0.1)
        expected = 0.98 * (-3.0 + 2 * math.pi) + 0.02 * 0.1
        if expected > math.pi:
            expected -= 2 * math.pi

        self.assertAlmostEqual(result, expected, places=12)
        self.assertGreater(result, -math.pi)
        self.assertLessEqual(result, math.pi)

    def test_tilt_across_seam(self):
        """Tilt-compass just past -pi, gyroscope positive near +pi."""
        result = fuse_axis(3.1, -3.1)
        expected = 0.98 * 3.1 + 0.02 * (-3.1 + 2 * math.pi)
        if expected > math.pi:
            expected -= 2 * math.pi
        self.assertAlmostEqual(result, expected, places=12)
        self.assertGreater(result, 3.0)

    def test_seam_blend_stays_near_pi(self):
        """Blending across the seam does not jump through zero."""
        result = fuse_axis(-3.1, 3.1)
        self.assertGreater(abs(result), 3.0)

    def test_coefficient_one_keeps_gyro(self):
        self.assertAlmostEqual(fuse_axis(0.7, -0.2, coefficient=1.0), 0.7)


class TestComplementaryFuser(unittest.TestCase):
    """Test ComplementaryFuser class."""

    def setUp(self):
        self.state = FusionState()
        self.fuser = ComplementaryFuser(self.state)

    def test_invalid_coefficient(self):
        with self.assertRaises(ValueError):
            ComplementaryFuser(self.state, coefficient=1.5)

    def test_tick_reseeds_gyroscope(self):
        """Each tick overwrites the gyroscope matrix with the fused orientation."""
        self.state.gyro_orientation = np.array([0.5, 0.1, -0.1])
        fused = self.fuser.tick(np.array([0.0, 0.0, 0.0]))

        np.testing.assert_allclose(fused, [0.49, 0.098, -0.098], atol=1e-12)
        np.testing.assert_allclose(self.state.fused_orientation, fused)
        np.testing.assert_allclose(self.state.gyro_orientation, fused)
        np.testing.assert_allclose(self.state.gyro_matrix, from_orientation(fused), atol=1e-12)
        self.assertEqual(self.fuser.tick_count, 1)

    def test_drift_decays_towards_tilt_compass(self):
        """Repeated ticks pull a drifted gyroscope back to the baseline."""
        tilt = np.array([0.3, -0.2, 0.1])
        self.state.gyro_orientation = tilt + 0.5

        for _ in range(300):
            self.fuser.tick(tilt)

        np.testing.assert_allclose(self.state.fused_orientation, tilt, atol=0.5 * 0.98 ** 300 + 1e-9)

    def test_blend_per_axis(self):
        fused = self.fuser.blend([-3.0, 0.2, 1.0], [0.1, 0.2, 1.0])
        self.assertAlmostEqual(fused[0], fuse_axis(-3.0, 0.1))
        self.assertAlmostEqual(fused[1], 0.2)
        self.assertAlmostEqual(fused[2], 1.0)


class TestOrientationPublisher(unittest.TestCase):
    """Test OrientationPublisher class."""

    def test_degree_conversion(self):
        """Angles are rounded and shifted into their published ranges."""
        publisher = OrientationPublisher()
        published = publisher.publish([math.radians(-90), math.radians(10), math.radians(30)])

        self.assertEqual(published.azimuth_deg, 270)
        self.assertEqual(published.accurate_pitch_deg, 190)
        self.assertEqual(published.roll_deg, 120)
        self.assertEqual(publisher.current, published)

    def test_roll_wraps(self):
        publisher = OrientationPublisher()
        self.assertEqual(publisher.publish([0.0, 0.0, math.radians(-120)]).roll_deg, 330)
        self.assertEqual(publisher.publish([0.0, 0.0, math.radians(300)]).roll_deg, 30)

    def test_zero_orientation(self):
        published = OrientationPublisher().publish([0.0, 0.0, 0.0])
        self.assertEqual(published, PublishedOrientation(
            azimuth_deg=0, roll_deg=90, accurate_pitch_deg=180, approx_pitch_deg=180))

    def test_pitch_hysteresis(self):
        """Only deviations beyond 2 degrees move the approximate pitch."""
        publisher = OrientationPublisher(initial=PublishedOrientation(approx_pitch_deg=10))

        approx = [publisher.publish(pitch_for(p)).approx_pitch_deg for p in (10, 11, 9, 13)]
        accurate = publisher.current.accurate_pitch_deg

        self.assertEqual(approx, [10, 10, 10, 13])
        self.assertEqual(accurate, 13)

    def test_gate_boundary(self):
        """A deviation of exactly the hysteresis is still suppressed."""
        publisher = OrientationPublisher()
        self.assertEqual(publisher.gate_pitch(10, 12), 10)
        self.assertEqual(publisher.gate_pitch(10, 7), 7)


if __name__ == '__main__':
    unittest.main()
