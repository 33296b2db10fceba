"""Unit tests for gesture_lib.matching.cloud.

Tests the greedy cloud matcher:
    - step size derived from N and epsilon
    - directional passes against hand-computed sums, including the
      lowest-index tie-break
    - symmetry, self-match and rotation variance of the full distance
"""

import math
import unittest

from gesture_lib.analysis import Normalizer
from gesture_lib.domain import Candidate, StrokePoint
from gesture_lib.matching import GreedyCloudMatcher, cloud_distance, greedy_cloud_match


def _pts(*xy):
    return tuple(StrokePoint.of(x, y) for x, y in xy)


class TestStep(unittest.TestCase):
    """Tests for GreedyCloudMatcher.step_for."""

    def test_default_is_floor_sqrt(self):
        m = GreedyCloudMatcher()
        self.assertEqual(m.step_for(32), 5)
        self.assertEqual(m.step_for(16), 4)
        self.assertEqual(m.step_for(64), 8)
        self.assertEqual(m.step_for(256), 16)

    def test_minimum_one(self):
        m = GreedyCloudMatcher()
        self.assertEqual(m.step_for(1), 1)
        self.assertEqual(m.step_for(3), 1)

    def test_epsilon_zero_uses_full_step(self):
        self.assertEqual(GreedyCloudMatcher(epsilon=0.0).step_for(32), 32)


class TestCloudDistance(unittest.TestCase):
    """Tests for single directional passes."""

    def test_weighted_sum(self):
        """First visit weighs 1, second 1 - 1/2."""
        p = _pts((0, 0), (2, 0))
        q = _pts((0, 1), (2, 1))
        self.assertAlmostEqual(cloud_distance(p, q, 0), 1.5)
        self.assertAlmostEqual(cloud_distance(p, q, 1), 1.5)

    def test_tie_goes_to_lowest_index(self):
        """p[0] is 1 away from both q points and must take q[0]."""
        p = _pts((0, 0), (10, 0))
        q = _pts((1, 0), (-1, 0))
        # q[0] taken first leaves q[1] for p[1]: 1 * 1 + 0.5 * 11
        self.assertAlmostEqual(cloud_distance(p, q, 0), 6.5)

    def test_start_offset_changes_visit_order(self):
        p = _pts((0, 0), (10, 0))
        q = _pts((1, 0), (-1, 0))
        # p[1] first takes q[0] (9), then p[0] takes q[1] (1 * 0.5)
        self.assertAlmostEqual(cloud_distance(p, q, 1), 9.5)

    def test_each_target_used_once(self):
        """Both p points are nearest to q[0], but only one can have it."""
        p = _pts((0, 0), (0.1, 0))
        q = _pts((0, 0), (5, 0))
        self.assertAlmostEqual(cloud_distance(p, q, 0), 0.5 * 4.9)

    def test_length_mismatch(self):
        with self.assertRaises(ValueError):
            cloud_distance(_pts((0, 0)), _pts((0, 0), (1, 1)))


class TestGreedyCloudMatcher(unittest.TestCase):
    """Tests for the full symmetric distance."""

    def setUp(self):
        self.normalizer = Normalizer()
        self.matcher = GreedyCloudMatcher()
        self.x = self.normalizer.normalize(Candidate.from_tuples([
            (0, 0, 0), (100, 100, 0), (100, 0, 1), (0, 100, 1),
        ]))
        self.plus = self.normalizer.normalize(Candidate.from_tuples([
            (50, 0, 0), (50, 100, 0), (0, 50, 1), (100, 50, 1),
        ]))
        self.zigzag = self.normalizer.normalize(Candidate.from_xy([
            (0, 0), (3, 10), (10, 0), (12, 4), (25, 30), (30, 0), (31, 1), (60, 20),
        ]))

    def test_self_match_is_zero(self):
        for seq in (self.x, self.plus, self.zigzag):
            self.assertEqual(self.matcher.distance(seq, seq), 0.0)

    def test_symmetric(self):
        pairs = [(self.x, self.plus), (self.x, self.zigzag), (self.plus, self.zigzag)]
        for a, b in pairs:
            self.assertAlmostEqual(self.matcher.distance(a, b), self.matcher.distance(b, a), places=12)

    def test_non_negative_and_positive_for_different_shapes(self):
        self.assertGreater(self.matcher.distance(self.x, self.plus), 0.0)
        self.assertGreater(self.matcher.distance(self.x, self.zigzag), 0.0)

    def test_rotation_variant(self):
        """A vertical line is a different gesture from a horizontal one."""
        horizontal = self.normalizer.normalize(Candidate.from_xy([(0, 0), (100, 0)]))
        vertical = self.normalizer.normalize(Candidate.from_xy([(0, 0), (0, 100)]))
        self.assertGreater(self.matcher.distance(horizontal, vertical), 1.0)

    def test_not_above_any_single_pass(self):
        """The result is a minimum over passes, including offset 0 both ways."""
        d = self.matcher.distance(self.x, self.zigzag)
        self.assertLessEqual(d, cloud_distance(self.x, self.zigzag, 0) + 1e-12)
        self.assertLessEqual(d, cloud_distance(self.zigzag, self.x, 0) + 1e-12)

    def test_functional_form(self):
        self.assertEqual(greedy_cloud_match(self.x, self.plus), self.matcher.distance(self.x, self.plus))

    def test_result_is_finite_float(self):
        d = self.matcher.distance(self.x, self.plus)
        self.assertIsInstance(d, float)
        self.assertTrue(math.isfinite(d))

    def test_length_mismatch(self):
        with self.assertRaises(ValueError):
            self.matcher.distance(self.x, self.x[:-1])

    def test_empty(self):
        with self.assertRaises(ValueError):
            self.matcher.distance((), ())


if __name__ == '__main__':
    unittest.main()
