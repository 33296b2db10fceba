"""Greedy cloud matching between normalized point sequences.

This module compares two normalized gestures as point clouds. Each point of
one sequence is greedily paired with the nearest still-unpaired point of the
other, and the weighted pairing distances are summed. Earlier-visited points
weigh more (weight ``1 - position / N``), so the search is repeated from
several start offsets and in both directions, keeping the smallest sum.

Only start offsets are searched; there is no rotation alignment step, so a
gesture drawn rotated by 90 degrees is a different gesture.

The module provides:
    Matcher: Protocol for anything that scores two normalized sequences.
    GreedyCloudMatcher: The greedy cloud matcher.
    cloud_distance: One directional greedy pass from a given start offset.
    greedy_cloud_match: Functional form of GreedyCloudMatcher.distance.

Cost per comparison is O((N / step) * N^2) with step = floor(N ** (1 - e)).
With N = 32 and e = 0.5 that is 7 offsets, two directions each.

Example usage::

    from gesture_lib.matching import GreedyCloudMatcher

    matcher = GreedyCloudMatcher()
    score = matcher.distance(candidate_points, template.points)
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Protocol, Sequence

import numpy as np

from ..config import CLOUD_MATCH_EPSILON
from ..domain.geometry import StrokePoint
from ..utils.geometry import pairwise_distances, to_array


class Matcher(Protocol):
    """Protocol for normalized-sequence matchers.

    Implementations return a non-negative distance where lower means more
    similar. The library keeps the first template with the strictly lowest
    distance, so a matcher must be deterministic.
    """

    def distance(self, a: Sequence[StrokePoint], b: Sequence[StrokePoint]) -> float:
        """Distance between two normalized sequences of equal length."""
        ...


def _greedy_pass(distances: np.ndarray, start: int) -> float:
    """Weighted greedy matching over a precomputed distance matrix.

    Rows are visited in rotation order from ``start``; each row takes the
    lowest-distance column not yet taken. ``np.argmin`` returns the first
    minimum, so ties go to the lowest column index.
    """
    n = distances.shape[0]
    available = np.ones(n, dtype=bool)
    total = 0.0

    for position in range(n):
        i = (start + position) % n
        row = np.where(available, distances[i], np.inf)
        j = int(np.argmin(row))
        available[j] = False
        weight = 1.0 - position / n
        total += weight * float(row[j])

    return total


def cloud_distance(p: Sequence[StrokePoint], q: Sequence[StrokePoint], start: int = 0) -> float:
    """Directional cloud distance from ``p`` (starting at ``start``) to ``q``.

    Args:
        p: Sequence whose points are visited in rotation order.
        q: Sequence whose points are matched, each at most once.
        start: Index of ``p`` to visit first.

    Returns:
        Sum of ``(1 - position / N) * |p[i] - q[j]|`` over the greedy pairing.
    """
    _check_lengths(p, q)
    return _greedy_pass(pairwise_distances(to_array(p), to_array(q)), start % len(p))


def _check_lengths(a: Sequence[StrokePoint], b: Sequence[StrokePoint]) -> None:
    if len(a) != len(b):
        raise ValueError(f"Cannot match sequences of different lengths: {len(a)} vs {len(b)}")
    if not a:
        raise ValueError("Cannot match empty sequences")


@dataclass(frozen=True)
class GreedyCloudMatcher:
    """Symmetric greedy cloud matcher.

    Attributes:
        epsilon: Offset exponent. Start offsets are taken every
            ``floor(N ** (1 - epsilon))`` points (at least 1).
    """
    epsilon: float = CLOUD_MATCH_EPSILON

    def step_for(self, n: int) -> int:
        """Start-offset step for sequences of ``n`` points."""
        return max(1, int(math.floor(n ** (1.0 - self.epsilon))))

    def distance(self, a: Sequence[StrokePoint], b: Sequence[StrokePoint]) -> float:
        """Minimum weighted cloud distance over offsets and both directions.

        Args:
            a: Normalized sequence.
            b: Normalized sequence of the same length.

        Returns:
            Non-negative distance; 0 when ``a`` and ``b`` hold the same
            points. ``distance(a, b) == distance(b, a)``.

        Raises:
            ValueError: If the sequences differ in length or are empty.
        """
        _check_lengths(a, b)
        n = len(a)
        a_to_b = pairwise_distances(to_array(a), to_array(b))
        b_to_a = a_to_b.T

        best = math.inf
        for start in range(0, n, self.step_for(n)):
            best = min(best, _greedy_pass(a_to_b, start), _greedy_pass(b_to_a, start))
        return best


def greedy_cloud_match(a: Sequence[StrokePoint], b: Sequence[StrokePoint],
                       epsilon: float = CLOUD_MATCH_EPSILON) -> float:
    """Functional form of ``GreedyCloudMatcher(epsilon).distance(a, b)``."""
    return GreedyCloudMatcher(epsilon=epsilon).distance(a, b)
