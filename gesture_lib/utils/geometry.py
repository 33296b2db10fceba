"""Geometric utility functions.

This module provides the helpers the normalizer and matcher build on. They
supplement the methods on the domain objects (Point, BBox, etc.) with
operations over whole point sequences.

The module provides the following functions:
    bounding_box: Axis-aligned bounds of a point sequence, ignoring strokes.
    centroid: Arithmetic mean of a point sequence, ignoring strokes.
    path_length: Sum of in-stroke segment lengths.
    interpolation_fraction: Clamped interpolation parameter with the
        zero-length-segment fallback.
    to_array: Pack a point sequence into an (N, 2) float64 array.
    pairwise_distances: Euclidean distance matrix between two sequences.

Example usage::

    from gesture_lib.domain import StrokePoint
    from gesture_lib.utils.geometry import path_length

    pts = [StrokePoint.of(0, 0, 0), StrokePoint.of(3, 4, 0), StrokePoint.of(9, 9, 1)]
    path_length(pts)  # 5.0, the jump into stroke 1 does not count
"""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np
from scipy.spatial.distance import cdist

from ..domain.geometry import BBox, Point, StrokePoint


def bounding_box(points: Sequence[StrokePoint]) -> BBox:
    """Bounding box over all points, regardless of stroke id."""
    return BBox.from_points(sp.point for sp in points)


def centroid(points: Sequence[StrokePoint]) -> Point:
    """Arithmetic mean of all point coordinates.

    Args:
        points: Non-empty sequence of stroke points.

    Returns:
        Mean position. Stroke ids are ignored.
    """
    total_x = 0.0
    total_y = 0.0
    for sp in points:
        total_x += sp.x
        total_y += sp.y
    n = len(points)
    return Point(total_x / n, total_y / n)


def path_length(points: Sequence[StrokePoint]) -> float:
    """Total path length, counting only same-stroke consecutive pairs.

    The gap between the last point of one stroke and the first point of the
    next is pen-up travel and contributes nothing.
    """
    length = 0.0
    for i in range(1, len(points)):
        if points[i].same_stroke(points[i - 1]):
            length += points[i - 1].point.distance_to(points[i].point)
    return length


def interpolation_fraction(remaining: float, segment: float) -> float:
    """Fraction along a segment at which the next resampled point falls.

    Args:
        remaining: Distance still needed to reach the next increment.
        segment: Length of the segment being walked.

    Returns:
        ``remaining / segment`` clamped to [0, 1]. A zero-length segment
        gives NaN, which maps to the midpoint 0.5.
    """
    if segment == 0.0:
        t = math.nan if remaining == 0.0 else math.copysign(math.inf, remaining)
    else:
        t = remaining / segment
    if math.isnan(t):
        return 0.5
    return min(max(t, 0.0), 1.0)


def to_array(points: Sequence[StrokePoint]) -> np.ndarray:
    """Pack coordinates into an (N, 2) float64 array."""
    return np.array([(sp.x, sp.y) for sp in points], dtype=np.float64).reshape(-1, 2)


def pairwise_distances(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Euclidean distance matrix; entry [i, j] is |a[i] - b[j]|."""
    return cdist(a, b, metric='euclidean')
