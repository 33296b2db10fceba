"""Utility functions for gesture recognition.

Geometry utilities:
    bounding_box: Bounds of a point sequence, ignoring stroke ids.
    centroid: Mean position of a point sequence.
    path_length: Sum of in-stroke segment lengths.
    interpolation_fraction: Clamped resampling parameter with midpoint fallback.
    to_array: Pack points into an (N, 2) numpy array.
    pairwise_distances: Euclidean distance matrix between two arrays.
"""

from .geometry import (
    bounding_box,
    centroid,
    interpolation_fraction,
    pairwise_distances,
    path_length,
    to_array,
)

__all__ = [
    'bounding_box', 'centroid', 'path_length',
    'interpolation_fraction', 'to_array', 'pairwise_distances',
]
