"""Matchers for normalized gestures.

The module exports:
    Matcher: Protocol for sequence matchers (lower distance = more similar).
    GreedyCloudMatcher: Greedy point-cloud matcher over start offsets.
    cloud_distance: Single directional greedy pass.
    greedy_cloud_match: Functional shortcut for GreedyCloudMatcher.

Example usage::

    from gesture_lib.matching import greedy_cloud_match

    d = greedy_cloud_match(template_a.points, template_b.points)
"""

from .cloud import GreedyCloudMatcher, Matcher, cloud_distance, greedy_cloud_match

__all__ = ['Matcher', 'GreedyCloudMatcher', 'cloud_distance', 'greedy_cloud_match']
