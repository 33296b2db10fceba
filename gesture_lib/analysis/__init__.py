"""Gesture normalization.

The module exports:
    Normalizer: Scales, centers and resamples a candidate to N points.
    scale_to_unit: Scale step on its own.
    translate_to_center: Translate step on its own.
    resample: Stroke-aware resample step on its own.

Example usage::

    from gesture_lib.analysis import Normalizer

    template = Normalizer(resample_count=64).to_template(candidate, name='circle')
"""

from .normalizer import Normalizer, resample, scale_to_unit, translate_to_center

__all__ = ['Normalizer', 'scale_to_unit', 'translate_to_center', 'resample']
