"""Multi-stroke gesture recognition.

This package recognizes hand-drawn 2D gestures, made of one or more strokes,
by comparing them with a library of named templates. It is a deterministic
geometric template matcher: there is no training step.

Architecture Overview:
    A captured gesture is normalized (scaled to a unit box, centred on its
    centroid, resampled to N points evenly spaced along each stroke) and then
    compared with every template using a greedy point-cloud distance. The
    template with the lowest distance wins.

The package is organized into the following modules:
    domain: Value objects (Point, StrokePoint, BBox, Candidate, Template,
        Result).
    utils: Geometry helpers over point sequences.
    analysis: The Normalizer.
    matching: The greedy cloud matcher and the Matcher protocol.
    templates: TemplateLibrary and the persistence stores.
    capture: StrokeCapture, turning pen events into a Candidate.
    api: GestureRecognizer facade and RecognitionChannel.
    config: Tunables and logging setup.
    errors: Exception hierarchy.

Example usage:
    Recognizing a gesture::

        from gesture_lib import Candidate, TemplateLibrary

        library = TemplateLibrary()
        library.add_template(Candidate.from_xy([(0, 0), (100, 0)]), 'line')

        result = library.recognize(Candidate.from_xy([(0, 0), (50, 0), (100, 0)]))
        print(result.name, result.score)

Attributes:
    __version__ (str): Package version string.
    __all__ (list): List of public symbols exported by this package.
"""

from .analysis import Normalizer
from .api import GestureRecognizer, RecognitionChannel
from .capture import StrokeCapture
from .config import RecognizerConfig, configure_logging
from .domain import BBox, Candidate, Point, Result, StrokePoint, Template
from .errors import GestureError, InvalidInputError, MalformedRecordError, ResampleError
from .matching import GreedyCloudMatcher, Matcher
from .templates import MemoryTemplateStore, ReadOnlyTemplateStore, TemplateLibrary, XmlTemplateStore

__all__ = [
    # Domain objects
    'Point', 'StrokePoint', 'BBox', 'Candidate', 'Template', 'Result',
    # Pipeline
    'Normalizer', 'Matcher', 'GreedyCloudMatcher', 'TemplateLibrary',
    # Persistence
    'XmlTemplateStore', 'ReadOnlyTemplateStore', 'MemoryTemplateStore',
    # Services
    'GestureRecognizer', 'RecognitionChannel', 'StrokeCapture',
    'RecognizerConfig', 'configure_logging',
    # Errors
    'GestureError', 'InvalidInputError', 'MalformedRecordError', 'ResampleError',
]

__version__ = '1.0.0'
