"""Exception hierarchy for gesture recognition.

Errors are raised where the input is unusable and propagate to the caller,
which decides how to recover (typically by asking the user to draw again).
An empty template library is not an error: recognition returns the
``Result.empty()`` sentinel instead.
"""


class GestureError(Exception):
    """Base class for all gesture_lib errors."""


class InvalidInputError(GestureError, ValueError):
    """Candidate cannot be normalized.

    Raised when a candidate has fewer than two points, when all of its
    points coincide (zero bounding-box scale), or when it has no in-stroke
    path length to resample along.
    """


class MalformedRecordError(GestureError, ValueError):
    """A persisted template record could not be parsed."""


class ResampleError(GestureError, RuntimeError):
    """Resampling produced a point count other than the configured one."""
