"""API layer for gesture recognition.

The module exports:
    GestureRecognizer: Facade combining library, persistence and
        result notification.
    RecognitionChannel: Fan-out of recognition results to subscribers.
    Subscription: A consumer's queue on a RecognitionChannel.

Example usage::

    from gesture_lib.api import GestureRecognizer

    recognizer = GestureRecognizer()
    recognizer.add_template(line_candidate, 'line')
    result = recognizer.recognize(candidate)
"""

from .channel import RecognitionChannel, Subscription
from .services import GestureRecognizer

__all__ = ['GestureRecognizer', 'RecognitionChannel', 'Subscription']
