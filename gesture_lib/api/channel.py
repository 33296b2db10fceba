"""Recognition result fan-out.

A RecognitionChannel delivers every published Result to each open
Subscription. Each subscription owns a ``queue.Queue``; consumers read from
it on their own thread at their own pace. The producer never tracks who is
listening beyond the set of open subscriptions, and closing a subscription
is all a consumer has to do to stop receiving.

Example usage::

    channel = RecognitionChannel()
    sub = channel.subscribe()

    channel.publish(Result('circle', 1.7))

    result = sub.get(timeout=1.0)
    sub.close()
"""

from __future__ import annotations

import logging
import queue
import threading
from typing import Iterator, List

from ..domain.gesture import Result

logger = logging.getLogger(__name__)


class Subscription:
    """One consumer's view of a RecognitionChannel.

    Attributes:
        maxsize: Queue bound; 0 means unbounded. When a bounded queue is
            full the oldest pending result is discarded to make room.
    """

    def __init__(self, channel: RecognitionChannel, maxsize: int = 0):
        self._channel = channel
        self._queue: queue.Queue[Result] = queue.Queue(maxsize=maxsize)
        self.maxsize = maxsize
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def _deliver(self, result: Result) -> None:
        while True:
            try:
                self._queue.put_nowait(result)
                return
            except queue.Full:
                try:
                    dropped = self._queue.get_nowait()
                    logger.debug("Subscription full, dropped result '%s'", dropped.name)
                except queue.Empty:
                    pass

    def get(self, timeout: float | None = None) -> Result:
        """Block until a result is available.

        Raises:
            queue.Empty: If ``timeout`` elapses first.
        """
        return self._queue.get(timeout=timeout)

    def get_nowait(self) -> Result:
        """Return a pending result immediately.

        Raises:
            queue.Empty: If nothing is pending.
        """
        return self._queue.get_nowait()

    def pending(self) -> List[Result]:
        """Drain and return all pending results."""
        return list(self)

    def __iter__(self) -> Iterator[Result]:
        while True:
            try:
                yield self._queue.get_nowait()
            except queue.Empty:
                return

    def close(self) -> None:
        """Stop receiving results."""
        if not self._closed:
            self._closed = True
            self._channel._detach(self)

    def __enter__(self) -> Subscription:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class RecognitionChannel:
    """Single-producer, multi-consumer channel for recognition results."""

    def __init__(self):
        self._lock = threading.Lock()
        self._subscriptions: List[Subscription] = []

    def subscribe(self, maxsize: int = 0) -> Subscription:
        """Open a new subscription that receives every later result."""
        subscription = Subscription(self, maxsize=maxsize)
        with self._lock:
            self._subscriptions.append(subscription)
        return subscription

    def publish(self, result: Result) -> int:
        """Deliver ``result`` to all open subscriptions.

        Returns:
            Number of subscriptions the result was delivered to.
        """
        with self._lock:
            subscriptions = list(self._subscriptions)
        for subscription in subscriptions:
            subscription._deliver(result)
        return len(subscriptions)

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscriptions)

    def _detach(self, subscription: Subscription) -> None:
        with self._lock:
            if subscription in self._subscriptions:
                self._subscriptions.remove(subscription)
