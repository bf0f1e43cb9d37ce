"""Unbounded multi-producer / single-consumer channel of session updates."""

from __future__ import annotations

import logging
import threading
from queue import Empty, Queue

from models import UpdateEvent

logger = logging.getLogger(__name__)


class UpdateChannel:
    def __init__(self) -> None:
        self._queue: Queue[UpdateEvent] = Queue()
        self._closed = threading.Event()

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def send(self, event: UpdateEvent) -> bool:
        """Queue an event. Returns False, without raising, once the receiver is gone."""
        if self._closed.is_set():
            logger.debug("Dropping %s for entry %s: channel closed", event.kind.value, event.entry_id)
            return False
        self._queue.put_nowait(event)
        return True

    def drain(self) -> list[UpdateEvent]:
        """Take every event queued so far without waiting."""
        events: list[UpdateEvent] = []
        while True:
            try:
                events.append(self._queue.get_nowait())
            except Empty:
                return events

    def close(self) -> None:
        self._closed.set()
