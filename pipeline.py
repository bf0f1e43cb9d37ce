"""Spawns one background worker per submission and forwards its stream."""

from __future__ import annotations

import logging
import threading
from typing import Callable, Optional

from channel import UpdateChannel
from interfaces import TranslationProvider
from models import Entry, UpdateEvent
from session_store import SessionStore

logger = logging.getLogger(__name__)

Spawn = Callable[[Callable[[], None]], None]


def spawn_daemon_thread(target: Callable[[], None]) -> None:
    threading.Thread(target=target, daemon=True).start()


class TranslationPipeline:
    def __init__(
        self,
        store: SessionStore,
        provider: TranslationProvider,
        channel: UpdateChannel,
        spawn: Optional[Spawn] = None,
    ) -> None:
        self._store = store
        self._provider = provider
        self._channel = channel
        self._spawn = spawn or spawn_daemon_thread

    def submit(self, text: str) -> Entry:
        """Record a new entry and start translating it in the background.

        The entry is already ``STREAMING`` when this returns; all further
        changes arrive through the update channel.
        """
        entry = self._store.create_entry(text)
        entry.start_streaming()
        self._store.add_entry(entry)

        entry_id = entry.id
        self._spawn(lambda: self._run(entry_id, text))
        return entry

    def _run(self, entry_id: int, text: str) -> None:
        logger.debug("Worker for entry %s started", entry_id)
        try:
            stream = self._provider.translate_stream(text)
        except Exception as exc:
            logger.debug("Entry %s failed to open stream: %s", entry_id, exc)
            self._channel.send(UpdateEvent.failed(entry_id, str(exc)))
            return

        try:
            for item in stream:
                if item.error is not None:
                    logger.debug("Entry %s stream item failed: %s", entry_id, item.error)
                    self._channel.send(UpdateEvent.failed(entry_id, str(item.error)))
                    return
                if item.text:
                    self._channel.send(UpdateEvent.delta(entry_id, item.text))
        except Exception as exc:
            self._channel.send(UpdateEvent.failed(entry_id, str(exc)))
            return
        finally:
            close = getattr(stream, "close", None)
            if close is not None:
                close()

        logger.debug("Entry %s completed", entry_id)
        self._channel.send(UpdateEvent.completed(entry_id))
