"""Single-owner session state: entries, display mode and notifications."""

from __future__ import annotations

import dataclasses
import time
from typing import Callable, Optional

from models import DisplayMode, Entry, SessionView, UpdateEvent, UpdateKind

NOTIFICATION_TTL_S = 3.0

Clock = Callable[[], float]


class SessionStore:
    """Owns every mutable piece of the session.

    Only the interaction loop calls into the store. Background workers reach it
    indirectly through update events, which are applied by entry id; an id that
    is no longer present (history cleared) is ignored.
    """

    def __init__(self, provider_label: str, clock: Clock = time.monotonic) -> None:
        self._provider_label = provider_label
        self._clock = clock
        self._entries: list[Entry] = []
        self._next_id = 0
        self.scroll_offset = 0
        self.display_mode = DisplayMode.BILINGUAL
        self._notification: Optional[tuple[str, float]] = None

    @property
    def entries(self) -> list[Entry]:
        return self._entries

    @property
    def provider_label(self) -> str:
        return self._provider_label

    def create_entry(self, text: str) -> Entry:
        entry_id = self._next_id
        self._next_id += 1
        return Entry(id=entry_id, source_text=text, provider_label=self._provider_label)

    def add_entry(self, entry: Entry) -> None:
        self._entries.append(entry)
        self.scroll_to_bottom()

    def get_entry(self, entry_id: int) -> Optional[Entry]:
        for entry in self._entries:
            if entry.id == entry_id:
                return entry
        return None

    def apply_update(self, event: UpdateEvent) -> None:
        entry = self.get_entry(event.entry_id)
        if entry is None:
            return
        if event.kind == UpdateKind.DELTA:
            entry.append_translation(event.text)
        elif event.kind == UpdateKind.COMPLETED:
            entry.complete_translation()
        elif event.kind == UpdateKind.FAILED:
            entry.set_error(event.message)

    def clear_history(self) -> None:
        self._entries.clear()
        self.scroll_offset = 0
        self.show_notification("History cleared")

    def toggle_display_mode(self) -> None:
        self.display_mode = self.display_mode.next()
        self.show_notification(f"Display mode: {self.display_mode.label}")

    def scroll_to_bottom(self) -> None:
        self.scroll_offset = max(len(self._entries) - 1, 0)

    def scroll_by(self, delta: int) -> None:
        last = max(len(self._entries) - 1, 0)
        self.scroll_offset = min(max(self.scroll_offset + delta, 0), last)

    def show_notification(self, text: str) -> None:
        self._notification = (text, self._clock())

    def notification_text(self) -> Optional[str]:
        if self._notification is None:
            return None
        text, created_at = self._notification
        if self._clock() - created_at < NOTIFICATION_TTL_S:
            return text
        return None

    # Clipboard projections: only finished entries are exported.

    def latest_translation(self) -> Optional[str]:
        if not self._entries or not self._entries[-1].complete:
            return None
        return self._entries[-1].translated_text

    def translation_at(self, index: int) -> Optional[str]:
        if index < 0 or index >= len(self._entries):
            return None
        entry = self._entries[index]
        return entry.translated_text if entry.complete else None

    def all_translations(self) -> list[str]:
        return [e.translated_text for e in self._entries if e.complete]

    def snapshot(self) -> SessionView:
        return SessionView(
            entries=tuple(dataclasses.replace(e) for e in self._entries),
            display_mode=self.display_mode,
            scroll_offset=self.scroll_offset,
            notification=self.notification_text(),
            provider_label=self._provider_label,
        )
