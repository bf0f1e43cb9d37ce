"""Single-threaded interaction loop and key dispatch."""

from __future__ import annotations

import logging

from channel import UpdateChannel
from interfaces import ClipboardService, KeySource, Renderer
from pipeline import TranslationPipeline
from session_store import SessionStore
from terminal_input import BACKSPACE, CTRL_A, CTRL_C, CTRL_Y, DOWN, ENTER, ESC, TAB, UP

logger = logging.getLogger(__name__)

POLL_TIMEOUT_S = 0.1

COPY_KEYS = "123456789"


class TranslatorApp:
    def __init__(
        self,
        store: SessionStore,
        pipeline: TranslationPipeline,
        channel: UpdateChannel,
        keys: KeySource,
        renderer: Renderer,
        clipboard: ClipboardService,
        poll_timeout_s: float = POLL_TIMEOUT_S,
    ) -> None:
        self.store = store
        self.pipeline = pipeline
        self.channel = channel
        self._keys = keys
        self._renderer = renderer
        self._clipboard = clipboard
        self._poll_timeout_s = poll_timeout_s
        self.input_text = ""
        self.should_quit = False

    def run(self) -> None:
        try:
            self.render()
            while not self.should_quit:
                self.tick()
        finally:
            self.channel.close()

    def tick(self) -> None:
        self.drain_updates()
        key = self._keys.poll(self._poll_timeout_s)
        if key is not None:
            self.handle_key(key)
        self.render()

    def drain_updates(self) -> int:
        events = self.channel.drain()
        for event in events:
            self.store.apply_update(event)
        return len(events)

    def render(self) -> None:
        self._renderer.render(self.store.snapshot(), self.input_text)

    # ------------------------------------------------------------------
    # Key handlers
    # ------------------------------------------------------------------

    def handle_key(self, key: str) -> None:
        if key == ESC:
            self.should_quit = True
        elif key == ENTER:
            self._submit_input()
        elif key == TAB:
            self.store.toggle_display_mode()
        elif key == BACKSPACE:
            self.input_text = self.input_text[:-1]
        elif key == CTRL_C:
            self.store.clear_history()
        elif key == CTRL_Y:
            self._copy_latest()
        elif key == CTRL_A:
            self._copy_all()
        elif key == UP:
            self.store.scroll_by(-1)
        elif key == DOWN:
            self.store.scroll_by(1)
        elif len(key) == 1 and key in COPY_KEYS:
            self._copy_at(int(key) - 1)
        elif len(key) == 1 and key.isprintable():
            self.input_text += key

    def _submit_input(self) -> None:
        if not self.input_text:
            return
        text = self.input_text
        self.input_text = ""
        entry = self.pipeline.submit(text)
        logger.debug("Submitted entry %s", entry.id)

    def _copy_latest(self) -> None:
        translation = self.store.latest_translation()
        if translation is None:
            self.store.show_notification("No translation available to copy")
            return
        if self._copy(translation):
            self.store.show_notification("Copied latest translation to clipboard")

    def _copy_all(self) -> None:
        translations = self.store.all_translations()
        if not translations:
            self.store.show_notification("No translations available to copy")
            return
        if self._copy("\n\n".join(translations)):
            self.store.show_notification(f"Copied {len(translations)} translations to clipboard")

    def _copy_at(self, index: int) -> None:
        translation = self.store.translation_at(index)
        if translation is None:
            self.store.show_notification(f"Translation #{index + 1} not found")
            return
        if self._copy(translation):
            self.store.show_notification(f"Copied translation #{index + 1} to clipboard")

    def _copy(self, text: str) -> bool:
        result = self._clipboard.copy_text(text)
        if not result.success:
            logger.warning("Clipboard copy failed: %s", result.reason)
            self.store.show_notification(f"Clipboard unavailable: {result.reason}")
        return result.success
