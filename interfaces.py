"""Protocol interfaces used by the pipeline and the interaction loop."""

from __future__ import annotations

from typing import Iterator, Optional, Protocol

from models import CopyResult, SessionView, StreamItem


class TranslationProvider(Protocol):
    @property
    def name(self) -> str: ...

    def translate(self, text: str) -> str: ...

    def translate_stream(self, text: str) -> Iterator[StreamItem]: ...


class ClipboardService(Protocol):
    def copy_text(self, text: str) -> CopyResult: ...


class KeySource(Protocol):
    def poll(self, timeout_s: float) -> Optional[str]: ...


class Renderer(Protocol):
    def render(self, view: SessionView, input_text: str) -> None: ...


class ConfigStore(Protocol):
    def get(self, key: str) -> str: ...

    def set(self, key: str, value: str) -> None: ...
