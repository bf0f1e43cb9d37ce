"""Core data models for the translation session."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from errors import TranslationError


class StatusKind(str, Enum):
    PENDING = "pending"
    STREAMING = "streaming"
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class EntryStatus:
    """Tagged status of an entry; only ``FAILED`` carries a message."""

    kind: StatusKind
    message: str = ""

    @classmethod
    def failed(cls, message: str) -> EntryStatus:
        return cls(StatusKind.FAILED, message)

    @property
    def is_terminal(self) -> bool:
        return self.kind in (StatusKind.SUCCESS, StatusKind.FAILED)

    @property
    def glyph(self) -> str:
        return _STATUS_GLYPHS[self.kind]


_STATUS_GLYPHS = {
    StatusKind.PENDING: "⏳",
    StatusKind.STREAMING: "⚡",
    StatusKind.SUCCESS: "✓",
    StatusKind.FAILED: "✗",
}

PENDING = EntryStatus(StatusKind.PENDING)
STREAMING = EntryStatus(StatusKind.STREAMING)
SUCCESS = EntryStatus(StatusKind.SUCCESS)


class DisplayMode(str, Enum):
    TRANSLATION_ONLY = "translation_only"
    BILINGUAL = "bilingual"
    ORIGINAL_ONLY = "original_only"

    def next(self) -> DisplayMode:
        # Two modes cycle; ORIGINAL_ONLY falls back into the cycle.
        if self is DisplayMode.TRANSLATION_ONLY:
            return DisplayMode.BILINGUAL
        return DisplayMode.TRANSLATION_ONLY

    @property
    def label(self) -> str:
        return _MODE_LABELS[self]


_MODE_LABELS = {
    DisplayMode.TRANSLATION_ONLY: "Trans",
    DisplayMode.BILINGUAL: "Both",
    DisplayMode.ORIGINAL_ONLY: "Orig",
}


@dataclass
class Entry:
    id: int
    source_text: str
    provider_label: str
    translated_text: str = ""
    complete: bool = False
    status: EntryStatus = PENDING
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def start_streaming(self) -> None:
        self.status = STREAMING
        self.translated_text = ""

    def append_translation(self, fragment: str) -> None:
        self.translated_text += fragment

    def complete_translation(self) -> None:
        self.complete = True
        self.status = SUCCESS

    def set_error(self, message: str) -> None:
        self.status = EntryStatus.failed(message)
        self.complete = True


class UpdateKind(str, Enum):
    DELTA = "delta"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(frozen=True)
class UpdateEvent:
    kind: UpdateKind
    entry_id: int
    text: str = ""
    message: str = ""

    @classmethod
    def delta(cls, entry_id: int, text: str) -> UpdateEvent:
        return cls(UpdateKind.DELTA, entry_id, text=text)

    @classmethod
    def completed(cls, entry_id: int) -> UpdateEvent:
        return cls(UpdateKind.COMPLETED, entry_id)

    @classmethod
    def failed(cls, entry_id: int, message: str) -> UpdateEvent:
        return cls(UpdateKind.FAILED, entry_id, message=message)


@dataclass(frozen=True)
class StreamItem:
    """One item of a provider stream: a fragment, or an error for this item."""

    text: str = ""
    error: Optional[TranslationError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class SessionView:
    entries: tuple[Entry, ...]
    display_mode: DisplayMode
    scroll_offset: int
    notification: Optional[str]
    provider_label: str


@dataclass
class CopyResult:
    success: bool
    reason: str
