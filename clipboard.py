"""Clipboard export of finished translations."""

from __future__ import annotations

from models import CopyResult

try:
    import pyperclip
except Exception:  # pragma: no cover
    pyperclip = None  # type: ignore


class PyperclipClipboard:
    def copy_text(self, text: str) -> CopyResult:
        if not text:
            return CopyResult(success=False, reason="empty text")
        if pyperclip is None:
            return CopyResult(success=False, reason="pyperclip is not installed")
        try:
            pyperclip.copy(text)
        except pyperclip.PyperclipException as exc:
            return CopyResult(success=False, reason=str(exc))
        return CopyResult(success=True, reason="ok")
