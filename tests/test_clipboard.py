from __future__ import annotations

from types import SimpleNamespace

import clipboard
from clipboard import PyperclipClipboard


class _PyperclipException(RuntimeError):
    pass


def _fake_pyperclip(copied: list[str], fail: bool = False) -> SimpleNamespace:
    def copy(text: str) -> None:
        if fail:
            raise _PyperclipException("could not find a copy/paste mechanism")
        copied.append(text)

    return SimpleNamespace(copy=copy, PyperclipException=_PyperclipException)


def test_copy_returns_failure_when_dependency_missing(monkeypatch) -> None:  # noqa: ANN001
    monkeypatch.setattr(clipboard, "pyperclip", None)

    result = PyperclipClipboard().copy_text("hello")

    assert result.success is False
    assert "not installed" in result.reason


def test_copy_returns_failure_on_empty_text() -> None:
    result = PyperclipClipboard().copy_text("")

    assert result.success is False
    assert result.reason == "empty text"


def test_copy_writes_text(monkeypatch) -> None:  # noqa: ANN001
    copied: list[str] = []
    monkeypatch.setattr(clipboard, "pyperclip", _fake_pyperclip(copied))

    result = PyperclipClipboard().copy_text("你好")

    assert result.success is True
    assert copied == ["你好"]


def test_copy_reports_backend_error(monkeypatch) -> None:  # noqa: ANN001
    monkeypatch.setattr(clipboard, "pyperclip", _fake_pyperclip([], fail=True))

    result = PyperclipClipboard().copy_text("hello")

    assert result.success is False
    assert "copy/paste mechanism" in result.reason
