"""Shared error codes and exception types."""

from __future__ import annotations

CONFIG_MISSING = "CONFIG_MISSING"
NETWORK_ERROR = "NETWORK_ERROR"
HTTP_STATUS_ERROR = "HTTP_STATUS_ERROR"
RESPONSE_FORMAT_ERROR = "RESPONSE_FORMAT_ERROR"
STREAM_ERROR = "STREAM_ERROR"


class TranslationError(Exception):
    """A request-level or stream-item-level translation failure."""

    def __init__(self, code: str, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message

    def __str__(self) -> str:
        return self.message


class ConfigError(Exception):
    def __init__(self, message: str = "OPENAI_API_KEY not found in environment.") -> None:
        super().__init__(message)
        self.code = CONFIG_MISSING
