"""Translation provider backed by an OpenAI-compatible chat-completion API.

``translate`` performs one blocking request and returns the whole result.
``translate_stream`` sends ``stream=true`` and returns a generator that decodes
the ``text/event-stream`` body lazily with httpx-sse, one ``StreamItem`` per
event.  The HTTP status is checked before the generator is handed out, so a
rejected request raises instead of producing items.
"""

from __future__ import annotations

import json
import logging
from typing import Iterator, Optional

import httpx
from httpx_sse import EventSource, SSEError

from config import ProviderSettings, mask_sensitive
from errors import (
    HTTP_STATUS_ERROR,
    NETWORK_ERROR,
    RESPONSE_FORMAT_ERROR,
    STREAM_ERROR,
    TranslationError,
)
from models import StreamItem

logger = logging.getLogger(__name__)

DONE_SENTINEL = "[DONE]"

PROMPT_TEMPLATE = """You are a professional translator. Detect the language of the input text and translate it intelligently:
- If the input is in Chinese (简体中文/繁体中文), translate to English
- If the input is in English, translate to Chinese (Simplified Chinese, 简体中文)
- For other languages, translate to English

Only output the translation result, no explanations or additional text.

Input text:
{text}"""


def build_prompt(text: str) -> str:
    return PROMPT_TEMPLATE.format(text=text)


class OpenAIProvider:
    def __init__(
        self,
        settings: ProviderSettings,
        request_timeout_s: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._settings = settings
        self._client = httpx.Client(timeout=request_timeout_s, transport=transport)

    @property
    def name(self) -> str:
        return "OpenAI"

    @property
    def url(self) -> str:
        return f"{self._settings.api_base}/chat/completions"

    def close(self) -> None:
        self._client.close()

    def translate(self, text: str) -> str:
        logger.debug("Translating text: %s", text)
        logger.debug("API URL: %s, model: %s, key: %s", self.url, self._settings.model,
                     mask_sensitive(self._settings.api_key))
        try:
            response = self._client.send(self._build_request(text, stream=False))
        except httpx.RequestError as exc:
            raise self._to_network_error(exc) from exc

        logger.debug("HTTP status: %s", response.status_code)
        if response.is_error:
            raise self._to_status_error(response)

        body = response.text
        logger.debug("Response body length: %d bytes", len(body))
        try:
            payload = json.loads(body)
        except json.JSONDecodeError as exc:
            raise TranslationError(
                RESPONSE_FORMAT_ERROR, f"Failed to parse response JSON: {exc}"
            ) from exc

        choices = payload.get("choices") if isinstance(payload, dict) else None
        if not isinstance(choices, list):
            raise TranslationError(
                RESPONSE_FORMAT_ERROR, "Failed to parse response JSON: missing field `choices`"
            )
        if not choices:
            raise TranslationError(RESPONSE_FORMAT_ERROR, "No choices in response")
        try:
            content = choices[0]["message"]["content"]
        except (KeyError, TypeError) as exc:
            raise TranslationError(
                RESPONSE_FORMAT_ERROR, f"Failed to parse response JSON: missing field {exc}"
            ) from exc
        if not isinstance(content, str):
            raise TranslationError(RESPONSE_FORMAT_ERROR, "Empty response content")

        translation = content.strip()
        logger.debug("Translation result: %s", translation)
        return translation

    def translate_stream(self, text: str) -> Iterator[StreamItem]:
        try:
            response = self._client.send(self._build_request(text, stream=True), stream=True)
        except httpx.RequestError as exc:
            raise self._to_network_error(exc) from exc

        logger.debug("Stream opened with HTTP status %s", response.status_code)
        if response.is_error:
            try:
                response.read()
            finally:
                response.close()
            raise self._to_status_error(response)

        return self._iter_stream(response)

    def _iter_stream(self, response: httpx.Response) -> Iterator[StreamItem]:
        try:
            for sse in EventSource(_terminated(response)).iter_sse():
                if not sse.data:
                    continue
                yield self._decode_event(sse.data)
        except (httpx.HTTPError, SSEError) as exc:
            yield StreamItem(error=TranslationError(STREAM_ERROR, f"Stream error: {exc}"))
        finally:
            response.close()

    def _decode_event(self, data: str) -> StreamItem:
        if data == DONE_SENTINEL:
            return StreamItem(text="")
        try:
            payload = json.loads(data)
        except json.JSONDecodeError as exc:
            return StreamItem(
                error=TranslationError(RESPONSE_FORMAT_ERROR, f"Failed to parse SSE event: {exc}")
            )
        return StreamItem(text=_extract_delta(payload))

    def _build_request(self, text: str, stream: bool) -> httpx.Request:
        body = {
            "model": self._settings.model,
            "messages": [{"role": "user", "content": build_prompt(text)}],
            "stream": stream,
        }
        return self._client.build_request(
            "POST",
            self.url,
            headers={
                "Authorization": f"Bearer {self._settings.api_key}",
                "Content-Type": "application/json",
            },
            json=body,
        )

    def _to_status_error(self, response: httpx.Response) -> TranslationError:
        logger.debug("Error response body: %s", response.text)
        return TranslationError(
            HTTP_STATUS_ERROR,
            f"API request failed ({response.status_code} {response.reason_phrase}): {response.text}",
        )

    def _to_network_error(self, exc: httpx.RequestError) -> TranslationError:
        return TranslationError(NETWORK_ERROR, f"Network error: {type(exc).__name__}: {exc}")


class _TerminatedStream(httpx.SyncByteStream):
    """Decoded body of ``response`` followed by one blank line."""

    def __init__(self, response: httpx.Response) -> None:
        self._response = response

    def __iter__(self) -> Iterator[bytes]:
        yield from self._response.iter_bytes()
        yield b"\n\n"

    def close(self) -> None:
        self._response.close()


def _terminated(response: httpx.Response) -> httpx.Response:
    # Servers may end the body right after the last data line; the closing
    # blank line makes that final event dispatch instead of being dropped.
    headers = [
        (name, value)
        for name, value in response.headers.multi_items()
        if name.lower() not in ("content-encoding", "content-length", "transfer-encoding")
    ]
    return httpx.Response(
        response.status_code,
        headers=headers,
        stream=_TerminatedStream(response),
        request=response.request,
    )


def _extract_delta(payload: object) -> str:
    """Pull ``choices[0].delta.content`` from a streamed chunk, or ''."""
    if not isinstance(payload, dict):
        return ""
    choices = payload.get("choices")
    if not isinstance(choices, list) or not choices:
        return ""
    first = choices[0]
    if not isinstance(first, dict):
        return ""
    delta = first.get("delta")
    if not isinstance(delta, dict):
        return ""
    content = delta.get("content")
    return content if isinstance(content, str) else ""
