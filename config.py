"""Provider settings from the environment, .env and a JSON config file."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

from errors import ConfigError
from interfaces import ConfigStore

CONFIG_DIR = Path.home() / ".config" / "ai_tran"

DEFAULT_API_BASE = "https://api.openai.com/v1"
DEFAULT_MODEL = "gpt-5-mini"
DEFAULT_TARGET_LANGUAGE = "zh-CN"

_ENV_KEYS = {
    "api_key": "OPENAI_API_KEY",
    "api_base": "OPENAI_API_BASE",
    "model": "OPENAI_MODEL",
    "target_language": "TARGET_LANGUAGE",
}


class JsonConfigStore:
    def __init__(self, path: Path | None = None) -> None:
        self._path = path or CONFIG_DIR / "config.json"
        self._path.parent.mkdir(parents=True, exist_ok=True)

    def get(self, key: str) -> str:
        data = self._read_all()
        return str(data.get(key, ""))

    def set(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        self._write_all(data)

    def _read_all(self) -> dict:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError):
            return {}
        return data if isinstance(data, dict) else {}

    def _write_all(self, data: dict) -> None:
        self._path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")


@dataclass(frozen=True)
class ProviderSettings:
    api_key: str
    api_base: str = DEFAULT_API_BASE
    model: str = DEFAULT_MODEL
    target_language: str = DEFAULT_TARGET_LANGUAGE


def load_settings(
    store: Optional[ConfigStore] = None,
    environ: Optional[Mapping[str, str]] = None,
    use_dotenv: bool = True,
) -> ProviderSettings:
    """Resolve provider settings; the environment wins over the config file.

    Raises ConfigError when no API key is configured anywhere.
    """
    if use_dotenv:
        load_dotenv()
    env = os.environ if environ is None else environ

    def _lookup(key: str, default: str = "") -> str:
        value = env.get(_ENV_KEYS[key], "").strip()
        if not value and store is not None:
            value = store.get(key).strip()
        return value or default

    api_key = _lookup("api_key")
    if not api_key:
        raise ConfigError()
    return ProviderSettings(
        api_key=api_key,
        api_base=_lookup("api_base", DEFAULT_API_BASE).rstrip("/"),
        model=_lookup("model", DEFAULT_MODEL),
        target_language=_lookup("target_language", DEFAULT_TARGET_LANGUAGE),
    )


def mask_sensitive(value: str, prefix: int = 7, suffix: int = 4) -> str:
    if len(value) <= prefix + suffix:
        return "*" * len(value)
    hidden = len(value) - prefix - suffix
    return value[:prefix] + "*" * hidden + value[len(value) - suffix:]
