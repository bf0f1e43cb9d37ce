"""Application entrypoint."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import IO, Optional, Sequence

from app import TranslatorApp
from channel import UpdateChannel
from clipboard import PyperclipClipboard
from config import CONFIG_DIR, JsonConfigStore, load_settings, mask_sensitive
from errors import ConfigError, TranslationError
from interfaces import TranslationProvider
from pipeline import TranslationPipeline
from provider import OpenAIProvider
from session_store import SessionStore
from terminal_input import TerminalKeyReader
from ui import RichRenderer

logger = logging.getLogger("ai_tran")

DEFAULT_LOG_FILE = CONFIG_DIR / "ai-tran.log"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ai-tran",
        description="AI Translation CLI - A fast and beautiful translation tool",
    )
    parser.add_argument(
        "-q", "--quick", action="store_true",
        help="quick mode: output translation and exit immediately",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="verbose mode: print detailed debug information",
    )
    parser.add_argument(
        "--log-file", type=Path, default=None,
        help=f"where verbose logs go in interactive mode (default: {DEFAULT_LOG_FILE})",
    )
    parser.add_argument("text", nargs="?", help="text to translate (stdin is used when piped)")
    return parser


def read_input_text(text: Optional[str], stdin: Optional[IO[str]] = None) -> Optional[str]:
    if text is not None:
        return text
    stdin = stdin or sys.stdin
    if stdin.isatty():
        return None
    piped = stdin.read().strip()
    return piped or None


def configure_logging(verbose: bool, log_file: Optional[Path] = None) -> None:
    handler: logging.Handler
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_file, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("[%(levelname)s] %(name)s: %(message)s"))
    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)


def run_quick(provider: TranslationProvider, text: Optional[str]) -> int:
    if text is None:
        print("Error: No input text provided. Use stdin or provide text as argument.", file=sys.stderr)
        return 1
    try:
        translation = provider.translate(text)
    except TranslationError as exc:
        print(f"Translation error: {exc}", file=sys.stderr)
        return 1
    print(translation)
    return 0


def run_tui(provider: TranslationProvider, text: Optional[str]) -> int:
    store = SessionStore(provider_label=provider.name)
    channel = UpdateChannel()
    pipeline = TranslationPipeline(store, provider, channel)
    if text is not None:
        pipeline.submit(text)

    with TerminalKeyReader() as keys, RichRenderer() as renderer:
        app = TranslatorApp(
            store=store,
            pipeline=pipeline,
            channel=channel,
            keys=keys,
            renderer=renderer,
            clipboard=PyperclipClipboard(),
        )
        app.run()
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    log_file = None
    if args.verbose and not args.quick:
        log_file = args.log_file or DEFAULT_LOG_FILE
    configure_logging(args.verbose, log_file)

    try:
        settings = load_settings(JsonConfigStore())
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    logger.debug("API base: %s", settings.api_base)
    logger.debug("Model: %s", settings.model)
    logger.debug("API key: %s", mask_sensitive(settings.api_key))
    logger.debug("Target language: %s", settings.target_language)

    provider = OpenAIProvider(settings)
    try:
        text = read_input_text(args.text)
        if args.quick:
            return run_quick(provider, text)
        return run_tui(provider, text)
    finally:
        provider.close()


if __name__ == "__main__":
    raise SystemExit(main())
