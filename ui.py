"""Rich renderer for the history pane, input line and status bar."""

from __future__ import annotations

from typing import Optional

from rich.console import Console, Group
from rich.layout import Layout
from rich.live import Live
from rich.panel import Panel
from rich.text import Text

from models import DisplayMode, Entry, SessionView, StatusKind

STREAMING_CURSOR = "▊"
INPUT_PLACEHOLDER = "Type your text here and press Enter to translate..."


def _translation_text(entry: Entry) -> str:
    text = entry.translated_text
    if entry.status.kind == StatusKind.STREAMING:
        text += STREAMING_CURSOR
    return text


def render_entry(entry: Entry, number: int, mode: DisplayMode) -> Text:
    out = Text()
    out.append(f"[{number}] ", style="bold cyan")
    out.append(entry.status.glyph)
    out.append(" ")
    out.append(entry.created_at.astimezone().strftime("%H:%M:%S"), style="bright_black")
    out.append("\n")

    waiting = not entry.translated_text and entry.status.kind == StatusKind.STREAMING
    if mode == DisplayMode.TRANSLATION_ONLY:
        if waiting:
            out.append("Translating...", style="yellow")
        else:
            out.append(_translation_text(entry), style="green")
    elif mode == DisplayMode.BILINGUAL:
        out.append("  Original: ", style="blue")
        out.append(entry.source_text)
        out.append("\n")
        out.append("  Translation: ", style="green")
        if waiting:
            out.append("...", style="yellow")
        else:
            out.append(_translation_text(entry))
    else:
        out.append(entry.source_text, style="blue")

    if entry.status.kind == StatusKind.FAILED:
        out.append("\n")
        out.append("Error: ", style="red")
        out.append(entry.status.message, style="red")
    return out


def render_history(view: SessionView, visible_rows: Optional[int] = None) -> Panel:
    entries = view.entries
    start = 0
    if visible_rows is not None and len(entries) > visible_rows:
        start = min(view.scroll_offset, len(entries) - visible_rows)

    blocks: list[Text] = []
    for index in range(start, len(entries)):
        blocks.append(render_entry(entries[index], index + 1, view.display_mode))
        blocks.append(Text(""))
    return Panel(
        Group(*blocks[:-1]) if blocks else Text(""),
        title=f" Translation History ({view.provider_label}) ",
        border_style="white",
    )


def render_input(input_text: str) -> Panel:
    if input_text:
        body = Text(input_text + STREAMING_CURSOR)
    else:
        body = Text(INPUT_PLACEHOLDER, style="bright_black")
    return Panel(body, title=" Input ", border_style="cyan")


def render_status_bar(view: SessionView) -> Text:
    # Notification first; shortcuts past the terminal width are cropped.
    shortcuts = [
        ("Enter", "Send"),
        ("TAB", view.display_mode.label),
        ("^Y", "Copy"),
        ("^A", "All"),
        ("1-9", "#N"),
        ("^C", "Clear"),
        ("ESC", "Quit"),
    ]
    bar = Text(style="white on black", no_wrap=True, overflow="crop")
    if view.notification:
        bar.append(f"ℹ {view.notification}", style="bold green")
        bar.append(" | ")
    for i, (key, desc) in enumerate(shortcuts):
        if i:
            bar.append(" | ")
        bar.append(key, style="bold yellow")
        bar.append(f": {desc}")
    return bar


def build_layout(view: SessionView, input_text: str, height: Optional[int] = None) -> Layout:
    layout = Layout()
    layout.split_column(
        Layout(name="history", ratio=1, minimum_size=5),
        Layout(name="input", size=3),
        Layout(name="status", size=1),
    )
    # Rough capacity: each bilingual entry takes about four rows.
    visible = max((height - 6) // 4, 1) if height else None
    layout["history"].update(render_history(view, visible))
    layout["input"].update(render_input(input_text))
    layout["status"].update(render_status_bar(view))
    return layout


class RichRenderer:
    """Full-screen renderer; use as a context manager around the loop."""

    def __init__(self, console: Optional[Console] = None) -> None:
        self._console = console or Console()
        self._live = Live(console=self._console, screen=True, auto_refresh=False)

    def __enter__(self) -> RichRenderer:
        self._live.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self._live.stop()

    def render(self, view: SessionView, input_text: str) -> None:
        layout = build_layout(view, input_text, self._console.size.height)
        self._live.update(layout, refresh=True)
