from __future__ import annotations

from models import DisplayMode, EntryStatus, StatusKind, UpdateEvent
from session_store import SessionStore


class FakeClock:
    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now


def _streaming_entry(store: SessionStore, text: str):  # noqa: ANN202
    entry = store.create_entry(text)
    entry.start_streaming()
    store.add_entry(entry)
    return entry


def test_create_entry_allocates_ids_without_inserting() -> None:
    store = SessionStore(provider_label="OpenAI")

    first = store.create_entry("a")
    second = store.create_entry("b")

    assert (first.id, second.id) == (0, 1)
    assert first.status == EntryStatus(StatusKind.PENDING)
    assert first.provider_label == "OpenAI"
    assert first.complete is False
    assert store.entries == []


def test_add_entry_scrolls_to_bottom() -> None:
    store = SessionStore(provider_label="OpenAI")
    for text in ("a", "b", "c"):
        store.add_entry(store.create_entry(text))

    assert store.scroll_offset == 2
    assert [e.source_text for e in store.entries] == ["a", "b", "c"]


def test_ids_increase_across_clears() -> None:
    store = SessionStore(provider_label="OpenAI")
    ids = []
    for round_ in range(3):
        for _ in range(2):
            entry = _streaming_entry(store, f"text {round_}")
            ids.append(entry.id)
        store.apply_update(UpdateEvent.completed(ids[-1]))
        store.apply_update(UpdateEvent.failed(ids[-2], "boom"))
        store.clear_history()

    assert ids == sorted(ids)
    assert len(set(ids)) == len(ids)


def test_hello_scenario_ends_in_success() -> None:
    store = SessionStore(provider_label="OpenAI")
    entry = _streaming_entry(store, "Hello")

    store.apply_update(UpdateEvent.delta(entry.id, "你"))
    store.apply_update(UpdateEvent.delta(entry.id, "好"))
    store.apply_update(UpdateEvent.completed(entry.id))

    assert entry.translated_text == "你好"
    assert entry.status.kind == StatusKind.SUCCESS
    assert entry.complete is True


def test_failed_update_sets_message_and_complete() -> None:
    store = SessionStore(provider_label="OpenAI")
    entry = _streaming_entry(store, "Hello")

    store.apply_update(UpdateEvent.failed(entry.id, "API request failed (401 Unauthorized): nope"))

    assert entry.status == EntryStatus.failed("API request failed (401 Unauthorized): nope")
    assert entry.status.is_terminal
    assert entry.complete is True
    assert entry.translated_text == ""


def test_update_for_unknown_id_is_noop() -> None:
    store = SessionStore(provider_label="OpenAI")
    entry = _streaming_entry(store, "Hello")

    store.apply_update(UpdateEvent.delta(42, "x"))
    store.apply_update(UpdateEvent.completed(42))
    store.apply_update(UpdateEvent.failed(42, "boom"))

    assert entry.translated_text == ""
    assert entry.status.kind == StatusKind.STREAMING


def test_clear_history_drops_late_deltas() -> None:
    clock = FakeClock()
    store = SessionStore(provider_label="OpenAI", clock=clock)
    old = _streaming_entry(store, "Hello")
    _streaming_entry(store, "World")

    store.clear_history()
    assert store.entries == []
    assert store.scroll_offset == 0
    assert store.notification_text() == "History cleared"

    store.apply_update(UpdateEvent.delta(old.id, "late"))
    assert store.entries == []

    fresh = _streaming_entry(store, "Again")
    assert fresh.id == 2


def test_toggle_display_mode_cycles_two_modes() -> None:
    store = SessionStore(provider_label="OpenAI")
    assert store.display_mode == DisplayMode.BILINGUAL

    seen = []
    for _ in range(4):
        store.toggle_display_mode()
        seen.append(store.display_mode)

    assert seen == [
        DisplayMode.TRANSLATION_ONLY,
        DisplayMode.BILINGUAL,
        DisplayMode.TRANSLATION_ONLY,
        DisplayMode.BILINGUAL,
    ]
    assert store.notification_text() == "Display mode: Both"


def test_original_only_leaves_to_translation_only() -> None:
    assert DisplayMode.ORIGINAL_ONLY.next() == DisplayMode.TRANSLATION_ONLY


def test_notification_expires_after_three_seconds() -> None:
    clock = FakeClock()
    store = SessionStore(provider_label="OpenAI", clock=clock)

    assert store.notification_text() is None
    store.show_notification("hi")
    clock.now += 2.9
    assert store.notification_text() == "hi"
    clock.now += 0.1
    assert store.notification_text() is None


def test_translation_projections_only_return_complete_entries() -> None:
    store = SessionStore(provider_label="OpenAI")
    done = _streaming_entry(store, "one")
    failed = _streaming_entry(store, "two")
    running = _streaming_entry(store, "three")

    store.apply_update(UpdateEvent.delta(done.id, "一"))
    store.apply_update(UpdateEvent.completed(done.id))
    store.apply_update(UpdateEvent.failed(failed.id, "boom"))
    store.apply_update(UpdateEvent.delta(running.id, "三"))

    assert store.latest_translation() is None
    assert store.translation_at(0) == "一"
    assert store.translation_at(1) == ""
    assert store.translation_at(2) is None
    assert store.translation_at(7) is None
    assert store.all_translations() == ["一", ""]

    store.apply_update(UpdateEvent.completed(running.id))
    assert store.latest_translation() == "三"


def test_snapshot_is_detached_from_store() -> None:
    clock = FakeClock()
    store = SessionStore(provider_label="OpenAI", clock=clock)
    entry = _streaming_entry(store, "Hello")
    store.toggle_display_mode()

    view = store.snapshot()
    store.apply_update(UpdateEvent.delta(entry.id, "你"))

    assert view.entries[0].translated_text == ""
    assert view.display_mode == DisplayMode.TRANSLATION_ONLY
    assert view.notification == "Display mode: Trans"
    assert view.provider_label == "OpenAI"


def test_scroll_by_is_clamped() -> None:
    store = SessionStore(provider_label="OpenAI")
    for text in ("a", "b", "c"):
        store.add_entry(store.create_entry(text))

    store.scroll_by(-5)
    assert store.scroll_offset == 0
    store.scroll_by(1)
    assert store.scroll_offset == 1
    store.scroll_by(10)
    assert store.scroll_offset == 2
