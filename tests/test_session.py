from __future__ import annotations

from typing import Any, List

import pytest

from pair_engine.keymaps import JUMP_BINDING, KeymapConflictError
from pair_engine.runtime.settings import EngineSettings
from pair_engine.session import FieldSnapshot, PairSession, TextField
from pair_engine.text import EditResult, InvalidCursorError, NoOp


class FakeField:
    def __init__(self, text: str = "", start: int = 0, end: int | None = None) -> None:
        self.text = text
        self.start = start
        self.end = start if end is None else end
        self.editable = True

    def snapshot(self) -> FieldSnapshot:
        return FieldSnapshot(self.text, self.start, self.end)


def make_session(**settings: Any) -> PairSession:
    return PairSession(settings=EngineSettings(**settings))


def test_fake_field_satisfies_protocol() -> None:
    assert isinstance(FakeField(), TextField)


def test_opener_inserts_pair_and_emits_event() -> None:
    session = make_session()
    events: List[Any] = []
    session.bus.subscribe("edit.applied", events.append)
    field = FakeField("ab", 1)

    outcome = session.on_key(field, "(")

    assert isinstance(outcome, EditResult)
    assert outcome.text == "a() b"
    assert outcome.cursor == (2, 2)
    assert events == [{"field": field, "result": outcome}]


def test_opener_wraps_selection() -> None:
    session = make_session(trailing_space=False)

    outcome = session.on_key(FakeField("one two", 4, 7), "[")

    assert outcome.text == "one [two]"
    assert outcome.highlight == (4, 9)


def test_closer_is_skipped_only_without_selection() -> None:
    session = make_session()

    skipped = session.on_key(FakeField("(a)", 2), ")")
    deferred = session.on_key(FakeField("(a)", 1, 2), ")")

    assert skipped.cursor == (3, 3)
    assert deferred == NoOp("unbound")


def test_quote_steps_over_existing_quote() -> None:
    session = make_session(trailing_space=False)

    stepped = session.on_key(FakeField('"hi"', 3), '"')
    inserted = session.on_key(FakeField("hi", 2), '"')

    assert stepped.text == '"hi"'
    assert stepped.cursor == (4, 4)
    assert inserted.text == 'hi""'
    assert inserted.cursor == (3, 3)


def test_quote_wraps_selection_even_before_quote() -> None:
    session = make_session(trailing_space=False)

    outcome = session.on_key(FakeField('ab"', 0, 2), '"')

    assert outcome.text == '"ab""'


def test_backspace_and_tab_are_normalized() -> None:
    session = make_session()

    deleted = session.on_key(FakeField("x() y", 2), "backspace")
    jumped = session.on_key(FakeField("(foo)", 4), "tab")

    assert deleted.text == "xy"
    assert jumped.text == "(foo) "
    assert jumped.cursor == (6, 6)


def test_unbound_key_is_deferred() -> None:
    session = make_session()
    reasons: List[Any] = []
    session.bus.subscribe("edit.deferred", lambda payload: reasons.append(payload))

    outcome = session.on_key(FakeField("abc", 1), "z")

    assert outcome == NoOp("unbound")
    assert reasons[0]["reason"] == "unbound"


def test_modified_keys_do_not_trigger_pairing() -> None:
    session = make_session()

    assert session.on_key(FakeField("", 0), "(", ("ctrl",)) == NoOp("unbound")


def test_disabled_session_defers_everything() -> None:
    session = make_session()
    toggles: List[Any] = []
    session.bus.subscribe("session.toggled", toggles.append)

    assert session.toggle() is False
    session.disable()

    assert session.on_key(FakeField("", 0), "(") == NoOp("disabled")
    assert toggles == [False]

    session.enable()
    assert toggles == [False, True]
    assert session.on_key(FakeField("", 0), "(").consumed is True


def test_session_can_start_disabled() -> None:
    session = make_session(start_enabled=False)

    assert session.enabled is False


def test_non_editable_fields_are_ignored() -> None:
    session = make_session()
    field = FakeField("", 0)
    field.editable = False

    assert session.on_focus(field, style="plain") is False
    assert session.focused is None
    assert session.on_key(field, "(") == NoOp("not_editable")


def test_focus_and_blur_round_trip_style() -> None:
    session = make_session()
    field = FakeField()

    assert session.on_focus(field, style="plain") is True
    assert session.on_focus(field, style="active") is True
    assert session.focused is field

    assert session.on_blur(field) == "plain"
    assert session.focused is None
    assert session.on_blur(field) is None


def test_focus_while_disabled_tracks_field_without_style() -> None:
    session = make_session(start_enabled=False)
    field = FakeField()

    assert session.on_focus(field, style="plain") is False
    assert session.focused is field
    assert session.on_blur(field) is None


def test_fields_keep_independent_styles() -> None:
    session = make_session()
    first, second = FakeField(), FakeField()

    session.on_focus(first, style="one")
    session.on_blur(first)
    session.on_focus(second, style="two")

    assert session.on_blur(second) == "two"


def test_invalid_field_selection_fails_fast() -> None:
    session = make_session()

    with pytest.raises(InvalidCursorError):
        session.on_key(FakeField("ab", 5), "(")


def test_custom_marker_gets_bindings() -> None:
    session = make_session(marker="~", trailing_space=False)

    assert session.on_key(FakeField("", 0), "~").text == "~~"
    assert session.on_key(FakeField("", 0), "*") == NoOp("unbound")


def test_subscription_can_be_cancelled() -> None:
    session = make_session()
    seen: List[Any] = []
    unsubscribe = session.bus.subscribe("session.toggled", seen.append)

    unsubscribe()
    session.toggle()

    assert seen == []


def test_configured_jump_key_replaces_tab() -> None:
    session = make_session(jump_key="ctrl+j", trailing_space=False)
    field = FakeField("(foo)", 4)

    assert session.on_key(field, "TAB") == NoOp("unbound")
    assert session.on_key(field, "j", ("ctrl",)).cursor == (5, 5)


def test_rebind_at_runtime() -> None:
    session = make_session(trailing_space=False)

    session.rebind(JUMP_BINDING, "ctrl+tab")

    assert session.on_key(FakeField("(foo)", 4), "TAB") == NoOp("unbound")
    assert session.on_key(FakeField("(foo)", 4), "tab", ("ctrl",)).cursor == (5, 5)


def test_rebind_onto_backspace_is_rejected() -> None:
    session = make_session()

    with pytest.raises(KeymapConflictError):
        session.rebind(JUMP_BINDING, "backspace")

    assert session.keymap_registry.binding(JUMP_BINDING).token == "TAB"


def test_session_engine_follows_settings() -> None:
    session = make_session(trailing_space=False, marker="~")

    assert session.engine.trailing_space is False
    assert session.engine.table.is_symmetric("~")
