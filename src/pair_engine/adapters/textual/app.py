"""Executable Textual app hosting the pairing engine in editable fields."""

from __future__ import annotations

import argparse
from dataclasses import replace
from typing import Optional, Sequence, Tuple

try:  # pragma: no cover - imported only when demo is run
    from textual import events
    from textual.app import App, ComposeResult
    from textual.containers import Vertical
    from textual.widgets import Footer, Header, Static, TextArea
    from textual.widgets.text_area import Selection
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use pair_engine.adapters.textual.app"
    ) from exc

from pair_engine.runtime import telemetry
from pair_engine.runtime.settings import EngineSettings, load_settings
from pair_engine.session import FieldSnapshot, PairSession

from .controller import TextualPairAdapter, TextualUIHooks
from .locations import location_for_offset, ordered_offsets

ACTIVE_BACKGROUND = "#1a3c34"
ACTIVE_COLOR = "#e6f5e6"


def _split_key(event: events.Key) -> Tuple[str, Tuple[str, ...]]:
    """``ctrl+tab`` -> (``tab``, (``ctrl``,)); printable keys pass through."""

    key = event.key
    if event.is_printable or "+" not in key:
        return key, ()
    *modifiers, name = key.split("+")
    return name, tuple(modifiers)


class PairTextArea(TextArea):
    """TextArea that routes key presses through a TextualPairAdapter."""

    def __init__(self, text: str = "", **kwargs: object) -> None:
        kwargs.setdefault("tab_behavior", "indent")
        super().__init__(text, **kwargs)  # type: ignore[arg-type]
        self.adapter: TextualPairAdapter | None = None

    @property
    def editable(self) -> bool:
        return not self.read_only and not self.disabled

    def _lines(self) -> Sequence[str]:
        return self.document.lines

    def snapshot(self) -> FieldSnapshot:
        lines = self._lines()
        start, end = ordered_offsets(lines, self.selection.start, self.selection.end)
        return FieldSnapshot(
            text="\n".join(lines), selection_start=start, selection_end=end
        )

    def apply_text(self, text: str, cursor_start: int, cursor_end: int) -> None:
        self.replace(text, (0, 0), self.document.end, maintain_selection_offset=False)
        self.select_offsets(cursor_start, cursor_end)

    def select_offsets(self, start: int, end: int) -> None:
        lines = self._lines()
        self.selection = Selection(
            location_for_offset(lines, start), location_for_offset(lines, end)
        )

    async def _on_key(self, event: events.Key) -> None:
        if self.adapter is None:
            return
        key, modifiers = _split_key(event)
        outcome = self.adapter.handle_key(
            self, key, character=event.character, modifiers=modifiers
        )
        if outcome.consumed:
            event.stop()
            event.prevent_default()

    def on_focus(self, event: events.Focus) -> None:
        del event
        if self.adapter is not None:
            self.adapter.handle_focus(self)

    def on_blur(self, event: events.Blur) -> None:
        del event
        if self.adapter is not None:
            self.adapter.handle_blur(self)


class PairingApp(App[None]):
    """Two text fields with bracket pairing and a toggle."""

    CSS = """
	Screen {
		layout: vertical;
	}

	PairTextArea {
		height: 1fr;
		border: round $accent;
	}

	#pairing-status {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+t", "toggle_pairing", "Toggle pairing"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, *, settings: Optional[EngineSettings] = None) -> None:
        super().__init__()
        self.session = PairSession(settings=settings or load_settings())
        self.adapter: TextualPairAdapter | None = None
        self._status_widget: Static | None = None
        self._logger = telemetry.get_logger("pair_engine.textual")

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Vertical(id="fields"):
            yield PairTextArea(id="notes")
            yield PairTextArea(id="scratch")
        self._status_widget = Static("", id="pairing-status")
        yield self._status_widget
        yield Footer()

    def on_mount(self) -> None:
        hooks = TextualUIHooks(
            apply_edit=self._apply_edit,
            select=self._select,
            schedule=self.call_after_refresh,
            capture_style=self._capture_style,
            apply_active_style=self._apply_active_style,
            restore_style=self._restore_style,
            update_status=self._update_status,
            log=self._log_line,
        )
        self.adapter = TextualPairAdapter(self.session, hooks)
        for area in self.query(PairTextArea):
            area.adapter = self.adapter

    def action_toggle_pairing(self) -> None:
        if self.adapter:
            self.adapter.toggle()

    @staticmethod
    def _apply_edit(field: PairTextArea, text: str, start: int, end: int) -> None:
        field.apply_text(text, start, end)

    @staticmethod
    def _select(field: PairTextArea, start: int, end: int) -> None:
        field.select_offsets(start, end)

    @staticmethod
    def _capture_style(field: PairTextArea) -> object:
        return (field.styles.background, field.styles.color)

    @staticmethod
    def _apply_active_style(field: PairTextArea) -> None:
        field.styles.background = ACTIVE_BACKGROUND
        field.styles.color = ACTIVE_COLOR

    @staticmethod
    def _restore_style(field: PairTextArea, saved: object) -> None:
        background, color = saved  # type: ignore[misc]
        field.styles.background = background
        field.styles.color = color

    def _update_status(self, status: str) -> None:
        if self._status_widget:
            self._status_widget.update(status)

    def _log_line(self, line: str) -> None:
        self._logger.debug(line)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the bracket pairing demo.")
    parser.add_argument(
        "--no-trailing-space",
        action="store_true",
        help="Do not add a space after inserted pairs",
    )
    parser.add_argument(
        "--marker",
        default=None,
        help="Symmetric marker character (default: PAIR_ENGINE_MARKER or '*')",
    )
    parser.add_argument(
        "--disabled",
        action="store_true",
        help="Start with pairing switched off (toggle with ctrl+t)",
    )
    parser.add_argument(
        "--jump-key",
        default=None,
        help="Key that jumps out of the enclosing pair, e.g. ctrl+j (default: tab)",
    )
    parser.add_argument(
        "--log-preset",
        choices=("development", "production"),
        default=None,
        help="telelog preset to use instead of the environment configuration",
    )
    return parser.parse_args(argv)


def settings_from_args(
    args: argparse.Namespace, base: Optional[EngineSettings] = None
) -> EngineSettings:
    settings = base or load_settings()
    changes: dict[str, object] = {}
    if args.no_trailing_space:
        changes["trailing_space"] = False
    if args.marker is not None:
        changes["marker"] = args.marker
    if args.disabled:
        changes["start_enabled"] = False
    if args.jump_key:
        changes["jump_key"] = args.jump_key
    return replace(settings, **changes) if changes else settings


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    if args.log_preset:
        telemetry.configure(preset=args.log_preset)
    app = PairingApp(settings=settings_from_args(args))
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
