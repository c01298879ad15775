"""Executable Textual app that browses a list with undoable selection."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence

try:  # pragma: no cover - imported only when demo is run
    from textual import events
    from textual.app import App, ComposeResult
    from textual.containers import Vertical
    from textual.widgets import Footer, Header, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use nav_state.adapters.textual.app"
    ) from exc

from nav_state.cursor import CircularCursor, CursorView
from nav_state.history import HistoryBuffer, HistoryView
from nav_state.runtime.settings import NavSettings, parse_items

from .controller import NavigatorAdapter, TextualUIHooks

def create_default_adapter(
    items: Sequence[str], hooks: TextualUIHooks, *, capacity: int
) -> NavigatorAdapter[str]:
    """Build a cursor over ``items`` plus a history of its selections."""

    cursor: CircularCursor[str] = CircularCursor(list(items))
    history: HistoryBuffer[str] = HistoryBuffer(cursor.state, capacity=capacity)
    return NavigatorAdapter(history, cursor, hooks)


@dataclass
class UIState:
    list_text: str = ""
    history_text: str = ""
    status_text: str = ""


class NavStateApp(App[None]):
    """Minimal Textual UI around a cursor and its undo history."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#list-view {
		height: 1fr;
		border: round $accent;
		padding: 1 1;
	}

	#history-view {
		height: 1fr;
		border: round $secondary;
		padding: 1 1;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+c", "quit", "Quit"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, *, items: Sequence[str], capacity: int) -> None:
        super().__init__()
        self._items = tuple(items)
        self._capacity = capacity
        self._state = UIState()
        self.adapter: NavigatorAdapter[str] | None = None
        self._list_widget: Static | None = None
        self._history_widget: Static | None = None
        self._status_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Vertical(id="views"):
            self._list_widget = Static("", id="list-view")
            self._history_widget = Static("", id="history-view")
            yield self._list_widget
            yield self._history_widget
        self._status_widget = Static("", id="status-line")
        yield self._status_widget
        yield Footer()

    def on_mount(self) -> None:
        hooks = TextualUIHooks(
            update_view=self._update_view,
            update_status=self._update_status,
        )
        self.adapter = create_default_adapter(
            self._items, hooks, capacity=self._capacity
        )
        self._update_status("n/p move  u/r undo/redo  g/G oldest/newest  0-9 jump")

    def on_unmount(self) -> None:
        if self.adapter:
            self.adapter.close()
            self.adapter = None

    def on_key(self, event: events.Key) -> None:
        if not self.adapter:
            return
        key = event.key
        if key in {"ctrl+c", "ctrl+q"}:
            return
        if event.character and len(event.character) == 1:
            key = event.character
        else:
            key = key.upper()
        if self.adapter.handle_key(key):
            event.stop()

    def _update_view(
        self, history: HistoryView[Any], cursor: CursorView[Any]
    ) -> None:
        lines: List[str] = []
        for index, item in enumerate(self._items):
            marker = ">" if index == cursor.index and cursor.length else " "
            lines.append(f"{marker} {index}: {item}")
        flags = f"[first: {cursor.is_first}] [last: {cursor.is_last}]"
        self._state.list_text = "\n".join(lines + ["", flags])

        entries = []
        for position, value in enumerate(history.history):
            marker = "*" if position == history.position else " "
            entries.append(f"{marker} {value}")
        self._state.history_text = (
            f"history {history.position + 1}/{len(history.history)}"
            f" (capacity {history.capacity})\n" + "\n".join(entries)
        )

        if self._list_widget:
            self._list_widget.update(self._state.list_text)
        if self._history_widget:
            self._history_widget.update(self._state.history_text)

    def _update_status(self, status: str) -> None:
        self._state.status_text = status
        if self._status_widget:
            self._status_widget.update(status)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    settings = NavSettings.from_env()
    parser = argparse.ArgumentParser(
        description="Browse a list with undoable selection."
    )
    parser.add_argument(
        "--items",
        type=parse_items,
        default=settings.items,
        help="Comma separated items to browse (env: NAV_STATE_ITEMS)",
    )
    parser.add_argument(
        "--capacity",
        type=int,
        default=settings.history_capacity,
        help=f"History capacity (default: {settings.history_capacity})",
    )
    parser.add_argument(
        "--telemetry-preset",
        default=settings.telemetry_preset,
        choices=("development", "production", "performance"),
        help="telelog preset to activate before starting",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    settings = NavSettings(
        history_capacity=args.capacity,
        telemetry_preset=args.telemetry_preset,
        items=args.items,
    )
    settings.apply_telemetry()
    app = NavStateApp(items=settings.items, capacity=settings.history_capacity)
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
