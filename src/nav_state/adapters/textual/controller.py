"""Host adapter that drives a history buffer and a cursor from key presses."""

from __future__ import annotations

from dataclasses import dataclass
from functools import partial
from typing import Any, Callable, Dict, Generic, List, TypeVar

from nav_state.cursor import CircularCursor, CursorView
from nav_state.errors import NotFoundError
from nav_state.history import HistoryBuffer, HistoryView

T = TypeVar("T")


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_view: Callable[[HistoryView[Any], CursorView[Any]], None]
    update_status: Callable[[str], None] = _noop
    # Optional realtime log callback a host may use to surface debug lines
    log: Callable[[str], None] = _noop


class NavigatorAdapter(Generic[T]):
    """Binds a cursor and its selection history to a key-driven surface.

    Every cursor move is committed into ``history``; travelling through the
    history moves the cursor back onto the recalled item. After each key the
    adapter re-reads both snapshots and pushes them to the host.
    """

    def __init__(
        self,
        history: HistoryBuffer[T],
        cursor: CircularCursor[T],
        hooks: TextualUIHooks,
    ) -> None:
        self.history = history
        self.cursor = cursor
        self.hooks = hooks
        self._syncing = False
        self._closed = False
        self._commands: Dict[str, Callable[[], None]] = {
            "n": cursor.next,
            "RIGHT": cursor.next,
            "p": cursor.prev,
            "LEFT": cursor.prev,
            "u": self.undo,
            "r": self.redo,
            "g": lambda: self._travel(lambda: history.go(0)),
            "G": lambda: self._travel(lambda: history.go(-1)),
        }
        self._unsubscribe: List[Callable[[], None]] = [
            cursor.changes.subscribe(self._on_cursor_change),
        ]
        self._refresh()

    @property
    def closed(self) -> bool:
        return self._closed

    def handle_key(self, key: str) -> bool:
        """Dispatch ``key``; returns whether the adapter consumed it."""

        if self._closed:
            return False
        self._log_state("key ->", key=key)
        command = self._commands.get(key)
        if command is None and key.isdecimal() and key.isascii():
            command = partial(self.cursor.set_index, int(key))
        if command is None:
            return False
        command()
        self._refresh()
        self._log_state("result <-", key=key)
        return True

    def select(self, value: T) -> None:
        """Select ``value`` in the cursor, surfacing misses as a status line."""

        try:
            self.cursor.set_value(value)
        except NotFoundError as exc:
            self.hooks.update_status(str(exc))
        self._refresh()

    def undo(self, amount: int = 1) -> None:
        self._travel(lambda: self.history.back(amount))

    def redo(self, amount: int = 1) -> None:
        self._travel(lambda: self.history.forward(amount))

    def close(self) -> None:
        """Propagate host teardown: detach observers and retire the cursor."""

        if self._closed:
            return
        self._closed = True
        for unsubscribe in self._unsubscribe:
            unsubscribe()
        self._unsubscribe.clear()
        self.cursor.dispose()
        self._log_state("closed")

    def _travel(self, move: Callable[[], None]) -> None:
        before = self.history.position
        move()
        if self.history.position == before:
            self.hooks.update_status("history: at boundary")
            return
        self._syncing = True
        try:
            self.cursor.set_value(self.history.current)
        except NotFoundError as exc:
            self.hooks.update_status(f"history: {exc}")
        finally:
            self._syncing = False
        self.hooks.update_status(
            f"history: {self.history.position + 1}/{len(self.history)}"
        )

    def _on_cursor_change(self, view: CursorView[T]) -> None:
        if self._syncing or view.state is None:
            return
        self.history.commit(view.state)

    def _refresh(self) -> None:
        self.hooks.update_view(self.history.snapshot(), self.cursor.snapshot())

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot: Dict[str, object] = {
            "index": self.cursor.index,
            "state": self.cursor.state,
            "position": self.history.position,
            "history_len": len(self.history),
            "active": self.cursor.active,
        }
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))


__all__ = ["NavigatorAdapter", "TextualUIHooks"]
