"""Circular cursor over a caller-owned sequence."""

from __future__ import annotations

from contextlib import AbstractContextManager
from dataclasses import dataclass
from typing import Generic, Optional, Sequence, TypeVar

from nav_state.errors import NotFoundError
from nav_state.runtime import telemetry
from nav_state.signals import ChangeBus, next_revision

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class CursorView(Generic[T]):
    """Read-only cursor snapshot; ``state`` is None while the items are empty."""

    state: Optional[T]
    index: int
    is_first: bool
    is_last: bool
    length: int
    revision: int


class CircularCursor(AbstractContextManager["CircularCursor[T]"], Generic[T]):
    """Index into ``items`` that wraps around at both ends.

    The cursor never mutates ``items``. The caller may replace the sequence
    (``cursor.items = ...``) or mutate it in place; when it shrinks past the
    index, the index is clamped to the new last element on the next read.

    After ``dispose()`` every mutating call is ignored.
    """

    def __init__(
        self,
        items: Sequence[T] = (),
        *,
        logger_name: str | None = None,
    ) -> None:
        self._items = items
        self._seen_length = len(items)
        self._index = 0
        self._active = True
        self._revision = 0
        self._logger_name = logger_name
        self.changes: ChangeBus[CursorView[T]] = ChangeBus()

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.dispose()
        return False

    @property
    def items(self) -> Sequence[T]:
        return self._items

    @items.setter
    def items(self, items: Sequence[T]) -> None:
        self._items = items

    @property
    def active(self) -> bool:
        return self._active

    @property
    def revision(self) -> int:
        self._reconcile()
        return self._revision

    @property
    def index(self) -> int:
        self._reconcile()
        return self._index

    @property
    def state(self) -> Optional[T]:
        self._reconcile()
        if not self._items:
            return None
        return self._items[self._index]

    @property
    def is_first(self) -> bool:
        self._reconcile()
        return bool(self._items) and self._index == 0

    @property
    def is_last(self) -> bool:
        self._reconcile()
        return bool(self._items) and self._index == len(self._items) - 1

    def snapshot(self) -> CursorView[T]:
        return CursorView(
            state=self.state,
            index=self._index,
            is_first=self.is_first,
            is_last=self.is_last,
            length=len(self._items),
            revision=self._revision,
        )

    def next(self) -> None:
        self.set_index(self.index + 1)

    def prev(self) -> None:
        self.set_index(self.index - 1)

    def set_index(self, index: int) -> None:
        """Move to ``index`` wrapped into range; any sign or magnitude works.

        With five items ``9`` selects index 4 and ``-17`` selects index 3.
        """

        if not self._active:
            return
        self._reconcile()
        length = len(self._items)
        if not length or index == self._index:
            return
        # Python's modulo already yields [0, length) for a positive divisor.
        self._move(index % length)

    def set_value(self, value: T) -> None:
        """Select the first item equal to ``value``.

        Raises ``NotFoundError`` when no item matches; the index is left as is.
        """

        if not self._active:
            return
        self._reconcile()
        # Element-wise scan; str.index would match substrings.
        found = next(
            (position for position, item in enumerate(self._items) if item == value),
            -1,
        )
        if found == -1:
            raise NotFoundError(value)
        self._move(found)

    def dispose(self) -> None:
        """Retire the cursor; later mutations become no-ops."""

        if not self._active:
            return
        self._active = False
        self.changes.clear()
        telemetry.record_event(
            "cursor.dispose",
            data={"index": self._index},
            logger_name=self._logger_name,
        )

    def _move(self, index: int) -> None:
        if index == self._index:
            return
        previous = self._index
        self._index = index
        telemetry.record_event(
            "cursor.move",
            data={"from": previous, "to": index, "length": len(self._items)},
            logger_name=self._logger_name,
        )
        self._notify()

    def _reconcile(self) -> None:
        length = len(self._items)
        if length == self._seen_length:
            return
        self._seen_length = length
        if length > self._index:
            return
        previous = self._index
        self._index = max(length - 1, 0)
        telemetry.record_event(
            "cursor.clamp",
            data={"from": previous, "to": self._index, "length": length},
            logger_name=self._logger_name,
        )
        if self._active:
            self._notify()

    def _notify(self) -> None:
        self._revision = next_revision(self._revision)
        self.changes.emit(self.snapshot())


__all__ = ["CircularCursor", "CursorView"]
