"""Bounded undo/redo history with a movable position."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Iterable, List, Tuple, TypeVar

from nav_state.errors import ConfigurationError
from nav_state.runtime import telemetry
from nav_state.signals import ChangeBus, next_revision
from nav_state.state import (
    StateInit,
    StateUpdate,
    resolve_initial,
    resolve_update,
    strictly_equal,
)

S = TypeVar("S")

DEFAULT_CAPACITY = 10


@dataclass(frozen=True, slots=True)
class HistoryView(Generic[S]):
    """Read-only snapshot handed to observers after every change."""

    current: S
    history: Tuple[S, ...]
    position: int
    capacity: int
    revision: int

    @property
    def can_back(self) -> bool:
        return self.position > 0

    @property
    def can_forward(self) -> bool:
        return self.position < len(self.history) - 1


class HistoryBuffer(Generic[S]):
    """Linear undo/redo history holding at most ``capacity`` values.

    ``commit`` appends a value after the current position, discarding any redo
    branch, and evicts the oldest entries once the history outgrows
    ``capacity``. ``back``, ``forward`` and ``go`` only move the position;
    they never evict.

    There is no teardown guard: callers must stop using a buffer once its
    owning scope is gone.
    """

    def __init__(
        self,
        initial_value: StateInit[S],
        capacity: int = DEFAULT_CAPACITY,
        initial_history: Iterable[S] = (),
        *,
        logger_name: str | None = None,
    ) -> None:
        if capacity < 1:
            raise ConfigurationError(
                f"Capacity has to be at least 1, got '{capacity}'",
                capacity=capacity,
            )
        self._capacity = capacity
        self._logger_name = logger_name
        self._revision = 0
        self.changes: ChangeBus[HistoryView[S]] = ChangeBus()

        value = resolve_initial(initial_value)
        history: List[S] = list(initial_history)
        if history:
            if not strictly_equal(history[-1], value):
                history.append(value)
            if len(history) > capacity:
                history = history[-capacity:]
        else:
            history.append(value)
        self._history = history
        self._position = len(history) - 1

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def current(self) -> S:
        return self._history[self._position]

    @property
    def position(self) -> int:
        return self._position

    @property
    def history(self) -> Tuple[S, ...]:
        return tuple(self._history)

    @property
    def revision(self) -> int:
        return self._revision

    @property
    def can_back(self) -> bool:
        return self._position > 0

    @property
    def can_forward(self) -> bool:
        return self._position < len(self._history) - 1

    def __len__(self) -> int:
        return len(self._history)

    def snapshot(self) -> HistoryView[S]:
        return HistoryView(
            current=self.current,
            history=self.history,
            position=self._position,
            capacity=self._capacity,
            revision=self._revision,
        )

    def commit(self, value: StateUpdate[S]) -> S:
        """Record ``value`` (or the result of an updater) as the new current.

        Returns the current value afterwards. Committing a value strictly
        equal to the current one changes nothing.
        """

        current = self.current
        resolved = resolve_update(value, current)
        if strictly_equal(resolved, current):
            return current

        with telemetry.span(
            "history::commit",
            logger_name=self._logger_name,
            component="history",
            metadata={"position": self._position, "length": len(self._history)},
        ) as handle:
            if self.can_forward:
                handle.add_metadata(
                    "truncated", len(self._history) - self._position - 1
                )
                del self._history[self._position + 1 :]

            self._history.append(resolved)
            evicted = len(self._history) - self._capacity
            if evicted > 0:
                del self._history[:evicted]
                telemetry.record_event(
                    "history.evict",
                    data={"count": evicted, "capacity": self._capacity},
                    logger_name=self._logger_name,
                )
            # The committed value is always kept, so it is always last.
            self._position = len(self._history) - 1

        telemetry.record_event(
            "history.commit",
            data={"position": self._position, "length": len(self._history)},
            logger_name=self._logger_name,
        )
        self._notify()
        return resolved

    def back(self, amount: int = 1) -> None:
        if self._position == 0:
            return
        self._travel(self._position - amount)

    def forward(self, amount: int = 1) -> None:
        if self._position == len(self._history) - 1:
            return
        self._travel(self._position + amount)

    def go(self, position: int) -> None:
        """Jump to ``position``; negative values count from the end."""

        if position == self._position:
            return
        if position < 0:
            self._travel(len(self._history) + position)
        else:
            self._travel(position)

    def _travel(self, target: int) -> None:
        target = max(0, min(target, len(self._history) - 1))
        if target == self._position:
            return
        previous = self._position
        self._position = target
        telemetry.record_event(
            "history.travel",
            data={"from": previous, "to": target},
            logger_name=self._logger_name,
        )
        self._notify()

    def _notify(self) -> None:
        self._revision = next_revision(self._revision)
        self.changes.emit(self.snapshot())


__all__ = ["DEFAULT_CAPACITY", "HistoryBuffer", "HistoryView"]
