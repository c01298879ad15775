"""Observer plumbing shared by the navigation containers."""

from __future__ import annotations

from typing import Callable, Generic, List, TypeVar

P = TypeVar("P")

REVISION_MODULUS = 1_000_000


def next_revision(revision: int) -> int:
    """Advance a rolling render revision; wraps so it never grows unbounded."""

    return (revision + 1) % REVISION_MODULUS


class ChangeBus(Generic[P]):
    """Minimal synchronous bus; observers run in subscription order."""

    def __init__(self) -> None:
        self._subscribers: List[Callable[[P], None]] = []

    def __len__(self) -> int:
        return len(self._subscribers)

    def subscribe(self, callback: Callable[[P], None]) -> Callable[[], None]:
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def emit(self, payload: P) -> None:
        # Snapshot so observers may unsubscribe while being notified.
        for callback in tuple(self._subscribers):
            callback(payload)

    def clear(self) -> None:
        self._subscribers.clear()


__all__ = ["ChangeBus", "REVISION_MODULUS", "next_revision"]
