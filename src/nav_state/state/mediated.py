"""State holder that routes every write through a mediator."""

from __future__ import annotations

import inspect
from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, TypeVar

from nav_state.runtime import telemetry
from nav_state.signals import ChangeBus, next_revision

from .resolve import StateUpdate, resolve_update, strictly_equal

S = TypeVar("S")

Dispatch = Callable[[StateUpdate[S]], None]


@dataclass(frozen=True, slots=True)
class MediatedView(Generic[S]):
    value: S
    revision: int


_POSITIONAL = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)


def _expects_dispatch(mediator: Callable[..., Any]) -> bool:
    try:
        signature = inspect.signature(mediator)
    except (TypeError, ValueError):
        return False
    required = [
        param
        for param in signature.parameters.values()
        if param.kind in _POSITIONAL and param.default is inspect.Parameter.empty
    ]
    return len(required) >= 2


class MediatedState(Generic[S]):
    """A value whose setter is filtered by ``mediator``.

    A one-argument mediator maps the incoming value to the value stored. A
    two-argument mediator receives ``(value, dispatch)`` and stores values by
    calling ``dispatch`` itself, which lets it defer or drop writes. Earlier
    mediations are never cancelled when a new one starts.

    The initial value is stored as-is.
    """

    def __init__(
        self,
        mediator: Callable[..., Any],
        initial_value: Optional[S] = None,
        *,
        logger_name: str | None = None,
    ) -> None:
        self._mediator = mediator
        self._with_dispatch = _expects_dispatch(mediator)
        self._value = initial_value
        self._revision = 0
        self._logger_name = logger_name
        self.changes: ChangeBus[MediatedView[S]] = ChangeBus()

    @property
    def value(self) -> Optional[S]:
        return self._value

    @property
    def revision(self) -> int:
        return self._revision

    def snapshot(self) -> MediatedView[S]:
        return MediatedView(value=self._value, revision=self._revision)

    def set(self, value: Any) -> None:
        if self._with_dispatch:
            self._mediator(value, self.dispatch)
        else:
            self.dispatch(self._mediator(value))

    def dispatch(self, value: StateUpdate[S]) -> None:
        """Store ``value`` (or apply an updater) without mediation."""

        resolved = resolve_update(value, self._value)
        if strictly_equal(resolved, self._value):
            return
        self._value = resolved
        self._revision = next_revision(self._revision)
        telemetry.record_event(
            "mediated.set",
            data={"revision": self._revision},
            logger_name=self._logger_name,
        )
        self.changes.emit(self.snapshot())


__all__ = ["Dispatch", "MediatedState", "MediatedView"]
