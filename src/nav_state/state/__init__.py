"""State resolution helpers and the mediated state holder."""

from .mediated import Dispatch, MediatedState, MediatedView
from .resolve import (
    StateInit,
    StateUpdate,
    resolve_initial,
    resolve_update,
    strictly_equal,
)

__all__ = [
    "Dispatch",
    "MediatedState",
    "MediatedView",
    "StateInit",
    "StateUpdate",
    "resolve_initial",
    "resolve_update",
    "strictly_equal",
]
