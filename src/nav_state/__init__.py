"""Stateful navigation containers for UI hosts: undo history and circular cursors."""

__all__ = [
    "adapters",
    "cursor",
    "errors",
    "history",
    "runtime",
    "signals",
    "state",
]

__version__ = "0.1.0"
