"""Undo/redo history buffer."""

from .buffer import DEFAULT_CAPACITY, HistoryBuffer, HistoryView

__all__ = ["DEFAULT_CAPACITY", "HistoryBuffer", "HistoryView"]
