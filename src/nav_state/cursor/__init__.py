"""Circular cursor over caller-owned sequences."""

from .circular import CircularCursor, CursorView

__all__ = ["CircularCursor", "CursorView"]
