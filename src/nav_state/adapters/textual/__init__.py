"""Textual host adapter; the runnable app lives in ``nav_state.adapters.textual.app``."""

from .controller import NavigatorAdapter, TextualUIHooks

__all__ = ["NavigatorAdapter", "TextualUIHooks"]
