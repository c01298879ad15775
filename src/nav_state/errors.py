"""Error types raised by the navigation containers."""

from __future__ import annotations

from typing import Any


class NavStateError(RuntimeError):
    """Base class for errors raised by nav_state containers."""


class ConfigurationError(NavStateError, ValueError):
    """Raised when a container is built with invalid settings."""

    def __init__(self, message: str, *, capacity: int | None = None) -> None:
        super().__init__(message)
        self.capacity = capacity


class NotFoundError(NavStateError, LookupError):
    """Raised when a requested value is absent from the cursor's items."""

    def __init__(self, value: Any) -> None:
        super().__init__(
            f"State {value!r} is not a valid state (does not exist in state list)"
        )
        self.value = value


__all__ = ["NavStateError", "ConfigurationError", "NotFoundError"]
