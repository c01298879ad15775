"""Environment-driven settings for hosts embedding the containers."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

from nav_state.errors import ConfigurationError

from . import telemetry

ENV_PREFIX = telemetry.ENV_PREFIX
DEFAULT_HISTORY_CAPACITY = 10
DEFAULT_ITEMS = ("first", "second", "third", "fourth", "fifth")


def _env_int(env: Mapping[str, str], key: str, fallback: int) -> int:
    raw = env.get(f"{ENV_PREFIX}{key}")
    if raw is None or not raw.strip():
        return fallback
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationError(
            f"{ENV_PREFIX}{key} must be an integer, got {raw!r}"
        ) from exc


def parse_items(raw: str) -> Tuple[str, ...]:
    """Split a comma separated list, dropping blank entries."""

    return tuple(item.strip() for item in raw.split(",") if item.strip())


@dataclass(frozen=True, slots=True)
class NavSettings:
    history_capacity: int = DEFAULT_HISTORY_CAPACITY
    telemetry_preset: Optional[str] = None
    items: Tuple[str, ...] = DEFAULT_ITEMS

    def __post_init__(self) -> None:
        if self.history_capacity < 1:
            raise ConfigurationError(
                f"Capacity has to be at least 1, got '{self.history_capacity}'",
                capacity=self.history_capacity,
            )

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "NavSettings":
        source = os.environ if env is None else env
        preset = source.get(f"{ENV_PREFIX}TELEMETRY_PRESET") or None
        raw_items = source.get(f"{ENV_PREFIX}ITEMS")
        return cls(
            history_capacity=_env_int(
                source, "HISTORY_CAPACITY", DEFAULT_HISTORY_CAPACITY
            ),
            telemetry_preset=preset,
            items=parse_items(raw_items) if raw_items else DEFAULT_ITEMS,
        )

    def apply_telemetry(self) -> None:
        """Switch telemetry to the configured preset, if one is set."""

        if self.telemetry_preset:
            telemetry.configure(preset=self.telemetry_preset)


__all__ = ["DEFAULT_HISTORY_CAPACITY", "DEFAULT_ITEMS", "NavSettings", "parse_items"]
