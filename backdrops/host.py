from __future__ import annotations

from typing import Any, Protocol, Sequence

from backdrops.models import Choice


class Window(Protocol):
    def set_config_overrides(self, overrides: dict[str, Any]) -> None: ...


class Picker(Protocol):
    def choose(
        self, window: Window, title: str, choices: Sequence[Choice]
    ) -> str | None: ...


class BackgroundSignal:
    """Single slot holding the path of the active background image.

    The host reads it at any time; only the catalog writes it.
    """

    def __init__(self, value: str | None = None) -> None:
        self._value = value

    def get(self) -> str | None:
        return self._value

    def set(self, value: str | None) -> None:
        self._value = value
