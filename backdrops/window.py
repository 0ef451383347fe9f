from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class OverridesFileWindow:
    """Window stand-in that publishes config overrides as a JSON file.

    A terminal config can load the file and pass it on to its own
    ``set_config_overrides``.
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        self.last_overrides: dict[str, Any] | None = None

    def set_config_overrides(self, overrides: dict[str, Any]) -> None:
        self.last_overrides = overrides
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(overrides, indent=2) + "\n", encoding="utf-8")
        except OSError as exc:
            logger.error("Could not write overrides to %s: %s", self.path, exc)

    def load(self) -> dict[str, Any] | None:
        if not self.path.exists():
            return None
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError):
            return None
        if not isinstance(payload, dict):
            return None
        return payload
