"""Pytest bootstrap and shared fixtures.

The ``pytest`` console script can run with a sys.path that excludes the
repository root. Ensure ``import backdrops`` resolves to the local package.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Sequence

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
PROJECT_ROOT_STR = str(PROJECT_ROOT)

if PROJECT_ROOT_STR not in sys.path:
    sys.path.insert(0, PROJECT_ROOT_STR)

from backdrops.models import Choice  # noqa: E402


class RecordingWindow:
    def __init__(self) -> None:
        self.overrides: list[dict[str, Any]] = []

    def set_config_overrides(self, overrides: dict[str, Any]) -> None:
        self.overrides.append(overrides)

    @property
    def last(self) -> dict[str, Any] | None:
        return self.overrides[-1] if self.overrides else None


class ScriptedPicker:
    """Answers each prompt with the next scripted id (``None`` dismisses)."""

    def __init__(self, *answers: str | None) -> None:
        self.answers = list(answers)
        self.prompts: list[tuple[str, tuple[Choice, ...]]] = []

    def choose(self, window: Any, title: str, choices: Sequence[Choice]) -> str | None:
        self.prompts.append((title, tuple(choices)))
        if not self.answers:
            return None
        return self.answers.pop(0)


def touch(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"")
    return path


@pytest.fixture
def window() -> RecordingWindow:
    return RecordingWindow()


@pytest.fixture
def backdrops_root(tmp_path: Path) -> Path:
    """A backdrops tree with one folder, a stray text file and a top-level image."""
    root = tmp_path / "backdrops"
    touch(root / "nature" / "a.png")
    touch(root / "nature" / "b.jpg")
    touch(root / "nature" / "readme.txt")
    touch(root / "c.gif")
    return root
