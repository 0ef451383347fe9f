from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
import sys


BACKDROPS_DIR_NAME = "backdrops"


@dataclass(frozen=True)
class EnvironmentInfo:
    config_dir: Path
    state_dir: Path
    runtime_dir: Path
    platform: str
    wezterm_config_dir: str

    @property
    def is_windows(self) -> bool:
        return self.platform.startswith("win")

    @property
    def path_sep(self) -> str:
        return "\\" if self.is_windows else "/"

    @property
    def backdrops_root(self) -> Path:
        return self.config_dir / BACKDROPS_DIR_NAME


def get_config_dir(explicit: str | None = None) -> Path:
    if explicit:
        return Path(explicit).expanduser()
    wezterm_config_dir = os.environ.get("WEZTERM_CONFIG_DIR", "").strip()
    if wezterm_config_dir:
        return Path(wezterm_config_dir).expanduser()
    xdg_config_home = os.environ.get("XDG_CONFIG_HOME", "").strip()
    if xdg_config_home:
        return Path(xdg_config_home).expanduser() / "wezterm"
    return Path("~/.config/wezterm").expanduser()


def get_state_dir() -> Path:
    xdg_state_home = os.environ.get("XDG_STATE_HOME")
    if xdg_state_home:
        state_dir = Path(xdg_state_home).expanduser()
    else:
        state_dir = Path("~/.local/state").expanduser()
    return state_dir / "backdrops"


def get_runtime_dir() -> Path:
    xdg_runtime_dir = os.environ.get("XDG_RUNTIME_DIR")
    if xdg_runtime_dir:
        path = Path(xdg_runtime_dir)
        if path.exists() and path.is_dir():
            return path
    return Path("/tmp")


def detect_environment(config_dir: str | None = None) -> EnvironmentInfo:
    return EnvironmentInfo(
        config_dir=get_config_dir(config_dir),
        state_dir=get_state_dir(),
        runtime_dir=get_runtime_dir(),
        platform=sys.platform,
        wezterm_config_dir=os.environ.get("WEZTERM_CONFIG_DIR", "").strip(),
    )
