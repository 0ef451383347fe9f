from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Callable

from backdrops.catalog import Catalog
from backdrops.env import EnvironmentInfo, detect_environment
from backdrops.host import Picker
from backdrops.models import DEFAULT_BACKGROUND_COLOR, CatalogState
from backdrops.picker import make_picker
from backdrops.window import OverridesFileWindow

logger = logging.getLogger(__name__)

STATE_FILE_NAME = "state.json"
OVERRIDES_FILE_NAME = "overrides.json"


def get_lock_path(env: EnvironmentInfo) -> Path:
    lock_name = f"backdrops-{os.getuid()}.lock"
    return env.runtime_dir / lock_name


def acquire_single_instance_lock(lock_path: Path) -> Any | None:
    import fcntl

    try:
        lock_path.parent.mkdir(parents=True, exist_ok=True)
        lock_file = open(lock_path, "w", encoding="utf-8")
    except OSError:
        return None

    try:
        fcntl.flock(lock_file.fileno(), fcntl.LOCK_EX | fcntl.LOCK_NB)
    except OSError:
        lock_file.close()
        return None

    try:
        lock_file.seek(0)
        lock_file.truncate()
        lock_file.write(f"{os.getpid()}\n")
        lock_file.flush()
    except OSError:
        pass

    return lock_file


def save_state(path: Path, state: CatalogState) -> None:
    payload = {
        "current_idx": state.current_idx,
        "focus_on": state.focus_on,
        "focus_color": state.focus_color,
        "background": state.background,
        "browsed": state.browsed,
    }

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        logger.error("Could not save state to %s: %s", path, exc)


def load_state(path: Path) -> CatalogState | None:
    if not path.exists():
        return None

    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError):
        logger.info("Ignoring unreadable state file: %s", path)
        return None
    if not isinstance(payload, dict):
        return None

    current_idx = payload.get("current_idx")
    focus_on = payload.get("focus_on")
    focus_color = payload.get("focus_color")
    background = payload.get("background")
    browsed = payload.get("browsed")
    if not isinstance(current_idx, int) or isinstance(current_idx, bool):
        return None
    if not isinstance(focus_on, bool):
        focus_on = False
    if not isinstance(focus_color, str) or not focus_color:
        focus_color = None
    if not isinstance(background, str):
        background = None
    if not isinstance(browsed, bool):
        browsed = False

    return CatalogState(
        current_idx=current_idx,
        focus_on=focus_on,
        focus_color=focus_color,
        background=background,
        browsed=browsed,
    )


class Session:
    """One CLI invocation: a scanned catalog with its saved cursor restored."""

    def __init__(self, args: Any) -> None:
        self.env = detect_environment(getattr(args, "config_dir", None))
        state_file = getattr(args, "state_file", None)
        overrides_file = getattr(args, "overrides_file", None)
        self.state_path = (
            Path(state_file).expanduser() if state_file else self.env.state_dir / STATE_FILE_NAME
        )
        self.window = OverridesFileWindow(
            Path(overrides_file).expanduser()
            if overrides_file
            else self.env.state_dir / OVERRIDES_FILE_NAME
        )
        self.catalog = Catalog(
            self.env.backdrops_root,
            background_color=getattr(args, "background_color", None) or DEFAULT_BACKGROUND_COLOR,
            path_sep=self.env.path_sep,
        ).set_files()

        saved = load_state(self.state_path)
        if saved is not None:
            self.catalog.restore(saved)
        focus_color = getattr(args, "focus_color", None)
        if focus_color:
            self.catalog.set_focus(focus_color)

    def save(self) -> None:
        save_state(self.state_path, self.catalog.snapshot())


def _run(args: Any, action: Callable[[Session], int]) -> int:
    session = Session(args)
    status = action(session)
    session.save()
    return status


def _require_files(session: Session) -> bool:
    if session.catalog.files:
        return True
    print(f"backdrops: no images found under {session.catalog.root}")
    return False


def run_random(args: Any) -> int:
    def action(session: Session) -> int:
        if not _require_files(session):
            return 1
        session.catalog.random(session.window)
        print(session.catalog.background)
        return 0

    return _run(args, action)


def run_cycle(args: Any) -> int:
    def action(session: Session) -> int:
        if not _require_files(session):
            return 1
        if args.command == "prev":
            session.catalog.cycle_back(session.window)
        else:
            session.catalog.cycle_forward(session.window)
        print(session.catalog.background)
        return 0

    return _run(args, action)


def run_set(args: Any) -> int:
    def action(session: Session) -> int:
        session.catalog.set_img(session.window, args.index)
        if session.window.last_overrides is None:
            print(f"backdrops: index {args.index} is out of range (1-{len(session.catalog.files)})")
            return 1
        print(session.catalog.background)
        return 0

    return _run(args, action)


def run_focus(args: Any) -> int:
    def action(session: Session) -> int:
        session.catalog.toggle_focus(session.window)
        print("focus on" if session.catalog.focus_on else "focus off")
        return 0

    return _run(args, action)


def run_choices(args: Any) -> int:
    session = Session(args)
    for choice in session.catalog.choices():
        print(f"{choice.id}\t{choice.label}")
    return 0


def run_current(args: Any) -> int:
    session = Session(args)
    background = session.catalog.background
    if background is None:
        print("backdrops: no background selected")
        return 1
    print(background)
    return 0


def _run_interactive(args: Any, action: Callable[[Session, Picker], None]) -> int:
    env = detect_environment(getattr(args, "config_dir", None))
    lock_handle = acquire_single_instance_lock(get_lock_path(env))
    if lock_handle is None:
        print("backdrops: another picker is already open")
        return 1

    try:
        session = Session(args)
        picker = make_picker(gui=not args.no_gui)
        action(session, picker)
        session.save()
        if session.window.last_overrides is not None:
            print(session.catalog.background)
        return 0
    finally:
        try:
            lock_handle.close()
        except OSError:
            pass


def run_pick(args: Any) -> int:
    return _run_interactive(args, lambda session, picker: session.catalog.pick(session.window, picker))


def run_browse(args: Any) -> int:
    return _run_interactive(
        args, lambda session, picker: session.catalog.list_directories(session.window, picker)
    )


def run_diagnose(args: Any) -> int:
    session = Session(args)
    print(build_diagnostics(session))
    return 0


def build_diagnostics(session: Session) -> str:
    env = session.env
    catalog = session.catalog
    lines: list[str] = []
    lines.append("Environment:")
    lines.append(f"  platform: {env.platform}")
    lines.append(f"  WEZTERM_CONFIG_DIR: {env.wezterm_config_dir or '-'}")
    lines.append(f"  config_dir: {env.config_dir}")
    lines.append(f"  backdrops_root: {env.backdrops_root}")
    lines.append(f"  state_file: {session.state_path}")
    lines.append(f"  overrides_file: {session.window.path}")
    lines.append("")
    lines.append("Catalog:")
    lines.append(f"  files: {len(catalog.files)}")
    lines.append(f"  current_idx: {catalog.current_idx if catalog.files else '-'}")
    lines.append(f"  background: {catalog.background or '-'}")
    lines.append(f"  focus: {'on' if catalog.focus_on else 'off'} ({catalog.focus_color})")
    lines.append("")
    lines.append("Last overrides:")
    overrides = session.window.load()
    layers = overrides.get("background") if overrides else None
    if not isinstance(layers, list) or not layers:
        lines.append("  (none written)")
    else:
        for layer in layers:
            source = layer.get("source", {}) if isinstance(layer, dict) else {}
            for kind, value in source.items():
                lines.append(f"  {kind}: {value}")
    return "\n".join(lines)
