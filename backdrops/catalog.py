from __future__ import annotations

import logging
from pathlib import Path
import random as _random
from typing import Callable, Sequence

from backdrops.host import BackgroundSignal, Picker, Window
from backdrops.media import list_images, list_subdirectories, scan_backdrops
from backdrops.models import (
    DEFAULT_BACKGROUND_COLOR,
    FOCUS_OPACITY,
    OVERLAY_OPACITY,
    CatalogState,
    Choice,
    VisualOptions,
    color_layer,
    image_layer,
)

logger = logging.getLogger(__name__)

# Seeded once per process; a few warm-up draws before the first real pick.
_rng = _random.Random()
for _ in range(3):
    _rng.random()


class Catalog:
    """Backdrop files plus the cursor and focus state that select among them.

    ``current_idx`` is 1-based so it lines up with picker ids. Every
    operation that cannot act (empty catalog, bad index, missing directory)
    logs and leaves the state as it was.
    """

    def __init__(
        self,
        root: Path,
        background_color: str = DEFAULT_BACKGROUND_COLOR,
        signal: BackgroundSignal | None = None,
        path_sep: str | None = None,
        rng: _random.Random | None = None,
    ) -> None:
        self.root = root
        self.background_color = background_color
        self.signal = signal if signal is not None else BackgroundSignal()
        self.path_sep = path_sep if path_sep is not None else "/"
        self.rng = rng if rng is not None else _rng
        self.files: list[str] = []
        self.current_idx = 1
        self.focus_override: str | None = None
        self.focus_on = False
        self.browsed = False
        self.signal.set(None)

    @property
    def background(self) -> str | None:
        return self.signal.get()

    @property
    def focus_color(self) -> str:
        if self.focus_override is not None:
            return self.focus_override
        return self.background_color

    def set_files(self) -> Catalog:
        """Scan the backdrops root. Must run before any other operation."""
        files = scan_backdrops(self.root)
        if files is None:
            logger.info("'backdrops' directory not found: %s", self.root)
            files = []
        self.files = files
        self.current_idx = 1
        self.browsed = False
        self.signal.set(self.files[0] if self.files else None)
        logger.debug("Loaded %d backdrops from %s", len(self.files), self.root)
        return self

    def set_focus(self, focus_color: str) -> Catalog:
        self.focus_override = focus_color
        return self

    def normal_options(self) -> VisualOptions:
        layers = []
        background = self.signal.get()
        if background is not None:
            layers.append(image_layer(background))
        layers.append(color_layer(self.background_color, OVERLAY_OPACITY))
        return VisualOptions(layers=tuple(layers))

    def focus_options(self) -> VisualOptions:
        return VisualOptions(layers=(color_layer(self.focus_color, FOCUS_OPACITY),))

    def _apply(self, window: Window) -> None:
        window.set_config_overrides(self.normal_options().to_overrides())

    def _apply_focus(self, window: Window) -> None:
        window.set_config_overrides(self.focus_options().to_overrides())

    def _select(self, idx: int) -> None:
        self.current_idx = idx
        self.browsed = False
        self.signal.set(self.files[idx - 1])

    def choices(self) -> list[Choice]:
        base = f"{self.root}{self.path_sep}"
        result: list[Choice] = []
        for idx, file in enumerate(self.files, start=1):
            label = file[len(base):] if file.startswith(base) else file
            result.append(Choice(id=str(idx), label=label))
        return result

    def random(self, window: Window | None = None) -> None:
        if not self.files:
            logger.info("No backdrops loaded, nothing to pick from")
            return
        self._select(self.rng.randint(1, len(self.files)))
        if window is not None:
            self._apply(window)

    def cycle_forward(self, window: Window) -> None:
        if not self.files:
            logger.info("No backdrops loaded, nothing to cycle")
            return
        if self.current_idx >= len(self.files):
            self._select(1)
        else:
            self._select(self.current_idx + 1)
        self._apply(window)

    def cycle_back(self, window: Window) -> None:
        if not self.files:
            logger.info("No backdrops loaded, nothing to cycle")
            return
        if self.current_idx <= 1:
            self._select(len(self.files))
        else:
            self._select(self.current_idx - 1)
        self._apply(window)

    def set_img(self, window: Window, idx: int | str) -> None:
        try:
            position = int(idx)
        except (TypeError, ValueError):
            logger.error("Index out of range: %r", idx)
            return
        if position < 1 or position > len(self.files):
            logger.error("Index out of range: %s (have %d backdrops)", position, len(self.files))
            return
        self._select(position)
        self._apply(window)

    def toggle_focus(self, window: Window) -> None:
        if self.focus_on:
            if self.files:
                self.set_img(window, self.current_idx)
            else:
                self._apply(window)
            self.focus_on = False
        else:
            self._apply_focus(window)
            self.focus_on = True

    def set_file_path(self, window: Window, path: str) -> None:
        # Leaves current_idx alone: cycling resumes from the last indexed pick.
        self.signal.set(path)
        self.browsed = True
        self._apply(window)

    def _prompt(
        self,
        window: Window,
        picker: Picker,
        title: str,
        choices: Sequence[Choice],
        on_select: Callable[[str], None],
    ) -> None:
        snapshot = tuple(choices)
        selected = picker.choose(window, title, snapshot)
        if selected is None:
            logger.debug("Picker '%s' dismissed", title)
            return
        if selected not in {choice.id for choice in snapshot}:
            logger.error("Picker returned an unknown choice: %r", selected)
            return
        on_select(selected)

    def pick(self, window: Window, picker: Picker) -> None:
        if not self.files:
            logger.info("No backdrops loaded, nothing to pick from")
            return
        self._prompt(
            window,
            picker,
            "Choose a backdrop",
            self.choices(),
            lambda selected: self.set_img(window, selected),
        )

    def list_directories(self, window: Window, picker: Picker) -> None:
        subdirectories = list_subdirectories(self.root)
        if subdirectories is None:
            logger.info("'backdrops' directory not found: %s", self.root)
            return
        if not subdirectories:
            logger.info("No folders found in: %s", self.root)
            return

        dirs = [Choice(id=path.name, label=path.name) for path in subdirectories]
        self._prompt(
            window,
            picker,
            "Choose a folder",
            dirs,
            lambda selected: self.list_images_in(window, picker, self.root / selected),
        )

    def list_images_in(self, window: Window, picker: Picker, directory: Path) -> None:
        files = list_images(directory)
        if not files:
            logger.info("No images found in: %s", directory)
            return

        choices = [Choice(id=str(path), label=path.name) for path in files]
        self._prompt(
            window,
            picker,
            "Choose an image",
            choices,
            lambda selected: self.set_file_path(window, selected),
        )

    def snapshot(self) -> CatalogState:
        return CatalogState(
            current_idx=self.current_idx,
            focus_on=self.focus_on,
            focus_color=self.focus_override,
            background=self.signal.get(),
            browsed=self.browsed,
        )

    def restore(self, state: CatalogState) -> Catalog:
        """Reinstall a saved cursor on top of a fresh scan.

        An index that no longer fits the scanned files is dropped and the
        scan defaults are kept. The saved slot survives only when it is the
        file at the restored index, or a browsed path that still exists.
        """
        self.focus_override = state.focus_color
        self.focus_on = state.focus_on
        if not 1 <= state.current_idx <= len(self.files):
            logger.info(
                "Saved backdrop index %s no longer fits %d files, keeping defaults",
                state.current_idx,
                len(self.files),
            )
            return self
        self._select(state.current_idx)
        if state.browsed and state.background is not None and Path(state.background).exists():
            self.signal.set(state.background)
            self.browsed = True
        return self
