from __future__ import annotations

from pathlib import Path
from typing import Sequence

import pyray as rl

from backdrops.host import Window
from backdrops.models import Choice
from backdrops.ui import (
    FLAG_WINDOW_TOPMOST,
    FLAG_WINDOW_UNDECORATED,
    KEY_DOWN,
    KEY_ENTER,
    KEY_ESCAPE,
    KEY_J,
    KEY_K,
    KEY_KP_ENTER,
    KEY_NULL,
    KEY_Q,
    KEY_UP,
    PANEL_COLOR,
    ROW_SELECTED_COLOR,
    TextureCache,
    center_window,
    clamp,
    draw_choice_row,
    draw_preview,
    lerp,
)

HOLD_REPEAT_DELAY = 0.22
HOLD_REPEAT_INTERVAL = 0.055
ROW_HEIGHT = 28
FONT_SIZE = 18
TITLE_FONT_SIZE = 22
PADDING = 16


class RaylibPicker:
    """Keyboard-driven list picker in its own raylib window.

    Up/Down (or k/j) move, Enter selects, Escape or q dismisses. When the
    highlighted id is an image path its preview is drawn beside the list.
    """

    def __init__(self, width: int = 900, height: int = 520, monitor: int | None = None) -> None:
        self.width = width
        self.height = height
        self.monitor = monitor

    def choose(self, window: Window, title: str, choices: Sequence[Choice]) -> str | None:
        if not choices:
            return None

        rl.set_config_flags(FLAG_WINDOW_UNDECORATED | FLAG_WINDOW_TOPMOST)
        rl.init_window(self.width, self.height, title)
        rl.set_target_fps(60)
        rl.set_exit_key(KEY_NULL)
        monitor = self.monitor if self.monitor is not None else rl.get_current_monitor()
        center_window(self.width, self.height, monitor)

        cache = TextureCache()
        list_top = PADDING * 2 + TITLE_FONT_SIZE
        list_width = self.width * 0.45
        visible_rows = max(1, int((self.height - list_top - PADDING) // ROW_HEIGHT))
        preview_box = rl.Rectangle(
            PADDING * 2 + list_width,
            list_top,
            self.width - list_width - PADDING * 3,
            self.height - list_top - PADDING,
        )

        selected = 0
        scroll = 0.0
        held_direction = 0
        hold_elapsed = 0.0
        repeat_elapsed = 0.0
        result: str | None = None

        try:
            while True:
                frame_time = rl.get_frame_time()
                if rl.window_should_close() or rl.is_key_pressed(KEY_ESCAPE) or rl.is_key_pressed(KEY_Q):
                    break
                if rl.is_key_pressed(KEY_ENTER) or rl.is_key_pressed(KEY_KP_ENTER):
                    result = choices[selected].id
                    break

                down = rl.is_key_down(KEY_DOWN) or rl.is_key_down(KEY_J)
                up = rl.is_key_down(KEY_UP) or rl.is_key_down(KEY_K)
                direction = 0
                if down and not up:
                    direction = 1
                elif up and not down:
                    direction = -1

                step = 0
                if direction == 0:
                    held_direction = 0
                    hold_elapsed = 0.0
                    repeat_elapsed = 0.0
                elif direction != held_direction:
                    held_direction = direction
                    hold_elapsed = 0.0
                    repeat_elapsed = 0.0
                    step = direction
                else:
                    hold_elapsed += frame_time
                    if hold_elapsed >= HOLD_REPEAT_DELAY:
                        repeat_elapsed += frame_time
                        while repeat_elapsed >= HOLD_REPEAT_INTERVAL:
                            step += held_direction
                            repeat_elapsed -= HOLD_REPEAT_INTERVAL

                selected = clamp(selected + step, 0, len(choices) - 1)
                target_scroll = float(clamp(selected - visible_rows // 2, 0, max(0, len(choices) - visible_rows)))
                scroll = lerp(scroll, target_scroll, 0.3)
                if abs(scroll - target_scroll) < 0.01:
                    scroll = target_scroll

                rl.begin_drawing()
                rl.clear_background(PANEL_COLOR)
                rl.draw_text(title, PADDING, PADDING, TITLE_FONT_SIZE, ROW_SELECTED_COLOR)

                first = int(scroll)
                for idx in range(first, min(len(choices), first + visible_rows + 1)):
                    row_y = list_top + (idx - scroll) * ROW_HEIGHT
                    if row_y > self.height - PADDING:
                        break
                    row = rl.Rectangle(PADDING, row_y, list_width, ROW_HEIGHT - 2)
                    draw_choice_row(choices[idx].label, row, FONT_SIZE, idx == selected)

                draw_preview(cache, Path(choices[selected].id), preview_box)
                rl.end_drawing()
        finally:
            cache.clear()
            rl.close_window()

        return result
