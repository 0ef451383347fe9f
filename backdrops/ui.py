from __future__ import annotations

from collections import OrderedDict
from pathlib import Path
from typing import Any, cast

import pyray as rl

from backdrops.media import is_image


def _rl_int(name: str) -> int:
    return cast(int, getattr(rl, name))


FLAG_WINDOW_UNDECORATED = _rl_int("FLAG_WINDOW_UNDECORATED")
FLAG_WINDOW_TOPMOST = _rl_int("FLAG_WINDOW_TOPMOST")
KEY_NULL = _rl_int("KEY_NULL")
KEY_ESCAPE = _rl_int("KEY_ESCAPE")
KEY_Q = _rl_int("KEY_Q")
KEY_UP = _rl_int("KEY_UP")
KEY_K = _rl_int("KEY_K")
KEY_DOWN = _rl_int("KEY_DOWN")
KEY_J = _rl_int("KEY_J")
KEY_ENTER = _rl_int("KEY_ENTER")
KEY_KP_ENTER = _rl_int("KEY_KP_ENTER")

PANEL_COLOR = rl.Color(16, 18, 22, 245)
ROW_COLOR = rl.Color(205, 205, 205, 215)
ROW_SELECTED_COLOR = rl.Color(245, 245, 245, 255)
HIGHLIGHT_COLOR = rl.Color(60, 66, 80, 255)


def clamp(value: int, low: int, high: int) -> int:
    return max(low, min(value, high))


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def center_window(width: int, height: int, monitor: int) -> None:
    monitor_pos = rl.get_monitor_position(monitor)
    monitor_x = int(monitor_pos.x)
    monitor_y = int(monitor_pos.y)
    monitor_width = rl.get_monitor_width(monitor)
    monitor_height = rl.get_monitor_height(monitor)

    x = monitor_x + max(0, (monitor_width - width) // 2)
    y = monitor_y + max(0, (monitor_height - height) // 2)
    rl.set_window_position(x, y)


def fit_texture_rect(texture: Any, box: rl.Rectangle) -> rl.Rectangle:
    if texture.width <= 0 or texture.height <= 0:
        return box

    scale = min(box.width / texture.width, box.height / texture.height)
    width = texture.width * scale
    height = texture.height * scale
    x = box.x + (box.width - width) * 0.5
    y = box.y + (box.height - height) * 0.5
    return rl.Rectangle(x, y, width, height)


class TextureCache:
    def __init__(self, max_items: int = 8) -> None:
        self.max_items = max_items
        self.cache: OrderedDict[str, Any] = OrderedDict()
        self.failed: set[str] = set()

    def get(self, image_path: Path) -> Any | None:
        key = str(image_path)
        if key in self.cache:
            self.cache.move_to_end(key)
            return self.cache[key]
        if key in self.failed or not image_path.exists():
            return None

        texture = cast(Any, rl.load_texture(key))
        if texture.id == 0:
            self.failed.add(key)
            return None

        self.cache[key] = texture
        if len(self.cache) > self.max_items:
            _, oldest = self.cache.popitem(last=False)
            if oldest.id != 0:
                rl.unload_texture(cast(Any, oldest))
        return texture

    def clear(self) -> None:
        for texture in self.cache.values():
            if texture.id != 0:
                rl.unload_texture(cast(Any, texture))
        self.cache.clear()
        self.failed.clear()


def draw_choice_row(label: str, row: rl.Rectangle, font_size: int, selected: bool) -> None:
    if selected:
        rl.draw_rectangle_rounded(row, 0.2, 6, HIGHLIGHT_COLOR)
    color = ROW_SELECTED_COLOR if selected else ROW_COLOR
    text_y = int(row.y + (row.height - font_size) * 0.5)
    rl.draw_text(label, int(row.x + 10), text_y, font_size, color)


def draw_preview(cache: TextureCache, image_path: Path, box: rl.Rectangle) -> None:
    rl.draw_rectangle_rounded(box, 0.04, 8, rl.Color(10, 12, 15, 255))
    if not is_image(image_path):
        return

    texture = cache.get(image_path)
    if texture is None:
        rl.draw_line(
            int(box.x + 10),
            int(box.y + 10),
            int(box.x + box.width - 10),
            int(box.y + box.height - 10),
            rl.Color(180, 180, 180, 200),
        )
        rl.draw_line(
            int(box.x + 10),
            int(box.y + box.height - 10),
            int(box.x + box.width - 10),
            int(box.y + 10),
            rl.Color(180, 180, 180, 200),
        )
        return

    source = rl.Rectangle(0, 0, float(texture.width), float(texture.height))
    destination = fit_texture_rect(texture, box)
    rl.draw_texture_pro(
        cast(Any, texture),
        source,
        destination,
        rl.Vector2(0, 0),
        0.0,
        rl.WHITE,
    )
