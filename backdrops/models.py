from __future__ import annotations

from dataclasses import dataclass
from typing import Any


IMAGE_EXTENSIONS = (
    "jpg",
    "jpeg",
    "png",
    "gif",
    "bmp",
    "ico",
    "tiff",
    "pnm",
    "dds",
    "tga",
)
GLOB_PATTERN = "*.{" + ",".join(IMAGE_EXTENSIONS) + "}"

DEFAULT_BACKGROUND_COLOR = "#1F1F28"

# Colour layer geometry shared by the normal and focus projections.
OVERLAY_SIZE = "120%"
OVERLAY_OFFSET = "-10%"
OVERLAY_OPACITY = 0.96
FOCUS_OPACITY = 1.0


@dataclass(frozen=True)
class Choice:
    id: str
    label: str


@dataclass(frozen=True)
class BackgroundLayer:
    source_kind: str
    source: str
    width: str | None = None
    height: str | None = None
    vertical_offset: str | None = None
    horizontal_offset: str | None = None
    opacity: float | None = None
    horizontal_align: str | None = None

    def to_override(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"source": {self.source_kind: self.source}}
        for key in (
            "horizontal_align",
            "height",
            "width",
            "vertical_offset",
            "horizontal_offset",
            "opacity",
        ):
            value = getattr(self, key)
            if value is not None:
                payload[key] = value
        return payload


@dataclass(frozen=True)
class VisualOptions:
    layers: tuple[BackgroundLayer, ...] = ()

    def to_overrides(self) -> dict[str, Any]:
        return {"background": [layer.to_override() for layer in self.layers]}


@dataclass(frozen=True)
class CatalogState:
    current_idx: int = 1
    focus_on: bool = False
    focus_color: str | None = None
    background: str | None = None
    browsed: bool = False


def image_layer(path: str) -> BackgroundLayer:
    return BackgroundLayer(source_kind="File", source=path, horizontal_align="Center")


def color_layer(color: str, opacity: float) -> BackgroundLayer:
    return BackgroundLayer(
        source_kind="Color",
        source=color,
        width=OVERLAY_SIZE,
        height=OVERLAY_SIZE,
        vertical_offset=OVERLAY_OFFSET,
        horizontal_offset=OVERLAY_OFFSET,
        opacity=opacity,
    )
