from __future__ import annotations

import logging
from pathlib import Path

from backdrops.models import IMAGE_EXTENSIONS

logger = logging.getLogger(__name__)

IMAGE_SUFFIXES = frozenset(f".{extension}" for extension in IMAGE_EXTENSIONS)


def is_image(path: Path) -> bool:
    # Case-sensitive, like the glob the terminal hands us.
    return path.suffix in IMAGE_SUFFIXES


def _is_dir(path: Path) -> bool:
    try:
        return path.is_dir()
    except OSError:
        return False


def _is_file(path: Path) -> bool:
    try:
        return path.is_file()
    except OSError:
        return False


def list_entries(directory: Path) -> list[Path] | None:
    """Return the immediate entries of ``directory`` in name order.

    ``None`` means the directory is missing or cannot be read.
    """
    try:
        entries = list(directory.iterdir())
    except OSError:
        return None
    return sorted(entries, key=lambda path: path.name)


def list_images(directory: Path) -> list[Path]:
    entries = list_entries(directory)
    if entries is None:
        return []
    return [path for path in entries if _is_file(path) and is_image(path)]


def list_subdirectories(directory: Path) -> list[Path] | None:
    entries = list_entries(directory)
    if entries is None:
        return None
    return [path for path in entries if _is_dir(path)]


def scan_backdrops(root: Path) -> list[str] | None:
    """Collect image paths under ``root`` and its immediate subdirectories.

    Subdirectories contribute the images placed directly inside them; files at
    the root level are kept when they carry an image extension. Returns
    ``None`` when ``root`` cannot be listed.
    """
    entries = list_entries(root)
    if entries is None:
        return None

    files: list[str] = []
    for entry in entries:
        if _is_dir(entry):
            files.extend(str(path) for path in list_images(entry))
        elif is_image(entry):
            files.append(str(entry))
        else:
            logger.debug("Skipping non-image entry: %s", entry)
    return files
