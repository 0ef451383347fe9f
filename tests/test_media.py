from __future__ import annotations

from pathlib import Path

from backdrops.media import is_image, list_images, list_subdirectories, scan_backdrops
from conftest import touch


def test_scan_collects_folder_and_top_level_images(backdrops_root: Path) -> None:
    files = scan_backdrops(backdrops_root)
    assert files is not None
    assert set(files) == {
        str(backdrops_root / "nature" / "a.png"),
        str(backdrops_root / "nature" / "b.jpg"),
        str(backdrops_root / "c.gif"),
    }


def test_scan_is_stable_between_calls(backdrops_root: Path) -> None:
    touch(backdrops_root / "abstract" / "z.tga")
    touch(backdrops_root / "abstract" / "m.bmp")
    assert scan_backdrops(backdrops_root) == scan_backdrops(backdrops_root)


def test_scan_skips_non_image_top_level_files(tmp_path: Path) -> None:
    root = tmp_path / "backdrops"
    touch(root / "notes.md")
    touch(root / "wall.jpeg")
    assert scan_backdrops(root) == [str(root / "wall.jpeg")]


def test_scan_only_reads_one_level_into_folders(tmp_path: Path) -> None:
    root = tmp_path / "backdrops"
    touch(root / "city" / "night.png")
    touch(root / "city" / "old" / "day.png")
    assert scan_backdrops(root) == [str(root / "city" / "night.png")]


def test_scan_missing_root_returns_none(tmp_path: Path) -> None:
    assert scan_backdrops(tmp_path / "absent") is None


def test_scan_empty_root_returns_empty_list(tmp_path: Path) -> None:
    root = tmp_path / "backdrops"
    root.mkdir()
    assert scan_backdrops(root) == []


def test_is_image_matches_known_extensions_case_sensitively() -> None:
    for name in ("a.jpg", "a.jpeg", "a.png", "a.gif", "a.bmp", "a.ico", "a.tiff", "a.pnm", "a.dds", "a.tga"):
        assert is_image(Path(name))
    assert not is_image(Path("a.webp"))
    assert not is_image(Path("a.PNG"))
    assert not is_image(Path("png"))


def test_list_images_ignores_folders_named_like_images(tmp_path: Path) -> None:
    (tmp_path / "fake.png").mkdir()
    touch(tmp_path / "real.png")
    assert list_images(tmp_path) == [tmp_path / "real.png"]


def test_list_subdirectories(backdrops_root: Path, tmp_path: Path) -> None:
    assert list_subdirectories(backdrops_root) == [backdrops_root / "nature"]
    assert list_subdirectories(tmp_path / "absent") is None
