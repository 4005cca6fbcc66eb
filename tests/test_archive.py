from __future__ import annotations

from pathlib import PureWindowsPath

import pytest

from desktopmate_installer.errors import InstallerError
from desktopmate_installer.lib.archive import extract_zip, reset_dir, safe_member_path, single_root

from .helpers import write_zip


def test_extract_zip_creates_nested_files(tmp_path):
    archive = write_zip(tmp_path / "a.zip", {"MelonLoader/net6/MelonLoader.dll": b"dll", "version.dll": b"v"})
    dest = tmp_path / "out"

    assert extract_zip(archive, dest) == 2
    assert (dest / "MelonLoader" / "net6" / "MelonLoader.dll").read_bytes() == b"dll"
    assert (dest / "version.dll").read_bytes() == b"v"


def test_extract_zip_never_escapes_destination(tmp_path):
    archive = write_zip(
        tmp_path / "evil.zip",
        {"../../evil.txt": b"x", "/abs/path.txt": b"y", "C:/win/z.txt": b"z", "a\\b.txt": b"w"},
    )
    dest = tmp_path / "deep" / "out"

    extract_zip(archive, dest)

    assert not (tmp_path / "evil.txt").exists()
    assert (dest / "evil.txt").read_bytes() == b"x"
    assert (dest / "abs" / "path.txt").read_bytes() == b"y"
    assert (dest / "win" / "z.txt").read_bytes() == b"z"
    assert (dest / "a" / "b.txt").read_bytes() == b"w"


def test_safe_member_path():
    assert safe_member_path("Mods/../../x.dll").as_posix() == "Mods/x.dll"
    assert safe_member_path("./").parts == ()


def test_single_root(tmp_path):
    wrapped = tmp_path / "wrapped"
    (wrapped / "CustomAvatarLoader" / "Mods").mkdir(parents=True)
    assert single_root(wrapped) == wrapped / "CustomAvatarLoader"

    flat = tmp_path / "flat"
    (flat / "Mods").mkdir(parents=True)
    (flat / "UserLibs").mkdir()
    assert single_root(flat) == flat


def test_reset_dir_clears_previous_contents(tmp_path):
    d = tmp_path / "x"
    (d / "old").mkdir(parents=True)
    reset_dir(d)
    assert d.is_dir() and list(d.iterdir()) == []


def test_drive_relative_members_stay_inside(tmp_path):
    archive = write_zip(tmp_path / "drive.zip", {"C:evil.dll": b"a", "C:dir/x.dll": b"b", "Mods/a:b.dll": b"c"})
    dest = tmp_path / "out"

    assert extract_zip(archive, dest) == 3
    assert (dest / "evil.dll").read_bytes() == b"a"
    assert (dest / "dir" / "x.dll").read_bytes() == b"b"
    assert (dest / "Mods").is_dir()


@pytest.mark.parametrize(
    "name,expected",
    [
        ("C:evil.dll", ("evil.dll",)),
        ("C:dir/x.dll", ("dir", "x.dll")),
        ("d:\\Games\\x.dll", ("Games", "x.dll")),
        ("Mods/file.dll:stream", ("Mods",)),
    ],
)
def test_safe_member_path_drops_drive_prefixes(name, expected):
    rel = safe_member_path(name)
    assert rel.parts == expected
    # Joined onto a Windows root, the result must stay below it.
    root = PureWindowsPath("D:/Games/DesktopMate")
    joined = root.joinpath(*rel.parts)
    assert joined.parents[len(rel.parts) - 1] == root


def test_not_a_zip_is_reported(tmp_path):
    page = tmp_path / "download.zip"
    page.write_text("<html>rate limited</html>", encoding="utf-8")

    with pytest.raises(InstallerError, match="Not a zip archive"):
        extract_zip(page, tmp_path / "out")
