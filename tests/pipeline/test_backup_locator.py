from __future__ import annotations

import tempfile
from pathlib import Path

import pytest

from tidyimports.pipeline.backup import BackupLocator


def test_directory_is_created_lazily(tmp_path: Path) -> None:
    loc = BackupLocator(tmp_path / "bk")
    assert loc.directory is None
    assert not (tmp_path / "bk").exists()

    p = loc.backup_path_for(tmp_path / "a.py")
    assert loc.directory is not None
    assert p.parent == loc.directory
    assert loc.directory.parent == tmp_path / "bk"


def test_same_name_in_different_dirs_never_collides(tmp_path: Path) -> None:
    loc = BackupLocator(tmp_path / "bk")
    a = loc.backup_path_for(tmp_path / "pkg_a" / "__init__.py")
    b = loc.backup_path_for(tmp_path / "pkg_b" / "__init__.py")
    assert a != b
    assert a.name.startswith("__init__.py.")
    assert a.name.endswith(".bak")


def test_path_is_stable_for_one_file(tmp_path: Path) -> None:
    loc = BackupLocator(tmp_path / "bk")
    assert loc.backup_path_for(tmp_path / "x.py") == loc.backup_path_for(tmp_path / "x.py")


def test_each_run_gets_its_own_directory(tmp_path: Path) -> None:
    first = BackupLocator(tmp_path / "bk")
    second = BackupLocator(tmp_path / "bk")
    assert first.backup_path_for(tmp_path / "x.py").parent != second.backup_path_for(tmp_path / "x.py").parent


def test_default_root_is_system_temp(tmp_path: Path) -> None:
    loc = BackupLocator()
    p = loc.write_backup(tmp_path / "x.py", b"data")
    try:
        assert Path(tempfile.gettempdir()).resolve() in p.resolve().parents
        assert p.read_bytes() == b"data"
    finally:
        p.unlink()
        p.parent.rmdir()


def test_write_backup_never_overwrites(tmp_path: Path) -> None:
    loc = BackupLocator(tmp_path / "bk")
    p = loc.write_backup(tmp_path / "x.py", b"v1")
    with pytest.raises(FileExistsError):
        loc.write_backup(tmp_path / "x.py", b"v2")
    assert p.read_bytes() == b"v1"
