from __future__ import annotations

from pathlib import Path

import pytest

from tidyimports.infra.config import DEFAULT_EXCLUDE_DIRS
from tidyimports.pipeline.discovery import discover


def _touch(p: Path) -> Path:
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text("import os\n", encoding="utf-8")
    return p


def test_walks_and_prunes_environment_dirs(tmp_path: Path) -> None:
    keep = [_touch(tmp_path / "a.py"), _touch(tmp_path / "pkg" / "b.py"), _touch(tmp_path / "pkg" / "sub" / "c.py")]
    _touch(tmp_path / "venv" / "lib" / "x.py")
    _touch(tmp_path / ".venv" / "y.py")
    _touch(tmp_path / "pkg" / "__pycache__" / "z.py")
    _touch(tmp_path / "notes.txt")

    found = discover(tmp_path, exclude_dirs=DEFAULT_EXCLUDE_DIRS)

    assert found == keep


def test_deterministic_order(tmp_path: Path) -> None:
    for name in ("b.py", "a.py", "c.py"):
        _touch(tmp_path / name)
    assert [p.name for p in discover(tmp_path)] == ["a.py", "b.py", "c.py"]


def test_single_file(tmp_path: Path) -> None:
    f = _touch(tmp_path / "one.py")
    assert discover(f) == [f]


def test_single_file_with_other_extension_is_skipped(tmp_path: Path) -> None:
    f = _touch(tmp_path / "one.txt")
    assert discover(f) == []


def test_custom_extensions(tmp_path: Path) -> None:
    _touch(tmp_path / "a.py")
    stub = _touch(tmp_path / "a.pyi")
    assert discover(tmp_path, extensions=[".pyi"]) == [stub]


def test_missing_target(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        discover(tmp_path / "nope")


def _gitignored_tree(root: Path) -> None:
    (root / ".gitignore").parent.mkdir(parents=True, exist_ok=True)
    (root / ".gitignore").write_text("generated/\nscratch_*.py\n/top_only.py\n", encoding="utf-8")
    _touch(root / "app.py")
    _touch(root / "generated" / "models.py")
    _touch(root / "scratch_1.py")
    _touch(root / "top_only.py")
    _touch(root / "pkg" / "top_only.py")
    (root / "pkg" / ".gitignore").write_text("local.py\n", encoding="utf-8")
    _touch(root / "pkg" / "local.py")
    _touch(root / "pkg" / "mod.py")
    _touch(root / "other" / "local.py")


def test_gitignore_rules_are_respected(tmp_path: Path) -> None:
    _gitignored_tree(tmp_path)

    found = [p.relative_to(tmp_path).as_posix() for p in discover(tmp_path)]

    assert found == ["app.py", "other/local.py", "pkg/mod.py", "pkg/top_only.py"]


def test_gitignore_can_be_turned_off(tmp_path: Path) -> None:
    _gitignored_tree(tmp_path)

    found = [p.relative_to(tmp_path).as_posix() for p in discover(tmp_path, respect_gitignore=False)]

    assert "generated/models.py" in found
    assert "scratch_1.py" in found
    assert "pkg/local.py" in found
    assert len(found) == 8
