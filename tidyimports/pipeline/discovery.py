from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple

import pathspec

from tidyimports.infra.logging_std import log_kv

logger = logging.getLogger(__name__)

GITIGNORE = ".gitignore"


def has_extension(path: Path, extensions: Sequence[str]) -> bool:
    return path.suffix in extensions


def load_gitignore(directory: Path) -> Optional[pathspec.PathSpec]:
    """Parse `<directory>/.gitignore`; None when absent or unreadable."""
    path = directory / GITIGNORE
    if not path.is_file():
        return None
    try:
        with path.open("r", encoding="utf-8", errors="replace") as f:
            return pathspec.GitIgnoreSpec.from_lines(f)
    except OSError as exc:
        log_kv(logger, "gitignore unreadable, ignored", level=logging.WARNING, path=str(path), error=str(exc))
        return None


class IgnoreRules:
    """
    Stack of .gitignore specs collected while walking down a tree.
    Each spec matches paths relative to the directory that holds it.
    """

    def __init__(self) -> None:
        self._specs: List[Tuple[Path, pathspec.PathSpec]] = []

    def add(self, base: Path, spec: pathspec.PathSpec) -> None:
        self._specs.append((base, spec))

    def ignored(self, path: Path, *, is_dir: bool = False) -> bool:
        for base, spec in self._specs:
            try:
                rel = path.relative_to(base)
            except ValueError:
                continue
            key = rel.as_posix() + ("/" if is_dir else "")
            if spec.match_file(key):
                return True
        return False


def discover(
    target: Path,
    *,
    extensions: Sequence[str] = (".py",),
    exclude_dirs: Iterable[str] = (),
    respect_gitignore: bool = True,
) -> List[Path]:
    """
    Candidate files under `target`, sorted.

    - a file is returned as-is when its extension matches, otherwise skipped.
    - directories are walked recursively without following symlinked dirs;
      any directory whose name is in `exclude_dirs` is pruned.
    - with `respect_gitignore`, every .gitignore met on the way down prunes
      the files and directories it matches.
    - a missing target raises FileNotFoundError.
    """
    target = Path(target)
    if not target.exists():
        raise FileNotFoundError(f"no such file or directory: {target}")

    if target.is_file():
        if has_extension(target, extensions):
            return [target]
        logger.info("not a candidate file, skipped | path=%s", target)
        return []

    excluded = frozenset(exclude_dirs)
    rules = IgnoreRules()
    found: List[Path] = []
    skipped = 0
    for root, dirs, files in os.walk(target):
        here = Path(root)
        if respect_gitignore:
            spec = load_gitignore(here)
            if spec is not None:
                rules.add(here, spec)

        kept_dirs = []
        for d in sorted(dirs):
            if d in excluded:
                continue
            if respect_gitignore and rules.ignored(here / d, is_dir=True):
                skipped += 1
                continue
            kept_dirs.append(d)
        dirs[:] = kept_dirs

        for name in sorted(files):
            p = here / name
            if not has_extension(p, extensions) or not p.is_file():
                continue
            if respect_gitignore and rules.ignored(p):
                skipped += 1
                continue
            found.append(p)
    log_kv(logger, "discovered", level=logging.DEBUG, root=str(target), files=len(found), gitignored=skipped)
    return found
