"""
Per-file rewrite protocol.

    Read -> Extracted -> Rendered -> Unchanged
                                  -> BackedUp -> Written
    (any step) -> Failed

plan_rewrite() is the pure part (bytes in, bytes + verdict out).
rewrite_file() is the thin I/O shell: read, backup, atomic replace.

Guarantees:
- a file that would not change is never opened for writing and gets no backup.
- the original is only replaced after its backup is safely on disk.
- the replace goes through a temp file + os.replace, so an interrupted run
  leaves either the old or the new content, never a truncated file.
"""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, Tuple

import deal

from tidyimports.engine.canonical import canonicalize
from tidyimports.engine.classifier import Classifier
from tidyimports.errors import ErrorKind, FileError, FileIOError, TidyImportsError
from tidyimports.infra.result import Err, Ok, Result

from .backup import BackupLocator

logger = logging.getLogger(__name__)

_BOM = b"\xef\xbb\xbf"


class Outcome(str, Enum):
    UNCHANGED = "unchanged"
    REWRITTEN = "rewritten"
    WOULD_REWRITE = "would-rewrite"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class FileReport:
    path: Path
    outcome: Outcome
    reason: Optional[str] = None
    error_kind: Optional[ErrorKind] = None
    backup_path: Optional[Path] = None
    warnings: Tuple[str, ...] = ()

    @property
    def failed(self) -> bool:
        return self.outcome is Outcome.FAILED

    @classmethod
    def failure(cls, path: Path, error: FileError, *, backup_path: Optional[Path] = None) -> "FileReport":
        return cls(
            path=path,
            outcome=Outcome.FAILED,
            reason=error.message,
            error_kind=error.kind,
            backup_path=backup_path,
        )

    def status_line(self) -> str:
        if self.outcome is Outcome.FAILED:
            return f"failed: {self.path}: {self.reason}"
        line = f"{self.outcome.value}: {self.path}"
        if self.backup_path is not None:
            line += f" (backup={self.backup_path})"
        return line


@dataclass(frozen=True, slots=True)
class RewritePlan:
    original: bytes
    final: bytes
    warnings: Tuple[str, ...] = ()

    @property
    def changed(self) -> bool:
        return self.final != self.original


def decode_source(data: bytes) -> Result[Tuple[str, bool], FileError]:
    """bytes -> (text, had_bom). Binary or non UTF-8 content is an Err."""
    if b"\x00" in data:
        return Err(FileError(ErrorKind.ENCODING, "binary content (NUL byte)"))
    had_bom = data.startswith(_BOM)
    body = data[len(_BOM):] if had_bom else data
    try:
        return Ok((body.decode("utf-8"), had_bom))
    except UnicodeDecodeError as exc:
        return Err(FileError(ErrorKind.ENCODING, f"not valid UTF-8 at byte {exc.start}"))


def _plan(original: bytes, decoded: Tuple[str, bool], classifier: Optional[Classifier]) -> RewritePlan:
    text, had_bom = decoded
    result = canonicalize(text, classifier=classifier)
    if not result.changed:
        return RewritePlan(original=original, final=original, warnings=result.warnings)

    final = result.text.encode("utf-8")
    if had_bom:
        final = _BOM + final
    return RewritePlan(original=original, final=final, warnings=result.warnings)


@deal.pre(lambda original, classifier=None: isinstance(original, bytes), message="original must be bytes")
@deal.post(lambda result: isinstance(result, (Ok, Err)), message="plan_rewrite returns a Result")
@deal.raises(deal.PreContractError, deal.RaisesContractError)
def plan_rewrite(original: bytes, classifier: Optional[Classifier] = None) -> Result[RewritePlan, FileError]:
    return decode_source(original).map(lambda decoded: _plan(original, decoded, classifier))


# --- I/O shell ---


def _read_bytes(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as exc:
        raise FileIOError(f"read failed: {exc.strerror or exc}", path=path) from exc


def _atomic_write_bytes(path: Path, data: bytes) -> None:
    target = Path(os.path.realpath(path))
    tmp_fd, tmp_name = tempfile.mkstemp(prefix=target.name + ".", suffix=".tmp", dir=str(target.parent))
    try:
        with os.fdopen(tmp_fd, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        shutil.copymode(str(target), tmp_name)
        os.replace(tmp_name, str(target))
    finally:
        if os.path.exists(tmp_name):
            try:
                os.remove(tmp_name)
            except OSError:
                logger.debug("temp file cleanup suppressed | tmp=%s", tmp_name, exc_info=True)


def rewrite_file(
    path: Path,
    *,
    backups: Optional[BackupLocator] = None,
    dry_run: bool = False,
    classifier: Optional[Classifier] = None,
) -> FileReport:
    """
    Run the full protocol for one file. Never raises for file-level problems:
    every failure comes back as a FAILED report.
    """
    path = Path(path)
    try:
        original = _read_bytes(path)
    except TidyImportsError as exc:
        return FileReport.failure(path, exc.to_file_error())

    planned = plan_rewrite(original, classifier=classifier)
    if planned.is_err():
        logger.info("skipped | path=%s reason=%s", path, planned.error)
        return FileReport.failure(path, planned.error)
    plan = planned.value
    for w in plan.warnings:
        logger.warning("%s | path=%s", w, path)

    if not plan.changed:
        return FileReport(path=path, outcome=Outcome.UNCHANGED, warnings=plan.warnings)
    if dry_run:
        return FileReport(path=path, outcome=Outcome.WOULD_REWRITE, warnings=plan.warnings)

    locator = backups or BackupLocator()
    try:
        backup_path = locator.write_backup(path, plan.original)
    except OSError as exc:
        err = FileIOError(f"backup failed, original untouched: {exc}", path=path)
        return FileReport.failure(path, err.to_file_error())

    try:
        _atomic_write_bytes(path, plan.final)
    except OSError as exc:
        err = FileIOError(f"write failed (backup at {backup_path}): {exc}", path=path)
        logger.error("write failed | path=%s backup=%s", path, backup_path, exc_info=True)
        return FileReport.failure(path, err.to_file_error(), backup_path=backup_path)

    logger.info("rewritten | path=%s backup=%s", path, backup_path)
    return FileReport(path=path, outcome=Outcome.REWRITTEN, backup_path=backup_path, warnings=plan.warnings)

