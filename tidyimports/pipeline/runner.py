from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import partial
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence

from tidyimports.engine.classifier import Classifier
from tidyimports.infra.config import ToolConfig
from tidyimports.infra.logging_std import log_kv

from .backup import BackupLocator
from .driver import run_parallel
from .rewrite import FileReport, Outcome, rewrite_file

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RunSummary:
    total: int
    counts: Dict[Outcome, int]
    backup_dir: Optional[Path] = None

    @property
    def failed(self) -> int:
        return self.counts.get(Outcome.FAILED, 0)

    @property
    def changed(self) -> int:
        return self.counts.get(Outcome.REWRITTEN, 0) + self.counts.get(Outcome.WOULD_REWRITE, 0)

    def exit_code(self, *, strict: bool = False) -> int:
        """0 ok, 1 if any file failed (or, when strict, any file would change)."""
        if self.failed:
            return 1
        if strict and self.changed:
            return 1
        return 0

    def line(self) -> str:
        parts = [f"{o.value}={self.counts.get(o, 0)}" for o in Outcome if self.counts.get(o, 0)]
        text = f"summary: files={self.total} " + " ".join(parts)
        if self.backup_dir is not None:
            text += f" backups={self.backup_dir}"
        return text.rstrip()


def summarize(reports: Sequence[FileReport], *, backup_dir: Optional[Path] = None) -> RunSummary:
    counts: Dict[Outcome, int] = {}
    for r in reports:
        counts[r.outcome] = counts.get(r.outcome, 0) + 1
    return RunSummary(total=len(reports), counts=counts, backup_dir=backup_dir)


def build_classifier(config: ToolConfig) -> Classifier:
    return Classifier(extra_stdlib=config.extra_stdlib, known_local=config.known_local)


def process_paths(
    paths: Iterable[Path],
    *,
    config: ToolConfig,
    dry_run: bool = False,
    backups: Optional[BackupLocator] = None,
) -> List[FileReport]:
    """Run the rewrite protocol over `paths` with `config.threads` workers."""
    locator = backups or BackupLocator(config.backup_dir)
    task = partial(
        rewrite_file,
        backups=locator,
        dry_run=dry_run,
        classifier=build_classifier(config),
    )
    reports = run_parallel(list(paths), config.threads, task)
    log_kv(
        logger,
        "run finished",
        files=len(reports),
        dry_run=dry_run,
        threads=config.threads,
        backup_dir=str(locator.directory) if locator.directory else None,
    )
    return reports
