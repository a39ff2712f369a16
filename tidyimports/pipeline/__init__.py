"""
tidyimports.pipeline

I/O shell around the pure engine: per-file rewrite protocol, backups,
file discovery and the parallel driver.
"""

from __future__ import annotations

from .backup import BackupLocator
from .driver import run_parallel
from .rewrite import FileReport, Outcome, RewritePlan, plan_rewrite, rewrite_file
from .runner import RunSummary, process_paths, summarize

__all__ = [
    "BackupLocator",
    "FileReport",
    "Outcome",
    "RewritePlan",
    "RunSummary",
    "plan_rewrite",
    "process_paths",
    "rewrite_file",
    "run_parallel",
    "summarize",
]
