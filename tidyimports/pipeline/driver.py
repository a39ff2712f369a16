from __future__ import annotations

import logging
import os
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Callable, Dict, Iterable, List

import deal

from tidyimports.errors import ErrorKind, FileError

from .rewrite import FileReport

logger = logging.getLogger(__name__)

Task = Callable[[Path], FileReport]


def unique_paths(paths: Iterable[Path]) -> List[Path]:
    """Drop duplicates (same real path), keep first-seen order."""
    seen = set()
    out: List[Path] = []
    for p in paths:
        key = os.path.realpath(p)
        if key in seen:
            continue
        seen.add(key)
        out.append(Path(p))
    return out


def _guarded(task: Task, path: Path) -> FileReport:
    try:
        return task(path)
    except Exception as exc:  # one file must never take the run down
        logger.error("task crashed | path=%s", path, exc_info=True)
        return FileReport.failure(path, FileError(ErrorKind.INTERNAL, f"{type(exc).__name__}: {exc}"))


@deal.pre(lambda paths, threads, task: isinstance(threads, int) and threads >= 1, message="threads must be >= 1")
@deal.pre(lambda paths, threads, task: callable(task), message="task must be callable")
@deal.post(lambda result: isinstance(result, list), message="run_parallel returns a list of reports")
@deal.raises(deal.PreContractError, deal.RaisesContractError)
def run_parallel(paths: Iterable[Path], threads: int, task: Task) -> List[FileReport]:
    """
    Fan `task` out over a pool of `threads` workers, one task per distinct
    path. Completion order is irrelevant: reports come back sorted by path.

    Ctrl-C stops scheduling queued files; files already in flight finish their
    backup/write sequence before the interrupt propagates.
    """
    work = unique_paths(paths)
    reports: List[FileReport] = []

    pool = ThreadPoolExecutor(max_workers=threads, thread_name_prefix="tidyimports")
    try:
        futures: Dict[Future, Path] = {pool.submit(_guarded, task, p): p for p in work}
        for fut in as_completed(futures):
            reports.append(fut.result())
    except KeyboardInterrupt:
        logger.warning("interrupted: cancelling queued files, waiting for in-flight ones")
        pool.shutdown(wait=True, cancel_futures=True)
        raise
    finally:
        pool.shutdown(wait=True)

    return sorted(reports, key=lambda r: str(r.path))
