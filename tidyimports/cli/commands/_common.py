from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any, Dict, List

from tidyimports.infra.cli_logging import cli_print
from tidyimports.infra.config import ToolConfig, load_config
from tidyimports.infra.logging_std import configure_logging, get_logger, log_kv


_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def positive_int(value: str) -> int:
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}")
    if n < 1:
        raise argparse.ArgumentTypeError(f"must be >= 1, got {n}")
    return n


def log_level_name(value: str) -> str:
    name = value.strip().upper()
    if name not in _LOG_LEVELS:
        raise argparse.ArgumentTypeError(f"expected one of {', '.join(_LOG_LEVELS)}, got {value!r}")
    return name


def add_common_arguments(p: argparse.ArgumentParser) -> None:
    p.add_argument("path", help="File or directory to process.")
    p.add_argument("-t", "--threads", type=positive_int, default=None, help="Worker threads (default 4).")
    p.add_argument("--config", default=None, help="YAML config file (default: ./tidyimports.yml if present).")
    p.add_argument("--log-level", type=log_level_name, default=None, help="Logging level (DEBUG, INFO, WARNING, ...).")
    p.add_argument(
        "--no-gitignore",
        dest="respect_gitignore",
        action="store_false",
        default=None,
        help="Also process files that a .gitignore excludes.",
    )
    p.add_argument("-q", "--quiet", action="store_true", help="Only print changed/failed files and the summary.")


def resolve_config(args: argparse.Namespace, **extra: Any) -> ToolConfig:
    overrides: Dict[str, Any] = {
        "threads": args.threads,
        "log_level": args.log_level,
        "respect_gitignore": args.respect_gitignore,
        **extra,
    }
    cfg = load_config(Path(args.config) if args.config else None, overrides=overrides)
    configure_logging(level=cfg.log_level)
    return cfg


def collect_files(args: argparse.Namespace, cfg: ToolConfig) -> List[Path]:
    # lazy: keep `--help` import-light
    from tidyimports.pipeline.discovery import discover

    files = discover(
        Path(args.path),
        extensions=cfg.extensions,
        exclude_dirs=cfg.exclude_dirs,
        respect_gitignore=cfg.respect_gitignore,
    )
    log_kv(get_logger("tidyimports.cli"), "files collected", path=args.path, files=len(files))
    return files


def print_reports(reports: List[Any], *, quiet: bool) -> None:
    from tidyimports.pipeline.rewrite import Outcome

    for r in reports:
        if quiet and r.outcome is Outcome.UNCHANGED and not r.warnings:
            continue
        cli_print(r.status_line())
        for w in r.warnings:
            cli_print(f"  warning: {w}")
