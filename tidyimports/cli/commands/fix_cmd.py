from __future__ import annotations

import argparse

from tidyimports.cli.commands._common import add_common_arguments, collect_files, print_reports, resolve_config
from tidyimports.infra.cli_logging import cli_error, cli_print


def register(sub: argparse._SubParsersAction) -> None:
    p = sub.add_parser("fix", help="Rewrite files whose import block is not canonical (backups go to a temp dir).")
    add_common_arguments(p)
    p.add_argument("--backup-dir", default=None, help="Parent directory for this run's backups (default: system temp).")
    p.set_defaults(_fn=_run)


def _run(args: argparse.Namespace) -> int:
    cfg = resolve_config(args, backup_dir=args.backup_dir)

    from tidyimports.pipeline.backup import BackupLocator
    from tidyimports.pipeline.runner import process_paths, summarize

    try:
        files = collect_files(args, cfg)
    except FileNotFoundError as exc:
        cli_error(str(exc))
        return 2
    if not files:
        cli_print(f"tidyimports: no candidate files under {args.path}")
        return 0

    backups = BackupLocator(cfg.backup_dir)
    reports = process_paths(files, config=cfg, dry_run=False, backups=backups)
    print_reports(reports, quiet=args.quiet)

    summary = summarize(reports, backup_dir=backups.directory)
    cli_print(summary.line())
    return summary.exit_code()
