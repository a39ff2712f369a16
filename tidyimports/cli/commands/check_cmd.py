from __future__ import annotations

import argparse

from tidyimports.cli.commands._common import add_common_arguments, collect_files, print_reports, resolve_config
from tidyimports.infra.cli_logging import cli_error, cli_print


def register(sub: argparse._SubParsersAction) -> None:
    p = sub.add_parser("check", help="Dry run: report files that would be rewritten, touch nothing.")
    add_common_arguments(p)
    p.set_defaults(_fn=_run)


def _run(args: argparse.Namespace) -> int:
    cfg = resolve_config(args)

    from tidyimports.pipeline.runner import process_paths, summarize

    try:
        files = collect_files(args, cfg)
    except FileNotFoundError as exc:
        cli_error(str(exc))
        return 2
    if not files:
        cli_print(f"tidyimports: no candidate files under {args.path}")
        return 0

    reports = process_paths(files, config=cfg, dry_run=True)
    print_reports(reports, quiet=args.quiet)

    summary = summarize(reports)
    cli_print(summary.line())
    return summary.exit_code(strict=True)
