from __future__ import annotations

import argparse
from typing import Optional, Sequence

from tidyimports import __version__
from tidyimports.cli.commands import check_cmd, fix_cmd
from tidyimports.infra.cli_logging import cli_error


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="tidyimports",
        description="Group and sort the leading import block of Python files (fix, check).",
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = p.add_subparsers(dest="command", required=True)

    fix_cmd.register(sub)
    check_cmd.register(sub)

    return p


def suggest_fix(exc: BaseException) -> Optional[str]:
    if isinstance(exc, PermissionError):
        return "check file permissions or run against a copy"
    if isinstance(exc, FileNotFoundError):
        return "the path does not exist; pass an existing file or directory"
    if isinstance(exc, (IsADirectoryError, NotADirectoryError)):
        return "pass a single file or a directory root"
    return None


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    fn = getattr(args, "_fn", None)
    if fn is None:
        parser.print_help()
        return 2

    try:
        rc = fn(args)
        if rc is None:
            return 0
        if isinstance(rc, bool):
            return 0 if rc else 1
        if isinstance(rc, int):
            return rc
        return 0

    except KeyboardInterrupt:
        cli_error("CANCELLED (KeyboardInterrupt)")
        return 130

    except Exception as e:
        cli_error(f"ERROR - {type(e).__name__}: {e}", hint=suggest_fix(e))
        return 3
