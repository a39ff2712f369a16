"""
Console output for the CLI.

Status lines and the summary go to stdout; problems go to stderr. Paths can
contain characters the console encoding cannot show (cp1252 terminals), so
each line is re-encoded with replacement instead of crashing the report.
"""

from __future__ import annotations

import sys
from typing import Any, Optional, TextIO

PROG = "tidyimports"


def _safe(msg: str, stream: TextIO) -> str:
    enc = getattr(stream, "encoding", None) or "utf-8"
    return msg.encode(enc, errors="replace").decode(enc, errors="replace")


def cli_print(*parts: Any, err: bool = False, flush: bool = False) -> None:
    stream: TextIO = sys.stderr if err else sys.stdout
    msg = " ".join("" if p is None else str(p) for p in parts)
    stream.write(_safe(msg, stream) + "\n")
    if flush:
        stream.flush()


def cli_error(message: str, *, hint: Optional[str] = None) -> None:
    cli_print(f"{PROG}: {message}", err=True, flush=True)
    if hint:
        cli_print(f"{PROG}: HINT - {hint}", err=True, flush=True)
