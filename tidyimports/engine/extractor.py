"""
Import region extractor.

Splits a document into (prefix, import statements, suffix):

- prefix:  file header before the first import (shebang, encoding cookie,
           comments, blank lines, module docstring).
- region:  contiguous import statements plus the blank / comment-only
           separator lines between them.
- suffix:  everything after the last statement of the region, verbatim.

Only the leading region is considered. The first line of ordinary code ends
it, even if imports show up again further down.

Lines are split on "\\n" only and keep their terminators, so untouched parts
are reproduced byte for byte (CRLF included).
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import deal

from .statements import Document, ImportKind, ImportStatement

logger = logging.getLogger(__name__)

_LINE_RE = re.compile(r"[^\n]*\n|[^\n]+\Z")

# cheap pre-filter: could this physical line start an import statement?
_CANDIDATE_RE = re.compile(r"^(?:import|from)(?=[\s\\(.])")

_IMPORT_RE = re.compile(r"^import\s+(?P<module>[^\W\d][\w.]*)")
_FROM_RE = re.compile(
    r"^from(?:\s+|(?=\.))(?P<module>\.+(?:[^\W\d][\w.]*)?|[^\W\d][\w.]*)(?:\s+|(?<=\.))import(?=[\s\\(*]|$)"
)

_DOCSTRING_OPEN_RE = re.compile(r"^(?:[rRuUbBfF]{0,2})(?P<quote>\"\"\"|''')")
_ONE_LINE_STRING_RE = re.compile(r"""^(?:[rRuU]?)(?:"[^"\\]*(?:\\.[^"\\]*)*"|'[^'\\]*(?:\\.[^'\\]*)*')\s*(?:#.*)?$""")

_OPENERS = "([{"
_CLOSERS = ")]}"


def split_lines(text: str) -> List[str]:
    """Split on "\\n" keeping terminators; "".join(result) == text."""
    return _LINE_RE.findall(text)


def detect_newline(lines: Sequence[str]) -> str:
    for line in lines:
        if line.endswith("\r\n"):
            return "\r\n"
        if line.endswith("\n"):
            return "\n"
    return "\n"


def _strip_terminator(line: str) -> str:
    if line.endswith("\r\n"):
        return line[:-2]
    if line.endswith("\n"):
        return line[:-1]
    return line


def _is_separator(line: str) -> bool:
    stripped = line.strip()
    return not stripped or stripped.startswith("#")


@dataclass(frozen=True, slots=True)
class _LineScan:
    depth_delta: int
    semicolon: bool
    continued: bool


def _scan_line(line: str) -> _LineScan:
    """
    Bracket balance, top-level `;` and trailing-backslash detection for one
    physical line. Comments and string literals are skipped.
    """
    body = _strip_terminator(line)
    depth = 0
    semicolon = False
    quote: Optional[str] = None
    i = 0
    n = len(body)
    while i < n:
        ch = body[i]
        if quote is not None:
            if ch == "\\":
                i += 2
                continue
            if body.startswith(quote, i):
                i += len(quote)
                quote = None
                continue
            i += 1
            continue
        if ch == "#":
            return _LineScan(depth, semicolon, False)
        if ch in "\"'":
            triple = body[i:i + 3]
            quote = triple if triple in ('"""', "'''") else ch
            i += len(quote)
            continue
        if ch in _OPENERS:
            depth += 1
        elif ch in _CLOSERS:
            depth -= 1
        elif ch == ";":
            semicolon = True
        i += 1
    return _LineScan(depth, semicolon, quote is None and body.endswith("\\"))


def _header_end(lines: Sequence[str]) -> int:
    """
    Index of the first line after the file header.

    Header = leading blank/comment lines (shebang, encoding cookie included)
    and at most one module docstring.
    """
    i = 0
    n = len(lines)
    while i < n and _is_separator(lines[i]):
        i += 1
    if i >= n:
        return i

    head = lines[i].lstrip()
    m = _DOCSTRING_OPEN_RE.match(head)
    if m:
        quote = m.group("quote")
        rest = head[m.end():]
        if quote in rest:
            return i + 1
        j = i + 1
        while j < n and quote not in lines[j]:
            j += 1
        # unterminated docstring: the whole file is header, nothing to reorganize
        return min(j + 1, n)
    if _ONE_LINE_STRING_RE.match(head.rstrip("\r\n")):
        return i + 1
    return i


def _logical_text(physical: Sequence[str]) -> str:
    parts: List[str] = []
    for line in physical:
        body = _strip_terminator(line)
        if body.endswith("\\"):
            body = body[:-1]
        parts.append(body)
    return " ".join(parts).strip()


def _read_statement(lines: Sequence[str], start: int) -> Optional[Tuple[ImportStatement, int]]:
    """
    Try to read one import statement starting at `start`.

    Returns (statement, next_index) or None when the line is ordinary code.
    Unbalanced brackets / a dangling backslash at EOF absorb the remainder of
    the file into the statement (best effort, never raises).
    """
    if not _CANDIDATE_RE.match(lines[start].lstrip()):
        return None

    physical: List[str] = []
    depth = 0
    unterminated = False
    j = start
    n = len(lines)
    while True:
        scan = _scan_line(lines[j])
        if scan.semicolon:
            return None
        depth += scan.depth_delta
        physical.append(lines[j])
        j += 1
        if depth <= 0 and not scan.continued:
            break
        if j >= n:
            unterminated = True
            break

    logical = _logical_text(physical)
    m = _FROM_RE.match(logical)
    if m:
        kind = ImportKind.FROM_IMPORT
    else:
        m = _IMPORT_RE.match(logical)
        if not m:
            return None
        kind = ImportKind.IMPORT

    if unterminated:
        logger.debug(
            "unterminated import statement absorbed the rest of the file | module=%r line=%d",
            m.group("module"),
            start + 1,
        )

    raw_text = _strip_terminator("".join(physical))
    stmt = ImportStatement(
        raw_text=raw_text,
        kind=kind,
        module_path=m.group("module"),
        unterminated=unterminated,
    )
    return stmt, j


@deal.pre(lambda text: isinstance(text, str), message="text must be str")
@deal.post(lambda result: isinstance(result, Document), message="returns Document")
@deal.ensure(lambda text, result: result.original_text() == text, message="document must reconstruct the input")
@deal.raises(deal.PreContractError, deal.RaisesContractError)
def extract(text: str) -> Document:
    lines = split_lines(text)
    newline = detect_newline(lines)

    statements: List[ImportStatement] = []
    comments: List[str] = []
    pending: List[str] = []
    first: Optional[int] = None
    region_end = 0

    i = _header_end(lines)
    n = len(lines)
    while i < n:
        if _is_separator(lines[i]):
            if first is not None and lines[i].strip():
                pending.append(_strip_terminator(lines[i]).strip())
            i += 1
            continue
        parsed = _read_statement(lines, i)
        if parsed is None:
            break
        stmt, nxt = parsed
        if first is None:
            first = i
        statements.append(stmt)
        comments.extend(pending)
        pending.clear()
        region_end = nxt
        i = nxt

    if first is None:
        return Document(prefix=(), region=(), statements=(), suffix=tuple(lines), newline=newline)

    return Document(
        prefix=tuple(lines[:first]),
        region=tuple(lines[first:region_end]),
        statements=tuple(statements),
        suffix=tuple(lines[region_end:]),
        newline=newline,
        comments=tuple(comments),
    )
