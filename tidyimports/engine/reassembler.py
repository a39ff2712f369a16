from __future__ import annotations

from typing import Sequence

import deal


def _starts_with_blank_line(lines: Sequence[str]) -> bool:
    return bool(lines) and lines[0].strip() == ""


@deal.pre(lambda prefix, canonical_block, suffix, newline="\n": newline in ("\n", "\r\n"), message="newline must be LF or CRLF")
@deal.post(lambda result: isinstance(result, str), message="reassemble returns text")
@deal.raises(deal.PreContractError, deal.RaisesContractError)
def reassemble(prefix: Sequence[str], canonical_block: str, suffix: Sequence[str], newline: str = "\n") -> str:
    """
    prefix + block + suffix.

    The block is terminated by one newline and followed by exactly one blank
    line when a suffix exists that does not already open with one. An empty
    block returns prefix + suffix untouched.
    """
    head = "".join(prefix)
    tail = "".join(suffix)
    if not canonical_block:
        return head + tail

    parts = [head, canonical_block, newline]
    if tail and not _starts_with_blank_line(suffix):
        parts.append(newline)
    parts.append(tail)
    return "".join(parts)
