from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from .classifier import DEFAULT_CLASSIFIER, Classifier
from .extractor import extract
from .reassembler import reassemble
from .renderer import render
from .statements import Document


@dataclass(frozen=True)
class CanonicalResult:
    original: str
    text: str
    document: Document
    block: str
    warnings: Tuple[str, ...] = ()

    @property
    def changed(self) -> bool:
        return self.text != self.original


def _unterminated_warnings(doc: Document) -> List[str]:
    return [
        f"unterminated import of {s.module_path!r} absorbed the rest of the file, left as is"
        for s in doc.statements
        if s.unterminated
    ]


def canonicalize(text: str, *, classifier: Optional[Classifier] = None) -> CanonicalResult:
    """
    Extract -> classify -> render -> reassemble. Pure, no I/O.

    A document whose last import never closes is returned untouched: the
    statement swallowed the code after it, so reordering it would move code
    into the import block.
    """
    clf = classifier or DEFAULT_CLASSIFIER
    doc = extract(text)
    if not doc.has_imports:
        return CanonicalResult(original=text, text=text, document=doc, block="")

    if doc.unterminated:
        return CanonicalResult(
            original=text,
            text=text,
            document=doc,
            block="",
            warnings=tuple(_unterminated_warnings(doc)),
        )

    classified = [clf.classify_statement(s) for s in doc.statements]
    block = render(classified, newline=doc.newline)
    final = reassemble(doc.prefix, block, doc.suffix, newline=doc.newline)

    warnings: List[str] = []
    if final != text:
        warnings.extend(f"comment between imports dropped: {c!r}" for c in doc.comments)
    return CanonicalResult(original=text, text=final, document=doc, block=block, warnings=tuple(warnings))
