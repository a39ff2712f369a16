"""
tidyimports.engine

Pure text engine: extract -> classify -> render -> reassemble.
Nothing in here touches the filesystem.
"""

from __future__ import annotations

from .canonical import CanonicalResult, canonicalize
from .classifier import Classifier, classify
from .extractor import extract, split_lines
from .reassembler import reassemble
from .renderer import render
from .statements import ClassifiedStatement, Document, Group, ImportKind, ImportStatement

__all__ = [
    "CanonicalResult",
    "ClassifiedStatement",
    "Classifier",
    "Document",
    "Group",
    "ImportKind",
    "ImportStatement",
    "canonicalize",
    "classify",
    "extract",
    "reassemble",
    "render",
    "split_lines",
]
