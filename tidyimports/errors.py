# tidyimports/errors.py
"""
Error taxonomy.

Every error is scoped to a single file: the pipeline turns it into a failed
FileReport and the remaining files keep being processed.

- io:        read / backup / write failures (reported, never retried)
- encoding:  binary or non UTF-8 content (file skipped)
- internal:  unexpected exception inside one file's task
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional


class ErrorKind(str, Enum):
    IO = "io"
    ENCODING = "encoding"
    INTERNAL = "internal"


@dataclass(frozen=True, slots=True)
class FileError:
    kind: ErrorKind
    message: str

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.message}"


class TidyImportsError(Exception):
    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(self, message: str, *, path: Optional[Path] = None) -> None:
        super().__init__(message)
        self.message = message
        self.path = path

    def to_file_error(self) -> FileError:
        return FileError(kind=self.kind, message=self.message)


class FileIOError(TidyImportsError):
    """Read, backup or overwrite of a single file failed."""

    kind = ErrorKind.IO

