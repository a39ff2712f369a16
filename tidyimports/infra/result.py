"""
Minimal Result type for the pure parts of the pipeline.

Per-file problems (binary content, bad encoding) are values, not exceptions:
a function returns Ok(value) or Err(error) and callers branch on is_err().
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, TypeVar, Union


T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    value: T

    def is_err(self) -> bool:
        return False

    def map(self, f: Callable[[T], U]) -> "Ok[U]":
        return Ok(f(self.value))


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    error: E

    def is_err(self) -> bool:
        return True

    def map(self, f: Callable[[object], object]) -> "Err[E]":
        # nothing to transform: the error travels on unchanged
        return self


Result = Union[Ok[T], Err[E]]
