from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Tuple


class ImportKind(str, Enum):
    IMPORT = "import"
    FROM_IMPORT = "from"

    @property
    def rank(self) -> int:
        # plain `import x` sorts before `from x import y` inside a group
        return 0 if self is ImportKind.IMPORT else 1


class Group(IntEnum):
    FUTURE = 0
    STDLIB = 1
    THIRD_PARTY = 2
    LOCAL = 3


@dataclass(frozen=True, slots=True)
class ImportStatement:
    """
    One import statement exactly as it appears in the source.

    raw_text keeps every physical line of the statement (bracket or backslash
    continuations included) minus the final line terminator.
    unterminated=True means the statement never closed and absorbed the rest
    of the file.
    """

    raw_text: str
    kind: ImportKind
    module_path: str
    unterminated: bool = False
    sort_key: str = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "sort_key", self.module_path.lower())


@dataclass(frozen=True, slots=True)
class ClassifiedStatement:
    statement: ImportStatement
    group: Group

    @property
    def order_key(self) -> Tuple[int, str]:
        return (self.statement.kind.rank, self.statement.sort_key)


@dataclass(frozen=True, slots=True)
class Document:
    """
    A source file split around its leading import region.

    Invariant: "".join(prefix + region + suffix) == original text.
    """

    prefix: Tuple[str, ...]
    region: Tuple[str, ...]
    statements: Tuple[ImportStatement, ...]
    suffix: Tuple[str, ...]
    newline: str = "\n"
    # comment-only lines between statements; they do not survive a rewrite
    comments: Tuple[str, ...] = ()

    @property
    def has_imports(self) -> bool:
        return bool(self.statements)

    @property
    def unterminated(self) -> bool:
        return any(s.unterminated for s in self.statements)

    def original_text(self) -> str:
        return "".join(self.prefix) + "".join(self.region) + "".join(self.suffix)
