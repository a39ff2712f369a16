"""
Origin classifier.

An ordered list of pure predicates; the first one that matches decides the
group. Anything unmatched (malformed / empty module paths included) lands in
THIRD_PARTY so no statement is ever dropped.

    1. __future__ head        -> FUTURE
    2. leading dot(s)          -> LOCAL
    3. configured first-party  -> LOCAL
    4. stdlib table            -> STDLIB
    5. everything else         -> THIRD_PARTY
"""

from __future__ import annotations

from typing import Callable, FrozenSet, Iterable, Optional, Tuple

import deal

from .statements import ClassifiedStatement, Group, ImportStatement
from .stdlib_names import STDLIB_MODULE_NAMES

Rule = Tuple[Callable[[str], bool], Group]


def _head(module_path: str) -> str:
    return module_path.split(".", 1)[0]


def is_future(module_path: str) -> bool:
    return _head(module_path) == "__future__"


def is_relative(module_path: str) -> bool:
    return module_path.startswith(".")


class Classifier:
    def __init__(
        self,
        *,
        stdlib: FrozenSet[str] = STDLIB_MODULE_NAMES,
        extra_stdlib: Iterable[str] = (),
        known_local: Iterable[str] = (),
    ) -> None:
        self._stdlib: FrozenSet[str] = frozenset(stdlib) | frozenset(extra_stdlib)
        self._local: FrozenSet[str] = frozenset(known_local)
        self._rules: Tuple[Rule, ...] = (
            (is_future, Group.FUTURE),
            (is_relative, Group.LOCAL),
            (lambda p: _head(p) in self._local, Group.LOCAL),
            (lambda p: _head(p) in self._stdlib, Group.STDLIB),
        )

    @deal.pre(lambda self, module_path: isinstance(module_path, str), message="module_path must be str")
    @deal.post(lambda result: isinstance(result, Group), message="classify must return a Group")
    @deal.raises(deal.PreContractError, deal.RaisesContractError)
    def classify(self, module_path: str) -> Group:
        for predicate, group in self._rules:
            if predicate(module_path):
                return group
        return Group.THIRD_PARTY

    def classify_statement(self, statement: ImportStatement) -> ClassifiedStatement:
        return ClassifiedStatement(statement=statement, group=self.classify(statement.module_path))


DEFAULT_CLASSIFIER = Classifier()


def classify(module_path: str, classifier: Optional[Classifier] = None) -> Group:
    return (classifier or DEFAULT_CLASSIFIER).classify(module_path)
