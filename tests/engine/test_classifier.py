from __future__ import annotations

import pytest
from hypothesis import given, strategies as st

from tidyimports.engine.classifier import Classifier, classify
from tidyimports.engine.statements import Group
from tidyimports.engine.stdlib_names import STDLIB_MODULE_NAMES


@pytest.mark.parametrize(
    "module_path, expected",
    [
        ("__future__", Group.FUTURE),
        ("__future__.annotations", Group.FUTURE),
        (".", Group.LOCAL),
        (".foo", Group.LOCAL),
        ("..bar.baz", Group.LOCAL),
        ("os", Group.STDLIB),
        ("os.path", Group.STDLIB),
        ("collections.abc", Group.STDLIB),
        ("OS", Group.THIRD_PARTY),
        ("django", Group.THIRD_PARTY),
        ("typing_extensions", Group.THIRD_PARTY),
        ("", Group.THIRD_PARTY),
    ],
)
def test_classify_rules(module_path: str, expected: Group) -> None:
    assert classify(module_path) is expected


def test_stdlib_table_is_immutable_and_populated() -> None:
    assert isinstance(STDLIB_MODULE_NAMES, frozenset)
    for name in ("os", "sys", "json", "typing", "datetime", "random"):
        assert name in STDLIB_MODULE_NAMES
    assert "requests" not in STDLIB_MODULE_NAMES


def test_known_local_and_extra_stdlib() -> None:
    clf = Classifier(extra_stdlib=["compat"], known_local=["myapp"])
    assert clf.classify("myapp.models") is Group.LOCAL
    assert clf.classify("compat") is Group.STDLIB
    # default classifier is untouched
    assert classify("myapp") is Group.THIRD_PARTY
    assert classify("compat") is Group.THIRD_PARTY


def test_future_wins_over_local_configuration() -> None:
    clf = Classifier(known_local=["__future__"])
    assert clf.classify("__future__") is Group.FUTURE


@given(st.text())
def test_classify_is_total(module_path: str) -> None:
    assert classify(module_path) in set(Group)


def test_group_order() -> None:
    assert Group.FUTURE < Group.STDLIB < Group.THIRD_PARTY < Group.LOCAL
