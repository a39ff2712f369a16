from __future__ import annotations

import importlib
import logging

import pytest

import tidyimports.infra.logging_std as ls


def test_import_has_no_side_effect_handlers() -> None:
    root = logging.getLogger()
    # pytest may attach handlers; we only assert the module did not ADD one.
    before = len(root.handlers)
    importlib.reload(ls)
    assert len(root.handlers) == before


def test_configure_logging_idempotent() -> None:
    root = logging.getLogger()
    before = len(root.handlers)
    ls.configure_logging()
    ls.configure_logging()
    after = len(root.handlers)
    assert after == before or after == before + 1


def test_resolve_level() -> None:
    assert ls.resolve_level("debug") == logging.DEBUG
    assert ls.resolve_level("ERROR") == logging.ERROR
    assert ls.resolve_level("nonsense") == logging.WARNING


def test_log_kv_sorted_keys(caplog: pytest.LogCaptureFixture) -> None:
    logger = ls.get_logger("tidyimports.test")
    with caplog.at_level(logging.INFO, logger="tidyimports.test"):
        ls.log_kv(logger, "run finished", threads=4, files=2)
        ls.log_kv(logger, "plain")
    assert "run finished | files=2 threads=4" in caplog.text
    assert "plain" in caplog.text
