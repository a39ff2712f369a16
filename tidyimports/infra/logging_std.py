from __future__ import annotations

import logging
from typing import Any


_DEFAULT_FMT = "%(asctime)s %(levelname)s %(name)s | %(message)s"


def configure_logging(
    *,
    level: str = "WARNING",
    fmt: str = _DEFAULT_FMT,
) -> None:
    """
    Idempotent-ish logging config.
    Important: importing this module does nothing. You must call configure_logging().
    """
    root = logging.getLogger()
    if root.handlers:
        # Already configured by app/test runner; only honour the level.
        root.setLevel(resolve_level(level))
        return
    logging.basicConfig(level=resolve_level(level), format=fmt)


def resolve_level(level: str) -> int:
    value = getattr(logging, str(level).upper(), None)
    return value if isinstance(value, int) else logging.WARNING


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def log_kv(logger: logging.Logger, msg: str, *, level: int = logging.INFO, **kv: Any) -> None:
    if not kv:
        logger.log(level, msg)
        return
    extra = " ".join([f"{k}={kv[k]!r}" for k in sorted(kv.keys())])
    logger.log(level, "%s | %s", msg, extra)
