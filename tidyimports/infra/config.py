from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from tidyimports.infra.logging_std import get_logger, log_kv

logger = get_logger(__name__)


# =========================
# CONFIG MODEL
# =========================

DEFAULT_CONFIG_FILENAME = "tidyimports.yml"

DEFAULT_EXCLUDE_DIRS = (
    # python environments
    "venv",
    ".venv",
    "env",
    ".env",
    "__pypackages__",
    "envs",
    ".virtualenvs",
    # tool / vcs noise
    ".git",
    ".hg",
    ".svn",
    ".tox",
    ".nox",
    ".mypy_cache",
    ".pytest_cache",
    "__pycache__",
    "build",
    "dist",
    "node_modules",
)

ENV_THREADS = "TIDYIMPORTS_THREADS"
ENV_LOG_LEVEL = "TIDYIMPORTS_LOG_LEVEL"
ENV_BACKUP_DIR = "TIDYIMPORTS_BACKUP_DIR"


class ToolConfig(BaseModel):
    """
    Everything that can be tuned without touching code.

    `threads` only sizes the worker pool; it never changes output content.
    `extra_stdlib` / `known_local` refine classification per project.
    `respect_gitignore` makes directory walks skip paths a .gitignore matches.
    """

    threads: int = Field(default=4, ge=1)
    extensions: List[str] = Field(default_factory=lambda: [".py"])
    exclude_dirs: List[str] = Field(default_factory=lambda: list(DEFAULT_EXCLUDE_DIRS))
    backup_dir: Optional[Path] = None
    log_level: str = "WARNING"
    extra_stdlib: List[str] = Field(default_factory=list)
    known_local: List[str] = Field(default_factory=list)
    respect_gitignore: bool = True

    @field_validator("extensions")
    @classmethod
    def _dotted_extensions(cls, value: List[str]) -> List[str]:
        out: List[str] = []
        for ext in value:
            ext = ext.strip()
            if not ext:
                continue
            out.append(ext if ext.startswith(".") else f".{ext}")
        if not out:
            raise ValueError("at least one extension is required")
        return out

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        name = value.strip().upper()
        if not isinstance(logging.getLevelName(name), int):
            raise ValueError(f"unknown log level: {value!r}")
        return name


# =========================
# LOADER
# =========================


def _read_raw_yaml(path: Path) -> Dict[str, Any]:
    """Read YAML defensively. Any problem means an empty mapping (defaults win)."""
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        log_kv(logger, "config: file not found, using defaults", level=logging.WARNING, config_path=str(path))
        return {}
    except (OSError, UnicodeError, yaml.YAMLError) as exc:
        log_kv(
            logger,
            "config: unreadable file, using defaults",
            level=logging.ERROR,
            config_path=str(path),
            error=str(exc),
        )
        return {}

    if not isinstance(data, dict):
        log_kv(
            logger,
            "config: YAML root is not a mapping, using defaults",
            level=logging.ERROR,
            config_path=str(path),
        )
        return {}
    return data


def env_overrides(env: Mapping[str, str]) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    if env.get(ENV_THREADS):
        out["threads"] = env[ENV_THREADS]
    if env.get(ENV_LOG_LEVEL):
        out["log_level"] = env[ENV_LOG_LEVEL]
    if env.get(ENV_BACKUP_DIR):
        out["backup_dir"] = env[ENV_BACKUP_DIR]
    return out


def load_config(
    path: Optional[Path] = None,
    *,
    env: Optional[Mapping[str, str]] = None,
    cwd: Optional[Path] = None,
    overrides: Optional[Mapping[str, Any]] = None,
) -> ToolConfig:
    """
    Build the effective configuration.

    Precedence (low -> high): defaults, YAML file, environment, overrides (CLI).
    - explicit `path` that is missing/broken -> logged, defaults used.
    - no `path`: `tidyimports.yml` in cwd is used only if it exists.
    - invalid values -> logged and dropped one key at a time; valid keys
      from the same layer still apply.
    """
    env = os.environ if env is None else env

    raw: Dict[str, Any] = {}
    if path is not None:
        raw = _read_raw_yaml(Path(path))
    else:
        candidate = (cwd or Path.cwd()) / DEFAULT_CONFIG_FILENAME
        if candidate.is_file():
            raw = _read_raw_yaml(candidate)

    layers: List[Dict[str, Any]] = [raw, env_overrides(env), dict(overrides or {})]

    merged: Dict[str, Any] = {}
    for layer in layers:
        for key, value in layer.items():
            if value is None:
                continue
            candidate_cfg = {**merged, key: value}
            try:
                ToolConfig(**candidate_cfg)
            except ValidationError as exc:
                log_kv(
                    logger,
                    "config: invalid value ignored",
                    level=logging.ERROR,
                    key=key,
                    value=value,
                    error=exc.errors()[0].get("msg", str(exc)),
                )
                continue
            merged = candidate_cfg

    cfg = ToolConfig(**merged)
    log_kv(logger, "config: loaded", level=logging.DEBUG, threads=cfg.threads, extensions=cfg.extensions)
    return cfg
