"""
Process configuration read from the environment.

    PLAYBOOKS_ROOT         : corpus directory (default <project_root>/RULESETS)
    PLAYBOOKS_LINT_CONFIG  : lint config file (default <corpus parent>/.rulesets-lint.yaml)
    PLAYBOOKS_ENV          : dev | prod
    PLAYBOOKS_LOG_LEVEL    : logging level name for CLIs and the server
"""
from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

# playbooks/core/settings.py -> parents[2] = repo root
PROJECT_ROOT = Path(__file__).resolve().parents[2]

DEFAULT_CORPUS_DIRNAME = "RULESETS"
DEFAULT_LINT_CONFIG_NAME = ".rulesets-lint.yaml"


def _env(name: str) -> str:
    return (os.getenv(name) or "").strip()


def corpus_root(override: Optional[str | Path] = None) -> Path:
    if override:
        return Path(override).resolve()
    env_root = _env("PLAYBOOKS_ROOT")
    if env_root:
        return Path(env_root).resolve()
    return PROJECT_ROOT / DEFAULT_CORPUS_DIRNAME


def lint_config_path(root: Optional[Path] = None) -> Path:
    env_path = _env("PLAYBOOKS_LINT_CONFIG")
    if env_path:
        return Path(env_path)
    base = (root or corpus_root()).parent
    return base / DEFAULT_LINT_CONFIG_NAME


def environment() -> str:
    return (_env("PLAYBOOKS_ENV") or "dev").lower()


def log_level(default: str = "WARNING") -> str:
    return (_env("PLAYBOOKS_LOG_LEVEL") or default).upper()
