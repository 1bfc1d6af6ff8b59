"""
Lint configuration loader.

Reads an optional YAML/JSON file that tunes the validator without code
changes:

    checks:
      disabled: [index_sync]
      options:
        description: {min_length: 10, max_length: 200}
        last_updated: {max_age_days: 365}
    fail_on: error          # error | warn
    exclude: ["drafts-*.md"]
    plugin_dirs: []

Environment variable:
    PLAYBOOKS_LINT_CONFIG: path to the file (optional).
    Default search path: <corpus root parent>/.rulesets-lint.yaml
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional

import yaml

from playbooks.core import settings
from playbooks.plugins.checks._internal.config import ChecksRunConfig

_log = logging.getLogger("playbooks.config")

FAIL_ON_LEVELS = ("error", "warn", "info")


@dataclass
class LintConfig:
    checks: ChecksRunConfig = field(default_factory=ChecksRunConfig)
    fail_on: str = "error"
    exclude: List[str] = field(default_factory=list)
    plugin_dirs: List[Path] = field(default_factory=list)
    source: Optional[Path] = None

    @classmethod
    def from_mapping(cls, raw: dict, *, base_dir: Optional[Path] = None) -> "LintConfig":
        fail_on = str(raw.get("fail_on") or "error").strip().lower()
        if fail_on not in FAIL_ON_LEVELS:
            _log.warning("Ignoring invalid fail_on %r (expected one of %s)", fail_on, ", ".join(FAIL_ON_LEVELS))
            fail_on = "error"

        exclude = raw.get("exclude") or []
        if isinstance(exclude, str):
            exclude = [exclude]

        plugin_dirs: List[Path] = []
        for d in raw.get("plugin_dirs") or []:
            p = Path(str(d))
            if not p.is_absolute() and base_dir is not None:
                p = base_dir / p
            plugin_dirs.append(p)

        return cls(
            checks=ChecksRunConfig.from_payload(raw.get("checks")),
            fail_on=fail_on,
            exclude=[str(x) for x in exclude if str(x).strip()] if isinstance(exclude, list) else [],
            plugin_dirs=plugin_dirs,
        )


def load_lint_config(path: Optional[Path] = None, *, root: Optional[Path] = None) -> LintConfig:
    """
    Load lint config from a YAML or JSON file.

    Returns defaults if the file is absent, not readable, or malformed.
    """
    resolved = Path(path) if path is not None else settings.lint_config_path(root)
    if not resolved.exists():
        return LintConfig()

    try:
        raw_text = resolved.read_text(encoding="utf-8")
    except OSError as exc:
        _log.warning("Cannot read lint config %s: %s", resolved, exc)
        return LintConfig()

    data: Any
    try:
        data = json.loads(raw_text)
    except json.JSONDecodeError:
        try:
            data = yaml.safe_load(raw_text)
        except yaml.YAMLError as exc:
            _log.warning("Failed to parse lint config %s as JSON or YAML: %s", resolved, exc)
            return LintConfig()

    if data is None:
        return LintConfig(source=resolved)
    if not isinstance(data, dict):
        _log.warning("Lint config %s must be a mapping, got %s", resolved, type(data).__name__)
        return LintConfig()

    cfg = LintConfig.from_mapping(data, base_dir=resolved.parent)
    cfg.source = resolved
    _log.info("Loaded lint config from %s", resolved)
    return cfg
