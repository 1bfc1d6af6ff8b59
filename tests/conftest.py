from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from playbooks.api.main import app
from playbooks.core.lint.runner import run_validation
from playbooks.core.observability.metrics import reset_metrics
from playbooks.plugins.checks._internal.config import ChecksRunConfig
from playbooks.plugins.checks._internal.registry import get_run_cache

PYTHON_RULESET = """---
trigger: glob
description: Python style and typing conventions for service code.
globs: "**/*.py"
version: "1.0.0"
last_updated: 2025-01-15
---

# Python Ruleset

- Use type hints on public functions.
"""

DOCS_RULESET = """---
trigger: model_decision
description: Documentation writing guidance for markdown sites.
version: "0.2.0"
last_updated: 2024-11-02
---

# Docs Ruleset

- Keep headings short.
"""

GENERAL_RULESET = """---
trigger: always_on
description: General engineering rules that apply to every change.
version: "2.1.0"
last_updated: 2025-03-01
---

# General Ruleset

- Keep changes small.
"""

INDEX = """# Rulesets Index

- [Docs](docs-ruleset.md)
- [General](general-ruleset.md)
- [Python](python-ruleset.md)
"""


def write_file(root: Path, name: str, text: str) -> Path:
    p = root / name
    p.write_text(text, encoding="utf-8")
    return p


@pytest.fixture(autouse=True)
def _isolate(monkeypatch):
    # Make runs deterministic and independent of the developer's environment
    monkeypatch.delenv("PLAYBOOKS_LINT_CONFIG", raising=False)
    monkeypatch.delenv("PLAYBOOKS_ROOT", raising=False)
    get_run_cache().clear()
    reset_metrics()
    yield
    get_run_cache().clear()


@pytest.fixture()
def corpus_root(tmp_path: Path) -> Path:
    """A small, fully valid corpus."""
    root = tmp_path / "RULESETS"
    root.mkdir()
    write_file(root, "python-ruleset.md", PYTHON_RULESET)
    write_file(root, "docs-ruleset.md", DOCS_RULESET)
    write_file(root, "general-ruleset.md", GENERAL_RULESET)
    write_file(root, "RULESETS_INDEX.md", INDEX)
    write_file(root, "CONTRIBUTING.md", "# Contributing\n")
    return root


@pytest.fixture()
def lint(corpus_root):
    """Run selected checks over the temp corpus and return the findings list."""

    def _lint(*checks, options=None, paths=None, root=None):
        cfg = ChecksRunConfig(enabled=list(checks) or None, options=options or {})
        report = run_validation(root or corpus_root, checks=cfg, paths=paths)
        return report["findings"]

    return _lint


@pytest.fixture()
def client(corpus_root, monkeypatch):
    monkeypatch.setenv("PLAYBOOKS_ROOT", str(corpus_root))
    return TestClient(app)