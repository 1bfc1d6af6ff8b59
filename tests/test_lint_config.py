"""
Lint config loader tests.
"""
from __future__ import annotations

import json

from playbooks.core.lint.config import LintConfig, load_lint_config


# ---------------------------------------------------------------------------
# LintConfig.from_mapping
# ---------------------------------------------------------------------------

def test_from_mapping_reads_all_sections(tmp_path):
    cfg = LintConfig.from_mapping(
        {
            "checks": {"disabled": ["body"], "options": {"description": {"min_length": 20}}},
            "fail_on": "WARN",
            "exclude": "drafts-*.md",
            "plugin_dirs": ["lint_checks", "/abs/checks"],
        },
        base_dir=tmp_path,
    )
    assert cfg.checks.disabled == ["body"]
    assert cfg.checks.check_options("description") == {"min_length": 20}
    assert cfg.fail_on == "warn"
    assert cfg.exclude == ["drafts-*.md"]
    assert cfg.plugin_dirs[0] == tmp_path / "lint_checks"
    assert str(cfg.plugin_dirs[1]) == "/abs/checks"


def test_from_mapping_invalid_fail_on_falls_back(caplog):
    cfg = LintConfig.from_mapping({"fail_on": "sometimes"})
    assert cfg.fail_on == "error"


# ---------------------------------------------------------------------------
# load_lint_config - file-based tests
# ---------------------------------------------------------------------------

def test_load_returns_defaults_when_file_missing(tmp_path):
    cfg = load_lint_config(tmp_path / "nonexistent.yaml")
    assert cfg.fail_on == "error"
    assert cfg.checks.enabled is None
    assert cfg.source is None


def test_load_valid_json_file(tmp_path):
    f = tmp_path / "lint.json"
    f.write_text(json.dumps({"fail_on": "warn", "checks": {"disabled": ["version"]}}), encoding="utf-8")
    cfg = load_lint_config(f)
    assert cfg.fail_on == "warn"
    assert cfg.checks.disabled == ["version"]
    assert cfg.source == f


def test_load_valid_yaml_file(tmp_path):
    f = tmp_path / "lint.yaml"
    f.write_text("checks:\n  options:\n    last_updated:\n      max_age_days: 365\nexclude: [wip-*.md]\n", encoding="utf-8")
    cfg = load_lint_config(f)
    assert cfg.checks.check_options("last_updated") == {"max_age_days": 365}
    assert cfg.exclude == ["wip-*.md"]


def test_load_malformed_file_returns_defaults(tmp_path, caplog):
    f = tmp_path / "bad.yaml"
    f.write_text("this: is: not: valid: yaml:\n  {{{{", encoding="utf-8")
    cfg = load_lint_config(f)
    assert cfg.fail_on == "error"
    assert cfg.source is None


def test_load_non_mapping_file_returns_defaults(tmp_path, caplog):
    f = tmp_path / "list.json"
    f.write_text(json.dumps([1, 2, 3]), encoding="utf-8")
    cfg = load_lint_config(f)
    assert cfg.exclude == []


def test_load_uses_env_var(tmp_path, monkeypatch):
    f = tmp_path / "env_lint.json"
    f.write_text(json.dumps({"fail_on": "info"}), encoding="utf-8")
    monkeypatch.setenv("PLAYBOOKS_LINT_CONFIG", str(f))
    cfg = load_lint_config()
    assert cfg.fail_on == "info"


def test_load_default_location_next_to_corpus(corpus_root):
    (corpus_root.parent / ".rulesets-lint.yaml").write_text("fail_on: warn\n", encoding="utf-8")
    cfg = load_lint_config(root=corpus_root)
    assert cfg.fail_on == "warn"
