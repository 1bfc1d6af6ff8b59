from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from playbooks.core.corpus.loader import load_corpus
from playbooks.core.corpus.models import Corpus, RulesetDocument
from playbooks.core.lint.config import LintConfig, load_lint_config
from playbooks.core.lint.report import build_report
from playbooks.core.observability.metrics import inc_named
from playbooks.plugins.checks._internal.config import ChecksRunConfig
from playbooks.plugins.checks._internal.registry import CheckRegistry

_log = logging.getLogger("playbooks.lint")


class UnknownPathError(ValueError):
    pass


def build_registry(config: Optional[LintConfig] = None) -> CheckRegistry:
    reg = CheckRegistry(extra_dirs=(config.plugin_dirs if config else ()))
    reg.load_all()
    return reg


def select_documents(corpus: Corpus, paths: Iterable[str | Path]) -> List[RulesetDocument]:
    """Map user-supplied paths (absolute, cwd-relative or root-relative) onto corpus documents."""
    root = corpus.root.resolve()
    selected: List[RulesetDocument] = []
    for raw in paths:
        p = Path(raw)
        candidates = [p] if p.is_absolute() else [root / p, Path.cwd() / p]
        match: Optional[RulesetDocument] = None
        for c in candidates:
            try:
                rel = c.resolve().relative_to(root).as_posix()
            except ValueError:
                continue
            match = corpus.get(rel)
            if match is not None:
                break
        if match is None:
            raise UnknownPathError(f"not a ruleset in {corpus.root}: {raw}")
        if match not in selected:
            selected.append(match)
    return selected


def run_validation(
    root: Path | str,
    *,
    config: Optional[LintConfig] = None,
    paths: Optional[Iterable[str | Path]] = None,
    checks: Optional[ChecksRunConfig] = None,
    fail_on: Optional[str] = None,
    registry: Optional[CheckRegistry] = None,
) -> Dict[str, Any]:
    root = Path(root)
    config = config or load_lint_config(root=root)
    corpus = load_corpus(root, exclude=config.exclude)

    paths = list(paths or [])
    if paths:
        intent = "files"
        documents = select_documents(corpus, paths)
    else:
        intent = "corpus"
        documents = list(corpus.documents)

    cfg = config.checks.merged(checks) if checks is not None else config.checks
    reg = registry or build_registry(config)

    context: Dict[str, Any] = {"corpus": corpus, "documents": documents}
    findings = reg.run(context=context, cfg=cfg, intent=intent)

    effective_fail_on = fail_on or config.fail_on
    report = build_report(
        findings,
        root=str(root),
        intent=intent,
        fail_on=effective_fail_on,
        documents=[d.rel_path for d in documents],
        corpus_fingerprint=corpus.fingerprint(),
        checks_fingerprint=reg.fingerprint,
        meta=context.get("check_outputs", {}).get("__meta__"),
    )

    inc_named("validation_runs")
    if not report["ok"]:
        inc_named("validation_failures")
    _log.info(
        "Validated %d rulesets under %s: ok=%s counts=%s",
        len(documents),
        root,
        report["ok"],
        report["counts"],
    )
    return report
