from __future__ import annotations

from typing import Any, Dict, List

from playbooks.plugins.checks._internal.types import SEVERITY_RANK, Finding

REPORT_KIND = "rulesets_validation_report"


def count_by_severity(findings: List[Finding]) -> Dict[str, int]:
    counts = {"error": 0, "warn": 0, "info": 0}
    for f in findings:
        counts[f.severity] = counts.get(f.severity, 0) + 1
    return counts


def is_failure(findings: List[Finding], fail_on: str = "error") -> bool:
    threshold = SEVERITY_RANK.get(fail_on, SEVERITY_RANK["error"])
    return any(SEVERITY_RANK.get(f.severity, 0) >= threshold for f in findings)


def build_report(
    findings: List[Finding],
    *,
    root: str,
    intent: str,
    fail_on: str,
    documents: List[str],
    corpus_fingerprint: str,
    checks_fingerprint: str,
    meta: Dict[str, Any] | None = None,
) -> Dict[str, Any]:
    return {
        "kind": REPORT_KIND,
        "ok": not is_failure(findings, fail_on),
        "fail_on": fail_on,
        "intent": intent,
        "root": root,
        "corpus_fingerprint": corpus_fingerprint,
        "checks_fingerprint": checks_fingerprint,
        "documents": documents,
        "counts": count_by_severity(findings),
        "findings": [f.to_dict() for f in findings],
        "meta": meta or {},
    }


def format_finding(f: Dict[str, Any]) -> str:
    loc = f.get("path") or "<corpus>"
    if f.get("line"):
        loc = f"{loc}:{f['line']}"
    return f"{loc}: {f['severity']} [{f['code']}] {f['message']}"


def render_text(report: Dict[str, Any]) -> str:
    lines = [format_finding(f) for f in report.get("findings") or []]
    c = report.get("counts") or {}
    status = "OK" if report.get("ok") else "FAILED"
    lines.append(
        f"{status}: {len(report.get('documents') or [])} rulesets checked, "
        f"{c.get('error', 0)} errors, {c.get('warn', 0)} warnings, {c.get('info', 0)} info"
    )
    return "\n".join(lines)


def exit_code(report: Dict[str, Any]) -> int:
    return 0 if report.get("ok") else 1
