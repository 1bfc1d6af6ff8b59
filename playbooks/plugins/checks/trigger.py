from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

from playbooks.core.corpus.globs import GlobSyntaxError, split_globs
from playbooks.core.corpus.models import TRIGGERS
from playbooks.plugins.checks._internal.context import parsed_documents
from playbooks.plugins.checks._internal.types import Finding


def _has_globs(value: Any) -> bool:
    try:
        return bool(split_globs(value))
    except GlobSyntaxError:
        # malformed but present; the globs check reports the shape problem
        return True


@dataclass
class TriggerCheck:
    name: str = "trigger"
    version: str = "1.0.0"
    enabled_by_default: bool = True
    phase: str = "document"
    priority: int = 30
    depends_on: List[str] = field(default_factory=lambda: ["required_keys"])

    def run(self, *, context: Dict[str, Any], options: Dict[str, Any]) -> List[Finding]:
        allowed = list(options.get("allowed") or TRIGGERS)
        findings: List[Finding] = []

        for doc in parsed_documents(context):
            fm = doc.front_matter or {}
            trigger = fm.get("trigger")
            if trigger in (None, ""):
                continue
            line = doc.key_line("trigger")

            if not isinstance(trigger, str) or trigger not in allowed:
                findings.append(
                    Finding(
                        check=self.name,
                        severity="error",
                        code="trigger.invalid",
                        message=f"trigger {trigger!r} is not one of: {', '.join(allowed)}.",
                        path=doc.rel_path,
                        line=line,
                        data={"allowed": allowed},
                    )
                )
                continue

            has_globs = _has_globs(fm.get("globs"))
            if trigger == "glob" and not has_globs:
                findings.append(
                    Finding(
                        check=self.name,
                        severity="error",
                        code="trigger.globs_required",
                        message="trigger is 'glob' but no globs are declared.",
                        path=doc.rel_path,
                        line=line,
                    )
                )
            elif trigger in ("always_on", "manual") and has_globs:
                findings.append(
                    Finding(
                        check=self.name,
                        severity="info",
                        code="trigger.globs_ignored",
                        message=f"globs have no effect when trigger is {trigger!r}.",
                        path=doc.rel_path,
                        line=doc.key_line("globs"),
                    )
                )
        return findings


CHECK = TriggerCheck()
