from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

from playbooks.plugins.checks._internal.context import parsed_documents
from playbooks.plugins.checks._internal.types import Finding


@dataclass
class BodyCheck:
    name: str = "body"
    version: str = "1.0.0"
    enabled_by_default: bool = True
    phase: str = "document"
    priority: int = 70
    depends_on: List[str] = field(default_factory=lambda: ["front_matter"])

    def run(self, *, context: Dict[str, Any], options: Dict[str, Any]) -> List[Finding]:
        findings: List[Finding] = []
        for doc in parsed_documents(context):
            if not doc.body.strip():
                findings.append(
                    Finding(
                        check=self.name,
                        severity="error",
                        code="body.empty",
                        message="Ruleset has front matter but no guidance text.",
                        path=doc.rel_path,
                        line=doc.body_start_line,
                    )
                )
                continue
            if doc.title_line() is None:
                findings.append(
                    Finding(
                        check=self.name,
                        severity="warn",
                        code="body.no_title",
                        message="Ruleset body has no top-level '# ' heading.",
                        path=doc.rel_path,
                        line=doc.body_start_line,
                    )
                )
        return findings


CHECK = BodyCheck()
