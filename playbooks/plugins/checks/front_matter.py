from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

from playbooks.plugins.checks._internal.context import documents
from playbooks.plugins.checks._internal.types import Finding


@dataclass
class FrontMatterCheck:
    name: str = "front_matter"
    version: str = "1.0.0"
    enabled_by_default: bool = True
    phase: str = "parse"
    priority: int = 10
    depends_on: List[str] = field(default_factory=list)

    def run(self, *, context: Dict[str, Any], options: Dict[str, Any]) -> List[Finding]:
        findings: List[Finding] = []
        for doc in documents(context):
            err = doc.front_matter_error
            if err is not None:
                findings.append(
                    Finding(
                        check=self.name,
                        severity="error",
                        code="front_matter.invalid_yaml",
                        message=f"Front matter could not be parsed: {err.message}",
                        path=doc.rel_path,
                        line=err.line,
                    )
                )
                continue
            if not doc.has_front_matter:
                findings.append(
                    Finding(
                        check=self.name,
                        severity="error",
                        code="front_matter.missing",
                        message="File has no YAML front matter; it must start with a '---' block.",
                        path=doc.rel_path,
                        line=1,
                    )
                )
        return findings


CHECK = FrontMatterCheck()
