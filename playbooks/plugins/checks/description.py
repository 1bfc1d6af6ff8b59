from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

from playbooks.plugins.checks._internal.context import parsed_documents
from playbooks.plugins.checks._internal.types import Finding


@dataclass
class DescriptionCheck:
    name: str = "description"
    version: str = "1.0.0"
    enabled_by_default: bool = True
    phase: str = "document"
    priority: int = 20
    depends_on: List[str] = field(default_factory=lambda: ["required_keys"])

    def run(self, *, context: Dict[str, Any], options: Dict[str, Any]) -> List[Finding]:
        min_len = int(options.get("min_length", 10))
        max_len = int(options.get("max_length", 200))

        findings: List[Finding] = []
        for doc in parsed_documents(context):
            value = (doc.front_matter or {}).get("description")
            if value is None:
                # required_keys reports absence
                continue
            line = doc.key_line("description")

            if not isinstance(value, str):
                findings.append(
                    Finding(
                        check=self.name,
                        severity="error",
                        code="description.type",
                        message=f"description must be a string, got {type(value).__name__}.",
                        path=doc.rel_path,
                        line=line,
                    )
                )
                continue

            length = len(value.strip())
            if value == "":
                # required_keys reports an empty value
                continue
            if length < min_len:
                findings.append(
                    Finding(
                        check=self.name,
                        severity="error",
                        code="description.too_short",
                        message=f"description is {length} characters; minimum is {min_len}.",
                        path=doc.rel_path,
                        line=line,
                        data={"length": length, "min_length": min_len},
                    )
                )
            elif length > max_len:
                findings.append(
                    Finding(
                        check=self.name,
                        severity="error",
                        code="description.too_long",
                        message=f"description is {length} characters; maximum is {max_len}.",
                        path=doc.rel_path,
                        line=line,
                        data={"length": length, "max_length": max_len},
                    )
                )
        return findings


CHECK = DescriptionCheck()
