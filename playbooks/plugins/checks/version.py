from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List

from playbooks.plugins.checks._internal.context import parsed_documents
from playbooks.plugins.checks._internal.types import Finding

SEMVER_RE = re.compile(r"^(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)(?:-[0-9A-Za-z.-]+)?(?:\+[0-9A-Za-z.-]+)?$")


@dataclass
class VersionCheck:
    name: str = "version"
    version: str = "1.0.0"
    enabled_by_default: bool = True
    phase: str = "document"
    priority: int = 50
    depends_on: List[str] = field(default_factory=lambda: ["front_matter"])

    def run(self, *, context: Dict[str, Any], options: Dict[str, Any]) -> List[Finding]:
        findings: List[Finding] = []
        for doc in parsed_documents(context):
            value = (doc.front_matter or {}).get("version")
            if value is None:
                continue
            line = doc.key_line("version")

            if not isinstance(value, str):
                # unquoted 1.0 loads as a float, 1 as an int
                findings.append(
                    Finding(
                        check=self.name,
                        severity="error",
                        code="version.type",
                        message=f"version must be a quoted string like \"1.0.0\", got {type(value).__name__} {value!r}.",
                        path=doc.rel_path,
                        line=line,
                    )
                )
                continue

            if not SEMVER_RE.match(value.strip()):
                findings.append(
                    Finding(
                        check=self.name,
                        severity="error",
                        code="version.format",
                        message=f"version {value!r} is not MAJOR.MINOR.PATCH.",
                        path=doc.rel_path,
                        line=line,
                    )
                )
        return findings


CHECK = VersionCheck()
