from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Dict, List

from playbooks.plugins.checks._internal.context import documents
from playbooks.plugins.checks._internal.types import Finding

DEFAULT_PATTERN = r"^[a-z0-9-]+-ruleset\.md$"


def _suggest(filename: str) -> str:
    stem = filename[:-3] if filename.lower().endswith(".md") else filename
    stem = re.sub(r"[^a-z0-9]+", "-", stem.lower()).strip("-")
    if not stem.endswith("-ruleset"):
        stem = f"{stem}-ruleset" if stem else "ruleset"
    return f"{stem}.md"


@dataclass
class FilenameCheck:
    name: str = "filename"
    version: str = "1.0.0"
    enabled_by_default: bool = True
    phase: str = "parse"
    priority: int = 20

    def run(self, *, context: Dict[str, Any], options: Dict[str, Any]) -> List[Finding]:
        pattern = re.compile(str(options.get("pattern") or DEFAULT_PATTERN))
        findings: List[Finding] = []
        for doc in documents(context):
            if pattern.match(doc.filename):
                continue
            findings.append(
                Finding(
                    check=self.name,
                    severity="error",
                    code="filename.pattern",
                    message=f"File name {doc.filename!r} must match {pattern.pattern}",
                    path=doc.rel_path,
                    data={"suggested": _suggest(doc.filename)},
                )
            )
        return findings


CHECK = FilenameCheck()
