from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

from playbooks.core.corpus.globs import GlobSyntaxError, compile_glob, split_globs
from playbooks.plugins.checks._internal.context import parsed_documents
from playbooks.plugins.checks._internal.types import Finding


@dataclass
class GlobsCheck:
    name: str = "globs"
    version: str = "1.0.0"
    enabled_by_default: bool = True
    phase: str = "document"
    priority: int = 40
    depends_on: List[str] = field(default_factory=lambda: ["front_matter"])

    def run(self, *, context: Dict[str, Any], options: Dict[str, Any]) -> List[Finding]:
        findings: List[Finding] = []

        for doc in parsed_documents(context):
            raw = (doc.front_matter or {}).get("globs")
            if raw is None:
                continue
            line = doc.key_line("globs")

            try:
                patterns = split_globs(raw)
            except GlobSyntaxError as exc:
                findings.append(
                    Finding(
                        check=self.name,
                        severity="error",
                        code="globs.type",
                        message=str(exc),
                        path=doc.rel_path,
                        line=line,
                    )
                )
                continue

            seen: set[str] = set()
            for pattern in patterns:
                if pattern in seen:
                    findings.append(
                        Finding(
                            check=self.name,
                            severity="warn",
                            code="globs.duplicate",
                            message=f"Glob {pattern!r} is listed more than once.",
                            path=doc.rel_path,
                            line=line,
                            data={"pattern": pattern},
                        )
                    )
                    continue
                seen.add(pattern)

                try:
                    compile_glob(pattern)
                except GlobSyntaxError as exc:
                    findings.append(
                        Finding(
                            check=self.name,
                            severity="error",
                            code="globs.invalid",
                            message=f"Invalid glob {pattern!r}: {exc}",
                            path=doc.rel_path,
                            line=line,
                            data={"pattern": pattern},
                        )
                    )
                    continue

                if pattern.startswith("./"):
                    findings.append(
                        Finding(
                            check=self.name,
                            severity="warn",
                            code="globs.dot_prefix",
                            message=f"Glob {pattern!r} should not start with './'.",
                            path=doc.rel_path,
                            line=line,
                            data={"pattern": pattern},
                        )
                    )
        return findings


CHECK = GlobsCheck()
