from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

from playbooks.core.corpus.models import KNOWN_KEYS
from playbooks.plugins.checks._internal.context import parsed_documents
from playbooks.plugins.checks._internal.types import Finding

DEFAULT_REQUIRED = ["trigger", "description"]
DEFAULT_RECOMMENDED = ["version", "last_updated"]


def _as_list(value: Any, default: List[str]) -> List[str]:
    if value is None:
        return list(default)
    if isinstance(value, str):
        return [value]
    return [str(v) for v in value]


@dataclass
class RequiredKeysCheck:
    name: str = "required_keys"
    version: str = "1.0.0"
    enabled_by_default: bool = True
    phase: str = "document"
    priority: int = 10
    depends_on: List[str] = field(default_factory=lambda: ["front_matter"])

    def run(self, *, context: Dict[str, Any], options: Dict[str, Any]) -> List[Finding]:
        required = _as_list(options.get("required"), DEFAULT_REQUIRED)
        recommended = _as_list(options.get("recommended"), DEFAULT_RECOMMENDED)
        known = set(KNOWN_KEYS) | set(required) | set(recommended) | set(_as_list(options.get("allowed"), []))

        findings: List[Finding] = []
        for doc in parsed_documents(context):
            fm = doc.front_matter or {}

            for key in required:
                if fm.get(key) in (None, ""):
                    findings.append(
                        Finding(
                            check=self.name,
                            severity="error",
                            code="required_keys.missing",
                            message=f"Required front matter key {key!r} is missing or empty.",
                            path=doc.rel_path,
                            line=doc.key_line(key) or 1,
                            data={"key": key},
                        )
                    )

            for key in recommended:
                if key in required:
                    continue
                if fm.get(key) in (None, ""):
                    findings.append(
                        Finding(
                            check=self.name,
                            severity="warn",
                            code="required_keys.recommended_missing",
                            message=f"Recommended front matter key {key!r} is missing.",
                            path=doc.rel_path,
                            line=1,
                            data={"key": key},
                        )
                    )

            for key in sorted(k for k in fm if k not in known):
                findings.append(
                    Finding(
                        check=self.name,
                        severity="info",
                        code="required_keys.unknown",
                        message=f"Unknown front matter key {key!r}.",
                        path=doc.rel_path,
                        line=doc.key_line(key),
                        data={"key": key},
                    )
                )
        return findings


CHECK = RequiredKeysCheck()
