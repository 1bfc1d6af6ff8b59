from __future__ import annotations

import datetime as dt
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from playbooks.plugins.checks._internal.context import parsed_documents
from playbooks.plugins.checks._internal.types import Finding

DATE_RE = re.compile(r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$")


def _to_date(value: Any) -> Optional[dt.date]:
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    if isinstance(value, str):
        if not DATE_RE.match(value.strip()):
            return None
        try:
            return dt.date.fromisoformat(value.strip())
        except ValueError:
            return None
    return None


@dataclass
class LastUpdatedCheck:
    name: str = "last_updated"
    version: str = "1.0.0"
    enabled_by_default: bool = True
    phase: str = "document"
    priority: int = 60
    depends_on: List[str] = field(default_factory=lambda: ["front_matter"])

    def run(self, *, context: Dict[str, Any], options: Dict[str, Any]) -> List[Finding]:
        today = _to_date(options.get("today")) or dt.date.today()
        max_age = options.get("max_age_days")
        max_age = int(max_age) if max_age is not None else None

        findings: List[Finding] = []
        for doc in parsed_documents(context):
            raw = (doc.front_matter or {}).get("last_updated")
            if raw is None:
                continue
            line = doc.key_line("last_updated")

            when = _to_date(raw)
            if when is None:
                findings.append(
                    Finding(
                        check=self.name,
                        severity="error",
                        code="last_updated.format",
                        message=f"last_updated {raw!r} must be a date in YYYY-MM-DD form.",
                        path=doc.rel_path,
                        line=line,
                    )
                )
                continue

            if when > today:
                findings.append(
                    Finding(
                        check=self.name,
                        severity="error",
                        code="last_updated.future",
                        message=f"last_updated {when.isoformat()} is in the future.",
                        path=doc.rel_path,
                        line=line,
                        data={"today": today.isoformat()},
                    )
                )
                continue

            if max_age is not None and (today - when).days > max_age:
                findings.append(
                    Finding(
                        check=self.name,
                        severity="warn",
                        code="last_updated.stale",
                        message=f"last_updated {when.isoformat()} is older than {max_age} days.",
                        path=doc.rel_path,
                        line=line,
                        data={"age_days": (today - when).days, "max_age_days": max_age},
                    )
                )
        return findings


CHECK = LastUpdatedCheck()
