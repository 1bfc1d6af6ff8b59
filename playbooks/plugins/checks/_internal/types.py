from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional, Protocol

SEVERITIES: tuple[str, ...] = ("info", "warn", "error")
SEVERITY_RANK: Dict[str, int] = {s: i for i, s in enumerate(SEVERITIES)}


@dataclass(frozen=True)
class Finding:
    check: str
    severity: str   # "info" | "warn" | "error"
    code: str
    message: str
    path: Optional[str] = None   # None => corpus-wide
    line: Optional[int] = None
    data: Dict[str, Any] | None = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class CheckPlugin(Protocol):
    """
    Check module contract.
    Plugin modules must export: CHECK (instance implementing this protocol)
    """
    name: str
    version: str
    enabled_by_default: bool
    phase: str
    priority: int

    def run(self, *, context: Dict[str, Any], options: Dict[str, Any]) -> List[Finding]:
        ...
