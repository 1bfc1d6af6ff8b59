from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple, TYPE_CHECKING

from .config import ChecksRunConfig
from .graph import PHASE_ORDER

if TYPE_CHECKING:
    from .registry import CheckRegistry


def resolve_checks(
    registry: "CheckRegistry",
    *,
    intent: Optional[str] = None,
    cfg: Optional[ChecksRunConfig] = None,
) -> Tuple[List[Any], List[Dict[str, str]]]:
    if cfg is None:
        cfg = ChecksRunConfig()

    active_names = {p.name for p in registry.get_active_checks(cfg)}

    selected = []
    skipped = []

    for name in sorted(registry.names()):
        plugin = registry.get(name)
        if name not in active_names:
            skipped.append({"name": name, "reason": "disabled"})
            continue

        applies_to = getattr(plugin, "applies_to", [])
        if applies_to and intent and intent not in applies_to:
            skipped.append({"name": name, "reason": "not_applicable"})
            continue

        selected.append(plugin)

    selected.sort(
        key=lambda p: (
            PHASE_ORDER.get(getattr(p, "phase", "document"), 999),
            getattr(p, "priority", 100),
            p.name,
        )
    )

    return selected, skipped
