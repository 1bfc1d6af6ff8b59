from __future__ import annotations

import hashlib
import json
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .types import Finding
from .config import ChecksRunConfig


@dataclass
class CacheEntry:
    created_at: float
    findings: List[Finding]
    order: List[str]
    skipped: List[Dict[str, str]] = field(default_factory=list)


class ChecksRunCache:
    def __init__(self, max_entries: int = 128, ttl_seconds: int = 300):
        self.max_entries = max_entries
        self.ttl_seconds = ttl_seconds
        self._store: Dict[str, CacheEntry] = {}
        self.hits = 0
        self.misses = 0

    def _evict_if_needed(self) -> None:
        if len(self._store) <= self.max_entries:
            return
        oldest_key = min(self._store.items(), key=lambda kv: kv[1].created_at)[0]
        self._store.pop(oldest_key, None)

    def _is_expired(self, entry: CacheEntry) -> bool:
        return (time.time() - entry.created_at) > self.ttl_seconds

    def get(self, key: str) -> Optional[CacheEntry]:
        entry = self._store.get(key)
        if not entry:
            self.misses += 1
            return None
        if self._is_expired(entry):
            self._store.pop(key, None)
            self.misses += 1
            return None
        self.hits += 1
        return entry

    def set(
        self,
        key: str,
        findings: List[Finding],
        order: List[str],
        skipped: Optional[List[Dict[str, str]]] = None,
    ) -> None:
        self._store[key] = CacheEntry(
            created_at=time.time(),
            findings=list(findings),
            order=list(order),
            skipped=list(skipped or []),
        )
        self._evict_if_needed()

    def clear(self) -> None:
        self._store.clear()
        self.hits = 0
        self.misses = 0

    def stats(self) -> Dict[str, Any]:
        return {
            "kind": "checks_run_cache",
            "hits": self.hits,
            "misses": self.misses,
            "entries": len(self._store),
            "ttl_seconds": self.ttl_seconds,
            "max_entries": self.max_entries,
        }


def make_cache_key(
    *,
    intent: str | None,
    cfg: ChecksRunConfig,
    context: Dict[str, Any],
    checks_fingerprint: str,
) -> str:
    corpus = context.get("corpus")
    payload = {
        "intent": intent,
        "enabled": cfg.enabled,
        "disabled": sorted(cfg.disabled or []),
        "options": cfg.options,
        "root": str(getattr(corpus, "root", "")),
        "corpus_fingerprint": corpus.fingerprint() if corpus is not None else None,
        "documents": [d.rel_path for d in context.get("documents") or []],
        "checks_fingerprint": checks_fingerprint,
    }
    raw = json.dumps(payload, sort_keys=True, default=str).encode("utf-8")
    return hashlib.sha256(raw).hexdigest()
