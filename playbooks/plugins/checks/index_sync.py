from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

from playbooks.core.corpus.index import (
    IndexReadError,
    extract_block,
    index_is_current,
    read_index_text,
    render_index_block,
)
from playbooks.core.corpus.models import INDEX_FILENAME
from playbooks.plugins.checks._internal.context import corpus_of
from playbooks.plugins.checks._internal.types import Finding


@dataclass
class IndexSyncCheck:
    name: str = "index_sync"
    version: str = "1.0.0"
    enabled_by_default: bool = False
    phase: str = "corpus"
    priority: int = 20
    depends_on: List[str] = field(default_factory=lambda: ["index_coverage"])
    applies_to: List[str] = field(default_factory=lambda: ["corpus"])

    def run(self, *, context: Dict[str, Any], options: Dict[str, Any]) -> List[Finding]:
        corpus = corpus_of(context)
        try:
            text = read_index_text(corpus)
        except IndexReadError:
            # index_coverage reports index.unreadable
            return []
        if text is None:
            # index_coverage reports index.missing
            return []

        if extract_block(text) is None:
            return [
                Finding(
                    check=self.name,
                    severity="info",
                    code="index.no_managed_block",
                    message=f"{INDEX_FILENAME} has no generated table; run tools/gen_rulesets_index.py.",
                    path=INDEX_FILENAME,
                )
            ]

        if not index_is_current(text, render_index_block(corpus)):
            return [
                Finding(
                    check=self.name,
                    severity="warn",
                    code="index.out_of_date",
                    message=f"{INDEX_FILENAME} table differs from front matter; run tools/gen_rulesets_index.py.",
                    path=INDEX_FILENAME,
                )
            ]
        return []


CHECK = IndexSyncCheck()
