from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

from playbooks.core.corpus.index import IndexReadError, extract_links, read_index_text
from playbooks.core.corpus.models import INDEX_FILENAME
from playbooks.plugins.checks._internal.context import corpus_of
from playbooks.plugins.checks._internal.types import Finding


@dataclass
class IndexCoverageCheck:
    name: str = "index_coverage"
    version: str = "1.0.0"
    enabled_by_default: bool = True
    phase: str = "corpus"
    priority: int = 10
    depends_on: List[str] = field(default_factory=lambda: ["filename"])
    applies_to: List[str] = field(default_factory=lambda: ["corpus"])

    def run(self, *, context: Dict[str, Any], options: Dict[str, Any]) -> List[Finding]:
        corpus = corpus_of(context)
        try:
            text = read_index_text(corpus)
        except IndexReadError as exc:
            return [
                Finding(
                    check=self.name,
                    severity="error",
                    code="index.unreadable",
                    message=str(exc),
                    path=INDEX_FILENAME,
                )
            ]

        if text is None:
            return [
                Finding(
                    check=self.name,
                    severity="error",
                    code="index.missing",
                    message=f"{INDEX_FILENAME} not found in {corpus.root}",
                )
            ]

        links = extract_links(text)
        linked = set(links)

        findings: List[Finding] = []
        for doc in corpus.documents:
            if doc.rel_path not in linked:
                findings.append(
                    Finding(
                        check=self.name,
                        severity="error",
                        code="index.unlisted",
                        message=f"{doc.rel_path} is not linked from {INDEX_FILENAME}.",
                        path=doc.rel_path,
                    )
                )

        for target in links:
            if not (corpus.root / target).is_file():
                findings.append(
                    Finding(
                        check=self.name,
                        severity="error",
                        code="index.broken_link",
                        message=f"{INDEX_FILENAME} links to {target}, which does not exist.",
                        path=INDEX_FILENAME,
                        line=_line_of(text, target),
                        data={"target": target},
                    )
                )
        return findings


def _line_of(text: str, needle: str) -> int | None:
    for i, line in enumerate(text.splitlines(), start=1):
        if needle in line:
            return i
    return None


CHECK = IndexCoverageCheck()
