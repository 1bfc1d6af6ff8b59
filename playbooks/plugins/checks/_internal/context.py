from __future__ import annotations

from typing import Any, Dict, List

from playbooks.core.corpus.models import Corpus, RulesetDocument


def corpus_of(context: Dict[str, Any]) -> Corpus:
    return context["corpus"]


def documents(context: Dict[str, Any]) -> List[RulesetDocument]:
    docs = context.get("documents")
    if docs is None:
        docs = corpus_of(context).documents
    return list(docs)


def parsed_documents(context: Dict[str, Any]) -> List[RulesetDocument]:
    """Documents whose front matter parsed; the front_matter check reports the rest."""
    return [d for d in documents(context) if d.parsed]
