from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Dict, List, Optional

from .globs import GlobSyntaxError, glob_matches, split_globs
from .models import Corpus, RulesetDetail, RulesetDocument, RulesetMeta


def _as_str(value) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, (dt.date, dt.datetime)):
        return value.isoformat()
    return str(value)


def _globs(doc: RulesetDocument) -> List[str]:
    try:
        return split_globs((doc.front_matter or {}).get("globs"))
    except GlobSyntaxError:
        return []


def to_meta(doc: RulesetDocument) -> RulesetMeta:
    fm = doc.front_matter or {}
    return RulesetMeta(
        slug=doc.slug,
        path=doc.rel_path,
        title=doc.title,
        trigger=_as_str(fm.get("trigger")),
        description=_as_str(fm.get("description")),
        globs=_globs(doc),
        version=_as_str(fm.get("version")),
        last_updated=_as_str(fm.get("last_updated")),
    )


@dataclass
class Catalog:
    """Read model over a loaded corpus; only documents with parseable front matter are listed."""

    fingerprint: str
    entries: Dict[str, RulesetDocument]

    @classmethod
    def from_corpus(cls, corpus: Corpus) -> "Catalog":
        entries = {d.slug: d for d in corpus.documents if d.parsed}
        return cls(fingerprint=corpus.fingerprint(), entries=entries)

    def list(self) -> List[RulesetMeta]:
        return [to_meta(self.entries[s]) for s in sorted(self.entries)]

    def get(self, slug: str) -> Optional[RulesetDetail]:
        doc = self.entries.get(slug)
        if doc is None:
            return None
        return RulesetDetail(**to_meta(doc).model_dump(), body=doc.body)

    def match(self, path: str) -> List[RulesetMeta]:
        out: List[RulesetMeta] = []
        for slug in sorted(self.entries):
            doc = self.entries[slug]
            trigger = (doc.front_matter or {}).get("trigger")
            if trigger == "always_on":
                out.append(to_meta(doc))
                continue
            if trigger != "glob":
                continue
            for pattern in _globs(doc):
                try:
                    if glob_matches(pattern, path):
                        out.append(to_meta(doc))
                        break
                except GlobSyntaxError:
                    continue
        return out
