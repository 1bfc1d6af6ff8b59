from __future__ import annotations

import hashlib
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from .front_matter import FrontMatterError

Trigger = Literal["always_on", "model_decision", "glob", "manual"]
TRIGGERS: tuple[str, ...] = ("always_on", "model_decision", "glob", "manual")

KNOWN_KEYS: tuple[str, ...] = ("trigger", "description", "globs", "version", "last_updated")

INDEX_FILENAME = "RULESETS_INDEX.md"
RESERVED_FILENAMES: tuple[str, ...] = (
    INDEX_FILENAME,
    "CONTRIBUTING.md",
    "RULESET_TEMPLATE.md",
    "README.md",
)

RULESET_SUFFIX = "-ruleset.md"

_TITLE_RE = re.compile(r"^#\s+(.+?)\s*#*\s*$")


@dataclass
class RulesetDocument:
    path: Path
    rel_path: str
    text: str
    has_front_matter: bool = False
    front_matter: Optional[Dict[str, Any]] = None
    front_matter_error: Optional[FrontMatterError] = None
    body: str = ""
    body_start_line: int = 1

    @property
    def filename(self) -> str:
        return self.path.name

    @property
    def slug(self) -> str:
        name = self.path.name
        if name.endswith(RULESET_SUFFIX):
            return name[: -len(RULESET_SUFFIX)]
        return self.path.stem

    @property
    def title(self) -> str:
        t = self.title_line()
        return t[1] if t else self.slug

    def title_line(self) -> Optional[tuple[int, str]]:
        """(line number, text) of the first level-1 heading outside code fences."""
        in_fence = False
        for offset, line in enumerate(self.body.splitlines()):
            stripped = line.strip()
            if stripped.startswith("```") or stripped.startswith("~~~"):
                in_fence = not in_fence
                continue
            if in_fence:
                continue
            m = _TITLE_RE.match(stripped)
            if m:
                return self.body_start_line + offset, m.group(1)
        return None

    def key_line(self, key: str) -> Optional[int]:
        """Best-effort 1-based line of a top-level front-matter key."""
        if not self.has_front_matter:
            return None
        for i, line in enumerate(self.text.lstrip("\ufeff").splitlines()[1:], start=2):
            if i >= self.body_start_line - 1:
                break
            if line.startswith(f"{key}:"):
                return i
        return None

    @property
    def parsed(self) -> bool:
        return self.front_matter is not None and self.front_matter_error is None


@dataclass
class Corpus:
    root: Path
    documents: List[RulesetDocument] = field(default_factory=list)
    reserved: Dict[str, Path] = field(default_factory=dict)
    contents: Dict[str, bytes] = field(default_factory=dict)

    @property
    def index_path(self) -> Path:
        return self.root / INDEX_FILENAME

    def get(self, rel_path: str) -> Optional[RulesetDocument]:
        for d in self.documents:
            if d.rel_path == rel_path:
                return d
        return None

    def get_by_slug(self, slug: str) -> Optional[RulesetDocument]:
        for d in self.documents:
            if d.slug == slug:
                return d
        return None

    def fingerprint(self) -> str:
        h = hashlib.sha256()
        for rel in sorted(self.contents):
            h.update(rel.encode("utf-8"))
            h.update(b"\0")
            h.update(self.contents[rel])
            h.update(b"\0")
        return h.hexdigest()[:16]


class RulesetMeta(BaseModel):
    slug: str
    path: str
    title: str
    trigger: Optional[str] = None
    description: Optional[str] = None
    globs: List[str] = Field(default_factory=list)
    version: Optional[str] = None
    last_updated: Optional[str] = None


class RulesetDetail(RulesetMeta):
    body: str
