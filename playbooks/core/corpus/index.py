from __future__ import annotations

import re
from pathlib import Path
from typing import List, Optional

from .models import INDEX_FILENAME, Corpus, RulesetDocument

BLOCK_BEGIN = "<!-- rulesets:begin -->"
BLOCK_END = "<!-- rulesets:end -->"

_LINK_RE = re.compile(r"\[[^\]]*\]\(\s*<?([^)\s>]+)>?(?:\s+\"[^\"]*\")?\s*\)")

TABLE_HEADER = [
    "| Ruleset | Description | Trigger | Globs |",
    "| --- | --- | --- | --- |",
]


class IndexReadError(ValueError):
    pass


def _decode(data: bytes) -> str:
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise IndexReadError(f"{INDEX_FILENAME} is not valid UTF-8: {exc}") from exc


def read_index_text(corpus: Corpus) -> Optional[str]:
    """Index text from the bytes loaded with the corpus; None when there is no index."""
    data = corpus.contents.get(INDEX_FILENAME)
    if data is None:
        if not corpus.index_path.is_file():
            return None
        try:
            data = corpus.index_path.read_bytes()
        except OSError as exc:
            raise IndexReadError(f"cannot read {INDEX_FILENAME}: {exc}") from exc
    return _decode(data)


def extract_links(text: str) -> List[str]:
    """Relative .md link targets, anchors stripped, in document order."""
    out: List[str] = []
    for m in _LINK_RE.finditer(text or ""):
        target = m.group(1).strip()
        if re.match(r"^[a-zA-Z][a-zA-Z0-9+.-]*:", target):
            continue
        target = target.split("#", 1)[0]
        if not target.endswith(".md"):
            continue
        while target.startswith("./"):
            target = target[2:]
        if target and target not in out:
            out.append(target)
    return out


def _cell(value: str) -> str:
    return " ".join(str(value).split()).replace("|", "\\|")


def _row(doc: RulesetDocument) -> str:
    fm = doc.front_matter or {}
    globs = fm.get("globs")
    if isinstance(globs, (list, tuple)):
        globs = ", ".join(str(g) for g in globs)
    globs_cell = f"`{_cell(globs)}`" if globs else ""
    return "| [{title}]({path}) | {desc} | {trigger} | {globs} |".format(
        title=_cell(doc.title),
        path=doc.rel_path,
        desc=_cell(fm.get("description") or ""),
        trigger=_cell(fm.get("trigger") or ""),
        globs=globs_cell,
    )


def render_index_block(corpus: Corpus) -> str:
    rows = [_row(d) for d in sorted(corpus.documents, key=lambda d: d.rel_path) if d.parsed]
    lines = [BLOCK_BEGIN, *TABLE_HEADER, *rows, BLOCK_END]
    return "\n".join(lines)


def extract_block(text: str) -> str | None:
    start = text.find(BLOCK_BEGIN)
    if start == -1:
        return None
    end = text.find(BLOCK_END, start)
    if end == -1:
        return None
    return text[start:end + len(BLOCK_END)]


def update_index_text(text: str, block: str) -> str:
    current = extract_block(text)
    if current is not None:
        return text.replace(current, block, 1)
    base = text.rstrip("\n")
    return (base + "\n\n" if base else "") + block + "\n"


def _normalize(block: str) -> str:
    return "\n".join(line.rstrip() for line in block.replace("\r\n", "\n").strip().split("\n"))


def index_is_current(text: str, block: str) -> bool:
    current = extract_block(text)
    if current is None:
        return False
    return _normalize(current) == _normalize(block)


def write_index(path: Path, corpus: Corpus) -> bool:
    """Rewrite the managed block in place. Returns True when the file changed."""
    block = render_index_block(corpus)
    old = _decode(path.read_bytes()) if path.exists() else ""
    new = update_index_text(old, block)
    if new == old:
        return False
    path.write_text(new, encoding="utf-8")
    return True
