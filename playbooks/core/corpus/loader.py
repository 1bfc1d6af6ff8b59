from __future__ import annotations

import fnmatch
import logging
from pathlib import Path
from typing import Iterable, List, Optional

from .front_matter import FrontMatterError, parse_front_matter, split_front_matter
from .models import RESERVED_FILENAMES, Corpus, RulesetDocument

_log = logging.getLogger("playbooks.corpus")


class CorpusNotFoundError(FileNotFoundError):
    pass


def _matches_any(path: str, patterns: List[str]) -> bool:
    for pat in patterns:
        if fnmatch.fnmatch(path, pat):
            return True
    return False


def load_document(path: Path, *, root: Path, data: Optional[bytes] = None) -> RulesetDocument:
    rel = path.relative_to(root).as_posix()
    try:
        raw = data if data is not None else path.read_bytes()
        text = raw.decode("utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        _log.warning("Cannot read ruleset %s: %s", path, exc)
        return RulesetDocument(
            path=path,
            rel_path=rel,
            text="",
            front_matter_error=FrontMatterError(f"cannot read file: {exc}"),
        )

    doc = RulesetDocument(path=path, rel_path=rel, text=text, body=text)
    try:
        block = split_front_matter(text)
    except FrontMatterError as exc:
        doc.has_front_matter = True
        doc.front_matter_error = exc
        return doc

    doc.body = block.body
    doc.body_start_line = block.body_start_line
    if block.raw is None:
        return doc

    doc.has_front_matter = True
    try:
        doc.front_matter = parse_front_matter(block.raw)
    except FrontMatterError as exc:
        doc.front_matter_error = exc
    return doc


def load_corpus(root: Path | str, *, exclude: Iterable[str] = ()) -> Corpus:
    """
    Load every markdown file directly under `root`.

    Reserved documents (index, contributing guide, template, readme) are
    tracked separately and are not treated as rulesets.
    """
    root = Path(root)
    if not root.exists():
        raise CorpusNotFoundError(f"corpus root not found: {root}")
    if not root.is_dir():
        raise CorpusNotFoundError(f"corpus root is not a directory: {root}")

    excludes = [str(x) for x in exclude if str(x).strip()]
    corpus = Corpus(root=root)

    for md in sorted(root.glob("*.md"), key=lambda p: p.name):
        if not md.is_file():
            continue
        rel = md.relative_to(root).as_posix()
        if _matches_any(rel, excludes):
            _log.debug("Excluded %s", rel)
            continue

        try:
            data = md.read_bytes()
        except OSError:
            data = None
        if data is not None:
            corpus.contents[rel] = data

        if md.name in RESERVED_FILENAMES:
            corpus.reserved[md.name] = md
            continue

        corpus.documents.append(load_document(md, root=root, data=data))

    _log.info(
        "Loaded %d rulesets (%d reserved documents) from %s",
        len(corpus.documents),
        len(corpus.reserved),
        root,
    )
    return corpus
