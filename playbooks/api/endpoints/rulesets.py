from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, HTTPException, Query

from playbooks.api import deps
from playbooks.core.corpus.catalog import Catalog
from playbooks.core.corpus.index import IndexReadError, index_is_current, read_index_text, render_index_block

router = APIRouter(prefix="/api/v1", tags=["Rulesets"])


@router.get("/rulesets")
def list_rulesets() -> Dict[str, Any]:
    catalog = Catalog.from_corpus(deps.corpus())
    items = catalog.list()
    return {
        "count": len(items),
        "fingerprint": catalog.fingerprint,
        "rulesets": [m.model_dump() for m in items],
    }


@router.get("/rulesets/match")
def match_rulesets(path: str = Query(..., min_length=1, description="Project-relative file path")) -> Dict[str, Any]:
    catalog = Catalog.from_corpus(deps.corpus())
    items = catalog.match(path)
    return {
        "path": path,
        "count": len(items),
        "rulesets": [m.model_dump() for m in items],
    }


@router.get("/rulesets/{slug}")
def get_ruleset(slug: str) -> Dict[str, Any]:
    catalog = Catalog.from_corpus(deps.corpus())
    detail = catalog.get(slug)
    if detail is None:
        raise HTTPException(status_code=404, detail=f"Unknown ruleset: {slug}")
    return detail.model_dump()


@router.get("/index/preview")
def index_preview() -> Dict[str, Any]:
    corpus = deps.corpus()
    block = render_index_block(corpus)
    try:
        text = read_index_text(corpus)
        readable = True
    except IndexReadError:
        text, readable = None, False
    return {
        "index_exists": corpus.index_path.exists(),
        "readable": readable,
        "current": text is not None and index_is_current(text, block),
        "block": block,
    }
