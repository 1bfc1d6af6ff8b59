from __future__ import annotations

from fastapi import APIRouter
from starlette.responses import JSONResponse

from playbooks.core import settings
from playbooks.core.corpus.models import INDEX_FILENAME
from playbooks.core.observability.metrics import inc_named

router = APIRouter()


@router.get("/api/v1/health/live")
def liveness():
    inc_named("health_live")
    return {"status": "alive"}


@router.get("/api/v1/health/ready")
def readiness():
    """
    Readiness reflects ability to serve the catalog: the corpus root must
    exist and contain an index.
    """
    inc_named("health_ready")

    root = settings.corpus_root()
    problems: list[str] = []

    if not root.is_dir():
        problems.append(f"corpus_root_missing:{root}")
    elif not (root / INDEX_FILENAME).is_file():
        problems.append(f"index_missing:{INDEX_FILENAME}")

    if problems:
        return JSONResponse(
            status_code=503,
            content={"status": "not_ready", "problems": problems},
        )

    return {"status": "ready", "env": settings.environment()}
