from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, HTTPException, Query

from playbooks.api import deps
from playbooks.api.observability.metrics import VALIDATION_FINDINGS_TOTAL, VALIDATION_RUNS_TOTAL
from playbooks.api.schemas.validation import (
    CheckInfoModel,
    ChecksListResponse,
    ValidateRequest,
    ValidateResponse,
)
from playbooks.core import settings
from playbooks.core.corpus.loader import CorpusNotFoundError
from playbooks.core.lint.runner import UnknownPathError, build_registry, run_validation
from playbooks.plugins.checks._internal.config import ChecksRunConfig
from playbooks.plugins.checks._internal.graph import CircularDependencyError
from playbooks.plugins.checks._internal.registry import get_run_cache
from playbooks.plugins.checks._internal.resolver import resolve_checks

router = APIRouter(prefix="/api/v1", tags=["Validation"])


def _split(values: Optional[List[str]]) -> List[str]:
    out: List[str] = []
    for v in values or []:
        out.extend(x.strip() for x in v.split(",") if x.strip())
    return out


@router.get("/checks", response_model=ChecksListResponse)
def list_checks():
    reg = build_registry(deps.lint_config())
    checks = reg.list_checks()
    return ChecksListResponse(
        count=len(checks),
        fingerprint=reg.fingerprint,
        checks=[
            CheckInfoModel(
                name=c.name,
                version=c.version,
                phase=c.phase,
                priority=c.priority,
                enabled_by_default=c.enabled_by_default,
                depends_on=list(c.depends_on),
                applies_to=list(c.applies_to),
            )
            for c in checks
        ],
    )


@router.get("/checks/resolve")
def resolve(
    intent: str = Query("corpus", pattern="^(corpus|files)$"),
    enabled: Optional[List[str]] = Query(None),
    disabled: Optional[List[str]] = Query(None),
) -> Dict[str, Any]:
    config = deps.lint_config()
    reg = build_registry(config)
    override = ChecksRunConfig(enabled=_split(enabled) or None, disabled=_split(disabled))
    cfg = config.checks.merged(override)

    selected, skipped = resolve_checks(reg, intent=intent, cfg=cfg)
    try:
        order = reg.execution_order(selected)
    except CircularDependencyError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e

    return {
        "intent": intent,
        "selected": [p.name for p in selected],
        "skipped": skipped,
        "order": order,
        "fingerprint": reg.fingerprint,
    }


@router.post("/validate", response_model=ValidateResponse)
def validate(req: ValidateRequest):
    root = settings.corpus_root()
    config = deps.lint_config()
    checks = ChecksRunConfig.from_payload(req.checks.model_dump()) if req.checks else None

    try:
        report = run_validation(
            root,
            config=config,
            paths=req.paths,
            checks=checks,
            fail_on=req.fail_on,
        )
    except CorpusNotFoundError as e:
        raise HTTPException(status_code=503, detail=str(e)) from e
    except UnknownPathError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except CircularDependencyError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e

    VALIDATION_RUNS_TOTAL.labels(intent=report["intent"], ok=str(report["ok"]).lower()).inc()
    for severity, n in report["counts"].items():
        if n:
            VALIDATION_FINDINGS_TOTAL.labels(severity=severity).inc(n)

    return ValidateResponse(**report)


@router.get("/cache/stats")
def cache_stats() -> Dict[str, Any]:
    return get_run_cache().stats()
