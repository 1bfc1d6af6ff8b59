from __future__ import annotations

import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from playbooks import __version__
from playbooks.api.endpoints import health
from playbooks.api.endpoints import metrics as metrics_ep
from playbooks.api.endpoints import rulesets
from playbooks.api.endpoints import validate
from playbooks.api.middleware.error_shaping import SafeErrorMiddleware
from playbooks.api.middleware.request_context import RequestContextMiddleware

app = FastAPI(
    title="Agent-Playbooks Ruleset API",
    version=__version__,
)

# ------------------------------------------------------------
# Middleware stack (ORDER MATTERS)
# Starlette reverses add_middleware order: the LAST call = OUTERMOST wrapper.
# Runtime order (outermost → innermost):
#   SafeErrorMiddleware → CORSMiddleware → RequestContext → handler
# ------------------------------------------------------------

app.add_middleware(RequestContextMiddleware)

_cors_origins_raw = os.getenv("PLAYBOOKS_CORS_ORIGINS", "").strip()
_cors_origins = [o.strip() for o in _cors_origins_raw.split(",") if o.strip()] if _cors_origins_raw else ["*"]
app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

app.add_middleware(SafeErrorMiddleware)


app.include_router(health.router)
app.include_router(metrics_ep.router)
app.include_router(rulesets.router)
app.include_router(validate.router)


@app.get("/health")
def health_check():
    return {"status": "healthy"}
