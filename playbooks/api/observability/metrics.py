from __future__ import annotations

import re

from prometheus_client import Counter, Histogram

_RULESET_ROUTES = ("match",)
_SLUG_RE = re.compile(r"^(/api/v1/rulesets)/([^/]+)$")
_KNOWN_PREFIXES = ("/api/v1/", "/health", "/metrics", "/docs", "/redoc", "/openapi.json")


def normalize_path(path: str) -> str:
    """Label value for a request path: slugs collapse to :slug, unrouted paths to /:other."""
    p = path or "/"
    m = _SLUG_RE.match(p)
    if m and m.group(2) not in _RULESET_ROUTES:
        return f"{m.group(1)}/:slug"
    if not p.startswith(_KNOWN_PREFIXES):
        return "/:other"
    return p


HTTP_REQUESTS_TOTAL = Counter(
    "playbooks_http_requests_total",
    "HTTP requests served by the catalog API",
    ["method", "path", "status"],
)

HTTP_REQUEST_DURATION_SECONDS = Histogram(
    "playbooks_http_request_duration_seconds",
    "Catalog API request duration in seconds",
    ["method", "path"],
)

VALIDATION_RUNS_TOTAL = Counter(
    "playbooks_validation_runs_total",
    "Validation runs served by the API",
    ["intent", "ok"],
)

VALIDATION_FINDINGS_TOTAL = Counter(
    "playbooks_validation_findings_total",
    "Findings produced by API validation runs",
    ["severity"],
)
