from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field


class ChecksRunConfigModel(BaseModel):
    enabled: Optional[List[str]] = Field(default=None, description="Allowlist. If set, only these run.")
    disabled: List[str] = Field(default_factory=list)
    options: Dict[str, Dict[str, Any]] = Field(default_factory=dict)
    force: bool = False


class ValidateRequest(BaseModel):
    paths: List[str] = Field(default_factory=list, description="Ruleset paths relative to the corpus root; empty = whole corpus.")
    checks: Optional[ChecksRunConfigModel] = None
    fail_on: Optional[Literal["error", "warn", "info"]] = None


class FindingModel(BaseModel):
    check: str
    severity: str
    code: str
    message: str
    path: Optional[str] = None
    line: Optional[int] = None
    data: Dict[str, Any] | None = None


class ValidateResponse(BaseModel):
    kind: str
    ok: bool
    fail_on: str
    intent: str
    corpus_fingerprint: str
    checks_fingerprint: str
    documents: List[str]
    counts: Dict[str, int]
    findings: List[FindingModel]
    meta: Dict[str, Any] = Field(default_factory=dict)


class CheckInfoModel(BaseModel):
    name: str
    version: str
    phase: str
    priority: int
    enabled_by_default: bool
    depends_on: List[str]
    applies_to: List[str]


class ChecksListResponse(BaseModel):
    count: int
    fingerprint: str
    checks: List[CheckInfoModel]
