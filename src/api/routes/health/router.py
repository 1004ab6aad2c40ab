"""Endpoints de health check.

- /health: liveness em JSON
- /probe: liveness em texto puro (deploy do requester)
- /ready: readiness pelas settings exigidas do papel do processo
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, Literal

from fastapi import APIRouter
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import BaseModel

from config.settings import get_base_settings, role_settings_errors

logger = logging.getLogger(__name__)

router = APIRouter()


class HealthResponse(BaseModel):
    status: str
    service: str
    role: str
    timestamp: str
    version: str = "1.0.0"


@dataclass(frozen=True, slots=True)
class ConfigCheck:
    """Resultado da checagem de um grupo de settings."""

    status: Literal["ok", "failed"]
    errors: tuple[str, ...] = ()

    @classmethod
    def from_errors(cls, errors: list[str]) -> ConfigCheck:
        return cls(status="failed", errors=tuple(errors)) if errors else cls(status="ok")

    def as_dict(self) -> dict[str, Any]:
        return {"status": self.status, "errors": list(self.errors)}


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    settings = get_base_settings()
    return HealthResponse(
        status="healthy",
        service=settings.service_name,
        role=settings.service_role,
        timestamp=datetime.now(UTC).isoformat(),
    )


@router.get("/probe", response_class=PlainTextResponse)
async def probe() -> str:
    return "ok"


@router.get("/ready")
async def readiness_check() -> JSONResponse:
    """Readiness: 200 se toda settings do papel estiver válida, senão 503."""
    checks = {
        group: ConfigCheck.from_errors(errors) for group, errors in role_settings_errors().items()
    }
    failed = [group for group, check in checks.items() if check.status != "ok"]
    if failed:
        logger.warning("readiness_check_failed", extra={"failed": failed})

    payload = {
        "status": "not_ready" if failed else "ready",
        "role": get_base_settings().service_role,
        "checks": {group: check.as_dict() for group, check in checks.items()},
        "timestamp": datetime.now(UTC).isoformat(),
    }
    return JSONResponse(content=payload, status_code=503 if failed else 200)
