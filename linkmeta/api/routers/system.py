"""Service health endpoint."""

from __future__ import annotations

from fastapi import APIRouter

from linkmeta.config import settings

router = APIRouter()


@router.get("/health")
def healthcheck() -> dict[str, str]:
    return {"status": "ok", "app": settings.app_name}
