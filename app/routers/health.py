# app/routers/health.py
"""Liveness probe. No auth and no data-store round trip."""

from fastapi import APIRouter

router = APIRouter()


@router.get("/health", summary="Liveness check")
def health_check():
    return {"ok": True}
