# serieshub/services/api/routers/health.py
from __future__ import annotations
from fastapi import APIRouter
from serieshub.common.settings import get_settings

router = APIRouter()


@router.get(f"{get_settings().api.prefix}/health")
def health():
    s = get_settings()
    return {
        "ok": True,
        "app": s.app_name,
        "env": s.app_env,
    }
