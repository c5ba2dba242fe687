"""
FastAPI dependencies shared by the routers.

The store, config and analytics cache live on ``app.state`` (set by
create_app), so each app instance, and each test client, has its own data.

Usage in a route::

    @router.post("/records")
    def create(store=Depends(get_store), role=Depends(get_role)):
        return store.create(role)
"""

from __future__ import annotations

from fastapi import Depends, HTTPException, Request

from api.auth import role_for, session_user
from records.models import Role
from records.store import RecordStore
from utils.cache import TTLCache
from utils.config import AppConfig


def get_store(request: Request) -> RecordStore:
    return request.app.state.store


def get_config(request: Request) -> AppConfig:
    return request.app.state.config


def get_analytics_cache(request: Request) -> TTLCache:
    return request.app.state.analytics_cache


def current_user(request: Request) -> str | None:
    return session_user(request.cookies)


def get_role(
    user: str | None = Depends(current_user),
    config: AppConfig = Depends(get_config),
) -> Role:
    return role_for(user, config)


def require_session(request: Request) -> str:
    """API guard: 401 unless the caller holds a session cookie."""
    user = session_user(request.cookies)
    if user is None:
        raise HTTPException(status_code=401, detail="Sign in required")
    return user
