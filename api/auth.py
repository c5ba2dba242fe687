"""
Mock cookie session and sign-in gate.

This is deliberately not real authentication: any configured username with
the shared password gets a session, and the session is two plain cookies:

    auth=true                 the request is signed in
    user=<url-encoded name>   who signed in (decides the role)

Both are set with Path=/, SameSite=Lax and Max-Age from APP_SESSION_MAX_AGE.

Page requests without ``auth=true`` are redirected to
``/login?next=<path+query>``. Static assets, the JSON API, the login page,
health checks, the docs and any path containing a dot pass straight through.
The API enforces its own session check (401) through a dependency instead.

Role is resolved from the ``user`` cookie once per request and handed to the
store as an explicit argument.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from urllib.parse import quote, unquote, urlencode

from starlette.responses import RedirectResponse, Response

from records.models import Role
from utils.config import AppConfig

logger = logging.getLogger(__name__)

AUTH_COOKIE = "auth"
USER_COOKIE = "user"

_PUBLIC_PREFIXES = ("/static", "/api", "/health", "/docs", "/redoc")
_PUBLIC_EXACT = {"/login"}


def is_public_path(path: str) -> bool:
    """True for paths the sign-in gate lets through unauthenticated."""
    if path in _PUBLIC_EXACT:
        return True
    if path.startswith(_PUBLIC_PREFIXES):
        return True
    return "." in path


def is_signed_in(cookies: Mapping[str, str]) -> bool:
    return cookies.get(AUTH_COOKIE) == "true"


def session_user(cookies: Mapping[str, str]) -> str | None:
    """Username from the session cookies, or None when not signed in."""
    if not is_signed_in(cookies):
        return None
    raw = cookies.get(USER_COOKIE)
    return unquote(raw) if raw else None


def allowed_users(config: AppConfig) -> list[str]:
    return config.admin_users + config.readonly_users


def authenticate(username: str, password: str, config: AppConfig) -> str | None:
    """Return the normalised username when the credentials are accepted."""
    uname = (username or "").strip()
    if uname and uname in allowed_users(config) and password == config.login_password:
        logger.info("login_ok user=%s", uname)
        return uname
    logger.warning("login_failed user=%s", uname or "-")
    return None


def role_for(username: str | None, config: AppConfig) -> Role:
    if username and username in config.admin_users:
        return Role.ADMIN
    return Role.READ_ONLY


def safe_next(target: str | None) -> str:
    """Only same-site absolute paths are valid redirect targets."""
    if not target or not target.startswith("/"):
        return "/"
    if target.startswith("//") or "\\" in target:
        return "/"
    return target


def login_redirect(path: str, query: str = "") -> RedirectResponse:
    """Redirect to the sign-in page, remembering where the user was going."""
    target = path + (f"?{query}" if query else "")
    return RedirectResponse(f"/login?{urlencode({'next': target})}", status_code=307)


def set_session_cookies(response: Response, username: str, config: AppConfig) -> None:
    for key, value in ((AUTH_COOKIE, "true"), (USER_COOKIE, quote(username))):
        response.set_cookie(
            key,
            value,
            max_age=config.session_max_age,
            path="/",
            samesite="lax",
        )


def clear_session_cookies(response: Response) -> None:
    response.delete_cookie(AUTH_COOKIE, path="/")
    response.delete_cookie(USER_COOKIE, path="/")
