"""
Sign-in and sign-out routes.

Routes:
    GET  /login     → login.html, or straight to ``next`` when already signed in
    POST /login     → set the session cookies and redirect to ``next``
    POST /logout    → clear the session cookies and return to /login
"""

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse, Response

from api.auth import (
    authenticate,
    clear_session_cookies,
    is_signed_in,
    safe_next,
    set_session_cookies,
)
from api.dependencies import get_config
from api.routes.frontend import _tmpl
from utils.config import AppConfig

router = APIRouter(tags=["auth"])

INVALID_LOGIN = "Invalid username or password"


def _login_page(request: Request, next_url: str, username: str = "", error: str | None = None) -> Response:
    return _tmpl().TemplateResponse(
        request,
        "login.html",
        {"next": next_url, "username": username, "error": error, "user": None},
    )


@router.get("/login", response_class=HTMLResponse, include_in_schema=False)
def login_form(request: Request, next: str = "/") -> Response:
    target = safe_next(next)
    if is_signed_in(request.cookies):
        return RedirectResponse(target, status_code=303)
    return _login_page(request, target)


@router.post("/login", include_in_schema=False)
def login(
    request: Request,
    username: str = Form(""),
    password: str = Form(""),
    next: str = Form("/"),
    config: AppConfig = Depends(get_config),
) -> Response:
    target = safe_next(next)
    user = authenticate(username, password, config)
    if user is None:
        return _login_page(request, target, username=username.strip(), error=INVALID_LOGIN)
    response = RedirectResponse(target, status_code=303)
    set_session_cookies(response, user, config)
    return response


@router.post("/logout", include_in_schema=False)
def logout() -> Response:
    response = RedirectResponse("/login", status_code=303)
    clear_session_cookies(response)
    return response
