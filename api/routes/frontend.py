"""
Frontend HTML routes.

Serves the Jinja2 templates for the records grid and the analytics page and
handles the grid's form posts.

Routes:
    GET  /                          → index.html (search + records grid)
    POST /records                   → add a blank row, 303 back to the grid
    POST /records/{id}/edit         → save changed cells of one row
    POST /records/{id}/confirms     → replace the row's confirmations
    POST /records/{id}/delete       → delete the row
    GET  /analytics                 → analytics.html (filters + three charts)

Form posts carry a hidden ``back`` field with the grid URL (search included)
so the user lands where they were. Non-admin posts are refused by the store
and answered with the 403.html page.
"""

from typing import Any
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, FastAPI, Form, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates
from starlette.exceptions import HTTPException as StarletteHTTPException

from analytics.dashboard import CHARTS
from api.auth import safe_next
from api.dependencies import current_user, get_analytics_cache, get_role, get_store
from api.routes.analytics import cached_dashboard
from records.filters import (
    DEFAULT_SEARCH_FIELDS,
    SEARCHABLE_FIELDS,
    RecordFilter,
    search_records,
)
from records.models import EDITABLE_FIELDS, NUMERIC_FIELDS, ConfirmKind, Record, Role
from records.store import PermissionDenied, RecordStore
from utils.cache import TTLCache
from utils.strings import display_text, parse_optional_number

router = APIRouter(tags=["frontend"])

# Templates instance is set by create_app() after mounting.
_templates: Jinja2Templates | None = None


def set_templates(t: Jinja2Templates) -> None:
    global _templates
    _templates = t


def _tmpl() -> Jinja2Templates:
    if _templates is None:
        raise RuntimeError("Templates not initialised, call set_templates() first")
    return _templates


def _back(target: str | None) -> RedirectResponse:
    return RedirectResponse(safe_next(target), status_code=303)


def _changed_fields(record: Record, form: dict[str, Any]) -> dict[str, Any]:
    """Submitted editable fields whose value differs from the stored one."""
    changes: dict[str, Any] = {}
    for field in EDITABLE_FIELDS:
        if field not in form:
            continue
        raw = form[field]
        current = getattr(record, field)
        if field in NUMERIC_FIELDS:
            if parse_optional_number(raw) != current:
                changes[field] = raw
        elif raw != current:
            changes[field] = raw
    return changes


# ── Grid ──────────────────────────────────────────────────────────────────────

@router.get("/", response_class=HTMLResponse, include_in_schema=False)
def index(
    request: Request,
    store: RecordStore = Depends(get_store),
    role: Role = Depends(get_role),
    user: str | None = Depends(current_user),
) -> HTMLResponse:
    """Records grid with search box and searchable-field selector."""
    q = request.query_params.get("q", "")
    fields = [
        f for f in request.query_params.getlist("field") if f in SEARCHABLE_FIELDS
    ] or list(DEFAULT_SEARCH_FIELDS)
    records = store.list()
    rows = search_records(records, q, fields)

    return _tmpl().TemplateResponse(
        request,
        "index.html",
        {
            "user":              user,
            "role":              role,
            "can_edit":          role.can_edit,
            "query":             q,
            "selected_fields":   fields,
            "searchable_fields": SEARCHABLE_FIELDS,
            "rows":              rows,
            "total":             len(records),
            "confirm_kinds":     [k.value for k in ConfirmKind],
            "numeric_fields":    NUMERIC_FIELDS,
            "display_text":      display_text,
            "back":              str(request.url.path)
                                 + (f"?{request.url.query}" if request.url.query else ""),
            "export_query":      urlencode({"q": q, "field": fields}, doseq=True),
        },
    )


@router.post("/records", include_in_schema=False)
def add_record(
    back: str = Form("/"),
    store: RecordStore = Depends(get_store),
    role: Role = Depends(get_role),
) -> RedirectResponse:
    store.create(role)
    return _back(back)


@router.post("/records/{record_id}/edit", include_in_schema=False)
async def edit_record(
    record_id: int,
    request: Request,
    store: RecordStore = Depends(get_store),
    role: Role = Depends(get_role),
) -> RedirectResponse:
    """Apply every submitted cell that differs from the stored value."""
    form = await request.form()
    values = {k: v for k, v in form.items() if isinstance(v, str)}
    record = store.get(record_id)
    for field, value in _changed_fields(record, values).items():
        store.update_field(record_id, field, value, role)
    return _back(values.get("back"))


@router.post("/records/{record_id}/confirms", include_in_schema=False)
async def confirm_record(
    record_id: int,
    request: Request,
    store: RecordStore = Depends(get_store),
    role: Role = Depends(get_role),
) -> RedirectResponse:
    form = await request.form()
    confirms = [v for v in form.getlist("confirms") if isinstance(v, str)]
    store.set_confirms(record_id, confirms, role)
    back = form.get("back")
    return _back(back if isinstance(back, str) else None)


@router.post("/records/{record_id}/delete", include_in_schema=False)
def delete_record(
    record_id: int,
    back: str = Form("/"),
    store: RecordStore = Depends(get_store),
    role: Role = Depends(get_role),
) -> RedirectResponse:
    store.delete(record_id, role)
    return _back(back)


# ── Analytics ─────────────────────────────────────────────────────────────────

@router.get("/analytics", response_class=HTMLResponse, include_in_schema=False)
def analytics_page(
    request: Request,
    store: RecordStore = Depends(get_store),
    cache: TTLCache = Depends(get_analytics_cache),
    user: str | None = Depends(current_user),
) -> HTMLResponse:
    """Service/date filters and the three charts as inline SVG."""
    params = request.query_params
    record_filter = RecordFilter.build(
        params.getlist("service"),
        params.get("from_date"),
        params.get("to_date"),
    )
    dash = cached_dashboard(store, cache, record_filter)
    charts = [
        {"name": name, "kind": kind, "title": title, "svg": dash.svg(name)}
        for name, (kind, title) in CHARTS.items()
    ]
    return _tmpl().TemplateResponse(
        request,
        "analytics.html",
        {
            "user":            user,
            "filter":          record_filter,
            "service_options": dash.service_options,
            "record_count":    dash.record_count,
            "charts":          charts,
            "legend":          dash.charts["income_by_name"].legend,
        },
    )


# ── Error pages ───────────────────────────────────────────────────────────────

def register_error_handlers(app: FastAPI) -> None:
    """Render HTML error pages for browser paths; the API keeps JSON errors.

    Must run after create_app() has registered its JSON handlers, which the
    HTML handlers delegate to for ``/api`` paths.
    """
    json_permission_handler = app.exception_handlers[PermissionDenied]

    @app.exception_handler(StarletteHTTPException)
    async def html_http_exception_handler(request: Request, exc: StarletteHTTPException):
        path = request.url.path
        if exc.status_code != 404 or path.startswith("/api"):
            return await http_exception_handler(request, exc)
        return _tmpl().TemplateResponse(
            request,
            "404.html",
            {"path": path, "user": current_user(request)},
            status_code=404,
        )

    @app.exception_handler(PermissionDenied)
    async def html_permission_handler(request: Request, exc: PermissionDenied):
        if request.url.path.startswith("/api"):
            return await json_permission_handler(request, exc)
        return _tmpl().TemplateResponse(
            request,
            "403.html",
            {"user": current_user(request), "back": "/"},
            status_code=403,
        )
