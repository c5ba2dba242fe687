"""
FastAPI application factory.

Usage:
    python -m api.app                    # Dev server on port 8000
    APP_SEED_PATH=/data/jobs.json python -m api.app

OpenAPI docs available at http://localhost:8000/docs after starting.

Request pipeline (outermost first):
    CORS -> security headers -> request log + rate limit -> sign-in gate -> routes

APP-001: Proxy/forwarded IP handling with TRUSTED_PROXIES env var.
APP-002: Rate limit memory cleanup with max_tracked_ips and periodic eviction.
APP-003: Structured JSON logging when APP_LOG_FORMAT=json.
APP-004: CORS middleware with configurable origins via APP_CORS_ORIGINS.
"""

import json
import logging
import time
import uuid
from collections import defaultdict
from collections.abc import Iterable
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from api.auth import is_public_path, is_signed_in, login_redirect
from api.routes import analytics as analytics_routes
from api.routes import auth as auth_routes
from api.routes import frontend as frontend_routes
from api.routes import records as records_routes
from records.models import Record
from records.seed import load_seed
from records.store import PermissionDenied, RecordNotFound, RecordStore
from utils.cache import TTLCache
from utils.config import AppConfig
from utils.formatting import format_amount, format_percent

# ── Configuration ─────────────────────────────────────────────────────────────
_cfg = AppConfig.from_env()

# ── APP-003: Structured JSON logging ─────────────────────────────────────────


class _JsonFormatter(logging.Formatter):
    """Emit log records as newline-delimited JSON."""

    def format(self, record: logging.LogRecord) -> str:
        data: dict = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        # Merge extra fields added via logger.info("...", extra={...})
        for key in ("method", "path", "status", "duration_ms", "client_ip",
                    "request_id"):
            if hasattr(record, key):
                data[key] = getattr(record, key)
        if record.exc_info:
            data["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(data)


_logger = logging.getLogger("technicians_app")
_handler = logging.StreamHandler()
if _cfg.log_format == "json":
    _handler.setFormatter(_JsonFormatter())
else:
    _handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")
    )
logging.basicConfig(handlers=[_handler], level=logging.INFO, force=True)

# ── APP-002: Rate limiting state with memory bounds ───────────────────────────
# ip -> path -> hit timestamps within the last minute
_rate_counters: dict[str, dict[str, list]] = defaultdict(lambda: defaultdict(list))
_MAX_TRACKED_IPS = 10_000
_last_cleanup: float = 0.0
_CLEANUP_INTERVAL = 300.0  # 5 minutes


def _cleanup_rate_counters() -> None:
    """Remove stale rate counter entries to bound memory usage."""
    global _last_cleanup
    now = time.time()
    if now - _last_cleanup < _CLEANUP_INTERVAL:
        return
    _last_cleanup = now
    window_start = now - 60.0
    to_delete = []
    for ip, paths in _rate_counters.items():
        for path in list(paths.keys()):
            paths[path] = [t for t in paths[path] if t > window_start]
            if not paths[path]:
                del paths[path]
        if not paths:
            to_delete.append(ip)
    for ip in to_delete:
        del _rate_counters[ip]
    if len(_rate_counters) > _MAX_TRACKED_IPS:
        excess = len(_rate_counters) - _MAX_TRACKED_IPS
        oldest = sorted(
            _rate_counters.keys(),
            key=lambda ip: sum(len(v) for v in _rate_counters[ip].values()),
        )[:excess]
        for ip in oldest:
            del _rate_counters[ip]


# ── APP-001: Extract real client IP (proxy-aware) ─────────────────────────────

def _get_client_ip(request: Request, trusted_proxies: set[str]) -> str:
    """Return the real client IP, respecting X-Forwarded-For from trusted proxies."""
    direct_ip = request.client.host if request.client else "unknown"
    if not trusted_proxies or direct_ip not in trusted_proxies:
        return direct_ip
    xff = request.headers.get("X-Forwarded-For", "")
    if xff:
        # X-Forwarded-For: client, proxy1, proxy2; leftmost is the real client
        real_ip = xff.split(",")[0].strip()
        if real_ip:
            return real_ip
    return direct_ip


def _rate_limit_for(method: str, path: str, config: AppConfig) -> int:
    if method == "POST" and path == "/login":
        return config.rate_limit_login
    return config.rate_limit_default


def _error_body(error: str, detail: str | None, status_code: int) -> dict:
    return {"error": error, "detail": detail, "status_code": status_code}


def create_app(
    config: AppConfig | None = None,
    records_seed: Iterable[Record] | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        config: Override the environment-derived settings (useful for testing).
        records_seed: Start the store from these records instead of the seed
            file or the built-in sample.

    Returns:
        Configured FastAPI application instance.
    """
    cfg = config or _cfg

    app = FastAPI(
        title="Technicians Business",
        summary="Job records grid and analytics for a field-technician business.",
        description=(
            "## Technicians Business API\n\n"
            "JSON access to the job records shown on the grid page, plus the "
            "aggregated series and chart draw instructions behind the analytics "
            "page.\n\n"
            "### Sessions\n"
            "Every `/api/v1` endpoint needs the session cookies set by "
            "`POST /login` and answers `401` without them. Creating, editing, "
            "confirming and deleting records needs an admin user (`403` "
            "otherwise).\n\n"
            "### Rate limits\n"
            f"- `POST /login`: {cfg.rate_limit_login} req/min per IP\n"
            f"- All other endpoints: {cfg.rate_limit_default} req/min per IP\n\n"
            "Returns `429 Too Many Requests` with `Retry-After: 60` when exceeded.\n\n"
            "### Data\n"
            "Records live in memory only. A restart resets them to the seed."
        ),
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_tags=[
            {
                "name": "records",
                "description": "List, search, create, edit, confirm and delete job records.",
            },
            {
                "name": "analytics",
                "description": (
                    "Filtered aggregations (revenue by date, profit by service type, "
                    "income by name) and their chart draw instructions or SVG."
                ),
            },
            {
                "name": "meta",
                "description": "Health check.",
            },
        ],
    )

    # ── Per-app state ─────────────────────────────────────────────────────────
    seed = list(records_seed) if records_seed is not None else load_seed(cfg.seed_path)
    app.state.config = cfg
    app.state.store = RecordStore(seed)
    app.state.analytics_cache = TTLCache(maxsize=64, ttl_seconds=cfg.chart_cache_ttl)
    _logger.info("store_ready records=%d", len(app.state.store))

    # ── Sign-in gate (innermost middleware) ───────────────────────────────────

    @app.middleware("http")
    async def sign_in_gate(request: Request, call_next):
        """Redirect page requests without a session to the sign-in page."""
        path = request.url.path
        if is_public_path(path) or is_signed_in(request.cookies):
            return await call_next(request)
        return login_redirect(path, request.url.query)

    # ── Request logging + rate limiting middleware ────────────────────────────

    @app.middleware("http")
    async def log_and_rate_limit(request: Request, call_next):
        """Log each request and enforce per-IP rate limits."""
        # APP-003: Generate request ID for tracing
        request_id = str(uuid.uuid4())[:8]
        start = time.monotonic()
        client_ip = _get_client_ip(request, cfg.trusted_proxies)
        path = request.url.path

        # APP-002: Periodic memory cleanup
        _cleanup_rate_counters()

        # Health check is not rate limited
        if path == "/health":
            return await call_next(request)

        limit = _rate_limit_for(request.method, path, cfg)
        bucket = f"{request.method} {path}"
        now = time.time()
        window_start = now - 60.0
        hits = _rate_counters[client_ip][bucket]
        _rate_counters[client_ip][bucket] = [t for t in hits if t > window_start]
        if len(_rate_counters[client_ip][bucket]) >= limit:
            _logger.warning(
                "rate_limited ip=%s path=%s limit=%d", client_ip, path, limit
            )
            return JSONResponse(
                status_code=429,
                content=_error_body("Too many requests", None, 429),
                headers={"Retry-After": "60"},
            )
        _rate_counters[client_ip][bucket].append(now)

        response = await call_next(request)
        duration_ms = (time.monotonic() - start) * 1000

        # APP-003: Add request ID header
        response.headers["X-Request-ID"] = request_id

        if cfg.log_format == "json":
            _logger.info(
                "request",
                extra={
                    "method": request.method,
                    "path": path,
                    "status": response.status_code,
                    "duration_ms": round(duration_ms, 1),
                    "client_ip": client_ip,
                    "request_id": request_id,
                },
            )
        else:
            _logger.info(
                "method=%s path=%s status=%d duration_ms=%.1f ip=%s rid=%s",
                request.method, path, response.status_code, duration_ms,
                client_ip, request_id,
            )
        return response

    # ── Content Security Policy + security headers ────────────────────────────

    @app.middleware("http")
    async def security_headers(request: Request, call_next):
        """Add Content-Security-Policy, X-Content-Type-Options, and X-Frame-Options."""
        response = await call_next(request)
        # Charts are inline SVG; the pages carry no scripts.
        response.headers["Content-Security-Policy"] = (
            "default-src 'self'; "
            "script-src 'self'; "
            "style-src 'self' 'unsafe-inline'; "
            "img-src 'self' data:; "
            "font-src 'self'; "
            "connect-src 'self';"
        )
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        return response

    # ── APP-004: CORS middleware ───────────────────────────────────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.cors_origins,
        allow_credentials=False,
        allow_methods=["GET", "HEAD", "OPTIONS"],
        allow_headers=["*"],
    )

    # ── Error handling ────────────────────────────────────────────────────────

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        """Catch unhandled exceptions and return JSON instead of HTML traceback."""
        _logger.exception("unhandled path=%s", request.url.path)
        return JSONResponse(
            status_code=500,
            content=_error_body("Internal server error", str(exc), 500),
        )

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError):
        return JSONResponse(
            status_code=400,
            content=_error_body("Bad request", str(exc), 400),
        )

    @app.exception_handler(RecordNotFound)
    async def not_found_handler(request: Request, exc: RecordNotFound):
        return JSONResponse(
            status_code=404,
            content=_error_body("Not found", str(exc), 404),
        )

    @app.exception_handler(PermissionDenied)
    async def permission_handler(request: Request, exc: PermissionDenied):
        return JSONResponse(
            status_code=403,
            content=_error_body("Forbidden", str(exc), 403),
        )

    # ── Health check ──────────────────────────────────────────────────────────

    @app.get("/health", tags=["meta"], summary="Health check")
    def health(request: Request):
        """Return 200 OK with the size and version of the record store."""
        store: RecordStore = request.app.state.store
        return {"status": "ok", "records": len(store), "version": store.version}

    # ── Register routers ──────────────────────────────────────────────────────

    prefix = "/api/v1"
    app.include_router(records_routes.router,   prefix=prefix)
    app.include_router(analytics_routes.router, prefix=prefix)

    # ── Static files + Jinja2 templates ───────────────────────────────────────
    _here = Path(__file__).parent.parent  # project root

    static_dir = _here / "static"
    templates_dir = _here / "templates"

    if static_dir.exists():
        app.mount("/static", StaticFiles(directory=str(static_dir)), name="static")

    templates = Jinja2Templates(directory=str(templates_dir))
    templates.env.filters["fmt_amount"] = format_amount
    templates.env.filters["fmt_percent"] = format_percent

    # Wire templates into the frontend router
    frontend_routes.set_templates(templates)
    app.include_router(auth_routes.router)
    app.include_router(frontend_routes.router)

    # HTML 404 page for browser paths
    frontend_routes.register_error_handlers(app)

    return app


# Singleton instance for uvicorn
app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "api.app:app",
        host=_cfg.api_host,
        port=_cfg.api_port,
        reload=True,
        log_level="info",
    )
