"""
/api/v1/analytics endpoints.

All three endpoints take the same filter query parameters as the analytics
page:

    service    repeatable; restrict to these service types (none = all)
    from_date  inclusive lower date bound, ISO-8601 (empty = unbounded)
    to_date    inclusive upper date bound, ISO-8601 (empty = unbounded)

Dashboards are memoised in the app's TTL cache keyed on the store version,
so any record change invalidates them on the next request.
"""

from fastapi import APIRouter, Depends, HTTPException, Response
from fastapi import Query as FQuery

from analytics.dashboard import CHARTS, Dashboard, build_dashboard
from api.dependencies import get_analytics_cache, get_store, require_session
from records.filters import RecordFilter
from records.store import RecordStore
from utils.cache import TTLCache

router = APIRouter(
    prefix="/analytics",
    tags=["analytics"],
    dependencies=[Depends(require_session)],
)


def cached_dashboard(
    store: RecordStore,
    cache: TTLCache,
    record_filter: RecordFilter,
) -> Dashboard:
    """Return the dashboard for *record_filter*, computing it at most once
    per store version."""
    key = (id(store), store.version, record_filter.cache_key())
    return cache.get_or_compute(
        key, lambda: build_dashboard(store.list(), record_filter)
    )


def _record_filter(
    service: list[str] | None = FQuery(None, description="Service type(s) to include"),
    from_date: str | None = FQuery(None, description="Earliest date, inclusive"),
    to_date: str | None = FQuery(None, description="Latest date, inclusive"),
) -> RecordFilter:
    return RecordFilter.build(service, from_date, to_date)


def _dashboard(
    record_filter: RecordFilter = Depends(_record_filter),
    store: RecordStore = Depends(get_store),
    cache: TTLCache = Depends(get_analytics_cache),
) -> Dashboard:
    return cached_dashboard(store, cache, record_filter)


@router.get("/series", summary="Aggregated series")
def series(dash: Dashboard = Depends(_dashboard)) -> dict:
    """Revenue by date, profit by service type and income by name."""
    return dash.series_dict()


@router.get("/charts", summary="Chart draw instructions")
def charts(dash: Dashboard = Depends(_dashboard)) -> dict:
    """Bars, labels, arcs and legend for all three charts."""
    return dash.charts_dict()


@router.get(
    "/charts/{name}.svg",
    summary="One chart as SVG",
    response_class=Response,
    responses={
        200: {"content": {"image/svg+xml": {}}},
        404: {"description": "Unknown chart"},
    },
)
def chart_svg(name: str, dash: Dashboard = Depends(_dashboard)) -> Response:
    if name not in CHARTS:
        raise HTTPException(
            status_code=404,
            detail=f"Unknown chart '{name}'; expected one of {list(CHARTS)}",
        )
    return Response(content=dash.svg(name), media_type="image/svg+xml")
