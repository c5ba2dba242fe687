"""
/api/v1/records endpoints.

Read endpoints are open to any signed-in user. Create, edit, confirm and
delete pass the caller's role to the store, which refuses non-admins
(mapped to 403 by the app's exception handlers). ``/export`` streams the
search result as CSV or newline-delimited JSON.
"""

from fastapi import APIRouter, Depends, Response, status
from fastapi import Query as FQuery
from fastapi.responses import StreamingResponse

from api.dependencies import current_user, get_role, get_store, require_session
from api.models import (
    ConfirmsUpdate,
    ErrorResponse,
    FieldUpdate,
    RecordListResponse,
    SessionOut,
)
from records.export import iter_csv, iter_ndjson
from records.filters import DEFAULT_SEARCH_FIELDS, search_records
from records.models import Record, Role
from records.store import RecordStore

router = APIRouter(
    prefix="/records",
    tags=["records"],
    dependencies=[Depends(require_session)],
)

_ERRORS = {
    400: {"model": ErrorResponse, "description": "Unknown field or bad value"},
    401: {"description": "Not signed in"},
    403: {"model": ErrorResponse, "description": "Read-only role"},
    404: {"model": ErrorResponse, "description": "Record not found"},
}


@router.get("", response_model=RecordListResponse, summary="List and search records")
def list_records(
    q: str = FQuery("", description="Case-insensitive substring to search for"),
    field: list[str] | None = FQuery(
        None,
        description="Fields to search (default: name, place, service_type, notes)",
    ),
    store: RecordStore = Depends(get_store),
) -> RecordListResponse:
    fields = field or list(DEFAULT_SEARCH_FIELDS)
    records = store.list()
    matched = search_records(records, q, fields)
    return RecordListResponse(
        total=len(records),
        matched=len(matched),
        query=q,
        fields=fields,
        items=matched,
    )


@router.get(
    "/export",
    responses={
        200: {"content": {"text/csv": {}, "application/x-ndjson": {}},
              "description": "Matching records as a file download"},
        400: _ERRORS[400],
        401: _ERRORS[401],
    },
    summary="Export matching records as CSV or NDJSON",
)
def export_records(
    q: str = FQuery("", description="Case-insensitive substring to search for"),
    field: list[str] | None = FQuery(None, description="Fields to search"),
    fmt: str = FQuery("csv", pattern="^(csv|json)$", description="Output format"),
    store: RecordStore = Depends(get_store),
) -> StreamingResponse:
    """Stream the records the grid would show for the same search."""
    fields = field or list(DEFAULT_SEARCH_FIELDS)
    matched = search_records(store.list(), q, fields)
    headers = {"X-Total-Count": str(len(matched))}

    if fmt == "csv":
        return StreamingResponse(
            iter_csv(matched),
            media_type="text/csv",
            headers={"Content-Disposition": "attachment; filename=records.csv", **headers},
        )
    return StreamingResponse(
        iter_ndjson(matched),
        media_type="application/x-ndjson",
        headers={"Content-Disposition": "attachment; filename=records.ndjson", **headers},
    )


@router.get("/session", response_model=SessionOut, summary="Current user and role")
def whoami(
    user: str | None = Depends(current_user),
    role: Role = Depends(get_role),
) -> SessionOut:
    return SessionOut(user=user, role=role.value)


@router.get("/{record_id}", response_model=Record, responses=_ERRORS, summary="Get one record")
def get_record(record_id: int, store: RecordStore = Depends(get_store)) -> Record:
    return store.get(record_id)


@router.post(
    "",
    response_model=Record,
    status_code=status.HTTP_201_CREATED,
    responses=_ERRORS,
    summary="Add a blank job row",
)
def create_record(
    store: RecordStore = Depends(get_store),
    role: Role = Depends(get_role),
) -> Record:
    return store.create(role)


@router.patch("/{record_id}", response_model=Record, responses=_ERRORS, summary="Edit one cell")
def update_record(
    record_id: int,
    body: FieldUpdate,
    store: RecordStore = Depends(get_store),
    role: Role = Depends(get_role),
) -> Record:
    return store.update_field(record_id, body.field, body.value, role)


@router.put(
    "/{record_id}/confirms",
    response_model=Record,
    responses=_ERRORS,
    summary="Replace confirmations",
)
def update_confirms(
    record_id: int,
    body: ConfirmsUpdate,
    store: RecordStore = Depends(get_store),
    role: Role = Depends(get_role),
) -> Record:
    return store.set_confirms(record_id, body.confirms, role)


@router.delete(
    "/{record_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=_ERRORS,
    summary="Delete a record",
)
def delete_record(
    record_id: int,
    store: RecordStore = Depends(get_store),
    role: Role = Depends(get_role),
) -> Response:
    store.delete(record_id, role)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
