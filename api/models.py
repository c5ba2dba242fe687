"""
Pydantic request/response models for the JSON API.

Record itself (records/models.py) is the response model for single rows;
the models here wrap lists and describe request bodies.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from records.models import Record


class RecordListResponse(BaseModel):
    """Response body for GET /api/v1/records."""
    total: int = Field(..., description="Number of records in the store", examples=[12])
    matched: int = Field(..., description="Number of records matching the search", examples=[3])
    query: str = Field("", description="The search query as given", examples=["krakow"])
    fields: list[str] = Field(..., description="Fields the query was matched against")
    items: list[Record] = Field(..., description="Matching records in grid order")


class FieldUpdate(BaseModel):
    """Body for PATCH /api/v1/records/{id}: one cell edit."""
    field: str = Field(..., description="Editable field name", examples=["income"])
    value: str | float | None = Field(
        None,
        description="New value; numeric fields accept numbers or text, empty clears",
        examples=[450.0],
    )


class ConfirmsUpdate(BaseModel):
    """Body for PUT /api/v1/records/{id}/confirms."""
    confirms: list[str] = Field(
        default_factory=list,
        description="Confirmation kinds (room, office); duplicates collapse",
        examples=[["room", "office"]],
    )


class SessionOut(BaseModel):
    """Who the API thinks is calling."""
    user: str | None = Field(None, description="Signed-in username", examples=["admin"])
    role: str = Field(..., description="admin or read_only", examples=["admin"])


class ErrorResponse(BaseModel):
    """Standard error response body."""
    error: str = Field(..., description="Short error category", examples=["Not found"])
    detail: str | None = Field(None, description="Extended error detail")
    status_code: int = Field(..., ge=400, le=599, description="HTTP status code", examples=[404])
