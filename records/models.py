"""
Record model for technician jobs.

One Record is one business event: who did the job, when, where, what service
it was, what it earned and cost, and which confirmations have been received.
Numeric fields are optional; None means "not yet recorded", never zero.

Confirmations behave as a set: duplicates collapse and the first-seen order
is kept so the grid shows them the way they were ticked.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ConfirmKind(str, Enum):
    """Kinds of confirmation a job can collect."""
    ROOM = "room"
    OFFICE = "office"


class Role(str, Enum):
    """What the signed-in user may do with the grid."""
    ADMIN = "admin"
    READ_ONLY = "read_only"

    @property
    def can_edit(self) -> bool:
        return self is Role.ADMIN


NUMERIC_FIELDS = ("income", "cost", "hours")
TEXT_FIELDS = ("name", "date", "place", "service_type", "status", "notes")
EDITABLE_FIELDS = TEXT_FIELDS + NUMERIC_FIELDS


class Record(BaseModel):
    """A single job row in the grid."""
    model_config = ConfigDict(frozen=True)

    id: int = Field(..., ge=1, description="Unique row ID", examples=[7])
    name: str = Field("", description="Job / technician", examples=["Anna Kowalska"])
    date: str = Field("", description="ISO-8601 job date", examples=["2024-01-15"])
    place: str = Field("", description="Where the job took place", examples=["Warsaw"])
    service_type: str = Field("", description="Service category", examples=["Installation"])
    income: float | None = Field(None, description="Amount invoiced")
    cost: float | None = Field(None, description="Amount spent")
    hours: float | None = Field(None, description="Hours worked")
    status: str = Field("Pending", description="Free-form status label", examples=["Done"])
    notes: str = Field("", description="Free-form notes")
    confirms: list[ConfirmKind] = Field(default_factory=list, description="Confirmations received")

    @field_validator("confirms")
    @classmethod
    def _dedupe_confirms(cls, value: list[ConfirmKind]) -> list[ConfirmKind]:
        return list(dict.fromkeys(value))

    @property
    def profit(self) -> float:
        """Income minus cost, counting absent amounts as 0."""
        return (self.income or 0.0) - (self.cost or 0.0)

    @property
    def row_class(self) -> str:
        """CSS class for the grid row: none, one or both confirmations."""
        if not self.confirms:
            return ""
        if len(self.confirms) == 1:
            return "row-yellow"
        return "row-green"


def blank_record(record_id: int) -> Record:
    """The row the "Add job" button inserts."""
    return Record(id=record_id, status="Pending")
