"""
Record selection: the analytics filter and the grid's free-text search.

RecordFilter restricts by service type and by an inclusive date range.
Dates are compared as strings, which is correct because records store
ISO-8601 dates; an empty bound (what a cleared date picker submits) means
no bound.

search_records() mirrors the grid's search box: a case-insensitive
substring match over the fields the user ticked.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from records.models import Record
from utils.strings import display_text

SEARCHABLE_FIELDS: dict[str, str] = {
    "name":         "Job / Technician",
    "date":         "Date",
    "place":        "Place",
    "service_type": "Service type",
    "income":       "Income",
    "cost":         "Cost",
    "hours":        "Hours",
    "status":       "Status",
    "notes":        "Notes",
}

DEFAULT_SEARCH_FIELDS: tuple[str, ...] = ("name", "place", "service_type", "notes")


@dataclass(frozen=True)
class RecordFilter:
    """Service-type membership plus an inclusive date range."""

    service_types: frozenset[str] = field(default_factory=frozenset)
    from_date: str | None = None
    to_date: str | None = None

    @classmethod
    def build(
        cls,
        service_types: Iterable[str] | None = None,
        from_date: str | None = None,
        to_date: str | None = None,
    ) -> "RecordFilter":
        """Normalise raw form/query values into a filter."""
        return cls(
            service_types=frozenset(s for s in (service_types or ()) if s),
            from_date=from_date or None,
            to_date=to_date or None,
        )

    @property
    def is_empty(self) -> bool:
        return not self.service_types and self.from_date is None and self.to_date is None

    def matches(self, record: Record) -> bool:
        if self.service_types and record.service_type not in self.service_types:
            return False
        if self.from_date is not None and record.date < self.from_date:
            return False
        if self.to_date is not None and record.date > self.to_date:
            return False
        return True

    def apply(self, records: Iterable[Record]) -> list[Record]:
        return [r for r in records if self.matches(r)]

    def cache_key(self) -> tuple:
        return (tuple(sorted(self.service_types)), self.from_date, self.to_date)


def service_options(records: Iterable[Record]) -> list[str]:
    """Distinct service types in first-seen order."""
    return list(dict.fromkeys(r.service_type for r in records))


def validate_search_fields(fields: Iterable[str]) -> list[str]:
    """Return *fields* unchanged, or raise ValueError naming the unknown ones."""
    fields = list(fields)
    unknown = [f for f in fields if f not in SEARCHABLE_FIELDS]
    if unknown:
        raise ValueError(
            f"Unknown search field(s) {unknown}; "
            f"expected any of {sorted(SEARCHABLE_FIELDS)}"
        )
    return fields


def search_records(
    records: Sequence[Record],
    query: str,
    fields: Iterable[str] = DEFAULT_SEARCH_FIELDS,
) -> list[Record]:
    """Return records where any of *fields* contains *query* (case-insensitive)."""
    fields = validate_search_fields(fields)
    q = (query or "").strip().lower()
    if not q:
        return list(records)

    def _hit(record: Record) -> bool:
        for name in fields:
            value = getattr(record, name)
            if value is None:
                continue
            if q in display_text(value).lower():
                return True
        return False

    return [r for r in records if _hit(r)]
