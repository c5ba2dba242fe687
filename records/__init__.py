"""Job records: model, in-memory store, seed data, filtering and search."""

from records.filters import (
    DEFAULT_SEARCH_FIELDS,
    SEARCHABLE_FIELDS,
    RecordFilter,
    search_records,
    service_options,
)
from records.models import ConfirmKind, Record, Role
from records.seed import load_seed
from records.store import PermissionDenied, RecordNotFound, RecordStore

__all__ = [
    "ConfirmKind",
    "DEFAULT_SEARCH_FIELDS",
    "PermissionDenied",
    "Record",
    "RecordFilter",
    "RecordNotFound",
    "RecordStore",
    "Role",
    "SEARCHABLE_FIELDS",
    "load_seed",
    "search_records",
    "service_options",
]
