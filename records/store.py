"""
In-memory record store backing the grid.

The store is the single owner of the active record collection for one app
instance. Nothing is persisted: each new store starts from the seed and
every change is lost when the process exits.

Every mutating call takes the caller's Role explicitly and refuses unless it
is Role.ADMIN. Handlers run in a thread pool, so mutations are serialised
with a lock; readers get a snapshot list and never see a half-applied edit.

``version`` increases on every successful mutation. Derived views (analytics
series, chart instructions) are memoised against it.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable
from typing import Any

from records.models import (
    EDITABLE_FIELDS,
    NUMERIC_FIELDS,
    ConfirmKind,
    Record,
    Role,
    blank_record,
)
from utils.strings import parse_optional_number

logger = logging.getLogger(__name__)


class RecordNotFound(LookupError):
    """No record with the requested id exists."""

    def __init__(self, record_id: int) -> None:
        super().__init__(f"Record {record_id} not found")
        self.record_id = record_id


class PermissionDenied(PermissionError):
    """The caller's role does not allow this change."""


class RecordStore:
    """Thread-safe, in-memory collection of Records keyed by id."""

    def __init__(self, records: Iterable[Record] = ()) -> None:
        self._records: dict[int, Record] = {}
        for record in records:
            if record.id in self._records:
                raise ValueError(f"Duplicate record id {record.id} in seed")
            self._records[record.id] = record
        self._lock = threading.Lock()
        self._version = 0

    # ── Reads ─────────────────────────────────────────────────────────────

    @property
    def version(self) -> int:
        return self._version

    def __len__(self) -> int:
        return len(self._records)

    def list(self) -> list[Record]:
        """Snapshot of all records in insertion order."""
        with self._lock:
            return list(self._records.values())

    def get(self, record_id: int) -> Record:
        with self._lock:
            try:
                return self._records[record_id]
            except KeyError:
                raise RecordNotFound(record_id) from None

    # ── Mutations ─────────────────────────────────────────────────────────

    @staticmethod
    def _require_admin(role: Role, action: str) -> None:
        if not role.can_edit:
            logger.warning("permission_denied action=%s role=%s", action, role.value)
            raise PermissionDenied(f"Role '{role.value}' may not {action} records")

    def _next_id(self) -> int:
        return max(self._records, default=0) + 1

    def create(self, role: Role) -> Record:
        """Append a blank row with id = max(existing ids) + 1."""
        self._require_admin(role, "create")
        with self._lock:
            record = blank_record(self._next_id())
            self._records[record.id] = record
            self._version += 1
        logger.info("record_created id=%d", record.id)
        return record

    def update_field(self, record_id: int, field: str, value: Any, role: Role) -> Record:
        """Set one editable field.

        Numeric fields accept numbers or text; empty or non-numeric input
        clears the value. Text fields store ``str(value)`` ("" for None).

        Raises:
            PermissionDenied: role is not admin.
            ValueError: field is not editable.
            RecordNotFound: no such record.
        """
        self._require_admin(role, "edit")
        if field not in EDITABLE_FIELDS:
            raise ValueError(
                f"Field '{field}' is not editable; expected one of {list(EDITABLE_FIELDS)}"
            )
        if field in NUMERIC_FIELDS:
            new_value: Any = parse_optional_number(value)
        else:
            new_value = "" if value is None else str(value)

        with self._lock:
            current = self._records.get(record_id)
            if current is None:
                raise RecordNotFound(record_id)
            updated = current.model_copy(update={field: new_value})
            self._records[record_id] = updated
            self._version += 1
        logger.info("record_updated id=%d field=%s", record_id, field)
        return updated

    def set_confirms(self, record_id: int, confirms: Iterable[str], role: Role) -> Record:
        """Replace the record's confirmations (duplicates collapse)."""
        self._require_admin(role, "confirm")
        try:
            kinds = [ConfirmKind(c) for c in confirms]
        except ValueError:
            raise ValueError(
                f"Confirm kinds must be drawn from {[k.value for k in ConfirmKind]}"
            ) from None
        kinds = list(dict.fromkeys(kinds))

        with self._lock:
            current = self._records.get(record_id)
            if current is None:
                raise RecordNotFound(record_id)
            updated = current.model_copy(update={"confirms": kinds})
            self._records[record_id] = updated
            self._version += 1
        logger.info(
            "record_confirms id=%d confirms=%s",
            record_id, ",".join(k.value for k in kinds) or "-",
        )
        return updated

    def delete(self, record_id: int, role: Role) -> None:
        """Permanently remove a record; its id is never handed out again
        while a higher id exists."""
        self._require_admin(role, "delete")
        with self._lock:
            if record_id not in self._records:
                raise RecordNotFound(record_id)
            del self._records[record_id]
            self._version += 1
        logger.info("record_deleted id=%d", record_id)
