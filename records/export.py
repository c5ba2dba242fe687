"""
Tabular export of job records.

Rows follow the grid's column order with the derived profit column added.
Absent numbers export as empty cells; confirmations are joined the way the
grid shows them.
"""

from __future__ import annotations

import csv
import io
import json
from collections.abc import Iterable, Iterator

from records.models import Record
from utils.strings import display_text

EXPORT_COLUMNS = [
    "id", "name", "date", "place", "service_type",
    "income", "cost", "hours", "profit", "status", "notes", "confirms",
]


def export_row(record: Record) -> dict:
    """One record as a flat dict keyed by EXPORT_COLUMNS."""
    row = record.model_dump(mode="json")
    row["profit"] = record.profit
    row["confirms"] = ", ".join(k.value for k in record.confirms)
    return {col: row[col] for col in EXPORT_COLUMNS}


def iter_csv(records: Iterable[Record]) -> Iterator[str]:
    """Yield a header line, then one CSV line per record."""
    buf = io.StringIO()
    writer = csv.DictWriter(buf, fieldnames=EXPORT_COLUMNS)
    writer.writeheader()
    yield buf.getvalue()
    for record in records:
        buf.seek(0)
        buf.truncate()
        writer.writerow({k: display_text(v) for k, v in export_row(record).items()})
        yield buf.getvalue()


def iter_ndjson(records: Iterable[Record]) -> Iterator[str]:
    """Yield one JSON object per line."""
    for record in records:
        yield json.dumps(export_row(record)) + "\n"
