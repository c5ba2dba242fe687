"""
Seed data for the in-memory store.

The app starts from SAMPLE_ROWS on every launch. Point APP_SEED_PATH at a
JSON array of record objects to start from a different dataset instead.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import TypeAdapter

from records.models import Record

logger = logging.getLogger(__name__)

SAMPLE_ROWS: list[dict] = [
    {"id": 1, "name": "Anna Kowalska", "date": "2024-01-03", "place": "Warsaw",
     "service_type": "Installation", "income": 1200, "cost": 450, "hours": 6,
     "status": "Done", "notes": "Boiler replaced", "confirms": ["room", "office"]},
    {"id": 2, "name": "Piotr Nowak", "date": "2024-01-03", "place": "Krakow",
     "service_type": "Repair", "income": 380, "cost": 90, "hours": 2.5,
     "status": "Done", "notes": "", "confirms": ["room"]},
    {"id": 3, "name": "Anna Kowalska", "date": "2024-01-08", "place": "Warsaw",
     "service_type": "Inspection", "income": 150, "cost": 0, "hours": 1,
     "status": "Done", "notes": "Annual check", "confirms": ["office"]},
    {"id": 4, "name": "Marek Zielinski", "date": "2024-01-11", "place": "Gdansk",
     "service_type": "Installation", "income": 2100, "cost": 1300, "hours": 9,
     "status": "Invoiced", "notes": "Two units", "confirms": []},
    {"id": 5, "name": "Piotr Nowak", "date": "2024-01-15", "place": "Krakow",
     "service_type": "Maintenance", "income": 260, "cost": 40, "hours": 2,
     "status": "Done", "notes": "", "confirms": ["room", "office"]},
    {"id": 6, "name": "Ewa Wisniewska", "date": "2024-01-19", "place": "Poznan",
     "service_type": "Repair", "income": 540, "cost": 210, "hours": 3.5,
     "status": "Invoiced", "notes": "Parts on backorder", "confirms": []},
    {"id": 7, "name": "Marek Zielinski", "date": "2024-01-24", "place": "Gdansk",
     "service_type": "Maintenance", "income": 300, "cost": 55, "hours": 2,
     "status": "Done", "notes": "", "confirms": ["office"]},
    {"id": 8, "name": "Ewa Wisniewska", "date": "2024-02-02", "place": "Poznan",
     "service_type": "Installation", "income": 1750, "cost": 980, "hours": 7,
     "status": "Scheduled", "notes": "Customer asked for morning slot", "confirms": []},
    {"id": 9, "name": "Anna Kowalska", "date": "2024-02-06", "place": "Lodz",
     "service_type": "Repair", "income": None, "cost": 120, "hours": None,
     "status": "Pending", "notes": "Awaiting quote approval", "confirms": []},
    {"id": 10, "name": "Piotr Nowak", "date": "2024-02-12", "place": "Krakow",
     "service_type": "Inspection", "income": 150, "cost": None, "hours": 1,
     "status": "Done", "notes": "", "confirms": ["room"]},
    {"id": 11, "name": "Tomasz Lewandowski", "date": "2024-02-14", "place": "Wroclaw",
     "service_type": "Maintenance", "income": 280, "cost": 60, "hours": 2,
     "status": "Done", "notes": "", "confirms": ["room", "office"]},
    {"id": 12, "name": "Tomasz Lewandowski", "date": "2024-02-20", "place": "Wroclaw",
     "service_type": "Repair", "income": 90, "cost": 140, "hours": 1.5,
     "status": "Done", "notes": "Warranty job, ran at a loss", "confirms": ["office"]},
]

_records_adapter = TypeAdapter(list[Record])


def load_seed(path: Path | None = None) -> list[Record]:
    """Return the seed records, from *path* when given, else SAMPLE_ROWS.

    Raises:
        FileNotFoundError: *path* does not exist.
        pydantic.ValidationError: a row does not fit the Record model.
    """
    if path is None:
        return _records_adapter.validate_python(SAMPLE_ROWS)
    raw = json.loads(Path(path).read_text(encoding="utf-8"))
    records = _records_adapter.validate_python(raw)
    logger.info("seed_loaded path=%s records=%d", path, len(records))
    return records
