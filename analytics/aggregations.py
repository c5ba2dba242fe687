"""
Group-by-sum over job records for the analytics charts.

aggregate_sum() is the single primitive: partition records by a key, sum a
numeric value per partition, keep partitions in first-seen order. The three
series on the analytics page are thin instantiations of it.

Values are read through safe_float(), so an absent amount or anything that
is not a number contributes 0. Nothing here raises for a well-typed caller:
empty input, all-null amounts and negative values are ordinary cases.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass

from records.models import Record
from utils.strings import safe_float


@dataclass(frozen=True)
class LabeledPoint:
    """One bar or slice: a label and the number it stands for."""

    label: str
    value: float

    def to_dict(self) -> dict:
        return {"label": self.label, "value": self.value}


def aggregate_sum(
    records: Iterable[Record],
    group_key: Callable[[Record], str],
    value_of: Callable[[Record], object],
) -> list[LabeledPoint]:
    """Sum ``value_of(record)`` per ``group_key(record)``.

    Args:
        records: Records to aggregate (may be empty).
        group_key: Returns the grouping label; callers pass normalised strings.
        value_of: Returns the value to sum; None or non-numeric counts as 0.

    Returns:
        One LabeledPoint per distinct key, in first-seen key order.
    """
    totals: dict[str, float] = {}
    for record in records:
        key = group_key(record)
        totals[key] = totals.get(key, 0.0) + safe_float(value_of(record))
    return [LabeledPoint(label, value) for label, value in totals.items()]


def _profit(record: Record) -> float:
    return safe_float(record.income) - safe_float(record.cost)


def revenue_by_date(records: Iterable[Record]) -> list[LabeledPoint]:
    """Income per date, ascending by date (ISO labels sort as strings)."""
    points = aggregate_sum(records, lambda r: r.date, lambda r: r.income)
    return sorted(points, key=lambda p: p.label)


def profit_by_service(records: Iterable[Record]) -> list[LabeledPoint]:
    """Income minus cost per service type, first-seen order."""
    return aggregate_sum(records, lambda r: r.service_type, _profit)


def income_by_name(records: Iterable[Record]) -> list[LabeledPoint]:
    """Income per technician, first-seen order."""
    return aggregate_sum(records, lambda r: r.name, lambda r: r.income)


SERIES: dict[str, Callable[[Iterable[Record]], list[LabeledPoint]]] = {
    "revenue_by_date":   revenue_by_date,
    "profit_by_service": profit_by_service,
    "income_by_name":    income_by_name,
}


def build_series(records: Iterable[Record]) -> dict[str, list[LabeledPoint]]:
    """All analytics series for one filtered snapshot."""
    records = list(records)
    return {name: fn(records) for name, fn in SERIES.items()}
