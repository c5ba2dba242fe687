"""Aggregation of job records into labeled numeric series."""

from analytics.aggregations import (
    SERIES,
    LabeledPoint,
    aggregate_sum,
    build_series,
    income_by_name,
    profit_by_service,
    revenue_by_date,
)

__all__ = [
    "SERIES",
    "LabeledPoint",
    "aggregate_sum",
    "build_series",
    "income_by_name",
    "profit_by_service",
    "revenue_by_date",
]
