"""Tests for records/filters.py: analytics filter and grid search."""
import pytest

from records.filters import (
    DEFAULT_SEARCH_FIELDS,
    SEARCHABLE_FIELDS,
    RecordFilter,
    search_records,
    service_options,
    validate_search_fields,
)
from records.models import Record


class TestRecordFilter:
    def test_empty_filter_passes_everything(self, sample_records):
        f = RecordFilter()
        assert f.is_empty
        assert f.apply(sample_records) == sample_records

    def test_service_membership(self, sample_records):
        f = RecordFilter.build(["A", "C"])
        assert [r.id for r in f.apply(sample_records)] == [1, 3, 4, 5]

    def test_date_bounds_inclusive(self, sample_records):
        f = RecordFilter.build(from_date="2024-01-01", to_date="2024-01-02")
        assert [r.id for r in f.apply(sample_records)] == [1, 2, 3]

    def test_from_date_only(self, sample_records):
        f = RecordFilter.build(from_date="2024-02-01")
        assert [r.id for r in f.apply(sample_records)] == [4, 5]

    def test_record_after_upper_bound_excluded(self):
        f = RecordFilter.build(["A"], "2024-01-01", "2024-01-31")
        assert not f.matches(Record(id=1, service_type="A", date="2024-02-01"))
        assert f.matches(Record(id=2, service_type="A", date="2024-01-31"))

    def test_empty_strings_mean_unbounded(self):
        f = RecordFilter.build(["", ""], "", "")
        assert f.is_empty
        assert f.from_date is None and f.to_date is None

    def test_cache_key_ignores_order(self):
        a = RecordFilter.build(["B", "A"], "2024-01-01")
        b = RecordFilter.build(["A", "B"], "2024-01-01")
        assert a.cache_key() == b.cache_key()


class TestServiceOptions:
    def test_first_seen_order(self, sample_records):
        assert service_options(sample_records) == ["A", "B", "C"]

    def test_empty(self):
        assert service_options([]) == []


class TestSearch:
    def test_empty_query_returns_all(self, sample_records):
        assert search_records(sample_records, "   ") == sample_records

    def test_case_insensitive_default_fields(self, sample_records):
        hits = search_records(sample_records, "KRAKOW")
        assert [r.id for r in hits] == [2, 5]

    def test_notes_are_searched_by_default(self, sample_records):
        assert [r.id for r in search_records(sample_records, "warranty")] == [5]

    def test_field_subset(self, sample_records):
        assert search_records(sample_records, "krakow", ["name"]) == []

    def test_whole_number_matches_without_fraction(self, sample_records):
        hits = search_records(sample_records, "300", ["income"])
        assert [r.id for r in hits] == [4]

    def test_absent_values_never_match(self, sample_records):
        assert search_records(sample_records, "none", ["cost", "hours"]) == []

    def test_unknown_field_rejected(self, sample_records):
        with pytest.raises(ValueError, match="Unknown search field"):
            search_records(sample_records, "x", ["salary"])

    def test_default_fields_are_searchable(self):
        assert validate_search_fields(DEFAULT_SEARCH_FIELDS) == list(DEFAULT_SEARCH_FIELDS)
        assert set(DEFAULT_SEARCH_FIELDS) <= set(SEARCHABLE_FIELDS)

    def test_labels(self):
        assert SEARCHABLE_FIELDS["name"] == "Job / Technician"
        assert SEARCHABLE_FIELDS["service_type"] == "Service type"
