"""Tests for filtering, sorting and limiting records."""

from datetime import datetime, timezone

import pytest

from howold.models import ProjectRecord, YearFilter
from howold.results import apply_limit, filter_by_year, select_projects, sort_by_creation


def record(path, year, month=1, day=1, sha=None):
    moment = datetime(year, month, day, tzinfo=timezone.utc)
    return ProjectRecord(path=path, created_at=moment, sha=sha or f"{path}-sha")


@pytest.fixture
def records():
    """Records in discovery (lexicographic) order, unsorted by date."""
    return [
        record("a", 2023, 6),
        record("b", 2019),
        record("c", 2025, 2),
        record("d", 2021, 3),
        record("e", 2023, 1),
    ]


class TestFilterByYear:
    """Tests for filter_by_year."""

    def test_inclusive_range(self, records):
        """Test every kept record is within the range."""
        kept = filter_by_year(records, YearFilter(2021, 2023))

        assert [r.path for r in kept] == ["a", "d", "e"]
        assert all(2021 <= r.year <= 2023 for r in kept)

    def test_single_year(self, records):
        """Test a one-year filter."""
        assert [r.path for r in filter_by_year(records, YearFilter(2025, 2025))] == ["c"]

    def test_no_filter(self, records):
        """Test None keeps everything."""
        assert filter_by_year(records, None) == records


class TestSortByCreation:
    """Tests for sort_by_creation."""

    def test_ascending(self, records):
        """Test output is non-decreasing by timestamp."""
        ordered = sort_by_creation(records)

        assert [r.path for r in ordered] == ["b", "d", "e", "a", "c"]
        assert all(x.created_at <= y.created_at for x, y in zip(ordered, ordered[1:]))

    def test_ties_keep_input_order(self):
        """Test the sort is stable."""
        tied = [record("x", 2022, sha="same"), record("a", 2020), record("y", 2022, sha="same")]

        assert [r.path for r in sort_by_creation(tied)] == ["a", "x", "y"]


class TestApplyLimit:
    """Tests for apply_limit."""

    def test_keeps_latest(self, records):
        """Test limit N keeps the N latest, still ascending."""
        ordered = sort_by_creation(records)

        assert [r.path for r in apply_limit(ordered, 2)] == ["a", "c"]

    def test_limit_larger_than_input(self, records):
        """Test no padding and no error when M < N."""
        ordered = sort_by_creation(records)

        assert apply_limit(ordered, 50) == ordered

    @pytest.mark.parametrize("limit", [None, 0])
    def test_no_limit(self, records, limit):
        """Test None or 0 keeps everything."""
        assert apply_limit(records, limit) == records


class TestSelectProjects:
    """Tests for the combined pipeline."""

    def test_filter_sort_limit(self, records):
        """Test total counts matches before the limit."""
        shown, total = select_projects(records, YearFilter(2020, 2025), limit=2)

        assert total == 4
        assert [r.path for r in shown] == ["a", "c"]

    def test_defaults(self, records):
        """Test no filter and no limit just sorts."""
        shown, total = select_projects(records)

        assert total == 5
        assert [r.path for r in shown] == ["b", "d", "e", "a", "c"]
