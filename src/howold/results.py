"""Filter, sort and limit resolved projects."""

from collections.abc import Iterable

from .models import ProjectRecord, YearFilter


def filter_by_year(
    records: Iterable[ProjectRecord], year_filter: YearFilter | None
) -> list[ProjectRecord]:
    """Keep records created within the inclusive year range (UTC years)."""
    if year_filter is None:
        return list(records)
    return [r for r in records if year_filter.contains(r.year)]


def sort_by_creation(records: Iterable[ProjectRecord]) -> list[ProjectRecord]:
    """Oldest first. The sort is stable, so ties keep their input order."""
    return sorted(records, key=lambda r: r.created_at)


def apply_limit(records: list[ProjectRecord], limit: int | None) -> list[ProjectRecord]:
    """Keep the last ``limit`` records (the most recent ones, still ascending)."""
    if not limit or limit <= 0:
        return list(records)
    return records[-limit:]


def select_projects(
    records: Iterable[ProjectRecord],
    year_filter: YearFilter | None = None,
    limit: int | None = None,
) -> tuple[list[ProjectRecord], int]:
    """Run the year filter, the sort and the limit.

    Returns:
        Tuple of (records to show, number of records matching the year filter)

    Example:
        >>> shown, total = select_projects(records, YearFilter(2024, 2025), limit=10)
        >>> print(f"Showing {len(shown)} of {total}")
    """
    matching = sort_by_creation(filter_by_year(records, year_filter))
    return apply_limit(matching, limit), len(matching)
