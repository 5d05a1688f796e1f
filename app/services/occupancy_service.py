"""Weekly crew occupancy ("bezetting") for a set of projects.

Every active project counts as one crew ("ploeg") for each week its
``[start, end]`` interval touches. All functions here are pure: they take
the project list, filter criteria and date range by value and return new
objects, so identical inputs always give identical results.
"""

from __future__ import annotations

import calendar
import math
from datetime import date, datetime, time, timedelta
from typing import Iterable, Sequence

from app.schemas.occupancy import (
    ORGANIZATION_NONE,
    FilterCriteria,
    FilterOptions,
    OccupancySummary,
    ProjectInterval,
    ViewPreset,
    WeekBucket,
)


# Chart axis maximum is rounded up to a multiple of this step
SCALE_STEP = 5

_LAST_MOMENT = time(23, 59, 59, 999000)


def _as_date(value: date | datetime) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


# Filtering -------------------------------------------------------------------


def _contains(value: object, needle: str) -> bool:
    if value is None:
        return False
    return needle in str(value).lower()


def _matches(project: ProjectInterval, criteria: FilterCriteria) -> bool:
    if criteria.search is not None:
        needle = criteria.search.lower()
        if not (
            _contains(project.name, needle)
            or _contains(project.id, needle)
            or _contains(project.location, needle)
            or _contains(project.manager, needle)
        ):
            return False

    if criteria.status is not None and project.status != criteria.status:
        return False

    if criteria.organization is not None:
        if criteria.organization == ORGANIZATION_NONE:
            if project.organization is not None:
                return False
        elif project.organization != criteria.organization:
            return False

    if criteria.manager is not None and project.manager != criteria.manager:
        return False
    if criteria.location is not None and project.location != criteria.location:
        return False
    if criteria.category is not None and project.category != criteria.category:
        return False
    if criteria.discipline is not None and project.discipline != criteria.discipline:
        return False

    return True


def filter_projects(
    projects: Sequence[ProjectInterval], criteria: FilterCriteria | None = None
) -> list[ProjectInterval]:
    """Return the projects that satisfy every set criterion.

    Input order is preserved. Without criteria (or with none set) the
    projects are returned unchanged.
    """

    if criteria is None or not criteria.is_active():
        return list(projects)
    return [p for p in projects if _matches(p, criteria)]


def filter_options(projects: Iterable[ProjectInterval]) -> FilterOptions:
    """Collect distinct non-null dropdown values in order of first appearance."""

    def _distinct(values: Iterable[str | None]) -> list[str]:
        return list(dict.fromkeys(v for v in values if v is not None))

    items = list(projects)
    return FilterOptions(
        organizations=_distinct(p.organization for p in items),
        managers=_distinct(p.manager for p in items),
        locations=_distinct(p.location for p in items),
        categories=_distinct(p.category for p in items),
        disciplines=_distinct(p.discipline for p in items),
    )


# Week buckets ----------------------------------------------------------------


def week_number(week_start: date | datetime) -> int:
    """Return the overview week number of a Monday.

    Computed as ``ceil((days_since_jan1 + jan1_weekday + 1) / 7)`` with
    Sunday as weekday 0. This is deliberately not the ISO-8601 week number
    and differs from it around the turn of the year.
    """

    day = _as_date(week_start)
    jan1 = date(day.year, 1, 1)
    days_since_jan1 = (day - jan1).days
    jan1_weekday = (jan1.weekday() + 1) % 7
    return math.ceil((days_since_jan1 + jan1_weekday + 1) / 7)


def _make_bucket(monday: date) -> WeekBucket:
    week_start = datetime.combine(monday, time.min)
    week_end = datetime.combine(monday + timedelta(days=6), _LAST_MOMENT)
    return WeekBucket(
        week_start=week_start,
        week_end=week_end,
        week_number=week_number(monday),
        year=monday.year,
    )


def bucketize(
    range_start: date | datetime, range_end: date | datetime
) -> list[WeekBucket]:
    """Return contiguous Monday-aligned week buckets covering the range.

    The first bucket starts on the Monday on or before ``range_start``;
    buckets are emitted while their Monday is not after ``range_end``. A
    reversed range yields no buckets. Occupancy is left at 0.
    """

    start = _as_date(range_start)
    end = _as_date(range_end)
    if start > end:
        return []

    cursor = start - timedelta(days=start.weekday())
    buckets: list[WeekBucket] = []
    while cursor <= end:
        buckets.append(_make_bucket(cursor))
        cursor += timedelta(days=7)
    return buckets


def bucket_for_week(day: date | datetime) -> WeekBucket:
    """Return the (empty) bucket of the week containing ``day``."""
    d = _as_date(day)
    return _make_bucket(d - timedelta(days=d.weekday()))


# Counting and drill-down -----------------------------------------------------


def _overlaps(project: ProjectInterval, bucket: WeekBucket) -> bool:
    if project.start is None or project.end is None:
        return False
    starts = datetime.combine(project.start, time.min)
    ends = datetime.combine(project.end, time.min)
    return starts <= bucket.week_end and ends >= bucket.week_start


def count_occupancy(projects: Sequence[ProjectInterval], bucket: WeekBucket) -> int:
    """Return how many projects are active during the bucket's week."""
    return sum(1 for p in projects if _overlaps(p, bucket))


def projects_active_in_bucket(
    projects: Sequence[ProjectInterval], bucket: WeekBucket
) -> list[ProjectInterval]:
    """Return the projects counted by :func:`count_occupancy` for the bucket."""
    return [p for p in projects if _overlaps(p, bucket)]


def summarize_occupancy(buckets: Sequence[WeekBucket]) -> OccupancySummary:
    """Return the chart scale maximum and the mean occupancy.

    The maximum is rounded up to the next multiple of 5 (1 when every week
    is empty). Bucket occupancies themselves are not changed.
    """

    true_max = max([b.occupancy for b in buckets] + [0])
    if true_max == 0:
        max_occupancy = 1
    else:
        max_occupancy = math.ceil(true_max / SCALE_STEP) * SCALE_STEP

    if not buckets:
        avg_occupancy = 0.0
    else:
        avg_occupancy = sum(b.occupancy for b in buckets) / len(buckets)

    return OccupancySummary(max_occupancy=max_occupancy, avg_occupancy=avg_occupancy)


# Composition -----------------------------------------------------------------


def compute_occupancy(
    projects: Sequence[ProjectInterval],
    criteria: FilterCriteria | None,
    range_start: date | datetime,
    range_end: date | datetime,
) -> list[WeekBucket]:
    """Return the week buckets of the range with occupancy filled in.

    Args:
        projects: All known projects.
        criteria: Filters to apply before counting.
        range_start: First day of the view range.
        range_end: Last day of the view range.

    Returns:
        One bucket per week, ordered ascending. Empty for a reversed range.
    """

    filtered = filter_projects(projects, criteria)
    buckets = bucketize(range_start, range_end)
    return [
        b.model_copy(update={"occupancy": count_occupancy(filtered, b)})
        for b in buckets
    ]


def projects_in_week(
    projects: Sequence[ProjectInterval],
    criteria: FilterCriteria | None,
    bucket: WeekBucket,
) -> list[ProjectInterval]:
    """Return the filtered projects contributing to one bucket.

    Uses the same filter and overlap test as :func:`compute_occupancy`, so
    the length of the result always equals the bucket's occupancy.
    """

    return projects_active_in_bucket(filter_projects(projects, criteria), bucket)


# View range ------------------------------------------------------------------


def resolve_view_range(
    range_start: date | None,
    range_end: date | None,
    preset: ViewPreset = "year",
    today: date | None = None,
) -> tuple[date, date]:
    """Return the view range, filling missing bounds from the preset.

    ``"year"`` covers January 1 to December 31 of the current year,
    ``"month"`` the first to the last day of the current month.
    """

    today = today or date.today()
    if preset == "month":
        last_day = calendar.monthrange(today.year, today.month)[1]
        default_start = date(today.year, today.month, 1)
        default_end = date(today.year, today.month, last_day)
    else:
        default_start = date(today.year, 1, 1)
        default_end = date(today.year, 12, 31)

    return (
        range_start if range_start is not None else default_start,
        range_end if range_end is not None else default_end,
    )
