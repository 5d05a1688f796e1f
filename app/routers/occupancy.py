from __future__ import annotations

from typing import Sequence

from fastapi import APIRouter

from app.core.logging import logger
from app.schemas.occupancy import (
    OccupancyRequest,
    OccupancyResponse,
    ProjectInterval,
    ProjectIntervalRead,
    ProjectRecord,
    WeekBucket,
    WeekBucketRead,
    WeekProjectsRequest,
    WeekProjectsResponse,
)
from app.services.occupancy_formatting import (
    format_crew_count,
    format_week_label,
    status_label,
)
from app.services.occupancy_service import (
    bucket_for_week,
    compute_occupancy,
    filter_options,
    filter_projects,
    projects_in_week,
    resolve_view_range,
    summarize_occupancy,
)
from core.settings import get_settings


router = APIRouter()


def _to_intervals(records: Sequence[ProjectRecord]) -> list[ProjectInterval]:
    return [r.to_interval() for r in records]


def _bucket_read(bucket: WeekBucket) -> WeekBucketRead:
    return WeekBucketRead(
        **bucket.model_dump(),
        label=format_week_label(bucket),
        crew_label=format_crew_count(bucket.occupancy),
    )


@router.post("", response_model=OccupancyResponse)
async def get_occupancy(payload: OccupancyRequest) -> OccupancyResponse:
    """Return the weekly crew occupancy for the supplied projects.

    The view range defaults to the configured preset (current year unless
    configured otherwise) for any bound that is not given explicitly. A
    reversed range returns no weeks.
    """

    preset = payload.preset or get_settings().occupancy_default_preset
    range_start, range_end = resolve_view_range(
        payload.range_start, payload.range_end, preset
    )

    projects = _to_intervals(payload.projects)
    buckets = compute_occupancy(projects, payload.criteria, range_start, range_end)
    filtered_count = len(filter_projects(projects, payload.criteria))

    logger.info(
        "Occupancy computed for %s of %s projects over %s weeks (%s..%s)",
        filtered_count,
        len(projects),
        len(buckets),
        range_start,
        range_end,
    )

    return OccupancyResponse(
        range_start=range_start,
        range_end=range_end,
        weeks=[_bucket_read(b) for b in buckets],
        summary=summarize_occupancy(buckets),
        filter_options=filter_options(projects),
        filters_active=payload.criteria.is_active(),
        total_projects=len(projects),
        filtered_projects=filtered_count,
    )


@router.post("/week", response_model=WeekProjectsResponse)
async def get_week_projects(payload: WeekProjectsRequest) -> WeekProjectsResponse:
    """Return the projects active in the week containing ``week_start``.

    The returned bucket's occupancy equals the number of returned projects.
    """

    projects = _to_intervals(payload.projects)
    bucket = bucket_for_week(payload.week_start)
    active = projects_in_week(projects, payload.criteria, bucket)
    bucket = bucket.model_copy(update={"occupancy": len(active)})

    return WeekProjectsResponse(
        week=_bucket_read(bucket),
        projects=[
            ProjectIntervalRead(**p.model_dump(), status_label=status_label(p.status))
            for p in active
        ],
    )
