from __future__ import annotations

from datetime import date

import pytest
from pydantic import ValidationError

from app.schemas.occupancy import FilterCriteria, ProjectInterval, ProjectRecord
from app.services.occupancy_formatting import (
    format_crew_count,
    format_week_label,
    status_label,
)
from app.services.occupancy_service import bucket_for_week


def test_record_end_prefers_planned_end_date() -> None:
    record = ProjectRecord.model_validate(
        {
            "id": 7,
            "projectId": "P-2024-007",
            "name": "Brug Vaartweg",
            "projectManager": "Els Bakker",
            "plaats": "Zwolle",
            "startDate": "2024-01-01",
            "plannedEndDate": "2024-03-01",
            "endDate": "2024-04-15",
        }
    )
    interval = record.to_interval()

    assert interval.id == "P-2024-007"
    assert interval.manager == "Els Bakker"
    assert interval.location == "Zwolle"
    assert interval.start == date(2024, 1, 1)
    assert interval.end == date(2024, 3, 1)


def test_record_end_falls_back_to_actual_end_date() -> None:
    record = ProjectRecord.model_validate(
        {"id": 8, "startDate": "2024-01-01", "plannedEndDate": None, "endDate": "2024-02-01"}
    )
    interval = record.to_interval()

    assert interval.end == date(2024, 2, 1)
    # Without a project code the numeric id identifies the project
    assert interval.id == 8


def test_record_without_end_dates_is_incomplete() -> None:
    interval = ProjectRecord(id=9, start_date=date(2024, 1, 1)).to_interval()

    assert interval.end is None
    assert not interval.is_complete()


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("2024-01-10", date(2024, 1, 10)),
        ("2024-01-10T00:00:00.000Z", date(2024, 1, 10)),
        ("2024-01-10T08:30:00+01:00", date(2024, 1, 10)),
        ("", None),
        (None, None),
    ],
)
def test_record_dates_accept_api_formats(raw, expected) -> None:
    record = ProjectRecord.model_validate({"startDate": raw})
    assert record.start_date == expected


def test_record_rejects_unparseable_dates() -> None:
    with pytest.raises(ValidationError):
        ProjectRecord.model_validate({"startDate": "binnenkort"})


def test_record_accepts_field_names() -> None:
    record = ProjectRecord(project_id="P-1", planned_end_date=date(2024, 5, 1))
    assert record.to_interval().end == date(2024, 5, 1)


def test_interval_is_complete_only_with_both_dates() -> None:
    assert ProjectInterval(id=1, start=date(2024, 1, 1), end=date(2024, 1, 2)).is_complete()
    assert not ProjectInterval(id=1, start=None, end=date(2024, 1, 2)).is_complete()


def test_filter_criteria_keeps_literal_search_for_all() -> None:
    criteria = FilterCriteria(search="all", status="all")

    assert criteria.search == "all"
    assert criteria.status is None
    assert criteria.is_active()


def test_filter_criteria_keeps_organization_none_sentinel() -> None:
    assert FilterCriteria(organization="none").organization == "none"


def test_week_label_and_crew_count() -> None:
    bucket = bucket_for_week(date(2024, 1, 3))

    assert format_week_label(bucket) == "01-01 - 07-01"
    assert format_crew_count(0) == "0 ploegen"
    assert format_crew_count(1) == "1 ploeg"
    assert format_crew_count(4) == "4 ploegen"


def test_status_labels() -> None:
    assert status_label("active") == "Actief"
    assert status_label("on-hold") == "On Hold"
    assert status_label("completed") == "Afgerond"
    assert status_label("cancelled") == "Geannuleerd"
    assert status_label("tender") == "tender"
    assert status_label(None) is None
