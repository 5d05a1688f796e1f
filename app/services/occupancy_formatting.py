from __future__ import annotations

from app.schemas.occupancy import WeekBucket


STATUS_LABELS: dict[str, str] = {
    "active": "Actief",
    "on-hold": "On Hold",
    "completed": "Afgerond",
    "cancelled": "Geannuleerd",
}


def format_week_label(bucket: WeekBucket) -> str:
    """Return ``"dd-mm - dd-mm"`` for the first and last day of the week."""
    return (
        f"{bucket.week_start.strftime('%d-%m')} - {bucket.week_end.strftime('%d-%m')}"
    )


def format_crew_count(count: int) -> str:
    """Return the Dutch crew count, e.g. ``"1 ploeg"`` or ``"3 ploegen"``."""
    return f"{count} ploeg" if count == 1 else f"{count} ploegen"


def status_label(status: str | None) -> str | None:
    # Unknown statuses are shown as-is
    if status is None:
        return None
    return STATUS_LABELS.get(status, status)
