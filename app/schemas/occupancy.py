from __future__ import annotations

from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


ViewPreset = Literal["year", "month"]

# Value used by the overview dropdowns for "no selection"
FILTER_ALL = "all"
# Organization filter value that selects projects without organization
ORGANIZATION_NONE = "none"


class ProjectInterval(BaseModel):
    """A project reduced to what the occupancy overview needs.

    Attributes:
        id: Opaque project identifier (usually the project code).
        name: Project name.
        status: Project status key (e.g. ``"active"``).
        manager: Project manager display name.
        location: Place ("plaats") of the works.
        organization: Owning organization name.
        category: Project category.
        discipline: Project discipline.
        start: First day the project is active.
        end: Last day the project is active (planned end, else actual end).
    """

    id: int | str
    name: str | None = None
    status: str | None = None
    manager: str | None = None
    location: str | None = None
    organization: str | None = None
    category: str | None = None
    discipline: str | None = None
    start: date | None = None
    end: date | None = None

    model_config = ConfigDict(from_attributes=True)

    def is_complete(self) -> bool:
        """Return True when both start and end are known."""
        return self.start is not None and self.end is not None


class ProjectRecord(BaseModel):
    """A project row as returned by the projects endpoint."""

    id: int | str | None = None
    project_id: str | None = Field(default=None, alias="projectId")
    name: str | None = None
    status: str | None = None
    project_manager: str | None = Field(default=None, alias="projectManager")
    plaats: str | None = None
    start_date: date | None = Field(default=None, alias="startDate")
    planned_end_date: date | None = Field(default=None, alias="plannedEndDate")
    end_date: date | None = Field(default=None, alias="endDate")
    organization: str | None = None
    category: str | None = None
    discipline: str | None = None

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("start_date", "planned_end_date", "end_date", mode="before")
    @classmethod
    def parse_loose_date(cls, v: object) -> object:
        # The projects API serializes dates as ISO timestamps; keep the day only
        if isinstance(v, datetime):
            return v.date()
        if isinstance(v, str):
            v = v.strip()
            if not v:
                return None
            if len(v) > 10:
                return datetime.fromisoformat(v.replace("Z", "+00:00")).date()
        return v

    def to_interval(self) -> ProjectInterval:
        """Return the interval view of this record.

        The end of the interval is the planned end date when set, otherwise
        the actual end date. The project code is used as identifier so that
        free-text search matches it; records without a code keep their
        numeric id.
        """

        identifier = self.project_id if self.project_id else self.id
        return ProjectInterval(
            id=identifier if identifier is not None else "",
            name=self.name,
            status=self.status,
            manager=self.project_manager,
            location=self.plaats,
            organization=self.organization,
            category=self.category,
            discipline=self.discipline,
            start=self.start_date,
            end=self.planned_end_date or self.end_date,
        )


class FilterCriteria(BaseModel):
    """User selected filters for the occupancy overview.

    Every field is optional; an unset field does not constrain the result.
    Empty strings and ``"all"`` are treated as unset. For ``organization``
    the value ``"none"`` selects projects without an organization.
    """

    search: str | None = None
    status: str | None = None
    organization: str | None = None
    manager: str | None = None
    location: str | None = None
    category: str | None = None
    discipline: str | None = None

    @field_validator("search", mode="before")
    @classmethod
    def blank_search_is_unset(cls, v: object) -> object:
        if isinstance(v, str) and v == "":
            return None
        return v

    @field_validator(
        "status",
        "organization",
        "manager",
        "location",
        "category",
        "discipline",
        mode="before",
    )
    @classmethod
    def all_is_unset(cls, v: object) -> object:
        if isinstance(v, str) and v in {"", FILTER_ALL}:
            return None
        return v

    def is_active(self) -> bool:
        """Return True if at least one criterion is set."""
        return any(value is not None for value in self.model_dump().values())


class WeekBucket(BaseModel):
    """A Monday-aligned week with the number of active projects.

    Attributes:
        week_start: Monday 00:00 local time.
        week_end: Sunday 23:59:59.999 local time.
        week_number: Day-of-year based week number (not ISO-8601).
        year: Calendar year of ``week_start``.
        occupancy: Number of projects active during the week.
    """

    week_start: datetime
    week_end: datetime
    week_number: int
    year: int
    occupancy: int = Field(default=0, ge=0)


class OccupancySummary(BaseModel):
    """Chart scale statistics over a list of week buckets.

    Attributes:
        max_occupancy: Highest occupancy rounded up to a multiple of 5, or 1
            when every week is empty.
        avg_occupancy: Mean occupancy across the weeks, 0 without weeks.
    """

    max_occupancy: int
    avg_occupancy: float


class FilterOptions(BaseModel):
    """Distinct values offered by the overview filter dropdowns."""

    organizations: list[str] = Field(default_factory=list)
    managers: list[str] = Field(default_factory=list)
    locations: list[str] = Field(default_factory=list)
    categories: list[str] = Field(default_factory=list)
    disciplines: list[str] = Field(default_factory=list)


class WeekBucketRead(WeekBucket):
    label: str
    crew_label: str


class ProjectIntervalRead(ProjectInterval):
    status_label: str | None = None


class OccupancyRequest(BaseModel):
    """Payload for computing the weekly occupancy overview.

    Explicit ``range_start``/``range_end`` take precedence over ``preset``;
    when neither is given the configured default preset is used.
    """

    projects: list[ProjectRecord] = Field(default_factory=list)
    criteria: FilterCriteria = Field(default_factory=FilterCriteria)
    range_start: date | None = None
    range_end: date | None = None
    preset: ViewPreset | None = None


class OccupancyResponse(BaseModel):
    range_start: date
    range_end: date
    weeks: list[WeekBucketRead]
    summary: OccupancySummary
    filter_options: FilterOptions
    filters_active: bool
    total_projects: int
    filtered_projects: int


class WeekProjectsRequest(BaseModel):
    """Payload for the drill-down of a single week.

    ``week_start`` may be any day of the week; it is aligned to Monday.
    """

    projects: list[ProjectRecord] = Field(default_factory=list)
    criteria: FilterCriteria = Field(default_factory=FilterCriteria)
    week_start: date


class WeekProjectsResponse(BaseModel):
    week: WeekBucketRead
    projects: list[ProjectIntervalRead]
