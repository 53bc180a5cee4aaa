"""
Report Aggregator

Turns an employee's segments across projects into the grouped view used
by the history endpoint and the export generators:

    date (newest first) -> project (first seen first) -> segments

Each segment is projected to a display shape with equipment lists
defaulted to empty and the creator flattened to a small identity record.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Iterable, Mapping, Optional

from .aggregate import EmployeeRef, Project, Waypoint
from .segments import Segment, as_utc, extract_all


@dataclass(frozen=True)
class CreatorView:
    emp_id: str
    name: Optional[str] = None
    role: Optional[str] = None
    email: Optional[str] = None


@dataclass
class WaypointView:
    """Display shape of a waypoint inside a report."""

    id: Optional[str]
    route_type: str
    route_starting_point: str
    route_ending_point: str
    latitude: float
    longitude: float
    is_start: bool
    is_end: bool
    image: Optional[str]
    gps_details: list[dict[str, Any]]
    pole_details: list[dict[str, Any]]
    timestamp: datetime
    created_by: Optional[CreatorView]


@dataclass
class ReportEntry:
    """All segments of one project on one date."""

    project_id: str
    circle: str
    division: str
    description: Optional[str]
    date: str
    waypoints: list[list[WaypointView]] = field(default_factory=list)  # one list per segment


class ReportAggregator:
    """Sorts and groups reconstructed segments for presentation."""

    @classmethod
    def reconstruct(
        cls,
        projects: Iterable[Project],
        employee_id: str,
        employees: Optional[Mapping[str, EmployeeRef]] = None
    ) -> list[ReportEntry]:
        """
        Rebuild an employee's survey history.

        Args:
            projects: Projects to scan (usually all projects of the employee)
            employee_id: Employee whose waypoints are reported
            employees: Optional User.id -> EmployeeRef lookup for creators

        Returns:
            Report entries ordered by date desc, then by first appearance
            of the project within the date. Empty if nothing matches.
        """
        segments = cls.sort_segments(extract_all(projects, employee_id))
        return cls.group(segments, employees or {})

    @staticmethod
    def sort_segments(segments: list[Segment]) -> list[Segment]:
        """Most recent first. Stable for equal timestamps."""
        return sorted(segments, key=lambda s: as_utc(s.timestamp), reverse=True)

    @classmethod
    def group(
        cls,
        segments: list[Segment],
        employees: Mapping[str, EmployeeRef]
    ) -> list[ReportEntry]:
        """Group sorted segments by date, then by project."""
        by_date: dict[str, list[Segment]] = {}
        for segment in segments:
            by_date.setdefault(segment.date, []).append(segment)

        result: list[ReportEntry] = []
        # ISO dates sort chronologically as strings
        for date in sorted(by_date, reverse=True):
            entries: dict[str, ReportEntry] = {}
            for segment in by_date[date]:
                entry = entries.get(segment.project_id)
                if entry is None:
                    entry = ReportEntry(
                        project_id=segment.project_id,
                        circle=segment.circle,
                        division=segment.division,
                        description=segment.description,
                        date=date,
                    )
                    entries[segment.project_id] = entry
                entry.waypoints.append(
                    [cls.to_view(wp, employees) for wp in segment.waypoints]
                )
            result.extend(entries.values())
        return result

    @staticmethod
    def to_view(waypoint: Waypoint, employees: Mapping[str, EmployeeRef]) -> WaypointView:
        creator = employees.get(waypoint.created_by)
        return WaypointView(
            id=waypoint.id,
            route_type=waypoint.route_type,
            route_starting_point=waypoint.route_starting_point,
            route_ending_point=waypoint.route_ending_point,
            latitude=waypoint.latitude,
            longitude=waypoint.longitude,
            is_start=waypoint.is_start,
            is_end=waypoint.is_end,
            image=waypoint.image,
            gps_details=list(waypoint.gps_details or []),
            pole_details=list(waypoint.pole_details or []),
            timestamp=waypoint.timestamp,
            created_by=CreatorView(
                emp_id=creator.emp_id,
                name=creator.name,
                role=creator.role,
                email=creator.email,
            ) if creator else None,
        )
