"""
Segment Extractor

Re-derives path segments from a project's flattened waypoint stream.

Unlike PathBuilder, which reasons over the stored path collection, this
works on the flat per-employee stream so that segments can be keyed by
real-world date. The stream is scanned in storage order; waypoints are
not re-sorted by timestamp first.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Iterable, Iterator, Sequence

from .aggregate import Path, Project, Waypoint


@dataclass(frozen=True)
class Segment:
    """A reconstructed path with its display date and sort key."""

    __hash__ = None

    project_id: str
    circle: str
    division: str
    description: str | None
    waypoints: tuple[Waypoint, ...]
    date: str  # YYYY-MM-DD (UTC)
    timestamp: datetime
    closed: bool


def as_utc(ts: datetime) -> datetime:
    """Treat naive timestamps as UTC and normalize aware ones to UTC."""
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc)


def utc_date(ts: datetime) -> str:
    """Calendar day of a timestamp in UTC, as YYYY-MM-DD."""
    return as_utc(ts).date().isoformat()


class SegmentExtractor:
    """
    Replays an employee's waypoints into closed and open segments.

    - A start waypoint begins a new run, discarding any unterminated one.
    - Other waypoints extend the current run, or are skipped if none.
    - An end waypoint closes the run (dated by the end waypoint).
    - A run still open at the end of the stream is emitted as an open
      segment (dated by its first waypoint).
    """

    @staticmethod
    def employee_waypoints(project: Project, employee_id: str) -> list[Waypoint]:
        """Flattened storage-order waypoints created by one employee."""
        return [wp for wp in project.iter_waypoints() if wp.created_by == employee_id]

    @staticmethod
    def paths_started_by(project: Project, employee_id: str) -> list[Path]:
        """Whole paths whose first waypoint the employee created."""
        return [
            path for path in project.paths
            if path.first is not None and path.first.created_by == employee_id
        ]

    @classmethod
    def extract(cls, project: Project, employee_id: str) -> list[Segment]:
        """
        Extract all segments of one employee in one project.

        Args:
            project: Project aggregate
            employee_id: Employee whose waypoints are replayed

        Returns:
            Segments in scan order (not yet sorted)
        """
        stream = cls.employee_waypoints(project, employee_id)
        return [
            cls._tag(project, run, closed)
            for run, closed in cls.scan(stream)
        ]

    @staticmethod
    def scan(stream: Sequence[Waypoint]) -> Iterator[tuple[tuple[Waypoint, ...], bool]]:
        """
        Fold a waypoint stream into runs.

        Yields:
            (waypoints, closed) for every run found, in stream order
        """
        current: tuple[Waypoint, ...] = ()
        last_index = len(stream) - 1

        for idx, waypoint in enumerate(stream):
            if waypoint.is_start:
                current = (waypoint,)
            elif current:
                current = current + (waypoint,)

            if waypoint.is_end and current:
                yield current, True
                current = ()

            if idx == last_index and current:
                yield current, False

    @staticmethod
    def _tag(project: Project, run: tuple[Waypoint, ...], closed: bool) -> Segment:
        # Closed runs are dated by their end waypoint, open ones by their start
        anchor = run[-1] if closed else run[0]
        return Segment(
            project_id=project.project_id,
            circle=project.circle,
            division=project.division,
            description=project.description,
            waypoints=run,
            date=utc_date(anchor.timestamp),
            timestamp=anchor.timestamp,
            closed=closed,
        )


def extract_all(projects: Iterable[Project], employee_id: str) -> list[Segment]:
    """Segments of one employee across several projects, in project order."""
    return [
        segment
        for project in projects
        for segment in SegmentExtractor.extract(project, employee_id)
    ]
