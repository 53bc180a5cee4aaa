"""
Route aggregate.

In-memory shape of a project's survey routes:

    Project -> ordered Paths -> ordered Waypoints

Waypoints are immutable value records. A Path is a sub-collection of its
Project and has no identity outside it; the optional `id` only links it
back to its stored row.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Iterator, Optional


@dataclass(frozen=True)
class Waypoint:
    """One recorded survey point."""

    # Equipment records are dicts, so waypoints compare by value but do not hash
    __hash__ = None

    name: str
    latitude: float
    longitude: float
    route_type: str
    route_starting_point: str
    route_ending_point: str
    created_by: str  # User.id of the submitting employee
    timestamp: datetime

    id: Optional[str] = None
    path_owner: Optional[str] = None
    description: Optional[str] = None
    distance_from_previous: float = 0.0
    is_start: bool = False
    is_end: bool = False
    image: Optional[str] = None

    # Equipment records, opaque here
    pole_details: list[dict[str, Any]] = field(default_factory=list)
    gps_details: list[dict[str, Any]] = field(default_factory=list)

    def __post_init__(self):
        if self.is_start and self.is_end:
            raise ValueError("A waypoint cannot be both start and end of a path")

    @property
    def owner(self) -> str:
        """Employee whose path this waypoint belongs to."""
        return self.path_owner or self.created_by


@dataclass
class Path:
    """Ordered run of waypoints owned by one employee."""

    waypoints: list[Waypoint] = field(default_factory=list)
    id: Optional[int] = None

    def __len__(self) -> int:
        return len(self.waypoints)

    @property
    def first(self) -> Optional[Waypoint]:
        return self.waypoints[0] if self.waypoints else None

    @property
    def last(self) -> Optional[Waypoint]:
        return self.waypoints[-1] if self.waypoints else None

    @property
    def owner(self) -> Optional[str]:
        """Owner of the path, taken from its first waypoint."""
        return self.first.owner if self.first else None

    @property
    def is_closed(self) -> bool:
        return self.last is not None and self.last.is_end

    @property
    def is_open(self) -> bool:
        return self.last is not None and not self.last.is_end


@dataclass
class Project:
    """A survey project and its path collection (in path-start order)."""

    project_id: str
    circle: str
    division: str
    description: Optional[str] = None
    paths: list[Path] = field(default_factory=list)

    def iter_waypoints(self) -> Iterator[Waypoint]:
        """Flatten all paths into one storage-order stream."""
        for path in self.paths:
            yield from path.waypoints


@dataclass(frozen=True)
class EmployeeRef:
    """Identity of an employee as shown next to their waypoints."""

    id: str
    emp_id: str
    name: Optional[str] = None
    role: Optional[str] = None
    email: Optional[str] = None
