"""
Path Builder

Accepts one waypoint submission at a time and decides whether it starts,
extends or closes the submitting employee's path.

Rules:
- An employee has at most one open path per project.
- A start waypoint opens a new path, only if the last one is closed.
- A midpoint or end waypoint extends the open path; an end closes it.

The "current" path is never stored. It is re-derived on every call from
the last path owned by the employee, so interleaved paths of other
employees in the same project do not matter.
"""

import logging
from dataclasses import replace
from typing import Optional

from .aggregate import Path, Project, Waypoint

logger = logging.getLogger(__name__)


class PathConflict(Exception):
    """Submission would break path well-formedness."""

    LAST_PATH_OPEN = "last_path_open"
    NO_PATH_TO_END = "no_path_to_end"
    NO_ACTIVE_PATH = "no_active_path"

    MESSAGES = {
        LAST_PATH_OPEN: "Cannot start a new path. Your last path is not complete.",
        NO_PATH_TO_END: "Cannot end a path that hasn't started.",
        NO_ACTIVE_PATH: (
            "No active path found. Start a new path with is_start: true "
            "before adding midpoints."
        ),
    }

    def __init__(self, reason: str):
        self.reason = reason
        self.message = self.MESSAGES[reason]
        super().__init__(self.message)


class PathBuilder:
    """
    Start/mid/end state machine over a project's path collection.

    Works on the in-memory aggregate only. The caller loads the project,
    calls submit_waypoint() and persists the returned path.
    """

    @staticmethod
    def owned_paths(project: Project, employee_id: str) -> list[Path]:
        """Paths owned by the employee, in creation order."""
        return [path for path in project.paths if path.owner == employee_id]

    @classmethod
    def last_path(cls, project: Project, employee_id: str) -> Optional[Path]:
        owned = cls.owned_paths(project, employee_id)
        return owned[-1] if owned else None

    @classmethod
    def has_incomplete_path(cls, project: Project, employee_id: str) -> bool:
        last = cls.last_path(project, employee_id)
        return last is not None and last.is_open

    @classmethod
    def submit_waypoint(
        cls,
        project: Project,
        employee_id: str,
        candidate: Waypoint
    ) -> Path:
        """
        Append a waypoint to the employee's path structure.

        Args:
            project: Project aggregate, mutated in place on success
            employee_id: Submitting employee
            candidate: Validated waypoint tagged with employee_id

        Returns:
            The path the waypoint was appended to. A path with `id=None`
            was created by this call.

        Raises:
            PathConflict: Submission rejected, project left untouched
        """
        if candidate.path_owner != employee_id:
            candidate = replace(candidate, path_owner=employee_id)

        last = cls.last_path(project, employee_id)
        incomplete = last is not None and last.is_open

        if candidate.is_start:
            if incomplete:
                cls._reject(PathConflict.LAST_PATH_OPEN, project, employee_id)
            path = Path(waypoints=[candidate])
            project.paths.append(path)
            logger.debug(
                f"Started path #{len(project.paths) - 1} for {employee_id} "
                f"in project {project.project_id}"
            )
            return path

        if not incomplete:
            reason = (
                PathConflict.NO_PATH_TO_END if candidate.is_end
                else PathConflict.NO_ACTIVE_PATH
            )
            cls._reject(reason, project, employee_id)

        last.waypoints.append(candidate)
        if candidate.is_end:
            logger.debug(f"Closed path for {employee_id} in project {project.project_id}")
        else:
            logger.debug(f"Added midpoint for {employee_id} in project {project.project_id}")
        return last

    @staticmethod
    def _reject(reason: str, project: Project, employee_id: str) -> None:
        logger.info(
            f"Rejected waypoint from {employee_id} in project "
            f"{project.project_id}: {reason}"
        )
        raise PathConflict(reason)
