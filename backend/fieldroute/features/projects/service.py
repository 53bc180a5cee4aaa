"""
ProjectService — project management, waypoint ingestion and history.

Orchestrates load -> decide -> persist around the route core:

- submit_waypoint(): caller checks, PathBuilder decision, single commit
- employee_history(): ReportAggregator over every assigned project
- export_waypoints(): flat single-project slice for report generators
"""

import logging
import uuid
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from fieldroute.features import routes
from fieldroute.features.routes import PathBuilder, ReportAggregator, SegmentExtractor
from fieldroute.features.users.models import User
from fieldroute.features.users.repository import UserRepository
from .models import Project
from .repository import ProjectRepository
from .schemas import ProjectCreate, WaypointCreate

logger = logging.getLogger(__name__)


# =============================================================================
# Exceptions
# =============================================================================

class ProjectError(Exception):
    """Base project error."""
    pass


class ProjectNotFound(ProjectError):
    """Project does not exist."""
    pass


class EmployeeNotFound(ProjectError):
    """Employee does not exist (or is not an employee)."""
    pass


class ProjectExists(ProjectError):
    """Project ID already taken."""
    pass


class AlreadyAssigned(ProjectError):
    """Employee already assigned to the project."""
    pass


class NotAssigned(ProjectError):
    """Employee is not assigned to the project."""
    pass


# =============================================================================
# Service
# =============================================================================

class ProjectService:
    """Project operations on top of the route aggregate."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.projects = ProjectRepository(db)
        self.users = UserRepository(db)

    # === Projects ===

    async def create_project(self, data: ProjectCreate) -> Project:
        """
        Create a new project.

        Without an explicit `project_id` the next sequential ID
        (`Project_<count + 1>`) is assigned.

        Raises:
            ProjectExists: project_id already in use
            EmployeeNotFound: created_by given but unknown
        """
        project_id = data.project_id or await self.next_project_id()
        if await self.projects.get_by_project_id(project_id):
            raise ProjectExists(f"Project with ID {project_id} already exists")

        created_by_id = None
        if data.created_by:
            creator = await self.users.get_by_emp_id(data.created_by)
            if not creator:
                raise EmployeeNotFound(f"User not found: {data.created_by}")
            created_by_id = creator.id

        project = await self.projects.create(
            project_id=project_id,
            circle=data.circle,
            division=data.division,
            description=data.description,
            created_by_id=created_by_id,
        )
        await self.db.refresh(project, attribute_names=["employees", "paths"])
        await self.db.commit()
        logger.info(f"Created project {project.project_id}")
        return project

    async def next_project_id(self) -> str:
        return f"Project_{await self.projects.count() + 1}"

    async def assign_employee(self, project_id: str, emp_id: str) -> Project:
        """
        Assign an employee to a project.

        Raises:
            ProjectNotFound, EmployeeNotFound, AlreadyAssigned
        """
        project = await self._get_project(project_id)

        employee = await self.users.get_employee(emp_id)
        if not employee:
            raise EmployeeNotFound(
                "Employee not found or user doesn't have employee role"
            )

        if self.projects.is_assigned(project, employee):
            raise AlreadyAssigned("Employee already assigned")

        await self.projects.add_employee(project, employee)
        await self.db.commit()
        logger.info(f"Assigned {emp_id} to project {project_id}")
        return project

    async def list_projects(self) -> list[Project]:
        return await self.projects.list_all()

    async def list_assigned(self, emp_id: str) -> list[Project]:
        """Projects assigned to an employee."""
        user = await self._get_user(emp_id)
        return await self.projects.list_for_employee(user.id)

    # === Waypoints ===

    async def submit_waypoint(
        self,
        project_id: str,
        emp_id: str,
        data: WaypointCreate
    ) -> routes.Waypoint:
        """
        Record a waypoint for an employee.

        Args:
            project_id: Project identifier
            emp_id: Submitting employee
            data: Validated submission

        Returns:
            The stored waypoint

        Raises:
            ProjectNotFound, EmployeeNotFound, NotAssigned
            PathConflict: submission breaks path well-formedness (nothing stored)
        """
        project = await self._get_project(project_id)
        user = await self._get_user(emp_id)

        if not self.projects.is_assigned(project, user):
            raise NotAssigned("Not assigned to this project")

        candidate = self.build_candidate(user, data)
        aggregate = self.projects.to_aggregate(project)

        path = PathBuilder.submit_waypoint(aggregate, user.id, candidate)
        position = next(i for i, p in enumerate(aggregate.paths) if p is path)

        await self.projects.save_append(project, path, position)
        await self.db.commit()

        logger.info(
            f"Waypoint {candidate.id} added by {emp_id} to project {project_id} "
            f"(path #{position}, {len(path)} points)"
        )
        return path.last

    @staticmethod
    def build_candidate(user: User, data: WaypointCreate) -> routes.Waypoint:
        """Turn a validated submission into a waypoint owned by the user."""
        return routes.Waypoint(
            id=str(uuid.uuid4()),
            name=data.name,
            description=data.description,
            distance_from_previous=data.distance_from_previous,
            latitude=data.latitude,
            longitude=data.longitude,
            is_start=data.is_start,
            is_end=data.is_end,
            image=data.image,
            pole_details=[p.model_dump(by_alias=True) for p in data.pole_details],
            gps_details=[g.model_dump(by_alias=True) for g in data.gps_details],
            route_type=data.route_type,
            route_starting_point=data.route_starting_point,
            route_ending_point=data.route_ending_point,
            created_by=user.id,
            path_owner=user.id,
            timestamp=datetime.utcnow(),
        )

    async def project_paths(
        self,
        project_id: str,
        emp_id: str | None = None
    ) -> list[routes.Path]:
        """
        Paths of a project as seen by a user.

        Without `emp_id` (or for an admin) every path is returned. An
        employee only gets the paths they started and must be assigned.

        Raises:
            ProjectNotFound, EmployeeNotFound, NotAssigned
        """
        project = await self._get_project(project_id)
        aggregate = self.projects.to_aggregate(project)

        if emp_id is None:
            return aggregate.paths

        user = await self._get_user(emp_id)
        if user.is_admin:
            return aggregate.paths

        if not self.projects.is_assigned(project, user):
            raise NotAssigned("Not authorized to access this project")

        return SegmentExtractor.paths_started_by(aggregate, user.id)

    async def export_waypoints(self, project_id: str, emp_id: str) -> list[routes.Waypoint]:
        """
        Flattened waypoints of one employee in one project.

        Raises:
            ProjectNotFound, EmployeeNotFound, NotAssigned
        """
        user = await self._get_user(emp_id)
        project = await self._get_project(project_id)

        if not self.projects.is_assigned(project, user):
            raise NotAssigned("Employee is not part of this project")

        aggregate = self.projects.to_aggregate(project)
        return SegmentExtractor.employee_waypoints(aggregate, user.id)

    # === History ===

    async def employee_history(self, emp_id: str) -> tuple[User, list[routes.ReportEntry]]:
        """
        Reconstruct an employee's survey history across assigned projects.

        Returns:
            (user, report entries); entries are empty if nothing was recorded

        Raises:
            EmployeeNotFound
        """
        user = await self._get_user(emp_id)
        projects = await self.projects.list_for_employee(user.id)

        entries = ReportAggregator.reconstruct(
            [self.projects.to_aggregate(p) for p in projects],
            user.id,
            employees={user.id: self.users.to_ref(user)},
        )
        logger.debug(f"History for {emp_id}: {len(entries)} entries from {len(projects)} projects")
        return user, entries

    # === Helpers ===

    async def _get_project(self, project_id: str) -> Project:
        project = await self.projects.get_by_project_id(project_id)
        if not project:
            raise ProjectNotFound("Project not found")
        return project

    async def _get_user(self, emp_id: str) -> User:
        user = await self.users.get_by_emp_id(emp_id)
        if not user:
            raise EmployeeNotFound("Employee not found")
        return user
