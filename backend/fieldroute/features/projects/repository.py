"""
Project repository.

Data access layer for projects and their path collection, plus the
conversion between stored rows and the route aggregate.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fieldroute.shared.repository import BaseRepository
from fieldroute.features import routes
from fieldroute.features.users.models import User
from .models import Project, Path, Waypoint, project_employees


class ProjectRepository(BaseRepository[Project]):
    """Repository for Project operations."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, Project)

    async def get_by_project_id(self, project_id: str) -> Project | None:
        """
        Get project by its public identifier.

        Paths and waypoints are loaded eagerly.

        Args:
            project_id: Project identifier (e.g. "PRJ001")

        Returns:
            Project if found, None otherwise
        """
        return await self.get_by(project_id=project_id)

    async def list_all(self) -> list[Project]:
        """All projects, oldest first."""
        result = await self.db.execute(select(Project).order_by(Project.id))
        return list(result.scalars().all())

    async def list_for_employee(self, user_id: str) -> list[Project]:
        """
        Projects the user is assigned to.

        Args:
            user_id: User.id of the employee

        Returns:
            Projects in creation order
        """
        result = await self.db.execute(
            select(Project)
            .join(project_employees, project_employees.c.project_id == Project.id)
            .where(project_employees.c.user_id == user_id)
            .order_by(Project.id)
        )
        return list(result.scalars().all())

    async def add_employee(self, project: Project, user: User) -> Project:
        """Assign a user to the project."""
        project.employees.append(user)
        await self.db.flush()
        return project

    @staticmethod
    def is_assigned(project: Project, user: User) -> bool:
        return any(emp.id == user.id for emp in project.employees)

    async def save_append(
        self,
        project: Project,
        path: routes.Path,
        position: int
    ) -> Waypoint:
        """
        Persist the waypoint PathBuilder just appended.

        Inserts a new path row when the path was created by the
        submission (`path.id is None`), then the waypoint row.

        Args:
            project: Stored project
            path: Aggregate path that received the waypoint
            position: Index of the path within the project

        Returns:
            Created waypoint row
        """
        if path.id is None:
            row = Path(
                project_id=project.id,
                position=position,
                owner_id=path.owner,
            )
            self.db.add(row)
            await self.db.flush()
            path.id = row.id

        waypoint = path.last
        row = Waypoint(
            id=waypoint.id,
            path_id=path.id,
            position=len(path) - 1,
            name=waypoint.name,
            description=waypoint.description,
            distance_from_previous=waypoint.distance_from_previous,
            latitude=waypoint.latitude,
            longitude=waypoint.longitude,
            route_type=waypoint.route_type,
            route_starting_point=waypoint.route_starting_point,
            route_ending_point=waypoint.route_ending_point,
            is_start=waypoint.is_start,
            is_end=waypoint.is_end,
            image=waypoint.image,
            pole_details=list(waypoint.pole_details),
            gps_details=list(waypoint.gps_details),
            timestamp=waypoint.timestamp,
            created_by_id=waypoint.created_by,
            path_owner_id=waypoint.path_owner,
        )
        self.db.add(row)
        await self.db.flush()
        return row

    @staticmethod
    def to_aggregate(project: Project) -> routes.Project:
        """
        Convert stored project to the route aggregate.

        Args:
            project: Project model with paths loaded

        Returns:
            Aggregate holding paths in position order
        """
        return routes.Project(
            project_id=project.project_id,
            circle=project.circle,
            division=project.division,
            description=project.description,
            paths=[
                routes.Path(
                    id=path.id,
                    waypoints=[to_waypoint(row) for row in path.waypoints],
                )
                for path in project.paths
            ],
        )


def to_waypoint(row: Waypoint) -> routes.Waypoint:
    """Convert a waypoint row to its value record."""
    return routes.Waypoint(
        id=row.id,
        name=row.name,
        description=row.description,
        distance_from_previous=row.distance_from_previous or 0.0,
        latitude=row.latitude,
        longitude=row.longitude,
        route_type=row.route_type,
        route_starting_point=row.route_starting_point,
        route_ending_point=row.route_ending_point,
        is_start=bool(row.is_start),
        is_end=bool(row.is_end),
        image=row.image,
        pole_details=list(row.pole_details or []),
        gps_details=list(row.gps_details or []),
        timestamp=row.timestamp,
        created_by=row.created_by_id,
        path_owner=row.path_owner_id,
    )
