"""
Project management module.

Usage:
    from fieldroute.features.projects import ProjectService, ProjectRepository

Components:
- Project / Path / Waypoint: SQLAlchemy models for the route collection
- ProjectRepository: CRUD plus conversion to the route aggregate
- ProjectService: project management, waypoint ingestion, history
"""

from .models import Project, Path, Waypoint, project_employees
from .repository import ProjectRepository
from .service import (
    ProjectService,
    ProjectError,
    ProjectNotFound,
    EmployeeNotFound,
    ProjectExists,
    AlreadyAssigned,
    NotAssigned,
)

__all__ = [
    # Models
    "Project",
    "Path",
    "Waypoint",
    "project_employees",
    # Data access
    "ProjectRepository",
    # Service
    "ProjectService",
    "ProjectError",
    "ProjectNotFound",
    "EmployeeNotFound",
    "ProjectExists",
    "AlreadyAssigned",
    "NotAssigned",
]
