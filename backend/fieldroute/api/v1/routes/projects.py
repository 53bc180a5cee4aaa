"""
Project Routes

Endpoints for projects, employee assignment and waypoint ingestion.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from fieldroute.db.session import get_async_db
from fieldroute.features.projects import (
    ProjectService,
    ProjectError,
    ProjectNotFound,
    EmployeeNotFound,
    NotAssigned,
)
from fieldroute.features.projects.schemas import (
    AssignEmployeeRequest,
    ExportWaypointsResponse,
    ProjectCreate,
    ProjectListResponse,
    ProjectMutationResponse,
    ProjectResponse,
    ProjectWaypointsResponse,
    WaypointAddedResponse,
    WaypointCreate,
    WaypointResponse,
)
from fieldroute.features.routes import PathConflict

router = APIRouter()


def _http_error(error: ProjectError) -> HTTPException:
    """Map service errors to HTTP status codes."""
    if isinstance(error, (ProjectNotFound, EmployeeNotFound)):
        return HTTPException(status_code=404, detail=str(error))
    if isinstance(error, NotAssigned):
        return HTTPException(status_code=403, detail=str(error))
    return HTTPException(status_code=400, detail=str(error))


@router.post("", response_model=ProjectMutationResponse, status_code=201)
async def create_project(
    request: ProjectCreate,
    db: AsyncSession = Depends(get_async_db)
):
    """Create a new project (circle and division are required)."""
    service = ProjectService(db)
    try:
        project = await service.create_project(request)
    except ProjectError as e:
        raise _http_error(e)

    return ProjectMutationResponse(
        message="Project created successfully",
        project=ProjectResponse.model_validate(project),
    )


@router.get("", response_model=ProjectListResponse)
async def list_projects(db: AsyncSession = Depends(get_async_db)):
    """Get all projects."""
    projects = await ProjectService(db).list_projects()
    if not projects:
        raise HTTPException(status_code=404, detail="No projects found")

    return ProjectListResponse(
        message="Projects retrieved successfully",
        count=len(projects),
        projects=[ProjectResponse.model_validate(p) for p in projects],
    )


@router.get("/assigned/{emp_id}", response_model=ProjectListResponse)
async def list_assigned_projects(
    emp_id: str,
    db: AsyncSession = Depends(get_async_db)
):
    """Get all projects assigned to an employee."""
    try:
        projects = await ProjectService(db).list_assigned(emp_id)
    except ProjectError as e:
        raise _http_error(e)

    if not projects:
        raise HTTPException(status_code=404, detail="No projects found for this employee")

    return ProjectListResponse(
        message="Projects retrieved successfully",
        count=len(projects),
        projects=[ProjectResponse.model_validate(p) for p in projects],
    )


@router.post("/{project_id}/employees", response_model=ProjectMutationResponse)
async def assign_employee(
    project_id: str,
    request: AssignEmployeeRequest,
    db: AsyncSession = Depends(get_async_db)
):
    """Assign an employee to a project."""
    try:
        project = await ProjectService(db).assign_employee(project_id, request.emp_id)
    except ProjectError as e:
        raise _http_error(e)

    return ProjectMutationResponse(
        message="Employee assigned successfully",
        project=ProjectResponse.model_validate(project),
    )


@router.post(
    "/{project_id}/waypoints/{emp_id}",
    response_model=WaypointAddedResponse,
    status_code=201
)
async def add_waypoint(
    project_id: str,
    emp_id: str,
    request: WaypointCreate,
    db: AsyncSession = Depends(get_async_db)
):
    """
    Add a waypoint to the employee's path in a project.

    A start waypoint opens a new path, midpoints extend it and an end
    waypoint closes it. Out-of-order submissions are rejected with 400.
    """
    try:
        waypoint = await ProjectService(db).submit_waypoint(project_id, emp_id, request)
    except PathConflict as e:
        raise HTTPException(status_code=400, detail=e.message)
    except ProjectError as e:
        raise _http_error(e)

    return WaypointAddedResponse(
        message="Waypoint added successfully",
        waypoint=WaypointResponse.model_validate(waypoint),
    )


@router.get("/{project_id}/waypoints", response_model=ProjectWaypointsResponse)
async def get_project_waypoints(
    project_id: str,
    emp_id: Optional[str] = Query(default=None, description="Viewer; omit for the admin view"),
    db: AsyncSession = Depends(get_async_db)
):
    """
    Get the paths of a project.

    Admins see every path; employees only the paths they started.
    """
    try:
        paths = await ProjectService(db).project_paths(project_id, emp_id)
    except ProjectError as e:
        raise _http_error(e)

    return ProjectWaypointsResponse(
        success=True,
        waypoints=[
            [WaypointResponse.model_validate(wp) for wp in path.waypoints]
            for path in paths
        ],
    )


@router.get(
    "/{project_id}/employees/{emp_id}/waypoints",
    response_model=ExportWaypointsResponse
)
async def get_export_waypoints(
    project_id: str,
    emp_id: str,
    db: AsyncSession = Depends(get_async_db)
):
    """
    Get one employee's waypoints in a project, flattened in storage order.

    Feeds the spreadsheet/PDF/KMZ generators.
    """
    try:
        waypoints = await ProjectService(db).export_waypoints(project_id, emp_id)
    except ProjectError as e:
        raise _http_error(e)

    if not waypoints:
        raise HTTPException(
            status_code=404,
            detail="No waypoints found for this employee in the project"
        )

    return ExportWaypointsResponse(
        success=True,
        project_id=project_id,
        emp_id=emp_id,
        count=len(waypoints),
        waypoints=[WaypointResponse.model_validate(wp) for wp in waypoints],
    )
