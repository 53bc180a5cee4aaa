"""
User Routes

Endpoints for user management and employee waypoint history.
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from fieldroute.db.session import get_async_db
from fieldroute.features.projects import ProjectService, EmployeeNotFound
from fieldroute.features.projects.schemas import EmployeeHistoryResponse, ReportEntrySchema
from fieldroute.features.users import UserRepository, UserCreate, UserUpdate, UserResponse

router = APIRouter()


@router.post("", response_model=UserResponse, status_code=201)
async def create_user(
    request: UserCreate,
    db: AsyncSession = Depends(get_async_db)
):
    """Create a new admin or employee."""
    user_repo = UserRepository(db)
    if await user_repo.get_by_emp_id(request.emp_id):
        raise HTTPException(status_code=400, detail="Employee ID already exists")

    user = await user_repo.create(
        emp_id=request.emp_id,
        name=request.name,
        email=request.email,
        mobile_no=request.mobile_no,
        role=request.role.value,
    )
    await db.commit()
    return UserResponse.model_validate(user)


@router.get("/{emp_id}", response_model=UserResponse)
async def get_user(emp_id: str, db: AsyncSession = Depends(get_async_db)):
    """Get user by employee ID."""
    user = await UserRepository(db).get_by_emp_id(emp_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return UserResponse.model_validate(user)


@router.patch("/{emp_id}", response_model=UserResponse)
async def update_user(
    emp_id: str,
    request: UserUpdate,
    db: AsyncSession = Depends(get_async_db)
):
    """Update user profile fields."""
    user_repo = UserRepository(db)
    user = await user_repo.get_by_emp_id(emp_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")

    changes = request.model_dump(exclude_unset=True)
    if not changes:
        raise HTTPException(status_code=400, detail="No fields to update provided")

    user = await user_repo.update(user, **changes)
    await db.commit()
    return UserResponse.model_validate(user)


@router.get("/{emp_id}/waypoints", response_model=EmployeeHistoryResponse)
async def get_employee_waypoints(
    emp_id: str,
    db: AsyncSession = Depends(get_async_db)
):
    """
    Get an employee's full waypoint history.

    Paths are grouped by survey date (newest first), then by project.
    """
    try:
        user, entries = await ProjectService(db).employee_history(emp_id)
    except EmployeeNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))

    return EmployeeHistoryResponse(
        success=True,
        emp_id=user.emp_id,
        employee_name=user.name,
        projects=[ReportEntrySchema.model_validate(entry) for entry in entries],
    )
