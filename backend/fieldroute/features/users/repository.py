"""
User repository.

Data access layer for User model.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from fieldroute.shared.repository import BaseRepository
from fieldroute.features.routes import EmployeeRef
from .models import User


class UserRepository(BaseRepository[User]):
    """Repository for User operations."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, User)

    async def get_by_emp_id(self, emp_id: str) -> User | None:
        """
        Get user by employee ID.

        Args:
            emp_id: External employee identifier

        Returns:
            User if found, None otherwise
        """
        return await self.get_by(emp_id=emp_id)

    async def get_employee(self, emp_id: str) -> User | None:
        """Get user by employee ID, only if they have the employee role."""
        user = await self.get_by_emp_id(emp_id)
        if user and user.is_admin:
            return None
        return user

    @staticmethod
    def to_ref(user: User) -> EmployeeRef:
        """Convert User model to the identity record used in reports."""
        return EmployeeRef(
            id=user.id,
            emp_id=user.emp_id,
            name=user.name,
            role=user.role,
            email=user.email,
        )
