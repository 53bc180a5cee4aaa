"""
User management module.

Usage:
    from fieldroute.features.users import User, UserRepository

Models:
- User: Admin or field employee

Repositories:
- UserRepository: Data access for users
"""

from .models import User
from .schemas import UserCreate, UserUpdate, UserResponse, EmployeeSummary
from .repository import UserRepository

__all__ = [
    # Models
    "User",
    # Schemas
    "UserCreate",
    "UserUpdate",
    "UserResponse",
    "EmployeeSummary",
    # Repositories
    "UserRepository",
]
