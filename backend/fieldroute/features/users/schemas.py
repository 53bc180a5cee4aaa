"""
User schemas.

Pydantic models for user operations.
"""

import re
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from fieldroute.shared.constants import UserRole


def _check_mobile(v: Optional[str]) -> Optional[str]:
    if v is not None and not re.search(r"[0-9]{10}$", v):
        raise ValueError(f"{v} is not a valid mobile number")
    return v


class UserCreate(BaseModel):
    """Create user request."""

    emp_id: str = Field(min_length=1, max_length=50)
    name: Optional[str] = None
    email: Optional[str] = None
    mobile_no: Optional[str] = None
    role: UserRole = UserRole.EMPLOYEE

    @field_validator("mobile_no")
    @classmethod
    def validate_mobile(cls, v: Optional[str]) -> Optional[str]:
        return _check_mobile(v)


class UserUpdate(BaseModel):
    """Update user request. Only provided fields change."""

    name: Optional[str] = None
    email: Optional[str] = None
    mobile_no: Optional[str] = None
    image: Optional[str] = None

    @field_validator("mobile_no")
    @classmethod
    def validate_mobile(cls, v: Optional[str]) -> Optional[str]:
        return _check_mobile(v)


class UserResponse(BaseModel):
    """User response."""

    id: str
    emp_id: str
    name: Optional[str]
    email: Optional[str]
    mobile_no: Optional[str]
    image: Optional[str]
    role: str
    created_at: Optional[datetime]

    class Config:
        from_attributes = True


class EmployeeSummary(BaseModel):
    """Short employee reference used in project listings."""

    emp_id: str
    name: Optional[str] = None

    class Config:
        from_attributes = True
