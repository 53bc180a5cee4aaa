"""
User model.

Admins and field employees. Authentication is handled outside this
service, so no credentials are stored here.
"""

from datetime import datetime
from sqlalchemy import Column, String, DateTime
import uuid

from fieldroute.models.base import Base
from fieldroute.shared.constants import UserRole


class User(Base):
    """
    Application user.

    Identified externally by `emp_id`; `id` is the internal key that
    waypoints reference as creator and path owner.
    """

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    emp_id = Column(String(50), unique=True, index=True, nullable=False)

    # Profile
    name = Column(String(100), nullable=True)
    email = Column(String(255), nullable=True)
    mobile_no = Column(String(20), nullable=True)
    image = Column(String(500), nullable=True)
    role = Column(String(20), nullable=False, default=UserRole.EMPLOYEE.value)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value

    def __repr__(self):
        return f"<User {self.emp_id} ({self.name})>"
