"""
Project models.

Persisted shape of the route collection:

    projects -> paths (ordered by position) -> waypoints (ordered by position)

Models:
- Project: survey project with assigned employees
- Path: one employee's run of waypoints inside a project
- Waypoint: one recorded survey point
"""

from datetime import datetime
from sqlalchemy import (
    Boolean, Column, DateTime, Float, ForeignKey, Integer, JSON, String, Table, Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
import uuid

from fieldroute.models.base import Base
from fieldroute.features.users.models import User


project_employees = Table(
    "project_employees",
    Base.metadata,
    Column("project_id", Integer, ForeignKey("projects.id", ondelete="CASCADE"), primary_key=True),
    Column("user_id", String(36), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
)


class Project(Base):
    """Survey project (e.g. one feeder line in a circle/division)."""

    __tablename__ = "projects"

    id = Column(Integer, primary_key=True, autoincrement=True)
    project_id = Column(String(100), unique=True, index=True, nullable=False)

    circle = Column(String(100), nullable=False)
    division = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)

    # Owner
    created_by_id = Column(String(36), ForeignKey("users.id"), nullable=True)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    employees = relationship(User, secondary=project_employees, lazy="selectin")

    paths = relationship(
        "Path",
        back_populates="project",
        order_by="Path.position",
        lazy="selectin",
        cascade="all, delete-orphan"
    )

    def __repr__(self):
        return f"<Project {self.project_id} ({self.circle}/{self.division})>"


class Path(Base):
    """Ordered run of waypoints owned by one employee."""

    __tablename__ = "paths"
    __table_args__ = (UniqueConstraint("project_id", "position"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    project_id = Column(Integer, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False)  # path-start order within the project
    owner_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)

    # Relationships
    project = relationship("Project", back_populates="paths")

    waypoints = relationship(
        "Waypoint",
        back_populates="path",
        order_by="Waypoint.position",
        lazy="selectin",
        cascade="all, delete-orphan"
    )

    def __repr__(self):
        return f"<Path {self.id} project={self.project_id} #{self.position}>"


class Waypoint(Base):
    """
    One geotagged survey point.

    Rows are insert-only: there is no update path for waypoints.
    """

    __tablename__ = "waypoints"
    __table_args__ = (UniqueConstraint("path_id", "position"),)

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    path_id = Column(Integer, ForeignKey("paths.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False)

    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    distance_from_previous = Column(Float, default=0.0)

    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)

    # Route classification
    route_type = Column(String(50), nullable=False)
    route_starting_point = Column(String(255), nullable=False)
    route_ending_point = Column(String(255), nullable=False)

    is_start = Column(Boolean, default=False, nullable=False)
    is_end = Column(Boolean, default=False, nullable=False)
    image = Column(String(500), nullable=True)

    # Equipment records (JSON for flexibility)
    pole_details = Column(JSON, nullable=False, default=list)
    gps_details = Column(JSON, nullable=False, default=list)

    # Metadata
    timestamp = Column(DateTime, default=datetime.utcnow, nullable=False)
    created_by_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    path_owner_id = Column(String(36), ForeignKey("users.id"), nullable=True)

    # Relationships
    path = relationship("Path", back_populates="waypoints")

    def __repr__(self):
        return f"<Waypoint {self.id} start={self.is_start} end={self.is_end}>"
