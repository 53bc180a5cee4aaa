"""
Shared constants.
"""

from enum import Enum


class UserRole(str, Enum):
    """
    Roles of application users.

    - ADMIN: creates projects, assigns employees, sees every path
    - EMPLOYEE: records waypoints in assigned projects, sees own paths
    """
    ADMIN = "admin"
    EMPLOYEE = "employee"
