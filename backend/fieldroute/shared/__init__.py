"""
Shared utilities (NOT business logic).

Usage:
    from fieldroute.shared import BaseRepository, UserRole
"""
from .constants import UserRole
from .repository import BaseRepository

__all__ = [
    "UserRole",
    "BaseRepository",
]
