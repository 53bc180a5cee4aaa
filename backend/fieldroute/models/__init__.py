"""
Database Models

Feature models live in features/*/models.py and register themselves on
this Base when imported.
"""

from fieldroute.models.base import Base

__all__ = ["Base"]
