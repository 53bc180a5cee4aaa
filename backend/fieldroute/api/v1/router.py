"""
API Router v1

Combines all route modules.
"""

from fastapi import APIRouter

from fieldroute.api.v1.routes import projects, users

api_router = APIRouter()

api_router.include_router(projects.router, prefix="/projects", tags=["Projects"])
api_router.include_router(users.router, prefix="/users", tags=["Users"])
