"""
API v1 Router
"""

from fastapi import APIRouter
from . import projects, skills, users

router = APIRouter()

router.include_router(projects.router, prefix="/projects", tags=["Projects"])
router.include_router(skills.router, prefix="/user-skills", tags=["Skills"])
router.include_router(users.router, prefix="/users", tags=["Users"])


@router.get("/", tags=["API"])
async def api_root():
    """API root: returns version and available endpoints."""
    return {
        "api": "v1",
        "version": "0.1.0",
        "endpoints": [
            "/projects",
            "/projects/join",
            "/projects/member",
            "/user-skills",
            "/users/me",
            "/users/directory",
        ],
    }
