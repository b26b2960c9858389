"""
Top-level router for version 1 of the API.

Aggregates domain routers under a unified prefix.  The application
mounts this router at ``/api/v1``.
"""

from fastapi import APIRouter

from .endpoints import students

router = APIRouter()

router.include_router(students.router, prefix="/students", tags=["students"])
