"""
Student endpoints for API v1.

These routes expose CRUD operations on student records.  Handlers
are thin: they log the request, call ``StudentService`` and let
service errors propagate to the exception handlers registered in
``main.py``, which turn them into the uniform error body.  The
collection routes answer both with and without a trailing slash.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status

from student_management_api.app.api.dependencies import get_student_service
from student_management_api.app.schemas.student import (
    ErrorResponse,
    StudentCreate,
    StudentRead,
    StudentUpdate,
)
from student_management_api.app.services.student_service import StudentService

logger = logging.getLogger(__name__)

router = APIRouter()

_NOT_FOUND = {404: {"model": ErrorResponse}}
_BAD_REQUEST = {400: {"model": ErrorResponse}}
_CONFLICT = {409: {"model": ErrorResponse}}


@router.post(
    "",
    response_model=StudentRead,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
    responses={**_BAD_REQUEST, **_CONFLICT},
)
@router.post(
    "/",
    response_model=StudentRead,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
    include_in_schema=False,
)
def create_student(
    student_in: StudentCreate,
    service: StudentService = Depends(get_student_service),
) -> StudentRead:
    """Create a new student.

    ``firstName``, ``lastName`` and ``email`` are required.  Returns
    409 if the email is already used by another student.
    """
    logger.info("Creating student: %s %s", student_in.first_name, student_in.last_name)
    return service.create_student(student_in)


@router.get(
    "/{student_id}",
    response_model=StudentRead,
    response_model_exclude_none=True,
    responses=_NOT_FOUND,
)
def get_student(
    student_id: int,
    service: StudentService = Depends(get_student_service),
) -> StudentRead:
    """Retrieve a single student by ID."""
    logger.debug("Fetching student with id: %s", student_id)
    return service.get_student(student_id)


@router.get("", response_model=List[StudentRead], response_model_exclude_none=True)
@router.get("/", response_model=List[StudentRead], response_model_exclude_none=True, include_in_schema=False)
def list_students(
    department: Optional[str] = Query(None, description="Only return students of this department"),
    service: StudentService = Depends(get_student_service),
) -> List[StudentRead]:
    """Return all students, or those of one department.

    The department filter is an exact, case-sensitive match.  A blank
    value is ignored.
    """
    if department is not None and department.strip():
        logger.debug("Fetching students by department: %s", department)
        return service.get_students_by_department(department)
    logger.debug("Fetching all students")
    return service.get_all_students()


@router.put(
    "/{student_id}",
    response_model=StudentRead,
    response_model_exclude_none=True,
    responses={**_BAD_REQUEST, **_NOT_FOUND, **_CONFLICT},
)
def update_student(
    student_id: int,
    student_in: StudentUpdate,
    service: StudentService = Depends(get_student_service),
) -> StudentRead:
    """Partially update a student; only provided fields change."""
    logger.info("Updating student with id: %s", student_id)
    return service.update_student(student_id, student_in)


@router.delete(
    "/{student_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=_NOT_FOUND,
)
def delete_student(
    student_id: int,
    service: StudentService = Depends(get_student_service),
) -> Response:
    """Delete a student permanently."""
    logger.info("Deleting student with id: %s", student_id)
    service.delete_student(student_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
