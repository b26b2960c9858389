"""
Student tools for AI agents.

``StudentTools`` mirrors the HTTP API as six named functions.  Dates
arrive as ``YYYY-MM-DD`` strings and are parsed here, before the
service sees them.  Records are returned as JSON-ready dicts in the
same camelCase shape as the HTTP responses.  Service errors become
``ToolError`` so the agent receives a tool failure rather than a
crash of the server.
"""

import logging
from datetime import date
from functools import wraps
from typing import Annotated, Any, Callable, Dict, List, Optional

from mcp.server.fastmcp.exceptions import ToolError
from pydantic import Field

from student_management_api.app.core.exceptions import (
    InvalidArgumentError,
    StudentServiceError,
    error_label,
    status_for,
)
from student_management_api.app.schemas.student import StudentCreate, StudentRead, StudentUpdate
from student_management_api.app.services.student_service import StudentService

logger = logging.getLogger(__name__)

StudentId = Annotated[int, Field(description="The student's unique ID")]
DateText = Annotated[Optional[str], Field(description="Date of birth in YYYY-MM-DD format")]


def parse_date(value: Optional[str]) -> Optional[date]:
    """Parse a ``YYYY-MM-DD`` string; ``None`` and blank mean no date."""
    if value is None or not value.strip():
        return None
    try:
        return date.fromisoformat(value.strip())
    except ValueError as exc:
        raise InvalidArgumentError(f"Invalid date '{value}', expected YYYY-MM-DD") from exc


def _as_tool_errors(func: Callable[..., Any]) -> Callable[..., Any]:
    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except StudentServiceError as exc:
            label = error_label(status_for(exc))
            logger.warning("Tool %s failed: %s", func.__name__, exc.message)
            raise ToolError(f"{label}: {exc.message}") from exc

    return wrapper


def _dump(student: StudentRead) -> Dict[str, Any]:
    return student.model_dump(mode="json", by_alias=True, exclude_none=True)


class StudentTools:
    """The six student tools, bound to one service instance."""

    def __init__(self, service: StudentService) -> None:
        self.service = service

    @_as_tool_errors
    def create_student(
        self,
        first_name: Annotated[str, Field(description="Student's first name")],
        last_name: Annotated[str, Field(description="Student's last name")],
        email: Annotated[str, Field(description="Student's email address")],
        date_of_birth: DateText = None,
        department: Annotated[Optional[str], Field(description="Department the student belongs to")] = None,
        enrollment_year: Annotated[Optional[int], Field(description="Year the student enrolled")] = None,
    ) -> Dict[str, Any]:
        """Create a new student record with the given details."""
        request = StudentCreate(
            first_name=first_name,
            last_name=last_name,
            email=email,
            date_of_birth=parse_date(date_of_birth),
            department=department,
            enrollment_year=enrollment_year,
        )
        return _dump(self.service.create_student(request))

    @_as_tool_errors
    def get_student(self, student_id: StudentId) -> Dict[str, Any]:
        """Get a student by their ID."""
        return _dump(self.service.get_student(student_id))

    @_as_tool_errors
    def get_all_students(self) -> List[Dict[str, Any]]:
        """Get a list of all students."""
        return [_dump(student) for student in self.service.get_all_students()]

    @_as_tool_errors
    def get_students_by_department(
        self,
        department: Annotated[str, Field(description="The department name to filter by")],
    ) -> List[Dict[str, Any]]:
        """Get all students in a specific department."""
        return [_dump(student) for student in self.service.get_students_by_department(department)]

    @_as_tool_errors
    def update_student(
        self,
        student_id: StudentId,
        first_name: Annotated[Optional[str], Field(description="New first name")] = None,
        last_name: Annotated[Optional[str], Field(description="New last name")] = None,
        email: Annotated[Optional[str], Field(description="New email address")] = None,
        date_of_birth: DateText = None,
        department: Annotated[Optional[str], Field(description="New department")] = None,
        enrollment_year: Annotated[Optional[int], Field(description="New enrollment year")] = None,
    ) -> Dict[str, Any]:
        """Update an existing student's details. Only provided fields will be updated."""
        supplied = {
            "first_name": first_name,
            "last_name": last_name,
            "email": email,
            "date_of_birth": parse_date(date_of_birth),
            "department": department,
            "enrollment_year": enrollment_year,
        }
        # Omitted arguments stay unset on the request.
        request = StudentUpdate(**{name: value for name, value in supplied.items() if value is not None})
        return _dump(self.service.update_student(student_id, request))

    @_as_tool_errors
    def delete_student(self, student_id: StudentId) -> str:
        """Delete a student by their ID."""
        self.service.delete_student(student_id)
        return f"Student with id {student_id} has been deleted successfully."

    def register(self, server: Any) -> None:
        """Register every tool on a ``FastMCP`` server."""
        for tool in (
            self.create_student,
            self.get_student,
            self.get_all_students,
            self.get_students_by_department,
            self.update_student,
            self.delete_student,
        ):
            server.add_tool(tool, name=tool.__name__, description=tool.__doc__)
