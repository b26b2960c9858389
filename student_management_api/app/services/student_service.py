"""
Service layer for students.

``StudentService`` owns every business rule of the system: required
fields on creation, email uniqueness, partial-update semantics and the
entity to ``StudentRead`` mapping.  Each public method runs inside a
single repository transaction (read-only for lookups) and either
returns a complete result or raises one of the errors from
``core.exceptions``.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional

from student_management_api.app.core.exceptions import (
    DuplicateEmailError,
    InvalidArgumentError,
    StudentNotFoundError,
)
from student_management_api.app.models.student import Student
from student_management_api.app.repositories.student_repository import StudentRepository
from student_management_api.app.schemas.student import StudentCreate, StudentRead, StudentUpdate

logger = logging.getLogger(__name__)

_STRING_FIELDS = ("first_name", "last_name", "email", "department")
_VALUE_FIELDS = ("date_of_birth", "enrollment_year")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


class StudentService:
    """CRUD operations on student records."""

    def __init__(
        self,
        repository: StudentRepository,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self.repository = repository
        self.clock = clock

    def create_student(self, request: StudentCreate) -> StudentRead:
        """Validate and persist a new student.

        Both timestamps are set to the same instant.  Raises
        ``InvalidArgumentError`` for a missing or blank first name, last
        name or email (checked in that order) and ``DuplicateEmailError``
        if the email is taken.
        """
        if _is_blank(request.first_name):
            raise InvalidArgumentError("First name is required")
        if _is_blank(request.last_name):
            raise InvalidArgumentError("Last name is required")
        if _is_blank(request.email):
            raise InvalidArgumentError("Email is required")

        with self.repository.transaction() as students:
            if students.exists_by_email(request.email):
                raise DuplicateEmailError(request.email)

            now = self.clock()
            student = Student(
                first_name=request.first_name,
                last_name=request.last_name,
                email=request.email,
                date_of_birth=request.date_of_birth,
                department=request.department,
                enrollment_year=request.enrollment_year,
                created_at=now,
                updated_at=now,
            )
            student = students.save(student)

        logger.info("Created student with id: %s", student.id)
        return self._to_read(student)

    def get_student(self, student_id: int) -> StudentRead:
        with self.repository.transaction(read_only=True) as students:
            student = students.find_by_id(student_id)
        if student is None:
            raise StudentNotFoundError(student_id)
        return self._to_read(student)

    def get_all_students(self) -> List[StudentRead]:
        with self.repository.transaction(read_only=True) as students:
            rows = students.find_all()
        return [self._to_read(student) for student in rows]

    def get_students_by_department(self, department: str) -> List[StudentRead]:
        """Return students whose department equals ``department`` exactly."""
        with self.repository.transaction(read_only=True) as students:
            rows = students.find_by_department(department)
        return [self._to_read(student) for student in rows]

    def update_student(self, student_id: int, request: StudentUpdate) -> StudentRead:
        """Apply a partial update.

        Only fields present in ``request`` are considered.  Present
        string fields overwrite the stored value unless blank; dates and
        integers overwrite unless ``null``.  ``updated_at`` is refreshed
        on every successful call.
        """
        changes = request.model_dump(exclude_unset=True)

        with self.repository.transaction() as students:
            student = students.find_by_id(student_id)
            if student is None:
                raise StudentNotFoundError(student_id)

            new_email = changes.get("email")
            if (
                new_email is not None
                and new_email != student.email
                and students.exists_by_email(new_email)
            ):
                raise DuplicateEmailError(new_email)

            for name in _STRING_FIELDS:
                if name in changes and not _is_blank(changes[name]):
                    setattr(student, name, changes[name])
            for name in _VALUE_FIELDS:
                if changes.get(name) is not None:
                    setattr(student, name, changes[name])

            # Never let a skewed clock move updated_at before created_at.
            student.updated_at = max(self.clock(), student.created_at)
            student = students.save(student)

        logger.info("Updated student with id: %s", student.id)
        return self._to_read(student)

    def delete_student(self, student_id: int) -> None:
        with self.repository.transaction() as students:
            if not students.exists_by_id(student_id):
                raise StudentNotFoundError(student_id)
            students.delete_by_id(student_id)
        logger.info("Deleted student with id: %s", student_id)

    @staticmethod
    def _to_read(student: Student) -> StudentRead:
        return StudentRead.model_validate(student)
