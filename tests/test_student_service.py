from datetime import date, datetime, timedelta, timezone

import pytest

from student_management_api.app.core.exceptions import (
    DuplicateEmailError,
    InvalidArgumentError,
    StudentNotFoundError,
)
from student_management_api.app.schemas.student import StudentCreate, StudentUpdate
from student_management_api.app.services.student_service import StudentService


def _create(service, email="ada@x.com", **fields):
    data = {"first_name": "Ada", "last_name": "Lovelace", "email": email}
    data.update(fields)
    return service.create_student(StudentCreate(**data))


def test_create_sets_id_and_equal_timestamps(service):
    student = _create(service)

    assert student.id is not None
    assert student.created_at == student.updated_at
    assert student.first_name == "Ada"
    assert student.department is None


@pytest.mark.parametrize(
    "fields, message",
    [
        ({"first_name": None}, "First name is required"),
        ({"first_name": "   "}, "First name is required"),
        ({"last_name": ""}, "Last name is required"),
        ({"email": " "}, "Email is required"),
        ({"first_name": "", "email": ""}, "First name is required"),
    ],
)
def test_create_rejects_missing_required_fields(service, fields, message):
    data = {"first_name": "Ada", "last_name": "Lovelace", "email": "ada@x.com"}
    data.update(fields)

    with pytest.raises(InvalidArgumentError) as excinfo:
        service.create_student(StudentCreate(**data))

    assert excinfo.value.message == message
    assert service.get_all_students() == []


def test_create_rejects_duplicate_email(service):
    _create(service)

    with pytest.raises(DuplicateEmailError) as excinfo:
        _create(service, first_name="Other")

    assert excinfo.value.message == "Email already exists: ada@x.com"
    assert len(service.get_all_students()) == 1


def test_get_returns_what_was_stored(service):
    created = _create(
        service,
        date_of_birth=date(1815, 12, 10),
        department="Math",
        enrollment_year=1833,
    )

    assert service.get_student(created.id) == created


def test_get_unknown_id_raises(service):
    with pytest.raises(StudentNotFoundError) as excinfo:
        service.get_student(999)
    assert excinfo.value.message == "Student not found with id: 999"


def test_list_by_department_is_exact_match(service):
    math = _create(service, email="a@x.com", department="Math")
    _create(service, email="b@x.com", department="math")
    _create(service, email="c@x.com", department="Physics")
    _create(service, email="d@x.com")
    math2 = _create(service, email="e@x.com", department="Math")

    result = service.get_students_by_department("Math")

    assert [s.id for s in result] == [math.id, math2.id]
    assert service.get_students_by_department("Biology") == []
    assert len(service.get_all_students()) == 5


def test_update_department_only_keeps_other_fields(service):
    created = _create(service, date_of_birth=date(2000, 1, 1), enrollment_year=2018)

    updated = service.update_student(created.id, StudentUpdate(department="CS"))

    assert updated.department == "CS"
    assert updated.first_name == created.first_name
    assert updated.last_name == created.last_name
    assert updated.email == created.email
    assert updated.date_of_birth == created.date_of_birth
    assert updated.enrollment_year == created.enrollment_year
    assert updated.created_at == created.created_at
    assert updated.updated_at > created.updated_at
    assert service.get_student(created.id) == updated


def test_update_ignores_blank_and_null_values(service):
    created = _create(service, department="Math", enrollment_year=2020)

    updated = service.update_student(
        created.id,
        StudentUpdate(first_name="  ", email="", department="", enrollment_year=None),
    )

    assert updated.first_name == "Ada"
    assert updated.email == "ada@x.com"
    assert updated.department == "Math"
    assert updated.enrollment_year == 2020
    assert updated.updated_at > created.updated_at


def test_update_overwrites_supplied_fields(service):
    created = _create(service)

    updated = service.update_student(
        created.id,
        StudentUpdate(
            first_name="Augusta",
            email="augusta@x.com",
            date_of_birth=date(1815, 12, 10),
            enrollment_year=1835,
        ),
    )

    assert updated.first_name == "Augusta"
    assert updated.last_name == "Lovelace"
    assert updated.email == "augusta@x.com"
    assert updated.date_of_birth == date(1815, 12, 10)
    assert updated.enrollment_year == 1835


def test_update_to_email_of_other_student_fails(service):
    first = _create(service, email="a@x.com")
    _create(service, email="b@x.com")

    with pytest.raises(DuplicateEmailError):
        service.update_student(first.id, StudentUpdate(email="b@x.com"))

    assert service.get_student(first.id).email == "a@x.com"


def test_update_with_own_email_is_allowed(service):
    created = _create(service)

    updated = service.update_student(created.id, StudentUpdate(email="ada@x.com", last_name="King"))

    assert updated.email == "ada@x.com"
    assert updated.last_name == "King"


def test_update_unknown_id_raises(service):
    with pytest.raises(StudentNotFoundError):
        service.update_student(42, StudentUpdate(department="CS"))


def test_update_never_moves_updated_at_before_created_at(repository):
    times = iter([
        datetime(2024, 1, 2, tzinfo=timezone.utc),
        datetime(2024, 1, 1, tzinfo=timezone.utc),
    ])
    service = StudentService(repository, clock=lambda: next(times))
    created = _create(service)

    updated = service.update_student(created.id, StudentUpdate(department="CS"))

    assert updated.updated_at == created.created_at


def test_delete_then_get_raises(service):
    created = _create(service)

    service.delete_student(created.id)

    with pytest.raises(StudentNotFoundError):
        service.get_student(created.id)
    assert service.get_all_students() == []


def test_delete_unknown_id_raises(service):
    with pytest.raises(StudentNotFoundError):
        service.delete_student(7)


def test_ids_are_not_reused_after_delete(service):
    first = _create(service, email="a@x.com")
    service.delete_student(first.id)

    second = _create(service, email="a@x.com")

    assert second.id > first.id


def test_timestamps_use_the_clock(service, clock):
    expected = clock.now
    created = _create(service)

    assert created.created_at == expected
    assert clock.now == expected + timedelta(seconds=1)
