from datetime import datetime, timedelta, timezone
from functools import partial

import pytest
from fastapi.testclient import TestClient

from student_management_api.app.core.config import Settings
from student_management_api.app.core.db import get_connection, init_db
from student_management_api.app.main import create_app
from student_management_api.app.repositories.student_repository import StudentRepository
from student_management_api.app.services.student_service import StudentService


class TickingClock:
    """Returns a strictly increasing UTC time, one second per call."""

    def __init__(self, start=datetime(2024, 9, 1, 8, 0, tzinfo=timezone.utc)):
        self.now = start

    def __call__(self):
        current = self.now
        self.now += timedelta(seconds=1)
        return current


@pytest.fixture
def db_path(tmp_path):
    path = str(tmp_path / "students.db")
    init_db(path)
    return path


@pytest.fixture
def repository(db_path):
    return StudentRepository(partial(get_connection, db_path))


@pytest.fixture
def clock():
    return TickingClock()


@pytest.fixture
def service(repository, clock):
    return StudentService(repository, clock=clock)


@pytest.fixture
def app(service, db_path):
    return create_app(Settings(database_url=db_path), service=service)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client
