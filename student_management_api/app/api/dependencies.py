"""FastAPI dependencies shared by the endpoint modules."""

from fastapi import Request

from student_management_api.app.services.student_service import StudentService


def get_student_service(request: Request) -> StudentService:
    """Return the service instance wired onto the app by ``create_app``."""
    return request.app.state.student_service
