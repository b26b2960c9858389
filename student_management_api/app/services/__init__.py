"""
Service layer.

Services encapsulate the business rules and are constructed with an
explicit reference to their repository, so the HTTP routers and the
agent tools can share one instance.
"""

from .student_service import StudentService  # noqa: F401
