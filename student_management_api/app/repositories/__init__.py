"""
Persistence layer.

Repositories hide SQL from the service layer.  Each one is built
around a connection factory and scopes its work in explicit
transactions.
"""

from .student_repository import StudentRepository  # noqa: F401
