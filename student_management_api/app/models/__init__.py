"""Domain entities persisted by the repositories."""

from .student import Student  # noqa: F401
