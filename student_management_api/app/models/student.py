"""
The student entity.

A plain dataclass mirroring one row of the ``students`` table.  The
repository converts rows to and from this type; the service mutates
it during partial updates and maps it to ``StudentRead`` for the API.
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional


@dataclass
class Student:
    first_name: str
    last_name: str
    email: str
    created_at: datetime
    updated_at: datetime
    date_of_birth: Optional[date] = None
    department: Optional[str] = None
    enrollment_year: Optional[int] = None
    # Assigned by the store on first save.
    id: Optional[int] = None
