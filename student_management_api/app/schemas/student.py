"""
Pydantic schemas for student records.

JSON payloads use camelCase names (``firstName``, ``dateOfBirth``...)
while Python code uses snake_case; both spellings are accepted on
input.  Required-field checks for creation live in the service, not
here, so that a missing field is reported as a 400 with the uniform
error body like every other invalid argument.
"""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class StudentBase(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    first_name: Optional[str] = Field(None, examples=["Ada"])
    last_name: Optional[str] = Field(None, examples=["Lovelace"])
    email: Optional[str] = Field(None, examples=["ada@example.com"])
    date_of_birth: Optional[date] = Field(None, examples=["1815-12-10"])
    department: Optional[str] = Field(None, examples=["Mathematics"])
    enrollment_year: Optional[int] = Field(None, examples=[2024])


class StudentCreate(StudentBase):
    """Schema for creating a student.

    ``firstName``, ``lastName`` and ``email`` are required and must not
    be blank; the remaining fields are optional.
    """


class StudentUpdate(StudentBase):
    """Schema for a partial update.

    Only fields present in the payload are considered (see
    ``model_fields_set``).  A present field that is ``null``, or a blank
    string, leaves the stored value untouched.
    """


class StudentRead(BaseModel):
    """Schema for reading a student."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    id: int
    first_name: str
    last_name: str
    email: str
    date_of_birth: Optional[date] = None
    department: Optional[str] = None
    enrollment_year: Optional[int] = None
    created_at: datetime
    updated_at: datetime


class ErrorResponse(BaseModel):
    """Body of every failed request."""

    status: int = Field(..., examples=[404])
    error: str = Field(..., examples=["Not Found"])
    message: str = Field(..., examples=["Student not found with id: 42"])
    path: str = Field(..., examples=["/api/v1/students/42"])
    timestamp: datetime
