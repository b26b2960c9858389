"""
SQLite-backed repository for students.

All queries use parameterized statements.  Data methods must be called
inside ``transaction()``; the connection opened by the transaction is
tracked in a context variable so concurrent requests (threads or
asyncio tasks) each work on their own connection.
"""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import date, datetime
from typing import Callable, Iterator, List, Optional

from student_management_api.app.core.exceptions import DuplicateEmailError, InvalidArgumentError
from student_management_api.app.models.student import Student


_COLUMNS = (
    "id, first_name, last_name, email, date_of_birth, department, "
    "enrollment_year, created_at, updated_at"
)

# SQLite INTEGER is a signed 64-bit value; larger ids cannot name a row.
_MAX_ID = 2**63 - 1


def _storable_id(student_id: int) -> bool:
    return -_MAX_ID - 1 <= student_id <= _MAX_ID


class StudentRepository:
    """Store for ``Student`` entities with a unique email index."""

    def __init__(self, connect: Callable[[], sqlite3.Connection]) -> None:
        self._connect = connect
        self._current: ContextVar[Optional[sqlite3.Connection]] = ContextVar(
            f"student_repository_{id(self)}", default=None
        )

    @contextmanager
    def transaction(self, read_only: bool = False) -> Iterator["StudentRepository"]:
        """Run the enclosed block as one atomic unit of work.

        Write transactions take SQLite's reserved lock up front
        (``BEGIN IMMEDIATE``) so a read-modify-write cannot interleave
        with another writer.  Read-only transactions additionally set
        ``query_only`` so any write attempt fails.  The transaction is
        committed on success and rolled back on any exception.
        """
        if self._current.get() is not None:
            raise RuntimeError("A student transaction is already active in this context")

        conn = self._connect()
        conn.isolation_level = None
        token = self._current.set(conn)
        try:
            if read_only:
                conn.execute("PRAGMA query_only = ON")
                conn.execute("BEGIN")
            else:
                conn.execute("BEGIN IMMEDIATE")
            try:
                yield self
            except BaseException:
                if conn.in_transaction:
                    conn.execute("ROLLBACK")
                raise
            if read_only:
                conn.execute("ROLLBACK")
            else:
                conn.execute("COMMIT")
        finally:
            self._current.reset(token)
            conn.close()

    def _conn(self) -> sqlite3.Connection:
        conn = self._current.get()
        if conn is None:
            raise RuntimeError("StudentRepository used outside of a transaction")
        return conn

    def find_by_id(self, student_id: int) -> Optional[Student]:
        if not _storable_id(student_id):
            return None
        row = self._conn().execute(
            f"SELECT {_COLUMNS} FROM students WHERE id = ?", (student_id,)
        ).fetchone()
        return self._row_to_student(row) if row else None

    def find_all(self) -> List[Student]:
        rows = self._conn().execute(
            f"SELECT {_COLUMNS} FROM students ORDER BY id"
        ).fetchall()
        return [self._row_to_student(row) for row in rows]

    def find_by_department(self, department: str) -> List[Student]:
        # ``=`` on TEXT uses the BINARY collation, i.e. case-sensitive.
        rows = self._conn().execute(
            f"SELECT {_COLUMNS} FROM students WHERE department = ? ORDER BY id",
            (department,),
        ).fetchall()
        return [self._row_to_student(row) for row in rows]

    def exists_by_email(self, email: str) -> bool:
        row = self._conn().execute(
            "SELECT 1 FROM students WHERE email = ? LIMIT 1", (email,)
        ).fetchone()
        return row is not None

    def exists_by_id(self, student_id: int) -> bool:
        if not _storable_id(student_id):
            return False
        row = self._conn().execute(
            "SELECT 1 FROM students WHERE id = ? LIMIT 1", (student_id,)
        ).fetchone()
        return row is not None

    def save(self, student: Student) -> Student:
        """Insert a new student or update an existing one.

        New entities (``id is None``) get the id assigned by the store.
        A violation of the unique email index is reported as
        ``DuplicateEmailError``; this is what decides races between
        concurrent creates that both passed the ``exists_by_email`` check.
        """
        conn = self._conn()
        values = (
            student.first_name,
            student.last_name,
            student.email,
            student.date_of_birth.isoformat() if student.date_of_birth else None,
            student.department,
            student.enrollment_year,
            student.created_at.isoformat(),
            student.updated_at.isoformat(),
        )
        try:
            if student.id is None:
                cursor = conn.execute(
                    """
                    INSERT INTO students (first_name, last_name, email, date_of_birth,
                                          department, enrollment_year, created_at, updated_at)
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    values,
                )
                student.id = cursor.lastrowid
            else:
                conn.execute(
                    """
                    UPDATE students
                    SET first_name = ?, last_name = ?, email = ?, date_of_birth = ?,
                        department = ?, enrollment_year = ?, created_at = ?, updated_at = ?
                    WHERE id = ?
                    """,
                    values + (student.id,),
                )
        except sqlite3.IntegrityError as exc:
            if "email" in str(exc):
                raise DuplicateEmailError(student.email) from exc
            raise
        except OverflowError as exc:
            # Only enrollment_year is caller-supplied and integer-typed.
            raise InvalidArgumentError(
                f"Enrollment year out of range: {student.enrollment_year}"
            ) from exc
        return student

    def delete_by_id(self, student_id: int) -> None:
        if not _storable_id(student_id):
            return
        self._conn().execute("DELETE FROM students WHERE id = ?", (student_id,))

    @staticmethod
    def _row_to_student(row: sqlite3.Row) -> Student:
        """Convert a database row to a ``Student`` entity."""
        return Student(
            id=row["id"],
            first_name=row["first_name"],
            last_name=row["last_name"],
            email=row["email"],
            date_of_birth=date.fromisoformat(row["date_of_birth"]) if row["date_of_birth"] else None,
            department=row["department"],
            enrollment_year=row["enrollment_year"],
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
        )
