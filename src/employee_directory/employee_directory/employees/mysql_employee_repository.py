from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

import mysql.connector

from ..core.constants import DEFAULT_PHOTO_URL
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, escape_like, fetchall, fetchone, from_db_datetime, to_db_datetime
from .model import Employee
from .repository import EmployeeRepository

_COLUMNS = """
    identifier, name, email, mobile_number, date_of_birth, password_hash,
    department, role, photo_reference, address, phone, created_at
"""


def _row_to_employee(row: Dict[str, Any]) -> Employee:
    return Employee(
        identifier=row["identifier"],
        name=row["name"],
        mobile_number=row["mobile_number"],
        date_of_birth=row["date_of_birth"],
        password_hash=row["password_hash"],
        department=row["department"],
        created_at=from_db_datetime(row["created_at"]),
        email=row.get("email"),
        role=row.get("role"),
        photo_reference=row.get("photo_reference") or DEFAULT_PHOTO_URL,
        address=row.get("address"),
        phone=row.get("phone"),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_identifier(self, identifier: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE identifier=%s", (identifier,))
            row = fetchone(cur)
            return _row_to_employee(row) if row else None

    def create(self, employee: Employee) -> None:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    f"""
                    INSERT INTO employees({_COLUMNS})
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        employee.identifier,
                        employee.name,
                        employee.email,
                        employee.mobile_number,
                        employee.date_of_birth,
                        employee.password_hash,
                        employee.department,
                        employee.role,
                        employee.photo_reference,
                        employee.address,
                        employee.phone,
                        to_db_datetime(employee.created_at),
                    ),
                )
        except mysql.connector.IntegrityError as e:
            # errno 1062 = duplicate entry on the unique identifier key
            if getattr(e, "errno", None) == 1062:
                raise ConflictError("User already exists!")
            raise

    def find(
        self,
        *,
        name: Optional[str] = None,
        identifier: Optional[str] = None,
        department: Optional[str] = None,
    ) -> Sequence[Employee]:
        clauses: list[str] = []
        params: list[Any] = []
        if name:
            clauses.append("LOWER(name) LIKE %s")
            params.append(f"%{escape_like(name.lower())}%")
        if identifier:
            clauses.append("identifier=%s")
            params.append(identifier)
        if department:
            clauses.append("department=%s")
            params.append(department)

        sql = f"SELECT {_COLUMNS} FROM employees"
        if clauses:
            sql += " WHERE " + " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_row_to_employee(r) for r in fetchall(cur)]

    def save(self, employee: Employee) -> bool:
        # identifier, password_hash and created_at are never rewritten here.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE employees
                SET name=%s, email=%s, mobile_number=%s, date_of_birth=%s, department=%s,
                    role=%s, photo_reference=%s, address=%s, phone=%s
                WHERE identifier=%s
                """,
                (
                    employee.name,
                    employee.email,
                    employee.mobile_number,
                    employee.date_of_birth,
                    employee.department,
                    employee.role,
                    employee.photo_reference,
                    employee.address,
                    employee.phone,
                    employee.identifier,
                ),
            )
            return cur.rowcount > 0

    def list_all(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees ORDER BY employee_id")
            return [_row_to_employee(r) for r in fetchall(cur)]
