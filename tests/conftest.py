from __future__ import annotations

import io
from typing import Dict, List, Optional

import pytest
from PIL import Image

from src.employee_directory.employee_directory.container import build_container
from src.employee_directory.employee_directory.core.exceptions import ConflictError
from src.employee_directory.employee_directory.employees.model import Employee
from src.employee_directory.employee_directory.main import create_app


class InMemoryEmployees:
    """Dict-backed stand-in for the MySQL repository (insertion ordered)."""

    def __init__(self):
        self.by_identifier: Dict[str, Employee] = {}
        self.save_calls = 0

    def get_by_identifier(self, identifier: str) -> Optional[Employee]:
        return self.by_identifier.get(identifier)

    def create(self, employee: Employee) -> None:
        if employee.identifier in self.by_identifier:
            raise ConflictError("User already exists!")
        self.by_identifier[employee.identifier] = employee

    def find(self, *, name=None, identifier=None, department=None) -> List[Employee]:
        out = []
        for e in self.by_identifier.values():
            if name and name.lower() not in e.name.lower():
                continue
            if identifier and e.identifier != identifier:
                continue
            if department and e.department != department:
                continue
            out.append(e)
        return out

    def save(self, employee: Employee) -> bool:
        self.save_calls += 1
        if employee.identifier not in self.by_identifier:
            return False
        self.by_identifier[employee.identifier] = employee
        return True

    def list_all(self) -> List[Employee]:
        return list(self.by_identifier.values())


def make_png(size=(4, 4), color=(200, 30, 30)) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", size, color).save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def employees_repo():
    return InMemoryEmployees()


@pytest.fixture
def container(employees_repo, tmp_path):
    return build_container(
        jwt_secret="test-jwt-secret",
        upload_folder=tmp_path / "uploads",
        employees_repo=employees_repo,
    )


@pytest.fixture
def app(container):
    flask_app = create_app(container=container, settings_module="config.testing")
    flask_app.config["TESTING"] = True
    return flask_app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def png_bytes():
    return make_png()


@pytest.fixture
def registration():
    return {
        "identifier": "P1001",
        "name": "Anna Smith",
        "mobileNumber": "9990001111",
        "dateOfBirth": "1990-05-17",
        "password": "s3cret-pass",
        "department": "Eng",
        "role": "Developer",
        "email": "anna@example.com",
    }
