"""Register a demo employee through the normal sign-up flow (idempotent)."""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.employee_directory.employee_directory.container import build_container
from src.employee_directory.employee_directory.core.exceptions import ConflictError

DEMO_EMPLOYEES = [
    {
        "identifier": "EMP001",
        "name": "Demo Admin",
        "mobile_number": "0000000000",
        "date_of_birth": "1990-01-01",
        "password": "admin123",
        "department": "HR",
        "role": "admin",
        "email": "admin@example.com",
    },
    {
        "identifier": "EMP002",
        "name": "Demo Engineer",
        "mobile_number": "1111111111",
        "date_of_birth": "1995-06-15",
        "password": "staff123",
        "department": "Engineering",
        "role": "staff",
        "email": "engineer@example.com",
    },
]


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    container = build_container(
        jwt_secret=settings.JWT_SECRET or "seed-only",
        upload_folder=settings.UPLOAD_FOLDER,
        db_config=dict(settings.DB_CONFIG),
    )

    for data in DEMO_EMPLOYEES:
        try:
            container.auth_service.register(**data)
            print(f"OK: created {data['identifier']}")
        except ConflictError:
            print(f"SKIP: {data['identifier']} already exists")


if __name__ == "__main__":
    main()
