from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .core.constants import DEFAULT_MAX_PHOTO_BYTES, DEFAULT_TOKEN_TTL_SECONDS
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import AuthService, DirectoryService, ProfileService
from .security.passwords import PasswordHasher
from .security.tokens import TokenManager
from .storage.uploads import PhotoStore


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    employees_repo: EmployeeRepository
    hasher: PasswordHasher
    tokens: TokenManager
    photos: PhotoStore

    auth_service: AuthService
    profile_service: ProfileService
    directory_service: DirectoryService


def build_container(
    *,
    jwt_secret: str,
    upload_folder: str | Path,
    db_config: Optional[dict] = None,
    employees_repo: Optional[EmployeeRepository] = None,
    token_ttl_seconds: int = DEFAULT_TOKEN_TTL_SECONDS,
    max_photo_bytes: int = DEFAULT_MAX_PHOTO_BYTES,
) -> Container:
    """Wire every collaborator once. Pass `employees_repo` to skip MySQL (tests)."""
    conn = None
    if employees_repo is None:
        if db_config is None:
            raise ValueError("Either db_config or employees_repo is required")
        conn = DatabaseConnection(DBConfig.from_mapping(db_config))
        employees_repo = MySQLEmployeeRepository(conn)

    hasher = PasswordHasher()
    tokens = TokenManager(jwt_secret, ttl_seconds=token_ttl_seconds)
    photos = PhotoStore(upload_folder, max_bytes=max_photo_bytes)

    return Container(
        conn=conn,
        employees_repo=employees_repo,
        hasher=hasher,
        tokens=tokens,
        photos=photos,
        auth_service=AuthService(employees_repo, hasher, tokens),
        profile_service=ProfileService(employees_repo, photos),
        directory_service=DirectoryService(employees_repo),
    )
