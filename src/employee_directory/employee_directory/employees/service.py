from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from werkzeug.datastructures import FileStorage

from ..common.datetime_utils import now_utc, parse_iso_date
from ..common.validators import non_empty_or_none, require_non_empty
from ..core.constants import DEFAULT_PHOTO_URL, INVALID_CREDENTIALS_MESSAGE
from ..core.exceptions import AuthenticationError, ConflictError, NotFoundError
from ..security.passwords import PasswordHasher
from ..security.tokens import TokenManager
from ..storage.uploads import PhotoStore
from .model import Employee, ProfileChanges
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthResult:
    """What the auth endpoints hand back to the client."""

    identifier: str
    token: str


class AuthService:
    """Use cases: register a new employee, log an existing one in."""

    def __init__(
        self,
        employees: EmployeeRepository,
        hasher: PasswordHasher,
        tokens: TokenManager,
        *,
        clock: Callable[[], datetime] = now_utc,
    ):
        self._employees = employees
        self._hasher = hasher
        self._tokens = tokens
        self._clock = clock

    def register(
        self,
        *,
        identifier: str,
        name: str,
        mobile_number: str,
        date_of_birth: str,
        password: str,
        department: str,
        role: Optional[str] = None,
        email: Optional[str] = None,
        address: Optional[str] = None,
        phone: Optional[str] = None,
    ) -> AuthResult:
        identifier = require_non_empty(identifier, "identifier")
        name = require_non_empty(name, "name")
        mobile_number = require_non_empty(mobile_number, "mobileNumber")
        department = require_non_empty(department, "department")
        require_non_empty(password, "password")
        dob = parse_iso_date(require_non_empty(date_of_birth, "dateOfBirth"))

        if self._employees.get_by_identifier(identifier):
            raise ConflictError("User already exists!")

        employee = Employee(
            identifier=identifier,
            name=name,
            mobile_number=mobile_number,
            date_of_birth=dob,
            password_hash=self._hasher.hash(password),
            department=department,
            created_at=self._clock(),
            email=non_empty_or_none(email),
            role=non_empty_or_none(role),
            photo_reference=DEFAULT_PHOTO_URL,
            address=non_empty_or_none(address),
            phone=non_empty_or_none(phone),
        )
        # The store's unique key still guards the check-then-insert race.
        self._employees.create(employee)
        logger.info("Registered employee %s (%s)", identifier, department)

        return AuthResult(identifier=identifier, token=self._tokens.issue(identifier))

    def login(self, identifier: str, password: str) -> AuthResult:
        # Unknown identifier and wrong password share one message.
        identifier = (identifier or "").strip()
        employee = self._employees.get_by_identifier(identifier)
        if not employee:
            logger.info("Login rejected for %r: unknown identifier", identifier)
            raise AuthenticationError(INVALID_CREDENTIALS_MESSAGE)

        if not self._hasher.verify(password or "", employee.password_hash):
            logger.info("Login rejected for %r: bad password", identifier)
            raise AuthenticationError(INVALID_CREDENTIALS_MESSAGE)

        logger.info("Employee %s signed in", employee.identifier)
        return AuthResult(identifier=employee.identifier, token=self._tokens.issue(employee.identifier))


class ProfileService:
    """Use case: an authenticated employee edits their own ID-card data."""

    def __init__(self, employees: EmployeeRepository, photos: PhotoStore):
        self._employees = employees
        self._photos = photos

    def update_id_card(
        self,
        *,
        acting_identifier: str,
        changes: ProfileChanges,
        photo: Optional[FileStorage] = None,
    ) -> Employee:
        """Apply a partial update to the caller's record.

        `acting_identifier` must come from a verified token. Missing or blank
        fields keep their stored value. An uploaded photo always wins over a
        photoReference string sent in the body.
        """
        employee = self._employees.get_by_identifier(acting_identifier)
        if not employee:
            raise NotFoundError("User not found!")

        # Validate everything before touching the blob store.
        dob_text = non_empty_or_none(changes.date_of_birth)
        date_of_birth = parse_iso_date(dob_text) if dob_text else employee.date_of_birth

        if photo is not None and photo.filename:
            photo_reference = self._photos.save(photo)
        else:
            photo_reference = non_empty_or_none(changes.photo_reference) or employee.photo_reference

        def pick(new: Optional[str], current: Optional[str]) -> Optional[str]:
            return non_empty_or_none(new) or current

        updated = replace(
            employee,
            name=pick(changes.name, employee.name),
            email=pick(changes.email, employee.email),
            mobile_number=pick(changes.mobile_number, employee.mobile_number),
            phone=pick(changes.phone, employee.phone),
            department=pick(changes.department, employee.department),
            address=pick(changes.address, employee.address),
            role=pick(changes.role, employee.role),
            date_of_birth=date_of_birth,
            photo_reference=photo_reference,
        )

        if not self._employees.save(updated):
            raise NotFoundError("User not found!")

        logger.info("Employee %s updated their ID card", acting_identifier)
        return updated


class DirectoryService:
    """Read-only lookups. Every result is an explicit projection."""

    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def _get_or_404(self, identifier: str) -> Employee:
        employee = self._employees.get_by_identifier(identifier)
        if not employee:
            raise NotFoundError("User not found!")
        return employee

    def get_profile(self, identifier: str) -> Dict[str, Any]:
        return self._get_or_404(identifier).profile_view()

    def get_full_record(self, identifier: str) -> Dict[str, Any]:
        return self._get_or_404(identifier).full_view()

    def search(
        self,
        *,
        name: Optional[str] = None,
        identifier: Optional[str] = None,
        department: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        matches = self._employees.find(
            name=non_empty_or_none(name),
            identifier=non_empty_or_none(identifier),
            department=non_empty_or_none(department),
        )
        return [e.search_view() for e in matches]

    def list_all(self) -> List[Dict[str, Any]]:
        return [e.listing_view() for e in self._employees.list_all()]
