from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, Optional

from ..core.constants import DEFAULT_PHOTO_URL


def _iso(value: Optional[date]) -> Optional[str]:
    return value.isoformat() if value else None


@dataclass(frozen=True)
class Employee:
    """Domain entity: one employee record.

    Superset of every field the directory has ever stored; `email`, `role`,
    `address` and `phone` are optional so older, narrower records still load.
    Plain data object: no database access in here.
    """

    identifier: str
    name: str
    mobile_number: str
    date_of_birth: date
    password_hash: str
    department: str
    created_at: datetime
    email: Optional[str] = None
    role: Optional[str] = None
    photo_reference: str = DEFAULT_PHOTO_URL
    address: Optional[str] = None
    phone: Optional[str] = None

    # Projections. None of them carries the password hash.

    def profile_view(self) -> Dict[str, Any]:
        return {
            "identifier": self.identifier,
            "name": self.name,
            "dateOfBirth": _iso(self.date_of_birth),
            "createdAt": _iso(self.created_at),
            "department": self.department,
            "role": self.role,
            "email": self.email,
        }

    def full_view(self) -> Dict[str, Any]:
        return {
            "identifier": self.identifier,
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "department": self.department,
            "dateOfBirth": _iso(self.date_of_birth),
            "address": self.address,
            "photoReference": self.photo_reference,
            "role": self.role,
        }

    def search_view(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "department": self.department,
            "identifier": self.identifier,
            "mobileNumber": self.mobile_number,
        }

    def listing_view(self) -> Dict[str, Any]:
        return {
            "identifier": self.identifier,
            "name": self.name,
            "email": self.email,
            "mobileNumber": self.mobile_number,
            "dateOfBirth": _iso(self.date_of_birth),
            "department": self.department,
            "role": self.role,
            "photoReference": self.photo_reference,
            "address": self.address,
            "phone": self.phone,
            "createdAt": _iso(self.created_at),
        }


@dataclass(frozen=True)
class ProfileChanges:
    """Fields supplied to a profile update. None means "keep the stored value"."""

    name: Optional[str] = None
    email: Optional[str] = None
    mobile_number: Optional[str] = None
    phone: Optional[str] = None
    department: Optional[str] = None
    address: Optional[str] = None
    role: Optional[str] = None
    date_of_birth: Optional[str] = None
    photo_reference: Optional[str] = None
