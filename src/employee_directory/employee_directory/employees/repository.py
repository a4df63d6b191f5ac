from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Employee


class EmployeeRepository(Protocol):
    """Persistence boundary for employee records.

    Services depend on this interface, never on a concrete database.
    """

    def get_by_identifier(self, identifier: str) -> Optional[Employee]:
        raise NotImplementedError

    def create(self, employee: Employee) -> None:
        """Insert a new record; raises ConflictError if the identifier is taken."""
        raise NotImplementedError

    def find(
        self,
        *,
        name: Optional[str] = None,
        identifier: Optional[str] = None,
        department: Optional[str] = None,
    ) -> Sequence[Employee]:
        """AND of the given filters; `name` is a case-insensitive substring match."""
        raise NotImplementedError

    def save(self, employee: Employee) -> bool:
        """Overwrite the stored record with the same identifier."""
        raise NotImplementedError

    def list_all(self) -> Sequence[Employee]:
        raise NotImplementedError
