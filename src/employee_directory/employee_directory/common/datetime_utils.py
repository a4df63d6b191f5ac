from __future__ import annotations

import re
from datetime import date, datetime, timezone

from ..core.exceptions import DateFormatError, DateValueError

_ISO_DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def parse_iso_date(value: str, field_name: str = "dob") -> date:
    """Parse a strict YYYY-MM-DD string into a date.

    A string with the wrong shape raises DateFormatError; a well-shaped string
    naming a day that does not exist (e.g. 2024-02-30) raises DateValueError.
    """
    if not _ISO_DATE_RE.fullmatch(value or ""):
        raise DateFormatError(f"Invalid date format for {field_name}! Please use YYYY-MM-DD.")
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise DateValueError(f"Invalid date value for {field_name}!")


def now_utc() -> datetime:
    """Current UTC time.

    Note: Wrapped so tests can patch it easily.
    """
    return datetime.now(timezone.utc)
