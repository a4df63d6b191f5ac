from __future__ import annotations

from typing import Any, Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{field_name} is required!")
    return str(value).strip()


def non_empty_or_none(value: Any) -> Optional[str]:
    """Normalize form/JSON input: blank strings count as "not supplied"."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None
