"""Signed session tokens bound to an employee identifier."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

import jwt

from ..core.constants import DEFAULT_TOKEN_TTL_SECONDS, TOKEN_ALGORITHM
from ..core.exceptions import TokenInvalidError, TokenMissingError


class TokenManager:
    """Issues and verifies HS256 JWTs carrying the employee identifier.

    The signing secret is handed in once at construction and never changes
    for the lifetime of the process.
    """

    def __init__(
        self,
        secret: str,
        *,
        ttl_seconds: int = DEFAULT_TOKEN_TTL_SECONDS,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        if not secret:
            raise ValueError("Token signing secret must not be empty")
        self._secret = secret
        self._ttl = timedelta(seconds=int(ttl_seconds))
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def issue(self, identifier: str) -> str:
        issued_at = self._clock()
        payload = {
            "prno": identifier,
            "iat": issued_at,
            "exp": issued_at + self._ttl,
        }
        return jwt.encode(payload, self._secret, algorithm=TOKEN_ALGORITHM)

    def verify(self, token: Optional[str]) -> str:
        """Return the identifier embedded in a valid token.

        Raises TokenMissingError when no token is given and TokenInvalidError
        for anything that fails signature, expiry or payload checks.
        """
        if not token:
            raise TokenMissingError("Authentication token is missing")

        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[TOKEN_ALGORITHM],
                options={"require": ["exp", "prno"]},
                leeway=0,
            )
        except jwt.ExpiredSignatureError:
            raise TokenInvalidError("Authentication token has expired")
        except jwt.InvalidTokenError:
            raise TokenInvalidError("Authentication token is invalid")

        identifier = payload.get("prno")
        if not isinstance(identifier, str) or not identifier:
            raise TokenInvalidError("Authentication token is invalid")
        return identifier


def bearer_token(authorization_header: Optional[str]) -> Optional[str]:
    """Extract the token from an ``Authorization: Bearer <token>`` header."""
    if not authorization_header:
        return None
    parts = authorization_header.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    return parts[1]
