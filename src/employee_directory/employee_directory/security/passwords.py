from __future__ import annotations

from werkzeug.security import check_password_hash, generate_password_hash


class PasswordHasher:
    """Salted one-way password hashing.

    The salt is random per call and embedded in the digest, so hashing the same
    plaintext twice yields two different strings that both verify.
    """

    def hash(self, plaintext: str) -> str:
        return generate_password_hash(plaintext)

    def verify(self, plaintext: str, digest: str) -> bool:
        if not plaintext or not digest:
            return False
        try:
            return check_password_hash(digest, plaintext)
        except (ValueError, TypeError):
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            return False
