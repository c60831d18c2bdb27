"""Password hashing (bcrypt with SHA-256 pre-hash).

Bcrypt only looks at the first 72 bytes of its input; pre-hashing with
SHA-256 gives a fixed-length input so long passwords are not truncated.
"""

from __future__ import annotations

import base64
import hashlib

import bcrypt

from ..core.constants import DEFAULT_BCRYPT_ROUNDS, MAX_BCRYPT_ROUNDS, MIN_BCRYPT_ROUNDS


def _prehash(password: str) -> bytes:
    return base64.b64encode(hashlib.sha256(password.encode("utf-8")).digest())


class PasswordHasher:
    """Hash and verify passwords with a configurable bcrypt work factor."""

    def __init__(self, rounds: int = DEFAULT_BCRYPT_ROUNDS):
        rounds = int(rounds)
        if not MIN_BCRYPT_ROUNDS <= rounds <= MAX_BCRYPT_ROUNDS:
            raise ValueError(
                f"BCRYPT_SALT_ROUNDS must be between {MIN_BCRYPT_ROUNDS} and {MAX_BCRYPT_ROUNDS}, got {rounds}"
            )
        self._rounds = rounds

    @property
    def rounds(self) -> int:
        return self._rounds

    def hash(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(_prehash(password), salt).decode("utf-8")

    def verify(self, password: str, hashed: str) -> bool:
        """Return True if password matches hashed; malformed hashes never match."""
        try:
            return bool(bcrypt.checkpw(_prehash(password), hashed.encode("utf-8")))
        except (ValueError, TypeError, AttributeError):
            return False
