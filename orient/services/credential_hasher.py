from __future__ import annotations

import os

from werkzeug.security import check_password_hash, generate_password_hash


DEFAULT_HASH_METHOD = "pbkdf2:sha256:600000"
DEFAULT_SALT_LENGTH = 16


class CredentialHasher:
    """Salted one-way hashing for listing passwords.

    ``method`` is any Werkzeug hash method string, so the cost factor is
    tunable (``pbkdf2:sha256:<iterations>`` or ``scrypt:<n>:<r>:<p>``).
    """

    def __init__(self, method: str | None = None, salt_length: int = DEFAULT_SALT_LENGTH):
        self.method = (method or DEFAULT_HASH_METHOD).strip()
        self.salt_length = int(salt_length)

    @classmethod
    def from_env(cls) -> "CredentialHasher":
        return cls(method=(os.getenv("LISTING_PASSWORD_HASH_METHOD") or "").strip() or None)

    def hash(self, secret: str) -> str:
        return generate_password_hash(secret, method=self.method, salt_length=self.salt_length)

    def verify(self, secret: str, hashed_value: str) -> bool:
        if not hashed_value or secret is None:
            return False
        try:
            return check_password_hash(hashed_value, secret)
        except (ValueError, TypeError):
            return False
