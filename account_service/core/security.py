"""Security helpers for password hashing and CSRF token signing."""
from __future__ import annotations

import secrets

from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer
from passlib.context import CryptContext

from .config import get_settings


class PasswordHasher:
    """Hash and verify user passwords using Argon2id."""

    def __init__(self, schemes: list[str] | None = None) -> None:
        self._context = CryptContext(schemes=schemes or ["argon2"], deprecated="auto")

    def hash(self, password: str) -> str:
        return self._context.hash(password)

    def verify(self, password: str, hashed: str) -> bool:
        try:
            return self._context.verify(password, hashed)
        except ValueError:
            # Stored value is not a hash this context recognises.
            return False


class CSRFSigner:
    """Issue and check signed anti-forgery tokens."""

    def __init__(self, salt: str = "accounts-csrf") -> None:
        settings = get_settings()
        self._serializer = URLSafeTimedSerializer(settings.csrf_secret_key, salt=salt)
        self._max_age = settings.csrf_token_max_age_seconds

    def issue(self) -> str:
        return self._serializer.dumps(secrets.token_urlsafe(16))

    def is_valid(self, token: str) -> bool:
        try:
            self._serializer.loads(token, max_age=self._max_age)
        except (BadSignature, SignatureExpired):
            return False
        return True
