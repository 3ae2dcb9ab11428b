"""Middleware deciding per request whether it may proceed."""
from __future__ import annotations

import base64
import binascii
import logging
from typing import Iterable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from account_service.core.config import get_settings
from account_service.core.security import CSRFSigner, PasswordHasher
from account_service.db.session import get_session
from account_service.repositories.users import UserRepository
from account_service.services.users import UserService

logger = logging.getLogger(__name__)

CSRF_COOKIE_NAME = "csrf_token"
CSRF_HEADER_NAME = "X-CSRF-Token"
UNSAFE_METHODS = frozenset({"POST", "PUT", "PATCH", "DELETE"})


def is_public_path(path: str, prefixes: Iterable[str]) -> bool:
    """Return True when ``path`` equals a prefix or lies below it."""
    for prefix in prefixes:
        prefix = prefix.rstrip("/")
        if not prefix:
            return True
        if path == prefix or path.startswith(prefix + "/"):
            return True
    return False


def parse_basic_credentials(header: str | None) -> tuple[str, str] | None:
    """Decode an ``Authorization: Basic`` header into a username/password pair."""
    if not header:
        return None
    scheme, _, encoded = header.partition(" ")
    if scheme.lower() != "basic" or not encoded:
        return None
    try:
        decoded = base64.b64decode(encoded.strip(), validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        return None
    username, sep, password = decoded.partition(":")
    if not sep:
        return None
    return username, password


class AccessGateMiddleware(BaseHTTPMiddleware):
    """Allow public prefixes and require HTTP Basic credentials elsewhere."""

    def __init__(self, app, session_factory=get_session, hasher: PasswordHasher | None = None):
        super().__init__(app)
        self.settings = get_settings()
        self.session_factory = session_factory
        self.hasher = hasher or PasswordHasher()

    async def dispatch(self, request: Request, call_next):
        if self.settings.csrf_protection and not self._csrf_ok(request):
            logger.warning("CSRF check failed for %s %s", request.method, request.url.path)
            return JSONResponse({"detail": "CSRF token missing or invalid"}, status_code=403)

        if is_public_path(request.url.path, self.settings.public_prefixes):
            return await call_next(request)

        credentials = parse_basic_credentials(request.headers.get("Authorization"))
        if credentials is None:
            return self._challenge("Not authenticated")

        async with self.session_factory() as session:
            service = UserService(UserRepository(session), self.hasher)
            user = await service.authenticate(*credentials)
        if user is None:
            logger.info("Rejected credentials for %s on %s", credentials[0], request.url.path)
            return self._challenge("Invalid credentials")

        request.state.user = user
        return await call_next(request)

    def _csrf_ok(self, request: Request) -> bool:
        if request.method not in UNSAFE_METHODS:
            return True
        header = request.headers.get(CSRF_HEADER_NAME)
        cookie = request.cookies.get(CSRF_COOKIE_NAME)
        if not header or header != cookie:
            return False
        return CSRFSigner().is_valid(header)

    def _challenge(self, detail: str) -> JSONResponse:
        return JSONResponse(
            {"detail": detail},
            status_code=401,
            headers={"WWW-Authenticate": f'Basic realm="{self.settings.basic_auth_realm}"'},
        )
