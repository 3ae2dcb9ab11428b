"""User service: CRUD, validation and password hashing policy."""
from __future__ import annotations

import logging

from email_validator import EmailNotValidError, validate_email

from account_service.core.errors import (
    FieldError,
    UserConflictError,
    UserNotFoundError,
    UserValidationError,
)
from account_service.core.security import PasswordHasher
from account_service.models.user import User
from account_service.repositories.users import UserRepository
from account_service.schemas.user import UserCreate, UserUpdate

logger = logging.getLogger(__name__)

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 100


def validate_user_fields(
    email: str | None,
    username: str | None,
    password: str | None = None,
    *,
    require_password: bool = True,
) -> list[FieldError]:
    """Check the writable fields of a user and return every problem found.

    An empty list means the values are acceptable. Uniqueness is not checked
    here since it needs the repository.
    """
    errors: list[FieldError] = []

    if not email or not email.strip():
        errors.append(FieldError("email", "must not be blank"))
    else:
        try:
            validate_email(email, check_deliverability=False)
        except EmailNotValidError as exc:
            errors.append(FieldError("email", f"must be a well-formed email address ({exc})"))

    if not username or not username.strip():
        errors.append(FieldError("username", "must not be blank"))
    elif not USERNAME_MIN_LENGTH <= len(username) <= USERNAME_MAX_LENGTH:
        errors.append(
            FieldError(
                "username",
                f"size must be between {USERNAME_MIN_LENGTH} and {USERNAME_MAX_LENGTH}",
            )
        )

    if require_password and (not password or not password.strip()):
        errors.append(FieldError("password", "must not be blank"))

    return errors


class UserService:
    """Create, read, update and delete users over a repository."""

    def __init__(self, repository: UserRepository, hasher: PasswordHasher) -> None:
        self.repository = repository
        self.hasher = hasher

    async def list_users(self) -> list[User]:
        return await self.repository.list_all()

    async def get_user(self, user_id: int) -> User:
        user = await self.repository.get(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    async def create_user(self, data: UserCreate) -> User:
        errors = validate_user_fields(data.email, data.username, data.password)
        if errors:
            raise UserValidationError(errors)
        if await self.repository.email_taken(data.email):
            logger.info("Rejected new user: email already registered")
            raise UserConflictError("Email already exists")
        if await self.repository.username_taken(data.username):
            logger.info("Rejected new user: username %s already taken", data.username)
            raise UserConflictError("Username already exists")

        user = User(
            email=data.email,
            username=data.username,
            password_hash=self.hasher.hash(data.password),
            role=data.role,
        )
        user = await self.repository.add(user)
        logger.info("Created user %s (%s)", user.id, user.username)
        return user

    async def update_user(self, user_id: int, data: UserUpdate) -> User:
        user = await self.get_user(user_id)

        errors = validate_user_fields(data.email, data.username, require_password=False)
        if errors:
            raise UserValidationError(errors)
        if await self.repository.email_taken(data.email, exclude_id=user.id):
            raise UserConflictError("Email already exists")
        if await self.repository.username_taken(data.username, exclude_id=user.id):
            raise UserConflictError("Username already exists")

        user.email = data.email
        user.username = data.username
        user.role = data.role
        if data.password:
            user.password_hash = self.hasher.hash(data.password)

        user = await self.repository.save(user)
        logger.info("Updated user %s", user.id)
        return user

    async def delete_user(self, user_id: int) -> None:
        user = await self.get_user(user_id)
        await self.repository.delete(user)
        logger.info("Deleted user %s", user_id)

    async def authenticate(self, username: str, password: str) -> User | None:
        user = await self.repository.get_by_username(username)
        if not user:
            return None
        if not self.hasher.verify(password, user.password_hash):
            return None
        return user
