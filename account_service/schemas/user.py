"""Pydantic schemas for user operations."""
from __future__ import annotations

from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from account_service.models.user import Role

# Clients posting the stored-record shape send the plaintext under passwordHash.
_PASSWORD_ALIASES = AliasChoices("password", "passwordHash", "password_hash")


class UserCreate(BaseModel):
    email: str | None = None
    username: str | None = None
    password: str | None = Field(default=None, validation_alias=_PASSWORD_ALIASES)
    role: Role = Role.USER


class UserUpdate(BaseModel):
    email: str | None = None
    username: str | None = None
    password: str | None = Field(default=None, validation_alias=_PASSWORD_ALIASES)
    role: Role = Role.USER


class UserRead(BaseModel):
    id: int
    email: str
    username: str
    role: Role
    password_hash: str | None = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)
