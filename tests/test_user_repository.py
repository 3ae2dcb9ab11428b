import pytest

from account_service.core.errors import UserConflictError
from account_service.models.user import Role, User
from account_service.repositories.users import UserRepository


def new_user(email="a@x.com", username="alice"):
    return User(email=email, username=username, password_hash="hashed")


async def test_add_assigns_id_and_timestamps(session):
    repo = UserRepository(session)
    user = await repo.add(new_user())

    assert user.id is not None
    assert user.role == Role.USER
    assert user.created_at is not None
    assert user.created_at == user.updated_at


async def test_save_refreshes_updated_at_only(session):
    repo = UserRepository(session)
    user = await repo.add(new_user())
    created_at = user.created_at

    user.username = "alice2"
    await repo.save(user)

    assert user.created_at == created_at
    assert user.updated_at >= created_at


async def test_unique_constraint_surfaces_as_conflict(session):
    repo = UserRepository(session)
    await repo.add(new_user())
    await session.commit()

    with pytest.raises(UserConflictError):
        await repo.add(new_user(username="bob"))

    assert len(await repo.list_all()) == 1


async def test_exclusion_when_checking_uniqueness(session):
    repo = UserRepository(session)
    user = await repo.add(new_user())

    assert await repo.email_taken("a@x.com")
    assert not await repo.email_taken("a@x.com", exclude_id=user.id)
    assert await repo.username_taken("alice")
    assert not await repo.username_taken("bob")
