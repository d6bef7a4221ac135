"""Tests for user service."""

import asyncio

import pytest

from craftstory.domain.models import UserRecord
from craftstory.services.users import InvalidTokenError, UserNotFoundError, UserService
from tests.conftest import FakeIdentityClient, InMemoryUserRepository


def test_authenticate_returns_uid_for_valid_token() -> None:
    service = UserService(InMemoryUserRepository(), FakeIdentityClient())

    assert asyncio.run(service.authenticate("valid-token")) == "user-1"


def test_authenticate_rejects_missing_and_unknown_tokens() -> None:
    service = UserService(InMemoryUserRepository(), FakeIdentityClient())

    with pytest.raises(InvalidTokenError):
        asyncio.run(service.authenticate(""))
    with pytest.raises(InvalidTokenError):
        asyncio.run(service.authenticate("forged"))


def test_get_user_raises_for_unknown_uid() -> None:
    repository = InMemoryUserRepository(users={"user-1": UserRecord(uid="user-1")})
    service = UserService(repository, FakeIdentityClient())

    assert service.get_user("user-1").uid == "user-1"
    with pytest.raises(UserNotFoundError):
        service.get_user("user-2")


def test_update_user_applies_whitelisted_fields_only() -> None:
    repository = InMemoryUserRepository()
    service = UserService(repository, FakeIdentityClient())

    applied = service.update_user(
        "user-1", role="admin", language_code="hi", favorites=[1, "2"]
    )

    assert applied == {"language_code": "hi", "favorites": ["1", "2"]}
    assert repository.users["user-1"].role is None
    assert service.update_user("user-1") == {}


def test_delete_user_removes_document_and_identity() -> None:
    repository = InMemoryUserRepository(users={"user-1": UserRecord(uid="user-1")})
    identity_client = FakeIdentityClient()
    service = UserService(repository, identity_client)

    asyncio.run(service.delete_user("user-1"))

    assert "user-1" not in repository.users
    assert identity_client.deleted == ["user-1"]
