"""Tests for registration and login."""

import pytest

from photogram.errors import AuthError, ForbiddenError, ValidationError
from tests.conftest import InMemoryUserRepository, make_user_service


def test_register_creates_user_and_token() -> None:
    repository = InMemoryUserRepository()
    service = make_user_service(repository)

    token, user = service.register("alice", "Alice@X.com", "pw123456")

    assert token
    assert user.email == "alice@x.com"
    assert repository.get_by_id(user.id) == user
    assert user.password_hash != "pw123456"
    assert service.resolve_token(token) == user


def test_register_rejects_taken_username_and_email() -> None:
    service = make_user_service()
    service.register("alice", "alice@x.com", "pw123456")

    with pytest.raises(ValidationError, match="User already exists"):
        service.register("alice", "other@x.com", "pw123456")
    with pytest.raises(ValidationError, match="User already exists"):
        service.register("alice2", "alice@x.com", "pw123456")


@pytest.mark.parametrize(
    ("username", "email", "password"),
    [("", "a@x.com", "pw123456"), ("a", "  ", "pw123456"), ("a", "a@x.com", "")],
)
def test_register_requires_all_fields(username: str, email: str, password: str) -> None:
    service = make_user_service()

    with pytest.raises(ValidationError, match="Please provide all fields"):
        service.register(username, email, password)


def test_register_rejects_short_password() -> None:
    service = make_user_service()

    with pytest.raises(ValidationError):
        service.register("alice", "alice@x.com", "pw1")


def test_login_checks_password() -> None:
    service = make_user_service()
    _, user = service.register("alice", "alice@x.com", "pw123456")

    token, logged_in = service.login("alice", "pw123456")

    assert logged_in.id == user.id
    assert service.resolve_token(token).id == user.id
    with pytest.raises(AuthError):
        service.login("alice", "wrong-password")
    with pytest.raises(AuthError):
        service.login("nobody", "pw123456")


def test_resolve_token_for_deleted_user_is_forbidden() -> None:
    repository = InMemoryUserRepository()
    service = make_user_service(repository)
    token, user = service.register("alice", "alice@x.com", "pw123456")
    del repository.users[user.id]

    with pytest.raises(ForbiddenError):
        service.resolve_token(token)
