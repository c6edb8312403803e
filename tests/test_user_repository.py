"""Tests du SQLAlchemyUserRepository sur une base SQLite en mémoire."""

import uuid

import pytest
from sqlalchemy.exc import SQLAlchemyError

from domain.entities import User, UserWithPassword
from domain.errors import UniqueConstraintError, UserNotFoundError, UserRepositoryError
from infrastructure.database.models import Base, UserModel
from infrastructure.database.repositories import SQLAlchemyUserRepository
from infrastructure.security.password_hasher import PasswordHasher


@pytest.fixture
def hasher():
    return PasswordHasher(rounds=4)


@pytest.fixture
def repository(db_session, hasher):
    return SQLAlchemyUserRepository(db_session, hasher)


def _credentials(username="alice", email="alice@example.com", password="correct-horse"):
    return UserWithPassword(username=username, email=email, password=password)


def test_create_user_generates_id_and_hashes_password(repository, db_session, hasher):
    user = repository.create_user(_credentials())

    assert uuid.UUID(user.id)
    assert user.username == "alice"
    assert user.email == "alice@example.com"

    model = db_session.query(UserModel).filter(UserModel.id == user.id).one()
    assert model.password_hash != "correct-horse"
    assert hasher.verify("correct-horse", model.password_hash)
    assert model.creation_date is not None
    assert model.last_modification_date is not None


def test_create_user_duplicate_username_raises_unique_constraint(repository):
    repository.create_user(_credentials())

    with pytest.raises(UniqueConstraintError) as exc_info:
        repository.create_user(_credentials(email="other@example.com"))

    assert "username" in exc_info.value.detail
    assert str(exc_info.value).startswith("invalid database constraint:")


def test_create_user_duplicate_email_raises_unique_constraint(repository):
    repository.create_user(_credentials())

    with pytest.raises(UniqueConstraintError) as exc_info:
        repository.create_user(_credentials(username="bob"))

    assert "email" in exc_info.value.detail


def test_session_is_usable_after_unique_violation(repository):
    repository.create_user(_credentials())
    with pytest.raises(UniqueConstraintError):
        repository.create_user(_credentials())

    bob = repository.create_user(_credentials(username="bob", email="bob@example.com"))

    assert repository.get_user(bob.id) == bob
    assert len(repository.list_users()) == 2


def test_update_user_changes_fields_and_echoes_input(repository, db_session):
    alice = repository.create_user(_credentials())
    bob = repository.create_user(_credentials(username="bob", email="bob@example.com"))

    changed = User(id=alice.id, username="alice2", email="alice2@example.com")
    result = repository.update_user(changed)

    assert result == changed
    assert repository.get_user(alice.id) == changed
    assert repository.get_user(bob.id) == bob


def test_update_user_unknown_id_raises_not_found(repository):
    missing = User(id=str(uuid.uuid4()), username="ghost", email="ghost@example.com")

    with pytest.raises(UserNotFoundError) as exc_info:
        repository.update_user(missing)

    assert exc_info.value.user_id == missing.id


def test_update_user_conflicting_email_raises_unique_constraint(repository):
    alice = repository.create_user(_credentials())
    repository.create_user(_credentials(username="bob", email="bob@example.com"))

    with pytest.raises(UniqueConstraintError):
        repository.update_user(User(id=alice.id, username="alice", email="bob@example.com"))

    assert repository.get_user(alice.id) == alice


def test_delete_user_twice_raises_not_found(repository):
    alice = repository.create_user(_credentials())

    repository.delete_user(alice.id)

    with pytest.raises(UserNotFoundError):
        repository.get_user(alice.id)
    with pytest.raises(UserNotFoundError):
        repository.delete_user(alice.id)


def test_delete_user_leaves_other_users(repository):
    alice = repository.create_user(_credentials())
    bob = repository.create_user(_credentials(username="bob", email="bob@example.com"))

    repository.delete_user(alice.id)

    assert repository.list_users() == [bob]


def test_list_users_empty_store_returns_empty_list(repository):
    assert repository.list_users() == []


def test_list_users_returns_all_created(repository):
    created = [
        repository.create_user(_credentials(username=f"user{i}", email=f"user{i}@example.com"))
        for i in range(4)
    ]

    listed = repository.list_users()

    assert sorted(listed, key=lambda u: u.id) == sorted(created, key=lambda u: u.id)


def test_read_failures_are_wrapped_with_context(repository, db_engine):
    Base.metadata.drop_all(bind=db_engine)

    with pytest.raises(UserRepositoryError) as get_error:
        repository.get_user(str(uuid.uuid4()))
    assert not isinstance(get_error.value, UserNotFoundError)
    assert "could not fetch user" in str(get_error.value)

    with pytest.raises(UserRepositoryError) as list_error:
        repository.list_users()
    assert "couldn't list users" in str(list_error.value)


def test_write_failures_propagate_raw(repository, db_engine):
    Base.metadata.drop_all(bind=db_engine)

    with pytest.raises(SQLAlchemyError):
        repository.create_user(_credentials())
    with pytest.raises(SQLAlchemyError):
        repository.delete_user(str(uuid.uuid4()))
