"""Fixtures for the user model."""

import pytest

from app.models.user import USER_TYPE_MANAGER, USER_TYPE_USER, User


def _make_user(db, faker, user_type=USER_TYPE_USER):
    user = User(
        google_id=faker.uuid4(),
        email=faker.unique.email(),
        name=faker.name(),
        profile_picture=faker.image_url(),
        user_type=user_type,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture(scope="function")
def setup_user(db, faker):
    """An attendee."""
    return _make_user(db, faker)


@pytest.fixture(scope="function")
def setup_other_user(db, faker):
    return _make_user(db, faker)


@pytest.fixture(scope="function")
def setup_manager(db, faker):
    return _make_user(db, faker, user_type=USER_TYPE_MANAGER)
