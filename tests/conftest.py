import os

os.environ["ENV"] = "test"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from app.auth.identity import get_current_user  # noqa: E402
from app.db import Base, SessionLocal, engine, get_db  # noqa: E402
from app.main import create_app  # noqa: E402
import app.models  # noqa: E402,F401

pytest_plugins = [
    "tests.fixtures.user_fixtures",
    "tests.fixtures.event_fixtures",
    "tests.fixtures.query_fixtures",
]


@pytest.fixture(scope="function")
def db():
    """Fresh schema per test."""
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


class AuthState:
    """Who the test client is signed in as; None means anonymous."""

    def __init__(self):
        self.user = None


@pytest.fixture
def auth_state():
    return AuthState()


@pytest.fixture
def client(db, auth_state):
    """Client with db override and identity taken from ``auth_state``."""
    app = create_app(testing=True)

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_current_user] = lambda: auth_state.user
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def as_user(auth_state, setup_user):
    """Sign the client in as ``setup_user``, or as the user passed in."""

    def login(user=None):
        auth_state.user = user or setup_user
        return auth_state.user

    return login


@pytest.fixture
def as_manager(auth_state, setup_manager):
    def login(user=None):
        auth_state.user = user or setup_manager
        return auth_state.user

    return login


@pytest.fixture
def as_anonymous(auth_state):
    def logout():
        auth_state.user = None

    return logout
