"""Test configuration and fixtures for the social backend tests."""

import os
import sys
import pathlib
import pytest
from unittest.mock import patch


from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel, create_engine
from sqlmodel.pool import StaticPool

BACKEND_DIR = pathlib.Path(__file__).resolve().parents[1]
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

# Set test environment before importing backend modules
os.environ["TESTING"] = "true"
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["SESSION_SECRET_KEY"] = "test_secret_key"


@pytest.fixture(autouse=True)
def test_engine():
    """Create a test database engine."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    # Ensure models are imported so tables are registered in SQLModel.metadata
    import models  # noqa: F401
    from models.common import enable_sqlite_foreign_keys

    enable_sqlite_foreign_keys(engine)
    SQLModel.metadata.create_all(engine)
    return engine


@pytest.fixture
def file_engine(tmp_path):
    """A file-backed database, so independent sessions use their own connections."""
    import models  # noqa: F401
    from models.common import enable_sqlite_foreign_keys

    engine = create_engine(
        f"sqlite:///{tmp_path / 'social.sqlite'}",
        connect_args={"check_same_thread": False},
    )
    enable_sqlite_foreign_keys(engine)
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def test_session(test_engine):
    """Create a test database session."""
    with Session(test_engine) as session:
        yield session


@pytest.fixture
def override_get_session(test_session):
    """Override the get_session dependency for testing."""

    def _override_get_session():
        yield test_session

    return _override_get_session


@pytest.fixture
def test_app(override_get_session):
    """Create a test FastAPI application."""
    # Patch update_database to skip migrations in tests
    with patch("app.update_database"):
        from app import create_app

        app = create_app()
    from models.common import get_session

    app.dependency_overrides[get_session] = override_get_session
    yield app
    del app.dependency_overrides[get_session]


@pytest.fixture
def client(test_app):
    """Create a test client."""
    with patch("app.update_database"):
        with TestClient(test_app) as client:
            yield client


@pytest.fixture
def make_user(test_session):
    """Factory adding a user to the identity table."""
    from models.auth import User

    def _make_user(user_id: str, name: str, session: Session | None = None, **kwargs):
        db = session or test_session
        user = User(
            id=user_id,
            name=name,
            email=f"{user_id}@example.com",
            username=name.lower(),
            **kwargs,
        )
        db.add(user)
        db.commit()
        return user

    return _make_user


@pytest.fixture
def users(make_user):
    """Alice, Bob and Carol, all accepting friend requests."""
    return make_user("u1", "Alice"), make_user("u2", "Bob"), make_user("u3", "Carol")


@pytest.fixture
def act_as(test_app):
    """Impersonate a user on the HTTP routes."""
    from routes.deps import current_user

    def _act_as(user):
        test_app.dependency_overrides[current_user] = lambda: user

    yield _act_as
    test_app.dependency_overrides.pop(current_user, None)


@pytest.fixture(autouse=True)
def reset_database_state(test_session):
    """Reset database state after each test."""
    yield
    try:
        if test_session.in_transaction():
            test_session.rollback()

        from sqlalchemy import text

        for table in reversed(SQLModel.metadata.sorted_tables):
            try:
                test_session.execute(text(f"DELETE FROM {table.name}"))
                test_session.commit()
            except Exception:
                test_session.rollback()
    except Exception:
        # If session is in bad state, just pass
        pass
