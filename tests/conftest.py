"""Pytest configuration and fixtures."""

import pytest
from fastapi.testclient import TestClient

from todoserver.config.loader import default_config
from todoserver.database.sqlite_client import get_engine, get_session_factory
from todoserver.database.todo_repo import insert_todo
from todoserver.server import create_app

SAMS_ID = "58895e2c83e5c5ea6fd2c0d3"


@pytest.fixture
def session_factory():
    """Session factory over a fresh in-memory database."""
    engine = get_engine(":memory:")
    try:
        yield get_session_factory(engine)
    finally:
        engine.dispose()


@pytest.fixture
def session(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def todo_ids(session):
    """Seed the four reference todos; returns owner -> id."""
    ids = {}
    # "work" sits outside the category enumeration on purpose: filters must still behave
    for owner, status, body, category in [
        ("Chris", True, "UMM homework", "homework"),
        ("Pat", False, "IBM work", "work"),
        ("Jamie", True, "OHMNET project", "software design"),
    ]:
        ids[owner] = insert_todo(session, owner=owner, status=status, body=body, category=category).id
    ids["Sam"] = insert_todo(
        session,
        owner="Sam",
        status=False,
        body="Frogs project",
        category="software design",
        todo_id=SAMS_ID,
    ).id
    return ids


@pytest.fixture
def config():
    return default_config()


@pytest.fixture
def client(config, session_factory, todo_ids):
    app = create_app(config, session_factory)
    with TestClient(app) as test_client:
        yield test_client
