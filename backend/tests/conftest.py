import os

# Point the app at an in-memory database before `tutorial_api` is imported
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session

from tutorial_api.database import make_engine, create_db_and_tables, get_session
from tutorial_api.main import app
from tutorial_api.repositories import TutorialRepository


@pytest.fixture()
def engine():
    """A fresh, empty in-memory database per test."""
    eng = make_engine("sqlite://")
    create_db_and_tables(eng)
    yield eng
    eng.dispose()


@pytest.fixture()
def session(engine):
    with Session(engine) as s:
        yield s


@pytest.fixture()
def repo(session):
    return TutorialRepository(session, case_sensitive=True)


@pytest.fixture()
def seeded(repo):
    """The four tutorials used by the title/published predicate tests."""
    return {
        "boot": repo.create("Spring Boot Basics", "Learn Spring Boot", False),
        "cloud": repo.create("Spring Cloud Guide", "Microservices with Spring", False),
        "react": repo.create("React Tutorial", "Learn React", False),
        "security": repo.create("Spring Security", "Secure your app", True),
    }


@pytest.fixture()
def client(engine):
    def _session_override():
        with Session(engine) as s:
            yield s

    app.dependency_overrides[get_session] = _session_override
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
