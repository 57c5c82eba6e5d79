"""
Academic Voice Hub - Test Configuration and Fixtures
"""
import os

import pytest

# Set testing environment (main.py import hone se pehle)
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["LOG_LEVEL"] = "WARNING"

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from database import Base, get_db
from main import app
from services.record_store import InMemoryRecordStore
from services.result_repository import ResultRepository
from services.user_repository import UserRepository


@pytest.fixture
def store():
    return InMemoryRecordStore()


@pytest.fixture
def users(store):
    return UserRepository(store)


@pytest.fixture
def results(store, users):
    return ResultRepository(store, users)


@pytest.fixture
def student(users):
    return users.register(
        role="student",
        name="Asha Verma",
        email="asha@example.com",
        password="secret",
        roll_number="CS101",
    )


@pytest.fixture
def other_student(users):
    return users.register(
        role="student",
        name="Ravi Kumar",
        email="ravi@example.com",
        password="secret",
        roll_number="CS102",
    )


@pytest.fixture
def db_session():
    """Fresh in-memory SQLite database per test"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def make_client(db_session):
    """Factory for API clients sharing one database (one client per logged-in user)"""

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    clients = []

    def _make():
        client = TestClient(app)
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.close()
    app.dependency_overrides.clear()


def register_and_login(client, role, name, email, password="secret", **extra):
    payload = {"role": role, "name": name, "email": email, "password": password, **extra}
    response = client.post("/auth/register", json=payload)
    assert response.status_code == 201, response.text
    login = client.post("/auth/login", json={"role": role, "email": email, "password": password})
    assert login.status_code == 200, login.text
    return response.json()


@pytest.fixture
def teacher_client(make_client):
    client = make_client()
    register_and_login(client, "teacher", "Meena Iyer", "meena@school.edu")
    return client


@pytest.fixture
def student_client(make_client):
    client = make_client()
    client.user = register_and_login(
        client,
        "student",
        "Asha Verma",
        "asha@example.com",
        roll_number="CS101",
        voice_over_enabled=True,
    )
    return client


@pytest.fixture
def signup():
    """register_and_login as a fixture, for tests that need extra users"""
    return register_and_login
