import os

# Must be set before the application modules read their settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["SEED_DEFAULT_USERS"] = "false"
os.environ["ALLOW_IDENTITY_HEADER"] = "true"
os.environ["JWT_EXPIRES_MINUTES"] = "60"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from app.seed import DEFAULT_SEED_USERS, ensure_seed_users
from db.base import Base
from db.session import build_engine, get_db, init_db
from main import app
from models.user import Role

PASSWORDS = {role: password for _, _, role, password in DEFAULT_SEED_USERS}
EMAILS = {role: email for email, _, role, _ in DEFAULT_SEED_USERS}


@pytest.fixture
def engine():
    test_engine = build_engine("sqlite://")
    init_db(bind=test_engine)
    yield test_engine
    Base.metadata.drop_all(bind=test_engine)
    test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def users(db):
    """Admin, Manage and Employee accounts keyed by role."""
    return ensure_seed_users(db)


def login(client: TestClient, role: Role) -> dict:
    res = client.post(
        "/api/auth/login",
        json={"email": EMAILS[role], "password": PASSWORDS[role]},
    )
    assert res.status_code == 200, res.text
    return {"Authorization": f"Bearer {res.json()['token']}"}


@pytest.fixture
def headers(client, users):
    """Bearer headers for each seeded role."""
    return {role: login(client, role) for role in Role}
