import os

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from store_rating.auth.permissions import Role
from store_rating.auth.utils import Identity, hash_password, issue_token
from store_rating.db.session import get_db
from store_rating.main import app
from store_rating.model import Base
from store_rating.repository import store as store_repository
from store_rating.repository import user as user_repository

DEFAULT_PASSWORD = "Secret#Pass1"


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


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
def make_user(db):
    def _make_user(role=Role.NORMAL_USER, email=None, name=None, password=DEFAULT_PASSWORD, address="1 Test Street"):
        email = email or f"{role.value.lower()}-{user_repository.count_users(db)}@example.com"
        return user_repository.create_user(
            db,
            name=name or f"Test {role.value.title()} Account Name",
            email=email,
            password_hash=hash_password(password),
            address=address,
            role=role,
        )

    return _make_user


@pytest.fixture
def make_store(db):
    def _make_store(owner, name="Corner Grocery", email=None, address="9 Market Road"):
        email = email or f"store-{store_repository.count_stores(db)}@example.com"
        return store_repository.create_store(db, name=name, email=email, address=address, owner_id=owner.id)

    return _make_store


@pytest.fixture
def admin(make_user):
    return make_user(Role.SYSTEM_ADMIN, email="admin@example.com")


@pytest.fixture
def owner(make_user):
    return make_user(Role.STORE_OWNER, email="owner@example.com")


@pytest.fixture
def normal_user(make_user):
    return make_user(Role.NORMAL_USER, email="user@example.com")


@pytest.fixture
def auth_headers():
    def _auth_headers(user):
        token = issue_token(Identity(subject_id=user.id, email=user.email, role=user.role))
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers
