"""Pytest fixtures: sqlite database in a temp dir, account/content factories, API client."""

import os
import tempfile

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

# 先設定資料庫位置再 import app，避免在專案目錄建 social.db
_TMP_DIR = tempfile.mkdtemp(prefix="social-graph-tests-")
os.environ["DATABASE_URL"] = "sqlite:///" + os.path.join(_TMP_DIR, "app.db")

from fastapi.testclient import TestClient

from app.main import app
from app.db.base_class import Base
from app.db.session import get_db, get_session_factory
from app.core.security import create_access_token
from app.models.account import Account
from app.models.content import Poll, Post

TEST_DATABASE_URL = "sqlite:///" + os.path.join(_TMP_DIR, "test.db")

engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session():
    """Fresh tables for every test."""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def make_account(db_session):
    def _make(first_name, last_name, username=None, **kwargs):
        account = Account(
            first_name=first_name,
            last_name=last_name,
            username=username or f"{first_name}.{last_name}".lower(),
            **kwargs,
        )
        db_session.add(account)
        db_session.commit()
        db_session.refresh(account)
        return account
    return _make


@pytest.fixture
def make_post(db_session):
    def _make(owner, text):
        post = Post(owner_id=owner.id, text=text)
        db_session.add(post)
        db_session.commit()
        db_session.refresh(post)
        return post
    return _make


@pytest.fixture
def make_poll(db_session):
    def _make(owner, question, description="", is_friend_only=False):
        poll = Poll(owner_id=owner.id, question=question, description=description, is_friend_only=is_friend_only)
        db_session.add(poll)
        db_session.commit()
        db_session.refresh(poll)
        return poll
    return _make


@pytest.fixture
def befriend(db_session):
    """Write a mutual friendship straight into the table."""
    def _befriend(a, b):
        a.friends = list(a.friends or []) + [b.id]
        b.friends = list(b.friends or []) + [a.id]
        db_session.commit()
    return _befriend


@pytest.fixture
def reload(db_session):
    def _reload(account):
        db_session.expire_all()
        return db_session.get(Account, account.id)
    return _reload


@pytest.fixture
def alice(make_account):
    return make_account("Alice", "Anderson")


@pytest.fixture
def bob(make_account):
    return make_account("Bob", "Brown")


@pytest.fixture
def carol(make_account):
    return make_account("Carol", "Clark")


@pytest.fixture
def auth_headers():
    def _headers(account):
        token = create_access_token(data={"sub": account.id})
        return {"Authorization": f"Bearer {token}"}
    return _headers


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client(db_session):
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: TestingSessionLocal
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
