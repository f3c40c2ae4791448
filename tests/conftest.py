# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import AsyncIterator, Generator, Iterator
from datetime import UTC, datetime, timedelta
from itertools import count
from typing import Any

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("PYTEST_RUNNING", "true")

from tribune.client.identity import Identity
from tribune.client.repository import BoardRepository
from tribune.client.storage import MemoryStore
from tribune.core.security import create_access_token
from tribune.db.session import Base
from tribune.db.session import get_db as app_get_session
from tribune.main import app as fastapi_app
from tribune.schemas.post import CommentRow, PostRow

TEST_DB_URL = "sqlite://"
API_BASE = "http://test/api/v1"
GUEST_NAME = "Fan de Foot 42"
NOW = datetime(2026, 10, 19, 12, 0, tzinfo=UTC)

_ID_COUNTER = count(1)


@pytest.fixture()
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)


@pytest.fixture()
def db_session(session_factory: sessionmaker[Session]) -> Iterator[Session]:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(
    app: FastAPI, session_factory: sessionmaker[Session]
) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def request_log() -> list[httpx.Request]:
    """Requests sent by the async client, in order."""
    return []


@pytest_asyncio.fixture()
async def http_client(
    app: FastAPI, request_log: list[httpx.Request]
) -> AsyncIterator[httpx.AsyncClient]:
    async def _record(request: httpx.Request) -> None:
        request_log.append(request)

    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app),
        base_url="http://test",
        event_hooks={"request": [_record]},
    ) as async_client:
        yield async_client


@pytest_asyncio.fixture()
async def repository(http_client: httpx.AsyncClient) -> AsyncIterator[BoardRepository]:
    repo = BoardRepository(API_BASE, client=http_client)
    yield repo
    await repo.close()


@pytest.fixture()
def guest_store() -> MemoryStore:
    return MemoryStore({"communication_user_name": GUEST_NAME})


@pytest.fixture()
def guest() -> Identity:
    return Identity(display_name=GUEST_NAME, user_id=None)


@pytest.fixture()
def member() -> Identity:
    return Identity(display_name="Awa Diop", user_id="user-awa")


@pytest.fixture()
def member_token() -> dict[str, str]:
    """Return authorization headers for the primary test account."""
    token = create_access_token("user-awa", "awa.diop@example.com")
    return {"Authorization": f"Bearer {token}"}


def make_comment(**overrides: Any) -> CommentRow:
    """Build a comment row with sensible defaults."""
    values: dict[str, Any] = {
        "id": f"comment-{next(_ID_COUNTER)}",
        "post_id": "post-1",
        "content": "Quel match !",
        "user_name": GUEST_NAME,
        "user_id": None,
        "created_at": NOW - timedelta(hours=1),
    }
    values.update(overrides)
    return CommentRow(**values)


def make_post(**overrides: Any) -> PostRow:
    """Build a post row with sensible defaults."""
    values: dict[str, Any] = {
        "id": f"post-{next(_ID_COUNTER)}",
        "title": "Maroc - Comores",
        "content": "Analyse du match d'ouverture",
        "image_url": None,
        "user_name": GUEST_NAME,
        "user_id": None,
        "likes": 0,
        "dislikes": 0,
        "created_at": NOW - timedelta(hours=3),
        "updated_at": NOW - timedelta(hours=3),
        "chat_comments": [],
    }
    values.update(overrides)
    return PostRow(**values)
