# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from itertools import count

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("AGGREGATION_ENABLED", "false")

from chatlog.core.settings import settings
from chatlog.db.session import Base
from chatlog.db.session import get_db as app_get_db
from chatlog.main import app as fastapi_app
from chatlog.records import NewMessage
from chatlog.repositories import (
    MessageCounterRepository,
    MessageRangeRepository,
    MessageRepository,
    SessionRepository,
)

TEST_DB_URL = "sqlite://"
BASE_TIME = 1_700_000_000


class FakeClock:
    """Deterministic unix-seconds clock that tests can move forward."""

    def __init__(self, start: int = BASE_TIME) -> None:
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, seconds: int) -> None:
        self.now += seconds


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
def session_factory(engine: Engine) -> Callable[[], Session]:
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)


@pytest.fixture()
def db_session(session_factory: Callable[[], Session]) -> Iterator[Session]:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def counter_repo(db_session: Session) -> MessageCounterRepository:
    return MessageCounterRepository(db_session)


@pytest.fixture()
def message_repo(db_session: Session, clock: FakeClock) -> MessageRepository:
    return MessageRepository(db_session, clock=clock)


@pytest.fixture()
def range_repo(db_session: Session, clock: FakeClock) -> MessageRangeRepository:
    return MessageRangeRepository(db_session, clock=clock)


@pytest.fixture()
def session_repo(db_session: Session) -> SessionRepository:
    return SessionRepository(db_session)


@pytest.fixture()
def seed_messages(
    counter_repo: MessageCounterRepository,
    message_repo: MessageRepository,
    clock: FakeClock,
) -> Callable[[int], list[int]]:
    """Return a helper that posts ``n`` messages "m1".."mn" alternating u1/u2."""
    sequence = count(1)

    def _seed(n: int) -> list[int]:
        numbers = []
        for _ in range(n):
            index = next(sequence)
            user = "u1" if index % 2 else "u2"
            message_no = counter_repo.next_message_no()
            message_repo.put_message(NewMessage(user_id=user, content=f"m{index}"), message_no)
            numbers.append(message_no)
            clock.advance(1)
        return numbers

    return _seed


@pytest.fixture()
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_db_dependency(
    app: FastAPI, session_factory: Callable[[], Session]
) -> Iterator[None]:
    def _get_db_override() -> Generator[Session, None, None]:
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[app_get_db] = _get_db_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_db, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def session_cookie(client: TestClient) -> dict[str, str]:
    """Obtain a session from the API and return it as a Cookie header."""
    response = client.get("/api/v1/message-counter/current")
    assert response.status_code == 200
    session_id = response.cookies.get(settings.session_cookie_name)
    assert session_id
    return {"Cookie": f"{settings.session_cookie_name}={session_id}"}
