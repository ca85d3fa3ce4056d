"""Tests for anonymous session handling."""

from chatlog.repositories import SessionRepository
from chatlog.services.session_service import (
    create_session,
    get_session,
    resolve_session,
)


def test_create_session_stores_expiry(session_repo: SessionRepository, clock) -> None:  # type: ignore[no-untyped-def]
    created = create_session(session_repo, ttl_seconds=60, clock=clock)
    assert created.is_new
    assert created.expires_at == clock.now + 60
    assert session_repo.get_expiry(created.session_id) == clock.now + 60


def test_get_session_ignores_expired(session_repo: SessionRepository, clock) -> None:  # type: ignore[no-untyped-def]
    created = create_session(session_repo, ttl_seconds=60, clock=clock)
    assert get_session(session_repo, created.session_id, clock=clock) == created.expires_at
    clock.advance(61)
    assert get_session(session_repo, created.session_id, clock=clock) is None


def test_resolve_known_session_extends_expiry(session_repo: SessionRepository, clock) -> None:  # type: ignore[no-untyped-def]
    created = create_session(session_repo, ttl_seconds=60, clock=clock)
    clock.advance(30)
    resolved = resolve_session(session_repo, created.session_id, ttl_seconds=60, clock=clock)
    assert resolved.session_id == created.session_id
    assert not resolved.is_new
    assert session_repo.get_expiry(created.session_id) == clock.now + 60


def test_resolve_missing_or_unknown_issues_new(session_repo: SessionRepository, clock) -> None:  # type: ignore[no-untyped-def]
    for value in (None, "", "not-a-session"):
        resolved = resolve_session(session_repo, value, clock=clock)
        assert resolved.is_new
        assert resolved.session_id != value


def test_resolve_expired_session_issues_new(session_repo: SessionRepository, clock) -> None:  # type: ignore[no-untyped-def]
    created = create_session(session_repo, ttl_seconds=10, clock=clock)
    clock.advance(11)
    resolved = resolve_session(session_repo, created.session_id, clock=clock)
    assert resolved.is_new
    assert resolved.session_id != created.session_id
