# tests/v1/test_messages.py
"""API tests for the message log endpoints."""

from collections.abc import Callable

from fastapi import status
from fastapi.testclient import TestClient

from chatlog.core.settings import settings


def test_first_request_issues_session_cookie(client: TestClient) -> None:
    """A request without a cookie gets a new session via Set-Cookie."""
    r = client.get("/api/v1/messages")
    assert r.status_code == status.HTTP_200_OK
    header = r.headers["set-cookie"]
    assert header.startswith(f"{settings.session_cookie_name}=")
    lowered = header.lower()
    assert f"max-age={settings.session_ttl_seconds}" in lowered
    assert "httponly" in lowered
    assert "samesite=strict" in lowered
    assert "path=/" in lowered


def test_known_session_is_not_reissued(client: TestClient, session_cookie: dict[str, str]) -> None:
    r = client.get("/api/v1/messages", headers=session_cookie)
    assert r.status_code == status.HTTP_200_OK
    assert "set-cookie" not in r.headers


def test_post_message(client: TestClient, session_cookie: dict[str, str]) -> None:
    r = client.post("/api/v1/messages", json={"contents": "hello"}, headers=session_cookie)
    assert r.status_code == status.HTTP_201_CREATED
    assert r.json() == {"message": "Message posted successfully", "messageNo": 1}

    r = client.get("/api/v1/messages", headers=session_cookie)
    body = r.json()
    assert len(body) == 1
    assert body[0]["MessageNo"] == 1
    assert body[0]["Content"] == "hello"
    assert body[0]["UserId"] == session_cookie["Cookie"].split("=", 1)[1]
    assert isinstance(body[0]["CreatedAt"], int)


def test_post_message_numbers_are_sequential(client: TestClient, session_cookie: dict[str, str]) -> None:
    numbers = [
        client.post("/api/v1/messages", json={"contents": f"m{i}"}, headers=session_cookie).json()[
            "messageNo"
        ]
        for i in range(3)
    ]
    assert numbers == [1, 2, 3]


def test_post_message_validation(client: TestClient, session_cookie: dict[str, str]) -> None:
    for payload in ({}, {"contents": ""}, {"contents": "x" * 2049}, {"contents": 5}):
        r = client.post("/api/v1/messages", json=payload, headers=session_cookie)
        assert r.status_code == status.HTTP_400_BAD_REQUEST
        assert r.json()["detail"].startswith("Bad Request")

    r = client.get("/api/v1/message-counter/current", headers=session_cookie)
    assert r.json() == {"count": 0}


def test_list_messages_newest_first(
    client: TestClient, session_cookie: dict[str, str], seed_messages: Callable[[int], list[int]]
) -> None:
    seed_messages(4)
    r = client.get("/api/v1/messages", params={"page": 1, "perPage": 20}, headers=session_cookie)
    assert r.status_code == status.HTTP_200_OK
    body = r.json()
    assert [m["MessageNo"] for m in body] == [4, 3, 2, 1]
    assert [m["UserId"] for m in body] == ["u2", "u1", "u2", "u1"]


def test_list_messages_paging(
    client: TestClient, session_cookie: dict[str, str], seed_messages: Callable[[int], list[int]]
) -> None:
    seed_messages(5)
    page2 = client.get("/api/v1/messages", params={"page": 2, "perPage": 2}, headers=session_cookie)
    assert [m["MessageNo"] for m in page2.json()] == [3, 2]
    page4 = client.get("/api/v1/messages", params={"page": 4, "perPage": 2}, headers=session_cookie)
    assert page4.json() == []


def test_list_messages_rejects_bad_paging(client: TestClient, session_cookie: dict[str, str]) -> None:
    for params in ({"page": 0}, {"perPage": 0}, {"perPage": 101}, {"page": "abc"}):
        r = client.get("/api/v1/messages", params=params, headers=session_cookie)
        assert r.status_code == status.HTTP_400_BAD_REQUEST


def test_latest_returns_newer_messages(
    client: TestClient, session_cookie: dict[str, str], seed_messages: Callable[[int], list[int]]
) -> None:
    seed_messages(4)
    r = client.get("/api/v1/messages/latest", params={"lastNumber": 2}, headers=session_cookie)
    assert r.status_code == status.HTTP_200_OK
    body = r.json()
    assert [m["Content"] for m in body["data"]] == ["m3", "m4"]
    assert body["isGetAll"] is True


def test_latest_when_caught_up(
    client: TestClient, session_cookie: dict[str, str], seed_messages: Callable[[int], list[int]]
) -> None:
    seed_messages(4)
    r = client.get("/api/v1/messages/latest", params={"lastNumber": 10}, headers=session_cookie)
    assert r.json() == {"data": [], "isGetAll": True}


def test_latest_truncates_at_fetch_limit(
    client: TestClient, session_cookie: dict[str, str], seed_messages: Callable[[int], list[int]]
) -> None:
    seed_messages(settings.fetch_since_limit + 5)
    r = client.get("/api/v1/messages/latest", params={"lastNumber": 0}, headers=session_cookie)
    body = r.json()
    assert len(body["data"]) == settings.fetch_since_limit
    assert body["isGetAll"] is False

    last = body["data"][-1]["MessageNo"]
    r = client.get("/api/v1/messages/latest", params={"lastNumber": last}, headers=session_cookie)
    body = r.json()
    assert [m["MessageNo"] for m in body["data"]] == list(
        range(settings.fetch_since_limit + 1, settings.fetch_since_limit + 6)
    )
    assert body["isGetAll"] is True


def test_latest_requires_valid_last_number(client: TestClient, session_cookie: dict[str, str]) -> None:
    r = client.get("/api/v1/messages/latest", headers=session_cookie)
    assert r.status_code == status.HTTP_400_BAD_REQUEST
    assert r.json() == {"detail": "lastNumber is required"}

    for value in ("-1", "abc"):
        r = client.get("/api/v1/messages/latest", params={"lastNumber": value}, headers=session_cookie)
        assert r.status_code == status.HTTP_400_BAD_REQUEST
