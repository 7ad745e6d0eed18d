"""Tests for ENFORCE_SESSION_REVOCATION=true.

With enforcement on, the request authenticator also requires a live session
record, so logout revokes the token server-side.
"""

import dataclasses
from datetime import datetime, timedelta, timezone

import pytest

from notes_api.db.models import UserSession


@pytest.fixture
def settings(settings):
    return dataclasses.replace(settings, enforce_session_revocation=True)


def test_token_with_live_session_accepted(client, auth_headers) -> None:
    response = client.get("/api/notes", headers=auth_headers("user@acme.test"))
    assert response.status_code == 200


def test_logged_out_token_rejected(client, login) -> None:
    headers = {"Authorization": f"Bearer {login('user@acme.test')}"}

    assert client.post("/api/auth/logout", headers=headers).status_code == 200
    response = client.get("/api/notes", headers=headers)

    assert response.status_code == 401
    assert response.json()["error"] == "Session expired or revoked"


def test_other_sessions_survive_logout(client, login) -> None:
    first = {"Authorization": f"Bearer {login('user@acme.test')}"}
    second = {"Authorization": f"Bearer {login('user@acme.test')}"}

    client.post("/api/auth/logout", headers=first)

    assert client.get("/api/notes", headers=second).status_code == 200


def test_expired_session_record_rejected(client, login, db_session) -> None:
    headers = {"Authorization": f"Bearer {login('user@acme.test')}"}
    db_session.query(UserSession).update(
        {"expires_at": datetime.now(timezone.utc) - timedelta(seconds=1)},
        synchronize_session=False,
    )
    db_session.commit()

    response = client.get("/api/notes", headers=headers)

    assert response.status_code == 401
    assert response.json()["error"] == "Session expired or revoked"
