"""Tenant isolation: no operation authenticated as tenant B can reach tenant A's notes.

A foreign note is reported exactly like a missing one (404), so its existence
is not revealed.
"""

import pytest

from notes_api.db.models import Note


@pytest.fixture
def acme_note(client, auth_headers) -> dict:
    response = client.post(
        "/api/notes",
        json={"title": "Acme secret", "content": "for acme eyes only"},
        headers=auth_headers("user@acme.test"),
    )
    assert response.status_code == 201
    return response.json()["data"]


@pytest.fixture
def globex_headers(auth_headers):
    return auth_headers("admin@globex.test")


def test_list_never_includes_other_tenant_notes(client, acme_note, globex_headers) -> None:
    notes = client.get("/api/notes", headers=globex_headers).json()["data"]

    assert acme_note["id"] not in {note["id"] for note in notes}
    assert all(note["tenant_id"] != acme_note["tenant_id"] for note in notes)
    assert all("Acme" not in note["title"] for note in notes)


def test_get_other_tenant_note_is_404(client, acme_note, globex_headers) -> None:
    foreign = client.get(f"/api/notes/{acme_note['id']}", headers=globex_headers)
    missing = client.get("/api/notes/no-such-note", headers=globex_headers)

    assert foreign.status_code == missing.status_code == 404
    assert foreign.json()["error"] == missing.json()["error"] == "Note not found"
    assert "for acme eyes only" not in foreign.text


def test_update_other_tenant_note_is_404_and_unchanged(
    client, acme_note, globex_headers, db_session
) -> None:
    response = client.put(
        f"/api/notes/{acme_note['id']}",
        json={"title": "Hijacked", "content": "pwned"},
        headers=globex_headers,
    )

    assert response.status_code == 404
    stored = db_session.get(Note, acme_note["id"])
    assert stored.title == "Acme secret"
    assert stored.content == "for acme eyes only"


def test_delete_other_tenant_note_is_404_and_kept(
    client, acme_note, globex_headers, db_session
) -> None:
    response = client.delete(f"/api/notes/{acme_note['id']}", headers=globex_headers)

    assert response.status_code == 404
    assert db_session.get(Note, acme_note["id"]) is not None


def test_body_cannot_choose_tenant(client, auth_headers, db_session) -> None:
    """A tenant_id in the request body is ignored; the token decides."""
    acme = auth_headers("user@acme.test")
    globex = auth_headers("user@globex.test")
    globex_tenant = client.get("/api/auth/me", headers=globex).json()["data"]["tenant"]["id"]

    response = client.post(
        "/api/notes",
        json={"title": "Sneaky", "tenant_id": globex_tenant},
        headers=acme,
    )

    assert response.status_code == 201
    assert response.json()["data"]["tenant_id"] != globex_tenant
