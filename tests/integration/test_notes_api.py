import asyncio
from datetime import datetime
from uuid import uuid4

import pytest
from httpx import AsyncClient

from app.models.note import Note
from tests.fixtures.note_fixtures import (
    ALICE_EMAIL,
    BOB_EMAIL,
    OTHER_WALLET,
    WALLET,
    actor_headers,
)


def _timestamp(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


class TestNotesAPI:
    """Test note API endpoints end to end."""

    async def test_create_and_get_note(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/notes/",
            json={
                "title": "Hello",
                "content": "World",
                "author_email": "Alice@Example.com",
            },
        )

        assert response.status_code == 201
        created = response.json()
        assert created["author_identity"] == "alice@example.com"
        assert created["author_name"] == "Alice"
        assert created["author_kind"] == "email"
        assert "created_at" in created
        assert "updated_at" in created

        response = await client.get(f"/api/v1/notes/{created['uuid']}")

        assert response.status_code == 200
        fetched = response.json()
        for field in ["id", "uuid", "title", "content", "author_identity", "author_name"]:
            assert fetched[field] == created[field]

    async def test_create_wallet_note(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/notes/",
            json={"title": "gm", "content": "wagmi", "wallet_address": WALLET},
        )

        assert response.status_code == 201
        data = response.json()
        assert data["author_kind"] == "wallet"
        assert data["author_identity"] == WALLET

    async def test_create_note_rejects_missing_author(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/notes/", json={"title": "Hello", "content": "World"}
        )
        assert response.status_code == 422

    async def test_create_note_rejects_long_title(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/notes/",
            json={"title": "x" * 201, "content": "c", "author_email": ALICE_EMAIL},
        )
        assert response.status_code == 422

    async def test_get_unknown_note(self, client: AsyncClient):
        response = await client.get(f"/api/v1/notes/{uuid4()}")

        assert response.status_code == 404
        assert response.json()["detail"] == "Note not found"

    async def test_list_notes(self, client: AsyncClient, sample_note: Note, sample_wallet_note: Note):
        response = await client.get("/api/v1/notes/")

        assert response.status_code == 200
        data = response.json()
        assert [n["uuid"] for n in data] == [
            str(sample_note.uuid),
            str(sample_wallet_note.uuid),
        ]

    @pytest.mark.parametrize("author", ["alice@example.com", "ALICE@EXAMPLE.COM"])
    async def test_list_notes_by_author(
        self, client: AsyncClient, sample_note: Note, sample_wallet_note: Note, author
    ):
        response = await client.get("/api/v1/notes/", params={"author": author})

        assert response.status_code == 200
        assert [n["uuid"] for n in response.json()] == [str(sample_note.uuid)]

    async def test_list_notes_by_wallet(
        self, client: AsyncClient, sample_note: Note, sample_wallet_note: Note
    ):
        response = await client.get("/api/v1/notes/", params={"author": WALLET})
        assert [n["uuid"] for n in response.json()] == [str(sample_wallet_note.uuid)]

    async def test_update_by_author(self, client: AsyncClient, sample_note: Note):
        before = (await client.get(f"/api/v1/notes/{sample_note.uuid}")).json()
        await asyncio.sleep(0.01)

        response = await client.put(
            f"/api/v1/notes/{sample_note.uuid}",
            json={"title": "Updated", "content": "Changed"},
            headers=actor_headers(email="Alice@Example.com"),
        )

        assert response.status_code == 200
        data = response.json()
        assert data["title"] == "Updated"
        assert data["content"] == "Changed"
        assert data["author_identity"] == ALICE_EMAIL
        assert data["created_at"] == before["created_at"]
        assert _timestamp(data["updated_at"]) > _timestamp(before["updated_at"])

        response = await client.get(f"/api/v1/notes/{sample_note.uuid}")
        assert response.json()["title"] == "Updated"

    async def test_update_by_other_author(self, client: AsyncClient, sample_note: Note):
        response = await client.put(
            f"/api/v1/notes/{sample_note.uuid}",
            json={"title": "Hacked"},
            headers=actor_headers(email=BOB_EMAIL),
        )

        assert response.status_code == 403

        response = await client.get(f"/api/v1/notes/{sample_note.uuid}")
        assert response.json()["title"] == "Groceries"

    async def test_update_without_actor(self, client: AsyncClient, sample_note: Note):
        response = await client.put(
            f"/api/v1/notes/{sample_note.uuid}", json={"title": "Anonymous"}
        )
        assert response.status_code == 401

    async def test_update_unknown_note(self, client: AsyncClient):
        response = await client.put(
            f"/api/v1/notes/{uuid4()}",
            json={"title": "x"},
            headers=actor_headers(email=ALICE_EMAIL),
        )
        assert response.status_code == 404

    async def test_delete_by_author(self, client: AsyncClient, sample_note: Note):
        response = await client.delete(
            f"/api/v1/notes/{sample_note.uuid}",
            headers=actor_headers(email=ALICE_EMAIL),
        )

        assert response.status_code == 204

        response = await client.get(f"/api/v1/notes/{sample_note.uuid}")
        assert response.status_code == 404

    async def test_delete_by_other_author(self, client: AsyncClient, sample_note: Note):
        response = await client.delete(
            f"/api/v1/notes/{sample_note.uuid}",
            headers=actor_headers(email=BOB_EMAIL),
        )

        assert response.status_code == 403

        response = await client.get(f"/api/v1/notes/{sample_note.uuid}")
        assert response.status_code == 200

    async def test_delete_unknown_note_is_404_not_403(self, client: AsyncClient):
        response = await client.delete(
            f"/api/v1/notes/{uuid4()}", headers=actor_headers(email=BOB_EMAIL)
        )
        assert response.status_code == 404

    async def test_delete_without_actor(self, client: AsyncClient, sample_note: Note):
        response = await client.delete(f"/api/v1/notes/{sample_note.uuid}")

        assert response.status_code == 401

        response = await client.get(f"/api/v1/notes/{sample_note.uuid}")
        assert response.status_code == 200

    async def test_wallet_owner_delete(self, client: AsyncClient, sample_wallet_note: Note):
        response = await client.delete(
            f"/api/v1/notes/{sample_wallet_note.uuid}",
            headers=actor_headers(wallet=OTHER_WALLET),
        )
        assert response.status_code == 403

        response = await client.delete(
            f"/api/v1/notes/{sample_wallet_note.uuid}",
            headers=actor_headers(wallet=WALLET),
        )
        assert response.status_code == 204

    async def test_email_actor_cannot_delete_wallet_note(
        self, client: AsyncClient, sample_wallet_note: Note
    ):
        response = await client.delete(
            f"/api/v1/notes/{sample_wallet_note.uuid}",
            headers=actor_headers(email=ALICE_EMAIL),
        )
        assert response.status_code == 403
