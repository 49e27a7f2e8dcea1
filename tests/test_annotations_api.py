"""Tests for annotation record endpoints and their soft-delete lifecycle."""

from datetime import datetime
from typing import Any

from fastapi import status
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from studytext import models

SUMMARY_ID = "summary-anatomy-1"
STUDENT_ID = "student-001"


def _create(client: TestClient, **overrides: Any) -> dict:
    payload = {"student_id": STUDENT_ID, "original_text": "O femur e longo", **overrides}
    response = client.post(f"/api/v1/summaries/{SUMMARY_ID}/annotations", json=payload)
    assert response.status_code == status.HTTP_201_CREATED
    return response.json()


def _parse(timestamp: str) -> datetime:
    return datetime.fromisoformat(timestamp)


class TestCreateAnnotation:
    """Test suite for POST /summaries/{summary_id}/annotations."""

    def test_create_annotation_with_defaults(self, client: TestClient) -> None:
        """Test that only student_id and original_text are required."""
        data = _create(client)

        assert data["id"] > 0
        assert data["student_id"] == STUDENT_ID
        assert data["summary_id"] == SUMMARY_ID
        assert data["original_text"] == "O femur e longo"
        assert data["display_text"] == "O femur e longo"
        assert data["color"] == "yellow"
        assert data["type"] == "highlight"
        assert data["note"] == ""
        assert data["bot_reply"] is None
        assert data["deleted_at"] is None
        assert data["created_at"] is not None
        assert data["updated_at"] is not None

    def test_create_annotation_with_all_fields(self, client: TestClient) -> None:
        """Test creating a question annotation with every optional field."""
        data = _create(
            client,
            display_text="O femur",
            color="pink",
            note="Por que e longo?",
            type="question",
            bot_reply="Porque sustenta o peso.",
        )

        assert data["display_text"] == "O femur"
        assert data["color"] == "pink"
        assert data["note"] == "Por que e longo?"
        assert data["type"] == "question"
        assert data["bot_reply"] == "Porque sustenta o peso."

    def test_create_truncates_long_display_text(self, client: TestClient) -> None:
        """Test that a missing display_text is derived and truncated."""
        data = _create(client, original_text="a" * 250)

        assert data["original_text"] == "a" * 250
        assert data["display_text"] == "a" * 200 + "…"

    def test_create_rejects_empty_original_text(self, client: TestClient) -> None:
        """Test that an empty original_text is rejected."""
        response = client.post(
            f"/api/v1/summaries/{SUMMARY_ID}/annotations",
            json={"student_id": STUDENT_ID, "original_text": ""},
        )
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_create_rejects_unknown_color(self, client: TestClient) -> None:
        """Test that colors outside the palette are rejected."""
        response = client.post(
            f"/api/v1/summaries/{SUMMARY_ID}/annotations",
            json={"student_id": STUDENT_ID, "original_text": "nervo", "color": "purple"},
        )
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_create_persists_record(self, client: TestClient, db_session: Session) -> None:
        """Test that the record is stored in the database."""
        data = _create(client)

        record = db_session.get(models.TextAnnotation, data["id"])
        assert record is not None
        assert record.original_text == "O femur e longo"
        assert record.deleted_at is None


class TestListAnnotations:
    """Test suite for GET /summaries/{summary_id}/annotations."""

    def test_list_returns_active_in_creation_order(self, client: TestClient) -> None:
        """Test that annotations come back oldest first."""
        first = _create(client, original_text="femur")
        second = _create(client, original_text="nervo ulnar")

        response = client.get(
            f"/api/v1/summaries/{SUMMARY_ID}/annotations", params={"student_id": STUDENT_ID}
        )

        assert response.status_code == status.HTTP_200_OK
        ids = [a["id"] for a in response.json()["annotations"]]
        assert ids == [first["id"], second["id"]]

    def test_list_excludes_soft_deleted(self, client: TestClient) -> None:
        """Test that tombstoned annotations are hidden from the list."""
        kept = _create(client, original_text="femur")
        deleted = _create(client, original_text="tibia")
        client.patch(f"/api/v1/annotations/{deleted['id']}/soft-delete")

        response = client.get(
            f"/api/v1/summaries/{SUMMARY_ID}/annotations", params={"student_id": STUDENT_ID}
        )

        ids = [a["id"] for a in response.json()["annotations"]]
        assert ids == [kept["id"]]

    def test_list_is_scoped_to_student_and_summary(self, client: TestClient) -> None:
        """Test that other students' and other summaries' annotations are excluded."""
        mine = _create(client)
        client.post(
            f"/api/v1/summaries/{SUMMARY_ID}/annotations",
            json={"student_id": "student-002", "original_text": "femur"},
        )
        client.post(
            "/api/v1/summaries/other-summary/annotations",
            json={"student_id": STUDENT_ID, "original_text": "femur"},
        )

        response = client.get(
            f"/api/v1/summaries/{SUMMARY_ID}/annotations", params={"student_id": STUDENT_ID}
        )

        annotations = response.json()["annotations"]
        assert [a["id"] for a in annotations] == [mine["id"]]

    def test_list_requires_student_id(self, client: TestClient) -> None:
        """Test that the student_id query parameter is mandatory."""
        response = client.get(f"/api/v1/summaries/{SUMMARY_ID}/annotations")
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


class TestUpdateAnnotation:
    """Test suite for PUT /annotations/{id}."""

    def test_update_changes_only_given_fields(self, client: TestClient) -> None:
        """Test a partial update."""
        created = _create(client, note="old note")

        response = client.put(
            f"/api/v1/annotations/{created['id']}", json={"color": "green", "type": "note"}
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["color"] == "green"
        assert data["type"] == "note"
        assert data["note"] == "old note"
        assert data["original_text"] == created["original_text"]

    def test_update_sets_bot_reply_and_bumps_updated_at(self, client: TestClient) -> None:
        """Test that updating refreshes updated_at."""
        created = _create(client, type="question")

        response = client.put(
            f"/api/v1/annotations/{created['id']}", json={"bot_reply": "Resposta"}
        )

        data = response.json()
        assert data["bot_reply"] == "Resposta"
        assert _parse(data["updated_at"]) >= _parse(created["updated_at"])

    def test_update_unknown_annotation_returns_404(self, client: TestClient) -> None:
        """Test that updating a missing annotation fails with 404."""
        response = client.put("/api/v1/annotations/999", json={"note": "x"})

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["detail"] == "Annotation with id 999 not found"

    def test_update_soft_deleted_annotation_returns_410(self, client: TestClient) -> None:
        """Test that a tombstoned annotation cannot be edited."""
        created = _create(client)
        client.patch(f"/api/v1/annotations/{created['id']}/soft-delete")

        response = client.put(f"/api/v1/annotations/{created['id']}", json={"note": "x"})

        assert response.status_code == status.HTTP_410_GONE


class TestSoftDeleteAnnotation:
    """Test suite for PATCH /annotations/{id}/soft-delete."""

    def test_soft_delete_sets_tombstone(self, client: TestClient, db_session: Session) -> None:
        """Test that soft delete keeps the row and sets deleted_at."""
        created = _create(client)

        response = client.patch(f"/api/v1/annotations/{created['id']}/soft-delete")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["deleted_at"] is not None
        assert _parse(data["updated_at"]) >= _parse(created["updated_at"])

        record = db_session.get(models.TextAnnotation, created["id"])
        assert record is not None
        assert record.deleted_at is not None

    def test_soft_delete_twice_returns_409(self, client: TestClient) -> None:
        """Test that deleting an already-deleted annotation is a conflict."""
        created = _create(client)
        client.patch(f"/api/v1/annotations/{created['id']}/soft-delete")

        response = client.patch(f"/api/v1/annotations/{created['id']}/soft-delete")

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_soft_delete_unknown_annotation_returns_404(self, client: TestClient) -> None:
        """Test that deleting a missing annotation fails with 404."""
        response = client.patch("/api/v1/annotations/999/soft-delete")
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_there_is_no_hard_delete(self, client: TestClient) -> None:
        """Test that DELETE is not routed for annotations."""
        created = _create(client)

        response = client.delete(f"/api/v1/annotations/{created['id']}")

        assert response.status_code == status.HTTP_405_METHOD_NOT_ALLOWED


class TestRestoreAnnotation:
    """Test suite for PATCH /annotations/{id}/restore."""

    def test_restore_clears_tombstone(self, client: TestClient) -> None:
        """Test that a restored annotation is active and listed again."""
        created = _create(client)
        client.patch(f"/api/v1/annotations/{created['id']}/soft-delete")

        response = client.patch(f"/api/v1/annotations/{created['id']}/restore")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["deleted_at"] is None

        listed = client.get(
            f"/api/v1/summaries/{SUMMARY_ID}/annotations", params={"student_id": STUDENT_ID}
        ).json()["annotations"]
        assert [a["id"] for a in listed] == [created["id"]]

    def test_restore_active_annotation_returns_400(self, client: TestClient) -> None:
        """Test that restoring a non-deleted annotation is a bad request."""
        created = _create(client)

        response = client.patch(f"/api/v1/annotations/{created['id']}/restore")

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_restore_unknown_annotation_returns_404(self, client: TestClient) -> None:
        """Test that restoring a missing annotation fails with 404."""
        response = client.patch("/api/v1/annotations/999/restore")
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_restored_annotation_can_be_edited(self, client: TestClient) -> None:
        """Test the full delete, restore, update cycle."""
        created = _create(client)
        client.patch(f"/api/v1/annotations/{created['id']}/soft-delete")
        client.patch(f"/api/v1/annotations/{created['id']}/restore")

        response = client.put(f"/api/v1/annotations/{created['id']}", json={"note": "de volta"})

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["note"] == "de volta"
