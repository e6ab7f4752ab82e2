"""
Tests for the ingestion endpoint.
"""

from unittest.mock import AsyncMock, patch
from uuid import uuid4

from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from meeting_tracker.core.exceptions import MalformedModelOutputError
from meeting_tracker.models.action_item import ActionItem
from meeting_tracker.models.data_chunk import DataChunk
from meeting_tracker.services.llm_client import LLMClient


def chunk(text, index, source="minutes.docx"):
    return {"text": text, "sourceDocument": source, "chunkIndex": index}


class TestProcessDocument:
    """Tests for POST /processing/process-document."""

    def test_extracts_and_stores(
        self, authenticated_client: TestClient, db: Session, test_meeting
    ):
        """Chunks and extracted action items are stored for the meeting."""
        with patch.object(LLMClient, "chat", new_callable=AsyncMock) as mock_chat:
            mock_chat.side_effect = [
                '```json\n[{"actionItem": "Send the agenda", "priority": "High", '
                '"assignedTo": "Alice", "dueDate": "2026-11-02"}]\n```',
                '[{"actionItem": "Review budget"},{"actionItem": "Book ro',
            ]
            response = authenticated_client.post(
                "/api/v1/processing/process-document",
                json={
                    "meetingId": str(test_meeting.id),
                    "chunks": [chunk("Alice sends the agenda.", 0), chunk("Bob reviews budget.", 1)],
                },
            )

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["chunksProcessed"] == 2
        assert data["actionItemsGenerated"] == 2
        assert {i["action_item"] for i in data["actionItems"]} == {"Send the agenda", "Review budget"}

        stored = db.query(ActionItem).filter(ActionItem.meeting_id == test_meeting.id).all()
        assert len(stored) == 2
        agenda = next(i for i in stored if i.action_item == "Send the agenda")
        assert agenda.priority == "High"
        assert agenda.status == "Not Started"
        assert agenda.assigned_to == "Alice"
        assert agenda.due_date.isoformat() == "2026-11-02"

        chunks = db.query(DataChunk).order_by(DataChunk.chunk_index).all()
        assert [c.chunk_index for c in chunks] == [0, 1]
        assert chunks[0].source_document == "minutes.docx"

    def test_bad_chunk_does_not_fail_request(
        self, authenticated_client: TestClient, db: Session, test_meeting
    ):
        """A chunk whose output cannot be parsed is skipped."""
        with patch.object(LLMClient, "chat", new_callable=AsyncMock) as mock_chat:
            mock_chat.side_effect = [
                MalformedModelOutputError(),
                "I could not find anything.",
                '[{"actionItem": "Follow up with legal"}]',
            ]
            response = authenticated_client.post(
                "/api/v1/processing/process-document",
                json={
                    "meetingId": str(test_meeting.id),
                    "chunks": [chunk("One.", 0), chunk("Two.", 1), chunk("Three.", 2)],
                },
            )

        assert response.status_code == 200
        data = response.json()
        assert data["chunksProcessed"] == 3
        assert data["actionItemsGenerated"] == 1

    def test_missing_chunk_index_uses_position(
        self, authenticated_client: TestClient, db: Session, test_meeting
    ):
        with patch.object(LLMClient, "chat", new_callable=AsyncMock) as mock_chat:
            mock_chat.return_value = "[]"
            response = authenticated_client.post(
                "/api/v1/processing/process-document",
                json={
                    "meetingId": str(test_meeting.id),
                    "chunks": [
                        {"text": "One.", "sourceDocument": "a.pdf"},
                        {"text": "Two.", "sourceDocument": "a.pdf"},
                    ],
                },
            )

        assert response.status_code == 200
        assert response.json()["actionItemsGenerated"] == 0
        chunks = db.query(DataChunk).order_by(DataChunk.chunk_index).all()
        assert [c.chunk_index for c in chunks] == [0, 1]

    def test_chunk_without_source_is_not_stored(
        self, authenticated_client: TestClient, db: Session, test_meeting
    ):
        with patch.object(LLMClient, "chat", new_callable=AsyncMock) as mock_chat:
            mock_chat.return_value = '[{"actionItem": "A"}]'
            response = authenticated_client.post(
                "/api/v1/processing/process-document",
                json={"meetingId": str(test_meeting.id), "chunks": [{"text": "One."}]},
            )

        assert response.status_code == 200
        assert response.json()["actionItemsGenerated"] == 1
        assert db.query(DataChunk).count() == 0

    def test_other_users_meeting(self, authenticated_client: TestClient, other_user_meeting):
        """Another user's meeting looks like a missing one."""
        response = authenticated_client.post(
            "/api/v1/processing/process-document",
            json={"meetingId": str(other_user_meeting.id), "chunks": [chunk("One.", 0)]},
        )
        assert response.status_code == 404
        assert response.json()["success"] is False

    def test_user_id_mismatch(self, authenticated_client: TestClient, test_meeting):
        response = authenticated_client.post(
            "/api/v1/processing/process-document",
            json={
                "meetingId": str(test_meeting.id),
                "userId": str(uuid4()),
                "chunks": [chunk("One.", 0)],
            },
        )
        assert response.status_code == 403

    def test_invalid_meeting_id(self, authenticated_client: TestClient):
        response = authenticated_client.post(
            "/api/v1/processing/process-document",
            json={"meetingId": "not-a-uuid", "chunks": []},
        )
        assert response.status_code == 422

    def test_requires_authentication(self, client: TestClient, test_meeting):
        response = client.post(
            "/api/v1/processing/process-document",
            json={"meetingId": str(test_meeting.id), "chunks": []},
        )
        assert response.status_code == 401
