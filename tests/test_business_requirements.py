"""
Tests for versioned business requirements documents.
"""

from datetime import date
from unittest.mock import AsyncMock, patch

from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from meeting_tracker.models.business_requirement import BusinessRequirement
from meeting_tracker.services.brd_template import build_default_template
from meeting_tracker.services.llm_client import LLMClient


class TestDefaultTemplate:
    def test_dated_template(self):
        template = build_default_template(date(2026, 3, 4))
        assert template.startswith("# Business Requirements Document")
        assert "**Date:** 03/04/2026" in template
        assert "## 12. Sign-off" in template


class TestLatest:
    """Tests for GET /business-requirements/meeting/{id}/latest."""

    def test_default_when_nothing_stored(self, authenticated_client: TestClient, test_meeting):
        response = authenticated_client.get(
            f"/api/v1/business-requirements/meeting/{test_meeting.id}/latest"
        )
        assert response.status_code == 200
        data = response.json()
        assert data["is_default"] is True
        assert data["version"] == 0
        assert data["id"] is None
        assert "## 1. Project Overview" in data["content"]

    def test_manual_saves_create_versions(
        self, authenticated_client: TestClient, db: Session, test_meeting
    ):
        """Each save is a new version; the latest wins."""
        url = f"/api/v1/business-requirements/meeting/{test_meeting.id}"
        first = authenticated_client.post(url, json={"content": "# Draft one"})
        second = authenticated_client.post(url, json={"content": "# Draft two"})

        assert first.status_code == 201
        assert first.json()["version"] == 1
        assert second.json()["version"] == 2

        latest = authenticated_client.get(f"{url}/latest").json()
        assert latest["version"] == 2
        assert latest["content"] == "# Draft two"
        assert latest["is_default"] is False

        versions = authenticated_client.get(url).json()
        assert [v["version"] for v in versions] == [2, 1]

        v1 = authenticated_client.get(f"{url}/versions/1").json()
        assert v1["content"] == "# Draft one"

    def test_missing_version(self, authenticated_client: TestClient, test_meeting):
        response = authenticated_client.get(
            f"/api/v1/business-requirements/meeting/{test_meeting.id}/versions/7"
        )
        assert response.status_code == 404

    def test_empty_content_rejected(self, authenticated_client: TestClient, test_meeting):
        response = authenticated_client.post(
            f"/api/v1/business-requirements/meeting/{test_meeting.id}",
            json={"content": ""},
        )
        assert response.status_code == 422


class TestRegenerate:
    """Tests for POST /business-requirements/regenerate."""

    def test_versions_increase_and_old_versions_are_kept(
        self, authenticated_client: TestClient, db: Session, test_meeting, test_action_items
    ):
        with patch.object(LLMClient, "chat", new_callable=AsyncMock) as mock_chat:
            mock_chat.side_effect = ["# BRD generated once", "# BRD generated twice"]

            first = authenticated_client.post(
                "/api/v1/business-requirements/regenerate",
                json={"meetingId": str(test_meeting.id)},
            )
            second = authenticated_client.post(
                "/api/v1/business-requirements/regenerate",
                json={"meetingId": str(test_meeting.id)},
            )

        assert first.status_code == 200
        assert first.json()["success"] is True
        assert first.json()["version"] == 1
        assert first.json()["content"] == "# BRD generated once"
        assert second.json()["version"] == 2

        # First call starts from the default template, second from version 1
        first_prompt = mock_chat.call_args_list[0][0][0][1]["content"]
        second_prompt = mock_chat.call_args_list[1][0][0][1]["content"]
        assert "## 1. Project Overview" in first_prompt
        assert "Current Business Requirements:\n# BRD generated once" in second_prompt
        assert "Prepare the release notes" in second_prompt
        assert "   - Due Date: Not set" in second_prompt
        assert mock_chat.call_args_list[0][1]["temperature"] == 0.7

        v1 = db.query(BusinessRequirement).filter(BusinessRequirement.version == 1).one()
        assert v1.content == "# BRD generated once"

    def test_no_action_items(self, authenticated_client: TestClient, db: Session, test_meeting):
        """Nothing is written and the model is not called."""
        with patch.object(LLMClient, "chat", new_callable=AsyncMock) as mock_chat:
            response = authenticated_client.post(
                "/api/v1/business-requirements/regenerate",
                json={"meetingId": str(test_meeting.id)},
            )
            mock_chat.assert_not_called()

        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "error": "No action items found for this meeting",
            "detail": "No action items found for this meeting",
        }
        assert db.query(BusinessRequirement).count() == 0

    def test_empty_model_output(
        self, authenticated_client: TestClient, db: Session, test_meeting, test_action_items
    ):
        with patch.object(LLMClient, "chat", new_callable=AsyncMock) as mock_chat:
            mock_chat.return_value = "   "
            response = authenticated_client.post(
                "/api/v1/business-requirements/regenerate",
                json={"meetingId": str(test_meeting.id)},
            )

        assert response.status_code == 502
        assert db.query(BusinessRequirement).count() == 0

    def test_other_users_meeting(self, authenticated_client: TestClient, other_user_meeting):
        response = authenticated_client.post(
            "/api/v1/business-requirements/regenerate",
            json={"meetingId": str(other_user_meeting.id)},
        )
        assert response.status_code == 404


class TestVersionRows:
    def test_versions_are_insert_only(self, db: Session, test_meeting):
        """Rows carry only a creation time; a new version is a new row."""
        assert "updated_at" not in BusinessRequirement.__table__.columns

        db.add(BusinessRequirement(meeting_id=test_meeting.id, content="v1", version=1))
        db.commit()
        row = db.query(BusinessRequirement).one()
        assert row.created_at is not None
