"""
Tests for project and meeting endpoints.
"""

from uuid import uuid4

from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from meeting_tracker.models.project import Project


class TestProjects:
    """Tests for project endpoints."""

    def test_create_and_list(self, authenticated_client: TestClient, db: Session):
        response = authenticated_client.post(
            "/api/v1/projects", json={"name": "Billing revamp", "description": "Q4"}
        )
        assert response.status_code == 201
        assert response.json()["status"] == "active"

        db.add(Project(name="Old project", status="archived"))
        db.commit()

        projects = authenticated_client.get("/api/v1/projects").json()
        assert [p["name"] for p in projects] == ["Billing revamp"]


class TestCreateMeeting:
    """Tests for creating meetings."""

    def test_create_meeting(self, authenticated_client: TestClient):
        response = authenticated_client.post(
            "/api/v1/meetings",
            json={
                "title": "Kickoff",
                "meeting_date": "2026-10-20T09:00:00",
                "participant_count": 6,
            },
        )
        assert response.status_code == 201
        data = response.json()
        assert data["title"] == "Kickoff"
        assert data["status"] == "upcoming"
        assert data["participant_count"] == 6

    def test_invalid_status(self, authenticated_client: TestClient):
        response = authenticated_client.post(
            "/api/v1/meetings", json={"title": "Kickoff", "status": "cancelled"}
        )
        assert response.status_code == 422

    def test_unknown_project(self, authenticated_client: TestClient):
        response = authenticated_client.post(
            "/api/v1/meetings", json={"title": "Kickoff", "project_id": str(uuid4())}
        )
        assert response.status_code == 404

    def test_requires_authentication(self, client: TestClient):
        response = client.post("/api/v1/meetings", json={"title": "Kickoff"})
        assert response.status_code == 401


class TestListMeetings:
    """Tests for listing meetings."""

    def test_only_own_meetings(
        self, authenticated_client: TestClient, test_meeting, other_user_meeting
    ):
        response = authenticated_client.get("/api/v1/meetings")
        assert response.status_code == 200
        assert [m["id"] for m in response.json()] == [str(test_meeting.id)]

    def test_filter_by_project(self, authenticated_client: TestClient, db: Session, test_meeting):
        project = Project(name="Platform")
        db.add(project)
        db.commit()

        authenticated_client.post(
            "/api/v1/meetings", json={"title": "Platform sync", "project_id": str(project.id)}
        )

        response = authenticated_client.get(f"/api/v1/meetings?project_id={project.id}")
        assert [m["title"] for m in response.json()] == ["Platform sync"]


class TestGetAndUpdateMeeting:
    """Tests for a single meeting."""

    def test_get_meeting(self, authenticated_client: TestClient, test_meeting):
        response = authenticated_client.get(f"/api/v1/meetings/{test_meeting.id}")
        assert response.status_code == 200
        assert response.json()["title"] == "Sprint Planning"

    def test_other_users_meeting(self, authenticated_client: TestClient, other_user_meeting):
        response = authenticated_client.get(f"/api/v1/meetings/{other_user_meeting.id}")
        assert response.status_code == 404

    def test_invalid_id(self, authenticated_client: TestClient):
        response = authenticated_client.get("/api/v1/meetings/not-a-uuid")
        assert response.status_code == 400
        assert response.json()["error"] == "Invalid meeting ID"

    def test_update_status(self, authenticated_client: TestClient, test_meeting):
        response = authenticated_client.patch(
            f"/api/v1/meetings/{test_meeting.id}", json={"status": "in-progress"}
        )
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "in-progress"
        assert data["title"] == "Sprint Planning"

    def test_required_fields_cannot_be_nulled(self, authenticated_client: TestClient, test_meeting):
        for body in ({"title": None}, {"status": None}):
            response = authenticated_client.patch(f"/api/v1/meetings/{test_meeting.id}", json=body)
            assert response.status_code == 422

        data = authenticated_client.get(f"/api/v1/meetings/{test_meeting.id}").json()
        assert (data["title"], data["status"]) == ("Sprint Planning", "completed")
