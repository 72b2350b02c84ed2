"""Tests for the portfolio API routes.

The ``client`` fixture (conftest.py) runs the full app against a seeded
temporary SQLite file with rate limiting disabled.
"""

from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

VALID_PROFILE: dict[str, Any] = {
    "name": "Sam Rivera",
    "title": "Staff Engineer",
    "location": "Porto, Portugal",
    "email": "sam@example.com",
    "phone": "+351900000000",
    "linkedin": "https://www.linkedin.com/in/sam",
    "summary": "Builds reliable backend systems and the tools around them.",
}


class TestHealth:
    def test_healthy(self, client: TestClient):
        resp = client.get("/v1/health")

        assert resp.status_code == 200
        body = resp.json()
        assert body["success"] is True
        assert body["data"]["status"] == "healthy"
        assert body["data"]["components"] == {"database": "healthy"}
        assert body["data"]["version"] == "1.0.0"

    def test_unhealthy_database_returns_503(self, app: FastAPI, client: TestClient):
        client.portal.call(app.state.db.close)

        resp = client.get("/v1/health")

        assert resp.status_code == 503
        body = resp.json()
        assert body["status"] == "unhealthy"
        assert body["components"]["database"] == "unhealthy"
        assert resp.headers["Cache-Control"] == "no-cache"


class TestProfile:
    def test_get_profile(self, client: TestClient):
        resp = client.get("/v1/profile")

        assert resp.status_code == 200
        body = resp.json()
        assert body["success"] is True
        assert body["data"]["name"] == "Alex Morgan"
        assert "updated_at" in body["data"]

    def test_update_profile(self, client: TestClient):
        resp = client.put("/v1/profile", json=VALID_PROFILE)

        assert resp.status_code == 200
        body = resp.json()
        assert body["message"] == "Profile updated successfully"
        assert body["data"]["name"] == "Sam Rivera"
        assert "Cache-Control" not in resp.headers

        assert client.get("/v1/profile").json()["data"]["email"] == "sam@example.com"

    @pytest.mark.parametrize(
        ("field", "value"),
        [
            ("name", "S"),
            ("email", "not-an-email"),
            ("phone", "123"),
            ("linkedin", "linkedin.com/in/sam"),
            ("linkedin", "ftp://www.linkedin.com/in/sam"),
            ("summary", "short"),
        ],
    )
    def test_update_profile_validation(self, client: TestClient, field: str, value: str):
        resp = client.put("/v1/profile", json={**VALID_PROFILE, field: value})

        assert resp.status_code == 400
        body = resp.json()
        assert body["error"] == "validation_failed"
        assert field in body["details"]

    def test_update_profile_rejects_malformed_json(self, client: TestClient):
        resp = client.put(
            "/v1/profile",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert resp.status_code == 400
        assert resp.json()["error"] == "validation_failed"


class TestResume:
    def test_list_experience(self, client: TestClient):
        body = client.get("/v1/experience").json()

        assert body["success"] is True
        assert body["data"][0]["company"] == "Example Corp"
        assert body["data"][0]["end_date"] is None

    def test_get_experience(self, client: TestClient):
        experience_id = client.get("/v1/experience").json()["data"][0]["id"]

        resp = client.get(f"/v1/experience/{experience_id}")

        assert resp.status_code == 200
        assert resp.json()["data"]["position"] == "Senior Backend Engineer"

    def test_experience_not_found(self, client: TestClient):
        resp = client.get("/v1/experience/999")

        assert resp.status_code == 404
        assert resp.json()["error"] == "experience_not_found"

    @pytest.mark.parametrize("experience_id", ["0", "-4"])
    def test_experience_invalid_id(self, client: TestClient, experience_id: str):
        resp = client.get(f"/v1/experience/{experience_id}")

        assert resp.status_code == 400
        assert resp.json()["error"] == "invalid_experience_id"

    def test_experience_non_numeric_id(self, client: TestClient):
        resp = client.get("/v1/experience/abc")

        assert resp.status_code == 400
        assert resp.json()["error"] == "validation_failed"

    def test_list_skills(self, client: TestClient):
        data = client.get("/v1/skills").json()["data"]

        assert [s["name"] for s in data] == ["SQL", "Python"]

    def test_list_skills_grouped(self, client: TestClient):
        data = client.get("/v1/skills", params={"group_by": "category"}).json()["data"]

        assert [g["category"] for g in data] == ["Databases", "Languages"]
        assert data[1]["skills"][0]["name"] == "Python"

    def test_unknown_grouping_returns_flat_list(self, client: TestClient):
        data = client.get("/v1/skills", params={"group_by": "level"}).json()["data"]

        assert "name" in data[0]

    def test_list_education(self, client: TestClient):
        data = client.get("/v1/education").json()["data"]

        assert data[0]["degree"] == "BSc"

    def test_list_certifications_empty(self, client: TestClient):
        resp = client.get("/v1/certifications")

        assert resp.status_code == 200
        assert resp.json()["data"] == []


class TestProjects:
    def test_list_projects(self, client: TestClient):
        data = client.get("/v1/projects").json()["data"]

        assert data[0]["title"] == "Portfolio API"
        assert data[0]["technologies"] == ["Python", "FastAPI", "SQLite"]
        assert data[0]["featured"] is True

    def test_featured_filter(self, client: TestClient):
        data = client.get("/v1/projects", params={"featured": "true"}).json()["data"]

        assert all(project["featured"] for project in data)
        assert len(data) == 1

    def test_get_project(self, client: TestClient):
        project_id = client.get("/v1/projects").json()["data"][0]["id"]

        resp = client.get(f"/v1/projects/{project_id}")

        assert resp.status_code == 200
        assert resp.json()["data"]["status"] == "Completed"

    def test_project_not_found(self, client: TestClient):
        resp = client.get("/v1/projects/4242")

        assert resp.status_code == 404
        assert resp.json() == {
            "error": "project_not_found",
            "message": "Project not found",
            "details": {"id": 4242},
        }

    def test_project_invalid_id(self, client: TestClient):
        resp = client.get("/v1/projects/0")

        assert resp.status_code == 400
        assert resp.json()["error"] == "invalid_project_id"


def test_unknown_route_uses_error_shape(client: TestClient):
    resp = client.get("/v1/nope")

    assert resp.status_code == 404
    assert resp.json()["error"] == "not_found"


def test_openapi_lists_tags(client: TestClient):
    schema = client.get("/openapi.json").json()

    assert {"Health", "Profile", "Resume", "Projects"} <= {t["name"] for t in schema["tags"]}
    assert "429" in schema["paths"]["/v1/profile"]["get"]["responses"]
