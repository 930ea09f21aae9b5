# tests/test_api.py
"""HTTP API scenarios against a fresh in-memory store per test."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from datetime import datetime, timedelta
from fastapi.testclient import TestClient
from piloo.config import settings
from piloo.main import app
from piloo.schemas.recording import RecordingCreate
from piloo.storage import get_storage
from piloo.storage.memory import MemoryStorage

CAMERA = {"name": "Camera 01 - Main Entrance", "location": "Building A, Floor 1", "ip": "192.168.1.101"}
ADMIN = {"username": "admin", "email": "admin@company.com", "password": "admin123", "role": "admin"}


@pytest.fixture
def storage():
    store = MemoryStorage()
    app.dependency_overrides[get_storage] = lambda: store
    yield store
    app.dependency_overrides.clear()


@pytest.fixture
def client(storage):
    return TestClient(app)


class TestCrud:
    def test_camera_defaults(self, client):
        resp = client.post("/api/cameras", json=CAMERA)
        assert resp.status_code == 200
        body = resp.json()
        assert body["id"] == 1
        assert body["status"] == "active"
        assert body["sensitivity"] == 7
        assert body["recordingEnabled"] is True
        assert body["retentionDays"] == 15

        assert client.get("/api/cameras/1").json() == body
        assert client.get("/api/cameras").json() == [body]

    def test_snake_case_input_accepted(self, client):
        resp = client.post("/api/cameras", json={**CAMERA, "assigned_zone": "entrance-a"})
        assert resp.json()["assignedZone"] == "entrance-a"

    def test_validation_error_is_400(self, client):
        resp = client.post("/api/cameras", json={"name": "No location"})
        assert resp.status_code == 400
        assert resp.json()["message"] == "Invalid request data"
        assert resp.json()["errors"]

    def test_sensitivity_out_of_range(self, client):
        assert client.post("/api/cameras", json={**CAMERA, "sensitivity": 11}).status_code == 400

    def test_null_camera_tuning_rejected(self, client, storage):
        for field in ("sensitivity", "recordingEnabled", "retentionDays"):
            assert client.post("/api/cameras", json={**CAMERA, field: None}).status_code == 400
        assert storage.cameras.count() == 0

        client.post("/api/cameras", json=CAMERA)
        resp = client.put("/api/cameras/1", json={"sensitivity": None})
        assert resp.status_code == 400
        assert storage.cameras.get(1).sensitivity == 7

    def test_null_for_required_field_rejected(self, client):
        client.post("/api/cameras", json=CAMERA)
        assert client.put("/api/cameras/1", json={"name": None}).status_code == 400

    def test_missing_ids_are_404(self, client):
        assert client.get("/api/cameras/99").status_code == 404
        assert client.get("/api/cameras/99").json() == {"message": "Camera not found"}
        assert client.put("/api/zones/99", json={"name": "x"}).status_code == 404
        assert client.delete("/api/alerts/99").status_code == 404

    def test_delete(self, client):
        client.post("/api/zones", json={"name": "Entrance A", "type": "entrance"})
        assert client.delete("/api/zones/1").json() == {"message": "Zone deleted"}
        assert client.get("/api/zones").json() == []

    def test_employees_filtered_by_date(self, client):
        for emp_id, day in (("EMP001", "2024-03-01"), ("EMP002", "2024-03-02")):
            client.post("/api/employees", json={"name": emp_id, "employeeId": emp_id,
                                                "department": "IT", "date": day})
        resp = client.get("/api/employees", params={"date": "2024-03-02"})
        assert [e["employeeId"] for e in resp.json()] == ["EMP002"]

    def test_duplicate_employee_id_is_400(self, client):
        body = {"name": "John", "employeeId": "EMP001", "department": "IT", "date": "2024-03-01"}
        client.post("/api/employees", json=body)
        resp = client.post("/api/employees", json=body)
        assert resp.status_code == 400
        assert resp.json()["message"] == "Invalid employee data"

    def test_subscription_plans(self, client):
        resp = client.post("/api/subscription-plans", json={
            "name": "Starter", "maxCameras": 5, "monthlyPrice": "29.00", "yearlyPrice": "290.00",
        })
        assert resp.status_code == 200
        assert resp.json()["features"] == []
        client.put("/api/subscription-plans/1", json={"isActive": False})
        assert client.get("/api/subscription-plans", params={"active_only": True}).json() == []


class TestAccountSubscription:
    def _plan(self, client, name="Professional", max_cameras=25):
        return client.post("/api/subscription-plans", json={
            "name": name, "maxCameras": max_cameras, "monthlyPrice": "99.00", "yearlyPrice": "990.00",
        }).json()

    def test_defaults_before_any_plan(self, client, storage):
        user = client.post("/api/users", json={**ADMIN, "subscriptionPlan": None,
                                                "subscriptionStatus": None, "maxCameras": None}).json()
        assert client.get(f"/api/user/{user['id']}/subscription").json() == {
            "currentPlan": "Basic", "status": "active", "maxCameras": 5, "subscriptionEndsAt": None,
        }
        assert client.get("/api/user/99/subscription").status_code == 404

    def test_change_plan(self, client, storage):
        user = client.post("/api/users", json=ADMIN).json()
        plan = self._plan(client)
        before = datetime.utcnow()

        resp = client.post("/api/user/change-plan", json={"userId": user["id"], "planId": plan["id"]})
        assert resp.status_code == 200
        body = resp.json()
        assert body["message"] == "Subscription plan updated successfully"
        assert body["plan"] == "Professional"
        assert "password" not in body["user"]
        assert body["user"]["maxCameras"] == 25

        stored = storage.users.get(user["id"])
        assert stored.subscription_plan == "Professional"
        assert stored.subscription_status == "active"
        assert stored.max_cameras == 25
        assert before + timedelta(days=29) < stored.subscription_ends_at < before + timedelta(days=31)

        summary = client.get(f"/api/user/{user['id']}/subscription").json()
        assert summary["currentPlan"] == "Professional"
        assert summary["maxCameras"] == 25

    def test_change_plan_unknown_plan_or_user(self, client):
        user = client.post("/api/users", json=ADMIN).json()
        resp = client.post("/api/user/change-plan", json={"userId": user["id"], "planId": 42})
        assert resp.status_code == 404
        assert resp.json() == {"message": "Subscription plan not found"}

        plan = self._plan(client)
        resp = client.post("/api/user/change-plan", json={"userId": 99, "planId": plan["id"]})
        assert resp.status_code == 404
        assert resp.json() == {"message": "User not found"}

    def test_admin_creates_and_lists_clients(self, client, storage):
        resp = client.post("/api/admin/clients", json={
            "username": "acme", "email": "ops@acme.test", "password": "s3cret", "subscriptionPlan": "Starter",
        })
        assert resp.status_code == 200
        created = resp.json()
        assert "password" not in created
        assert created["role"] == "security"
        assert created["maxCameras"] == 5
        assert created["subscriptionPlan"] == "Starter"
        assert created["subscriptionStatus"] is None

        clients = client.get("/api/admin/clients").json()
        assert [c["username"] for c in clients] == ["acme"]
        assert all("password" not in c for c in clients)

    def test_admin_sets_and_clears_client_subscription(self, client, storage):
        created = client.post("/api/admin/clients", json={
            "username": "acme", "email": "ops@acme.test", "password": "s3cret",
        }).json()

        resp = client.put(f"/api/admin/clients/{created['id']}/subscription", json={"planName": "Enterprise"})
        assert resp.status_code == 200
        assert resp.json()["subscriptionPlan"] == "Enterprise"
        assert resp.json()["subscriptionStatus"] == "active"
        assert resp.json()["subscriptionEndsAt"] is not None
        assert "password" not in resp.json()

        cleared = client.put(f"/api/admin/clients/{created['id']}/subscription", json={"planName": None}).json()
        assert cleared["subscriptionPlan"] is None
        assert cleared["subscriptionStatus"] is None
        assert cleared["subscriptionEndsAt"] is None

        assert client.put("/api/admin/clients/99/subscription", json={"planName": "x"}).status_code == 404

    def test_occupancy_endpoint(self, client):
        client.post("/api/zones", json={"name": "Lobby", "type": "entrance"})
        client.post("/api/employees", json={"name": "A", "employeeId": "A", "department": "IT",
                                            "checkIn": "08:00", "lastSeen": "Lobby", "date": "2024-03-01"})
        assert client.get("/api/analytics/occupancy").json() == [
            {"zone": "Lobby", "occupancy": 1, "capacity": 100, "utilizationPercent": 1},
        ]


class TestAlerts:
    def test_resolve_alert(self, client):
        client.post("/api/cameras", json=CAMERA)
        created = client.post("/api/alerts", json={"type": "intrusion", "description": "Door forced",
                                                   "cameraId": 1, "priority": "high"}).json()
        assert created["status"] == "pending"
        assert client.get("/api/stats").json()["currentAlerts"] == 1

        resolved = client.put(f"/api/alerts/{created['id']}", json={"status": "resolved"}).json()
        assert resolved["status"] == "resolved"
        assert resolved["timestamp"] == created["timestamp"]
        assert client.get("/api/stats").json()["currentAlerts"] == 0

    def test_unknown_priority_rejected(self, client):
        resp = client.post("/api/alerts", json={"type": "motion", "description": "x", "priority": "urgent"})
        assert resp.status_code == 400

    def test_date_window(self, client):
        client.post("/api/alerts", json={"type": "motion", "description": "Hall", "priority": "low"})
        now = datetime.utcnow()
        inside = {"from": (now - timedelta(hours=1)).isoformat(), "to": (now + timedelta(hours=1)).isoformat()}
        assert len(client.get("/api/alerts", params=inside).json()) == 1
        later = {"from": (now + timedelta(days=1)).isoformat()}
        assert client.get("/api/alerts", params=later).json() == []

    def test_simulated_event_needs_camera(self, client):
        resp = client.post("/api/simulate/camera-event", json={"cameraId": 7, "eventType": "motion"})
        assert resp.status_code == 404

    def test_simulated_event_creates_alert(self, client):
        client.post("/api/cameras", json=CAMERA)
        resp = client.post("/api/simulate/camera-event", json={"cameraId": 1, "eventType": "intrusion"})
        assert resp.status_code == 200
        assert resp.json()["alert"]["priority"] == "high"
        assert resp.json()["notification"]["title"] == "Intrusion Detected"
        assert len(client.get("/api/alerts").json()) == 1


class TestAuth:
    def test_login(self, client):
        client.post("/api/users", json=ADMIN)
        resp = client.post("/api/auth/login", json={"email": ADMIN["email"], "password": "admin123"})
        assert resp.status_code == 200
        assert resp.json()["user"]["username"] == "admin"
        assert "password" not in resp.json()["user"]

    def test_wrong_password(self, client):
        client.post("/api/users", json=ADMIN)
        resp = client.post("/api/auth/login", json={"email": ADMIN["email"], "password": "nope"})
        assert resp.status_code == 401
        assert resp.json() == {"message": "Invalid credentials"}

    def test_unknown_email(self, client):
        resp = client.post("/api/auth/login", json={"email": "ghost@company.com", "password": "x"})
        assert resp.status_code == 401

    def test_missing_credentials(self, client):
        assert client.post("/api/auth/login", json={"email": ADMIN["email"]}).status_code == 400

    def test_signup_rejects_existing_email(self, client):
        assert client.post("/api/auth/signup", json=ADMIN).status_code == 200
        resp = client.post("/api/auth/signup", json={**ADMIN, "username": "admin2"})
        assert resp.status_code == 400

    def test_password_never_returned(self, client):
        created = client.post("/api/users", json=ADMIN).json()
        updated = client.put("/api/users/1", json={"password": "changed"}).json()
        for body in (created, updated, client.get("/api/users/1").json(), *client.get("/api/users").json()):
            assert "password" not in body
        assert created["role"] == "admin"
        assert created["subscriptionPlan"] == "trial"


class TestStats:
    def test_zero_zones(self, client):
        stats = client.get("/api/stats").json()
        assert stats["zoneCoverage"] == "0%"
        assert stats["activeCameras"] == 0
        assert stats["employeeStats"] == {"present": 0, "absent": 0, "late": 0, "avgDuration": "0.0h"}

    def test_coverage_capped(self, client):
        client.post("/api/zones", json={"name": "Entrance A", "type": "entrance"})
        client.post("/api/cameras", json=CAMERA)
        client.post("/api/cameras", json={**CAMERA, "name": "Camera 02", "status": "offline"})
        stats = client.get("/api/stats").json()
        assert stats["zoneCoverage"] == "100%"
        assert stats["activeCameras"] == 1

    def test_analytics_rejects_unknown_range(self, client):
        assert client.get("/api/analytics", params={"timeRange": "2w"}).status_code == 400
        assert client.get("/api/analytics", params={"timeRange": "7d"}).json()["timeRange"] == "7d"

    def test_report(self, client):
        client.post("/api/alerts", json={"type": "motion", "description": "x", "priority": "low"})
        resp = client.post("/api/reports/generate", json={"type": "security"})
        assert resp.json()["report"]["summary"]["totalAlerts"] == 1


class TestSettings:
    def test_get_before_put_is_404(self, client):
        assert client.get("/api/settings").status_code == 404

    def test_put_creates_row(self, client):
        body = client.put("/api/settings", json={"globalSensitivity": 8}).json()
        assert body["globalSensitivity"] == 8
        assert body["dataRetention"] == 90
        assert client.get("/api/settings").json() == body


class TestPublicForms:
    def test_demo_request(self, client, storage):
        resp = client.post("/api/demo-request", json={"name": "Ana", "email": "ana@corp.com", "company": "Corp"})
        assert resp.json()["id"] == 1
        assert storage.demo_requests.get(1).status == "pending"

    def test_search_is_logged(self, client, storage):
        client.post("/api/cameras", json=CAMERA)
        client.post("/api/alerts", json={"type": "intrusion", "description": "Person at main entrance",
                                         "cameraId": 1, "priority": "high"})
        resp = client.post("/api/search", json={"query": "entrance person"})
        assert len(resp.json()["results"]) == 1
        saved = storage.search_queries.get(resp.json()["searchId"])
        assert saved.query == "entrance person"
        assert len(saved.results) == 1

    def test_search_filters_are_typed(self, client, storage):
        client.post("/api/cameras", json=CAMERA)
        client.post("/api/alerts", json={"type": "intrusion", "description": "Person at main entrance",
                                         "cameraId": 1, "priority": "high"})

        resp = client.post("/api/search", json={"query": "person", "filters": {"cameraIds": 1}})
        assert resp.status_code == 400
        assert resp.json()["message"] == "Invalid request data"

        resp = client.post("/api/search", json={"query": "person", "filters": {"dateFrom": "yesterday"}})
        assert resp.status_code == 400

        resp = client.post("/api/search", json={"query": "person", "filters": {"cameraIds": ["1"]}})
        assert resp.status_code == 200
        assert [r["cameraId"] for r in resp.json()["results"]] == [1]
        saved = storage.search_queries.get(resp.json()["searchId"])
        assert saved.filters == {"cameraIds": [1], "dateFrom": None, "dateTo": None}

    def test_chat(self, client):
        client.post("/api/cameras", json=CAMERA)
        resp = client.post("/api/ai/chat", json={"query": "Show me camera status"})
        assert "1 out of 1 cameras active" in resp.json()["response"]


class TestRecordings:
    @pytest.fixture
    def recordings_dir(self, tmp_path, monkeypatch):
        root = tmp_path / "recordings"
        root.mkdir()
        monkeypatch.setattr(settings, "RECORDINGS_DIR", str(root))
        return root

    def _create(self, client, path, **extra):
        return client.post("/api/recordings", json={
            "cameraId": 1, "filename": "clip.mp4", "filePath": str(path),
            "startTime": "2024-03-01T08:00:00", "endTime": "2024-03-01T08:10:00",
            "duration": 600, "fileSize": 4, **extra,
        })

    def test_filters(self, client, recordings_dir):
        self._create(client, recordings_dir / "a.mp4", hasMotion=True)
        self._create(client, recordings_dir / "b.mp4", quality="1080p")
        assert len(client.get("/api/recordings", params={"has_motion": True}).json()) == 1
        assert len(client.get("/api/recordings", params={"quality": "1080p"}).json()) == 1
        assert len(client.get("/api/recordings", params={"camera_id": 2}).json()) == 0

    def test_download(self, client, recordings_dir):
        clip = recordings_dir / "clip.mp4"
        clip.write_bytes(b"\x00\x01\x02\x03")
        rec = self._create(client, clip).json()
        resp = client.get(f"/api/recordings/{rec['id']}/download")
        assert resp.status_code == 200
        assert resp.content == b"\x00\x01\x02\x03"

    def test_relative_path_resolves_inside_recordings_dir(self, client, recordings_dir):
        (recordings_dir / "cam1").mkdir()
        (recordings_dir / "cam1" / "clip.mp4").write_bytes(b"abcd")
        rec = self._create(client, "cam1/clip.mp4").json()
        assert client.get(f"/api/recordings/{rec['id']}/download").content == b"abcd"

    def test_download_missing_file(self, client, recordings_dir):
        rec = self._create(client, recordings_dir / "gone.mp4").json()
        assert client.get(f"/api/recordings/{rec['id']}/download").status_code == 404
        assert client.get("/api/recordings/99/download").status_code == 404

    def test_path_outside_recordings_dir_rejected(self, client, recordings_dir, storage):
        secret = recordings_dir.parent / "secret.env"
        secret.write_text("DB_PASSWORD=hunter2")
        for path in (secret, "../secret.env"):
            resp = self._create(client, path)
            assert resp.status_code == 400
        assert storage.recordings.count() == 0

        ok = self._create(client, recordings_dir / "clip.mp4").json()
        assert client.put(f"/api/recordings/{ok['id']}", json={"filePath": str(secret)}).status_code == 400

    def test_stored_path_outside_dir_is_never_served(self, client, recordings_dir, storage):
        secret = recordings_dir.parent / "secret.env"
        secret.write_text("DB_PASSWORD=hunter2")
        rec = storage.recordings.create(RecordingCreate(
            camera_id=1, filename="secret.env", file_path=str(secret),
            start_time=datetime(2024, 3, 1, 8), end_time=datetime(2024, 3, 1, 9),
            duration=3600, file_size=19,
        ))
        resp = client.get(f"/api/recordings/{rec.id}/download")
        assert resp.status_code == 404
        assert "hunter2" not in resp.text

    def test_symlink_escaping_dir_is_not_served(self, client, recordings_dir):
        secret = recordings_dir.parent / "secret.env"
        secret.write_text("DB_PASSWORD=hunter2")
        link = recordings_dir / "clip.mp4"
        link.symlink_to(secret)
        assert self._create(client, link).status_code == 400


class TestHealth:
    def test_health(self, client):
        body = client.get("/api/health").json()
        assert body["status"] == "ok"
        assert body["storage"] == {"backend": "memory", "status": "ok"}
        assert body["cameras"] == {}
