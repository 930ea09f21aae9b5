# tests/test_memory_storage.py
"""Unit tests for the in-memory entity store."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from datetime import datetime, timedelta, timezone
from piloo.schemas.alert import AlertCreate
from piloo.schemas.camera import CameraCreate, CameraUpdate
from piloo.schemas.employee import EmployeeCreate
from piloo.schemas.recording import RecordingCreate, RecordingFilter
from piloo.schemas.system_settings import SystemSettingsUpdate
from piloo.schemas.user import UserCreate, UserUpdate
from piloo.storage import InvalidRecordError
from piloo.storage.memory import MemoryStorage


def make_camera(name="Camera 01 - Main Entrance", **kwargs):
    return CameraCreate(name=name, location="Building A", ip="192.168.1.101", **kwargs)


def make_user(username="admin", email="admin@company.com"):
    return UserCreate(username=username, email=email, password="admin123", role="admin")


class TestMemoryRepository:
    def test_ids_are_monotonic_and_never_reused(self):
        storage = MemoryStorage()
        first = storage.cameras.create(make_camera("A"))
        second = storage.cameras.create(make_camera("B"))
        assert (first.id, second.id) == (1, 2)

        assert storage.cameras.delete(second.id) is True
        third = storage.cameras.create(make_camera("C"))
        assert third.id == 3

    def test_create_then_get_round_trip(self):
        storage = MemoryStorage()
        created = storage.cameras.create(make_camera(assigned_zone="entrance-a", sensitivity=9))
        fetched = storage.cameras.get(created.id)
        assert fetched == created
        assert fetched.sensitivity == 9
        assert fetched.status == "active"
        assert fetched.retention_days == 15

    def test_list_is_in_insertion_order(self):
        storage = MemoryStorage()
        for name in ("C", "A", "B"):
            storage.cameras.create(make_camera(name))
        assert [c.name for c in storage.cameras.list()] == ["C", "A", "B"]

    def test_duplicate_email_rejected(self):
        storage = MemoryStorage()
        storage.users.create(make_user())
        with pytest.raises(InvalidRecordError) as exc:
            storage.users.create(make_user(username="other"))
        assert exc.value.entity == "user"
        assert storage.users.count() == 1

    def test_duplicate_rejected_on_update(self):
        storage = MemoryStorage()
        storage.users.create(make_user())
        other = storage.users.create(make_user("hr", "hr@company.com"))
        with pytest.raises(InvalidRecordError):
            storage.users.update(other.id, UserUpdate(email="admin@company.com"))
        assert storage.users.get(other.id).email == "hr@company.com"

    def test_updating_own_unique_value_is_allowed(self):
        storage = MemoryStorage()
        user = storage.users.create(make_user())
        updated = storage.users.update(user.id, UserUpdate(email="admin@company.com", role="hr"))
        assert updated.role == "hr"

    def test_empty_patch_is_idempotent(self):
        storage = MemoryStorage()
        camera = storage.cameras.create(make_camera())
        assert storage.cameras.update(camera.id, CameraUpdate()) == camera
        assert storage.cameras.get(camera.id) == camera

    def test_patch_only_touches_sent_fields(self):
        storage = MemoryStorage()
        camera = storage.cameras.create(make_camera(assigned_zone="parking"))
        updated = storage.cameras.update(camera.id, CameraUpdate(status="offline"))
        assert updated.status == "offline"
        assert updated.assigned_zone == "parking"
        assert updated.name == camera.name

    def test_missing_ids(self):
        storage = MemoryStorage()
        assert storage.cameras.get(42) is None
        assert storage.cameras.update(42, CameraUpdate(status="offline")) is None
        assert storage.cameras.delete(42) is False

    def test_find_by(self):
        storage = MemoryStorage()
        storage.cameras.create(make_camera("A", status="offline"))
        storage.cameras.create(make_camera("B"))
        storage.cameras.create(make_camera("C", status="offline"))
        assert [c.name for c in storage.cameras.find_by(status="offline")] == ["A", "C"]


class TestMemoryStorageQueries:
    def test_user_lookup_by_email_keeps_password(self):
        storage = MemoryStorage()
        storage.users.create(make_user())
        user = storage.get_user_by_email("admin@company.com")
        assert user.password == "admin123"
        assert "password" not in user.public().model_dump()
        assert storage.get_user_by_email("nobody@company.com") is None

    def test_employees_on_date(self):
        storage = MemoryStorage()
        storage.employees.create(EmployeeCreate(name="John Doe", employee_id="EMP001",
                                                department="Security", date="2024-03-01"))
        storage.employees.create(EmployeeCreate(name="Jane Smith", employee_id="EMP002",
                                                department="HR", date="2024-03-02"))
        assert [e.employee_id for e in storage.employees_on("2024-03-02")] == ["EMP002"]

    def test_alert_timestamp_is_set_on_create(self):
        storage = MemoryStorage()
        before = datetime.utcnow()
        alert = storage.alerts.create(AlertCreate(type="motion", description="Motion", priority="low"))
        assert alert.status == "pending"
        assert before <= alert.timestamp <= datetime.utcnow()

    def test_alerts_between_accepts_aware_bounds(self):
        storage = MemoryStorage()
        alert = storage.alerts.create(AlertCreate(type="motion", description="Motion", priority="low"))
        start = datetime.now(timezone.utc) - timedelta(minutes=5)
        end = datetime.now(timezone.utc) + timedelta(minutes=5)
        assert storage.alerts_between(start, end) == [alert]
        assert storage.alerts_between(start - timedelta(days=2), start - timedelta(days=1)) == []

    def test_search_recordings(self):
        storage = MemoryStorage()
        base = datetime(2024, 3, 1, 8, 0)
        for cam, hours, quality, motion in ((1, 0, "720p", True), (1, 2, "1080p", False), (2, 1, "720p", True)):
            storage.recordings.create(RecordingCreate(
                camera_id=cam, filename=f"cam{cam}-{hours}.mp4", file_path=f"/data/cam{cam}-{hours}.mp4",
                start_time=base + timedelta(hours=hours), end_time=base + timedelta(hours=hours, minutes=30),
                duration=1800, file_size=1024, quality=quality, has_motion=motion,
            ))
        assert len(storage.search_recordings(RecordingFilter())) == 3
        assert [r.filename for r in storage.search_recordings(RecordingFilter(camera_id=1, has_motion=True))] \
            == ["cam1-0.mp4"]
        window = RecordingFilter(start=base + timedelta(minutes=30), end=base + timedelta(hours=1))
        assert [r.filename for r in storage.search_recordings(window)] == ["cam2-1.mp4"]
        assert [r.filename for r in storage.search_recordings(RecordingFilter(quality="1080p"))] == ["cam1-2.mp4"]

    def test_settings_created_from_defaults(self):
        storage = MemoryStorage()
        assert storage.get_settings() is None
        created = storage.update_settings(SystemSettingsUpdate(global_sensitivity=8))
        assert created.global_sensitivity == 8
        assert created.data_retention == 90
        assert created.max_login_attempts == 5

        patched = storage.update_settings(SystemSettingsUpdate(alerts_loitering=True))
        assert patched.global_sensitivity == 8
        assert patched.alerts_loitering is True
        assert storage.get_settings() == patched
