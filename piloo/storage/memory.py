# piloo/storage/memory.py
"""
In-process store: one dict per entity kind keyed by id.

Sync route handlers run on FastAPI's thread pool, so each repository guards
its map and id counter with a lock. Ids are never reused, even after delete.
"""

import threading
from datetime import datetime
from typing import Dict, List, Optional

from piloo.schemas.alert import AlertOut
from piloo.schemas.base import ApiModel, PatchModel
from piloo.schemas.recording import RecordingFilter, RecordingOut
from piloo.schemas.system_settings import SystemSettingsOut, SystemSettingsUpdate
from piloo.storage.base import (
    ALERTS, CAMERAS, DEMO_REQUESTS, EMPLOYEES, RECORDINGS, SEARCH_QUERIES,
    SUBSCRIPTION_PLANS, USERS, ZONES,
    EntityKind, InvalidRecordError, R, Repository, Storage,
)


class MemoryRepository(Repository[R]):
    def __init__(self, kind: EntityKind):
        self.kind = kind
        self._records: Dict[int, R] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def get(self, record_id: int) -> Optional[R]:
        return self._records.get(record_id)

    def list(self) -> List[R]:
        with self._lock:
            return list(self._records.values())

    def create(self, data: ApiModel) -> R:
        values = data.model_dump()
        now = datetime.utcnow()
        for field in self.kind.stamps:
            values[field] = now

        with self._lock:
            self._check_unique(values)
            record_id = self._next_id
            record = self.kind.record.model_validate({**values, "id": record_id})
            self._next_id += 1
            self._records[record_id] = record
        return record

    def update(self, record_id: int, patch: PatchModel) -> Optional[R]:
        changes = patch.changes()
        with self._lock:
            current = self._records.get(record_id)
            if current is None:
                return None
            self._check_unique(changes, exclude_id=record_id)
            updated = current.model_copy(update=changes)
            self._records[record_id] = updated
        return updated

    def delete(self, record_id: int) -> bool:
        with self._lock:
            return self._records.pop(record_id, None) is not None

    def find_by(self, **criteria) -> List[R]:
        return [
            r for r in self.list()
            if all(getattr(r, field) == value for field, value in criteria.items())
        ]

    def _check_unique(self, values: dict, exclude_id: Optional[int] = None):
        for field in self.kind.unique:
            if field not in values:
                continue
            for record_id, record in self._records.items():
                if record_id != exclude_id and getattr(record, field) == values[field]:
                    raise InvalidRecordError(self.kind.name, f"{field} '{values[field]}' already exists")


class MemoryStorage(Storage):
    backend = "memory"

    def __init__(self):
        self.users = MemoryRepository(USERS)
        self.cameras = MemoryRepository(CAMERAS)
        self.zones = MemoryRepository(ZONES)
        self.alerts = MemoryRepository(ALERTS)
        self.employees = MemoryRepository(EMPLOYEES)
        self.subscription_plans = MemoryRepository(SUBSCRIPTION_PLANS)
        self.demo_requests = MemoryRepository(DEMO_REQUESTS)
        self.search_queries = MemoryRepository(SEARCH_QUERIES)
        self.recordings = MemoryRepository(RECORDINGS)
        self._settings: Optional[SystemSettingsOut] = None
        self._settings_lock = threading.Lock()

    def _alerts_between(self, start: datetime, end: datetime) -> List[AlertOut]:
        return [a for a in self.alerts.list() if a.timestamp and start <= a.timestamp <= end]

    def _search_recordings(self, criteria: RecordingFilter) -> List[RecordingOut]:
        return [r for r in self.recordings.list() if criteria.matches(r)]

    def get_settings(self) -> Optional[SystemSettingsOut]:
        return self._settings

    def update_settings(self, patch: SystemSettingsUpdate) -> SystemSettingsOut:
        changes = patch.changes()
        with self._settings_lock:
            if self._settings is None:
                self._settings = SystemSettingsOut.model_validate({**changes, "id": 1})
            else:
                self._settings = self._settings.model_copy(update=changes)
            return self._settings
