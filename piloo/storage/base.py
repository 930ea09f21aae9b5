# piloo/storage/base.py
"""
Entity store interface.

One Repository per entity kind (get / list / create / update / delete / find_by)
plus a Storage object bundling them with the few kind-specific queries the
API needs. Two implementations exist: MemoryStorage and DatabaseStorage.

Missing ids are a normal outcome: get/update return None, delete returns False.
Only constraint violations raise (InvalidRecordError).
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Generic, List, Optional, Tuple, Type, TypeVar

from piloo.schemas.base import ApiModel, PatchModel, as_naive_utc
from piloo.schemas.alert import AlertOut
from piloo.schemas.camera import CameraOut
from piloo.schemas.demo_request import DemoRequestOut
from piloo.schemas.employee import EmployeeOut
from piloo.schemas.recording import RecordingFilter, RecordingOut
from piloo.schemas.search_query import SearchQueryOut
from piloo.schemas.subscription_plan import SubscriptionPlanOut
from piloo.schemas.system_settings import SystemSettingsOut, SystemSettingsUpdate
from piloo.schemas.user import UserRecord
from piloo.schemas.zone import ZoneOut

R = TypeVar("R", bound=ApiModel)


class StorageError(Exception):
    """Base class for store failures."""


class InvalidRecordError(StorageError):
    """Write rejected by a uniqueness or NOT NULL constraint."""

    def __init__(self, entity: str, reason: str):
        super().__init__(f"Invalid {entity} data: {reason}")
        self.entity = entity
        self.reason = reason


@dataclass(frozen=True)
class EntityKind:
    name: str
    record: Type[ApiModel]
    unique: Tuple[str, ...] = ()
    stamps: Tuple[str, ...] = ()      # datetime fields set once, on create


USERS = EntityKind("user", UserRecord, unique=("username", "email"), stamps=("created_at",))
CAMERAS = EntityKind("camera", CameraOut)
ZONES = EntityKind("zone", ZoneOut)
ALERTS = EntityKind("alert", AlertOut, stamps=("timestamp",))
EMPLOYEES = EntityKind("employee", EmployeeOut, unique=("employee_id",))
SUBSCRIPTION_PLANS = EntityKind("subscription plan", SubscriptionPlanOut, stamps=("created_at",))
DEMO_REQUESTS = EntityKind("demo request", DemoRequestOut, stamps=("created_at",))
SEARCH_QUERIES = EntityKind("search query", SearchQueryOut, stamps=("created_at",))
RECORDINGS = EntityKind("recording", RecordingOut, stamps=("created_at",))


class Repository(ABC, Generic[R]):
    kind: EntityKind

    @abstractmethod
    def get(self, record_id: int) -> Optional[R]: ...

    @abstractmethod
    def list(self) -> List[R]:
        """All records in insertion (id) order."""

    @abstractmethod
    def create(self, data: ApiModel) -> R:
        """Persist a validated create-schema; returns the record with its new id."""

    @abstractmethod
    def update(self, record_id: int, patch: PatchModel) -> Optional[R]:
        """Merge the fields the client sent over the stored record."""

    @abstractmethod
    def delete(self, record_id: int) -> bool: ...

    @abstractmethod
    def find_by(self, **criteria) -> List[R]:
        """Records whose fields equal every given value, in id order."""

    def count(self) -> int:
        return len(self.list())


class Storage(ABC):
    backend: str = "abstract"

    users: Repository[UserRecord]
    cameras: Repository[CameraOut]
    zones: Repository[ZoneOut]
    alerts: Repository[AlertOut]
    employees: Repository[EmployeeOut]
    subscription_plans: Repository[SubscriptionPlanOut]
    demo_requests: Repository[DemoRequestOut]
    search_queries: Repository[SearchQueryOut]
    recordings: Repository[RecordingOut]

    # ── Kind-specific queries ─────────────────────────────────────────────
    def get_user_by_email(self, email: str) -> Optional[UserRecord]:
        matches = self.users.find_by(email=email)
        return matches[0] if matches else None

    def employees_on(self, date: str) -> List[EmployeeOut]:
        return self.employees.find_by(date=date)

    def alerts_between(self, start: datetime, end: datetime) -> List[AlertOut]:
        """Alerts whose timestamp falls in [start, end], inclusive."""
        return self._alerts_between(as_naive_utc(start), as_naive_utc(end))

    def search_recordings(self, criteria: RecordingFilter) -> List[RecordingOut]:
        return self._search_recordings(criteria)

    @abstractmethod
    def _alerts_between(self, start: datetime, end: datetime) -> List[AlertOut]: ...

    @abstractmethod
    def _search_recordings(self, criteria: RecordingFilter) -> List[RecordingOut]: ...

    # ── Settings singleton ────────────────────────────────────────────────
    @abstractmethod
    def get_settings(self) -> Optional[SystemSettingsOut]: ...

    @abstractmethod
    def update_settings(self, patch: SystemSettingsUpdate) -> SystemSettingsOut:
        """Patch the settings row, creating it from defaults when absent."""

    # ── Health ────────────────────────────────────────────────────────────
    def ping(self) -> bool:
        return True

    def is_empty(self) -> bool:
        return self.users.count() == 0 and self.cameras.count() == 0
