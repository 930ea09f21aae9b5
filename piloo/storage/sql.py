# piloo/storage/sql.py
"""
Relational store backed by the SQLAlchemy models in piloo.models.

Each call opens its own short-lived session and commits before returning,
so a record handed back to the caller is already durable. Constraint
violations are rolled back and reported as InvalidRecordError.
"""

from datetime import datetime
from typing import Callable, List, Optional

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from piloo.models import (
    Alert, Camera, DemoRequest, Employee, Recording, SearchQuery,
    SubscriptionPlan, SystemSettings, User, Zone,
)
from piloo.schemas.alert import AlertOut
from piloo.schemas.base import ApiModel, PatchModel
from piloo.schemas.recording import RecordingFilter, RecordingOut
from piloo.schemas.system_settings import SystemSettingsOut, SystemSettingsUpdate
from piloo.storage.base import (
    ALERTS, CAMERAS, DEMO_REQUESTS, EMPLOYEES, RECORDINGS, SEARCH_QUERIES,
    SUBSCRIPTION_PLANS, USERS, ZONES,
    EntityKind, InvalidRecordError, R, Repository, Storage,
)
from piloo.utils.logger import get_logger

logger = get_logger(__name__)

SessionFactory = Callable[[], Session]


def _commit(db: Session, entity: str):
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.warning(f"Rejected {entity} write: {e.orig}")
        raise InvalidRecordError(entity, str(e.orig)) from e


class SqlRepository(Repository[R]):
    def __init__(self, kind: EntityKind, model, session_factory: SessionFactory):
        self.kind = kind
        self.model = model
        self._session_factory = session_factory

    def _out(self, row) -> R:
        return self.kind.record.model_validate(row)

    def get(self, record_id: int) -> Optional[R]:
        with self._session_factory() as db:
            row = db.get(self.model, record_id)
            return self._out(row) if row is not None else None

    def list(self) -> List[R]:
        with self._session_factory() as db:
            rows = db.query(self.model).order_by(self.model.id).all()
            return [self._out(r) for r in rows]

    def create(self, data: ApiModel) -> R:
        with self._session_factory() as db:
            row = self.model(**data.model_dump())
            db.add(row)
            _commit(db, self.kind.name)
            db.refresh(row)
            return self._out(row)

    def update(self, record_id: int, patch: PatchModel) -> Optional[R]:
        with self._session_factory() as db:
            row = db.get(self.model, record_id)
            if row is None:
                return None
            for field, value in patch.changes().items():
                setattr(row, field, value)
            _commit(db, self.kind.name)
            db.refresh(row)
            return self._out(row)

    def delete(self, record_id: int) -> bool:
        with self._session_factory() as db:
            row = db.get(self.model, record_id)
            if row is None:
                return False
            db.delete(row)
            _commit(db, self.kind.name)
            return True

    def find_by(self, **criteria) -> List[R]:
        with self._session_factory() as db:
            rows = db.query(self.model).filter_by(**criteria).order_by(self.model.id).all()
            return [self._out(r) for r in rows]

    def count(self) -> int:
        with self._session_factory() as db:
            return db.query(self.model).count()


class DatabaseStorage(Storage):
    backend = "database"

    def __init__(self, session_factory: SessionFactory):
        self._session_factory = session_factory
        self.users = SqlRepository(USERS, User, session_factory)
        self.cameras = SqlRepository(CAMERAS, Camera, session_factory)
        self.zones = SqlRepository(ZONES, Zone, session_factory)
        self.alerts = SqlRepository(ALERTS, Alert, session_factory)
        self.employees = SqlRepository(EMPLOYEES, Employee, session_factory)
        self.subscription_plans = SqlRepository(SUBSCRIPTION_PLANS, SubscriptionPlan, session_factory)
        self.demo_requests = SqlRepository(DEMO_REQUESTS, DemoRequest, session_factory)
        self.search_queries = SqlRepository(SEARCH_QUERIES, SearchQuery, session_factory)
        self.recordings = SqlRepository(RECORDINGS, Recording, session_factory)

    def _alerts_between(self, start: datetime, end: datetime) -> List[AlertOut]:
        with self._session_factory() as db:
            rows = (
                db.query(Alert)
                .filter(Alert.timestamp >= start, Alert.timestamp <= end)
                .order_by(Alert.id)
                .all()
            )
            return [AlertOut.model_validate(r) for r in rows]

    def _search_recordings(self, criteria: RecordingFilter) -> List[RecordingOut]:
        with self._session_factory() as db:
            q = db.query(Recording)
            if criteria.camera_id is not None:
                q = q.filter(Recording.camera_id == criteria.camera_id)
            if criteria.start is not None:
                q = q.filter(Recording.start_time >= criteria.start)
            if criteria.end is not None:
                q = q.filter(Recording.start_time <= criteria.end)
            if criteria.quality is not None:
                q = q.filter(Recording.quality == criteria.quality)
            if criteria.has_motion is not None:
                q = q.filter(Recording.has_motion == criteria.has_motion)
            return [RecordingOut.model_validate(r) for r in q.order_by(Recording.id).all()]

    def get_settings(self) -> Optional[SystemSettingsOut]:
        with self._session_factory() as db:
            row = db.query(SystemSettings).order_by(SystemSettings.id).first()
            return SystemSettingsOut.model_validate(row) if row is not None else None

    def update_settings(self, patch: SystemSettingsUpdate) -> SystemSettingsOut:
        changes = patch.changes()
        with self._session_factory() as db:
            row = db.query(SystemSettings).order_by(SystemSettings.id).first()
            if row is None:
                row = SystemSettings(**changes)
                db.add(row)
            else:
                for field, value in changes.items():
                    setattr(row, field, value)
            _commit(db, "settings")
            db.refresh(row)
            return SystemSettingsOut.model_validate(row)

    def ping(self) -> bool:
        with self._session_factory() as db:
            db.execute(text("SELECT 1"))
        return True
