# grislo/services/storage/remote.py
"""
Remote (authoritative) tier backed by SQLAlchemy.

Tables: schedule, reservations, pickup_locations (see models/tables.py).
Any SQLAlchemyError is reported as StorageUnavailable after rollback.
"""

import json
import logging
from contextlib import contextmanager
from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from ...models.tables import PickupLocations, Reservations, Schedule
from .collections import Collection
from .tiers import StorageTier, StorageUnavailable

logger = logging.getLogger(__name__)

_MODELS = {
    "schedule": Schedule,
    "reservations": Reservations,
    "pickup_locations": PickupLocations,
}


class RemoteTier(StorageTier):
    """SQL store wrapper exposing the collection operations."""

    name = "remote"

    def __init__(self, session_factory: sessionmaker | None, enabled: bool = True):
        self.session_factory = session_factory
        self.enabled = enabled and session_factory is not None

    @contextmanager
    def _session(self):
        if not self.enabled:
            raise StorageUnavailable(self.name, "remote store not configured")
        db: Session = self.session_factory()
        try:
            yield db
        except SQLAlchemyError as exc:
            db.rollback()
            raise StorageUnavailable(self.name, str(exc)) from exc
        finally:
            db.close()

    # ── Read ─────────────────────────────────────────────────────────────

    def read(self, collection: Collection) -> list[dict] | None:
        model = _MODELS[collection.kind]
        with self._session() as db:
            query = db.query(model)
            if collection.only_available:
                query = query.filter(model.available == 1)
            order_col = getattr(model, collection.order_by)
            query = query.order_by(order_col.desc() if collection.descending else order_col.asc())
            return [_from_row(collection, obj) for obj in query.all()]

    # ── Write ────────────────────────────────────────────────────────────

    def replace(self, collection: Collection, rows: list[dict]) -> None:
        model = _MODELS[collection.kind]
        with self._session() as db:
            db.query(model).delete()
            for row in rows:
                db.add(model(**_to_row(collection, row)))
            db.commit()

    def upsert(self, collection: Collection, row: dict) -> None:
        model = _MODELS[collection.kind]
        with self._session() as db:
            db.merge(model(**_to_row(collection, row)))
            db.commit()

    def insert(self, collection: Collection, row: dict) -> None:
        model = _MODELS[collection.kind]
        with self._session() as db:
            db.add(model(**_to_row(collection, row)))
            db.commit()

    def update(self, collection: Collection, key: str, changes: dict) -> bool:
        model = _MODELS[collection.kind]
        with self._session() as db:
            obj = db.get(model, key)
            if obj is None:
                return False
            for field, value in _to_row(collection, changes).items():
                setattr(obj, field, value)
            db.commit()
            return True

    def delete(self, collection: Collection, key: str) -> bool:
        model = _MODELS[collection.kind]
        with self._session() as db:
            obj = db.get(model, key)
            if obj is None:
                return False
            db.delete(obj)
            db.commit()
            return True


# ── Row mapping ──────────────────────────────────────────────────────────


def _to_row(collection: Collection, record: dict) -> dict:
    """Record (JSON-shaped) → column values. Unknown fields are dropped."""
    columns = _MODELS[collection.kind].__table__.columns.keys()
    row = {k: v for k, v in record.items() if k in columns}

    if collection.kind == "schedule":
        if "time_slots" in row and row["time_slots"] is not None:
            row["time_slots"] = json.dumps(list(row["time_slots"]))
        if "available" in row:
            row["available"] = 1 if row["available"] else 0
        if "updated_at" not in row:
            row["updated_at"] = datetime.now().isoformat()

    return row


def _from_row(collection: Collection, obj) -> dict:
    """ORM object → record (JSON-shaped)."""
    columns = obj.__table__.columns.keys()
    record = {name: getattr(obj, name) for name in columns}

    if collection.kind == "schedule":
        raw = record.get("time_slots")
        try:
            record["time_slots"] = json.loads(raw) if raw else None
        except json.JSONDecodeError:
            logger.warning(f"Invalid time_slots JSON for schedule {record.get('date')}")
            record["time_slots"] = None
        record["available"] = bool(record.get("available"))
        record.pop("updated_at", None)

    return record
