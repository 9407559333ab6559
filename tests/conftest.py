import json
import random
from datetime import datetime, timedelta

import fakeredis
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from grislo.models.tables import Base
from grislo.schemas.service_config import ServiceConfig
from grislo.services.admin import AdminService
from grislo.services.reservations import MyReservationsStore, ReservationManager
from grislo.services.storage import build_storage_chain

NOW = datetime(2026, 10, 18, 10, 0)

SEED_SCHEDULE = {
    "operatingDays": [
        {"date": "2026-10-20", "timeSlots": ["09:00", "10:00"], "available": True},
        {"date": "2026-10-21"},
        {"date": "2026-10-22", "timeSlots": ["09:00"], "available": False},
        {"date": "2026-10-23", "timeSlots": [], "available": True},
    ]
}

SEED_LOCATIONS = {
    "locations": [
        {"id": "loc_station", "name": "駅前ロータリー", "address": "", "sortOrder": 1},
        {"id": "loc_cityhall", "name": "市役所", "address": "本町1-1", "sortOrder": 2},
    ]
}


class Clock:
    """Deterministic clock advancing one second per call."""

    def __init__(self, start: datetime = NOW):
        self.now = start

    def __call__(self) -> datetime:
        current = self.now
        self.now = current + timedelta(seconds=1)
        return current

    def set(self, value: datetime) -> None:
        self.now = value


def write_seed(seed_dir, schedule=SEED_SCHEDULE, locations=SEED_LOCATIONS, settings=None):
    seed_dir.mkdir(parents=True, exist_ok=True)
    (seed_dir / "schedule.json").write_text(json.dumps(schedule), encoding="utf-8")
    (seed_dir / "pickupLocations.json").write_text(json.dumps(locations), encoding="utf-8")
    if settings is not None:
        (seed_dir / "config.json").write_text(json.dumps({"settings": settings}), encoding="utf-8")
    return seed_dir


@pytest.fixture
def redis():
    return fakeredis.FakeRedis(server=fakeredis.FakeServer(), decode_responses=True)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def seed_dir(tmp_path):
    return write_seed(tmp_path / "seed")


@pytest.fixture
def config():
    return ServiceConfig()


@pytest.fixture
def clock():
    return Clock()


@pytest.fixture
def chain(session_factory, redis, seed_dir):
    return build_storage_chain(session_factory, redis, seed_dir)


@pytest.fixture
def manager(chain, config, redis, clock):
    return ReservationManager(
        chain,
        config,
        owned=MyReservationsStore(redis, "session-a"),
        clock=clock,
        rng=random.Random(7),
    )


@pytest.fixture
def admin(chain, config, clock):
    return AdminService(chain, config, clock=clock, rng=random.Random(11))
