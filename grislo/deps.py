# grislo/deps.py
"""
FastAPI dependencies: one storage chain per process, one reservation
manager per request bound to the caller's session.
"""

from datetime import datetime
from functools import lru_cache
from uuid import uuid4

from fastapi import Depends, Header, Response

from .config import settings
from .database import SessionLocal
from .redis_client import redis_client
from .schemas.service_config import ServiceConfig
from .services.admin import AdminService
from .services.availability import Snapshot, load_snapshot
from .services.reservations import MyReservationsStore, ReservationManager
from .services.service_config import get_service_config
from .services.storage import StorageChain, build_storage_chain


@lru_cache
def get_chain() -> StorageChain:
    return build_storage_chain(
        session_factory=SessionLocal,
        redis=redis_client,
        seed_dir=settings.seed_dir,
        remote_enabled=settings.remote_enabled,
    )


def get_redis():
    return redis_client


def get_clock():
    return datetime.now


def get_session_id(
    response: Response,
    x_session_id: str | None = Header(None),
) -> str:
    """Caller's session; a request without one starts a new session."""
    session_id = (x_session_id or "").strip() or uuid4().hex
    response.headers["X-Session-Id"] = session_id
    return session_id


def get_snapshot(
    chain: StorageChain = Depends(get_chain),
    config: ServiceConfig = Depends(get_service_config),
    clock=Depends(get_clock),
) -> Snapshot:
    return load_snapshot(chain, config, clock().date())


def get_reservation_manager(
    session_id: str = Depends(get_session_id),
    redis=Depends(get_redis),
    chain: StorageChain = Depends(get_chain),
    config: ServiceConfig = Depends(get_service_config),
    clock=Depends(get_clock),
) -> ReservationManager:
    return ReservationManager(
        chain,
        config,
        owned=MyReservationsStore(redis, session_id),
        clock=clock,
    )


def get_admin_service(
    chain: StorageChain = Depends(get_chain),
    config: ServiceConfig = Depends(get_service_config),
    clock=Depends(get_clock),
) -> AdminService:
    return AdminService(chain, config, clock=clock)
