# grislo/services/reservations/my_reservations.py
"""
Per-session list of reservation ids created by that session.

Key format: grislo:my_reservations:{session_id}
Value: Redis list, creation order.

Stored apart from the reservation records; only scopes the "my reservations"
view. Redis failures degrade to an empty list / skipped append.
"""

import logging

from redis import Redis
from redis.exceptions import RedisError

logger = logging.getLogger(__name__)


class MyReservationsStore:
    """Redis list of reservation ids owned by one session."""

    KEY_PREFIX = "grislo:my_reservations"

    def __init__(self, redis: Redis, session_id: str):
        self.redis = redis
        self.session_id = session_id

    @property
    def key(self) -> str:
        return f"{self.KEY_PREFIX}:{self.session_id}"

    def add(self, reservation_id: str) -> bool:
        try:
            self.redis.rpush(self.key, reservation_id)
            return True
        except RedisError:
            logger.exception(f"Failed to record reservation {reservation_id} for session {self.session_id}")
            return False

    def ids(self) -> list[str]:
        try:
            members = self.redis.lrange(self.key, 0, -1)
        except RedisError:
            logger.exception(f"Failed to read my reservations for session {self.session_id}")
            return []
        return [m.decode() if isinstance(m, bytes) else m for m in members]

    def __contains__(self, reservation_id: str) -> bool:
        return reservation_id in self.ids()
