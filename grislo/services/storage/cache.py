# grislo/services/storage/cache.py
"""
Local cache tier backed by Redis.

Key format: grislo:{collection}
Value: JSON array of records (the whole collection).

Mutations are read-modify-write of the full list; collections are small
(hundreds of records).
"""

import json
import logging

from redis import Redis
from redis.exceptions import RedisError

from .collections import Collection
from .tiers import StorageTier, StorageUnavailable

logger = logging.getLogger(__name__)


class CacheTier(StorageTier):
    """Redis wrapper storing each collection as one JSON string."""

    name = "cache"

    def __init__(self, redis: Redis):
        self.redis = redis

    # ── Read ─────────────────────────────────────────────────────────────

    def read(self, collection: Collection) -> list[dict] | None:
        try:
            raw = self.redis.get(collection.cache_key)
        except RedisError as exc:
            raise StorageUnavailable(self.name, str(exc)) from exc

        if raw is None:
            return None
        if isinstance(raw, bytes):
            raw = raw.decode()

        try:
            payload = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning(f"Corrupt cache value at {collection.cache_key}, ignoring")
            return None

        if not isinstance(payload, list):
            logger.warning(
                f"Invalid cache format at {collection.cache_key}; "
                f"expected list, got {type(payload).__name__}"
            )
            return None
        return payload

    # ── Write ────────────────────────────────────────────────────────────

    def replace(self, collection: Collection, rows: list[dict]) -> None:
        try:
            self.redis.set(
                collection.cache_key,
                json.dumps(list(rows), ensure_ascii=False, default=str),
            )
        except RedisError as exc:
            raise StorageUnavailable(self.name, str(exc)) from exc

    def upsert(self, collection: Collection, row: dict) -> None:
        rows = self.read(collection) or []
        key_value = row.get(collection.key)
        for i, existing in enumerate(rows):
            if existing.get(collection.key) == key_value:
                rows[i] = dict(row)
                break
        else:
            rows.append(dict(row))
        self.replace(collection, rows)

    def insert(self, collection: Collection, row: dict) -> None:
        rows = self.read(collection) or []
        rows.append(dict(row))
        self.replace(collection, rows)

    def update(self, collection: Collection, key: str, changes: dict) -> bool:
        rows = self.read(collection) or []
        for existing in rows:
            if existing.get(collection.key) == key:
                existing.update(changes)
                self.replace(collection, rows)
                return True
        return False

    def delete(self, collection: Collection, key: str) -> bool:
        rows = self.read(collection) or []
        kept = [r for r in rows if r.get(collection.key) != key]
        if len(kept) == len(rows):
            return False
        self.replace(collection, kept)
        return True
