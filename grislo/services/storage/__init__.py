# grislo/services/storage/__init__.py
"""
Storage fallback chain.

Tier 1: Remote store (SQLAlchemy, authoritative)
Tier 2: Local cache (Redis, write-through mirror)
Tier 3: Static seed files (read-only bootstrap)
"""

from .collections import (
    Collection,
    COLLECTIONS,
    SCHEDULE,
    RESERVATIONS,
    PICKUP_LOCATIONS,
    get_collection,
)
from .tiers import StorageTier, StorageUnavailable
from .remote import RemoteTier
from .cache import CacheTier
from .seed import SeedTier
from .chain import StorageChain, WriteOutcome, build_storage_chain

__all__ = [
    "Collection",
    "COLLECTIONS",
    "SCHEDULE",
    "RESERVATIONS",
    "PICKUP_LOCATIONS",
    "get_collection",
    "StorageTier",
    "StorageUnavailable",
    "RemoteTier",
    "CacheTier",
    "SeedTier",
    "StorageChain",
    "WriteOutcome",
    "build_storage_chain",
]
