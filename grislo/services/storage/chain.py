# grislo/services/storage/chain.py
"""
Storage fallback chain.

Tiers are composed as a prioritized list (remote → cache → seed):

  load:  first tier with a usable result wins; the result is mirrored
         (write-through) into every writable tier below it.
  write: every writable tier is written independently. A failure in one
         tier never rolls back another; divergence is reconciled by the
         next successful remote load.

Nothing here raises for storage failures: reads degrade to the next tier
(or []), writes report per-tier outcome.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from redis import Redis
from sqlalchemy.orm import sessionmaker

from .cache import CacheTier
from .collections import Collection, get_collection
from .remote import RemoteTier
from .seed import SeedTier
from .tiers import StorageTier, StorageUnavailable

logger = logging.getLogger(__name__)


@dataclass
class WriteOutcome:
    """
    Result of a write across tiers.

    Attributes:
        results: tier name → True when the tier applied the write
        unavailable: tier names that could not be reached
    """
    results: dict[str, bool] = field(default_factory=dict)
    unavailable: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        """At least one tier applied the write."""
        return any(self.results.values())

    def succeeded(self, tier_name: str) -> bool:
        return self.results.get(tier_name, False)


class StorageChain:
    """Single logical read/write surface over prioritized tiers."""

    def __init__(self, tiers: list[StorageTier]):
        self.tiers = list(tiers)

    def tier(self, name: str) -> StorageTier | None:
        for t in self.tiers:
            if t.name == name:
                return t
        return None

    # ── Read ─────────────────────────────────────────────────────────────

    def load(self, kind: "str | Collection") -> list[dict]:
        """
        Load a collection from the highest-precedence usable tier.

        Returns:
            List of records; [] when no tier has data.
        """
        collection = get_collection(kind)

        for index, tier in enumerate(self.tiers):
            try:
                rows = tier.read(collection)
            except StorageUnavailable as exc:
                logger.warning(f"{collection.kind} read unavailable on {tier.name}: {exc.reason}")
                continue
            except Exception:
                logger.exception(f"{collection.kind} read failed on {tier.name}")
                continue

            if rows is None:
                continue
            if not rows and not collection.accept_empty:
                continue

            logger.debug(f"Loaded {len(rows)} {collection.kind} from {tier.name}")
            self._mirror(collection, rows, self.tiers[index + 1:])
            return rows

        logger.info(f"No tier has {collection.kind}, returning empty")
        return []

    def _mirror(self, collection: Collection, rows: list[dict], below: list[StorageTier]) -> None:
        """Overwrite lower-precedence writable tiers with a fresher result."""
        for tier in below:
            if not tier.writable:
                continue
            try:
                tier.replace(collection, rows)
            except StorageUnavailable as exc:
                logger.warning(f"{collection.kind} mirror to {tier.name} skipped: {exc.reason}")
            except Exception:
                logger.exception(f"{collection.kind} mirror to {tier.name} failed")

    # ── Write ────────────────────────────────────────────────────────────

    def materialize(self, kind: "str | Collection") -> list[dict]:
        """
        Copy the loaded collection into writable tiers that hold none of it.

        Run before editing a collection record by record: a tier that only
        receives the edited record would otherwise shadow the rest of the
        collection (e.g. seed-only operating days) on the next load.

        Returns:
            The loaded records.
        """
        collection = get_collection(kind)
        rows = self.load(collection)
        if not rows:
            return rows

        for tier in self.tiers:
            if not tier.writable:
                continue
            try:
                if tier.read(collection):
                    continue
                tier.replace(collection, rows)
                logger.info(f"Materialized {len(rows)} {collection.kind} into {tier.name}")
            except StorageUnavailable as exc:
                logger.warning(f"{collection.kind} materialize on {tier.name} skipped: {exc.reason}")
            except Exception:
                logger.exception(f"{collection.kind} materialize on {tier.name} failed")
        return rows

    def save(self, kind: "str | Collection", record: dict) -> WriteOutcome:
        """Upsert one record by key into every writable tier."""
        collection = get_collection(kind)
        return self._write(collection, "upsert", lambda t: t.upsert(collection, record))

    def insert(self, kind: "str | Collection", record: dict) -> WriteOutcome:
        """Insert one new record into every writable tier."""
        collection = get_collection(kind)
        return self._write(collection, "insert", lambda t: t.insert(collection, record))

    def update(self, kind: "str | Collection", key: str, changes: dict) -> WriteOutcome:
        """Apply field changes to one record in every writable tier."""
        collection = get_collection(kind)
        return self._write(collection, "update", lambda t: t.update(collection, key, changes))

    def delete(self, kind: "str | Collection", key: str) -> WriteOutcome:
        """Delete one record from every writable tier."""
        collection = get_collection(kind)
        return self._write(collection, "delete", lambda t: t.delete(collection, key))

    def _write(self, collection: Collection, op: str, apply) -> WriteOutcome:
        outcome = WriteOutcome()
        for tier in self.tiers:
            if not tier.writable:
                continue
            try:
                applied = apply(tier)
                # upsert/insert return None; update/delete report whether the key matched
                outcome.results[tier.name] = True if applied is None else bool(applied)
            except StorageUnavailable as exc:
                logger.warning(f"{collection.kind} {op} unavailable on {tier.name}: {exc.reason}")
                outcome.results[tier.name] = False
                outcome.unavailable.append(tier.name)
            except Exception:
                logger.exception(f"{collection.kind} {op} failed on {tier.name}")
                outcome.results[tier.name] = False
                outcome.unavailable.append(tier.name)
        return outcome


def build_storage_chain(
    session_factory: sessionmaker | None,
    redis: Redis,
    seed_dir: Path,
    remote_enabled: bool = True,
) -> StorageChain:
    """Compose the standard remote → cache → seed chain."""
    return StorageChain([
        RemoteTier(session_factory, enabled=remote_enabled),
        CacheTier(redis),
        SeedTier(seed_dir),
    ])
