# grislo/services/storage/tiers.py
"""
Storage tier interface.

A tier either answers or raises StorageUnavailable; it never decides what
happens next. Precedence and propagation live in StorageChain.
"""

from .collections import Collection


class StorageUnavailable(Exception):
    """A tier could not be reached, is not configured, or is read-only."""

    def __init__(self, tier: str, reason: str):
        super().__init__(f"{tier}: {reason}")
        self.tier = tier
        self.reason = reason


class StorageTier:
    """Base class for one storage tier."""

    name = "tier"
    writable = True

    def read(self, collection: Collection) -> list[dict] | None:
        """
        Read all records of a collection.

        Returns:
            List of records, or None when the tier holds nothing for it.
        """
        raise NotImplementedError

    def replace(self, collection: Collection, rows: list[dict]) -> None:
        """Overwrite the whole collection."""
        raise StorageUnavailable(self.name, "replace not supported")

    def upsert(self, collection: Collection, row: dict) -> None:
        """Insert or replace one record by key."""
        raise StorageUnavailable(self.name, "upsert not supported")

    def insert(self, collection: Collection, row: dict) -> None:
        """Insert one new record."""
        raise StorageUnavailable(self.name, "insert not supported")

    def update(self, collection: Collection, key: str, changes: dict) -> bool:
        """Apply field changes to one record. Returns False when key is absent."""
        raise StorageUnavailable(self.name, "update not supported")

    def delete(self, collection: Collection, key: str) -> bool:
        """Delete one record. Returns False when key is absent."""
        raise StorageUnavailable(self.name, "delete not supported")

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.name}>"
