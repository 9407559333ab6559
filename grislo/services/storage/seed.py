# grislo/services/storage/seed.py
"""
Static seed tier: bundled read-only JSON files.

  schedule.json         → {"operatingDays": [...]}
  pickupLocations.json  → {"locations": [...]}

Seed files use camelCase keys; records are normalised to snake_case.
Reservations have no seed.
"""

import json
import logging
from pathlib import Path

from pydantic.alias_generators import to_snake

from .collections import Collection
from .tiers import StorageTier, StorageUnavailable

logger = logging.getLogger(__name__)


class SeedTier(StorageTier):
    """Read-only tier over the seed directory."""

    name = "seed"
    writable = False

    def __init__(self, seed_dir: Path):
        self.seed_dir = Path(seed_dir)

    def read(self, collection: Collection) -> list[dict] | None:
        if not collection.seed_file:
            return None

        path = self.seed_dir / collection.seed_file
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return None
        except (OSError, json.JSONDecodeError) as exc:
            raise StorageUnavailable(self.name, f"{path}: {exc}") from exc

        if not isinstance(payload, dict):
            logger.warning(f"Invalid seed format in {path}; expected object")
            return None

        rows = payload.get(collection.seed_section) or []
        return [_normalise(r) for r in rows if isinstance(r, dict)]


def _normalise(record: dict) -> dict:
    return {to_snake(k): v for k, v in record.items()}
