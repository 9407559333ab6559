# grislo/services/storage/collections.py
"""
Logical collections served by the storage chain.

Each collection has the same JSON-shaped record format on every tier
(snake_case keys, ISO dates/timestamps).
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Collection:
    """
    Attributes:
        kind: Collection name ("schedule", "reservations", "pickup_locations")
        key: Primary key field of a record
        cache_key: Fixed key of the list in the local cache
        order_by: Field the remote store sorts by
        descending: Sort direction for order_by
        only_available: Remote select filters available = true
        seed_file: Bundled JSON file, or None when the kind has no seed
        seed_section: Top-level key inside seed_file holding the list
        accept_empty: An empty list from a tier is authoritative
    """
    kind: str
    key: str
    cache_key: str
    order_by: str
    descending: bool = False
    only_available: bool = False
    seed_file: str | None = None
    seed_section: str | None = None
    accept_empty: bool = False


SCHEDULE = Collection(
    kind="schedule",
    key="date",
    cache_key="grislo:schedule",
    order_by="date",
    only_available=True,
    seed_file="schedule.json",
    seed_section="operatingDays",
)

RESERVATIONS = Collection(
    kind="reservations",
    key="id",
    cache_key="grislo:reservations",
    order_by="created_at",
    descending=True,
    accept_empty=True,
)

PICKUP_LOCATIONS = Collection(
    kind="pickup_locations",
    key="id",
    cache_key="grislo:locations",
    order_by="sort_order",
    seed_file="pickupLocations.json",
    seed_section="locations",
)

COLLECTIONS: dict[str, Collection] = {
    c.kind: c for c in (SCHEDULE, RESERVATIONS, PICKUP_LOCATIONS)
}


def get_collection(kind: "str | Collection") -> Collection:
    """Resolve a collection by name."""
    if isinstance(kind, Collection):
        return kind
    try:
        return COLLECTIONS[kind]
    except KeyError:
        raise ValueError(f"Unknown collection kind: {kind!r}") from None
