# grislo/services/reservations/ids.py
"""
Identifier generation.

Reservation: RES-YYYYMMDD-NNN (creation day + 3-digit random suffix)
Pickup location: loc_<epoch ms>_<9 base36 chars>
"""

import random
import string
import time
from datetime import date
from typing import Container

_BASE36 = string.digits + string.ascii_lowercase

# Give up on collision avoidance after this many draws; the id is still valid
MAX_DRAWS = 50


def generate_reservation_id(
    created_on: date,
    taken: Container[str] = (),
    rng: random.Random | None = None,
) -> str:
    """
    Generate a reservation id, re-drawing the suffix while it collides
    with an id already known to the caller.

    Ids are not globally unique: two clients drawing the same suffix on the
    same day with different snapshots can still collide.
    """
    rng = rng or random
    prefix = f"RES-{created_on.strftime('%Y%m%d')}"
    candidate = f"{prefix}-{rng.randrange(1000):03d}"
    for _ in range(MAX_DRAWS):
        if candidate not in taken:
            break
        candidate = f"{prefix}-{rng.randrange(1000):03d}"
    return candidate


def generate_location_id(rng: random.Random | None = None) -> str:
    rng = rng or random
    suffix = "".join(rng.choice(_BASE36) for _ in range(9))
    return f"loc_{int(time.time() * 1000)}_{suffix}"
