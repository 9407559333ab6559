"""
Bootstrap the remote store.

Creates the schedule / reservations / pickup_locations tables and reports
what each storage tier currently serves.

Usage:
    python scripts/init_db.py
"""

from grislo.config import settings
from grislo.database import init_db
from grislo.deps import get_chain
from grislo.services.storage import COLLECTIONS


def main():
    print(f"Using DB: {settings.resolved_database_url}")
    init_db()
    print("✔ Tables ready")

    chain = get_chain()
    for kind in COLLECTIONS:
        rows = chain.load(kind)
        print(f"{kind}: {len(rows)} records")


if __name__ == "__main__":
    main()
