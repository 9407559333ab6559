import json

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from grislo.services.storage import (
    PICKUP_LOCATIONS,
    RESERVATIONS,
    SCHEDULE,
    CacheTier,
    RemoteTier,
    SeedTier,
    StorageChain,
    StorageTier,
    StorageUnavailable,
    get_collection,
)


def _reservation(id_, created_at="2026-10-18T10:00:00", **overrides):
    record = {
        "id": id_,
        "name": "Aさん",
        "display_name": "Aさん",
        "date": "2026-10-20",
        "time": "09:00",
        "pickup_location": "loc_station",
        "notes": "",
        "status": "confirmed",
        "created_at": created_at,
    }
    record.update(overrides)
    return record


class ExplodingTier(StorageTier):
    name = "exploding"

    def read(self, collection):
        raise RuntimeError("boom")

    def insert(self, collection, row):
        raise RuntimeError("boom")


# ── Load precedence ──────────────────────────────────────────────────────


def test_load_falls_back_to_seed_when_remote_and_cache_empty(chain):
    rows = chain.load(SCHEDULE)

    assert [r["date"] for r in rows] == ["2026-10-20", "2026-10-21", "2026-10-22", "2026-10-23"]
    # camelCase seed keys are normalised
    assert rows[0]["time_slots"] == ["09:00", "10:00"]


def test_seed_result_is_not_mirrored_upwards(chain, redis):
    chain.load(SCHEDULE)

    assert redis.get(SCHEDULE.cache_key) is None


def test_remote_result_wins_and_is_mirrored_into_cache(chain, redis):
    chain.save(SCHEDULE, {"date": "2026-11-01", "time_slots": ["09:00"], "available": True})
    redis.flushall()

    rows = chain.load(SCHEDULE)

    assert rows == [{"date": "2026-11-01", "time_slots": ["09:00"], "available": True}]
    assert json.loads(redis.get(SCHEDULE.cache_key)) == rows


def test_remote_read_excludes_unavailable_days(chain):
    chain.save(SCHEDULE, {"date": "2026-11-01", "time_slots": None, "available": True})
    chain.save(SCHEDULE, {"date": "2026-11-02", "time_slots": ["09:00"], "available": False})

    rows = chain.tier("remote").read(SCHEDULE)

    assert [r["date"] for r in rows] == ["2026-11-01"]
    assert rows[0]["time_slots"] is None


def test_cache_serves_when_remote_disabled(chain):
    chain.tier("remote").enabled = False
    chain.tier("cache").replace(PICKUP_LOCATIONS, [{"id": "loc_x", "name": "X", "sort_order": 1}])

    rows = chain.load(PICKUP_LOCATIONS)

    assert rows == [{"id": "loc_x", "name": "X", "sort_order": 1}]


def test_remote_error_degrades_to_next_tier(redis, seed_dir):
    # No tables created: every query fails inside the remote tier
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    remote = RemoteTier(sessionmaker(bind=engine))
    chain = StorageChain([remote, CacheTier(redis), SeedTier(seed_dir)])

    with pytest.raises(StorageUnavailable):
        remote.read(PICKUP_LOCATIONS)

    rows = chain.load(PICKUP_LOCATIONS)
    assert [r["id"] for r in rows] == ["loc_station", "loc_cityhall"]


def test_unexpected_tier_error_is_contained(redis, seed_dir):
    chain = StorageChain([ExplodingTier(), CacheTier(redis), SeedTier(seed_dir)])

    rows = chain.load(PICKUP_LOCATIONS)

    assert len(rows) == 2


def test_empty_reservations_from_remote_are_authoritative(chain, redis):
    chain.tier("cache").replace(RESERVATIONS, [_reservation("RES-20261018-001")])

    rows = chain.load(RESERVATIONS)

    assert rows == []
    # stale cache overwritten by the authoritative empty result
    assert json.loads(redis.get(RESERVATIONS.cache_key)) == []


def test_empty_schedule_from_remote_is_not_authoritative(chain):
    assert chain.tier("remote").read(SCHEDULE) == []
    assert len(chain.load(SCHEDULE)) == 4


def test_load_returns_empty_when_no_tier_has_data(session_factory, redis, tmp_path):
    chain = StorageChain([RemoteTier(session_factory), CacheTier(redis), SeedTier(tmp_path)])

    assert chain.load(SCHEDULE) == []
    assert chain.load(PICKUP_LOCATIONS) == []


def test_reservations_are_read_newest_first(chain):
    chain.insert(RESERVATIONS, _reservation("RES-1", created_at="2026-10-18T09:00:00"))
    chain.insert(RESERVATIONS, _reservation("RES-2", created_at="2026-10-18T11:00:00"))

    rows = chain.tier("remote").read(RESERVATIONS)

    assert [r["id"] for r in rows] == ["RES-2", "RES-1"]


# ── Writes ───────────────────────────────────────────────────────────────


def test_insert_writes_every_writable_tier(chain):
    outcome = chain.insert(RESERVATIONS, _reservation("RES-20261018-001"))

    assert outcome.ok
    assert outcome.results == {"remote": True, "cache": True}
    assert outcome.unavailable == []
    assert chain.tier("remote").read(RESERVATIONS)[0]["id"] == "RES-20261018-001"
    assert chain.tier("cache").read(RESERVATIONS)[0]["id"] == "RES-20261018-001"


def test_failed_tier_does_not_roll_back_others(chain):
    chain.tier("remote").enabled = False

    outcome = chain.insert(RESERVATIONS, _reservation("RES-20261018-002"))

    assert outcome.ok
    assert outcome.succeeded("cache")
    assert not outcome.succeeded("remote")
    assert outcome.unavailable == ["remote"]
    assert [r["id"] for r in chain.tier("cache").read(RESERVATIONS)] == ["RES-20261018-002"]


def test_unexpected_write_error_is_recorded(redis, seed_dir):
    chain = StorageChain([ExplodingTier(), CacheTier(redis), SeedTier(seed_dir)])

    outcome = chain.insert(RESERVATIONS, _reservation("RES-3"))

    assert outcome.results == {"exploding": False, "cache": True}
    assert outcome.unavailable == ["exploding"]


def test_update_applies_changes_by_key(chain):
    chain.insert(RESERVATIONS, _reservation("RES-4"))

    outcome = chain.update(RESERVATIONS, "RES-4", {"status": "cancelled"})

    assert outcome.results == {"remote": True, "cache": True}
    assert chain.tier("remote").read(RESERVATIONS)[0]["status"] == "cancelled"
    assert chain.tier("cache").read(RESERVATIONS)[0]["status"] == "cancelled"


def test_update_unknown_key_reports_not_applied(chain):
    outcome = chain.update(RESERVATIONS, "RES-missing", {"status": "cancelled"})

    assert not outcome.ok
    assert outcome.unavailable == []


def test_save_upserts_by_key(chain):
    chain.save(PICKUP_LOCATIONS, {"id": "loc_a", "name": "A", "address": "", "sort_order": 1})
    chain.save(PICKUP_LOCATIONS, {"id": "loc_a", "name": "A2", "address": "", "sort_order": 1})

    assert [r["name"] for r in chain.tier("remote").read(PICKUP_LOCATIONS)] == ["A2"]
    assert [r["name"] for r in chain.tier("cache").read(PICKUP_LOCATIONS)] == ["A2"]


def test_delete_removes_from_every_tier(chain):
    chain.save(PICKUP_LOCATIONS, {"id": "loc_a", "name": "A", "address": "", "sort_order": 1})

    outcome = chain.delete(PICKUP_LOCATIONS, "loc_a")

    assert outcome.results == {"remote": True, "cache": True}
    assert chain.tier("remote").read(PICKUP_LOCATIONS) == []
    assert chain.tier("cache").read(PICKUP_LOCATIONS) == []


def test_seed_tier_is_never_written(chain):
    outcome = chain.save(SCHEDULE, {"date": "2026-11-01", "time_slots": None, "available": True})

    assert "seed" not in outcome.results


# ── Tiers ────────────────────────────────────────────────────────────────


def test_cache_ignores_corrupt_value(redis):
    redis.set(SCHEDULE.cache_key, "{not json")

    assert CacheTier(redis).read(SCHEDULE) is None


def test_cache_ignores_non_list_value(redis):
    redis.set(SCHEDULE.cache_key, json.dumps({"date": "2026-10-20"}))

    assert CacheTier(redis).read(SCHEDULE) is None


def test_seed_tier_without_file_returns_none(tmp_path):
    assert SeedTier(tmp_path).read(SCHEDULE) is None


def test_seed_tier_has_no_reservations(seed_dir):
    assert SeedTier(seed_dir).read(RESERVATIONS) is None


def test_seed_tier_reports_corrupt_file(tmp_path):
    (tmp_path / "schedule.json").write_text("[", encoding="utf-8")

    with pytest.raises(StorageUnavailable):
        SeedTier(tmp_path).read(SCHEDULE)


def test_disabled_remote_is_unavailable():
    with pytest.raises(StorageUnavailable):
        RemoteTier(None).read(SCHEDULE)


def test_unknown_collection_kind():
    with pytest.raises(ValueError):
        get_collection("drivers")


# ── Materialize ──────────────────────────────────────────────────────────


def test_materialize_copies_seed_into_writable_tiers(chain):
    rows = chain.materialize(PICKUP_LOCATIONS)

    assert [r["id"] for r in rows] == ["loc_station", "loc_cityhall"]
    assert [r["id"] for r in chain.tier("remote").read(PICKUP_LOCATIONS)] == ["loc_station", "loc_cityhall"]
    assert [r["id"] for r in chain.tier("cache").read(PICKUP_LOCATIONS)] == ["loc_station", "loc_cityhall"]


def test_materialize_leaves_populated_tiers_alone(chain):
    chain.save(PICKUP_LOCATIONS, {"id": "loc_a", "name": "A", "address": "", "sort_order": 1})

    chain.materialize(PICKUP_LOCATIONS)

    assert [r["id"] for r in chain.tier("remote").read(PICKUP_LOCATIONS)] == ["loc_a"]


def test_materialize_then_save_keeps_the_rest_of_the_collection(chain):
    chain.materialize(SCHEDULE)
    chain.save(SCHEDULE, {"date": "2026-10-25", "time_slots": ["09:00"], "available": True})

    dates = [r["date"] for r in chain.load(SCHEDULE)]

    assert dates == ["2026-10-20", "2026-10-21", "2026-10-23", "2026-10-25"]


def test_materialize_skips_unavailable_remote(chain):
    chain.tier("remote").enabled = False

    rows = chain.materialize(SCHEDULE)

    assert len(rows) == 4
    assert len(chain.tier("cache").read(SCHEDULE)) == 4


def test_remote_replace_overwrites_collection(chain):
    remote = chain.tier("remote")
    remote.upsert(PICKUP_LOCATIONS, {"id": "loc_old", "name": "old", "address": "", "sort_order": 1})

    remote.replace(PICKUP_LOCATIONS, [{"id": "loc_new", "name": "new", "address": "", "sort_order": 1}])

    assert [r["id"] for r in remote.read(PICKUP_LOCATIONS)] == ["loc_new"]
