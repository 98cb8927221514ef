"""
Tests for store.py and inventory.py - SQL-backed inventory reads.
"""

import pytest
from sqlalchemy import select
from sqlalchemy.exc import OperationalError

from placement.domain import PoolSpec, ProfileSpec
from placement.errors import CollaboratorFailure, NoDefaultProfile, NoSupportedDock, NoSupportedPool
from placement.inventory import load_inventory
from placement.models import Base, Profile, StoragePool
from placement.services.selector import PoolRef, Selector, VolumeRef
from placement.store import SqlPlacementStore


class TestLoadInventory:
    """Test seeding the database."""

    def test_counts(self, db_session, scenario_inventory):
        counts = load_inventory(db_session, scenario_inventory)
        assert counts == {"profiles": 2, "docks": 1, "pools": 1, "volumes": 1}

    def test_missing_sections_are_empty(self, db_session):
        counts = load_inventory(db_session, {"docks": [{"name": "only-dock"}]})
        assert counts == {"profiles": 0, "docks": 1, "pools": 0, "volumes": 0}

    def test_generated_ids(self, db_session):
        load_inventory(db_session, {"profiles": [{"name": "default", "tags": {}}]})
        row = db_session.scalars(select(Profile)).one()
        assert len(row.id) == 36

    def test_failure_rolls_back(self, db_session):
        bad = {"profiles": [{"id": "p1", "name": "default"}, {"id": "p1", "name": "dup"}]}
        with pytest.raises(Exception):
            load_inventory(db_session, bad)
        assert db_session.scalars(select(Profile)).all() == []


class TestSqlPlacementStore:
    """Test row to record conversion and ordering."""

    def test_get_profile(self, seeded_session):
        prf = SqlPlacementStore(seeded_session).get_profile("p1")
        assert prf == ProfileSpec("p1", "default", {"diskType": "ssd", "iops": 100})

    def test_get_missing_returns_none(self, seeded_session):
        store = SqlPlacementStore(seeded_session)
        assert store.get_profile("nope") is None
        assert store.get_pool("nope") is None
        assert store.get_volume("nope") is None

    def test_json_parameters_round_trip(self, seeded_session):
        pool = SqlPlacementStore(seeded_session).get_pool("pl1")
        assert isinstance(pool, PoolSpec)
        assert dict(pool.parameters) == {"diskType": "ssd", "iops": 500}
        assert pool.dock_id == "d1"

    def test_volume_pool_reference(self, seeded_session):
        assert SqlPlacementStore(seeded_session).get_volume("v1").pool_id == "pl1"

    def test_listing_follows_insertion_order(self, db_session):
        load_inventory(db_session, {"pools": [
            {"id": "zz", "name": "first", "dock_id": "d1", "parameters": {}},
            {"id": "aa", "name": "second", "dock_id": "d1", "parameters": {}},
        ]})
        assert [p.id for p in SqlPlacementStore(db_session).list_pools()] == ["zz", "aa"]

    def test_empty_parameters(self, db_session):
        db_session.add(StoragePool(id="pl0", name="bare", dock_id="d1", parameters={}))
        db_session.commit()
        assert dict(SqlPlacementStore(db_session).get_pool("pl0").parameters) == {}


class TestSelectorOverSql:
    """Test the resolution flow against SQLite."""

    def test_scenario(self, seeded_session):
        selector = Selector.from_session(seeded_session)

        assert selector.select_profile("").id == "p1"
        pool = selector.select_supported_pool({"diskType": "ssd", "iops": 100})
        assert pool.id == "pl1"
        assert selector.select_dock(PoolRef(pool)).id == "d1"
        assert selector.select_dock(VolumeRef("v1")).id == "d1"
        with pytest.raises(NoSupportedPool):
            selector.select_supported_pool({"diskType": "hdd"})

    def test_removing_default_profile(self, seeded_session):
        seeded_session.delete(seeded_session.get(Profile, "p1"))
        seeded_session.commit()
        with pytest.raises(NoDefaultProfile):
            Selector.from_session(seeded_session).select_profile()

    def test_pool_dock_missing_from_inventory(self, seeded_session):
        seeded_session.get(StoragePool, "pl1").dock_id = "d404"
        seeded_session.commit()
        with pytest.raises(NoSupportedDock):
            Selector.from_session(seeded_session).select_dock(VolumeRef("v1"))

    def test_database_error_is_wrapped(self, db_engine, db_session):
        Base.metadata.drop_all(bind=db_engine)
        with pytest.raises(CollaboratorFailure) as exc_info:
            Selector.from_session(db_session).select_supported_pool({})
        assert isinstance(exc_info.value.__cause__, OperationalError)
