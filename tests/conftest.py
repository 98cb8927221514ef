"""
Pytest configuration and shared fixtures.
"""

import pytest
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from placement.database import build_engine, init_db
from placement.domain import DockSpec, PoolSpec, ProfileSpec, VolumeSpec
from placement.inventory import load_inventory
from placement.store import InMemoryPlacementStore


@pytest.fixture
def scenario_inventory():
    """One default profile, one ssd pool on dock d1, one volume on that pool."""
    return {
        "profiles": [
            {"id": "p1", "name": "default", "tags": {"diskType": "ssd", "iops": 100}},
            {"id": "p2", "name": "gold", "tags": {"diskType": "ssd", "iops": 1000}},
        ],
        "docks": [{"id": "d1", "name": "lvm-dock", "endpoint": "10.0.0.10:50050"}],
        "pools": [
            {"id": "pl1", "name": "ssd-pool", "dock_id": "d1", "parameters": {"diskType": "ssd", "iops": 500}},
        ],
        "volumes": [{"id": "v1", "name": "vol-001", "pool_id": "pl1"}],
    }


@pytest.fixture
def memory_store(scenario_inventory) -> InMemoryPlacementStore:
    inv = scenario_inventory
    return InMemoryPlacementStore(
        profiles=[ProfileSpec(p["id"], p["name"], p["tags"]) for p in inv["profiles"]],
        pools=[PoolSpec(p["id"], p["dock_id"], p["parameters"], name=p["name"]) for p in inv["pools"]],
        docks=[DockSpec(d["id"], d["name"], d["endpoint"]) for d in inv["docks"]],
        volumes=[VolumeSpec(v["id"], v["pool_id"], v["name"]) for v in inv["volumes"]],
    )


@pytest.fixture
def db_engine():
    """In-memory SQLite shared across threads (TestClient runs handlers in a pool)."""
    engine = build_engine("sqlite://", poolclass=StaticPool)
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=db_engine)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def seeded_session(db_session, scenario_inventory):
    load_inventory(db_session, scenario_inventory)
    return db_session


class FailingStore:
    """Store whose every call raises, to exercise collaborator failure paths."""

    def __init__(self, exc: Exception):
        self.exc = exc

    def _fail(self, *args, **kwargs):
        raise self.exc

    list_profiles = get_profile = list_pools = get_pool = list_docks = get_volume = _fail


@pytest.fixture
def failing_store():
    return FailingStore(ConnectionError("database unreachable"))
