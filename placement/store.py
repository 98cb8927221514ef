"""
Read-only data access for the placement selector.

``PlacementStore`` is the collaborator contract; ``SqlPlacementStore`` reads
the inventory tables through a SQLAlchemy session and ``InMemoryPlacementStore``
holds records in lists for tests and dry runs.
"""
from typing import Iterable, List, Optional, Protocol

from sqlalchemy import select
from sqlalchemy.orm import Session

from placement.domain import DockSpec, PoolSpec, ProfileSpec, VolumeSpec
from placement.models import Dock, Profile, StoragePool, Volume


class PlacementStore(Protocol):
    """Entities absent from the store come back as None, never raise."""

    def list_profiles(self) -> List[ProfileSpec]: ...

    def get_profile(self, profile_id: str) -> Optional[ProfileSpec]: ...

    def list_pools(self) -> List[PoolSpec]: ...

    def get_pool(self, pool_id: str) -> Optional[PoolSpec]: ...

    def list_docks(self) -> List[DockSpec]: ...

    def get_volume(self, volume_id: str) -> Optional[VolumeSpec]: ...


# ============================================================================
# ROW -> RECORD CONVERSION
# ============================================================================

def profile_spec(row: Profile) -> ProfileSpec:
    return ProfileSpec(id=row.id, name=row.name, tags=row.tags or {})


def pool_spec(row: StoragePool) -> PoolSpec:
    return PoolSpec(id=row.id, dock_id=row.dock_id, parameters=row.parameters or {}, name=row.name or "")


def dock_spec(row: Dock) -> DockSpec:
    return DockSpec(id=row.id, name=row.name or "", endpoint=row.endpoint or "")


def volume_spec(row: Volume) -> VolumeSpec:
    return VolumeSpec(id=row.id, pool_id=row.pool_id, name=row.name or "")


# ============================================================================
# SQL STORE
# ============================================================================

class SqlPlacementStore:
    """
    Inventory reader backed by a SQLAlchemy session.

    Listings are ordered by creation time, then id, so enumeration order is
    insertion order.
    """

    def __init__(self, db: Session):
        self.db = db

    def list_profiles(self) -> List[ProfileSpec]:
        rows = self.db.scalars(select(Profile).order_by(Profile.created_at, Profile.id)).all()
        return [profile_spec(row) for row in rows]

    def get_profile(self, profile_id: str) -> Optional[ProfileSpec]:
        row = self.db.get(Profile, profile_id)
        return profile_spec(row) if row else None

    def list_pools(self) -> List[PoolSpec]:
        rows = self.db.scalars(select(StoragePool).order_by(StoragePool.created_at, StoragePool.id)).all()
        return [pool_spec(row) for row in rows]

    def get_pool(self, pool_id: str) -> Optional[PoolSpec]:
        row = self.db.get(StoragePool, pool_id)
        return pool_spec(row) if row else None

    def list_docks(self) -> List[DockSpec]:
        rows = self.db.scalars(select(Dock).order_by(Dock.created_at, Dock.id)).all()
        return [dock_spec(row) for row in rows]

    def get_volume(self, volume_id: str) -> Optional[VolumeSpec]:
        row = self.db.get(Volume, volume_id)
        return volume_spec(row) if row else None


# ============================================================================
# IN-MEMORY STORE
# ============================================================================

class InMemoryPlacementStore:
    """List-backed store; enumeration order is the order records were given."""

    def __init__(
        self,
        profiles: Iterable[ProfileSpec] = (),
        pools: Iterable[PoolSpec] = (),
        docks: Iterable[DockSpec] = (),
        volumes: Iterable[VolumeSpec] = (),
    ):
        self.profiles = list(profiles)
        self.pools = list(pools)
        self.docks = list(docks)
        self.volumes = list(volumes)

    @staticmethod
    def _find(items, entity_id):
        return next((item for item in items if item.id == entity_id), None)

    def list_profiles(self) -> List[ProfileSpec]:
        return list(self.profiles)

    def get_profile(self, profile_id: str) -> Optional[ProfileSpec]:
        return self._find(self.profiles, profile_id)

    def list_pools(self) -> List[PoolSpec]:
        return list(self.pools)

    def get_pool(self, pool_id: str) -> Optional[PoolSpec]:
        return self._find(self.pools, pool_id)

    def list_docks(self) -> List[DockSpec]:
        return list(self.docks)

    def get_volume(self, volume_id: str) -> Optional[VolumeSpec]:
        return self._find(self.volumes, volume_id)
