"""
Policy-based placement selector.

Resolves which profile, storage pool and dock satisfy a provisioning request
by matching the profile's capability tags against pool parameters configured
by administrators.

Selections are not reservations: two concurrent callers may be handed the
same pool. Capacity allocation belongs to the provisioning workflow.
"""
import logging
from collections.abc import Mapping
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Optional, Union

from sqlalchemy.orm import Session

from placement.domain import DockSpec, PoolSpec, ProfileSpec
from placement.errors import (
    CollaboratorFailure,
    InvalidArgument,
    NoDefaultProfile,
    NoSupportedDock,
    NoSupportedPool,
    NotFound,
    PlacementError,
)
from placement.store import InMemoryPlacementStore, PlacementStore, SqlPlacementStore
from placement.tags import tag_satisfied

logger = logging.getLogger(__name__)

DEFAULT_PROFILE_NAME = "default"


@contextmanager
def _data_access(operation: str, **context):
    """Re-raise data-access errors with the identifiers involved."""
    try:
        yield
    except PlacementError:
        raise
    except Exception as exc:
        logger.error("When %s %s: %s", operation, context or "", exc)
        raise CollaboratorFailure(operation, context, cause=exc) from exc


# ============================================================================
# DOCK QUERY VARIANTS
# ============================================================================

@dataclass(frozen=True)
class VolumeRef:
    """Resolve the dock backing an existing volume"""
    volume_id: str


@dataclass(frozen=True)
class PoolRef:
    """Resolve the dock owning an already selected pool"""
    pool: PoolSpec


DockQuery = Union[VolumeRef, PoolRef]


@dataclass(frozen=True)
class Placement:
    profile: ProfileSpec
    pool: PoolSpec
    dock: DockSpec


# ============================================================================
# RESOLVERS
# ============================================================================

class ProfileResolver:
    def __init__(self, store: PlacementStore):
        self.store = store

    def resolve_profile(self, profile_id: Optional[str] = None) -> ProfileSpec:
        """
        Resolve a profile by id, or the "default" profile when no id is given.

        Profile names are not unique in storage. If several profiles are named
        "default" the first one listed wins.
        """
        if profile_id:
            with _data_access("get profile", profile_id=profile_id):
                profile = self.store.get_profile(profile_id)
            if profile is None:
                raise NotFound("profile", profile_id)
            return profile

        with _data_access("list profiles"):
            profiles = self.store.list_profiles()

        defaults = [prf for prf in profiles if prf.name == DEFAULT_PROFILE_NAME]
        if not defaults:
            raise NoDefaultProfile(DEFAULT_PROFILE_NAME)
        if len(defaults) > 1:
            logger.warning(
                "Found %d profiles named '%s' (%s), using %s",
                len(defaults), DEFAULT_PROFILE_NAME, ", ".join(prf.id for prf in defaults), defaults[0].id,
            )
        return defaults[0]


class PoolMatcher:
    def __init__(self, store: PlacementStore):
        self.store = store

    @staticmethod
    def pool_supports(pool: PoolSpec, tags: Mapping) -> bool:
        """
        Check every desired tag against the pool parameters.

        A tag whose key is missing from the parameters rejects the pool.
        diskType must match exactly; iops and latency are ceilings; any other
        key is satisfied by presence alone.

        Raises:
            TypeMismatch: a typed tag or parameter holds the wrong kind of value
        """
        return all(tag_satisfied(key, desired, pool.parameters) for key, desired in tags.items())

    def select_supported_pool(self, tags: Mapping[str, Any]) -> PoolSpec:
        """
        Return the first pool, in inventory order, that satisfies all tags.

        Args:
            tags: desired capability tags (key -> str | number)

        Returns:
            The matching pool

        Raises:
            NoSupportedPool: no pool satisfies the tags
        """
        if not isinstance(tags, Mapping):
            raise InvalidArgument(f"Desired tags must be a mapping, got {type(tags).__name__}")
        bad_keys = [key for key in tags if not isinstance(key, str)]
        if bad_keys:
            raise InvalidArgument("Tag keys must be strings", {"keys": [repr(key) for key in bad_keys]})

        with _data_access("list pools"):
            pools = self.store.list_pools()

        for pool in pools:
            if self.pool_supports(pool, tags):
                logger.debug("Pool %s supports tags %s", pool.id, dict(tags))
                return pool

        raise NoSupportedPool(tags)


class DockResolver:
    def __init__(self, store: PlacementStore):
        self.store = store

    def _pool_for_volume(self, volume_id: str) -> PoolSpec:
        with _data_access("get volume", volume_id=volume_id):
            volume = self.store.get_volume(volume_id)
        if volume is None:
            raise NotFound("volume", volume_id)

        with _data_access("get pool", pool_id=volume.pool_id, volume_id=volume_id):
            pool = self.store.get_pool(volume.pool_id)
        if pool is None:
            raise NotFound("pool", volume.pool_id)
        return pool

    def select_dock(self, ref: DockQuery) -> DockSpec:
        """
        Resolve the dock that owns a pool.

        Args:
            ref: VolumeRef (look up the volume, then its pool) or PoolRef
                (use the pool as given). A bare volume id string or PoolSpec
                is accepted as shorthand.

        Raises:
            NotFound: the volume or its pool does not exist
            NoSupportedDock: no dock matches the pool's dock id
            InvalidArgument: ref is neither variant
        """
        if isinstance(ref, str):
            ref = VolumeRef(ref)
        elif isinstance(ref, PoolSpec):
            ref = PoolRef(ref)

        if isinstance(ref, VolumeRef):
            if not isinstance(ref.volume_id, str) or not ref.volume_id:
                raise InvalidArgument(f"Volume id must be a non-empty string, got {ref.volume_id!r}")
            pool = self._pool_for_volume(ref.volume_id)
        elif isinstance(ref, PoolRef):
            if not isinstance(ref.pool, PoolSpec):
                raise InvalidArgument(f"Pool reference must wrap a PoolSpec, got {type(ref.pool).__name__}")
            pool = ref.pool
        else:
            raise InvalidArgument(f"Unsupported dock query: {type(ref).__name__}")

        with _data_access("list docks", pool_id=pool.id):
            docks = self.store.list_docks()

        for dck in docks:
            if dck.id == pool.dock_id:
                return dck

        raise NoSupportedDock(pool.id, pool.dock_id)


# ============================================================================
# FACADE
# ============================================================================

class Selector:
    """
    Profile, pool and dock resolution over one injected data-access store.
    """

    def __init__(self, store: PlacementStore):
        self.store = store
        self.profiles = ProfileResolver(store)
        self.pools = PoolMatcher(store)
        self.docks = DockResolver(store)

    @classmethod
    def from_session(cls, db: Session) -> "Selector":
        return cls(SqlPlacementStore(db))

    def select_profile(self, profile_id: Optional[str] = None) -> ProfileSpec:
        return self.profiles.resolve_profile(profile_id)

    def select_supported_pool(self, tags: Mapping[str, Any]) -> PoolSpec:
        return self.pools.select_supported_pool(tags)

    def select_dock(self, ref: DockQuery) -> DockSpec:
        return self.docks.select_dock(ref)

    def get_pool(self, pool_id: str) -> PoolSpec:
        with _data_access("get pool", pool_id=pool_id):
            pool = self.store.get_pool(pool_id)
        if pool is None:
            raise NotFound("pool", pool_id)
        return pool

    def plan_placement(self, profile_id: Optional[str] = None) -> Placement:
        """Profile -> pool satisfying its tags -> dock owning that pool."""
        profile = self.select_profile(profile_id)
        pool = self.select_supported_pool(profile.tags)
        dock = self.select_dock(PoolRef(pool))
        logger.info("Placement for profile %s: pool %s on dock %s", profile.id, pool.id, dock.id)
        return Placement(profile=profile, pool=pool, dock=dock)


def new_fake_selector(profiles=(), pools=(), docks=(), volumes=()) -> Selector:
    """Selector over an in-memory inventory"""
    return Selector(InMemoryPlacementStore(profiles, pools, docks, volumes))
