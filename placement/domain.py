"""
Immutable entity records read by the selector.

The selector never writes: rows coming out of the data-access layer are
copied into these frozen records so nothing downstream can mutate them.
"""
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping


def _freeze(values: Mapping[str, Any] | None) -> Mapping[str, Any]:
    return MappingProxyType(dict(values or {}))


@dataclass(frozen=True)
class ProfileSpec:
    """Named bundle of desired capability tags (a service level)"""
    id: str
    name: str
    tags: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "tags", _freeze(self.tags))


@dataclass(frozen=True)
class PoolSpec:
    """Provisionable storage resource owned by exactly one dock"""
    id: str
    dock_id: str
    parameters: Mapping[str, Any] = field(default_factory=dict)
    name: str = ""

    def __post_init__(self):
        object.__setattr__(self, "parameters", _freeze(self.parameters))


@dataclass(frozen=True)
class DockSpec:
    """Backend storage service"""
    id: str
    name: str = ""
    endpoint: str = ""


@dataclass(frozen=True)
class VolumeSpec:
    """Provisioned volume, backed by one pool"""
    id: str
    pool_id: str
    name: str = ""
