"""
Inventory tables read by the placement selector.

Profiles, pools, docks and volumes are created by administrators and by the
provisioning workflow; the selector only reads them. Identifiers are strings
(UUIDs) and cross references are plain lookup keys, not enforced foreign keys.
"""
from sqlalchemy import Column, String, DateTime, JSON
from sqlalchemy.orm import declarative_base
from datetime import datetime
import uuid

Base = declarative_base()


def _new_id() -> str:
    return str(uuid.uuid4())


class Profile(Base):
    """Service-level profile: a named bundle of desired capability tags"""
    __tablename__ = "profiles"

    id = Column(String, primary_key=True, default=_new_id)
    name = Column(String, nullable=False)
    description = Column(String)
    tags = Column(JSON, nullable=False, default=dict)  # key -> str | number

    created_at = Column(DateTime, default=datetime.utcnow)


class Dock(Base):
    """Backend storage service owning zero or more pools"""
    __tablename__ = "docks"

    id = Column(String, primary_key=True, default=_new_id)
    name = Column(String, nullable=False)
    endpoint = Column(String)  # host:port of the backend driver

    created_at = Column(DateTime, default=datetime.utcnow)


class StoragePool(Base):
    """Provisionable storage resource with fixed, admin-declared capabilities"""
    __tablename__ = "storage_pools"

    id = Column(String, primary_key=True, default=_new_id)
    name = Column(String, nullable=False)
    dock_id = Column(String, nullable=False, index=True)
    parameters = Column(JSON, nullable=False, default=dict)  # e.g. diskType, iops, latency

    created_at = Column(DateTime, default=datetime.utcnow)


class Volume(Base):
    """Provisioned volume; only its pool reference matters to the selector"""
    __tablename__ = "volumes"

    id = Column(String, primary_key=True, default=_new_id)
    name = Column(String)
    pool_id = Column(String, nullable=False, index=True)

    created_at = Column(DateTime, default=datetime.utcnow)
