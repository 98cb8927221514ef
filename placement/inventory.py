"""
Inventory loader for demos and tests.

Inventory is normally maintained by administrators and by the provisioning
workflow. This loader inserts a JSON document of the form::

    {"profiles": [...], "docks": [...], "pools": [...], "volumes": [...]}

Each entry may carry an explicit ``id``; otherwise a UUID is generated.
"""
import logging
from datetime import datetime, timedelta
from typing import Any, Dict, Mapping

from sqlalchemy.orm import Session

from placement.models import Dock, Profile, StoragePool, Volume

logger = logging.getLogger(__name__)

_SECTIONS = (
    ("profiles", Profile, ("id", "name", "description", "tags")),
    ("docks", Dock, ("id", "name", "endpoint")),
    ("pools", StoragePool, ("id", "name", "dock_id", "parameters")),
    ("volumes", Volume, ("id", "name", "pool_id")),
)


def load_inventory(db: Session, data: Mapping[str, Any]) -> Dict[str, int]:
    """
    Insert all inventory sections in one transaction.

    Rows get strictly increasing ``created_at`` stamps so that listing order
    matches document order.

    Returns:
        Row count per section
    """
    counts: Dict[str, int] = {}
    stamp = datetime.utcnow()
    try:
        for section, model, fields in _SECTIONS:
            entries = data.get(section) or []
            for entry in entries:
                values = {field: entry[field] for field in fields if field in entry}
                stamp += timedelta(microseconds=1)
                db.add(model(created_at=stamp, **values))
            counts[section] = len(entries)
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info("Loaded inventory: %s", ", ".join(f"{k}={v}" for k, v in counts.items()))
    return counts
