"""
Selector error taxonomy.

Every failure is terminal for the current resolution attempt; callers decide
whether to retry, fall back or surface it. ``context`` carries the identifiers
or tags involved so the caller can log a precise diagnostic.
"""
from typing import Any, Dict, Mapping, Optional


class PlacementError(Exception):
    """Base class for all selector failures"""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context = dict(context or {})

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": type(self).__name__,
            "message": self.message,
            "context": self.context,
        }


class NotFound(PlacementError):
    def __init__(self, kind: str, entity_id: str):
        super().__init__(f"{kind.capitalize()} '{entity_id}' not found", {"kind": kind, "id": entity_id})
        self.kind = kind
        self.entity_id = entity_id


class NoDefaultProfile(PlacementError):
    def __init__(self, name: str = "default"):
        super().__init__(f"Can not find profile named '{name}'", {"name": name})


class NoSupportedPool(PlacementError):
    def __init__(self, tags: Mapping[str, Any]):
        super().__init__("No pool resource supported", {"tags": dict(tags)})
        self.tags = dict(tags)


class NoSupportedDock(PlacementError):
    def __init__(self, pool_id: str, dock_id: str):
        super().__init__(
            f"No dock resource supported for pool '{pool_id}' (dock '{dock_id}')",
            {"pool_id": pool_id, "dock_id": dock_id},
        )
        self.pool_id = pool_id
        self.dock_id = dock_id


class TypeMismatch(PlacementError, TypeError):
    """Tag or parameter value is of the wrong kind for its key"""

    def __init__(self, key: str, expected: str, value: Any, source: str = "tag"):
        super().__init__(
            f"{source.capitalize()} '{key}' expects a {expected} value, got {type(value).__name__}",
            {"key": key, "expected": expected, "value": repr(value), "source": source},
        )
        self.key = key
        self.expected = expected
        self.value = value


class InvalidArgument(PlacementError, ValueError):
    pass


class CollaboratorFailure(PlacementError):
    """Data-access layer failed; the original exception is kept as __cause__"""

    def __init__(self, operation: str, context: Optional[Dict[str, Any]] = None, cause: Optional[BaseException] = None):
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"Data access '{operation}' failed{detail}", {"operation": operation, **(context or {})})
        self.operation = operation
