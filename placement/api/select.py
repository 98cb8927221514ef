"""
Placement API

Thin HTTP adapter over the selector. Inventory is managed elsewhere; these
endpoints only read it.

Endpoints:
- GET  /placement/profile: resolve a profile (default when no id given)
- POST /placement/pool/select: first pool satisfying the desired tags
- POST /placement/dock/select: dock backing a volume or a pool
- POST /placement/plan: profile -> pool -> dock in one call
"""
from typing import Any, Dict, Optional, Union

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from sqlalchemy.orm import Session

from placement.database import SessionLocal
from placement.domain import DockSpec, PoolSpec, ProfileSpec
from placement.errors import (
    CollaboratorFailure,
    InvalidArgument,
    NoDefaultProfile,
    NoSupportedDock,
    NoSupportedPool,
    NotFound,
    PlacementError,
    TypeMismatch,
)
from placement.services.selector import PoolRef, Selector, VolumeRef

router = APIRouter(prefix="/placement", tags=["placement"])

_STATUS_BY_ERROR = {
    NotFound: 404,
    NoDefaultProfile: 409,
    NoSupportedPool: 409,
    NoSupportedDock: 409,
    TypeMismatch: 422,
    InvalidArgument: 422,
    CollaboratorFailure: 503,
}


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_selector(db: Session = Depends(get_db)) -> Selector:
    return Selector.from_session(db)


def _http_error(exc: PlacementError) -> HTTPException:
    status = next((code for kind, code in _STATUS_BY_ERROR.items() if isinstance(exc, kind)), 500)
    return HTTPException(status_code=status, detail=exc.to_dict())


# ============================================================================
# SCHEMAS
# ============================================================================

TagScalar = Union[str, int, float, bool, None]


class ProfileOut(BaseModel):
    id: str
    name: str
    tags: Dict[str, Any]


class PoolOut(BaseModel):
    id: str
    name: str
    dock_id: str
    parameters: Dict[str, Any]


class DockOut(BaseModel):
    id: str
    name: str
    endpoint: str


class PoolSelectRequest(BaseModel):
    tags: Dict[str, TagScalar] = {}


class DockSelectRequest(BaseModel):
    volume_id: Optional[str] = None
    pool_id: Optional[str] = None


class PlanRequest(BaseModel):
    profile_id: Optional[str] = None


class PlanOut(BaseModel):
    profile: ProfileOut
    pool: PoolOut
    dock: DockOut


def _profile_out(prf: ProfileSpec) -> ProfileOut:
    return ProfileOut(id=prf.id, name=prf.name, tags=dict(prf.tags))


def _pool_out(pol: PoolSpec) -> PoolOut:
    return PoolOut(id=pol.id, name=pol.name, dock_id=pol.dock_id, parameters=dict(pol.parameters))


def _dock_out(dck: DockSpec) -> DockOut:
    return DockOut(id=dck.id, name=dck.name, endpoint=dck.endpoint)


# ============================================================================
# ENDPOINTS
# ============================================================================

@router.get("/profile", response_model=ProfileOut)
def resolve_profile(profile_id: Optional[str] = None, selector: Selector = Depends(get_selector)):
    try:
        return _profile_out(selector.select_profile(profile_id))
    except PlacementError as exc:
        raise _http_error(exc)


@router.post("/pool/select", response_model=PoolOut)
def select_pool(req: PoolSelectRequest, selector: Selector = Depends(get_selector)):
    try:
        return _pool_out(selector.select_supported_pool(req.tags))
    except PlacementError as exc:
        raise _http_error(exc)


@router.post("/dock/select", response_model=DockOut)
def select_dock(req: DockSelectRequest, selector: Selector = Depends(get_selector)):
    if bool(req.volume_id) == bool(req.pool_id):
        raise _http_error(InvalidArgument(
            "Exactly one of volume_id or pool_id is required",
            {"volume_id": req.volume_id, "pool_id": req.pool_id},
        ))
    try:
        if req.volume_id:
            return _dock_out(selector.select_dock(VolumeRef(req.volume_id)))
        return _dock_out(selector.select_dock(PoolRef(selector.get_pool(req.pool_id))))
    except PlacementError as exc:
        raise _http_error(exc)


@router.post("/plan", response_model=PlanOut)
def plan_placement(req: PlanRequest, selector: Selector = Depends(get_selector)):
    try:
        placement = selector.plan_placement(req.profile_id)
    except PlacementError as exc:
        raise _http_error(exc)
    return PlanOut(
        profile=_profile_out(placement.profile),
        pool=_pool_out(placement.pool),
        dock=_dock_out(placement.dock),
    )
