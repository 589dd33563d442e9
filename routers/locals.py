# routers/locals.py
"""
Local (rentable unit) API routes.

Structural edits are admin-only. The status endpoint is open to every
authenticated role: marking a unit occupied is an operational action.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import PageParams, get_current_user, get_page_params
from exceptions import NotFoundError
from models import Local, LocalStatus, User
from schemas.common import ItemResponse, MessageResponse, PageResponse
from schemas.local import LocalCreate, LocalResponse, LocalStatusUpdate, LocalUpdate
from services.authorization import Action, authorize
from services.local_service import LocalService
from services.records import get_deleted_or_404
from utils.pagination import page_payload, paginate

router = APIRouter(prefix="/api/locals", tags=["locals"])


def _get_local(db: Session, user: User, local_id: int, action: Action = Action.READ) -> Local:
     local = db.query(Local).filter(Local.id == local_id).first()
     if not local:
          raise NotFoundError("Local not found")
     authorize(user, "local", action, local)
     return local


@router.get("", response_model=PageResponse[LocalResponse], summary="List locals")
def list_locals(
     local_status: Optional[LocalStatus] = Query(None, alias="status"),
     property_id: Optional[int] = Query(None, alias="propertyId"),
     floor_id: Optional[int] = Query(None, alias="floorId"),
     paging: PageParams = Depends(get_page_params),
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user),
):
     authorize(user, "local", Action.READ)
     query = LocalService.list_query(db, user, status=local_status, property_id=property_id, floor_id=floor_id)
     items, total, total_pages = paginate(query, paging.page, paging.limit)
     return page_payload([LocalService.to_response(local) for local in items], total, paging.page, total_pages)


@router.get("/{local_id}", response_model=ItemResponse[LocalResponse], summary="Get local by ID")
def get_local(
     local_id: int,
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user),
):
     local = _get_local(db, user, local_id)
     return {"success": True, "data": LocalService.to_response(local)}


@router.post(
     "",
     response_model=ItemResponse[LocalResponse],
     status_code=status.HTTP_201_CREATED,
     summary="Create a local"
)
def create_local(
     data: LocalCreate,
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user),
):
     """
     Create a local on a floor. **floor_id** must belong to **property_id**.
     """
     authorize(user, "local", Action.CREATE)
     local = LocalService.create_local(db, data)
     db.commit()
     return {"success": True, "message": "Local created successfully", "data": LocalService.to_response(local)}


@router.put("/{local_id}", response_model=ItemResponse[LocalResponse], summary="Update a local")
@router.patch("/{local_id}", response_model=ItemResponse[LocalResponse], summary="Partially update a local")
def update_local(
     local_id: int,
     data: LocalUpdate,
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user),
):
     local = _get_local(db, user, local_id, Action.UPDATE)
     LocalService.update_local(db, local, data)
     db.commit()
     return {"success": True, "message": "Local updated successfully", "data": LocalService.to_response(local)}


@router.delete("/{local_id}", response_model=MessageResponse, summary="Soft-delete a local")
def delete_local(
     local_id: int,
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user),
):
     local = _get_local(db, user, local_id, Action.DELETE)
     LocalService.delete_local(db, local)
     db.commit()
     return {"success": True, "message": "Local deleted successfully"}


@router.patch("/{local_id}/restore", response_model=ItemResponse[LocalResponse], summary="Restore a local")
def restore_local(
     local_id: int,
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user),
):
     authorize(user, "local", Action.RESTORE)
     local = get_deleted_or_404(db, Local, local_id, "Local")
     LocalService.restore_local(db, local)
     db.commit()
     return {"success": True, "message": "Local restored successfully", "data": LocalService.to_response(local)}


@router.patch("/{local_id}/status", response_model=ItemResponse[LocalResponse], summary="Change a local's status")
def update_local_status(
     local_id: int,
     body: LocalStatusUpdate,
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user),
):
     """
     Set **status** to available, occupied or maintenance. Any
     authenticated user may do this; managers only on their properties.
     """
     local = _get_local(db, user, local_id, Action.UPDATE_STATUS)
     LocalService.set_status(db, local, body.status, user)
     db.commit()
     return {"success": True, "message": "Local status updated successfully", "data": LocalService.to_response(local)}
