# routers/properties.py
"""
Property API routes.

Admins manage properties; managers read the properties assigned to them.
Creating a property generates its floors in the same transaction.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import PageParams, get_current_user, get_page_params
from exceptions import NotFoundError
from models import Floor, LocalStatus, Property, User
from schemas.common import ItemResponse, MessageResponse, PageResponse
from schemas.floor import FloorResponse
from schemas.local import LocalResponse
from schemas.property import AssignManagerRequest, PropertyCreate, PropertyResponse, PropertyUpdate
from services.authorization import Action, authorize, scope_query
from services.floor_service import FloorService
from services.local_service import LocalService
from services.occupancy_service import status_counts, summarize
from services.property_service import PropertyService
from services.records import get_deleted_or_404
from utils.pagination import page_payload, paginate

router = APIRouter(prefix="/api/properties", tags=["properties"])


def _get_property(db: Session, user: User, property_id: int, action: Action = Action.READ) -> Property:
     prop = db.query(Property).filter(Property.id == property_id).first()
     if not prop:
          raise NotFoundError("Property not found")
     authorize(user, "property", action, prop)
     return prop


@router.post(
     "",
     response_model=ItemResponse[PropertyResponse],
     status_code=status.HTTP_201_CREATED,
     summary="Create a property and its floors"
)
def create_property(
     data: PropertyCreate,
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user),
):
     """
     Create a property. Its floors are generated from the layout:

     - **has_basement**: adds a "Basement" at level -1
     - **number_of_floors**: levels 0 .. n-1 ("Ground Floor", "1st Floor", ...)
     """
     authorize(user, "property", Action.CREATE)
     prop = PropertyService.create_property(db, data)
     db.commit()
     return {
          "success": True,
          "message": "Property created successfully",
          "data": PropertyService.to_response(db, prop),
     }


@router.get("", response_model=PageResponse[PropertyResponse], summary="List properties")
def list_properties(
     search: Optional[str] = Query(None, description="Match on name or location"),
     paging: PageParams = Depends(get_page_params),
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user),
):
     authorize(user, "property", Action.READ)
     query = scope_query(db, db.query(Property), user, "property")
     if search:
          term = f"%{search.strip()}%"
          query = query.filter(Property.name.ilike(term) | Property.location.ilike(term))
     items, total, total_pages = paginate(query.order_by(Property.name, Property.id), paging.page, paging.limit)
     data = [PropertyService.to_response(db, p) for p in items]
     return page_payload(data, total, paging.page, total_pages)


@router.get("/{property_id}", response_model=ItemResponse[PropertyResponse], summary="Get property by ID")
def get_property(
     property_id: int,
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user),
):
     prop = _get_property(db, user, property_id)
     return {"success": True, "data": PropertyService.to_response(db, prop)}


@router.put("/{property_id}", response_model=ItemResponse[PropertyResponse], summary="Update a property")
def update_property(
     property_id: int,
     data: PropertyUpdate,
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user),
):
     """
     Partial update. Changing **number_of_floors** or **has_basement**
     re-synchronises the floors; removing a floor that still holds
     locals is refused.
     """
     prop = _get_property(db, user, property_id, Action.UPDATE)
     PropertyService.update_property(db, prop, data)
     db.commit()
     return {
          "success": True,
          "message": "Property updated successfully",
          "data": PropertyService.to_response(db, prop),
     }


@router.delete("/{property_id}", response_model=MessageResponse, summary="Soft-delete a property")
def delete_property(
     property_id: int,
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user),
):
     prop = _get_property(db, user, property_id, Action.DELETE)
     PropertyService.delete_property(db, prop)
     db.commit()
     return {"success": True, "message": "Property deleted successfully"}


@router.patch("/{property_id}/restore", response_model=ItemResponse[PropertyResponse], summary="Restore a property")
def restore_property(
     property_id: int,
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user),
):
     authorize(user, "property", Action.RESTORE)
     prop = get_deleted_or_404(db, Property, property_id, "Property")
     PropertyService.restore_property(db, prop)
     db.commit()
     return {
          "success": True,
          "message": "Property restored successfully",
          "data": PropertyService.to_response(db, prop),
     }


@router.patch(
     "/{property_id}/assign-manager",
     response_model=ItemResponse[PropertyResponse],
     summary="Assign or unassign the property manager"
)
def assign_manager(
     property_id: int,
     body: AssignManagerRequest,
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user),
):
     prop = _get_property(db, user, property_id, Action.ASSIGN_MANAGER)
     PropertyService.assign_manager(db, prop, body.manager_id)
     db.commit()
     return {
          "success": True,
          "message": "Manager assigned successfully" if body.manager_id else "Manager unassigned successfully",
          "data": PropertyService.to_response(db, prop),
     }


@router.get(
     "/{property_id}/floors",
     response_model=ItemResponse[List[FloorResponse]],
     summary="Floors of a property with occupancy"
)
def list_property_floors(
     property_id: int,
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user),
):
     prop = _get_property(db, user, property_id)
     floors = (
          db.query(Floor)
          .filter(Floor.property_id == prop.id)
          .order_by(Floor.level_number)
          .all()
     )
     counts = status_counts(db, property_id=prop.id)
     data = []
     for floor in floors:
          stats = summarize(counts.get(floor.id, {}))
          data.append(FloorService.to_response(floor, stats["total_locals"], stats))
     return {"success": True, "data": data}


@router.get(
     "/{property_id}/locals",
     response_model=PageResponse[LocalResponse],
     summary="Locals of a property"
)
def list_property_locals(
     property_id: int,
     status: Optional[LocalStatus] = Query(None),
     paging: PageParams = Depends(get_page_params),
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user),
):
     prop = _get_property(db, user, property_id)
     authorize(user, "local", Action.READ)
     query = LocalService.list_query(db, user, status=status, property_id=prop.id)
     items, total, total_pages = paginate(query, paging.page, paging.limit)
     return page_payload([LocalService.to_response(local) for local in items], total, paging.page, total_pages)
