# routers/floors.py
"""
Floor API routes and occupancy reports.

Floors are created with their property; here they are read, renamed,
re-levelled, soft-deleted and restored.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from database import get_session
from dependencies import PageParams, get_current_user, get_page_params
from exceptions import NotFoundError
from models import Floor, Local, User
from schemas.common import ItemResponse, MessageResponse, PageResponse
from schemas.floor import (
     FloorDetailResponse,
     FloorOccupancy,
     FloorResponse,
     FloorUpdate,
     OccupancyReportResponse,
)
from services.authorization import Action, authorize, scope_query
from services.floor_service import FloorService
from services.local_service import LocalService
from services.occupancy_service import floor_occupancy, floors_occupancy, status_counts, summarize
from services.records import get_deleted_or_404
from utils.pagination import page_payload, paginate

router = APIRouter(prefix="/api/floors", tags=["floors"])


def _get_floor(db: Session, user: User, floor_id: int, action: Action = Action.READ) -> Floor:
     floor = db.query(Floor).filter(Floor.id == floor_id).first()
     if not floor:
          raise NotFoundError("Floor not found")
     authorize(user, "floor", action, floor)
     return floor


def _floor_payload(db: Session, floor: Floor) -> dict:
     stats = summarize(status_counts(db, floor_ids=[floor.id]).get(floor.id, {}))
     return FloorService.to_response(floor, stats["total_locals"], stats)


@router.get("", response_model=PageResponse[FloorResponse], summary="List floors")
def list_floors(
     property_id: Optional[int] = Query(None, alias="propertyId"),
     paging: PageParams = Depends(get_page_params),
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user),
):
     authorize(user, "floor", Action.READ)
     query = scope_query(db, db.query(Floor), user, "floor")
     if property_id is not None:
          query = query.filter(Floor.property_id == property_id)
     query = query.order_by(Floor.property_id, Floor.level_number)
     items, total, total_pages = paginate(query, paging.page, paging.limit)

     counts = status_counts(db, floor_ids=[f.id for f in items]) if items else {}
     data = []
     for floor in items:
          stats = summarize(counts.get(floor.id, {}))
          data.append(FloorService.to_response(floor, stats["total_locals"], stats))
     return page_payload(data, total, paging.page, total_pages)


# Must stay above /{floor_id} routes
@router.get("/reports/occupancy", response_model=OccupancyReportResponse, summary="Occupancy of all visible floors")
def occupancy_report(
     property_id: Optional[int] = Query(None, alias="propertyId"),
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user),
):
     """
     Per-floor occupancy plus a summary over every floor returned.
     Managers only see floors of the properties they manage.
     """
     rows, summary = floors_occupancy(db, user, property_id)
     return {"success": True, "total": len(rows), "data": rows, "summary": summary}


@router.get("/{floor_id}", response_model=ItemResponse[FloorDetailResponse], summary="Get floor with its locals")
def get_floor(
     floor_id: int,
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user),
):
     floor = _get_floor(db, user, floor_id)
     locals_ = (
          db.query(Local)
          .filter(Local.floor_id == floor.id)
          .order_by(Local.reference_code)
          .all()
     )
     data = _floor_payload(db, floor)
     data["locals"] = [LocalService.to_response(local) for local in locals_]
     return {"success": True, "data": data}


@router.get("/{floor_id}/occupancy", response_model=ItemResponse[FloorOccupancy], summary="Occupancy of one floor")
def get_floor_occupancy(
     floor_id: int,
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user),
):
     return {"success": True, "data": floor_occupancy(db, user, floor_id)}


@router.put("/{floor_id}", response_model=ItemResponse[FloorResponse], summary="Update a floor")
def update_floor(
     floor_id: int,
     data: FloorUpdate,
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user),
):
     floor = _get_floor(db, user, floor_id, Action.UPDATE)
     FloorService.update_floor(db, floor, data)
     db.commit()
     return {"success": True, "message": "Floor updated successfully", "data": _floor_payload(db, floor)}


@router.delete("/{floor_id}", response_model=MessageResponse, summary="Soft-delete a floor")
def delete_floor(
     floor_id: int,
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user),
):
     floor = _get_floor(db, user, floor_id, Action.DELETE)
     FloorService.delete_floor(db, floor)
     db.commit()
     return {"success": True, "message": "Floor deleted successfully"}


@router.patch("/{floor_id}/restore", response_model=ItemResponse[FloorResponse], summary="Restore a floor")
def restore_floor(
     floor_id: int,
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user),
):
     authorize(user, "floor", Action.RESTORE)
     floor = get_deleted_or_404(db, Floor, floor_id, "Floor")
     FloorService.restore_floor(db, floor)
     db.commit()
     return {"success": True, "message": "Floor restored successfully", "data": _floor_payload(db, floor)}
