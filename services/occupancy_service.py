# services/occupancy_service.py
"""
Occupancy Aggregator - per-floor and per-property counts of locals by status.

Counts always come from one GROUP BY (floor_id, status) query over active
locals; nothing is cached between requests.
"""
from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from exceptions import NotFoundError
from models import Floor, Local, LocalStatus, User
from services.authorization import Action, authorize, scope_query


def summarize(counts: Dict[LocalStatus, int]) -> dict:
     """
     Turn {status: count} into occupancy stats.

     occupancy_rate is the occupied share in percent, one decimal, and 0
     when there are no locals.
     """
     occupied = counts.get(LocalStatus.OCCUPIED, 0)
     available = counts.get(LocalStatus.AVAILABLE, 0)
     maintenance = counts.get(LocalStatus.MAINTENANCE, 0)
     total = occupied + available + maintenance
     rate = round(occupied / total * 100, 1) if total else 0
     return {
          "total_locals": total,
          "occupied": occupied,
          "available": available,
          "maintenance": maintenance,
          "occupancy_rate": rate,
     }


def merge_counts(many: Iterable[Dict[LocalStatus, int]]) -> Dict[LocalStatus, int]:
     merged: Dict[LocalStatus, int] = defaultdict(int)
     for counts in many:
          for status, n in counts.items():
               merged[status] += n
     return merged


def status_counts(
     db: Session,
     floor_ids: Optional[List[int]] = None,
     property_id: Optional[int] = None,
) -> Dict[int, Dict[LocalStatus, int]]:
     """Return {floor_id: {status: count}} for active locals."""
     query = (
          db.query(Local.floor_id, Local.status, func.count(Local.id))
          .filter(Local.deleted_at.is_(None))
          .group_by(Local.floor_id, Local.status)
     )
     if floor_ids is not None:
          query = query.filter(Local.floor_id.in_(floor_ids))
     if property_id is not None:
          query = query.filter(Local.property_id == property_id)

     result: Dict[int, Dict[LocalStatus, int]] = defaultdict(dict)
     for floor_id, status, count in query.all():
          result[floor_id][LocalStatus(status)] = count
     return result


def _floor_row(floor: Floor, counts: Dict[LocalStatus, int]) -> dict:
     row = summarize(counts)
     row.update(
          floor_id=floor.id,
          floor_name=floor.name,
          level_number=floor.level_number,
          property_id=floor.property_id,
          property_name=floor.parent_property.name if floor.parent_property else None,
     )
     return row


def floor_occupancy(db: Session, user: User, floor_id: int) -> dict:
     floor = db.query(Floor).filter(Floor.id == floor_id).first()
     if not floor:
          raise NotFoundError("Floor not found")
     authorize(user, "floor", Action.READ, floor)
     counts = status_counts(db, floor_ids=[floor.id])
     return _floor_row(floor, counts.get(floor.id, {}))


def floors_occupancy(db: Session, user: User, property_id: Optional[int] = None) -> Tuple[List[dict], dict]:
     """
     Occupancy of every floor the user can see, plus the aggregate.

     Returns:
          (rows, summary)
     """
     authorize(user, "floor", Action.READ)
     query = scope_query(db, db.query(Floor), user, "floor")
     if property_id is not None:
          query = query.filter(Floor.property_id == property_id)
     floors = query.order_by(Floor.property_id, Floor.level_number).all()

     counts = status_counts(db, floor_ids=[f.id for f in floors]) if floors else {}
     rows = [_floor_row(f, counts.get(f.id, {})) for f in floors]
     summary = summarize(merge_counts(counts.values()))
     return rows, summary


def property_occupancy(db: Session, property_id: int) -> dict:
     counts = status_counts(db, property_id=property_id)
     return summarize(merge_counts(counts.values()))
