# services/local_service.py
"""
Local Service - rentable units and their status.
"""
import logging
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from exceptions import NotFoundError, ValidationError
from models import Floor, Lease, LeaseStatus, Local, LocalStatus, Property, User
from schemas.local import LocalCreate, LocalUpdate
from services.authorization import Action, scope_query
from services.records import apply_changes

logger = logging.getLogger(__name__)


class LocalService:

     @staticmethod
     def check_placement(db: Session, property_id: int, floor_id: int) -> Floor:
          """The floor must exist and belong to the property."""
          prop = db.query(Property).filter(Property.id == property_id).first()
          if not prop:
               raise NotFoundError("Property not found")
          floor = db.query(Floor).filter(Floor.id == floor_id).first()
          if not floor:
               raise NotFoundError("Floor not found")
          if floor.property_id != property_id:
               raise ValidationError("Floor does not belong to the selected property")
          return floor

     @staticmethod
     def list_query(
          db: Session,
          user: User,
          status: Optional[LocalStatus] = None,
          property_id: Optional[int] = None,
          floor_id: Optional[int] = None,
     ):
          query = scope_query(db, db.query(Local), user, "local")
          if status is not None:
               query = query.filter(Local.status == status)
          if property_id is not None:
               query = query.filter(Local.property_id == property_id)
          if floor_id is not None:
               query = query.filter(Local.floor_id == floor_id)
          return query.order_by(Local.property_id, Local.reference_code)

     @staticmethod
     def create_local(db: Session, data: LocalCreate) -> Local:
          LocalService.check_placement(db, data.property_id, data.floor_id)
          local = Local(**data.model_dump())
          db.add(local)
          db.flush()
          return local

     @staticmethod
     def update_local(db: Session, local: Local, data: LocalUpdate) -> Local:
          changes = data.model_dump(exclude_unset=True)
          for field in ("reference_code", "status", "property_id", "floor_id"):
               if field in changes and changes[field] is None:
                    raise ValidationError(f"{field} cannot be null")
          if "property_id" in changes or "floor_id" in changes:
               LocalService.check_placement(
                    db,
                    changes.get("property_id", local.property_id),
                    changes.get("floor_id", local.floor_id),
               )
          apply_changes(local, changes)
          db.flush()
          return local

     @staticmethod
     def set_status(db: Session, local: Local, status: LocalStatus, user: User) -> Local:
          previous = local.status
          local.status = status
          db.flush()
          logger.info("Local %s status %s -> %s by user %s", local.id, previous.value, status.value, user.id)
          return local

     @staticmethod
     def ensure_no_active_leases(db: Session, local_ids: List[int], what: str) -> None:
          """A unit with a running agreement cannot be removed."""
          if not local_ids:
               return
          active = (
               db.query(func.count(Lease.id))
               .filter(Lease.local_id.in_(local_ids), Lease.status == LeaseStatus.ACTIVE)
               .scalar()
          )
          if active:
               raise ValidationError(f"Cannot delete a {what} with {active} active lease(s)")

     @staticmethod
     def delete_local(db: Session, local: Local) -> None:
          LocalService.ensure_no_active_leases(db, [local.id], "local")
          local.soft_delete()
          db.flush()
          logger.info("Local %s deleted", local.id)

     @staticmethod
     def restore_local(db: Session, local: Local) -> Local:
          floor = (
               db.query(Floor)
               .execution_options(include_deleted=True)
               .filter(Floor.id == local.floor_id)
               .first()
          )
          if floor is None or floor.is_deleted:
               raise ValidationError("Restore the floor before its locals")
          local.restore()
          db.flush()
          return local

     @staticmethod
     def to_response(local: Local) -> dict:
          floor = local.floor
          return {
               "id": local.id,
               "reference_code": local.reference_code,
               "status": local.status,
               "size_m2": float(local.size_m2) if local.size_m2 is not None else None,
               "rent_price": float(local.rent_price) if local.rent_price is not None else None,
               "property_id": local.property_id,
               "property_name": local.parent_property.name if local.parent_property else None,
               "floor_id": local.floor_id,
               "floor_name": floor.name if floor else None,
               "level_number": floor.level_number if floor else None,
          }
