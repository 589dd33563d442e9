# services/floor_service.py
"""
Floor Service - edits to the floors generated for a property.

Floors are never created directly; see PropertyService.
"""
import logging

from sqlalchemy import func
from sqlalchemy.orm import Session

from exceptions import ConflictError, ValidationError
from models import Floor, Local
from schemas.floor import FloorUpdate
from services.records import apply_changes

logger = logging.getLogger(__name__)


class FloorService:

     @staticmethod
     def active_locals_count(db: Session, floor_id: int) -> int:
          return (
               db.query(func.count(Local.id))
               .filter(Local.floor_id == floor_id, Local.deleted_at.is_(None))
               .scalar()
          )

     @staticmethod
     def check_level_free(db: Session, property_id: int, level_number: int, floor_id: int = None) -> None:
          """
          Raise ConflictError when another floor of the property holds the
          level. Deleted floors count, since the unique index covers them.
          """
          query = (
               db.query(Floor)
               .execution_options(include_deleted=True)
               .filter(Floor.property_id == property_id, Floor.level_number == level_number)
          )
          if floor_id is not None:
               query = query.filter(Floor.id != floor_id)
          other = query.first()
          if other is None:
               return
          if other.is_deleted:
               raise ConflictError(
                    f"Level {level_number} belongs to a deleted floor of this property; restore it instead"
               )
          raise ConflictError(f"Level {level_number} already exists in this property")

     @staticmethod
     def update_floor(db: Session, floor: Floor, data: FloorUpdate) -> Floor:
          changes = data.model_dump(exclude_unset=True)
          for field in ("name", "level_number"):
               if field in changes and changes[field] is None:
                    raise ValidationError(f"{field} cannot be null")
          if "level_number" in changes and changes["level_number"] != floor.level_number:
               FloorService.check_level_free(db, floor.property_id, changes["level_number"], floor.id)
          apply_changes(floor, changes)
          db.flush()
          return floor

     @staticmethod
     def delete_floor(db: Session, floor: Floor) -> None:
          in_use = FloorService.active_locals_count(db, floor.id)
          if in_use:
               raise ValidationError(f"Cannot delete {floor.name}: it still holds {in_use} local(s)")
          floor.soft_delete()
          db.flush()
          logger.info("Floor %s deleted", floor.id)

     @staticmethod
     def restore_floor(db: Session, floor: Floor) -> Floor:
          parent = floor.parent_property
          if parent is None or parent.is_deleted:
               raise ValidationError("Restore the property before its floors")
          FloorService.check_level_free(db, floor.property_id, floor.level_number, floor.id)
          floor.restore()
          db.flush()
          return floor

     @staticmethod
     def to_response(floor: Floor, locals_count: int = 0, occupancy: dict = None) -> dict:
          return {
               "id": floor.id,
               "name": floor.name,
               "level_number": floor.level_number,
               "property_id": floor.property_id,
               "property_name": floor.parent_property.name if floor.parent_property else None,
               "locals_count": locals_count,
               "occupancy": occupancy,
          }
