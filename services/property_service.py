# services/property_service.py
"""
Property Service - properties and the floors generated from their layout.

A property with ``has_basement`` gets a "Basement" at level -1, then
levels 0 .. number_of_floors - 1 ("Ground Floor", "1st Floor", ...).
Creating a property and its floors is one unit of work: everything is
flushed into the caller's transaction, which commits or rolls back as a
whole.
"""
import logging
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from exceptions import ValidationError
from models import Floor, Local, Property, User, UserRole
from schemas.property import PropertyCreate, PropertyUpdate
from services.local_service import LocalService
from services.occupancy_service import property_occupancy
from services.records import apply_changes

logger = logging.getLogger(__name__)


def ordinal(n: int) -> str:
     if 10 <= n % 100 <= 20:
          suffix = "th"
     else:
          suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
     return f"{n}{suffix}"


def floor_name(level_number: int) -> str:
     if level_number == -1:
          return "Basement"
     if level_number < -1:
          return f"Basement {abs(level_number)}"
     if level_number == 0:
          return "Ground Floor"
     return f"{ordinal(level_number)} Floor"


def floor_levels(number_of_floors: int, has_basement: bool) -> List[int]:
     """Levels a property's layout calls for, lowest first."""
     levels = [-1] if has_basement else []
     levels.extend(range(number_of_floors))
     return levels


class PropertyService:
     """Service class for property-related business logic."""

     @staticmethod
     def validate_manager(db: Session, manager_id: int) -> User:
          manager = db.query(User).filter(User.id == manager_id).first()
          if not manager or not manager.is_active or manager.role != UserRole.MANAGER:
               raise ValidationError("Manager must be an active user with the manager role")
          return manager

     @staticmethod
     def create_property(db: Session, data: PropertyCreate) -> Property:
          """
          Create a property and all of its floors.

          Args:
               db: SQLAlchemy database session
               data: validated payload

          Returns:
               The flushed Property with its floors attached
          """
          if data.manager_id is not None:
               PropertyService.validate_manager(db, data.manager_id)

          prop = Property(
               name=data.name,
               location=data.location,
               description=data.description,
               number_of_floors=data.number_of_floors,
               has_basement=data.has_basement,
               manager_id=data.manager_id,
          )
          db.add(prop)
          db.flush()  # Flush to get the ID without committing

          for level in floor_levels(data.number_of_floors, data.has_basement):
               db.add(Floor(property_id=prop.id, level_number=level, name=floor_name(level)))
          db.flush()

          logger.info(
               "Property %s created with %d floor(s)",
               prop.id, len(floor_levels(data.number_of_floors, data.has_basement)),
          )
          return prop

     @staticmethod
     def sync_floors(db: Session, prop: Property) -> None:
          """
          Bring the property's floors in line with its layout.

          Missing levels are restored when a deleted floor holds them,
          otherwise created. Surplus levels are soft-deleted unless they
          still hold active locals.
          """
          expected = set(floor_levels(prop.number_of_floors, prop.has_basement))
          floors = (
               db.query(Floor)
               .execution_options(include_deleted=True)
               .filter(Floor.property_id == prop.id)
               .all()
          )
          by_level = {f.level_number: f for f in floors}

          for floor in floors:
               if floor.level_number in expected or floor.is_deleted:
                    continue
               in_use = (
                    db.query(func.count(Local.id))
                    .filter(Local.floor_id == floor.id, Local.deleted_at.is_(None))
                    .scalar()
               )
               if in_use:
                    raise ValidationError(
                         f"Cannot remove {floor.name}: it still holds {in_use} local(s)"
                    )
               floor.soft_delete()

          for level in sorted(expected):
               floor = by_level.get(level)
               if floor is None:
                    db.add(Floor(property_id=prop.id, level_number=level, name=floor_name(level)))
               elif floor.is_deleted:
                    floor.restore()
          db.flush()

     @staticmethod
     def update_property(db: Session, prop: Property, data: PropertyUpdate) -> Property:
          changes = data.model_dump(exclude_unset=True)
          # Layout columns are NOT NULL
          for field in ("number_of_floors", "has_basement", "name", "location"):
               if field in changes and changes[field] is None:
                    raise ValidationError(f"{field} cannot be null")
          layout_changed = any(
               field in changes and changes[field] != getattr(prop, field)
               for field in ("number_of_floors", "has_basement")
          )
          apply_changes(prop, changes)
          db.flush()
          if layout_changed:
               PropertyService.sync_floors(db, prop)
          return prop

     @staticmethod
     def delete_property(db: Session, prop: Property) -> None:
          """Soft-delete the property with its floors and locals, all stamped alike."""
          units = db.query(Local).filter(Local.property_id == prop.id).all()
          LocalService.ensure_no_active_leases(db, [local.id for local in units], "property")
          when = prop.soft_delete()
          for floor in db.query(Floor).filter(Floor.property_id == prop.id).all():
               floor.soft_delete(when)
          for local in units:
               local.soft_delete(when)
          db.flush()
          logger.info("Property %s deleted", prop.id)

     @staticmethod
     def restore_property(db: Session, prop: Property) -> Property:
          """Restore the property and the floors and locals deleted along with it."""
          when = prop.deleted_at
          for model in (Floor, Local):
               rows = (
                    db.query(model)
                    .execution_options(include_deleted=True)
                    .filter(model.property_id == prop.id, model.deleted_at == when)
                    .all()
               )
               for row in rows:
                    row.restore()
          prop.restore()
          db.flush()
          logger.info("Property %s restored", prop.id)
          return prop

     @staticmethod
     def assign_manager(db: Session, prop: Property, manager_id: Optional[int]) -> Property:
          if manager_id is not None:
               PropertyService.validate_manager(db, manager_id)
          prop.manager_id = manager_id
          db.flush()
          logger.info("Property %s manager set to %s", prop.id, manager_id)
          return prop

     @staticmethod
     def to_response(db: Session, prop: Property, with_occupancy: bool = True) -> dict:
          floors_count = (
               db.query(func.count(Floor.id))
               .filter(Floor.property_id == prop.id, Floor.deleted_at.is_(None))
               .scalar()
          )
          locals_count = (
               db.query(func.count(Local.id))
               .filter(Local.property_id == prop.id, Local.deleted_at.is_(None))
               .scalar()
          )
          return {
               "id": prop.id,
               "name": prop.name,
               "location": prop.location,
               "description": prop.description,
               "number_of_floors": prop.number_of_floors,
               "has_basement": prop.has_basement,
               "manager_id": prop.manager_id,
               "manager_name": prop.manager.full_name if prop.manager else None,
               "created_at": prop.created_at,
               "floors_count": floors_count,
               "locals_count": locals_count,
               "occupancy": property_occupancy(db, prop.id) if with_occupancy else None,
          }
