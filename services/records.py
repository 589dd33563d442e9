# services/records.py
"""
Lookups shared by the resource services.

Active records are fetched with a plain query (the soft-delete filter is
applied automatically). Restore paths opt in to deleted rows explicitly.
"""
from typing import Type, TypeVar

from sqlalchemy.orm import Session

from exceptions import NotFoundError, ValidationError

ModelT = TypeVar("ModelT")


def get_or_404(db: Session, model: Type[ModelT], record_id: int, label: str) -> ModelT:
     record = db.query(model).filter(model.id == record_id).first()
     if record is None:
          raise NotFoundError(f"{label} not found")
     return record


def get_deleted_or_404(db: Session, model: Type[ModelT], record_id: int, label: str) -> ModelT:
     """
     Fetch a record for restoring. Missing ids are a 404; records that
     are not deleted are a 400.
     """
     record = (
          db.query(model)
          .execution_options(include_deleted=True)
          .filter(model.id == record_id)
          .first()
     )
     if record is None:
          raise NotFoundError(f"{label} not found")
     if not record.is_deleted:
          raise ValidationError(f"{label} is not deleted")
     return record


def apply_changes(record, changes: dict) -> None:
     for field, value in changes.items():
          setattr(record, field, value)
