# models/base.py
import enum
import re
from datetime import datetime
from typing import Optional

from sqlalchemy import Column, DateTime, event, func
from sqlalchemy.orm import DeclarativeBase, Session, declared_attr, with_loader_criteria


class Base(DeclarativeBase):
     """
     Base class for all SQLAlchemy models.
     Provides common configuration and mixins.
     """

     @declared_attr.directive
     def __tablename__(cls) -> str:
          """
          Automatically generate table name from class name.
          Example: PaymentMode -> payment_modes
          """
          name = re.sub(r'(?<!^)(?=[A-Z])', '_', cls.__name__).lower()
          # Pluralize (simple version)
          if name.endswith('y'):
               return name[:-1] + 'ies'
          elif name.endswith('s'):
               return name + 'es'
          return name + 's'


class TimestampMixin:
     created_at = Column(DateTime, server_default=func.now(), nullable=False)
     updated_at = Column(DateTime, onupdate=func.now(), nullable=True)


class RecordState(str, enum.Enum):
     """Lifecycle of a soft-deletable record."""
     ACTIVE = "active"
     DELETED = "deleted"


class SoftDeleteMixin:
     """
     Records are never removed; deleting stamps ``deleted_at``.

     Every ORM SELECT hides deleted rows (see ``_exclude_deleted`` below).
     Pass ``execution_options(include_deleted=True)`` to see them, which is
     what the restore endpoints do.
     """
     deleted_at = Column(DateTime, nullable=True, index=True)

     @property
     def state(self) -> RecordState:
          return RecordState.DELETED if self.deleted_at is not None else RecordState.ACTIVE

     @property
     def is_deleted(self) -> bool:
          return self.state == RecordState.DELETED

     def soft_delete(self, when: Optional[datetime] = None) -> datetime:
          self.deleted_at = when or datetime.utcnow()
          return self.deleted_at

     def restore(self) -> None:
          self.deleted_at = None


@event.listens_for(Session, "do_orm_execute")
def _exclude_deleted(execute_state):
     if (
          execute_state.is_select
          and not execute_state.is_column_load
          and not execute_state.is_relationship_load
          and not execute_state.execution_options.get("include_deleted", False)
     ):
          execute_state.statement = execute_state.statement.options(
               with_loader_criteria(
                    SoftDeleteMixin,
                    lambda cls: cls.deleted_at.is_(None),
                    include_aliases=True,
               )
          )
