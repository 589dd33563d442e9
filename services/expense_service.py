# services/expense_service.py
from typing import Optional

from sqlalchemy.orm import Session

from exceptions import NotFoundError, ValidationError
from models import Expense, Local, Property, User
from schemas.expense import ExpenseCreate, ExpenseUpdate
from services.authorization import Action, authorize, scope_query
from services.records import apply_changes


class ExpenseService:

     @staticmethod
     def check_targets(db: Session, user: User, property_id: Optional[int], local_id: Optional[int]) -> None:
          """
          Referenced property and local must exist and be visible to the
          user; when both are given the local must belong to the property.
          """
          prop = None
          if property_id is not None:
               prop = db.query(Property).filter(Property.id == property_id).first()
               if not prop:
                    raise NotFoundError("Property not found")
               authorize(user, "property", Action.READ, prop)
          if local_id is not None:
               local = db.query(Local).filter(Local.id == local_id).first()
               if not local:
                    raise NotFoundError("Local not found")
               authorize(user, "local", Action.READ, local)
               if prop is not None and local.property_id != prop.id:
                    raise ValidationError("Local does not belong to the selected property")

     @staticmethod
     def list_query(
          db: Session,
          user: User,
          category: Optional[str] = None,
          property_id: Optional[int] = None,
          local_id: Optional[int] = None,
     ):
          query = scope_query(db, db.query(Expense), user, "expense")
          if category:
               query = query.filter(Expense.category == category)
          if property_id is not None:
               query = query.filter(Expense.property_id == property_id)
          if local_id is not None:
               query = query.filter(Expense.local_id == local_id)
          return query.order_by(Expense.date.desc(), Expense.id.desc())

     @staticmethod
     def create_expense(db: Session, user: User, data: ExpenseCreate) -> Expense:
          ExpenseService.check_targets(db, user, data.property_id, data.local_id)
          values = data.model_dump()
          if values["date"] is None:
               values.pop("date")
          expense = Expense(**values)
          db.add(expense)
          db.flush()
          return expense

     @staticmethod
     def update_expense(db: Session, user: User, expense: Expense, data: ExpenseUpdate) -> Expense:
          changes = data.model_dump(exclude_unset=True)
          for field in ("amount", "category", "date"):
               if field in changes and changes[field] is None:
                    raise ValidationError(f"{field} cannot be null")
          if "property_id" in changes or "local_id" in changes:
               ExpenseService.check_targets(
                    db,
                    user,
                    changes.get("property_id", expense.property_id),
                    changes.get("local_id", expense.local_id),
               )
          apply_changes(expense, changes)
          db.flush()
          return expense

     @staticmethod
     def to_response(expense: Expense) -> dict:
          return {
               "id": expense.id,
               "amount": float(expense.amount),
               "category": expense.category,
               "description": expense.description,
               "date": expense.date,
               "property_id": expense.property_id,
               "property_name": expense.parent_property.name if expense.parent_property else None,
               "local_id": expense.local_id,
               "local_reference": expense.local.reference_code if expense.local else None,
               "created_at": expense.created_at,
          }
