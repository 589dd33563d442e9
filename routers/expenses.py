# routers/expenses.py
"""
Expense API routes. Expenses hang off a property, a local, or both.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import PageParams, get_current_user, get_page_params
from exceptions import NotFoundError
from models import Expense, User
from schemas.common import ItemResponse, MessageResponse, PageResponse
from schemas.expense import ExpenseCreate, ExpenseResponse, ExpenseUpdate
from services.authorization import Action, authorize
from services.expense_service import ExpenseService
from services.records import get_deleted_or_404
from utils.pagination import page_payload, paginate

router = APIRouter(prefix="/api/expenses", tags=["expenses"])


def _get_expense(db: Session, user: User, expense_id: int, action: Action = Action.READ) -> Expense:
     expense = db.query(Expense).filter(Expense.id == expense_id).first()
     if not expense:
          raise NotFoundError("Expense not found")
     authorize(user, "expense", action, expense)
     return expense


@router.get("", response_model=PageResponse[ExpenseResponse], summary="List expenses")
def list_expenses(
     category: Optional[str] = Query(None),
     property_id: Optional[int] = Query(None, alias="propertyId"),
     local_id: Optional[int] = Query(None, alias="localId"),
     paging: PageParams = Depends(get_page_params),
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user),
):
     authorize(user, "expense", Action.READ)
     query = ExpenseService.list_query(db, user, category=category, property_id=property_id, local_id=local_id)
     items, total, total_pages = paginate(query, paging.page, paging.limit)
     data = [ExpenseService.to_response(e) for e in items]
     return page_payload(data, total, paging.page, total_pages)


@router.get("/{expense_id}", response_model=ItemResponse[ExpenseResponse], summary="Get expense by ID")
def get_expense(
     expense_id: int,
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user),
):
     expense = _get_expense(db, user, expense_id)
     return {"success": True, "data": ExpenseService.to_response(expense)}


@router.post(
     "",
     response_model=ItemResponse[ExpenseResponse],
     status_code=status.HTTP_201_CREATED,
     summary="Record an expense"
)
def create_expense(
     data: ExpenseCreate,
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user),
):
     authorize(user, "expense", Action.CREATE)
     expense = ExpenseService.create_expense(db, user, data)
     db.commit()
     return {"success": True, "message": "Expense created successfully", "data": ExpenseService.to_response(expense)}


@router.put("/{expense_id}", response_model=ItemResponse[ExpenseResponse], summary="Update an expense")
def update_expense(
     expense_id: int,
     data: ExpenseUpdate,
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user),
):
     expense = _get_expense(db, user, expense_id, Action.UPDATE)
     ExpenseService.update_expense(db, user, expense, data)
     db.commit()
     return {"success": True, "message": "Expense updated successfully", "data": ExpenseService.to_response(expense)}


@router.delete("/{expense_id}", response_model=MessageResponse, summary="Soft-delete an expense")
def delete_expense(
     expense_id: int,
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user),
):
     expense = _get_expense(db, user, expense_id, Action.DELETE)
     expense.soft_delete()
     db.commit()
     return {"success": True, "message": "Expense deleted successfully"}


@router.patch("/{expense_id}/restore", response_model=ItemResponse[ExpenseResponse], summary="Restore an expense")
def restore_expense(
     expense_id: int,
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user),
):
     authorize(user, "expense", Action.RESTORE)
     expense = get_deleted_or_404(db, Expense, expense_id, "Expense")
     expense.restore()
     db.commit()
     return {"success": True, "message": "Expense restored successfully", "data": ExpenseService.to_response(expense)}
