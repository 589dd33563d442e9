# routers/payment_modes.py
"""
Payment mode reference data (cash, bank transfer, mobile money...).
Every role can read them; only admins edit.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import PageParams, get_current_user, get_page_params
from exceptions import ConflictError
from models import PaymentMode, User
from schemas.common import ItemResponse, MessageResponse, PageResponse
from schemas.payment import PaymentModeCreate, PaymentModeResponse, PaymentModeUpdate
from services.authorization import Action, authorize
from services.records import apply_changes, get_deleted_or_404, get_or_404
from utils.pagination import page_payload, paginate

router = APIRouter(prefix="/api/payment-modes", tags=["payment-modes"])


def _check_code_free(db: Session, code: str, mode_id: int = None) -> None:
     query = (
          db.query(PaymentMode.id)
          .execution_options(include_deleted=True)
          .filter(PaymentMode.code == code)
     )
     if mode_id is not None:
          query = query.filter(PaymentMode.id != mode_id)
     if query.first():
          raise ConflictError(f"Payment mode code '{code}' already exists")


@router.get("", response_model=PageResponse[PaymentModeResponse], summary="List payment modes")
def list_payment_modes(
     paging: PageParams = Depends(get_page_params),
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user),
):
     authorize(user, "payment_mode", Action.READ)
     query = db.query(PaymentMode).order_by(PaymentMode.display_name)
     items, total, total_pages = paginate(query, paging.page, paging.limit)
     data = [PaymentModeResponse.model_validate(m) for m in items]
     return page_payload(data, total, paging.page, total_pages)


@router.get("/{mode_id}", response_model=ItemResponse[PaymentModeResponse], summary="Get payment mode by ID")
def get_payment_mode(
     mode_id: int,
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user),
):
     authorize(user, "payment_mode", Action.READ)
     mode = get_or_404(db, PaymentMode, mode_id, "Payment mode")
     return {"success": True, "data": PaymentModeResponse.model_validate(mode)}


@router.post(
     "",
     response_model=ItemResponse[PaymentModeResponse],
     status_code=status.HTTP_201_CREATED,
     summary="Create a payment mode"
)
def create_payment_mode(
     data: PaymentModeCreate,
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user),
):
     authorize(user, "payment_mode", Action.CREATE)
     _check_code_free(db, data.code)
     mode = PaymentMode(**data.model_dump())
     db.add(mode)
     db.commit()
     return {
          "success": True,
          "message": "Payment mode created successfully",
          "data": PaymentModeResponse.model_validate(mode),
     }


@router.put("/{mode_id}", response_model=ItemResponse[PaymentModeResponse], summary="Update a payment mode")
def update_payment_mode(
     mode_id: int,
     data: PaymentModeUpdate,
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user),
):
     authorize(user, "payment_mode", Action.UPDATE)
     mode = get_or_404(db, PaymentMode, mode_id, "Payment mode")
     changes = {k: v for k, v in data.model_dump(exclude_unset=True).items() if v is not None or k == "description"}
     if "code" in changes:
          _check_code_free(db, changes["code"], mode.id)
     apply_changes(mode, changes)
     db.commit()
     return {
          "success": True,
          "message": "Payment mode updated successfully",
          "data": PaymentModeResponse.model_validate(mode),
     }


@router.delete("/{mode_id}", response_model=MessageResponse, summary="Soft-delete a payment mode")
def delete_payment_mode(
     mode_id: int,
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user),
):
     authorize(user, "payment_mode", Action.DELETE)
     mode = get_or_404(db, PaymentMode, mode_id, "Payment mode")
     mode.soft_delete()
     db.commit()
     return {"success": True, "message": "Payment mode deleted successfully"}


@router.patch("/{mode_id}/restore", response_model=ItemResponse[PaymentModeResponse], summary="Restore a payment mode")
def restore_payment_mode(
     mode_id: int,
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user),
):
     authorize(user, "payment_mode", Action.RESTORE)
     mode = get_deleted_or_404(db, PaymentMode, mode_id, "Payment mode")
     mode.restore()
     db.commit()
     return {
          "success": True,
          "message": "Payment mode restored successfully",
          "data": PaymentModeResponse.model_validate(mode),
     }
