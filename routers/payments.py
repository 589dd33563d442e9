# routers/payments.py
"""
Payment API routes.

POST/PUT take multipart/form-data so a proof of payment (jpeg, png,
webp or pdf) can travel with the fields. Stored proofs are served by
GET /payments/proof/{payment_id}/{filename}.
"""
from datetime import date
from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from fastapi.responses import FileResponse
from sqlalchemy.orm import Session

from database import get_session
from dependencies import PageParams, get_current_user, get_page_params
from exceptions import NotFoundError
from models import Payment, User
from schemas.common import CountMessageResponse, ItemResponse, MessageResponse, PageResponse
from schemas.payment import PaymentResponse
from services.authorization import Action, authorize
from services.lease_lifecycle import notify_upcoming_payments
from services.payment_service import PaymentService, proof_folder
from services.records import get_deleted_or_404
from utils.files import stored_file_path
from utils.pagination import page_payload, paginate

router = APIRouter(prefix="/api/payments", tags=["payments"])


def _get_payment(db: Session, user: User, payment_id: int, action: Action = Action.READ) -> Payment:
     payment = db.query(Payment).filter(Payment.id == payment_id).first()
     if not payment:
          raise NotFoundError("Payment not found")
     authorize(user, "payment", action, payment)
     return payment


def _uploaded(proof: Optional[UploadFile]) -> Optional[UploadFile]:
     # Browsers send an empty part when no file is picked
     if proof is None or not proof.filename:
          return None
     return proof


@router.get("", response_model=PageResponse[PaymentResponse], summary="List payments")
def list_payments(
     term: Optional[str] = Query(None, description="Match on invoice number or lease reference"),
     lease_id: Optional[int] = Query(None, alias="leaseId"),
     paging: PageParams = Depends(get_page_params),
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user),
):
     authorize(user, "payment", Action.READ)
     query = PaymentService.list_query(db, user, term=term, lease_id=lease_id)
     items, total, total_pages = paginate(query, paging.page, paging.limit)
     data = [PaymentService.to_response(p) for p in items]
     return page_payload(data, total, paging.page, total_pages)


@router.post(
     "/notify-upcoming",
     response_model=CountMessageResponse,
     summary="Create reminders for payment periods ending within a month"
)
def notify_upcoming(
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user),
):
     authorize(user, "payment", Action.TRIGGER)
     count = notify_upcoming_payments(db)
     db.commit()
     return {"success": True, "message": f"{count} payment reminder(s) created.", "count": count}


@router.get("/proof/{payment_id}/{filename}", response_class=FileResponse, summary="Download a payment proof")
def get_proof(
     payment_id: int,
     filename: str,
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user),
):
     _get_payment(db, user, payment_id)
     path = stored_file_path(proof_folder(payment_id), filename)
     return FileResponse(path)


@router.get("/{payment_id}", response_model=ItemResponse[PaymentResponse], summary="Get payment by ID")
def get_payment(
     payment_id: int,
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user),
):
     payment = _get_payment(db, user, payment_id)
     return {"success": True, "data": PaymentService.to_response(payment)}


@router.post(
     "",
     response_model=ItemResponse[PaymentResponse],
     status_code=status.HTTP_201_CREATED,
     summary="Record a payment"
)
def create_payment(
     amount: Decimal = Form(..., gt=0),
     lease_id: int = Form(..., alias="leaseId"),
     payment_mode_id: int = Form(..., alias="paymentModeId"),
     start_date: date = Form(..., alias="startDate"),
     end_date: date = Form(..., alias="endDate"),
     proof: Optional[UploadFile] = File(None),
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user),
):
     """
     Record a payment for the period **startDate** .. **endDate**.

     - **proof**: optional jpeg/png/webp/pdf, up to the configured size
     - the invoice number is generated
     """
     authorize(user, "payment", Action.CREATE)
     payment = PaymentService.create_payment(
          db,
          user,
          amount=amount,
          lease_id=lease_id,
          payment_mode_id=payment_mode_id,
          start_date=start_date,
          end_date=end_date,
          proof=_uploaded(proof),
     )
     db.commit()
     return {"success": True, "message": "Payment created successfully", "data": PaymentService.to_response(payment)}


@router.put("/{payment_id}", response_model=ItemResponse[PaymentResponse], summary="Update a payment")
def update_payment(
     payment_id: int,
     amount: Optional[Decimal] = Form(None, gt=0),
     lease_id: Optional[int] = Form(None, alias="leaseId"),
     payment_mode_id: Optional[int] = Form(None, alias="paymentModeId"),
     start_date: Optional[date] = Form(None, alias="startDate"),
     end_date: Optional[date] = Form(None, alias="endDate"),
     proof: Optional[UploadFile] = File(None),
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user),
):
     """
     Partial update. A new **proof** replaces the stored file. Unread
     payment reminders for the lease are marked read.
     """
     payment = _get_payment(db, user, payment_id, Action.UPDATE)
     changes = {
          "amount": amount,
          "lease_id": lease_id,
          "payment_mode_id": payment_mode_id,
          "start_date": start_date,
          "end_date": end_date,
     }
     PaymentService.update_payment(db, user, payment, changes, proof=_uploaded(proof))
     db.commit()
     return {"success": True, "message": "Payment updated successfully", "data": PaymentService.to_response(payment)}


@router.delete("/{payment_id}", response_model=MessageResponse, summary="Soft-delete a payment")
def delete_payment(
     payment_id: int,
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user),
):
     payment = _get_payment(db, user, payment_id, Action.DELETE)
     payment.soft_delete()
     db.commit()
     return {"success": True, "message": "Payment deleted successfully"}


@router.patch("/{payment_id}/restore", response_model=ItemResponse[PaymentResponse], summary="Restore a payment")
def restore_payment(
     payment_id: int,
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user),
):
     authorize(user, "payment", Action.RESTORE)
     payment = get_deleted_or_404(db, Payment, payment_id, "Payment")
     payment.restore()
     db.commit()
     return {"success": True, "message": "Payment restored successfully", "data": PaymentService.to_response(payment)}
