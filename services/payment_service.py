# services/payment_service.py
"""
Payment Service - payments against leases, with an optional proof file.

Proofs are stored under UPLOAD_DIR/payments/<payment id>/ and served by
GET /api/payments/proof/<payment id>/<filename>.
"""
import logging
import secrets
import time
from datetime import date
from decimal import Decimal
from typing import Optional

from fastapi import UploadFile
from sqlalchemy import or_, update
from sqlalchemy.orm import Session

from config import PROOF_IMAGE_WIDTH
from exceptions import LandlordProError, NotFoundError, ValidationError
from models import Lease, Local, Notification, NotificationType, Payment, PaymentMode, User
from services.authorization import Action, authorize, scope_query
from utils.files import PROOF_TYPES, discard_upload, save_upload, validate_upload

logger = logging.getLogger(__name__)

INVOICE_ATTEMPTS = 5


def proof_folder(payment_id: int) -> str:
     return f"payments/{payment_id}"


class PaymentService:

     @staticmethod
     def generate_invoice_number(db: Session) -> str:
          for _ in range(INVOICE_ATTEMPTS):
               number = f"INV-{int(time.time() * 1000)}-{secrets.randbelow(1000):03d}"
               taken = (
                    db.query(Payment.id)
                    .execution_options(include_deleted=True)
                    .filter(Payment.invoice_number == number)
                    .first()
               )
               if not taken:
                    return number
          raise LandlordProError("Could not generate a unique invoice number")

     @staticmethod
     def _load_lease(db: Session, user: User, lease_id: int) -> Lease:
          lease = db.query(Lease).filter(Lease.id == lease_id).first()
          if not lease:
               raise NotFoundError("Lease not found")
          authorize(user, "lease", Action.READ, lease)
          return lease

     @staticmethod
     def _load_mode(db: Session, payment_mode_id: int) -> PaymentMode:
          mode = db.query(PaymentMode).filter(PaymentMode.id == payment_mode_id).first()
          if not mode:
               raise NotFoundError("Payment mode not found")
          return mode

     @staticmethod
     def list_query(db: Session, user: User, term: Optional[str] = None, lease_id: Optional[int] = None):
          query = (
               db.query(Payment)
               .join(Lease, Payment.lease_id == Lease.id)
               .outerjoin(Local, Lease.local_id == Local.id)
          )
          query = scope_query(db, query, user, "payment")
          if term:
               pattern = f"%{term.strip()}%"
               query = query.filter(or_(Payment.invoice_number.ilike(pattern), Lease.reference.ilike(pattern)))
          if lease_id is not None:
               query = query.filter(Payment.lease_id == lease_id)
          return query.order_by(Payment.created_at.desc(), Payment.id.desc())

     @staticmethod
     def _store_proof(db: Session, payment: Payment, proof: UploadFile) -> None:
          filename = save_upload(db, proof, proof_folder(payment.id), max_width=PROOF_IMAGE_WIDTH)
          payment.proof_url = f"/api/payments/proof/{payment.id}/{filename}"

     @staticmethod
     def create_payment(
          db: Session,
          user: User,
          amount: Decimal,
          lease_id: int,
          payment_mode_id: int,
          start_date: date,
          end_date: date,
          proof: Optional[UploadFile] = None,
     ) -> Payment:
          """
          Record a payment and store its proof.

          Raises:
               ValidationError: bad period or rejected proof file
               NotFoundError: lease or payment mode missing
          """
          if start_date > end_date:
               raise ValidationError("Start date cannot be after end date")
          lease = PaymentService._load_lease(db, user, lease_id)
          mode = PaymentService._load_mode(db, payment_mode_id)
          if proof is not None:
               validate_upload(proof, PROOF_TYPES)
          elif mode.requires_proof:
               logger.warning("Payment for lease %s recorded without proof (mode %s requires one)", lease.id, mode.code)

          payment = Payment(
               amount=amount,
               start_date=start_date,
               end_date=end_date,
               invoice_number=PaymentService.generate_invoice_number(db),
               lease_id=lease.id,
               payment_mode_id=mode.id,
          )
          db.add(payment)
          db.flush()  # Flush to get the ID for the proof folder

          if proof is not None:
               PaymentService._store_proof(db, payment, proof)
               db.flush()
          logger.info("Payment %s recorded for lease %s", payment.invoice_number, lease.id)
          return payment

     @staticmethod
     def update_payment(
          db: Session,
          user: User,
          payment: Payment,
          changes: dict,
          proof: Optional[UploadFile] = None,
     ) -> Payment:
          """
          Partial update. A new proof replaces the stored one, and unread
          payment_due reminders for the lease are marked read.
          """
          start = changes.get("start_date") or payment.start_date
          end = changes.get("end_date") or payment.end_date
          if start > end:
               raise ValidationError("Start date cannot be after end date")
          if changes.get("lease_id") is not None:
               PaymentService._load_lease(db, user, changes["lease_id"])
          if changes.get("payment_mode_id") is not None:
               PaymentService._load_mode(db, changes["payment_mode_id"])
          if proof is not None:
               validate_upload(proof, PROOF_TYPES)

          for field, value in changes.items():
               if value is not None:
                    setattr(payment, field, value)

          if proof is not None:
               if payment.proof_url:
                    discard_upload(db, proof_folder(payment.id), payment.proof_url.rsplit("/", 1)[-1])
               PaymentService._store_proof(db, payment, proof)
          db.flush()

          marked = PaymentService.mark_reminders_read(db, payment.lease_id)
          if marked:
               logger.info("%d payment reminder(s) for lease %s marked read", marked, payment.lease_id)
          return payment

     @staticmethod
     def mark_reminders_read(db: Session, lease_id: int) -> int:
          result = db.execute(
               update(Notification)
               .where(
                    Notification.lease_id == lease_id,
                    Notification.type == NotificationType.PAYMENT_DUE,
                    Notification.is_read.is_(False),
               )
               .values(is_read=True)
               .execution_options(synchronize_session="fetch")
          )
          return result.rowcount or 0

     @staticmethod
     def to_response(payment: Payment) -> dict:
          return {
               "id": payment.id,
               "amount": float(payment.amount),
               "start_date": payment.start_date,
               "end_date": payment.end_date,
               "invoice_number": payment.invoice_number,
               "proof_url": payment.proof_url,
               "lease_id": payment.lease_id,
               "lease_reference": payment.lease.reference if payment.lease else None,
               "payment_mode_id": payment.payment_mode_id,
               "payment_mode_name": payment.payment_mode.display_name if payment.payment_mode else None,
               "created_at": payment.created_at,
          }
