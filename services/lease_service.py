# services/lease_service.py
"""
Lease Service - rental agreements between a tenant and a local.

The lease reference is generated here ("LEASE-<TENANT-NAME>-<4 hex>")
and is never taken from the client. Manual status edits follow
LEASE_TRANSITIONS; active -> expired also happens automatically
(see services.lease_lifecycle).
"""
import logging
import re
import secrets
from decimal import Decimal
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from exceptions import LandlordProError, NotFoundError, ValidationError
from models import Lease, LeaseStatus, Local, Payment, Tenant, User
from schemas.lease import LeaseCreate, LeaseUpdate
from services.authorization import Action, authorize, scope_query
from services.records import apply_changes

logger = logging.getLogger(__name__)

REFERENCE_ATTEMPTS = 5


def slugify_name(name: str) -> str:
     slug = re.sub(r"[^A-Z0-9]+", "-", (name or "").upper()).strip("-")
     return slug[:60].rstrip("-") or "TENANT"


class LeaseService:

     @staticmethod
     def generate_reference(db: Session, tenant_name: str) -> str:
          slug = slugify_name(tenant_name)
          for _ in range(REFERENCE_ATTEMPTS):
               reference = f"LEASE-{slug}-{secrets.token_hex(2).upper()}"
               taken = (
                    db.query(Lease.id)
                    .execution_options(include_deleted=True)
                    .filter(Lease.reference == reference)
                    .first()
               )
               if not taken:
                    return reference
          raise LandlordProError("Could not generate a unique lease reference")

     @staticmethod
     def _load_local(db: Session, user: User, local_id: int) -> Local:
          local = db.query(Local).filter(Local.id == local_id).first()
          if not local:
               raise NotFoundError("Local not found")
          authorize(user, "local", Action.READ, local)
          return local

     @staticmethod
     def _load_tenant(db: Session, tenant_id: int) -> Tenant:
          tenant = db.query(Tenant).filter(Tenant.id == tenant_id).first()
          if not tenant:
               raise NotFoundError("Tenant not found")
          return tenant

     @staticmethod
     def list_query(
          db: Session,
          user: User,
          status: Optional[LeaseStatus] = None,
          local_id: Optional[int] = None,
          tenant_id: Optional[int] = None,
     ):
          query = db.query(Lease).outerjoin(Local, Lease.local_id == Local.id)
          query = scope_query(db, query, user, "lease")
          if status is not None:
               query = query.filter(Lease.status == status)
          if local_id is not None:
               query = query.filter(Lease.local_id == local_id)
          if tenant_id is not None:
               query = query.filter(Lease.tenant_id == tenant_id)
          return query.order_by(Lease.created_at.desc(), Lease.id.desc())

     @staticmethod
     def create_lease(db: Session, user: User, data: LeaseCreate) -> Lease:
          """
          Create a lease for an existing local and tenant.

          Raises:
               NotFoundError: local or tenant missing (or local outside a manager's scope)
          """
          local = LeaseService._load_local(db, user, data.local_id)
          tenant = LeaseService._load_tenant(db, data.tenant_id)

          lease = Lease(
               reference=LeaseService.generate_reference(db, tenant.name),
               start_date=data.start_date,
               end_date=data.end_date,
               lease_amount=data.lease_amount,
               status=data.status,
               local_id=local.id,
               tenant_id=tenant.id,
          )
          db.add(lease)
          db.flush()
          logger.info("Lease %s created for local %s", lease.reference, local.id)
          return lease

     @staticmethod
     def update_lease(db: Session, user: User, lease: Lease, data: LeaseUpdate) -> Lease:
          changes = data.model_dump(exclude_unset=True)
          for field in list(changes):
               if changes[field] is None:
                    raise ValidationError(f"{field} cannot be null")

          start = changes.get("start_date", lease.start_date)
          end = changes.get("end_date", lease.end_date)
          if end <= start:
               raise ValidationError("endDate must be after startDate")

          status = changes.get("status")
          if status is not None and not lease.can_transition_to(status):
               raise ValidationError(
                    f"Cannot change lease status from {lease.status.value} to {status.value}"
               )
          if "local_id" in changes:
               LeaseService._load_local(db, user, changes["local_id"])
          if "tenant_id" in changes:
               LeaseService._load_tenant(db, changes["tenant_id"])

          apply_changes(lease, changes)
          db.flush()
          return lease

     @staticmethod
     def total_paid(db: Session, lease_id: int) -> Decimal:
          total = (
               db.query(func.coalesce(func.sum(Payment.amount), 0))
               .filter(Payment.lease_id == lease_id, Payment.deleted_at.is_(None))
               .scalar()
          )
          return Decimal(str(total or 0))

     @staticmethod
     def to_response(db: Session, lease: Lease) -> dict:
          paid = LeaseService.total_paid(db, lease.id)
          amount = Decimal(str(lease.lease_amount or 0))
          tenant = lease.tenant
          local = lease.local
          return {
               "id": lease.id,
               "reference": lease.reference,
               "start_date": lease.start_date,
               "end_date": lease.end_date,
               "lease_amount": float(amount),
               "status": lease.status,
               "local_id": lease.local_id,
               "tenant_id": lease.tenant_id,
               "tenant": {
                    "id": tenant.id,
                    "name": tenant.name,
                    "company_name": tenant.company_name,
               } if tenant else None,
               "local": {
                    "id": local.id,
                    "reference_code": local.reference_code,
                    "property_id": local.property_id,
                    "property_name": local.parent_property.name if local.parent_property else None,
               } if local else None,
               "total_paid": float(paid),
               "balance": float(amount - paid),
               "created_at": lease.created_at,
          }
