# routers/leases.py
"""
Lease API routes, the manual expiry trigger and the PDF lease report.

Managers work on leases of locals in the properties they manage.
"""
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import Response
from sqlalchemy.orm import Session

from database import get_session
from dependencies import PageParams, get_current_user, get_page_params
from exceptions import NotFoundError
from models import Lease, LeaseStatus, User
from schemas.common import CountMessageResponse, ItemResponse, MessageResponse, PageResponse
from schemas.lease import LeaseCreate, LeaseResponse, LeaseUpdate
from services.authorization import Action, authorize
from services.lease_lifecycle import expire_leases
from services.lease_service import LeaseService
from services.records import get_deleted_or_404
from services.report_service import lease_report_rows, render_lease_report
from utils.pagination import page_payload, paginate

router = APIRouter(prefix="/api/leases", tags=["leases"])
report_router = APIRouter(prefix="/api/report", tags=["leases"])


def _get_lease(db: Session, user: User, lease_id: int, action: Action = Action.READ) -> Lease:
     lease = db.query(Lease).filter(Lease.id == lease_id).first()
     if not lease:
          raise NotFoundError("Lease not found")
     authorize(user, "lease", action, lease)
     return lease


@router.get("", response_model=PageResponse[LeaseResponse], summary="List leases")
def list_leases(
     lease_status: Optional[LeaseStatus] = Query(None, alias="status"),
     local_id: Optional[int] = Query(None, alias="localId"),
     tenant_id: Optional[int] = Query(None, alias="tenantId"),
     paging: PageParams = Depends(get_page_params),
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user),
):
     authorize(user, "lease", Action.READ)
     query = LeaseService.list_query(db, user, status=lease_status, local_id=local_id, tenant_id=tenant_id)
     items, total, total_pages = paginate(query, paging.page, paging.limit)
     data = [LeaseService.to_response(db, lease) for lease in items]
     return page_payload(data, total, paging.page, total_pages)


@router.post(
     "/trigger-expired",
     response_model=CountMessageResponse,
     summary="Mark leases past their end date as expired"
)
def trigger_expired(
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user),
):
     """
     Runs the same pass as the nightly job. Safe to call repeatedly: a
     second call finds nothing left to expire.
     """
     authorize(user, "lease", Action.TRIGGER)
     count = expire_leases(db)
     db.commit()
     return {"success": True, "message": f"{count} lease(s) marked as expired.", "count": count}


@router.get("/{lease_id}", response_model=ItemResponse[LeaseResponse], summary="Get lease by ID")
def get_lease(
     lease_id: int,
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user),
):
     lease = _get_lease(db, user, lease_id)
     return {"success": True, "data": LeaseService.to_response(db, lease)}


@router.post(
     "",
     response_model=ItemResponse[LeaseResponse],
     status_code=status.HTTP_201_CREATED,
     summary="Create a lease"
)
def create_lease(
     data: LeaseCreate,
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user),
):
     """
     Create a lease binding **tenantId** to **localId**.

     - **endDate** must be after **startDate**
     - the reference is generated from the tenant's name
     """
     authorize(user, "lease", Action.CREATE)
     lease = LeaseService.create_lease(db, user, data)
     db.commit()
     return {"success": True, "message": "Lease created successfully", "data": LeaseService.to_response(db, lease)}


@router.put("/{lease_id}", response_model=ItemResponse[LeaseResponse], summary="Update a lease")
def update_lease(
     lease_id: int,
     data: LeaseUpdate,
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user),
):
     """
     Partial update. Status changes are limited to active -> expired,
     active -> cancelled and expired -> cancelled.
     """
     lease = _get_lease(db, user, lease_id, Action.UPDATE)
     LeaseService.update_lease(db, user, lease, data)
     db.commit()
     return {"success": True, "message": "Lease updated successfully", "data": LeaseService.to_response(db, lease)}


@router.delete("/{lease_id}", response_model=MessageResponse, summary="Soft-delete a lease")
def delete_lease(
     lease_id: int,
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user),
):
     lease = _get_lease(db, user, lease_id, Action.DELETE)
     lease.soft_delete()
     db.commit()
     return {"success": True, "message": "Lease deleted successfully"}


@router.patch("/{lease_id}/restore", response_model=ItemResponse[LeaseResponse], summary="Restore a lease")
def restore_lease(
     lease_id: int,
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user),
):
     authorize(user, "lease", Action.RESTORE)
     lease = get_deleted_or_404(db, Lease, lease_id, "Lease")
     lease.restore()
     db.commit()
     return {"success": True, "message": "Lease restored successfully", "data": LeaseService.to_response(db, lease)}


@report_router.get(
     "/pdf",
     response_class=Response,
     responses={200: {"content": {"application/pdf": {}}}},
     summary="Download the lease report as PDF"
)
def lease_report_pdf(
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user),
):
     rows = lease_report_rows(db, user)
     today = date.today()
     pdf = render_lease_report(rows, today)
     return Response(
          content=pdf,
          media_type="application/pdf",
          headers={"Content-Disposition": f"attachment; filename=leases_report_{today.isoformat()}.pdf"},
     )
