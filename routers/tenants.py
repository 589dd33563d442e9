# routers/tenants.py
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import PageParams, get_current_user, get_page_params
from models import Tenant, User
from schemas.common import ItemResponse, MessageResponse, PageResponse
from schemas.tenant import TenantCreate, TenantResponse, TenantUpdate
from services.authorization import Action, authorize
from services.records import get_deleted_or_404, get_or_404
from services.tenant_service import TenantService
from utils.pagination import page_payload, paginate

router = APIRouter(prefix="/api/tenants", tags=["tenants"])


@router.get("", response_model=PageResponse[TenantResponse], summary="List tenants")
def list_tenants(
     search: Optional[str] = Query(None, description="Match on name, company, email, phone or TIN"),
     paging: PageParams = Depends(get_page_params),
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user),
):
     authorize(user, "tenant", Action.READ)
     items, total, total_pages = paginate(TenantService.list_query(db, search), paging.page, paging.limit)
     data = [TenantResponse.model_validate(t) for t in items]
     return page_payload(data, total, paging.page, total_pages)


@router.get("/{tenant_id}", response_model=ItemResponse[TenantResponse], summary="Get tenant by ID")
def get_tenant(
     tenant_id: int,
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user),
):
     authorize(user, "tenant", Action.READ)
     tenant = get_or_404(db, Tenant, tenant_id, "Tenant")
     return {"success": True, "data": TenantResponse.model_validate(tenant)}


@router.post(
     "",
     response_model=ItemResponse[TenantResponse],
     status_code=status.HTTP_201_CREATED,
     summary="Create a tenant"
)
def create_tenant(
     data: TenantCreate,
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user),
):
     authorize(user, "tenant", Action.CREATE)
     tenant = TenantService.create_tenant(db, data)
     db.commit()
     return {"success": True, "message": "Tenant created successfully", "data": TenantResponse.model_validate(tenant)}


@router.put("/{tenant_id}", response_model=ItemResponse[TenantResponse], summary="Update a tenant")
@router.patch("/{tenant_id}", response_model=ItemResponse[TenantResponse], summary="Partially update a tenant")
def update_tenant(
     tenant_id: int,
     data: TenantUpdate,
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user),
):
     authorize(user, "tenant", Action.UPDATE)
     tenant = get_or_404(db, Tenant, tenant_id, "Tenant")
     TenantService.update_tenant(db, tenant, data)
     db.commit()
     return {"success": True, "message": "Tenant updated successfully", "data": TenantResponse.model_validate(tenant)}


@router.delete("/{tenant_id}", response_model=MessageResponse, summary="Soft-delete a tenant")
def delete_tenant(
     tenant_id: int,
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user),
):
     authorize(user, "tenant", Action.DELETE)
     tenant = get_or_404(db, Tenant, tenant_id, "Tenant")
     tenant.soft_delete()
     db.commit()
     return {"success": True, "message": "Tenant deleted successfully"}


@router.patch("/{tenant_id}/restore", response_model=ItemResponse[TenantResponse], summary="Restore a tenant")
def restore_tenant(
     tenant_id: int,
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user),
):
     authorize(user, "tenant", Action.RESTORE)
     tenant = get_deleted_or_404(db, Tenant, tenant_id, "Tenant")
     tenant.restore()
     db.commit()
     return {"success": True, "message": "Tenant restored successfully", "data": TenantResponse.model_validate(tenant)}
