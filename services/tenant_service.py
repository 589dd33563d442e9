# services/tenant_service.py
from typing import Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from exceptions import ValidationError
from models import Tenant
from schemas.tenant import TenantCreate, TenantUpdate
from services.records import apply_changes


class TenantService:

     @staticmethod
     def list_query(db: Session, search: Optional[str] = None):
          query = db.query(Tenant)
          if search:
               term = f"%{search.strip()}%"
               query = query.filter(
                    or_(
                         Tenant.name.ilike(term),
                         Tenant.company_name.ilike(term),
                         Tenant.email.ilike(term),
                         Tenant.phone.ilike(term),
                         Tenant.tin_number.ilike(term),
                    )
               )
          return query.order_by(Tenant.name)

     @staticmethod
     def create_tenant(db: Session, data: TenantCreate) -> Tenant:
          tenant = Tenant(**data.model_dump())
          db.add(tenant)
          db.flush()
          return tenant

     @staticmethod
     def update_tenant(db: Session, tenant: Tenant, data: TenantUpdate) -> Tenant:
          changes = data.model_dump(exclude_unset=True)
          if "name" in changes and not changes["name"]:
               raise ValidationError("name cannot be empty")
          apply_changes(tenant, changes)
          db.flush()
          return tenant
