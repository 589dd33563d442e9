# schemas/lease.py
"""
Pydantic schemas for Lease API request/response validation.

Lease payloads use camelCase on the wire (startDate, leaseAmount...);
field names stay snake_case in Python.
"""
from datetime import date, datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict, model_validator
from pydantic.alias_generators import to_camel

from models.lease import LeaseStatus

CAMEL_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LeaseCreate(BaseModel):
     start_date: date
     end_date: date
     lease_amount: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2)
     local_id: int = Field(..., gt=0)
     tenant_id: int = Field(..., gt=0)
     status: LeaseStatus = LeaseStatus.ACTIVE

     model_config = ConfigDict(
          alias_generator=to_camel,
          populate_by_name=True,
          json_schema_extra={
               "example": {
                    "startDate": "2025-01-01",
                    "endDate": "2025-12-31",
                    "leaseAmount": 1200.00,
                    "localId": 1,
                    "tenantId": 1
               }
          }
     )

     @model_validator(mode="after")
     def check_dates(self):
          if self.end_date <= self.start_date:
               raise ValueError("endDate must be after startDate")
          return self


class LeaseUpdate(BaseModel):
     """Only provided fields are updated; dates are re-validated against the stored ones."""
     start_date: Optional[date] = None
     end_date: Optional[date] = None
     lease_amount: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
     local_id: Optional[int] = Field(None, gt=0)
     tenant_id: Optional[int] = Field(None, gt=0)
     status: Optional[LeaseStatus] = None

     model_config = CAMEL_CONFIG


class LeaseTenant(BaseModel):
     id: int
     name: str
     company_name: Optional[str] = None

     model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class LeaseLocal(BaseModel):
     id: int
     reference_code: str
     property_id: int
     property_name: Optional[str] = None

     model_config = CAMEL_CONFIG


class LeaseResponse(BaseModel):
     id: int
     reference: str
     start_date: date
     end_date: date
     lease_amount: float
     status: LeaseStatus
     local_id: int
     tenant_id: int
     tenant: Optional[LeaseTenant] = None
     local: Optional[LeaseLocal] = None
     total_paid: float = 0
     balance: float = 0
     created_at: Optional[datetime] = None

     model_config = CAMEL_CONFIG
