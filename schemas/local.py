# schemas/local.py
"""
Pydantic schemas for locals (rentable units).
"""
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict

from models.local import LocalStatus


class LocalCreate(BaseModel):
     reference_code: str = Field(..., min_length=1, max_length=100)
     status: LocalStatus = LocalStatus.AVAILABLE
     size_m2: Optional[Decimal] = Field(None, gt=0, max_digits=10, decimal_places=2)
     rent_price: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
     property_id: int = Field(..., gt=0)
     floor_id: int = Field(..., gt=0)

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "reference_code": "A-101",
                    "status": "available",
                    "size_m2": 45.5,
                    "property_id": 1,
                    "floor_id": 2
               }
          }
     )


class LocalUpdate(BaseModel):
     """Only provided fields are updated."""
     reference_code: Optional[str] = Field(None, min_length=1, max_length=100)
     status: Optional[LocalStatus] = None
     size_m2: Optional[Decimal] = Field(None, gt=0, max_digits=10, decimal_places=2)
     rent_price: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
     property_id: Optional[int] = Field(None, gt=0)
     floor_id: Optional[int] = Field(None, gt=0)


class LocalStatusUpdate(BaseModel):
     status: LocalStatus

     model_config = ConfigDict(json_schema_extra={"example": {"status": "occupied"}})


class LocalSummary(BaseModel):
     id: int
     reference_code: str
     status: LocalStatus
     size_m2: Optional[float] = None
     rent_price: Optional[float] = None

     model_config = ConfigDict(from_attributes=True)


class LocalResponse(LocalSummary):
     property_id: int
     property_name: Optional[str] = None
     floor_id: int
     floor_name: Optional[str] = None
     level_number: Optional[int] = None
