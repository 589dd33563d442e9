# schemas/expense.py
"""
Pydantic schemas for expenses recorded against a property or a local.
"""
from datetime import date as date_type
from datetime import datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict


class ExpenseCreate(BaseModel):
     amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)
     category: str = Field(..., min_length=1, max_length=100)
     description: Optional[str] = None
     date: Optional[date_type] = None
     property_id: Optional[int] = Field(None, gt=0)
     local_id: Optional[int] = Field(None, gt=0)

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "amount": 150.00,
                    "category": "maintenance",
                    "description": "Elevator service",
                    "date": "2025-03-14",
                    "property_id": 1
               }
          }
     )


class ExpenseUpdate(BaseModel):
     amount: Optional[Decimal] = Field(None, gt=0, max_digits=12, decimal_places=2)
     category: Optional[str] = Field(None, min_length=1, max_length=100)
     description: Optional[str] = None
     date: Optional[date_type] = None
     property_id: Optional[int] = Field(None, gt=0)
     local_id: Optional[int] = Field(None, gt=0)


class ExpenseResponse(BaseModel):
     id: int
     amount: float
     category: str
     description: Optional[str] = None
     date: date_type
     property_id: Optional[int] = None
     property_name: Optional[str] = None
     local_id: Optional[int] = None
     local_reference: Optional[str] = None
     created_at: Optional[datetime] = None

     model_config = ConfigDict(from_attributes=True)
