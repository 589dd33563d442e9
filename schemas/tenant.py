# schemas/tenant.py
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict


class TenantCreate(BaseModel):
     name: str = Field(..., min_length=1, max_length=200)
     email: Optional[str] = Field(None, max_length=255, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
     phone: Optional[str] = Field(None, max_length=50)
     company_name: Optional[str] = Field(None, max_length=255)
     tin_number: Optional[str] = Field(None, max_length=100)

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "name": "John Doe",
                    "email": "john@acme.rw",
                    "company_name": "Acme Ltd",
                    "tin_number": "102345678"
               }
          }
     )


class TenantUpdate(BaseModel):
     name: Optional[str] = Field(None, min_length=1, max_length=200)
     email: Optional[str] = Field(None, max_length=255, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
     phone: Optional[str] = Field(None, max_length=50)
     company_name: Optional[str] = Field(None, max_length=255)
     tin_number: Optional[str] = Field(None, max_length=100)


class TenantResponse(BaseModel):
     id: int
     name: str
     email: Optional[str] = None
     phone: Optional[str] = None
     company_name: Optional[str] = None
     tin_number: Optional[str] = None
     created_at: Optional[datetime] = None

     model_config = ConfigDict(from_attributes=True)
