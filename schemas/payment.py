# schemas/payment.py
"""
Pydantic schemas for payments and payment modes.

Payments are created through multipart forms (the proof file travels
with the fields), so only the response and payment-mode bodies are
modelled here. Both use camelCase on the wire.
"""
from datetime import date, datetime
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict
from pydantic.alias_generators import to_camel


class PaymentModeCreate(BaseModel):
     code: str = Field(..., min_length=1, max_length=50)
     display_name: str = Field(..., min_length=1, max_length=100)
     requires_proof: bool = False
     description: Optional[str] = None

     model_config = ConfigDict(
          alias_generator=to_camel,
          populate_by_name=True,
          json_schema_extra={
               "example": {
                    "code": "BANK",
                    "displayName": "Bank transfer",
                    "requiresProof": True
               }
          }
     )


class PaymentModeUpdate(BaseModel):
     code: Optional[str] = Field(None, min_length=1, max_length=50)
     display_name: Optional[str] = Field(None, min_length=1, max_length=100)
     requires_proof: Optional[bool] = None
     description: Optional[str] = None

     model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PaymentModeResponse(BaseModel):
     id: int
     code: str
     display_name: str
     requires_proof: bool
     description: Optional[str] = None

     model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class PaymentResponse(BaseModel):
     id: int
     amount: float
     start_date: date
     end_date: date
     invoice_number: str
     proof_url: Optional[str] = None
     lease_id: int
     lease_reference: Optional[str] = None
     payment_mode_id: int
     payment_mode_name: Optional[str] = None
     created_at: Optional[datetime] = None

     model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
