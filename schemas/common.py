# schemas/common.py
"""
Response envelopes shared by every resource.

List endpoints answer ``{success, data, total, page, totalPages}``;
single-record endpoints answer ``{success, data, message}``.
"""
from typing import Generic, List, Optional, TypeVar
from pydantic import BaseModel, Field, ConfigDict

T = TypeVar("T")


class PageResponse(BaseModel, Generic[T]):
     """Paginated list of records."""
     success: bool = True
     data: List[T]
     total: int
     page: int
     total_pages: int = Field(..., alias="totalPages")

     model_config = ConfigDict(populate_by_name=True)


class ItemResponse(BaseModel, Generic[T]):
     """Single record, optionally with a human readable message."""
     success: bool = True
     message: Optional[str] = None
     data: T


class MessageResponse(BaseModel):
     success: bool = True
     message: str


class CountMessageResponse(MessageResponse):
     """Result of a batch job (lease expiry, payment reminders)."""
     count: int

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "success": True,
                    "message": "3 lease(s) marked as expired.",
                    "count": 3
               }
          }
     )


class ErrorResponse(BaseModel):
     success: bool = False
     message: str
