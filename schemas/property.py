# schemas/property.py
"""
Pydantic schemas for Property API request/response validation.
"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict

from .floor import OccupancyStats


class PropertyCreate(BaseModel):
     """Schema for creating a property; its floors are generated from the layout fields."""
     name: str = Field(..., min_length=1, max_length=255)
     location: str = Field(..., min_length=1, max_length=255)
     description: Optional[str] = None
     number_of_floors: int = Field(1, ge=1, le=200, description="Above-ground levels, ground floor included")
     has_basement: bool = False
     manager_id: Optional[int] = Field(None, gt=0)

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "name": "Sunset Apartments",
                    "location": "Kigali",
                    "number_of_floors": 3,
                    "has_basement": True
               }
          }
     )


class PropertyUpdate(BaseModel):
     """Only provided fields are updated."""
     name: Optional[str] = Field(None, min_length=1, max_length=255)
     location: Optional[str] = Field(None, min_length=1, max_length=255)
     description: Optional[str] = None
     number_of_floors: Optional[int] = Field(None, ge=1, le=200)
     has_basement: Optional[bool] = None


class AssignManagerRequest(BaseModel):
     """Pass null to unassign the current manager."""
     manager_id: Optional[int] = Field(None, gt=0)


class PropertyResponse(BaseModel):
     id: int
     name: str
     location: str
     description: Optional[str] = None
     number_of_floors: int
     has_basement: bool
     manager_id: Optional[int] = None
     manager_name: Optional[str] = None
     created_at: Optional[datetime] = None
     floors_count: int = 0
     locals_count: int = 0
     occupancy: Optional[OccupancyStats] = None

     model_config = ConfigDict(from_attributes=True)
