# schemas/floor.py
"""
Pydantic schemas for floors and occupancy reports.
"""
from typing import List, Optional
from pydantic import BaseModel, Field, ConfigDict

from .local import LocalSummary


class OccupancyStats(BaseModel):
     """occupied + available + maintenance == total_locals."""
     total_locals: int = 0
     occupied: int = 0
     available: int = 0
     maintenance: int = 0
     occupancy_rate: float = 0

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "total_locals": 8,
                    "occupied": 5,
                    "available": 2,
                    "maintenance": 1,
                    "occupancy_rate": 62.5
               }
          }
     )


class FloorUpdate(BaseModel):
     name: Optional[str] = Field(None, min_length=2, max_length=50)
     level_number: Optional[int] = Field(None, ge=-10, le=200)


class FloorResponse(BaseModel):
     id: int
     name: str
     level_number: int
     property_id: int
     property_name: Optional[str] = None
     locals_count: int = 0
     occupancy: Optional[OccupancyStats] = None

     model_config = ConfigDict(from_attributes=True)


class FloorDetailResponse(FloorResponse):
     locals: List[LocalSummary] = []


class FloorOccupancy(OccupancyStats):
     floor_id: int
     floor_name: str
     level_number: int
     property_id: int
     property_name: Optional[str] = None


class OccupancyReportResponse(BaseModel):
     """Per-floor occupancy plus the aggregate over every listed floor."""
     success: bool = True
     total: int
     data: List[FloorOccupancy]
     summary: OccupancyStats
