# schemas/notification.py
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict


class NotificationResponse(BaseModel):
     id: int
     user_id: int
     message: str
     type: str
     is_read: bool
     lease_id: Optional[int] = None
     payment_id: Optional[int] = None
     created_at: Optional[datetime] = None

     model_config = ConfigDict(from_attributes=True)
