# routers/notifications.py
"""
In-app notifications. Users see and acknowledge their own; admins can
list everyone's.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database import get_session
from dependencies import PageParams, get_current_user, get_page_params
from models import User
from schemas.common import ItemResponse, PageResponse
from schemas.notification import NotificationResponse
from services import notification_service
from services.authorization import Action, authorize
from utils.pagination import page_payload, paginate

router = APIRouter(prefix="/api/notifications", tags=["notifications"])


def _page(query, paging: PageParams) -> dict:
     items, total, total_pages = paginate(query, paging.page, paging.limit)
     data = [NotificationResponse.model_validate(n) for n in items]
     return page_payload(data, total, paging.page, total_pages)


@router.get("", response_model=PageResponse[NotificationResponse], summary="My notifications")
def list_my_notifications(
     paging: PageParams = Depends(get_page_params),
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user),
):
     return _page(notification_service.user_notifications(db, user), paging)


@router.get("/unread", response_model=PageResponse[NotificationResponse], summary="My unread notifications")
def list_unread_notifications(
     paging: PageParams = Depends(get_page_params),
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user),
):
     return _page(notification_service.user_notifications(db, user, unread_only=True), paging)


@router.get("/all", response_model=PageResponse[NotificationResponse], summary="Every user's notifications")
def list_all_notifications(
     paging: PageParams = Depends(get_page_params),
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user),
):
     authorize(user, "notification", Action.READ)
     return _page(notification_service.all_notifications(db), paging)


@router.put("/{notification_id}/read", response_model=ItemResponse[NotificationResponse], summary="Mark as read")
def mark_notification_read(
     notification_id: int,
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user),
):
     notification = notification_service.mark_as_read(db, user, notification_id)
     db.commit()
     return {
          "success": True,
          "message": "Notification marked as read",
          "data": NotificationResponse.model_validate(notification),
     }
