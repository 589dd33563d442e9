# routers/profile.py
from fastapi import APIRouter, Depends, File, UploadFile
from sqlalchemy.orm import Session

from database import get_session
from dependencies import get_current_user
from models import User
from schemas.common import ItemResponse, MessageResponse
from schemas.user import PasswordChange, ProfileUpdate, UserResponse
from services.user_service import UserService

router = APIRouter(prefix="/api/profile", tags=["profile"])


@router.get("", response_model=ItemResponse[UserResponse], summary="My profile")
def get_profile(user: User = Depends(get_current_user)):
     return {"success": True, "data": UserResponse.model_validate(user)}


@router.put("", response_model=ItemResponse[UserResponse], summary="Update my profile")
def update_profile(
     body: ProfileUpdate,
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user),
):
     UserService.update_profile(db, user, body)
     db.commit()
     return {"success": True, "message": "Profile updated successfully", "data": UserResponse.model_validate(user)}


@router.put("/password", response_model=MessageResponse, summary="Change my password")
def change_password(
     body: PasswordChange,
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user),
):
     UserService.change_password(db, user, body)
     db.commit()
     return {"success": True, "message": "Password updated successfully"}


@router.put("/picture", response_model=ItemResponse[UserResponse], summary="Upload my profile picture")
def update_picture(
     avatar: UploadFile = File(...),
     db: Session = Depends(get_session),
     user: User = Depends(get_current_user),
):
     UserService.update_avatar(db, user, avatar)
     db.commit()
     return {"success": True, "message": "Profile picture updated successfully", "data": UserResponse.model_validate(user)}
