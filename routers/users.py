# routers/users.py
"""
Authentication and user administration.

POST /auth/login is the only public route. Accounts are created by
admins through POST /register.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import PageParams, get_current_user, get_page_params
from models import User, UserRole
from schemas.common import ItemResponse, PageResponse
from schemas.user import LoginRequest, LoginResponse, RegisterRequest, UserResponse, UserUpdate
from services.authorization import Action, authorize
from services.user_service import UserService
from utils.pagination import page_payload, paginate

router = APIRouter(prefix="/api", tags=["users"])


@router.post("/auth/login", response_model=LoginResponse, summary="Log in")
def login(body: LoginRequest, db: Session = Depends(get_session)):
     """
     Exchange email and password for a bearer token.

     - unknown email or wrong password: 401
     - disabled account: 403
     """
     token, user = UserService.login(db, body.email, body.password)
     return {"success": True, "token": token, "user": UserResponse.model_validate(user)}


@router.post(
     "/register",
     response_model=ItemResponse[UserResponse],
     status_code=status.HTTP_201_CREATED,
     summary="Create a user account"
)
def register(
     body: RegisterRequest,
     db: Session = Depends(get_session),
     admin: User = Depends(get_current_user),
):
     authorize(admin, "user", Action.CREATE)
     user = UserService.register(db, body)
     db.commit()
     return {"success": True, "message": "User registered successfully", "data": UserResponse.model_validate(user)}


@router.get("/users", response_model=PageResponse[UserResponse], summary="List users")
def list_users(
     role: Optional[UserRole] = Query(None),
     paging: PageParams = Depends(get_page_params),
     db: Session = Depends(get_session),
     admin: User = Depends(get_current_user),
):
     authorize(admin, "user", Action.READ)
     items, total, total_pages = paginate(UserService.list_query(db, role), paging.page, paging.limit)
     data = [UserResponse.model_validate(u) for u in items]
     return page_payload(data, total, paging.page, total_pages)


@router.put("/users/{user_id}", response_model=ItemResponse[UserResponse], summary="Update a user")
def update_user(
     user_id: int,
     body: UserUpdate,
     db: Session = Depends(get_session),
     admin: User = Depends(get_current_user),
):
     authorize(admin, "user", Action.UPDATE)
     user = UserService.get_user(db, user_id)
     UserService.update_user(db, user, body)
     db.commit()
     return {"success": True, "message": "User updated successfully", "data": UserResponse.model_validate(user)}


@router.put("/users/{user_id}/disable", response_model=ItemResponse[UserResponse], summary="Disable a user")
def disable_user(
     user_id: int,
     db: Session = Depends(get_session),
     admin: User = Depends(get_current_user),
):
     authorize(admin, "user", Action.UPDATE)
     user = UserService.get_user(db, user_id)
     UserService.disable_user(db, admin, user)
     db.commit()
     return {"success": True, "message": "User disabled successfully", "data": UserResponse.model_validate(user)}


@router.put("/users/{user_id}/enable", response_model=ItemResponse[UserResponse], summary="Enable a user")
def enable_user(
     user_id: int,
     db: Session = Depends(get_session),
     admin: User = Depends(get_current_user),
):
     authorize(admin, "user", Action.UPDATE)
     user = UserService.get_user(db, user_id)
     UserService.enable_user(db, admin, user)
     db.commit()
     return {"success": True, "message": "User enabled successfully", "data": UserResponse.model_validate(user)}
