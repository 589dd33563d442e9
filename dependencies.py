# dependencies.py
"""
Shared FastAPI dependencies: password hashing, JWT issue/verify, the
current-user dependency and pagination parameters.
"""
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta

from fastapi import Depends, Query, Request
from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from config import (
     BCRYPT_ROUNDS,
     DEFAULT_PAGE_SIZE,
     JWT_ALGORITHM,
     JWT_EXPIRE_MINUTES,
     JWT_SECRET,
     MAX_PAGE_SIZE,
)
from database import get_session
from exceptions import AuthenticationError, AuthorizationError
from models import User

logger = logging.getLogger(__name__)

# Bcrypt
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=BCRYPT_ROUNDS)


def hash_password(password: str) -> str:
     return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
     return pwd_context.verify(password, password_hash)


def create_access_token(user: User) -> str:
     payload = {
          "id": user.id,
          "email": user.email,
          "role": user.role.value,
          "exp": datetime.utcnow() + timedelta(minutes=JWT_EXPIRE_MINUTES),
     }
     return jwt.encode(payload, JWT_SECRET, algorithm=JWT_ALGORITHM)


def verify_token(request: Request) -> dict:
     """Decode the bearer token; 401 when it is missing or invalid."""
     auth = request.headers.get("Authorization")
     if not auth or not auth.startswith("Bearer "):
          raise AuthenticationError("Missing token")
     token = auth.split(" ", 1)[1]
     try:
          return jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])
     except JWTError:
          raise AuthenticationError("Invalid or expired token")


def get_current_user(
     token: dict = Depends(verify_token),
     db: Session = Depends(get_session),
) -> User:
     """
     Resolve the token to an active user.

     Raises:
          AuthenticationError: token does not name a known user
          AuthorizationError: the account is disabled
     """
     user_id = token.get("id")
     user = db.query(User).filter(User.id == user_id).first() if user_id else None
     if user is None:
          raise AuthenticationError("User not found")
     if not user.is_active:
          logger.info("Rejected token for disabled user %s", user.id)
          raise AuthorizationError("Account is disabled")
     return user


@dataclass
class PageParams:
     page: int
     limit: int


def get_page_params(
     page: int = Query(1, ge=1),
     limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
) -> PageParams:
     return PageParams(page=page, limit=limit)
