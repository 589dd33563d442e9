# services/user_service.py
"""
User Service - accounts, login and self-service profile.

Only admins create accounts (there is no public sign-up). Every
administrative change to an account leaves a notification for its owner.
"""
import logging
from typing import Optional

from fastapi import UploadFile
from sqlalchemy import func
from sqlalchemy.orm import Session

from config import AVATAR_IMAGE_WIDTH
from dependencies import create_access_token, hash_password, verify_password
from exceptions import AuthenticationError, AuthorizationError, ConflictError, NotFoundError, ValidationError
from models import NotificationType, User, UserRole
from schemas.user import PasswordChange, ProfileUpdate, RegisterRequest, UserUpdate
from services.notification_service import notify
from services.records import apply_changes
from utils.files import IMAGE_TYPES, discard_upload, save_upload, validate_upload

logger = logging.getLogger(__name__)

AVATAR_FOLDER = "avatars"


def normalize_email(email: str) -> str:
     return email.strip().lower()


class UserService:

     @staticmethod
     def get_user(db: Session, user_id: int) -> User:
          user = db.query(User).filter(User.id == user_id).first()
          if not user:
               raise NotFoundError("User not found")
          return user

     @staticmethod
     def _check_email_free(db: Session, email: str, user_id: Optional[int] = None) -> None:
          query = db.query(User.id).filter(func.lower(User.email) == email)
          if user_id is not None:
               query = query.filter(User.id != user_id)
          if query.first():
               raise ConflictError("Email already registered")

     @staticmethod
     def login(db: Session, email: str, password: str) -> tuple:
          """
          Check credentials.

          Returns:
               (token, user)

          Raises:
               AuthenticationError: unknown email or wrong password
               AuthorizationError: the account is disabled
          """
          user = db.query(User).filter(func.lower(User.email) == normalize_email(email)).first()
          if not user or not verify_password(password, user.password_hash):
               raise AuthenticationError("Invalid email or password")
          if not user.is_active:
               raise AuthorizationError("Your account is disabled. Please contact the administrator.")
          return create_access_token(user), user

     @staticmethod
     def register(db: Session, data: RegisterRequest) -> User:
          email = normalize_email(data.email)
          UserService._check_email_free(db, email)
          user = User(
               full_name=data.full_name,
               email=email,
               password_hash=hash_password(data.password),
               role=data.role,
               phone=data.phone,
          )
          db.add(user)
          db.flush()
          notify(db, user.id, "Welcome! Your account has been created successfully.", NotificationType.USER_REGISTER)
          logger.info("User %s registered with role %s", user.id, user.role.value)
          return user

     @staticmethod
     def seed_admin(db: Session, email: str, password: str, full_name: str = "Administrator") -> Optional[User]:
          """
          Create the first admin of an empty database.

          Returns None, without touching anything, once any account exists.
          """
          if db.query(User.id).execution_options(include_deleted=True).first():
               logger.info("Users already exist; admin seed skipped")
               return None
          if not email or not password:
               raise ValidationError("An email and a password are required to seed the admin")
          user = User(
               full_name=full_name,
               email=normalize_email(email),
               password_hash=hash_password(password),
               role=UserRole.ADMIN,
          )
          db.add(user)
          db.flush()
          logger.info("Seeded admin %s", user.email)
          return user

     @staticmethod
     def update_user(db: Session, user: User, data: UserUpdate) -> User:
          changes = data.model_dump(exclude_unset=True)
          for field in ("full_name", "email", "role"):
               if field in changes and changes[field] is None:
                    raise ValidationError(f"{field} cannot be null")
          if "email" in changes:
               changes["email"] = normalize_email(changes["email"])
               UserService._check_email_free(db, changes["email"], user.id)
          apply_changes(user, changes)
          db.flush()
          notify(db, user.id, "Your account has been updated.", NotificationType.USER_UPDATE)
          return user

     @staticmethod
     def disable_user(db: Session, admin: User, user: User) -> User:
          if user.id == admin.id:
               raise ValidationError("You cannot disable your own account")
          if not user.is_active:
               raise ValidationError("User is already disabled")
          user.is_active = False
          db.flush()
          notify(db, user.id, "Your account has been disabled.", NotificationType.USER_DISABLE)
          logger.info("User %s disabled by %s", user.id, admin.id)
          return user

     @staticmethod
     def enable_user(db: Session, admin: User, user: User) -> User:
          if user.is_active:
               raise ValidationError("User is already enabled")
          user.is_active = True
          db.flush()
          notify(db, user.id, "Your account has been enabled.", NotificationType.USER_ENABLE)
          logger.info("User %s enabled by %s", user.id, admin.id)
          return user

     @staticmethod
     def update_profile(db: Session, user: User, data: ProfileUpdate) -> User:
          changes = data.model_dump(exclude_unset=True)
          for field in ("full_name", "email"):
               if field in changes and changes[field] is None:
                    raise ValidationError(f"{field} cannot be null")
          if "email" in changes:
               changes["email"] = normalize_email(changes["email"])
               UserService._check_email_free(db, changes["email"], user.id)
          apply_changes(user, changes)
          db.flush()
          return user

     @staticmethod
     def change_password(db: Session, user: User, data: PasswordChange) -> None:
          if not verify_password(data.current_password, user.password_hash):
               raise ValidationError("Current password is incorrect")
          user.password_hash = hash_password(data.new_password)
          db.flush()

     @staticmethod
     def update_avatar(db: Session, user: User, avatar: UploadFile) -> User:
          validate_upload(avatar, IMAGE_TYPES)
          if user.avatar:
               discard_upload(db, AVATAR_FOLDER, user.avatar.rsplit("/", 1)[-1])
          filename = save_upload(db, avatar, AVATAR_FOLDER, max_width=AVATAR_IMAGE_WIDTH)
          user.avatar = f"/uploads/{AVATAR_FOLDER}/{filename}"
          db.flush()
          return user

     @staticmethod
     def list_query(db: Session, role: Optional[UserRole] = None):
          query = db.query(User)
          if role is not None:
               query = query.filter(User.role == role)
          return query.order_by(User.created_at.desc(), User.id.desc())
