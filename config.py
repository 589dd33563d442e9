# config.py
"""
Runtime configuration for the LandlordPro backend.

Every setting is read once from the environment (a local .env file is
honoured) and exposed as a module constant.
"""
import os

from dotenv import load_dotenv

# Load .env
load_dotenv()

BASE_DIR = os.path.dirname(os.path.abspath(__file__))

# Auth
JWT_SECRET = os.getenv("JWT_SECRET", "change-me")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
JWT_EXPIRE_MINUTES = int(os.getenv("JWT_EXPIRE_MINUTES", "60"))
BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "12"))

# First admin, created by `python jobs.py seed-admin` on an empty database
SEED_ADMIN_EMAIL = os.getenv("SEED_ADMIN_EMAIL", "admin@landlordpro.local")
SEED_ADMIN_PASSWORD = os.getenv("SEED_ADMIN_PASSWORD", "")
SEED_ADMIN_NAME = os.getenv("SEED_ADMIN_NAME", "Administrator")

# HTTP
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "").split(",") if o.strip()]

# Uploads
UPLOAD_DIR = os.getenv("UPLOAD_DIR", os.path.join(BASE_DIR, "uploads"))
MAX_UPLOAD_SIZE = int(os.getenv("MAX_UPLOAD_SIZE", str(5 * 1024 * 1024)))  # 5 MB
# Images are scaled down to these widths and re-encoded
PROOF_IMAGE_WIDTH = int(os.getenv("PROOF_IMAGE_WIDTH", "800"))
AVATAR_IMAGE_WIDTH = int(os.getenv("AVATAR_IMAGE_WIDTH", "300"))
IMAGE_QUALITY = int(os.getenv("IMAGE_QUALITY", "80"))
MAX_IMAGE_PIXELS = int(os.getenv("MAX_IMAGE_PIXELS", str(40_000_000)))

# Pagination
DEFAULT_PAGE_SIZE = int(os.getenv("DEFAULT_PAGE_SIZE", "10"))
MAX_PAGE_SIZE = int(os.getenv("MAX_PAGE_SIZE", "100"))

# Payment reminders: minimum days between two unread reminders for the same lease
PAYMENT_REMINDER_INTERVAL_DAYS = int(os.getenv("PAYMENT_REMINDER_INTERVAL_DAYS", "2"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
