# utils/files.py
"""
Local storage for uploaded files (payment proofs, avatars).

Files land under UPLOAD_DIR/<folder>/ with a timestamped, sanitised name.
Images are scaled down to a maximum width and re-encoded with Pillow;
PDFs are stored as received.

Disk changes follow the session: a file written during a unit of work is
removed again if the session rolls back, and a file replaced during it is
only removed once the session commits.
"""
import logging
import os
import re
import shutil
import time
from typing import Iterable, Optional

from fastapi import UploadFile
from PIL import Image, ImageOps, UnidentifiedImageError
from sqlalchemy import event
from sqlalchemy.orm import Session

from config import IMAGE_QUALITY, MAX_IMAGE_PIXELS, MAX_UPLOAD_SIZE, UPLOAD_DIR
from exceptions import NotFoundError, ValidationError

logger = logging.getLogger(__name__)

IMAGE_TYPES = {"image/jpeg", "image/png", "image/webp"}
PROOF_TYPES = IMAGE_TYPES | {"application/pdf"}

IMAGE_FORMATS = {"image/jpeg": "JPEG", "image/png": "PNG", "image/webp": "WEBP"}

# Pillow refuses anything past twice this size outright
Image.MAX_IMAGE_PIXELS = MAX_IMAGE_PIXELS

ADDED_KEY = "uploads_added"
REPLACED_KEY = "uploads_replaced"


def safe_filename(filename: str) -> str:
     """Strip directories and anything but letters, digits, dot, dash and underscore."""
     name = os.path.basename(filename or "").replace(" ", "_")
     name = re.sub(r"[^A-Za-z0-9._-]", "", name).lstrip(".")
     return name or "upload"


def _upload_size(upload: UploadFile) -> int:
     upload.file.seek(0, os.SEEK_END)
     size = upload.file.tell()
     upload.file.seek(0)
     return size


def validate_upload(upload: UploadFile, allowed_types: Iterable[str]) -> None:
     allowed = set(allowed_types)
     if upload.content_type not in allowed:
          logger.warning("Rejected upload %s with type %s", upload.filename, upload.content_type)
          raise ValidationError(
               f"Invalid file type {upload.content_type}. Allowed: {', '.join(sorted(allowed))}"
          )
     if _upload_size(upload) > MAX_UPLOAD_SIZE:
          logger.warning("Rejected upload %s: larger than %d bytes", upload.filename, MAX_UPLOAD_SIZE)
          raise ValidationError(f"File too large. Maximum size is {MAX_UPLOAD_SIZE // (1024 * 1024)} MB")


def write_image(upload: UploadFile, path: str, max_width: int) -> None:
     """
     Decode the upload, shrink it to max_width (keeping the aspect ratio)
     and write it back in its own format.

     Raises:
          ValidationError: not a decodable image, or too many pixels
     """
     upload.file.seek(0)
     try:
          source = Image.open(upload.file)
     except Image.DecompressionBombError as exc:
          raise ValidationError("Image dimensions are too large") from exc
     except UnidentifiedImageError as exc:
          raise ValidationError("File is not a valid image") from exc

     with source:
          if source.width * source.height > MAX_IMAGE_PIXELS:
               logger.warning("Rejected image %s: %dx%d pixels", upload.filename, source.width, source.height)
               raise ValidationError("Image dimensions are too large")
          image = ImageOps.exif_transpose(source)
          if image.width > max_width:
               height = max(1, round(image.height * max_width / image.width))
               image = image.resize((max_width, height), Image.Resampling.LANCZOS)

          fmt = IMAGE_FORMATS[upload.content_type]
          if fmt == "JPEG" and image.mode not in ("RGB", "L"):
               image = image.convert("RGB")
          options = {"optimize": True} if fmt == "PNG" else {"quality": IMAGE_QUALITY}
          image.save(path, format=fmt, **options)


def save_upload(db: Session, upload: UploadFile, folder: str, max_width: Optional[int] = None) -> str:
     """
     Store the upload under UPLOAD_DIR/<folder>/ and return the stored file name.

     Images are normalised when max_width is given. The file is tied to
     the session's transaction and disappears again on rollback.
     """
     target_dir = os.path.join(UPLOAD_DIR, folder)
     os.makedirs(target_dir, exist_ok=True)
     filename = f"{int(time.time() * 1000)}-{safe_filename(upload.filename)}"
     path = os.path.join(target_dir, filename)

     if max_width and upload.content_type in IMAGE_FORMATS:
          write_image(upload, path, max_width)
     else:
          with open(path, "wb") as buffer:
               shutil.copyfileobj(upload.file, buffer)

     db.info.setdefault(ADDED_KEY, []).append((folder, filename))
     return filename


def discard_upload(db: Session, folder: str, filename: str) -> None:
     """Remove a replaced file once the session commits."""
     db.info.setdefault(REPLACED_KEY, []).append((folder, filename))


def remove_upload(folder: str, filename: str) -> None:
     path = os.path.join(UPLOAD_DIR, folder, safe_filename(filename))
     if os.path.isfile(path):
          os.remove(path)


def stored_file_path(folder: str, filename: str) -> str:
     """Absolute path of a stored upload; raises NotFoundError when it is missing."""
     path = os.path.join(UPLOAD_DIR, folder, os.path.basename(filename))
     if not os.path.isfile(path):
          raise NotFoundError("File not found")
     return path


@event.listens_for(Session, "after_commit")
def _drop_replaced_uploads(session):
     session.info.pop(ADDED_KEY, None)
     for folder, filename in session.info.pop(REPLACED_KEY, []):
          remove_upload(folder, filename)
          logger.info("Removed replaced upload %s/%s", folder, filename)


@event.listens_for(Session, "after_rollback")
def _drop_orphaned_uploads(session):
     session.info.pop(REPLACED_KEY, None)
     for folder, filename in session.info.pop(ADDED_KEY, []):
          remove_upload(folder, filename)
          logger.info("Removed upload %s/%s left by a rolled back change", folder, filename)
