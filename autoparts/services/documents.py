"""
Document upload rules and expiry tracking.
"""
import enum
from datetime import date
from pathlib import PurePosixPath
from typing import Optional

from autoparts.errors import ValidationError

ALLOWED_CONTENT_TYPES = frozenset({
    "application/pdf",
    "image/jpeg",
    "image/jpg",
    "image/png",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
})


class ExpiryStatus(str, enum.Enum):
    NONE = "none"
    VALID = "valid"
    EXPIRING_SOON = "expiring_soon"
    EXPIRED = "expired"


def expiry_status(expiry_date: Optional[date], today: date, warning_days: int = 30) -> ExpiryStatus:
    """Classify a document by how close its expiry date is to ``today``."""
    if expiry_date is None:
        return ExpiryStatus.NONE
    days_left = (expiry_date - today).days
    if days_left < 0:
        return ExpiryStatus.EXPIRED
    if days_left <= warning_days:
        return ExpiryStatus.EXPIRING_SOON
    return ExpiryStatus.VALID


def validate_upload(content_type: Optional[str], size: int, max_size: int) -> None:
    if content_type not in ALLOWED_CONTENT_TYPES:
        raise ValidationError("Invalid file type. Please upload PDF, JPG, PNG, or Word documents.")
    if size == 0:
        raise ValidationError("Uploaded file is empty")
    if size > max_size:
        raise ValidationError(f"File too large. Maximum size is {max_size // (1024 * 1024)}MB.")


def default_document_name(filename: Optional[str]) -> str:
    """Filename without its extension, e.g. ``policy.2024.pdf`` -> ``policy.2024``."""
    filename = PurePosixPath(filename or "").name
    stem = PurePosixPath(filename).stem
    return stem or filename or "Untitled document"
