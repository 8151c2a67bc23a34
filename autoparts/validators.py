"""
Field validation shared by the registration and profile endpoints.
"""
import re
from datetime import date
from typing import Optional

from autoparts.errors import ValidationError


def validate_password(password):
    """Validate password strength"""
    if not password:
        raise ValidationError("Password is required")
    if len(password) < 8:
        raise ValidationError("Password must be at least 8 characters long")
    if not re.search(r'[A-Z]', password):
        raise ValidationError("Password must contain at least one uppercase letter")
    if not re.search(r'[a-z]', password):
        raise ValidationError("Password must contain at least one lowercase letter")
    if not re.search(r'\d', password):
        raise ValidationError("Password must contain at least one number")
    return password


def validate_username(username):
    """Validate username format"""
    if not username:
        raise ValidationError("Username is required")
    username = username.strip()
    if len(username) < 3:
        raise ValidationError("Username must be at least 3 characters long")
    if len(username) > 50:
        raise ValidationError("Username must not exceed 50 characters")
    if not re.match(r'^[a-zA-Z0-9_.-]+$', username):
        raise ValidationError("Username can only contain letters, numbers, dots, hyphens, and underscores")
    return username.lower()


def validate_phone(phone: Optional[str]) -> Optional[str]:
    """Normalize a phone number; blank means none."""
    if not phone or not phone.strip():
        return None
    # Remove spaces and special characters
    phone = re.sub(r'[^\d+]', '', phone)
    if not re.match(r'^\+?[\d]{10,15}$', phone):
        raise ValidationError("Invalid phone number format")
    return phone


def validate_vehicle_year(year: int, today: Optional[date] = None) -> int:
    latest = (today or date.today()).year + 1
    if year < 1900 or year > latest:
        raise ValidationError(f"Year must be between 1900 and {latest}")
    return year


def blank_to_none(value):
    """Treat empty form strings as missing."""
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value
