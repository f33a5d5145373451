"""
Validation utilities for project service

Each validate_* function returns a dict mapping field name to message;
an empty dict means the input is acceptable.
"""

import re
from datetime import date
from typing import Dict, Optional

from email_validator import EmailNotValidError, validate_email

MIN_PASSWORD_LENGTH = 6
# bcrypt only looks at the first 72 bytes of its input
MAX_PASSWORD_BYTES = 72
# titles are stored as VARCHAR(255)
MAX_TITLE_LENGTH = 255
DUE_DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}")


def normalize_email(email: Optional[str]) -> str:
    """Trim and lower-case an email for storage and lookup"""
    return (email or "").strip().lower()


def _check_email(email: Optional[str], errors: Dict[str, str]) -> None:
    if not email or not email.strip():
        errors["email"] = "Email is required"
        return
    # special-use domains such as localhost or .test are not accepted
    try:
        validate_email(email.strip(), check_deliverability=False)
    except EmailNotValidError:
        errors["email"] = "Invalid email format"


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def _check_title(title: Optional[str], errors: Dict[str, str]) -> None:
    if _is_blank(title):
        errors["title"] = "Title is required"
    elif len(title.strip()) > MAX_TITLE_LENGTH:
        errors["title"] = f"Title must be at most {MAX_TITLE_LENGTH} characters long"


def validate_registration(email: Optional[str], password: Optional[str]) -> Dict[str, str]:
    """Validate registration input"""
    errors: Dict[str, str] = {}
    _check_email(email, errors)

    if _is_blank(password):
        errors["password"] = "Password is required"
    elif len(password) < MIN_PASSWORD_LENGTH:
        errors["password"] = f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
    elif len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        errors["password"] = f"Password must be at most {MAX_PASSWORD_BYTES} bytes long"

    return errors


def validate_login(email: Optional[str], password: Optional[str]) -> Dict[str, str]:
    """Validate login input"""
    errors: Dict[str, str] = {}
    _check_email(email, errors)
    if _is_blank(password):
        errors["password"] = "Password is required"
    return errors


def validate_project(title: Optional[str]) -> Dict[str, str]:
    """Validate project create/update input"""
    errors: Dict[str, str] = {}
    _check_title(title, errors)
    return errors


def parse_due_date(value: Optional[str]) -> Optional[date]:
    """
    Parse a YYYY-MM-DD due date

    Raises:
        ValueError: If the value is not a valid calendar date in that format
    """
    if value is None or value == "":
        return None
    if not DUE_DATE_PATTERN.fullmatch(value):
        raise ValueError(f"Due date {value!r} is not in YYYY-MM-DD format")
    return date.fromisoformat(value)


def validate_task(title: Optional[str], due_date: Optional[str]) -> Dict[str, str]:
    """Validate task creation input"""
    errors: Dict[str, str] = {}
    _check_title(title, errors)
    try:
        parse_due_date(due_date)
    except (TypeError, ValueError):
        errors["dueDate"] = "Due date must be a valid date in YYYY-MM-DD format"
    return errors
