"""
Input validation for gbx-cli

Syntax checks applied to user input before any request is sent. Business
rules (plan legality, known regions, quotas) are left to the service.
"""

import re
from datetime import date, datetime
from typing import Any, Union

from ..core.errors import ValidationError

MAX_LOG_LIMIT = 50
DATE_FORMAT = "%Y-%m-%d"

_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def _strip_text(value: Any, field_name: str) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be text", {"field": field_name, "value": value})
    return value.strip()


def validate_email(value: str) -> str:
    """Return the trimmed email or raise ValidationError"""
    email = _strip_text(value, "email")
    if not email:
        raise ValidationError("email cannot be empty", {"field": "email", "value": value})
    if "@" not in email or "." not in email:
        raise ValidationError("invalid email address", {"field": "email", "value": value})
    return email


def parse_date(value: Union[str, date]) -> date:
    """Parse a YYYY-MM-DD string into a date"""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    text = value.strip() if isinstance(value, str) else ""
    if not _DATE_PATTERN.match(text):
        raise ValidationError("invalid date format. Please use YYYY-MM-DD", {"field": "date", "value": value})
    try:
        return datetime.strptime(text, DATE_FORMAT).date()
    except ValueError as e:
        raise ValidationError(
            "invalid date format. Please use YYYY-MM-DD",
            {"field": "date", "value": value},
        ) from e


def validate_target_count(value: Union[int, str]) -> int:
    """Return the number of targets as a positive integer"""
    if isinstance(value, bool):
        raise ValidationError("number of targets must be a positive integer", {"field": "target_count", "value": value})

    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValidationError("number of targets cannot be empty", {"field": "target_count", "value": value})
        try:
            number = int(text)
        except ValueError as e:
            raise ValidationError(
                "please enter a valid positive integer for the number of targets",
                {"field": "target_count", "value": value},
            ) from e
    elif isinstance(value, int):
        number = value
    else:
        raise ValidationError("number of targets must be a positive integer", {"field": "target_count", "value": value})

    if number <= 0:
        raise ValidationError(
            "please enter a valid positive integer for the number of targets",
            {"field": "target_count", "value": value},
        )
    return number


def validate_region(value: str) -> str:
    """Return the trimmed region code"""
    region = _strip_text(value, "region")
    if not region:
        raise ValidationError("region cannot be empty", {"field": "region", "value": value})
    return region


def validate_file_name(value: str) -> str:
    """Accept only a bare file name, never a path"""
    name = _strip_text(value, "file_name")
    if not name:
        raise ValidationError("file name cannot be empty", {"field": "file_name", "value": value})
    if "/" in name or "\\" in name or name in (".", ".."):
        raise ValidationError("file name must not contain a path", {"field": "file_name", "value": value})
    return name


def clamp_limit(value: int, maximum: int = MAX_LOG_LIMIT) -> int:
    """Clamp a log listing limit to the service maximum"""
    if value < 1:
        raise ValidationError("limit must be at least 1", {"field": "limit", "value": value})
    return min(value, maximum)
