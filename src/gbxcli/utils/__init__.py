"""
Utils module for gbx-cli

Contains input validation, logging setup and small helpers.
"""

from .helpers import mask_secret
from .validation import (
    MAX_LOG_LIMIT,
    clamp_limit,
    parse_date,
    validate_email,
    validate_file_name,
    validate_region,
    validate_target_count,
)

__all__ = [
    "MAX_LOG_LIMIT",
    "clamp_limit",
    "mask_secret",
    "parse_date",
    "validate_email",
    "validate_file_name",
    "validate_region",
    "validate_target_count",
]
