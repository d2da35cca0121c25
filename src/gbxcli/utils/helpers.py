"""
Helper utilities for gbx-cli
"""

from typing import Optional


def mask_secret(value: Optional[str], visible: int = 4) -> str:
    """Hide all but the last few characters of a secret"""
    if not value:
        return ""
    if len(value) <= visible:
        return "*" * len(value)
    return "*" * (len(value) - visible) + value[-visible:]
