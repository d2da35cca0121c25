"""
UI module for gbx-cli

Contains the interactive sign-up wizard and rich formatting components.
"""

from .formatting import RichFormatter
from .interactive import SignupWizard

__all__ = [
    "RichFormatter",
    "SignupWizard",
]
