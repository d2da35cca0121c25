"""
Core module for gbx-cli

Contains the API client, the local config store, the data models and the
error types.
"""

from .api import GlobalBlackboxClient
from .config import APIConfig, ConfigStore, load_settings
from .errors import ErrorKind, GBXError
from .models import (
    Config,
    LogDownloadRequest,
    LogQuery,
    Plan,
    PlanName,
    SignupRequest,
    SignupResponse,
)

__all__ = [
    "APIConfig",
    "Config",
    "ConfigStore",
    "ErrorKind",
    "GBXError",
    "GlobalBlackboxClient",
    "LogDownloadRequest",
    "LogQuery",
    "Plan",
    "PlanName",
    "SignupRequest",
    "SignupResponse",
    "load_settings",
]
