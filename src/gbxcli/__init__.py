"""
gbx-cli - Global Blackbox command-line client

Sign up for a Global Blackbox account, keep the issued credentials locally
and list or download the logs produced by your probes.
"""

__version__ = "1.0.0"
__author__ = "Global Blackbox"
__email__ = "support@globalblackbox.io"

from .core.api import GlobalBlackboxClient
from .core.config import APIConfig, ConfigStore
from .core.errors import ErrorKind, GBXError

__all__ = [
    "APIConfig",
    "ConfigStore",
    "ErrorKind",
    "GBXError",
    "GlobalBlackboxClient",
]
