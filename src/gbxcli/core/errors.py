"""
Error types for gbx-cli

Every core operation fails with exactly one of these exceptions. Callers
branch on ``kind`` and read ``detail`` instead of matching message text.
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorKind(Enum):
    """Closed set of failure categories"""
    VALIDATION = "validation"
    NETWORK = "network"
    SERVER = "server"
    DECODE = "decode"
    IO = "io"
    NOT_FOUND = "not_found"
    PARSE = "parse"
    EMPTY_CREDENTIAL = "empty_credential"


class GBXError(Exception):
    """Base exception for gbx-cli errors"""

    kind: ErrorKind

    def __init__(self, message: str, detail: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.detail: Dict[str, Any] = detail or {}


class ValidationError(GBXError):
    """Input failed a syntax check before any request was made"""
    kind = ErrorKind.VALIDATION


class NetworkError(GBXError):
    """Transport or connection failure"""
    kind = ErrorKind.NETWORK


class ServerError(GBXError):
    """The service answered with a non-success status"""
    kind = ErrorKind.SERVER

    def __init__(self, operation: str, status_code: int, status_line: str, body: Any = None):
        if body is not None:
            message = f"{operation} failed with status {status_line}: {body}"
        else:
            message = f"{operation} failed with status {status_line}"
        super().__init__(message, {
            "operation": operation,
            "status_code": status_code,
            "status_line": status_line,
            "body": body,
        })
        self.status_code = status_code
        self.status_line = status_line
        self.body = body


class DecodeError(GBXError):
    """A successful response did not have the expected shape"""
    kind = ErrorKind.DECODE


class LocalIOError(GBXError):
    """Local filesystem failure (config or log file)"""
    kind = ErrorKind.IO


class ConfigNotFoundError(GBXError):
    """No config file has been written yet"""
    kind = ErrorKind.NOT_FOUND


class ConfigParseError(GBXError):
    """The config file exists but cannot be understood"""
    kind = ErrorKind.PARSE


class EmptyCredentialError(GBXError):
    """The stored API key is missing or blank"""
    kind = ErrorKind.EMPTY_CREDENTIAL
