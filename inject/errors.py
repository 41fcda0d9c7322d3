"""
Error definitions for the inject container

Provides error codes and the exception hierarchy raised by registration
and resolution.
"""

from enum import Enum
from typing import Dict, Optional


class ErrorCode(Enum):
    """Standardized error codes for container failures."""

    # Registration errors
    INVALID_REGISTRATION = "INVALID_REGISTRATION"
    INVALID_DEPENDENCY_LIST = "INVALID_DEPENDENCY_LIST"
    INVALID_DEPENDENCY_ENTRY = "INVALID_DEPENDENCY_ENTRY"
    DUPLICATE_REGISTRATION = "DUPLICATE_REGISTRATION"

    # Resolution errors
    CIRCULAR_DEPENDENCY = "CIRCULAR_DEPENDENCY"
    UNKNOWN_SERVICE = "UNKNOWN_SERVICE"


# Message prefixes, one per error code. Raised messages always start with these.
ERROR: Dict[ErrorCode, str] = {
    ErrorCode.INVALID_REGISTRATION: "Invalid registration",
    ErrorCode.INVALID_DEPENDENCY_LIST: "Dependencies must be a list of string tokens",
    ErrorCode.INVALID_DEPENDENCY_ENTRY: "Inline annotation must list string tokens followed by a callable",
    ErrorCode.DUPLICATE_REGISTRATION: "Service is already registered",
    ErrorCode.CIRCULAR_DEPENDENCY: "Circular dependency detected",
    ErrorCode.UNKNOWN_SERVICE: "Service is not registered",
}


class InjectError(Exception):
    """Base exception for all container errors."""

    code: ErrorCode = ErrorCode.INVALID_REGISTRATION

    def __init__(self, detail: str = "", details: Optional[Dict] = None):
        self.message = f"{ERROR[self.code]}: {detail}" if detail else ERROR[self.code]
        self.details = details or {}
        super().__init__(self.message)

    @property
    def token(self) -> Optional[str]:
        return self.details.get('token')


class InvalidRegistrationError(InjectError):
    """Raised when a registration request is malformed."""
    code = ErrorCode.INVALID_REGISTRATION


class InvalidDependencyListError(InjectError):
    """Raised when `deps` is not a list of string tokens."""
    code = ErrorCode.INVALID_DEPENDENCY_LIST


class InvalidDependencyEntryError(InjectError):
    """Raised when an inline annotation has a bad element."""
    code = ErrorCode.INVALID_DEPENDENCY_ENTRY


class DuplicateRegistrationError(InjectError):
    """Raised when a token is registered twice."""
    code = ErrorCode.DUPLICATE_REGISTRATION


class CircularDependencyError(InjectError):
    """Raised when circular dependency is detected"""
    code = ErrorCode.CIRCULAR_DEPENDENCY

    @property
    def path(self):
        return self.details.get('path', [])


class UnknownServiceError(InjectError):
    """Raised when requested service is not registered"""
    code = ErrorCode.UNKNOWN_SERVICE
