"""
Error types and socket failure classification for netprobe.

Per-host network failures are never raised out of the engine; they are
classified here for debug logging and turned into negative probe results.
Input, configuration and environment problems are raised as NetprobeError
subclasses and reported by the command-line layer.
"""

import errno
import socket
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional


class ErrorType(Enum):
    """Enumeration for different types of errors."""
    CONNECTION_REFUSED = "connection_refused"
    TIMEOUT = "timeout"
    UNREACHABLE = "unreachable"
    NETWORK_ERROR = "network_error"
    RESOLUTION_ERROR = "resolution_error"
    TOOL_MISSING_ERROR = "tool_missing_error"
    CONFIGURATION_ERROR = "configuration_error"
    VALIDATION_ERROR = "validation_error"
    ENVIRONMENT_ERROR = "environment_error"


@dataclass
class ErrorContext:
    """
    Context information attached to a raised error.

    Attributes:
        error_type: Type of error that occurred
        operation: Operation that was being performed when error occurred
        component: Component/module where error occurred
        additional_info: Additional context information
    """
    error_type: ErrorType
    operation: str
    component: str
    additional_info: Dict[str, Any] = field(default_factory=dict)


class NetprobeError(Exception):
    """Base exception class for netprobe."""

    def __init__(self, message: str, error_context: Optional[ErrorContext] = None):
        super().__init__(message)
        self.error_context = error_context


class NetworkError(NetprobeError):
    """Exception for network-related errors outside the sweep itself."""
    pass


class ToolMissingError(NetprobeError):
    """Exception for missing external tools."""
    pass


class ConfigurationError(NetprobeError):
    """Exception for configuration-related errors."""
    pass


class ValidationError(NetprobeError):
    """Exception for invalid user input (addresses, prefixes, targets)."""
    pass


class NetworkDetectionError(NetprobeError):
    """Raised when no local interface qualifies for a sweep."""
    pass


_REFUSED_ERRNOS = {errno.ECONNREFUSED, getattr(errno, "WSAECONNREFUSED", -1)}
_UNREACHABLE_ERRNOS = {
    errno.EHOSTUNREACH,
    errno.ENETUNREACH,
    errno.EHOSTDOWN,
    errno.ENETDOWN,
    getattr(errno, "WSAEHOSTUNREACH", -1),
    getattr(errno, "WSAENETUNREACH", -1),
}


def classify_socket_error(error: BaseException) -> ErrorType:
    """
    Map a connect/resolve failure onto an ErrorType.

    Args:
        error: Exception raised by a socket operation

    Returns:
        ErrorType describing the failure
    """
    if isinstance(error, (socket.timeout, TimeoutError)):
        return ErrorType.TIMEOUT
    if isinstance(error, ConnectionRefusedError):
        return ErrorType.CONNECTION_REFUSED
    if isinstance(error, (socket.herror, socket.gaierror)):
        return ErrorType.RESOLUTION_ERROR
    if isinstance(error, OSError):
        if error.errno in _REFUSED_ERRNOS:
            return ErrorType.CONNECTION_REFUSED
        if error.errno in _UNREACHABLE_ERRNOS:
            return ErrorType.UNREACHABLE
    return ErrorType.NETWORK_ERROR
