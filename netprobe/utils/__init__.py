"""
Utility functions and helper classes.
"""

from .logger import Logger, LogLevel, logger, set_log_level, get_logger
from .error_handler import (
    ErrorType, ErrorContext, NetprobeError, NetworkError, ToolMissingError,
    ConfigurationError, ValidationError, NetworkDetectionError,
    classify_socket_error
)

__all__ = [
    'Logger',
    'LogLevel',
    'logger',
    'set_log_level',
    'get_logger',
    'ErrorType',
    'ErrorContext',
    'NetprobeError',
    'NetworkError',
    'ToolMissingError',
    'ConfigurationError',
    'ValidationError',
    'NetworkDetectionError',
    'classify_socket_error'
]
