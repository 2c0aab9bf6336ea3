"""
Shared utilities for the record showcase services

This package contains common utilities used across all services.
"""

from .logger import setup_logging, get_logger, init_logging, RequestLogger, get_request_logger
from .http_client import ServiceClient

__all__ = [
    "setup_logging",
    "get_logger",
    "init_logging",
    "RequestLogger",
    "get_request_logger",
    "ServiceClient",
]
