"""
core.exceptions — Re-exports for convenient imports.

Usage::

    from core.exceptions import UnsupportedOptionError, VendorAPIError
    from core.exceptions.handlers import panhandler_exception_handler
"""

from .base import (
    PanhandlerError,
    ServiceError,
    TransportError,
    VendorTimeoutError,
    VendorAPIError,
    VendorResponseError,
    ValidationError,
    UnsupportedOptionError,
    NotFoundError,
    ConfigurationError,
    MissingCredentialError,
)

__all__ = [
    # Base
    "PanhandlerError",
    # Service / vendor
    "ServiceError",
    "TransportError",
    "VendorTimeoutError",
    "VendorAPIError",
    "VendorResponseError",
    # Client
    "ValidationError",
    "UnsupportedOptionError",
    "NotFoundError",
    # Config
    "ConfigurationError",
    "MissingCredentialError",
]
