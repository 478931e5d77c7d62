"""
Panhandler Exception Hierarchy
==============================

Domain-specific exceptions for structured error handling across the drivers
and the HTTP API.

Usage::

    from core.exceptions import UnsupportedOptionError, VendorTimeoutError

    # In a driver:
    raise VendorTimeoutError("eBay did not respond within 30 seconds", vendor="ebay", wait_for=30)

    # In a view:
    raise NotFoundError("Driver not found", resource="driver")
"""

from rest_framework import status


# =============================================================================
# Base Exception
# =============================================================================

class PanhandlerError(Exception):
    """Base exception for all Panhandler errors."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_code = "server_error"

    def __init__(self, message="An unexpected error occurred", **kwargs):
        self.message = message
        self.details = kwargs
        super().__init__(message)

    def to_dict(self):
        result = {
            "error": self.error_code,
            "message": self.message,
        }
        if self.details:
            result["detail"] = self.details
        return result


# =============================================================================
# Service Errors (vendor APIs)
# =============================================================================

class ServiceError(PanhandlerError):
    """External vendor call failed."""

    status_code = status.HTTP_502_BAD_GATEWAY
    error_code = "service_error"

    def __init__(self, message="External service unavailable", vendor=None, **kwargs):
        if vendor:
            kwargs["vendor"] = vendor
        super().__init__(message, **kwargs)


class TransportError(ServiceError):
    """Network-level failure before a response was received."""

    error_code = "transport_error"


class VendorTimeoutError(TransportError):
    """Vendor did not respond within the configured wait period."""

    status_code = status.HTTP_504_GATEWAY_TIMEOUT
    error_code = "vendor_timeout"


class VendorAPIError(ServiceError):
    """Vendor answered with an HTTP error status."""

    error_code = "vendor_api_error"

    def __init__(self, message, vendor, status=None, body=None, **kwargs):
        if status is not None:
            kwargs["status"] = status
        self.body = body or ""
        super().__init__(message, vendor=vendor, **kwargs)


class VendorResponseError(VendorAPIError):
    """Vendor returned a well-formed document describing an error."""

    error_code = "vendor_response_error"


# =============================================================================
# Client Errors
# =============================================================================

class ValidationError(PanhandlerError):
    """Invalid input from the caller."""

    status_code = status.HTTP_400_BAD_REQUEST
    error_code = "validation_error"

    def __init__(self, message="Invalid request data", field=None, **kwargs):
        if field:
            kwargs["field"] = field
        super().__init__(message, **kwargs)


class UnsupportedOptionError(ValidationError):
    """Option name is not in the driver's supported set."""

    error_code = "unsupported_option"

    def __init__(self, option, driver=None, **kwargs):
        self.option = option
        if driver:
            kwargs["driver"] = driver
        super().__init__(f"Received unsupported option {option}", field=option, **kwargs)


class NotFoundError(PanhandlerError):
    """Requested resource does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    error_code = "not_found"

    def __init__(self, message="Resource not found", resource=None, **kwargs):
        if resource:
            kwargs["resource"] = resource
        super().__init__(message, **kwargs)


# =============================================================================
# Configuration Errors
# =============================================================================

class ConfigurationError(PanhandlerError):
    """Missing or invalid configuration (env vars, settings)."""

    error_code = "configuration_error"

    def __init__(self, message="Configuration error", setting=None, **kwargs):
        if setting:
            kwargs["setting"] = setting
        super().__init__(message, **kwargs)


class MissingCredentialError(ConfigurationError):
    """A credential needed to build the request is not set."""

    error_code = "missing_credential"
