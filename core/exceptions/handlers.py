"""
DRF Exception Handler
=====================

Renders every API error in one envelope::

    {"error": "<code>", "message": "<text>", "detail": {...}}

PanhandlerError subtypes carry their own code and details. Failures that
reach a vendor are logged at ERROR with the driver from the URL, caller
mistakes at WARNING. Standard DRF exceptions (throttling, 405, ...) are
reshaped into the same envelope.

Registered in ``REST_FRAMEWORK["EXCEPTION_HANDLER"]``.
"""

import logging
from rest_framework.views import exception_handler as drf_exception_handler
from rest_framework.response import Response

from .base import PanhandlerError, ServiceError

logger = logging.getLogger(__name__)


def panhandler_exception_handler(exc, context):
    """Render PanhandlerError and DRF exceptions as ``{error, message, detail}``."""
    driver_id = (context.get("kwargs") or {}).get("driver_id")

    if isinstance(exc, PanhandlerError):
        body = exc.to_dict()
        if driver_id:
            body["detail"] = {"driver": driver_id, **body.get("detail", {})}

        log = logger.error if isinstance(exc, ServiceError) else logger.warning
        log(f"[{driver_id or '-'}] {exc.error_code}: {exc.message}")
        return Response(body, status=exc.status_code)

    response = drf_exception_handler(exc, context)

    if response is None:
        logger.exception(f"Unhandled exception in {context.get('view', 'unknown')}")
        return None

    codes = exc.get_codes() if hasattr(exc, "get_codes") else None
    response.data = {
        "error": codes if isinstance(codes, str) else "invalid",
        "message": str(getattr(exc, "detail", exc)),
        "detail": response.data,
    }
    return response
