"""
Panhandler URL Configuration
"""

from django.http import JsonResponse
from django.urls import path, include


def api_root(request):
    """API root — names the service and its versioned prefix."""
    return JsonResponse({
        "service": "Panhandler API",
        "version": "1.0.0",
        "endpoints": {
            "drivers": "/api/v1/drivers/",
            "products": "/api/v1/products/<driver_id>/?keywords=<keywords>",
            "health": "/api/v1/health/",
        },
    })


urlpatterns = [
    path("api/", api_root, name="api-root"),
    path("api/v1/", include("products.urls")),
]
