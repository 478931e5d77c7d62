"""
Product Views

Read-only HTTP surface over the Panhandler facade.
"""

import logging
import time

from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from core.exceptions import UnsupportedOptionError, ValidationError

from .serializers import DriverSerializer, ProductsResponseSerializer
from .services.drivers.driver_registry import get_all_drivers, get_driver_class, is_driver_enabled
from .services.panhandler import Panhandler

logger = logging.getLogger(__name__)


class HealthView(APIView):
    """
    Simple health check endpoint for load balancers and deployment platforms.
    Returns 200 OK if the service is running.
    """
    permission_classes = [AllowAny]

    def get(self, request):
        return Response({
            "status": "healthy",
            "service": "panhandler-api",
            "version": "1.0.0",
        })


class DriverListView(APIView):
    """
    List registered drivers.

    GET /api/v1/drivers/
    """
    permission_classes = [AllowAny]
    app_config = None

    def get(self, request):
        app_config = self.app_config
        if app_config is None:
            from panhandler_site.config import config as app_config

        drivers = [
            {
                "id": driver.id,
                "name": driver.name,
                "description": driver.description,
                "enabled": is_driver_enabled(driver.id),
                "configured": app_config.is_configured(driver.id),
                "supported_options": list(get_driver_class(driver.id).get_public_options()),
            }
            for driver in get_all_drivers()
        ]
        return Response({"drivers": DriverSerializer(drivers, many=True).data})


class ProductListView(APIView):
    """
    Fetch products from one driver.

    GET /api/v1/products/<driver_id>/?keywords=<keywords>&maximum_product_count=10

    Query parameters are per-call driver options, limited to the driver's
    public options. Hosts and credentials always come from the server
    configuration, and ``wait_for`` can only shorten the configured timeout.
    """
    permission_classes = [AllowAny]
    transport = None
    app_config = None

    def get(self, request, driver_id):
        app_config = self.app_config
        if app_config is None:
            from panhandler_site.config import config as app_config

        panhandler = Panhandler.for_driver(
            driver_id,
            transport=self.transport,
            app_config=app_config,
        )
        options = self._public_options(request, panhandler, app_config)

        start = time.time()
        products = panhandler.get_products(options)
        elapsed_ms = int((time.time() - start) * 1000)

        logger.info(f"Driver {driver_id} returned {len(products)} products in {elapsed_ms}ms")

        return Response(ProductsResponseSerializer({
            "driver": driver_id,
            "products": products,
            "meta": {
                "total_results": len(products),
                "search_time_ms": elapsed_ms,
            },
        }).data)

    def _public_options(self, request, panhandler, app_config):
        """Query parameters as driver options; anything non-public is a 400."""
        public = panhandler.get_public_options()
        options = {}
        for key in request.query_params:
            if key not in public:
                raise UnsupportedOptionError(key, driver=panhandler.driver.DRIVER_ID)
            options[key] = request.query_params.get(key)

        if "wait_for" in options:
            try:
                requested = int(str(options["wait_for"]).strip())
            except ValueError:
                raise ValidationError(
                    f"Option wait_for must be an integer, got {options['wait_for']!r}",
                    field="wait_for",
                )
            options["wait_for"] = max(1, min(requested, app_config.wait_for))

        return options
