"""
Driver Registry

Central configuration for all available drivers.
Toggle drivers on/off via environment variables.

Each entry maps a driver_id -> DriverConfig, which names the Python class
to instantiate and whether the driver is enabled.
"""

import os
import logging
from dataclasses import dataclass
from importlib import import_module
from typing import Any, Dict, List, Optional

from core.exceptions import NotFoundError

from .base_driver import BaseDriver

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DriverConfig:
    """Registry entry for a driver."""
    id: str
    name: str
    driver_class: str
    enabled: bool = True
    env_toggle_key: Optional[str] = None
    description: str = ""

    @property
    def env_key(self) -> str:
        """Get the environment variable key for this driver."""
        return self.env_toggle_key or f"DRIVER_{self.id.upper()}"


# ─── All available drivers ──────────────────────────────────────
DRIVER_REGISTRY: Dict[str, DriverConfig] = {

    "amazon": DriverConfig(
        id="amazon",
        name="Amazon",
        driver_class="products.services.drivers.amazon.AmazonDriver",
        description="Amazon Product Advertising API (signed ItemSearch)",
    ),

    "cafepress": DriverConfig(
        id="cafepress",
        name="CafePress",
        driver_class="products.services.drivers.cafepress.CafePressDriver",
        description="CafePress store section listing",
    ),

    "commission_junction": DriverConfig(
        id="commission_junction",
        name="Commission Junction",
        driver_class="products.services.drivers.commission_junction.CommissionJunctionDriver",
        env_toggle_key="DRIVER_CJ",
        description="CJ v2 product search",
    ),

    "ebay": DriverConfig(
        id="ebay",
        name="eBay",
        driver_class="products.services.drivers.ebay.EbayDriver",
        description="eBay Finding API",
    ),
}


def get_driver_config(driver_id: str) -> Optional[DriverConfig]:
    """Get configuration for a specific driver."""
    return DRIVER_REGISTRY.get(driver_id)


def get_all_drivers() -> List[DriverConfig]:
    """Get all registered drivers."""
    return list(DRIVER_REGISTRY.values())


def is_driver_enabled(driver_id: str) -> bool:
    """
    Check if a driver is enabled.

    Reads from environment variable first, falls back to registry default.
    """
    config = DRIVER_REGISTRY.get(driver_id)
    if not config:
        return False

    env_value = os.getenv(config.env_key, None)
    if env_value is not None:
        return env_value.lower() in ("true", "1", "yes", "on")

    return config.enabled


def get_driver_class(driver_id: str):
    """Import and return the driver class for an id."""
    config = DRIVER_REGISTRY.get(driver_id)
    if not config:
        raise NotFoundError(f"Unknown driver {driver_id}", resource="driver")

    module_path, class_name = config.driver_class.rsplit(".", 1)
    return getattr(import_module(module_path), class_name)


def default_options(driver_id: str, app_config) -> Dict[str, Any]:
    """Constructor options for a driver, taken from the host configuration."""
    options: Dict[str, Any] = {"wait_for": app_config.wait_for}

    if driver_id == "amazon":
        options.update(
            site=app_config.amazon.site,
            access_key_id=app_config.amazon.access_key_id,
            secret_access_key=app_config.amazon.secret_access_key,
            associate_tag=app_config.amazon.associate_tag,
        )
    elif driver_id == "cafepress":
        options.update(
            api_key=app_config.cafepress.api_key,
            store_id=app_config.cafepress.store_id,
            section_id=app_config.cafepress.section_id,
            cj_pid=app_config.cafepress.cj_pid,
        )
    elif driver_id == "commission_junction":
        options.update(
            developer_key=app_config.commission_junction.developer_key,
            website_id=app_config.commission_junction.website_id,
        )
    elif driver_id == "ebay":
        options.update(app_id=app_config.ebay.app_id)

    return options


def create_driver(driver_id: str, transport=None, app_config=None) -> BaseDriver:
    """
    Instantiate an enabled driver with credentials from the host configuration.

    Raises:
        NotFoundError: unknown or disabled driver id
    """
    if not is_driver_enabled(driver_id):
        raise NotFoundError(f"Driver {driver_id} is not available", resource="driver")

    if app_config is None:
        from panhandler_site.config import config as app_config

    driver_class = get_driver_class(driver_id)
    driver = driver_class(
        options=default_options(driver_id, app_config),
        transport=transport,
        debugging=app_config.debugging,
    )
    logger.info(f"Loaded driver: {DRIVER_REGISTRY[driver_id].name}")
    return driver
