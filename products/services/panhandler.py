"""
Panhandler Facade

One uniform entry point over a single active driver. Every call delegates
straight to the driver; the facade keeps no state besides that reference.

Usage:
    from products.services.panhandler import Panhandler

    ebay = Panhandler.for_driver("ebay")
    ebay.set_maximum_product_count(5)
    products = ebay.get_products_by_keywords(["love hina", "anime"])
"""

from typing import Any, Iterable, Mapping, Optional, Tuple

from .drivers.base_driver import BaseDriver, ProductRecord
from .drivers.driver_registry import create_driver


class Panhandler:
    """Uniform product-fetch surface for one driver."""

    def __init__(self, driver: BaseDriver):
        self._driver = driver

    @classmethod
    def for_driver(cls, driver_id: str, transport=None, app_config=None) -> "Panhandler":
        """Build a facade around a registered driver."""
        return cls(create_driver(driver_id, transport=transport, app_config=app_config))

    @property
    def driver(self) -> BaseDriver:
        return self._driver

    def get_supported_options(self) -> Tuple[str, ...]:
        return self._driver.get_supported_options()

    def get_public_options(self) -> Tuple[str, ...]:
        return self._driver.get_public_options()

    def set_default_option_values(self, options: Mapping[str, Any]) -> None:
        self._driver.set_default_option_values(options)

    def get_products(self, options: Optional[Mapping[str, Any]] = None) -> Tuple[ProductRecord, ...]:
        return self._driver.get_products(options)

    def get_products_by_keywords(
        self,
        keywords: Iterable[str],
        options: Optional[Mapping[str, Any]] = None,
    ) -> Tuple[ProductRecord, ...]:
        return self._driver.get_products_by_keywords(keywords, options)

    def set_maximum_product_count(self, count: int) -> None:
        self._driver.set_maximum_product_count(count)

    def set_results_page(self, page_number: int) -> None:
        self._driver.set_results_page(page_number)
