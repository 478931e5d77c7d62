"""
Drivers Package

One driver per vendor, all behind the same product-fetch contract.

Usage:
    from products.services.drivers import create_driver

    ebay = create_driver("ebay")
    products = ebay.get_products({"keywords": "love hina"})
"""

from .base_driver import BaseDriver, DriverOptions, ProductRecord
from .transport import HttpResponse, HttpTransport
from .signing import QuerySigner
from .amazon import AmazonDriver
from .cafepress import CafePressDriver
from .commission_junction import CommissionJunctionDriver
from .ebay import EbayDriver
from .driver_registry import DRIVER_REGISTRY, create_driver, get_all_drivers, get_driver_config

__all__ = [
    "BaseDriver",
    "DriverOptions",
    "ProductRecord",
    "HttpResponse",
    "HttpTransport",
    "QuerySigner",
    "AmazonDriver",
    "CafePressDriver",
    "CommissionJunctionDriver",
    "EbayDriver",
    "DRIVER_REGISTRY",
    "create_driver",
    "get_all_drivers",
    "get_driver_config",
]
