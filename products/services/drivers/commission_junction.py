"""
Commission Junction Driver

Searches CJ advertiser catalogs via the v2 Product Search REST API.
The developer key travels in the ``Authorization`` header.

API Documentation: https://developers.cj.com/
"""

import logging
import re
from dataclasses import dataclass
from typing import Dict, List
from urllib.parse import urlencode

from core.exceptions import VendorResponseError

from .base_driver import (
    BaseDriver,
    DriverOptions,
    ProductRecord,
    child_text,
    descendants,
    local_name,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommissionJunctionOptions(DriverOptions):
    """CJ credentials and product search parameters."""
    developer_key: str = ""
    website_id: str = ""
    advertiser_ids: str = ""
    currency: str = "USD"
    serviceable_area: str = "US"
    maximum_product_count: int = 50


class CommissionJunctionDriver(BaseDriver):
    """
    CJ product search.

    CJ documents ``page-number`` as starting at zero, but page zero returns
    nothing in practice, so results_page is sent unchanged (1-based).
    """

    DRIVER_ID = "commission_junction"
    VENDOR_NAME = "Commission Junction"
    SERVICE_URL = "https://product-search.api.cj.com/v2/product-search"
    MAX_RECORDS_PER_PAGE = 1000
    OPTIONS_CLASS = CommissionJunctionOptions
    REQUIRED_CREDENTIALS = ("developer_key", "website_id")
    PUBLIC_OPTIONS = BaseDriver.PUBLIC_OPTIONS + ("advertiser_ids", "currency", "serviceable_area")

    def make_request_url(self, options: CommissionJunctionOptions) -> str:
        params = {
            "website-id": options.website_id,
            "serviceable-area": options.serviceable_area,
            "currency": options.currency,
            "records-per-page": min(max(options.maximum_product_count, 1), self.MAX_RECORDS_PER_PAGE),
            "page-number": max(options.results_page, 1),
            "keywords": options.keywords,
        }

        advertisers = [a for a in re.split(r"[,\s]+", options.advertiser_ids) if a]
        if advertisers:
            params["advertiser-ids"] = ",".join(advertisers)

        return f"{self.SERVICE_URL}?{urlencode(params)}"

    def request_headers(self, options: CommissionJunctionOptions) -> Dict[str, str]:
        return {"Authorization": options.developer_key}

    def parse_products(self, root, options) -> List[ProductRecord]:
        if local_name(root.tag) == "error-message":
            errors = [root]
        else:
            errors = descendants(root, "error-message")
        if errors:
            message = (errors[0].text or "").strip() or "Unknown error"
            raise VendorResponseError(
                f"Commission Junction error: {message}",
                vendor=self.DRIVER_ID,
                body=message,
            )

        return [self._convert_product(node) for node in descendants(root, "product")]

    def _convert_product(self, node) -> ProductRecord:
        return ProductRecord(
            name=child_text(node, "name"),
            description=child_text(node, "description"),
            price=child_text(node, "price"),
            web_urls=(child_text(node, "buy-url"),),
            image_urls=(child_text(node, "image-url"),),
        )
