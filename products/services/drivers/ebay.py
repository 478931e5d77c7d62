"""
eBay Driver

Searches eBay via the Finding API (``findItemsByKeywords``, XML responses).
Extends BaseDriver — returns ProductRecord.
"""

import logging
from dataclasses import dataclass
from typing import List
from urllib.parse import urlencode

from .base_driver import (
    BaseDriver,
    DriverOptions,
    ProductRecord,
    child_elements,
    child_text,
    find_child,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EbayOptions(DriverOptions):
    """eBay application id."""
    app_id: str = ""


class EbayDriver(BaseDriver):
    """eBay keyword search via the Finding API."""

    DRIVER_ID = "ebay"
    VENDOR_NAME = "eBay"
    SERVICE_URL = "http://svcs.ebay.com/services/search/FindingService/v1"
    OPERATION_NAME = "findItemsByKeywords"
    SERVICE_VERSION = "1.0.0"
    MAX_ENTRIES_PER_PAGE = 100
    OPTIONS_CLASS = EbayOptions
    REQUIRED_CREDENTIALS = ("app_id",)

    def make_request_url(self, options: EbayOptions) -> str:
        params = {
            "OPERATION-NAME": self.OPERATION_NAME,
            "SERVICE-VERSION": self.SERVICE_VERSION,
            "SECURITY-APPNAME": options.app_id,
            "RESPONSE-DATA-FORMAT": "XML",
            "paginationInput.entriesPerPage": min(max(options.maximum_product_count, 1), self.MAX_ENTRIES_PER_PAGE),
            "paginationInput.pageNumber": max(options.results_page, 1),
            "keywords": options.keywords,
        }
        return f"{self.SERVICE_URL}?{urlencode(params)}"

    def parse_products(self, root, options) -> List[ProductRecord]:
        ack = child_text(root, "ack")
        if ack and ack != "Success":
            logger.warning(f"eBay acknowledged with {ack}: {child_text(root, 'errorMessage/error/message')}")

        search_result = find_child(root, "searchResult")
        if search_result is None:
            return []

        return [self._convert_item(item) for item in child_elements(search_result, "item")]

    def _convert_item(self, item) -> ProductRecord:
        return ProductRecord(
            name=child_text(item, "title"),
            price=child_text(item, "sellingStatus/currentPrice"),
            web_urls=(child_text(item, "viewItemURL"),),
            image_urls=(child_text(item, "galleryURL"),),
        )
