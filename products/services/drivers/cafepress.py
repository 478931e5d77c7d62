"""
CafePress Driver

Lists the products of one CafePress store section via the open API
(``product.listByStoreSection``). Store links can be wrapped in a
Commission Junction tracking URL when a CJ publisher id is configured.
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
    has_help_node,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CafePressOptions(DriverOptions):
    """CafePress credentials and store location."""
    api_key: str = ""
    store_id: str = "cybersprocket"
    section_id: str = "0"
    cj_pid: str = ""


class CafePressDriver(BaseDriver):
    """CafePress store section listing."""

    DRIVER_ID = "cafepress"
    VENDOR_NAME = "CafePress"
    SERVICE_URL = "http://open-api.cafepress.com/product.listByStoreSection.cp"
    API_VERSION = "3"
    CJ_TRACKING_URL = "http://www.tkqlhce.com/click-{pid}-10467594?url={url}"
    OPTIONS_CLASS = CafePressOptions
    REQUIRED_CREDENTIALS = ("api_key",)
    PUBLIC_OPTIONS = BaseDriver.PUBLIC_OPTIONS + ("section_id",)

    def make_request_url(self, options: CafePressOptions) -> str:
        # CafePress pages start at 0, results_page starts at 1
        params = {
            "v": self.API_VERSION,
            "appKey": options.api_key,
            "page": max(options.results_page, 1) - 1,
            "pageSize": max(options.maximum_product_count, 1),
            "storeId": options.store_id,
            "sectionId": options.section_id,
        }
        return f"{self.SERVICE_URL}?{urlencode(params)}"

    def parse_products(self, root, options: CafePressOptions) -> List[ProductRecord]:
        if has_help_node(root):
            logger.warning("CafePress response carries a help node, no products")
            return []

        return [
            self._convert_item(item, options.cj_pid)
            for item in child_elements(root, "product")
        ]

    def _convert_item(self, item, cj_pid: str) -> ProductRecord:
        web_urls = [item.get("storeUri", "")]
        if cj_pid:
            web_urls = [
                self.CJ_TRACKING_URL.format(pid=cj_pid, url=url)
                for url in web_urls if url
            ]

        return ProductRecord(
            name=item.get("name", ""),
            description=item.get("description", ""),
            price=item.get("sellPrice", ""),
            web_urls=tuple(web_urls),
            image_urls=(item.get("defaultProductUri", ""),),
        )
