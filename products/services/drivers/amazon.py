"""
Amazon Driver

Searches Amazon via the Product Advertising API REST interface
(``ItemSearch``) with signed requests.
Extends BaseDriver — returns ProductRecord.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, List

from core.exceptions import MissingCredentialError

from .base_driver import (
    BaseDriver,
    DriverOptions,
    ProductRecord,
    child_elements,
    has_help_node,
)
from .signing import QuerySigner

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AmazonOptions(DriverOptions):
    """Amazon credentials, locale and ItemSearch parameters."""
    site: str = "ecs.amazonaws.com"
    access_key_id: str = ""
    secret_access_key: str = ""
    associate_tag: str = ""
    keywords: str = "WordPress"
    search_index: str = "Books"
    response_group: str = "Medium,Images,Variations"


class AmazonDriver(BaseDriver):
    """Amazon product search via signed ItemSearch requests."""

    DRIVER_ID = "amazon"
    VENDOR_NAME = "Amazon"
    REQUEST_PATH = "/onca/xml"
    OPTIONS_CLASS = AmazonOptions
    PUBLIC_OPTIONS = BaseDriver.PUBLIC_OPTIONS + ("search_index", "response_group")

    OPERATION = "ItemSearch"
    SERVICE = "AWSECommerceService"

    def is_configured(self) -> bool:
        return QuerySigner(self.options.secret_access_key, self.options.site).can_sign

    # ── BaseDriver implementation ───────────────────────────────

    def make_request_url(self, options: AmazonOptions) -> str:
        signer = QuerySigner(options.secret_access_key, options.site, self.REQUEST_PATH)
        url = signer.signed_url(self.request_parameters(options))
        if url is None:
            raise MissingCredentialError(
                "Amazon secret_access_key is not set; cannot sign the request",
                setting="secret_access_key",
                driver=self.DRIVER_ID,
            )
        return url

    def request_parameters(self, options: AmazonOptions) -> Dict[str, str]:
        """Unsigned ItemSearch parameters; empty values are dropped when signing."""
        params = {
            "AWSAccessKeyId": options.access_key_id,
            "AssociateTag": options.associate_tag,
            "Keywords": options.keywords,
            "Operation": self.OPERATION,
            "ResponseGroup": options.response_group,
            "SearchIndex": options.search_index,
            "Service": self.SERVICE,
            "Timestamp": self._timestamp(),
        }
        if options.results_page > 1:
            params["ItemPage"] = str(options.results_page)
        return params

    def parse_products(self, root, options) -> List[ProductRecord]:
        if has_help_node(root):
            logger.warning("Amazon response carries a help node, no products")
            return []

        return [self._convert_item(item) for item in child_elements(root, "product")]

    # ── Parsing ─────────────────────────────────────────────────

    def _convert_item(self, item) -> ProductRecord:
        return ProductRecord(
            name=item.get("name", ""),
            description=item.get("description", ""),
            price=item.get("sellPrice", ""),
            web_urls=(item.get("storeUri", ""),),
            image_urls=(item.get("defaultProductUri", ""),),
        )

    def _timestamp(self) -> str:
        return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
