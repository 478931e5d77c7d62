"""
Base Driver

Abstract base class for all Panhandler drivers.
Every driver turns a uniform ``get_products(options)`` call into one
vendor-specific HTTP GET and maps the XML response onto ProductRecord.

The stored options are a frozen dataclass. Per-call options are merged
copy-on-call, so a ``get_products`` override never leaks into the next call;
only ``set_default_option_values`` (and the two setters built on it)
replaces the stored defaults.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple
from xml.etree import ElementTree

import requests

from core.exceptions import (
    MissingCredentialError,
    TransportError,
    UnsupportedOptionError,
    ValidationError,
    VendorAPIError,
    VendorTimeoutError,
)

from .transport import HttpResponse, HttpTransport

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProductRecord:
    """
    Standardized product format across ALL drivers.

    Prices are kept as the vendor formats them. URL sequences are tuples
    with empty entries dropped, so a missing XML node becomes ``()``.
    """
    name: str = ""
    description: str = ""
    price: str = ""
    web_urls: Tuple[str, ...] = ()
    image_urls: Tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "web_urls", tuple(u for u in self.web_urls if u))
        object.__setattr__(self, "image_urls", tuple(u for u in self.image_urls if u))

    @property
    def url(self) -> str:
        """The canonical web URL (first one), or an empty string."""
        return self.web_urls[0] if self.web_urls else ""

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "name": self.name,
            "description": self.description,
            "price": self.price,
            "web_urls": list(self.web_urls),
            "image_urls": list(self.image_urls),
        }


@dataclass(frozen=True)
class DriverOptions:
    """Options every driver understands."""
    keywords: str = ""
    maximum_product_count: int = 10
    results_page: int = 1
    wait_for: int = 30


# ── Namespace-agnostic XML helpers ─────────────────────────────

def local_name(tag) -> str:
    """Tag name without its ``{namespace}`` prefix."""
    if not isinstance(tag, str):
        return ""
    return tag.rsplit("}", 1)[-1]


def child_elements(element: ElementTree.Element, name: str) -> List[ElementTree.Element]:
    return [child for child in element if local_name(child.tag) == name]


def find_child(element: ElementTree.Element, path: str) -> Optional[ElementTree.Element]:
    """Follow a ``a/b/c`` path of child names, ignoring namespaces."""
    current = element
    for name in path.split("/"):
        matches = child_elements(current, name)
        if not matches:
            return None
        current = matches[0]
    return current


def child_text(element: ElementTree.Element, path: str) -> str:
    node = find_child(element, path)
    if node is None:
        return ""
    return (node.text or "").strip()


def descendants(element: ElementTree.Element, name: str) -> List[ElementTree.Element]:
    """All descendants named ``name`` in document order (``//name``)."""
    return [node for node in element.iter() if node is not element and local_name(node.tag) == name]


def has_help_node(root: ElementTree.Element) -> bool:
    """
    True when the document is, or directly holds, a non-empty ``<help>``.

    CafePress style services report errors this way.
    """
    nodes = [root] if local_name(root.tag) == "help" else child_elements(root, "help")
    for node in nodes:
        if len(node) or "".join(node.itertext()).strip():
            return True
    return False


class BaseDriver(ABC):
    """
    Abstract base class for all drivers.

    Subclasses declare their options dataclass and implement
    ``make_request_url`` and ``parse_products``.
    """

    DRIVER_ID: str = ""
    VENDOR_NAME: str = ""
    SERVICE_URL: str = ""
    OPTIONS_CLASS = DriverOptions
    # Credentials that must be non-empty before a request is built
    REQUIRED_CREDENTIALS: Tuple[str, ...] = ()
    # Options an untrusted caller may set; hosts and credentials stay out
    PUBLIC_OPTIONS: Tuple[str, ...] = ("keywords", "maximum_product_count", "results_page", "wait_for")

    def __init__(
        self,
        options: Optional[Mapping[str, Any]] = None,
        transport=None,
        debugging: bool = False,
    ):
        self.transport = transport or HttpTransport()
        self.debugging = debugging
        self._options = self._merge(self.OPTIONS_CLASS(), options or {})

    # ── Public API ──────────────────────────────────────────────

    @classmethod
    def get_supported_options(cls) -> Tuple[str, ...]:
        """Names that ``get_products`` and the setters accept."""
        return tuple(f.name for f in fields(cls.OPTIONS_CLASS))

    @classmethod
    def get_public_options(cls) -> Tuple[str, ...]:
        """Supported options that are safe to expose over the HTTP API."""
        supported = cls.get_supported_options()
        return tuple(name for name in cls.PUBLIC_OPTIONS if name in supported)

    @property
    def options(self):
        """The stored default options (a frozen dataclass)."""
        return self._options

    def set_default_option_values(self, options: Mapping[str, Any]) -> None:
        """Persist new default option values for all later calls."""
        self._options = self._merge(self._options, options or {})

    def set_maximum_product_count(self, count: int) -> None:
        self.set_default_option_values({"maximum_product_count": count})

    def set_results_page(self, page_number: int) -> None:
        self.set_default_option_values({"results_page": page_number})

    def get_products(self, options: Optional[Mapping[str, Any]] = None) -> Tuple[ProductRecord, ...]:
        """
        Fetch products from the vendor.

        Args:
            options: Per-call overrides, restricted to ``get_supported_options()``

        Returns:
            Tuple of ProductRecord in the vendor's response order

        Raises:
            UnsupportedOptionError, ValidationError, MissingCredentialError:
                before any request is sent
            VendorTimeoutError, TransportError, VendorAPIError:
                when the single request fails
        """
        call_options = self._merge(self._options, options or {})
        url = self._request_url(call_options)
        response = self._fetch(url, call_options)

        products = self._extract_products(response, call_options)
        products = products[:max(call_options.maximum_product_count, 1)]

        logger.info(f"[{self.VENDOR_NAME}] {len(products)} products have been located")
        return tuple(products)

    def get_products_by_keywords(
        self,
        keywords: Iterable[str],
        options: Optional[Mapping[str, Any]] = None,
    ) -> Tuple[ProductRecord, ...]:
        """Search by keywords for this call only (a list is joined with spaces)."""
        call_options = dict(options or {})
        call_options["keywords"] = keywords
        return self.get_products(call_options)

    def build_url(self, options: Optional[Mapping[str, Any]] = None) -> str:
        """The request URL ``get_products`` would send for these options."""
        return self._request_url(self._merge(self._options, options or {}))

    def is_configured(self) -> bool:
        """Check if the stored options carry the required credentials."""
        return all(getattr(self._options, name) for name in self.REQUIRED_CREDENTIALS)

    # ── Abstract methods — subclasses implement these ──────────

    @abstractmethod
    def make_request_url(self, options) -> str:
        """Build the vendor URL from merged options."""

    @abstractmethod
    def parse_products(self, root: ElementTree.Element, options) -> List[ProductRecord]:
        """Map a parsed response document onto ProductRecords."""

    # ── Optional hooks ──────────────────────────────────────────

    def request_headers(self, options) -> Dict[str, str]:
        """Extra HTTP headers for the request. Override in subclasses."""
        return {}

    # ── Internals ───────────────────────────────────────────────

    def _merge(self, base, overrides: Mapping[str, Any]):
        """Return a copy of ``base`` with validated overrides applied."""
        supported = self.get_supported_options()
        for name in overrides:
            if name not in supported:
                raise UnsupportedOptionError(name, driver=self.DRIVER_ID)
        if not overrides:
            return base

        types = {f.name: f.type for f in fields(base)}
        changes = {
            name: self._coerce(name, value, types[name])
            for name, value in overrides.items()
        }
        return replace(base, **changes)

    def _coerce(self, name: str, value: Any, expected: type) -> Any:
        if expected is int:
            if isinstance(value, int):
                return value
            try:
                return int(str(value).strip())
            except (TypeError, ValueError):
                raise ValidationError(
                    f"Option {name} must be an integer, got {value!r}",
                    field=name,
                )
        if value is None:
            return ""
        if isinstance(value, (list, tuple)):
            return " ".join(str(v) for v in value)
        return str(value)

    def _request_url(self, options) -> str:
        for name in self.REQUIRED_CREDENTIALS:
            if not getattr(options, name):
                raise MissingCredentialError(
                    f"{self.VENDOR_NAME} {name} is not set; request not sent",
                    setting=name,
                    driver=self.DRIVER_ID,
                )
        return self.make_request_url(options)

    def _fetch(self, url: str, options) -> HttpResponse:
        """Perform the single GET and classify transport failures."""
        if self.debugging:
            logger.debug(f"[{self.VENDOR_NAME}] Requesting product list from: {url}")

        try:
            response = self.transport.request(
                url,
                timeout=options.wait_for,
                headers=self.request_headers(options),
            )
        except requests.Timeout as e:
            raise VendorTimeoutError(
                f"{self.VENDOR_NAME} did not respond within {options.wait_for} seconds. "
                f"Increase the wait_for setting.",
                vendor=self.DRIVER_ID,
                wait_for=options.wait_for,
            ) from e
        except requests.RequestException as e:
            raise TransportError(
                f"{self.VENDOR_NAME} request failed: {e}",
                vendor=self.DRIVER_ID,
            ) from e

        if self.debugging:
            logger.debug(f"[{self.VENDOR_NAME}] HTTP {response.status}: {response.text}")

        if response.status >= 400:
            raise VendorAPIError(
                f"{self.VENDOR_NAME} returned HTTP {response.status}",
                vendor=self.DRIVER_ID,
                status=response.status,
                body=response.text,
            )
        return response

    def _extract_products(self, response: HttpResponse, options) -> List[ProductRecord]:
        """Parse the body; empty, flagged or malformed bodies yield no products."""
        if not response.body or not response.body.strip():
            logger.warning(f"[{self.VENDOR_NAME}] Empty response body")
            return []

        error_code = response.header("x-mashery-error-code")
        if error_code:
            logger.warning(f"[{self.VENDOR_NAME}] Gateway error {error_code}, no products")
            return []

        try:
            root = ElementTree.fromstring(response.body)
        except ElementTree.ParseError as e:
            logger.warning(f"[{self.VENDOR_NAME}] Malformed XML response: {e}")
            return []

        return self.parse_products(root, options)
