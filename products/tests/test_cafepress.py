"""
Tests for the CafePress driver and the shared request/response handling.

Run with: python -m pytest products/tests/test_cafepress.py -v
"""

from urllib.parse import parse_qs, urlsplit

import pytest
import requests

from core.exceptions import (
    MissingCredentialError,
    TransportError,
    UnsupportedOptionError,
    ValidationError,
    VendorAPIError,
    VendorTimeoutError,
)
from products.services.drivers.cafepress import CafePressDriver


PRODUCTS_XML = """<?xml version="1.0"?>
<products>
  <product id="1" name="Coffee Mug" sellPrice="$12.99" description="Large mug"
           defaultProductUri="http://images.cafepress.com/mug.jpg"
           storeUri="http://www.cafepress.com/cybersprocket.1"/>
  <product id="2" name="T-Shirt" sellPrice="$19.99" description="Cotton shirt"
           defaultProductUri="http://images.cafepress.com/shirt.jpg"
           storeUri="http://www.cafepress.com/cybersprocket.2"/>
</products>
"""

HELP_XML = """<?xml version="1.0"?>
<help>
  <exception-message>Invalid appKey</exception-message>
</help>
"""


@pytest.fixture
def transport(make_transport):
    return make_transport(body=PRODUCTS_XML)


@pytest.fixture
def driver(transport):
    return CafePressDriver(options={"api_key": "app-key"}, transport=transport)


def query_of(url):
    return {key: values[0] for key, values in parse_qs(urlsplit(url).query).items()}


class TestCafePressRequestUrl:
    """listByStoreSection URL."""

    def test_default_url(self, driver):
        url = driver.build_url()
        assert url.startswith("http://open-api.cafepress.com/product.listByStoreSection.cp?")
        assert query_of(url) == {
            "v": "3",
            "appKey": "app-key",
            "page": "0",
            "pageSize": "10",
            "storeId": "cybersprocket",
            "sectionId": "0",
        }

    def test_results_page_is_zero_based_on_the_wire(self, driver):
        assert query_of(driver.build_url({"results_page": 3}))["page"] == "2"

    def test_page_size_is_at_least_one(self, driver):
        assert query_of(driver.build_url({"maximum_product_count": 0}))["pageSize"] == "1"

    def test_string_option_values_are_coerced(self, driver):
        url = driver.build_url({"maximum_product_count": "25", "store_id": "mystore"})
        assert query_of(url)["pageSize"] == "25"
        assert query_of(url)["storeId"] == "mystore"

    def test_non_numeric_count_is_rejected(self, driver, transport):
        with pytest.raises(ValidationError):
            driver.get_products({"maximum_product_count": "many"})
        assert transport.calls == []

    def test_missing_api_key_sends_nothing(self, transport):
        driver = CafePressDriver(transport=transport)
        with pytest.raises(MissingCredentialError):
            driver.get_products()
        assert transport.calls == []


class TestCafePressProducts:
    """Mapping of <product> nodes."""

    def test_maps_products_in_order(self, driver):
        products = driver.get_products()
        assert [p.name for p in products] == ["Coffee Mug", "T-Shirt"]
        assert products[0].price == "$12.99"
        assert products[0].description == "Large mug"
        assert products[0].web_urls == ("http://www.cafepress.com/cybersprocket.1",)
        assert products[0].image_urls == ("http://images.cafepress.com/mug.jpg",)

    def test_cj_pid_wraps_store_links(self, transport):
        driver = CafePressDriver(options={"api_key": "app-key", "cj_pid": "12345"}, transport=transport)
        product = driver.get_products()[0]
        assert product.web_urls == (
            "http://www.tkqlhce.com/click-12345-10467594?url=http://www.cafepress.com/cybersprocket.1",
        )

    def test_help_document_yields_no_products(self, make_transport):
        driver = CafePressDriver(options={"api_key": "app-key"}, transport=make_transport(body=HELP_XML))
        assert driver.get_products() == ()


class TestResponseClassification:
    """Empty, malformed, failed and timed-out requests."""

    def test_timeout_names_the_wait_period(self, make_transport):
        transport = make_transport(error=requests.Timeout("Operation timed out after 31000 milliseconds"))
        driver = CafePressDriver(options={"api_key": "app-key", "wait_for": 30}, transport=transport)

        with pytest.raises(VendorTimeoutError) as excinfo:
            driver.get_products()

        assert "30" in excinfo.value.message
        assert excinfo.value.details["wait_for"] == 30
        assert transport.calls[0]["timeout"] == 30

    def test_connection_failure_is_transport_error(self, make_transport):
        transport = make_transport(error=requests.ConnectionError("connection refused"))
        driver = CafePressDriver(options={"api_key": "app-key"}, transport=transport)

        with pytest.raises(TransportError) as excinfo:
            driver.get_products()
        assert not isinstance(excinfo.value, VendorTimeoutError)

    def test_http_error_status_carries_body(self, make_transport):
        transport = make_transport(status=403, body="<h1>Developer Inactive</h1>")
        driver = CafePressDriver(options={"api_key": "app-key"}, transport=transport)

        with pytest.raises(VendorAPIError) as excinfo:
            driver.get_products()
        assert excinfo.value.body == "<h1>Developer Inactive</h1>"
        assert excinfo.value.details["status"] == 403

    def test_status_400_is_an_error(self, make_transport):
        driver = CafePressDriver(options={"api_key": "app-key"}, transport=make_transport(status=400, body="bad"))
        with pytest.raises(VendorAPIError):
            driver.get_products()

    def test_empty_body_yields_no_products(self, make_transport):
        driver = CafePressDriver(options={"api_key": "app-key"}, transport=make_transport(body=""))
        assert driver.get_products() == ()

    def test_malformed_xml_yields_no_products(self, make_transport):
        driver = CafePressDriver(options={"api_key": "app-key"}, transport=make_transport(body="<products><product"))
        assert driver.get_products() == ()

    def test_gateway_error_header_yields_no_products(self, make_transport):
        transport = make_transport(body=PRODUCTS_XML, headers={"X-Mashery-Error-Code": "ERR_403_DEVELOPER_INACTIVE"})
        driver = CafePressDriver(options={"api_key": "app-key"}, transport=transport)
        assert driver.get_products() == ()


class TestOptionHandling:
    """Whitelist validation, per-call overrides and persisted defaults."""

    def test_supported_options(self, driver):
        assert set(driver.get_supported_options()) == {
            "keywords", "maximum_product_count", "results_page", "wait_for",
            "api_key", "store_id", "section_id", "cj_pid",
        }

    def test_unsupported_option_sends_nothing(self, driver, transport):
        with pytest.raises(UnsupportedOptionError):
            driver.get_products({"return": 5})
        assert transport.calls == []

    def test_unsupported_default_is_rejected(self, driver):
        with pytest.raises(UnsupportedOptionError):
            driver.set_default_option_values({"http_handler": object()})

    def test_per_call_options_do_not_persist(self, driver, transport):
        driver.get_products({"store_id": "other"})
        driver.get_products()

        assert query_of(transport.calls[0]["url"])["storeId"] == "other"
        assert query_of(transport.calls[1]["url"])["storeId"] == "cybersprocket"
        assert driver.options.store_id == "cybersprocket"

    def test_default_option_values_persist(self, driver, transport):
        driver.set_default_option_values({"store_id": "other", "wait_for": 5})
        driver.get_products()
        driver.get_products()

        assert [query_of(c["url"])["storeId"] for c in transport.calls] == ["other", "other"]
        assert [c["timeout"] for c in transport.calls] == [5, 5]

    def test_setters_persist(self, driver):
        driver.set_maximum_product_count(4)
        driver.set_results_page(2)
        params = query_of(driver.build_url())
        assert params["pageSize"] == "4"
        assert params["page"] == "1"

    def test_options_object_is_replaced_not_mutated(self, driver):
        before = driver.options
        driver.set_default_option_values({"section_id": "7"})
        assert before.section_id == "0"
        assert driver.options.section_id == "7"
