"""
Tests for the Amazon driver.

Run with: python -m pytest products/tests/test_amazon.py -v
"""

import base64
import hashlib
import hmac
from urllib.parse import parse_qs, unquote, urlsplit

import pytest

from core.exceptions import MissingCredentialError, UnsupportedOptionError
from products.services.drivers.amazon import AmazonDriver
from products.services.drivers.base_driver import ProductRecord


PRODUCTS_XML = """<?xml version="1.0"?>
<products>
  <product name="WordPress Bible" sellPrice="$29.99" description="Everything about WordPress"
           defaultProductUri="http://images.amazon.com/bible.jpg" storeUri="http://www.amazon.com/dp/1"/>
  <product name="WordPress for Dummies" sellPrice="$19.99" description="An introduction"
           defaultProductUri="http://images.amazon.com/dummies.jpg" storeUri="http://www.amazon.com/dp/2"/>
  <product name="Untitled"/>
</products>
"""

HELP_XML = """<?xml version="1.0"?>
<response>
  <help><exception-message>Request has expired</exception-message></help>
</response>
"""

OPTIONS = {
    "site": "ecs.amazonaws.com",
    "access_key_id": "AKIDEXAMPLE",
    "associate_tag": "cybsprlab-20",
    "secret_access_key": "secret",
}


@pytest.fixture
def driver(make_transport):
    return AmazonDriver(options=OPTIONS, transport=make_transport(body=PRODUCTS_XML))


class TestAmazonRequestUrl:
    """Signed ItemSearch URL."""

    def test_query_parameters_are_alphabetical_and_signed_last(self, driver):
        url = driver.build_url({"keywords": "WordPress", "search_index": "Books"})

        query = urlsplit(url).query
        names = [pair.split("=", 1)[0] for pair in query.split("&")]
        assert names[-1] == "Signature"
        assert names[:-1] == sorted(names[:-1])
        assert len(set(names[:-1])) == len(names[:-1])

    def test_url_carries_item_search_parameters(self, driver):
        parts = urlsplit(driver.build_url())
        params = parse_qs(parts.query)

        assert parts.scheme == "http"
        assert parts.netloc == "ecs.amazonaws.com"
        assert parts.path == "/onca/xml"
        assert params["Operation"] == ["ItemSearch"]
        assert params["Service"] == ["AWSECommerceService"]
        assert params["Keywords"] == ["WordPress"]
        assert params["SearchIndex"] == ["Books"]
        assert params["AWSAccessKeyId"] == ["AKIDEXAMPLE"]
        assert params["AssociateTag"] == ["cybsprlab-20"]
        assert "Timestamp" in params
        assert "ItemPage" not in params

    def test_signature_covers_canonical_query(self, driver):
        url = driver.build_url()
        canonical, encoded = urlsplit(url).query.rsplit("&Signature=", 1)

        to_sign = f"GET\necs.amazonaws.com\n/onca/xml\n{canonical}"
        digest = hmac.new(b"secret", to_sign.encode(), hashlib.sha256).digest()
        assert unquote(encoded) == base64.b64encode(digest).decode()

    def test_results_page_adds_item_page(self, driver):
        params = parse_qs(urlsplit(driver.build_url({"results_page": 3})).query)
        assert params["ItemPage"] == ["3"]

    def test_site_option_changes_host(self, driver):
        url = driver.build_url({"site": "ecs.amazonaws.co.uk"})
        assert url.startswith("http://ecs.amazonaws.co.uk/onca/xml?")


class TestAmazonMissingKey:
    """Without a secret key nothing is sent."""

    def test_missing_secret_key_sends_nothing(self, make_transport):
        transport = make_transport(body=PRODUCTS_XML)
        driver = AmazonDriver(options={"access_key_id": "AKIDEXAMPLE"}, transport=transport)

        assert driver.is_configured() is False
        with pytest.raises(MissingCredentialError):
            driver.get_products()
        assert transport.calls == []


class TestAmazonProducts:
    """Mapping of <product> nodes."""

    def test_maps_product_attributes_in_order(self, driver):
        products = driver.get_products()

        assert len(products) == 3
        assert products[0] == ProductRecord(
            name="WordPress Bible",
            description="Everything about WordPress",
            price="$29.99",
            web_urls=("http://www.amazon.com/dp/1",),
            image_urls=("http://images.amazon.com/bible.jpg",),
        )
        assert products[1].name == "WordPress for Dummies"

    def test_missing_attributes_map_to_empty_values(self, driver):
        untitled = driver.get_products()[2]
        assert untitled.name == "Untitled"
        assert untitled.price == ""
        assert untitled.description == ""
        assert untitled.web_urls == ()
        assert untitled.image_urls == ()

    def test_help_node_yields_no_products(self, make_transport):
        driver = AmazonDriver(options=OPTIONS, transport=make_transport(body=HELP_XML))
        assert driver.get_products() == ()

    def test_maximum_product_count_truncates(self, driver):
        assert len(driver.get_products({"maximum_product_count": 2})) == 2

    def test_one_request_with_configured_wait(self, driver):
        driver.get_products({"wait_for": 12})
        assert len(driver.transport.calls) == 1
        assert driver.transport.calls[0]["timeout"] == 12

    def test_unsupported_option_sends_nothing(self, driver):
        with pytest.raises(UnsupportedOptionError) as excinfo:
            driver.get_products({"amazon_locale": "uk"})
        assert excinfo.value.option == "amazon_locale"
        assert driver.transport.calls == []
