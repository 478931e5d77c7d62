"""
Shared fixtures for the products tests.

Django is configured here so the API view tests can run under plain pytest.
No test touches the network: drivers get a FakeTransport.
"""

import os

import django
import pytest

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "panhandler_site.settings")
django.setup()

from products.services.drivers.transport import HttpResponse  # noqa: E402


class FakeTransport:
    """Records every request and replays one canned response or error."""

    def __init__(self, body="", status=200, headers=None, error=None):
        self.response = HttpResponse(status=status, headers=headers or {}, body=body)
        self.error = error
        self.calls = []

    def request(self, url, timeout, headers=None):
        self.calls.append({"url": url, "timeout": timeout, "headers": dict(headers or {})})
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def make_transport():
    """Factory for FakeTransport instances."""
    return FakeTransport
