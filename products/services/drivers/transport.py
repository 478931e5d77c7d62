"""
HTTP Transport

The single seam through which drivers talk to the network.

A transport exposes ``request(url, timeout, headers=None) -> HttpResponse``
and signals failures with the ``requests`` exception types:
``requests.Timeout`` when the wait period elapses, any other
``requests.RequestException`` for network-level failures. Drivers accept any
object with this shape, which is how tests substitute a fake.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional

import requests

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HttpResponse:
    """
    Status, headers and raw body bytes of one HTTP response.

    The body stays undecoded so the XML parser honours the document's own
    encoding declaration. A str body (handy in tests) is stored as UTF-8.
    """
    status: int
    headers: Dict[str, str] = field(default_factory=dict)
    body: bytes = b""

    def __post_init__(self):
        if isinstance(self.body, str):
            object.__setattr__(self, "body", self.body.encode("utf-8"))

    @property
    def text(self) -> str:
        """Body decoded for logs and error details; parsing uses the raw bytes."""
        return self.body.decode("utf-8", errors="replace")

    def header(self, name: str) -> Optional[str]:
        """Case-insensitive header lookup."""
        wanted = name.lower()
        for key, value in self.headers.items():
            if key.lower() == wanted:
                return value
        return None


class HttpTransport:
    """Blocking GET transport backed by a ``requests.Session``."""

    USER_AGENT = "Panhandler/1.0"

    def __init__(self, session: Optional[requests.Session] = None):
        self.session = session or requests.Session()
        self.session.headers.setdefault("User-Agent", self.USER_AGENT)

    def request(
        self,
        url: str,
        timeout: float,
        headers: Optional[Mapping[str, str]] = None,
    ) -> HttpResponse:
        """Perform one GET; raises ``requests`` exceptions on failure."""
        response = self.session.get(url, headers=dict(headers or {}), timeout=timeout)
        return HttpResponse(
            status=response.status_code,
            headers=dict(response.headers),
            body=response.content,
        )
