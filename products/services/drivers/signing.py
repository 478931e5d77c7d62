"""
Amazon Request Signing

Signs Product Advertising API REST requests (signature version 2):

    1. drop empty-valued parameters
    2. sort by key and percent-encode (RFC 3986) into the canonical query
    3. string to sign = "GET\\n{host}\\n{path}\\n{canonical query}"
    4. base64(HMAC-SHA256(secret key, string to sign)), percent-encoded
"""

import base64
import hashlib
import hmac
from typing import Mapping, Optional
from urllib.parse import quote


def _encode(value) -> str:
    return quote(str(value), safe="-_.~")


class QuerySigner:
    """Deterministic signer for one Amazon host and path."""

    def __init__(self, secret_key: str, host: str, path: str = "/onca/xml"):
        self.secret_key = secret_key or ""
        self.host = host
        self.path = path

    @property
    def can_sign(self) -> bool:
        return bool(self.secret_key)

    def canonical_query(self, params: Mapping[str, object]) -> str:
        """Sorted, percent-encoded ``key=value&...`` without empty values."""
        pairs = sorted(
            ((key, value) for key, value in params.items()
             if value is not None and value != ""),
            key=lambda pair: pair[0],
        )
        return "&".join(f"{_encode(key)}={_encode(value)}" for key, value in pairs)

    def string_to_sign(self, params: Mapping[str, object]) -> str:
        return f"GET\n{self.host}\n{self.path}\n{self.canonical_query(params)}"

    def signature(self, params: Mapping[str, object]) -> Optional[str]:
        """Base64 HMAC-SHA256 signature, or None without a secret key."""
        if not self.can_sign:
            return None
        digest = hmac.new(
            self.secret_key.encode("utf-8"),
            self.string_to_sign(params).encode("utf-8"),
            hashlib.sha256,
        ).digest()
        return base64.b64encode(digest).decode("ascii")

    def signed_url(self, params: Mapping[str, object]) -> Optional[str]:
        """
        Full request URL with the ``Signature`` parameter appended.

        Returns None when no secret key is set: there is no query to send.
        """
        signature = self.signature(params)
        if signature is None:
            return None
        return (
            f"http://{self.host}{self.path}?{self.canonical_query(params)}"
            f"&Signature={quote(signature, safe='')}"
        )
