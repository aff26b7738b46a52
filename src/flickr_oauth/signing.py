"""OAuth 1.0a and legacy ``api_sig`` signature primitives."""

from __future__ import annotations

import base64
import hashlib
import hmac
from collections.abc import Iterable
from urllib.parse import quote

SIGNATURE_METHOD = "HMAC-SHA1"
OAUTH_VERSION = "1.0"

# RFC 3986 unreserved characters; everything else is escaped, space as %20.
_UNRESERVED = "-._~"


def percent_encode(value: str) -> str:
    return quote(value, safe=_UNRESERVED)


def normalize_parameters(params: Iterable[tuple[str, str]]) -> str:
    """Join parameters as ``k=v`` pairs sorted by key, each side percent-encoded."""
    pairs = sorted((key, value) for key, value in params if key != "oauth_signature")
    return "&".join(f"{percent_encode(key)}={percent_encode(value)}" for key, value in pairs)


def signing_base_string(method: str, url: str, params: Iterable[tuple[str, str]]) -> str:
    """Return the OAuth signature base string for a request.

    The normalized parameter string is percent-encoded a second time as a
    whole, as required by OAuth 1.0a section 3.4.1.
    """
    return "&".join(
        [
            method.upper(),
            percent_encode(url),
            percent_encode(normalize_parameters(params)),
        ]
    )


def oauth_signature(base_string: str, consumer_secret: str, token_secret: str = "") -> str:
    key = f"{percent_encode(consumer_secret)}&{percent_encode(token_secret)}"
    digest = hmac.new(key.encode("utf-8"), base_string.encode("utf-8"), hashlib.sha1).digest()
    return base64.b64encode(digest).decode("ascii")


def api_signature(params: Iterable[tuple[str, str]], secret: str) -> str:
    """Return the MD5 ``api_sig`` over ``secret`` followed by sorted key/value pairs."""
    message = secret + "".join(
        f"{key}{value}" for key, value in sorted(params) if key != "api_sig"
    )
    return hashlib.md5(message.encode("utf-8")).hexdigest()
