"""Flickr client session: credentials, request parameters and signing."""

from __future__ import annotations

import time
from types import TracebackType
from typing import TYPE_CHECKING

import httpx

from . import signing
from .args import Args, generate_nonce

if TYPE_CHECKING:
    from .auth import Credentials

API_ENDPOINT = "https://api.flickr.com/services/rest"
UPLOAD_ENDPOINT = "https://up.flickr.com/services/upload/"
REPLACE_ENDPOINT = "https://up.flickr.com/services/replace/"
AUTHORIZE_URL = "https://www.flickr.com/services/oauth/authorize"
REQUEST_TOKEN_URL = "https://www.flickr.com/services/oauth/request_token"
ACCESS_TOKEN_URL = "https://www.flickr.com/services/oauth/access_token"

DEFAULT_TIMEOUT = 30.0


class FlickrClient:
    """Hold the state needed to sign and send one Flickr request at a time.

    The client is mutated per call (endpoint, verb, args) and is meant for
    single-threaded use. Run one instance per caller for concurrency.
    """

    def __init__(
        self,
        api_key: str,
        api_secret: str,
        http_client: httpx.Client | None = None,
    ) -> None:
        self.api_key = api_key
        self.api_secret = api_secret
        self.http_verb = "GET"
        self.endpoint_url = ""
        self.args = Args()
        self.oauth_token = ""
        self.oauth_token_secret = ""
        self.user_id = ""
        self._owns_http_client = http_client is None
        self.http_client = http_client or httpx.Client(timeout=DEFAULT_TIMEOUT)

    @classmethod
    def from_credentials(
        cls, credentials: Credentials, http_client: httpx.Client | None = None
    ) -> FlickrClient:
        client = cls(credentials.api_key, credentials.api_secret, http_client=http_client)
        client.oauth_token = credentials.oauth_token or ""
        client.oauth_token_secret = credentials.oauth_token_secret or ""
        client.user_id = credentials.user_nsid or ""
        return client

    def init(self) -> None:
        """Reset endpoint, verb and args before a REST method call."""
        self.endpoint_url = API_ENDPOINT
        self.http_verb = "GET"
        self.clear_args()

    def clear_args(self) -> None:
        self.args.clear()

    def set_default_args(self) -> None:
        """Populate the per-request OAuth parameters with a fresh nonce and timestamp."""
        self.args.set("oauth_version", signing.OAUTH_VERSION)
        self.args.set("oauth_signature_method", signing.SIGNATURE_METHOD)
        self.args.set("oauth_nonce", generate_nonce())
        self.args.set("oauth_timestamp", str(int(time.time())))

    def get_url(self) -> str:
        if not len(self.args):
            return self.endpoint_url
        return f"{self.endpoint_url}?{self.args.encode()}"

    def get_signing_base_string(self) -> str:
        return signing.signing_base_string(self.http_verb, self.endpoint_url, self.args.items())

    def sign(self, token_secret: str) -> str:
        """Compute the HMAC-SHA1 signature and store it as ``oauth_signature``.

        An empty ``token_secret`` is valid and used for the request-token step.
        """
        self.args.delete("oauth_signature")
        signature = signing.oauth_signature(
            self.get_signing_base_string(), self.api_secret, token_secret
        )
        self.args.set("oauth_signature", signature)
        return signature

    def api_sign(self, secret: str) -> str:
        signature = signing.api_signature(self.args.items(), secret)
        self.args.set("api_sig", signature)
        return signature

    def oauth_sign(self) -> str:
        """Sign the current args with the access token held by this client."""
        self.set_default_args()
        self.args.set("oauth_token", self.oauth_token)
        self.args.set("oauth_consumer_key", self.api_key)
        return self.sign(self.oauth_token_secret)

    def close(self) -> None:
        if self._owns_http_client:
            self.http_client.close()

    def __enter__(self) -> FlickrClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
