"""Pytest configuration and shared fixtures.

This file ensures that:
- `src/` is importable without installing the package
- `FLICKR_CONFIG_PATH` from the developer's shell never leaks into tests
"""

from __future__ import annotations

import sys
from collections.abc import Callable
from pathlib import Path

import httpx
import pytest

# Ensure src directory is in path for imports
repo_root = Path(__file__).parent.parent
src_path = repo_root / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from flickr_oauth.client import FlickrClient  # noqa: E402

Handler = Callable[[httpx.Request], httpx.Response]

TEST_CONSUMER_KEY = "768fe946d252b119746fda82e1599980"
TEST_CONSUMER_SECRET = "1a2b3c4d5e6f7g8h"


@pytest.fixture(autouse=True)
def _isolate_config_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("FLICKR_CONFIG_PATH", raising=False)


@pytest.fixture
def signing_client() -> FlickrClient:
    """A client pre-loaded with the fixed request-token args from Flickr's OAuth guide."""
    client = FlickrClient(TEST_CONSUMER_KEY, TEST_CONSUMER_SECRET)
    client.endpoint_url = "http://www.flickr.com/services/oauth/request_token"
    client.http_verb = "GET"
    client.args.set("oauth_nonce", "C2F26CD5C075BA9050AD8EE90644CF29")
    client.args.set("oauth_timestamp", "1316657628")
    client.args.set("oauth_consumer_key", TEST_CONSUMER_KEY)
    client.args.set("oauth_signature_method", "HMAC-SHA1")
    client.args.set("oauth_version", "1.0")
    client.args.set("oauth_callback", "http://www.wackylabs.net/oauth/test")
    return client


@pytest.fixture
def mock_client() -> Callable[[Handler], FlickrClient]:
    """Build a client whose HTTP traffic is served by ``handler``."""

    def factory(handler: Handler) -> FlickrClient:
        http_client = httpx.Client(transport=httpx.MockTransport(handler))
        client = FlickrClient("apikey", "apisecret", http_client=http_client)
        client.oauth_token = "access-token"
        client.oauth_token_secret = "access-secret"
        return client

    return factory
