"""OAuth 1.0a client for the Flickr REST API."""

from .auth import (
    Credentials,
    OAuthToken,
    RequestToken,
    get_access_token,
    get_authorize_url,
    get_request_token,
    parse_oauth_token,
    parse_request_token,
)
from .client import FlickrClient
from .errors import FlickrError
from .response import BasicResponse, parse_api_response
from .transport import do_get, do_post, do_post_body

__all__ = [
    "BasicResponse",
    "Credentials",
    "FlickrClient",
    "FlickrError",
    "OAuthToken",
    "RequestToken",
    "do_get",
    "do_post",
    "do_post_body",
    "get_access_token",
    "get_authorize_url",
    "get_request_token",
    "parse_api_response",
    "parse_oauth_token",
    "parse_request_token",
]
