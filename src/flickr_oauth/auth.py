"""Credentials loading and the OAuth 1.0a handshake against Flickr."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any
from urllib.parse import parse_qsl, unquote

from loguru import logger
from omegaconf import OmegaConf
from pydantic import BaseModel, Field

from .args import Args
from .client import ACCESS_TOKEN_URL, AUTHORIZE_URL, REQUEST_TOKEN_URL, FlickrClient
from .errors import ERR_ACCESS_TOKEN, ERR_INVALID_RESPONSE, ERR_REQUEST_TOKEN, FlickrError

PERMISSIONS = ("read", "write", "delete")

_INVALID_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def _resolve_secrets_location(location: Path | str, *, source: str) -> Path:
    raw = Path(location).expanduser()
    candidate = raw if raw.is_absolute() else Path.cwd() / raw
    if not candidate.is_file():
        raise FileNotFoundError(f"Secrets file not found for {source}: {raw}\nChecked: {candidate}")
    return candidate.resolve()


def _load_normalized_secrets(location: Path) -> dict[str, Any]:
    raw_config = OmegaConf.load(location)
    config = OmegaConf.to_container(raw_config, resolve=True)
    if not isinstance(config, dict):
        raise ValueError("Secrets file must contain a mapping of credential keys.")
    return {str(key).upper(): value for key, value in config.items()}


def _optional_str(normalized: dict[str, Any], key: str) -> str | None:
    value = normalized.get(key)
    return str(value) if value else None


class Credentials(BaseModel):
    """Flickr application credentials and an optional stored access token.

    Read from ``conf/secrets.yml`` unless ``FLICKR_CONFIG_PATH`` or an explicit
    path points elsewhere.
    """

    api_key: str = Field(description="Flickr application key (OAuth consumer key)")
    api_secret: str = Field(description="Flickr application secret (OAuth consumer secret)")
    oauth_token: str | None = Field(
        default=None, description="Access token from a prior handshake"
    )
    oauth_token_secret: str | None = Field(default=None, description="Access token secret")
    user_nsid: str | None = Field(default=None, description="NSID of the authorized user")

    @classmethod
    def from_file(cls, path: Path | str | None = None) -> Credentials:
        env_path = os.environ.get("FLICKR_CONFIG_PATH")
        if env_path:
            location = _resolve_secrets_location(env_path, source="FLICKR_CONFIG_PATH")
        elif path is not None:
            location = _resolve_secrets_location(path, source="path")
        else:
            location = _resolve_secrets_location("conf/secrets.yml", source="default")

        normalized = _load_normalized_secrets(location)
        missing = [key for key in ("FLICKR_API_KEY", "FLICKR_API_SECRET") if not normalized.get(key)]
        if missing:
            raise ValueError(f"Missing Flickr secrets: {', '.join(missing)}")

        return cls(
            api_key=str(normalized["FLICKR_API_KEY"]),
            api_secret=str(normalized["FLICKR_API_SECRET"]),
            oauth_token=_optional_str(normalized, "FLICKR_OAUTH_TOKEN"),
            oauth_token_secret=_optional_str(normalized, "FLICKR_OAUTH_TOKEN_SECRET"),
            user_nsid=_optional_str(normalized, "FLICKR_USER_NSID"),
        )


class RequestToken(BaseModel):
    """Temporary credentials returned by the request-token step."""

    oauth_callback_confirmed: bool = False
    oauth_token: str = ""
    oauth_token_secret: str = ""
    oauth_problem: str = ""


class OAuthToken(BaseModel):
    """Access token and user identity returned by the access-token step."""

    oauth_token: str = ""
    oauth_token_secret: str = ""
    user_nsid: str = ""
    username: str = ""
    full_name: str = ""
    oauth_problem: str = ""


def _decode_token_body(body: str) -> dict[str, str]:
    body = body.strip()
    if _INVALID_ESCAPE.search(body):
        raise FlickrError.from_code(
            ERR_INVALID_RESPONSE, f"invalid URL-encoded body {body[:200]!r}"
        )
    return dict(parse_qsl(body, keep_blank_values=True))


def _require_token(values: dict[str, str], body: str) -> None:
    missing = [key for key in ("oauth_token", "oauth_token_secret") if not values.get(key)]
    if missing:
        logger.debug(f"Token body without {', '.join(missing)}: {body[:200]!r}")
        raise FlickrError.from_code(
            ERR_INVALID_RESPONSE, f"token body is missing {', '.join(missing)}"
        )


def parse_request_token(body: str) -> RequestToken:
    """Decode a request-token response body.

    An ``oauth_problem`` raises ``FlickrError`` with code 20; the error's
    ``response`` is a token carrying only the problem.
    """
    values = _decode_token_body(body)

    if "oauth_problem" in values:
        token = RequestToken(oauth_problem=values["oauth_problem"])
        logger.warning(f"Request token refused: oauth_problem={token.oauth_problem}")
        raise FlickrError.from_code(ERR_REQUEST_TOKEN, token.oauth_problem, response=token)

    _require_token(values, body)

    return RequestToken(
        oauth_callback_confirmed=values.get("oauth_callback_confirmed") == "true",
        oauth_token=values.get("oauth_token", ""),
        oauth_token_secret=values.get("oauth_token_secret", ""),
    )


def parse_oauth_token(body: str) -> OAuthToken:
    """Decode an access-token response body.

    Values are unescaped once more after the form decode so nested escapes
    such as ``%40`` in the NSID come out as ``@``.
    """
    values = _decode_token_body(body)

    if "oauth_problem" in values:
        token = OAuthToken(oauth_problem=values["oauth_problem"])
        logger.warning(f"Access token refused: oauth_problem={token.oauth_problem}")
        raise FlickrError.from_code(ERR_ACCESS_TOKEN, token.oauth_problem, response=token)

    _require_token(values, body)

    return OAuthToken(
        full_name=unquote(values.get("fullname", "")),
        oauth_token=unquote(values.get("oauth_token", "")),
        oauth_token_secret=unquote(values.get("oauth_token_secret", "")),
        user_nsid=unquote(values.get("user_nsid", "")),
        username=unquote(values.get("username", "")),
    )


def _get_token_body(client: FlickrClient) -> str:
    logger.debug(f"GET {client.endpoint_url} args={list(client.args)}")
    response = client.http_client.get(client.get_url())
    logger.debug(f"Token endpoint responded {response.status_code}")
    return response.text


def get_request_token(client: FlickrClient, callback: str = "oob") -> RequestToken:
    """Run the first handshake leg and return the unauthorized request token."""
    client.endpoint_url = REQUEST_TOKEN_URL
    client.http_verb = "GET"
    client.clear_args()
    client.set_default_args()
    client.args.set("oauth_consumer_key", client.api_key)
    client.args.set("oauth_callback", callback)
    client.sign("")

    token = parse_request_token(_get_token_body(client))
    logger.info("Obtained Flickr request token")
    return token


def get_authorize_url(
    client: FlickrClient, request_token: RequestToken, perms: str = "delete"
) -> str:
    """Return the URL where the user authorizes ``request_token``."""
    if perms not in PERMISSIONS:
        raise ValueError(f"perms must be one of {', '.join(PERMISSIONS)}; got {perms!r}")

    client.endpoint_url = AUTHORIZE_URL
    client.args = Args({"oauth_token": request_token.oauth_token, "perms": perms})
    return client.get_url()


def get_access_token(
    client: FlickrClient, request_token: RequestToken, oauth_verifier: str
) -> OAuthToken:
    """Exchange an authorized request token and verifier for an access token."""
    client.endpoint_url = ACCESS_TOKEN_URL
    client.http_verb = "GET"
    client.clear_args()
    client.set_default_args()
    client.args.set("oauth_verifier", oauth_verifier)
    client.args.set("oauth_consumer_key", client.api_key)
    client.args.set("oauth_token", request_token.oauth_token)
    client.sign(request_token.oauth_token_secret)

    token = parse_oauth_token(_get_token_body(client))
    logger.info(f"Obtained Flickr access token for {token.username or token.user_nsid}")
    return token
