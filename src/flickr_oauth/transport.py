"""Send signed requests through the client's HTTP transport."""

from __future__ import annotations

from collections.abc import Mapping
from typing import IO, Any

from loguru import logger

from .client import FlickrClient
from .response import ResponseT, parse_api_response

FileField = tuple[str, IO[bytes] | bytes, str | None]


def do_get(client: FlickrClient, response_type: type[ResponseT]) -> ResponseT:
    """Send the current args as a GET query string and decode the envelope."""
    logger.debug(f"GET {client.endpoint_url} args={list(client.args)}")
    response = client.http_client.get(client.get_url())
    logger.debug(f"API response status: {response.status_code}")
    return parse_api_response(response, response_type)


def do_post_body(
    client: FlickrClient,
    body: bytes | str,
    content_type: str,
    response_type: type[ResponseT],
) -> ResponseT:
    """POST a caller-built body verbatim to the client's endpoint."""
    headers = {"Content-Type": content_type} if content_type else {}
    logger.debug(f"POST {client.endpoint_url} raw body ({content_type or 'no content type'})")
    response = client.http_client.post(client.endpoint_url, content=body, headers=headers)
    logger.debug(f"API response status: {response.status_code}")
    return parse_api_response(response, response_type)


def do_post(
    client: FlickrClient,
    response_type: type[ResponseT],
    files: Mapping[str, FileField] | None = None,
) -> ResponseT:
    """POST every arg as a multipart form field, plus optional file parts.

    Args travel as ``(None, value)`` parts so the body is always
    ``multipart/form-data`` even when no file is attached.
    """
    parts: list[tuple[str, Any]] = [(key, (None, value)) for key, value in client.args.items()]
    if files:
        parts.extend(files.items())

    logger.debug(
        f"POST {client.endpoint_url} fields={list(client.args)} files={list(files or {})}"
    )
    response = client.http_client.post(client.endpoint_url, files=parts)
    logger.debug(f"API response status: {response.status_code}")
    return parse_api_response(response, response_type)
