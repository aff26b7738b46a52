"""Thin wrappers over a handful of Flickr API methods."""

from __future__ import annotations

import mimetypes
from pathlib import Path
from typing import IO, ClassVar

from loguru import logger

from .client import REPLACE_ENDPOINT, UPLOAD_ENDPOINT, FlickrClient
from .models.upload import ReplaceResponse, UploadParams, UploadResponse
from .response import BasicResponse
from .transport import do_get, do_post


class LoginResponse(BasicResponse):
    xml_fields: ClassVar[dict[str, str]] = {
        "user_id": "user/@id",
        "username": "user/username",
    }

    user_id: str = ""
    username: str = ""


class EchoResponse(BasicResponse):
    xml_fields: ClassVar[dict[str, str]] = {
        "method": "method",
        "api_key": "api_key",
        "format": "format",
    }

    method: str = ""
    api_key: str = ""
    format: str = ""


def login(client: FlickrClient) -> LoginResponse:
    """Return the user the client's access token belongs to (``flickr.test.login``)."""
    client.init()
    client.args.set("method", "flickr.test.login")
    client.oauth_sign()
    return do_get(client, LoginResponse)


def echo(client: FlickrClient, **extra: str) -> EchoResponse:
    """Call ``flickr.test.echo`` with key-based ``api_sig`` signing.

    Extra keyword arguments are sent as additional parameters and echoed back.
    """
    client.init()
    client.args.set("method", "flickr.test.echo")
    client.args.set("api_key", client.api_key)
    for key, value in extra.items():
        client.args.set(key, value)
    client.api_sign(client.api_secret)
    return do_get(client, EchoResponse)


def null(client: FlickrClient) -> BasicResponse:
    """Check that the access token is valid with ``flickr.test.null``."""
    client.init()
    client.args.set("method", "flickr.test.null")
    client.oauth_sign()
    return do_get(client, BasicResponse)


def photos_delete(client: FlickrClient, photo_id: str) -> BasicResponse:
    client.init()
    client.http_verb = "POST"
    client.args.set("method", "flickr.photos.delete")
    client.args.set("photo_id", photo_id)
    client.oauth_sign()
    return do_post(client, BasicResponse)


def upload_reader(
    client: FlickrClient,
    fileobj: IO[bytes],
    filename: str,
    params: UploadParams | None = None,
) -> UploadResponse:
    """Upload photo bytes read from ``fileobj``.

    The photo part is not part of the OAuth signature; only the text fields are.
    """
    params = params or UploadParams()
    client.init()
    client.endpoint_url = UPLOAD_ENDPOINT
    client.http_verb = "POST"
    for key, value in params.to_args().items():
        client.args.set(key, value)
    client.oauth_sign()

    content_type = mimetypes.guess_type(filename)[0] or "application/octet-stream"
    logger.info(f"Uploading {filename} to Flickr")
    return do_post(client, UploadResponse, files={"photo": (filename, fileobj, content_type)})


def upload_file(
    client: FlickrClient, path: Path | str, params: UploadParams | None = None
) -> UploadResponse:
    path = Path(path)
    with path.open("rb") as fileobj:
        return upload_reader(client, fileobj, path.name, params)


def replace_file(
    client: FlickrClient, path: Path | str, photo_id: str, asynchronous: bool = False
) -> ReplaceResponse:
    """Replace the image data of an existing photo."""
    path = Path(path)
    client.init()
    client.endpoint_url = REPLACE_ENDPOINT
    client.http_verb = "POST"
    client.args.set("photo_id", photo_id)
    if asynchronous:
        client.args.set("async", "1")
    client.oauth_sign()

    content_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
    logger.info(f"Replacing photo {photo_id} with {path.name}")
    with path.open("rb") as fileobj:
        return do_post(
            client, ReplaceResponse, files={"photo": (path.name, fileobj, content_type)}
        )
