"""Tests for GET/POST dispatch through an injected HTTP client."""

from __future__ import annotations

import io
from collections.abc import Callable
from typing import ClassVar

import httpx
import pytest

from flickr_oauth.client import FlickrClient
from flickr_oauth.errors import FlickrError
from flickr_oauth.response import BasicResponse
from flickr_oauth.transport import do_get, do_post, do_post_body

ClientFactory = Callable[[Callable[[httpx.Request], httpx.Response]], FlickrClient]

OK_BODY = '<?xml version="1.0" encoding="utf-8" ?><rsp stat="ok"></rsp>'


class FooResponse(BasicResponse):
    xml_fields: ClassVar[dict[str, str]] = {"foo": "foo"}

    foo: str = ""


class RecordingHandler:
    """Answer every request with a fixed response and remember what was sent."""

    def __init__(self, body: str = OK_BODY, status_code: int = 200) -> None:
        self.body = body
        self.status_code = status_code
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, text=self.body)


def test_do_get_sends_args_as_query(mock_client: ClientFactory) -> None:
    handler = RecordingHandler('<rsp stat="ok"><foo>Foo!</foo></rsp>')
    client = mock_client(handler)
    client.endpoint_url = "https://api.flickr.com/services/rest"
    client.args.set("method", "flickr.test.null")
    client.args.set("title", "two words")

    resp = do_get(client, FooResponse)

    assert resp.foo == "Foo!"
    request = handler.requests[0]
    assert request.method == "GET"
    assert request.url.params["method"] == "flickr.test.null"
    assert request.url.params["title"] == "two words"


def test_do_get_surfaces_api_failure(mock_client: ClientFactory) -> None:
    handler = RecordingHandler('<rsp stat="fail"><err code="1" msg="Photo not found"/></rsp>')
    client = mock_client(handler)
    client.endpoint_url = "https://api.flickr.com/services/rest"

    with pytest.raises(FlickrError) as excinfo:
        do_get(client, FooResponse)

    assert excinfo.value.code == 1
    assert excinfo.value.message == "Photo not found"


def test_do_get_non_xml_error_page(mock_client: ClientFactory) -> None:
    """Given an HTML error page from a proxy, when decoded, then code 10 is raised."""
    client = mock_client(RecordingHandler("<html><body>Bad Gateway", status_code=502))
    client.endpoint_url = "https://api.flickr.com/services/rest"

    with pytest.raises(FlickrError) as excinfo:
        do_get(client, FooResponse)

    assert excinfo.value.code == 10


def test_do_get_propagates_transport_errors(mock_client: ClientFactory) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    client = mock_client(handler)
    client.endpoint_url = "https://api.flickr.com/services/rest"

    with pytest.raises(httpx.ReadTimeout):
        do_get(client, FooResponse)


def test_do_post_body_passes_body_through(mock_client: ClientFactory) -> None:
    handler = RecordingHandler()
    client = mock_client(handler)
    client.endpoint_url = "https://up.flickr.com/services/upload/"

    resp = do_post_body(client, b"foo", "text/plain", BasicResponse)

    assert resp.has_errors() is False
    request = handler.requests[0]
    assert request.method == "POST"
    assert request.content == b"foo"
    assert request.headers["content-type"] == "text/plain"


def test_do_post_body_without_content_type(mock_client: ClientFactory) -> None:
    handler = RecordingHandler()
    client = mock_client(handler)
    client.endpoint_url = "https://up.flickr.com/services/upload/"

    do_post_body(client, "foo", "", BasicResponse)

    assert "content-type" not in handler.requests[0].headers


def test_do_post_sends_multipart_fields(mock_client: ClientFactory) -> None:
    """Given plain args, when `do_post()` runs, then each arg is a multipart form field."""
    handler = RecordingHandler()
    client = mock_client(handler)
    client.endpoint_url = "https://api.flickr.com/services/rest"
    client.args.set("fooArg", "foo way")

    do_post(client, BasicResponse)

    request = handler.requests[0]
    body = request.content.decode()
    assert request.headers["content-type"].startswith("multipart/form-data; boundary=")
    assert 'Content-Disposition: form-data; name="fooArg"' in body
    assert "foo way" in body


def test_do_post_attaches_files(mock_client: ClientFactory) -> None:
    handler = RecordingHandler()
    client = mock_client(handler)
    client.endpoint_url = "https://up.flickr.com/services/upload/"
    client.args.set("title", "sunset")

    do_post(
        client,
        BasicResponse,
        files={"photo": ("sunset.jpg", io.BytesIO(b"\xff\xd8jpegbytes"), "image/jpeg")},
    )

    body = handler.requests[0].content
    assert b'name="photo"; filename="sunset.jpg"' in body
    assert b"Content-Type: image/jpeg" in body
    assert b"\xff\xd8jpegbytes" in body
    assert b'name="title"' in body
