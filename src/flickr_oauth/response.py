"""Decode Flickr ``<rsp>`` XML envelopes into typed response models."""

from __future__ import annotations

import typing
from typing import Any, ClassVar, TypeVar

import httpx
from loguru import logger
from lxml import etree
from pydantic import BaseModel, Field

from .errors import ERR_INVALID_RESPONSE, FlickrError

ResponseT = TypeVar("ResponseT", bound="BasicResponse")

_PARSER = etree.XMLParser(resolve_entities=False, no_network=True)


class ErrorElement(BaseModel):
    """The ``<err code=".." msg=".."/>`` child of a failed envelope."""

    code: int = 0
    msg: str = ""


class BasicResponse(BaseModel):
    """Status envelope shared by every REST response.

    Subclasses add payload fields and map each one to an XPath evaluated
    against the ``<rsp>`` root::

        class LoginResponse(BasicResponse):
            xml_fields: ClassVar[dict[str, str]] = {
                "user_id": "user/@id",
                "username": "user/username",
            }
            user_id: str = ""
            username: str = ""
    """

    xml_fields: ClassVar[dict[str, str]] = {}

    stat: str = Field(default="", description="Wire status attribute: 'ok' or 'fail'")
    err: ErrorElement = Field(default_factory=ErrorElement)

    def has_errors(self) -> bool:
        return self.stat == "fail"

    def error_code(self) -> int:
        return self.err.code

    def error_msg(self) -> str:
        return self.err.msg

    def set_error_status(self, failed: bool) -> None:
        self.stat = "fail" if failed else "ok"

    def set_error_code(self, code: int) -> None:
        self.err.code = code

    def set_error_msg(self, message: str) -> None:
        self.err.msg = message

    @classmethod
    def from_xml(cls: type[ResponseT], payload: bytes | str) -> ResponseT:
        """Build a response from raw XML.

        Raises ``etree.XMLSyntaxError`` for malformed XML and ``ValueError``
        (including pydantic validation errors) for envelopes that do not
        match the model.
        """
        if isinstance(payload, str):
            payload = payload.encode("utf-8")
        root = etree.fromstring(payload.strip(), parser=_PARSER)
        if root.tag != "rsp":
            raise ValueError(f"Expected <rsp> envelope, got <{root.tag}>")

        stat = root.get("stat")
        if stat not in ("ok", "fail"):
            raise ValueError(f"Envelope stat must be 'ok' or 'fail', got {stat!r}")

        data: dict[str, Any] = {"stat": stat}
        err_node = root.find("err")
        if err_node is not None:
            data["err"] = {
                "code": int(err_node.get("code", "0")),
                "msg": err_node.get("msg", ""),
            }

        for field_name, path in cls.xml_fields.items():
            matches = root.xpath(path)
            if not matches:
                continue
            values = [_node_text(match) for match in matches]
            annotation = cls.model_fields[field_name].annotation
            data[field_name] = values if typing.get_origin(annotation) is list else values[0]

        return cls.model_validate(data)


def _node_text(match: Any) -> str:
    if isinstance(match, etree._Element):
        return (match.text or "").strip()
    return str(match)


def parse_api_response(response: httpx.Response, response_type: type[ResponseT]) -> ResponseT:
    """Decode an HTTP response into ``response_type`` or raise ``FlickrError``.

    A body that is not a valid envelope raises code 10 before any status is
    inspected; ``stat="fail"`` raises with the provider's code and message.
    """
    body = response.read()
    try:
        parsed = response_type.from_xml(body)
    except (etree.XMLSyntaxError, ValueError) as exc:
        logger.debug(f"Undecodable response body (HTTP {response.status_code}): {body[:200]!r}")
        raise FlickrError.from_code(ERR_INVALID_RESPONSE, str(exc)) from exc

    if parsed.has_errors():
        logger.warning(f"Flickr API failure {parsed.error_code()}: {parsed.error_msg()}")
        raise FlickrError(parsed.error_code(), parsed.error_msg(), response=parsed)

    return parsed
