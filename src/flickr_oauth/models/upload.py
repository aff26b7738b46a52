"""Data models for Flickr photo upload and replace calls.

Upload options are validated at construction so a bad value fails before any
request is signed.
"""

from __future__ import annotations

from typing import ClassVar

from pydantic import BaseModel, Field, field_validator

from ..response import BasicResponse


class UploadParams(BaseModel):
    """Optional metadata sent alongside an uploaded photo.

    Attributes:
        title: Photo title
        description: Photo description (may contain limited HTML)
        tags: Tags; joined with spaces on the wire
        is_public: Visible to everyone
        is_friend: Visible to friends when not public
        is_family: Visible to family when not public
        safety_level: 1 safe, 2 moderate, 3 restricted
        content_type: 1 photo, 2 screenshot, 3 other
        hidden: 1 shown in global search, 2 hidden
        asynchronous: Ask Flickr to process the upload in the background
    """

    title: str = ""
    description: str = ""
    tags: list[str] = Field(default_factory=list)
    is_public: bool = False
    is_friend: bool = False
    is_family: bool = False
    safety_level: int | None = Field(None, ge=1, le=3)
    content_type: int | None = Field(None, ge=1, le=3)
    hidden: int | None = Field(None, ge=1, le=2)
    asynchronous: bool = False

    @field_validator("tags")
    @classmethod
    def reject_blank_tags(cls, v: list[str]) -> list[str]:
        """Drop surrounding whitespace and empty tags."""
        return [tag.strip() for tag in v if tag.strip()]

    def to_args(self) -> dict[str, str]:
        """Render the params as upload form fields, omitting unset options."""
        args: dict[str, str] = {
            "is_public": "1" if self.is_public else "0",
            "is_friend": "1" if self.is_friend else "0",
            "is_family": "1" if self.is_family else "0",
        }
        if self.title:
            args["title"] = self.title
        if self.description:
            args["description"] = self.description
        if self.tags:
            args["tags"] = " ".join(self.tags)
        if self.safety_level is not None:
            args["safety_level"] = str(self.safety_level)
        if self.content_type is not None:
            args["content_type"] = str(self.content_type)
        if self.hidden is not None:
            args["hidden"] = str(self.hidden)
        if self.asynchronous:
            args["async"] = "1"
        return args


class UploadResponse(BasicResponse):
    """``<photoid>`` for synchronous uploads, ``<ticketid>`` for async ones."""

    xml_fields: ClassVar[dict[str, str]] = {
        "photo_id": "photoid",
        "ticket_id": "ticketid",
    }

    photo_id: str = ""
    ticket_id: str = ""


class ReplaceResponse(BasicResponse):
    xml_fields: ClassVar[dict[str, str]] = {
        "photo_id": "photoid",
        "secret": "photoid/@secret",
        "original_secret": "photoid/@originalsecret",
        "ticket_id": "ticketid",
    }

    photo_id: str = ""
    secret: str = ""
    original_secret: str = ""
    ticket_id: str = ""
