"""Error types surfaced by the Flickr client."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

ERR_INVALID_RESPONSE = 10
ERR_REQUEST_TOKEN = 20
ERR_ACCESS_TOKEN = 30

DEFAULT_MESSAGES: dict[int, str] = {
    ERR_INVALID_RESPONSE: "Response is not a valid REST response",
    ERR_REQUEST_TOKEN: "An error occurred while getting the OAuth request token",
    ERR_ACCESS_TOKEN: "An error occurred while getting the OAuth access token",
}


@dataclass(slots=True)
class FlickrError(Exception):
    """Represent a Flickr failure carrying a provider or client error code.

    ``response`` holds whatever was decoded before the failure was detected:
    the parsed envelope for ``stat="fail"`` responses, or the token carrying
    the ``oauth_problem`` for handshake failures.
    """

    code: int
    message: str
    response: Any = None

    def __str__(self) -> str:
        message = self.message or DEFAULT_MESSAGES.get(
            self.code, "Flickr reported a failure without details"
        )
        return f"[{self.code}] {message}"

    @classmethod
    def from_code(cls, code: int, detail: str | None = None, response: Any = None) -> FlickrError:
        """Build an error for one of the fixed client codes."""
        message = DEFAULT_MESSAGES.get(code, "")
        if detail:
            message = f"{message}: {detail}" if message else detail
        return cls(code=code, message=message, response=response)

    @property
    def is_oauth_error(self) -> bool:
        return self.code in {ERR_REQUEST_TOKEN, ERR_ACCESS_TOKEN}
