"""Ordered request parameter store shared by signing and transport."""

from __future__ import annotations

import secrets
import string
from collections.abc import Iterator, Mapping

from .signing import percent_encode

NONCE_ALPHABET = string.ascii_letters + string.digits
NONCE_LENGTH = 8


def generate_nonce(length: int = NONCE_LENGTH) -> str:
    """Return a random alphanumeric nonce for a single request."""
    return "".join(secrets.choice(NONCE_ALPHABET) for _ in range(length))


class Args:
    """Unique-key request parameters; the last write for a key wins.

    Iteration and ``items()`` are sorted by key so the store can feed the
    OAuth base string and the query string directly.
    """

    def __init__(self, initial: Mapping[str, object] | None = None) -> None:
        self._values: dict[str, str] = {}
        if initial:
            for key, value in initial.items():
                self.set(key, value)

    def set(self, key: str, value: object) -> None:
        self._values[key] = str(value)

    def get(self, key: str) -> str:
        """Return the value for ``key`` or an empty string when unset."""
        return self._values.get(key, "")

    def delete(self, key: str) -> None:
        self._values.pop(key, None)

    def clear(self) -> None:
        self._values.clear()

    def items(self) -> list[tuple[str, str]]:
        return sorted(self._values.items())

    def encode(self) -> str:
        """Render the store as a sorted query string with RFC 3986 escaping."""
        return "&".join(
            f"{percent_encode(key)}={percent_encode(value)}" for key, value in self.items()
        )

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._values))

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"Args({dict(self.items())!r})"
