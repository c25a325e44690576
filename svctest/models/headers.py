from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from svctest.core.errors import abort_run

AUTHORIZATION = "Authorization"
CONTENT_TYPE = "Content-Type"
JSON_CONTENT_TYPE = "application/json;charset=UTF-8"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


@dataclass(frozen=True, slots=True)
class Header:
    name: str
    value: str

    def as_tuple(self) -> tuple[str, str]:
        return (self.name, self.value)


def bearer(token: str) -> Header:
    return Header(AUTHORIZATION, f"Bearer {token}")


def json_content_type() -> Header:
    return Header(CONTENT_TYPE, JSON_CONTENT_TYPE)


def pair_headers(flat: Sequence[str]) -> list[Header]:
    """Turn a flat ``name, value, name, value, ...`` list into pairs.

    Repeated names are kept in order; they are added, never replaced.
    An odd count is a programming error in the calling test and stops
    the run.
    """
    if len(flat) % 2 != 0:
        abort_run(
            "wrong number of header arguments: expected name/value pairs, "
            f"got {len(flat)} strings"
        )
    return [Header(flat[i], flat[i + 1]) for i in range(0, len(flat), 2)]
