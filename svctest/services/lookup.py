from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from svctest.core.errors import fail_test


def find_local_by_id(
    collection: Iterable[Mapping[str, Any]], id: str, id_field: str
) -> Mapping[str, Any]:
    """First element whose ``id_field`` equals ``id``; fails the test if none."""
    for item in collection:
        if item.get(id_field) == id:
            return item
    fail_test(f"no element with {id_field}={id!r} in collection")


def find_raw_local_by_id(
    collection: Iterable[Any], id: str, id_field: str
) -> Mapping[str, Any]:
    """Same as ``find_local_by_id`` for decoded JSON of unknown shape."""
    for item in collection:
        if not isinstance(item, Mapping):
            fail_test(f"expected a JSON object in collection, got {item!r}")
        if item.get(id_field) == id:
            return item
    fail_test(f"no element with {id_field}={id!r} in collection")
