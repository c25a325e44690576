from __future__ import annotations

from typing import Any

import httpx

from svctest.core.errors import fail_test

JsonObject = dict[str, Any]


def _decode(resp: httpx.Response) -> Any:
    try:
        resp.read()
        return resp.json()
    except ValueError as exc:
        fail_test(f"response body is not valid JSON: {exc}")
    finally:
        resp.close()


def read_single_json_result(resp: httpx.Response) -> JsonObject:
    """Decode the body as one JSON object.  Closes the response."""
    result = _decode(resp)
    if not isinstance(result, dict):
        fail_test(f"expected a JSON object, got {type(result).__name__}")
    return result


def read_array_json_result(resp: httpx.Response) -> list[JsonObject]:
    """Decode the body as a non-empty JSON array of objects.  Closes the response."""
    result = _decode(resp)
    if not isinstance(result, list):
        fail_test(f"expected a JSON array, got {type(result).__name__}")
    if not result:
        fail_test("expected a non-empty JSON array, got []")
    if not all(isinstance(item, dict) for item in result):
        fail_test("expected every element of the JSON array to be an object")
    return result
