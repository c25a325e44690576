from __future__ import annotations

import pytest

from svctest.services.json_results import (
    read_array_json_result,
    read_single_json_result,
)

# ---- single object ----


def test_read_single_json_result_decodes_object(response_factory) -> None:
    resp, stream = response_factory(
        200, b'{"id": "a", "n": 1.5, "ok": true, "tags": ["x"], "none": null}'
    )
    assert read_single_json_result(resp) == {
        "id": "a",
        "n": 1.5,
        "ok": True,
        "tags": ["x"],
        "none": None,
    }
    assert stream.closed


def test_read_single_json_result_rejects_array(response_factory) -> None:
    resp, _ = response_factory(200, b'[{"id": "a"}]')
    with pytest.raises(pytest.fail.Exception, match="expected a JSON object"):
        read_single_json_result(resp)


def test_read_single_json_result_fails_on_garbage_and_closes(
    response_factory,
) -> None:
    resp, stream = response_factory(200, b"<html>nope</html>")
    with pytest.raises(pytest.fail.Exception, match="not valid JSON"):
        read_single_json_result(resp)
    assert stream.closed


# ---- array of objects ----


def test_read_array_json_result_keeps_order(response_factory) -> None:
    resp, stream = response_factory(200, b'[{"id": "a"}, {"id": "b"}]')
    assert read_array_json_result(resp) == [{"id": "a"}, {"id": "b"}]
    assert stream.closed


def test_read_array_json_result_rejects_empty_array(response_factory) -> None:
    resp, stream = response_factory(200, b"[]")
    with pytest.raises(pytest.fail.Exception, match="non-empty"):
        read_array_json_result(resp)
    assert stream.closed


def test_read_array_json_result_rejects_object(response_factory) -> None:
    resp, _ = response_factory(200, b'{"id": "a"}')
    with pytest.raises(pytest.fail.Exception, match="expected a JSON array"):
        read_array_json_result(resp)


def test_read_array_json_result_rejects_non_object_elements(
    response_factory,
) -> None:
    resp, _ = response_factory(200, b'[{"id": "a"}, 3]')
    with pytest.raises(pytest.fail.Exception, match="to be an object"):
        read_array_json_result(resp)


def test_read_array_json_result_fails_on_empty_body(response_factory) -> None:
    resp, _ = response_factory(204, b"")
    with pytest.raises(pytest.fail.Exception, match="not valid JSON"):
        read_array_json_result(resp)
