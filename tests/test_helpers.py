"""End-to-end use of the module-level helpers against the stub deployment."""

from __future__ import annotations

import pytest

import svctest
from svctest import helpers
from svctest.services.request_helpers import ServiceClient
from svctest.stubs import StubDeployment


def test_package_exports_the_helper_surface() -> None:
    for name in svctest.__all__:
        assert hasattr(svctest, name), name
    assert svctest.get_authorized == helpers.default_client.get_authorized


def test_default_client_is_a_single_instance() -> None:
    assert isinstance(helpers.default_client, ServiceClient)
    assert svctest.default_client is helpers.default_client


def test_register_then_call_as_that_user(
    stub_default_client: ServiceClient, deployment: StubDeployment
) -> None:
    _, username = helpers.register_new_user("ROLE_X")
    deployment.respond("GET", "/orders", 200, [{"id": "o1"}])

    orders = helpers.read_array_json_result(helpers.get_authorized(username, "/orders"))

    assert orders == [{"id": "o1"}]
    (call,) = deployment.requests_to("/orders")
    assert call.header_values("Authorization") == [
        f"Bearer {deployment.token_for(username)}"
    ]
    assert helpers.token_for(username) == deployment.token_for(username)


def test_array_result_then_lookup(
    stub_default_client: ServiceClient, deployment: StubDeployment
) -> None:
    deployment.token_body = {"access_token": "T1"}
    deployment.respond("GET", "/items", 200, [{"id": "a"}, {"id": "b"}])

    items = helpers.read_array_json_result(helpers.get_authorized("alice", "/items"))

    assert len(items) == 2
    assert helpers.find_local_by_id(items, "b", "id") is items[1]
    with pytest.raises(pytest.fail.Exception):
        helpers.find_local_by_id(items, "c", "id")


def test_single_result_round_trip(
    stub_default_client: ServiceClient, deployment: StubDeployment
) -> None:
    deployment.respond("POST", "/things", 201, {"id": "t1", "name": "thing"})
    resp = helpers.post_unauthorized("/things", '{"name": "thing"}')
    assert resp.status_code == 201
    assert helpers.read_single_json_result(resp)["id"] == "t1"


def test_send_nats_message_through_default_client(
    stub_default_client: ServiceClient, deployment: StubDeployment
) -> None:
    helpers.send_nats_message("orders.created", {"orderId": "o1", "amount": 3})
    assert deployment.messages["orders.created"] == [{"amount": 3, "orderId": "o1"}]


def test_check_unauthorized_through_default_client(
    stub_default_client: ServiceClient, deployment: StubDeployment
) -> None:
    deployment.respond("GET", "/private", 401)
    helpers.check_unauthorized("/private")

    deployment.respond("GET", "/public", 200)
    with pytest.raises(pytest.fail.Exception):
        helpers.check_unauthorized("/public")


def test_token_failure_aborts_authorized_helpers(
    stub_default_client: ServiceClient, deployment: StubDeployment
) -> None:
    deployment.token_status = 500
    with pytest.raises(pytest.exit.Exception, match="500"):
        helpers.get_authorized_and_check_status_code("alice", "/x", 200)
