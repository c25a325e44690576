"""Module-level helpers bound to one process-wide ServiceClient.

Suites that need their own transport or an isolated token cache build a
``ServiceClient`` directly; everyone else calls these.
"""

from __future__ import annotations

from typing import Any

from svctest.services import bus_service, users_service
from svctest.services.json_results import (
    read_array_json_result,
    read_single_json_result,
)
from svctest.services.lookup import find_local_by_id, find_raw_local_by_id
from svctest.services.request_helpers import ServiceClient

default_client = ServiceClient()


def token_for(username: str) -> str:
    return default_client.tokens.token_for(username)


get_unauthorized = default_client.get_unauthorized
get_authorized = default_client.get_authorized
get_authorized_and_check_status_code = (
    default_client.get_authorized_and_check_status_code
)
check_unauthorized = default_client.check_unauthorized
post_unauthorized = default_client.post_unauthorized
post_authorized = default_client.post_authorized
post_unauthorized_and_check_status_code = (
    default_client.post_unauthorized_and_check_status_code
)
post_authorized_and_check_status_code = (
    default_client.post_authorized_and_check_status_code
)
patch_authorized = default_client.patch_authorized
patch_authorized_and_check_status_code = (
    default_client.patch_authorized_and_check_status_code
)


def register_new_user(*authorities: str) -> tuple[str, str]:
    return users_service.register_new_user(default_client, *authorities)


def send_nats_message(channel: str, payload: dict[str, Any]) -> None:
    bus_service.send_nats_message(default_client, channel, payload)


__all__ = [
    "check_unauthorized",
    "default_client",
    "find_local_by_id",
    "find_raw_local_by_id",
    "get_authorized",
    "get_authorized_and_check_status_code",
    "get_unauthorized",
    "patch_authorized",
    "patch_authorized_and_check_status_code",
    "post_authorized",
    "post_authorized_and_check_status_code",
    "post_unauthorized",
    "post_unauthorized_and_check_status_code",
    "read_array_json_result",
    "read_single_json_result",
    "register_new_user",
    "send_nats_message",
    "token_for",
]
