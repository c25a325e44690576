"""Helpers for integration tests against an HTTP microservice deployment.

Point ``DH`` at the deployment (``host[:port]``) and call the helpers::

    from svctest import get_authorized, read_single_json_result, register_new_user

    _, username = register_new_user("ROLE_USER")
    profile = read_single_json_result(get_authorized(username, "/profile-service/me"))
"""

from svctest.helpers import (
    check_unauthorized,
    default_client,
    find_local_by_id,
    find_raw_local_by_id,
    get_authorized,
    get_authorized_and_check_status_code,
    get_unauthorized,
    patch_authorized,
    patch_authorized_and_check_status_code,
    post_authorized,
    post_authorized_and_check_status_code,
    post_unauthorized,
    post_unauthorized_and_check_status_code,
    read_array_json_result,
    read_single_json_result,
    register_new_user,
    send_nats_message,
    token_for,
)
from svctest.services.request_helpers import ServiceClient
from svctest.services.token_cache import TokenCache
from svctest.services.transport import Transport

__all__ = [
    "ServiceClient",
    "TokenCache",
    "Transport",
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
