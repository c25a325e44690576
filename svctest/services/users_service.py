from __future__ import annotations

import json
import logging
from uuid import uuid4

from svctest.core.config import USERS_PATH
from svctest.services.request_helpers import ServiceClient

logger = logging.getLogger(__name__)


def user_payload(user_id: str, username: str, authorities: tuple[str, ...]) -> dict:
    # Password equals username so token_for(username) can log in as this user.
    return {
        "id": user_id,
        "username": username,
        "password": username,
        "enabled": True,
        "authorities": [{"authority": name} for name in authorities],
    }


def register_new_user(client: ServiceClient, *authorities: str) -> tuple[str, str]:
    """Register a fresh enabled user and return ``(user_id, username)``."""
    username = str(uuid4())
    user_id = str(uuid4())
    body = json.dumps(user_payload(user_id, username, authorities))
    client.post_unauthorized_and_check_status_code(USERS_PATH, body, 204)
    logger.info(
        "Registered user id=%s username=%s authorities=%s",
        user_id,
        username,
        list(authorities),
    )
    return user_id, username
