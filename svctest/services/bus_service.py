from __future__ import annotations

import json
import logging
from typing import Any

from svctest.core.config import BUS_BRIDGE_PREFIX
from svctest.services.request_helpers import ServiceClient

logger = logging.getLogger(__name__)


def encode_message(payload: dict[str, Any]) -> str:
    return json.dumps(payload, separators=(",", ":"), sort_keys=True)


def send_nats_message(
    client: ServiceClient, channel: str, payload: dict[str, Any]
) -> None:
    """Publish ``payload`` on ``channel`` through the HTTP bus bridge."""
    client.post_unauthorized_and_check_status_code(
        BUS_BRIDGE_PREFIX + channel, encode_message(payload), 200
    )
    logger.debug("Published message on channel=%s", channel)
