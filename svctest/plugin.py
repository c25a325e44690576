"""pytest plugin, registered through the ``pytest11`` entry point."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from svctest.core.config import load_settings
from svctest.core.logging import setup_logging
from svctest.helpers import default_client
from svctest.services import users_service
from svctest.services.request_helpers import ServiceClient


def pytest_addoption(parser: pytest.Parser) -> None:
    group = parser.getgroup("svctest")
    group.addoption(
        "--svctest-logging",
        action="store_true",
        default=False,
        help="Send svctest logs to stdout using LOG_LEVEL / LOG_JSON.",
    )


def pytest_configure(config: pytest.Config) -> None:
    if config.getoption("svctest_logging"):
        settings = load_settings()
        setup_logging(settings.log_level, json_format=settings.log_json)


@pytest.fixture
def service_client() -> ServiceClient:
    return default_client


@pytest.fixture
def register_user(
    service_client: ServiceClient,
) -> Callable[..., tuple[str, str]]:
    """Factory: ``register_user("ROLE_X", ...)`` → ``(user_id, username)``."""

    def _register(*authorities: str) -> tuple[str, str]:
        return users_service.register_new_user(service_client, *authorities)

    return _register
