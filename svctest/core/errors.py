"""Failure taxonomy.

Two kinds of failure, kept apart on purpose:

  fail_test():  an expectation about the system under test did not hold
                (wrong status code, missing element, undecodable body,
                unreachable endpoint).  Only the current test fails.

  abort_run():  the harness itself is misconfigured or misused (odd
                header list, token endpoint unreachable or answering
                non-200, token response without ``access_token``).  No
                later test can meaningfully pass, so the whole run stops.
"""

from __future__ import annotations

import logging
from typing import NoReturn

import pytest

logger = logging.getLogger(__name__)


def fail_test(message: str) -> NoReturn:
    logger.error(message)
    pytest.fail(message)


def abort_run(message: str) -> NoReturn:
    logger.critical(message)
    pytest.exit(message, returncode=pytest.ExitCode.INTERNAL_ERROR)
