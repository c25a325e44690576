"""HTTP transport: one request, one fresh client.

Every request is built against ``http://<DH><path>`` and dispatched
through a client obtained from ``client_factory``.  The default factory
is ``httpx.Client`` with no timeout, no retries and httpx's default
redirect handling; nothing is pooled between requests.

WHY A FACTORY
---------------
The library talks to a live deployment, but its own tests (and suites
that want an offline dry run) swap in ``fastapi.testclient.TestClient``
bound to the stub deployment in ``svctest.stubs``.  TestClient is an
httpx.Client subclass, so the same code path serves both.

The response is read in full before the client closes, so a returned
response keeps its body readable; ``close()`` on it is still the
caller's job for raw responses.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence

import httpx

from svctest.core.config import get_host
from svctest.core.errors import fail_test
from svctest.models.headers import Header

logger = logging.getLogger(__name__)

Body = str | bytes | None
ClientFactory = Callable[[], httpx.Client]


def default_client_factory() -> httpx.Client:
    return httpx.Client(timeout=None)


class Transport:
    def __init__(
        self,
        client_factory: ClientFactory = default_client_factory,
        host_resolver: Callable[[], str] = get_host,
    ) -> None:
        self.client_factory = client_factory
        self.host_resolver = host_resolver

    def url_for(self, path: str) -> str:
        return f"http://{self.host_resolver()}{path}"

    def request(
        self,
        method: str,
        path: str,
        body: Body = None,
        headers: Sequence[Header] = (),
    ) -> httpx.Response:
        """Build and dispatch a request.  httpx errors propagate unchanged."""
        url = self.url_for(path)
        content = body.encode("utf-8") if isinstance(body, str) else body

        with self.client_factory() as client:
            req = client.build_request(
                method,
                url,
                content=content,
                headers=[h.as_tuple() for h in headers],
            )
            started = time.perf_counter()
            resp = client.send(req)

        duration_ms = round((time.perf_counter() - started) * 1000, 1)
        logger.debug(
            "%s %s -> %d (%.1f ms)",
            method,
            url,
            resp.status_code,
            duration_ms,
            extra={
                "method": method,
                "url": url,
                "status_code": resp.status_code,
                "duration_ms": duration_ms,
            },
        )
        return resp

    def send(
        self,
        method: str,
        path: str,
        body: Body = None,
        headers: Sequence[Header] = (),
    ) -> httpx.Response:
        """Like ``request`` but a broken request fails the current test."""
        try:
            return self.request(method, path, body, headers)
        except httpx.InvalidURL as exc:
            fail_test(f"could not build {method} request for {path!r}: {exc}")
        except httpx.HTTPError as exc:
            fail_test(f"{method} {self.url_for(path)} failed: {exc}")
