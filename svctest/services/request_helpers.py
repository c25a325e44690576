"""GET/POST/PATCH helpers, authorized or not, raw or status-checked.

Helper-added headers go first on the wire (Authorization, then
Content-Type), caller-supplied ``name, value`` pairs after them.

Helpers returning a response hand ownership to the caller.  Helpers that
check a status code close the response themselves, also when the check
fails.
"""

from __future__ import annotations

import httpx

from svctest.core.errors import fail_test
from svctest.models.headers import Header, bearer, json_content_type, pair_headers
from svctest.services.token_cache import TokenCache
from svctest.services.transport import Body, Transport


def check_status_code(resp: httpx.Response, expected: int) -> None:
    try:
        if resp.status_code != expected:
            resp.read()
            fail_test(
                f"{resp.request.method} {resp.request.url.path}: expected status "
                f"{expected}, got {resp.status_code}: {resp.text}"
            )
    finally:
        resp.close()


class ServiceClient:
    def __init__(
        self,
        transport: Transport | None = None,
        tokens: TokenCache | None = None,
    ) -> None:
        self.transport = transport or Transport()
        # An empty TokenCache is falsy (it has __len__), so test for None.
        self.tokens = TokenCache(self.transport) if tokens is None else tokens

    def _auth(self, user: str) -> Header:
        return bearer(self.tokens.token_for(user))

    # ---- GET ----

    def get_unauthorized(self, path: str) -> httpx.Response:
        return self.transport.send("GET", path)

    def get_authorized(self, user: str, path: str, *headers: str) -> httpx.Response:
        extra = pair_headers(headers)
        return self.transport.send("GET", path, None, [self._auth(user), *extra])

    def get_authorized_and_check_status_code(
        self, user: str, path: str, expected_code: int, *headers: str
    ) -> None:
        check_status_code(self.get_authorized(user, path, *headers), expected_code)

    def check_unauthorized(self, path: str) -> None:
        check_status_code(self.get_unauthorized(path), 401)

    # ---- POST ----

    def post_unauthorized(self, path: str, body: Body, *headers: str) -> httpx.Response:
        extra = pair_headers(headers)
        return self.transport.send("POST", path, body, [json_content_type(), *extra])

    def post_authorized(
        self, user: str, path: str, body: Body, *headers: str
    ) -> httpx.Response:
        extra = pair_headers(headers)
        return self.transport.send(
            "POST", path, body, [self._auth(user), json_content_type(), *extra]
        )

    def post_unauthorized_and_check_status_code(
        self, path: str, body: Body, expected_code: int, *headers: str
    ) -> None:
        check_status_code(self.post_unauthorized(path, body, *headers), expected_code)

    def post_authorized_and_check_status_code(
        self, user: str, path: str, body: Body, expected_code: int, *headers: str
    ) -> None:
        check_status_code(
            self.post_authorized(user, path, body, *headers), expected_code
        )

    # ---- PATCH ----

    def patch_authorized(self, path: str, body: Body, *headers: str) -> httpx.Response:
        """PATCH with caller-supplied headers only.

        Despite the name no token is attached here; pass ``Authorization``
        (and ``Content-Type``) yourself or use
        ``patch_authorized_and_check_status_code``.
        """
        return self.transport.send("PATCH", path, body, pair_headers(headers))

    def patch_authorized_and_check_status_code(
        self, user: str, path: str, body: Body, expected_code: int, *headers: str
    ) -> None:
        extra = pair_headers(headers)
        resp = self.transport.send("PATCH", path, body, [self._auth(user), *extra])
        check_status_code(resp, expected_code)
