"""Bearer tokens per username, acquired once via the password grant.

READ-THROUGH, NEVER INVALIDATED
---------------------------------
  token_for(u) → hit  → return the stored token
               → miss → POST /authentication-service/oauth/token
                        → store access_token under u → return it

Entries live as long as the cache object.  There is no expiry and no
refresh on 401: a run that outlives the token lifetime of the deployment
will start seeing 401s from authorized helpers.

A lock serializes the whole read-through, so under threaded test runners
each username still triggers exactly one token request.

Registration (see users_service) sets password == username, which is why
the grant sends the username twice.

Every failure here is environmental: if the authentication service
cannot hand out tokens, no authorized test can pass, so the run aborts.
"""

from __future__ import annotations

import logging
import threading
from urllib.parse import urlencode

import httpx

from svctest.core.config import CLIENT_ID, CLIENT_SECRET, TOKEN_PATH
from svctest.core.errors import abort_run
from svctest.models.headers import CONTENT_TYPE, FORM_CONTENT_TYPE, Header
from svctest.services.transport import Transport

logger = logging.getLogger(__name__)


def password_grant_form(username: str) -> str:
    return urlencode(
        {
            "client_id": CLIENT_ID,
            "client_secret": CLIENT_SECRET,
            "grant_type": "password",
            "username": username,
            "password": username,
        }
    )


class TokenCache:
    def __init__(self, transport: Transport | None = None) -> None:
        self.transport = transport or Transport()
        self._tokens: dict[str, str] = {}
        self._lock = threading.Lock()

    def __contains__(self, username: object) -> bool:
        with self._lock:
            return username in self._tokens

    def __len__(self) -> int:
        with self._lock:
            return len(self._tokens)

    def token_for(self, username: str) -> str:
        with self._lock:
            token = self._tokens.get(username)
            if token is None:
                token = self._acquire(username)
                self._tokens[username] = token
            return token

    def _acquire(self, username: str) -> str:
        try:
            resp = self.transport.request(
                "POST",
                TOKEN_PATH,
                password_grant_form(username),
                [Header(CONTENT_TYPE, FORM_CONTENT_TYPE)],
            )
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            abort_run(f"could not reach authentication-service for a token: {exc}")

        try:
            if resp.status_code != 200:
                abort_run(
                    "expected status code 200 from authentication-service, "
                    f"but got: {resp.status_code} {resp.reason_phrase}"
                )
            try:
                payload = resp.json()
            except ValueError as exc:
                abort_run(
                    f"token response from authentication-service is not JSON: {exc}"
                )
        finally:
            resp.close()

        token = payload.get("access_token") if isinstance(payload, dict) else None
        if not isinstance(token, str):
            abort_run(
                "token response from authentication-service has no string "
                "access_token"
            )

        logger.info(
            "Acquired token for username=%s", username, extra={"username": username}
        )
        return token
