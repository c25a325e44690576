"""In-process stand-in for the deployment under test.

Serves the three endpoints the helpers depend on, plus canned responses
for anything else, and records every request it sees:

  POST /authentication-service/oauth/token   password grant → access_token
  POST /authentication-service/users         user registration → 204
  POST /nats-remote/{channel}                bus bridge → 200
  GET|POST|PATCH /{anything}                 canned response, else 404

Drive it through ``fastapi.testclient.TestClient``::

    deployment = StubDeployment()
    client = ServiceClient(Transport(client_factory=deployment.client_factory))

TestClient accepts absolute URLs for any host, so ``DH`` can hold any
value while the stub is in use.

Endpoints read the raw body themselves (no Form/Body parameters) so the
recorder sees exactly the bytes the helper sent.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import parse_qs

from fastapi import FastAPI, Request, Response
from fastapi.testclient import TestClient
from pydantic import BaseModel, ValidationError

from svctest.core.config import CLIENT_ID, CLIENT_SECRET

logger = logging.getLogger(__name__)


# --- Request schemas --------------------------------------------------------


class AuthorityIn(BaseModel):
    authority: str


class UserIn(BaseModel):
    id: str
    username: str
    password: str
    enabled: bool
    authorities: list[AuthorityIn]


# --- State ------------------------------------------------------------------


@dataclass(frozen=True)
class RecordedRequest:
    method: str
    path: str
    headers: list[tuple[str, str]]
    body: bytes

    def header_values(self, name: str) -> list[str]:
        name = name.lower()
        return [v for k, v in self.headers if k.lower() == name]

    def json(self) -> Any:
        return json.loads(self.body)


@dataclass
class CannedResponse:
    status_code: int
    body: Any = None

    def render(self) -> Response:
        if self.body is None:
            return Response(status_code=self.status_code)
        return Response(
            content=json.dumps(self.body),
            status_code=self.status_code,
            media_type="application/json",
        )


@dataclass
class StubDeployment:
    """Mutable state behind one stub app.

    ``token_status`` / ``token_body`` override the token endpoint's answer;
    leave them unset for a working password grant.
    """

    requests: list[RecordedRequest] = field(default_factory=list)
    users: dict[str, UserIn] = field(default_factory=dict)
    messages: dict[str, list[Any]] = field(default_factory=dict)
    issued_tokens: dict[str, str] = field(default_factory=dict)
    routes: dict[tuple[str, str], CannedResponse] = field(default_factory=dict)
    token_status: int | None = None
    token_body: Any = None
    _app: FastAPI | None = field(default=None, init=False, repr=False)

    def respond(
        self, method: str, path: str, status_code: int, body: Any = None
    ) -> None:
        self.routes[(method.upper(), path)] = CannedResponse(status_code, body)

    def requests_to(
        self, path: str, method: str | None = None
    ) -> list[RecordedRequest]:
        return [
            r
            for r in self.requests
            if r.path == path and (method is None or r.method == method.upper())
        ]

    def token_for(self, username: str) -> str:
        return self.issued_tokens.setdefault(username, f"stub-token-{username}")

    def app(self) -> FastAPI:
        if self._app is None:
            self._app = create_stub_app(self)
        return self._app

    def client_factory(self) -> TestClient:
        return TestClient(self.app())


# --- App --------------------------------------------------------------------


async def _record(deployment: StubDeployment, request: Request) -> bytes:
    body = await request.body()
    deployment.requests.append(
        RecordedRequest(
            method=request.method,
            path=request.url.path,
            headers=[
                (k.decode("latin-1"), v.decode("latin-1"))
                for k, v in request.headers.raw
            ],
            body=body,
        )
    )
    return body


def create_stub_app(deployment: StubDeployment) -> FastAPI:
    app = FastAPI(title="svctest-stub-deployment")

    @app.post("/authentication-service/oauth/token")
    async def token(request: Request) -> Response:
        body = await _record(deployment, request)
        if deployment.token_status is not None:
            return CannedResponse(
                deployment.token_status, deployment.token_body
            ).render()
        if deployment.token_body is not None:
            return CannedResponse(200, deployment.token_body).render()

        form = {k: v[0] for k, v in parse_qs(body.decode("utf-8")).items()}
        if (
            form.get("client_id") != CLIENT_ID
            or form.get("client_secret") != CLIENT_SECRET
            or form.get("grant_type") != "password"
        ):
            return CannedResponse(400, {"error": "invalid_client"}).render()

        username = form.get("username", "")
        if not username or form.get("password") != username:
            return CannedResponse(401, {"error": "invalid_grant"}).render()

        logger.info("Stub issued token for username=%s", username)
        payload = {
            "access_token": deployment.token_for(username),
            "token_type": "bearer",
        }
        return CannedResponse(200, payload).render()

    @app.post("/authentication-service/users")
    async def register(request: Request) -> Response:
        body = await _record(deployment, request)
        try:
            user = UserIn.model_validate_json(body)
        except ValidationError as exc:
            return CannedResponse(400, {"detail": str(exc)}).render()
        if user.username in deployment.users:
            return CannedResponse(409, {"detail": "username taken"}).render()
        deployment.users[user.username] = user
        return Response(status_code=204)

    @app.post("/nats-remote/{channel}")
    async def publish(channel: str, request: Request) -> Response:
        body = await _record(deployment, request)
        try:
            message = json.loads(body)
        except ValueError:
            return CannedResponse(400, {"detail": "body is not JSON"}).render()
        deployment.messages.setdefault(channel, []).append(message)
        return Response(status_code=200)

    @app.api_route("/{path:path}", methods=["GET", "POST", "PATCH"])
    async def canned(path: str, request: Request) -> Response:
        await _record(deployment, request)
        found = deployment.routes.get((request.method, request.url.path))
        if found is None:
            return CannedResponse(404, {"detail": "Not Found"}).render()
        return found.render()

    return app
