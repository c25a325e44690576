from __future__ import annotations

import sys
from pathlib import Path

import httpx
import pytest

from svctest.helpers import default_client
from svctest.services.request_helpers import ServiceClient
from svctest.services.token_cache import TokenCache
from svctest.services.transport import Transport
from svctest.stubs import StubDeployment

# Ensure repo root is on sys.path so `import svctest` works without installing.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

STUB_HOST = "127.0.0.1:9"


@pytest.fixture(autouse=True)
def target_host(monkeypatch: pytest.MonkeyPatch) -> str:
    """Every test targets the same fake host; the stub ignores it anyway."""
    monkeypatch.setenv("DH", STUB_HOST)
    return STUB_HOST


@pytest.fixture
def deployment() -> StubDeployment:
    return StubDeployment()


@pytest.fixture
def transport(deployment: StubDeployment) -> Transport:
    return Transport(client_factory=deployment.client_factory)


@pytest.fixture
def client(transport: Transport) -> ServiceClient:
    return ServiceClient(transport)


@pytest.fixture
def stub_default_client(
    monkeypatch: pytest.MonkeyPatch, transport: Transport
) -> ServiceClient:
    """Route the module-level helpers to the stub with an empty token cache."""
    monkeypatch.setattr(default_client, "transport", transport)
    monkeypatch.setattr(default_client, "tokens", TokenCache(transport))
    return default_client


# ---------------------------------------------------------------------------
# Response helpers
# ---------------------------------------------------------------------------


class TrackingStream(httpx.SyncByteStream):
    """Unread response body that remembers whether it was closed."""

    def __init__(self, data: bytes) -> None:
        self.data = data
        self.closed = False

    def __iter__(self):
        yield self.data

    def close(self) -> None:
        self.closed = True


def make_response(
    status_code: int = 200,
    body: bytes = b"",
    *,
    method: str = "GET",
    path: str = "/x",
) -> tuple[httpx.Response, TrackingStream]:
    stream = TrackingStream(body)
    resp = httpx.Response(
        status_code,
        stream=stream,
        request=httpx.Request(method, f"http://{STUB_HOST}{path}"),
    )
    return resp, stream


@pytest.fixture
def response_factory():
    return make_response
