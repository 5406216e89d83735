"""
Shared fixtures.

FakeZoom plays the Zoom server behind httpx.MockTransport, so the client
code runs unchanged without network access.
"""
from collections.abc import Callable
from urllib.parse import parse_qs

import httpx
import pytest
from loguru import logger

from zoomclient.api.cache import MemoryTokenCache
from zoomclient.api.zoom_api import ZoomAPI
from zoomclient.config.settings import ZoomConfig, ZoomSettings

Responder = httpx.Response | Callable[[httpx.Request], httpx.Response]


class FakeZoom:
    """Routes requests by (method, raw path) to queued responses."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.routes: dict[tuple[str, str], list[Responder]] = {}
        self.token_calls = 0
        self.token_response: Responder = httpx.Response(
            200,
            json={"access_token": "tok-1", "token_type": "bearer", "expires_in": 3599, "scope": "user:read"},
        )

    def add(self, method: str, path: str, *responses: Responder) -> None:
        """Queue responses; the last one keeps answering once the queue is drained."""
        self.routes.setdefault((method, path), []).extend(responses)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.raw_path.split(b"?")[0].decode()

        if path == "/oauth/token":
            self.token_calls += 1
            return self._respond(self.token_response, request)

        queue = self.routes.get((request.method, path))
        if not queue:
            return httpx.Response(404, json={"code": 1001, "message": f"no route {request.method} {path}"})
        responder = queue.pop(0) if len(queue) > 1 else queue[0]
        return self._respond(responder, request)

    @staticmethod
    def _respond(responder: Responder, request: httpx.Request) -> httpx.Response:
        if callable(responder):
            return responder(request)
        return responder

    @property
    def api_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path != "/oauth/token"]


def query(request: httpx.Request) -> dict[str, str]:
    """Single-valued query parameters of a request."""
    return {key: values[0] for key, values in parse_qs(request.url.query.decode()).items()}


@pytest.fixture
def settings():
    return ZoomSettings(
        _env_file=None,
        account="test",
        account_id="acc-1",
        client_id="client-1",
        client_secret="secret-1",
        page_size=2,
        rate_limit_light=0,
        rate_limit_medium=0,
        rate_limit_heavy=0,
    )


@pytest.fixture
def zoom_config(settings):
    return settings.to_config()


@pytest.fixture
def fake_zoom():
    return FakeZoom()


@pytest.fixture
def http_client(fake_zoom):
    client = httpx.Client(transport=httpx.MockTransport(fake_zoom.handler))
    yield client
    client.close()


@pytest.fixture
def sleeps():
    return []


@pytest.fixture
def zoom_api(zoom_config, settings, http_client, sleeps):
    return ZoomAPI(
        zoom_config,
        settings=settings,
        cache=MemoryTokenCache(),
        http_client=http_client,
        sleep=sleeps.append,
    )


@pytest.fixture
def log_messages():
    """Messages logged through loguru while the test runs."""
    messages: list[str] = []
    handler_id = logger.add(messages.append, level="DEBUG", format="{level} {message}")
    yield messages
    logger.remove(handler_id)


def warnings_in(messages: list[str]) -> list[str]:
    return [m for m in messages if m.startswith("WARNING")]
