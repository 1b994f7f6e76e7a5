import json
from typing import Any, Callable

import httpx
import pytest
import pytest_asyncio

from hue_lights.config import AppConfig
from hue_lights.light_client import LightClient
from hue_lights.models import EXTENDED_COLOR_LIGHT, Light, LightState


@pytest.fixture
def config() -> AppConfig:
    return AppConfig(bridge_host="192.168.1.29", username="dev-user", request_timeout_seconds=1.0)


class MockBridge:
    """Routes requests to per-light handlers and keeps a call log."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, str, Any]] = []
        self.lights_response: httpx.Response = httpx.Response(200, json={})
        self.update_handlers: dict[str, Callable[[dict[str, Any]], httpx.Response]] = {}

    def echo_success(self, light_id: str, body: dict[str, Any]) -> httpx.Response:
        return httpx.Response(
            200,
            json=[{"success": {f"/lights/{light_id}/state/{attr}": value}} for attr, value in body.items()],
        )

    async def handler(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content) if request.content else None
        self.calls.append((request.method, request.url.path, body))
        if request.method == "GET" and request.url.path == "/api/dev-user/lights":
            return self.lights_response
        prefix = "/api/dev-user/lights/"
        if request.method == "PUT" and request.url.path.startswith(prefix):
            light_id = request.url.path[len(prefix) :].split("/")[0]
            custom = self.update_handlers.get(light_id)
            if custom:
                return custom(body)
            return self.echo_success(light_id, body)
        return httpx.Response(404, json=[{"error": {"type": 3, "description": "resource not available"}}])

    def updated_ids(self) -> list[str]:
        return sorted(path.split("/")[4] for method, path, _ in self.calls if method == "PUT")


@pytest.fixture
def bridge() -> MockBridge:
    return MockBridge()


@pytest_asyncio.fixture
async def light_client(config: AppConfig, bridge: MockBridge):
    client = LightClient.from_config(config, transport=httpx.MockTransport(bridge.handler))
    try:
        yield client
    finally:
        await client.close()


@pytest.fixture
def make_light() -> Callable[..., Light]:
    def _make(light_id: str, *, on: bool, name: str | None = None, **state: Any) -> Light:
        return Light(
            id=light_id,
            name=name or f"Lamp {light_id}",
            type=EXTENDED_COLOR_LIGHT,
            state=LightState(on=on, **state),
        )

    return _make
