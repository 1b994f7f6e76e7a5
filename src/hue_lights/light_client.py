from __future__ import annotations

import logging
from typing import Any, Mapping

import httpx

from hue_lights.config import AppConfig
from hue_lights.errors import FetchError, UpdateError, ValidationError
from hue_lights.models import WRITABLE_STATE_FIELDS, Light
from hue_lights.normalizer import parse_lights, parse_update_response, validate_state


logger = logging.getLogger("hue_lights")


class LightClient:
    """Async client for the bridge's `/lights` endpoints."""

    def __init__(
        self,
        *,
        base_url: str,
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url
        self._timeout_seconds = timeout_seconds
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @classmethod
    def from_config(
        cls, config: AppConfig, *, transport: httpx.AsyncBaseTransport | None = None
    ) -> "LightClient":
        return cls(base_url=config.base_url, timeout_seconds=config.request_timeout_seconds, transport=transport)

    async def close(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client:
            return self._client
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=httpx.Timeout(self._timeout_seconds),
            transport=self._transport,
        )
        return self._client

    async def _request_json(self, *, method: str, path: str, failure: str, json_body: Any | None = None) -> Any:
        client = self._get_client()
        logger.debug("%s %s body=%s", method, path, json_body)
        try:
            resp = await client.request(method, path, json=json_body)
        except httpx.HTTPError as exc:
            raise FetchError(f"{failure}: {exc}") from exc

        if not resp.is_success:
            try:
                body: Any = resp.json()
            except ValueError:
                body = resp.text
            raise FetchError(f"{failure}: HTTP {resp.status_code}", status_code=resp.status_code, body=body)

        try:
            return resp.json()
        except ValueError as exc:
            raise ValidationError(f"{failure}: response is not valid JSON") from exc

    async def fetch_lights(self) -> list[Light]:
        body = await self._request_json(method="GET", path="/lights", failure="Failed to fetch lights")
        return parse_lights(body)

    async def update_light_state(self, light: Light, partial_state: Mapping[str, Any]) -> Light:
        """Apply `partial_state` to one light.

        The whole merged state is sent. If the bridge rejects any attribute
        the call fails with UpdateError and nothing of the reply is kept.
        Reply addresses are not matched against `light.id`; every confirmed
        attribute is applied to this light.
        """
        unknown = sorted(set(partial_state) - set(WRITABLE_STATE_FIELDS))
        if unknown:
            raise ValidationError(f"Unknown state attributes for light {light.id}: {', '.join(unknown)}")

        requested = validate_state({**light.state.model_dump(), **partial_state})
        body = await self._request_json(
            method="PUT",
            path=f"/lights/{light.id}/state",
            failure=f"Failed to update light {light.id}",
            json_body=requested.request_body(),
        )
        outcome = parse_update_response(body)
        if not outcome.ok:
            logger.warning("Bridge rejected update of light %s: %s", light.id, outcome.errors)
            raise UpdateError(light_id=light.id, errors=outcome.errors)

        confirmed = {key: value for key, value in outcome.confirmed.items() if key in WRITABLE_STATE_FIELDS}
        state = validate_state({**requested.model_dump(), **confirmed})
        return Light(id=light.id, name=light.name, type=light.type, state=state)

    async def toggle_light(self, light: Light) -> Light:
        return await self.update_light_state(light, {"on": not light.state.on})
