from __future__ import annotations

import asyncio
import logging
from typing import Sequence

from hue_lights.errors import AggregateError, ValidationError
from hue_lights.light_client import LightClient
from hue_lights.models import Light


logger = logging.getLogger("hue_lights")


class BulkToggleCoordinator:
    def __init__(self, *, client: LightClient) -> None:
        self.client = client

    @staticmethod
    def target_state(lights: Sequence[Light]) -> bool:
        # Any light on => switch everything off.
        return not any(light.state.on for light in lights)

    async def toggle_all(self, lights: Sequence[Light]) -> list[Light]:
        """Switch every light to the same on/off target.

        Updates run concurrently and all of them settle before the outcome is
        decided. If any update failed, AggregateError is raised even though
        the other lights were already switched on the bridge; those changes
        are not rolled back and the caller should re-fetch to reconcile.
        """
        ids = [light.id for light in lights]
        if len(set(ids)) != len(ids):
            raise ValidationError("Light ids must be unique")

        target = self.target_state(lights)
        pending = [light for light in lights if light.state.on != target]
        logger.info("Toggling %d of %d lights to on=%s", len(pending), len(lights), target)

        settled = await asyncio.gather(
            *(self.client.update_light_state(light, {"on": target}) for light in pending),
            return_exceptions=True,
        )

        updated: dict[str, Light] = {}
        failures: dict[str, Exception] = {}
        for light, result in zip(pending, settled):
            if isinstance(result, Exception):
                logger.warning("Toggle of light %s failed: %s", light.id, result)
                failures[light.id] = result
            elif isinstance(result, BaseException):
                raise result
            else:
                updated[light.id] = result

        if failures:
            raise AggregateError(failures)
        return [updated.get(light.id, light) for light in lights]
