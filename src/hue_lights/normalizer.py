from __future__ import annotations

import re
from typing import Any, Mapping

from pydantic import ValidationError as PydanticValidationError

from hue_lights.errors import ValidationError
from hue_lights.models import BridgeLight, Light, LightState, UpdateOutcome


ADDRESS_PATTERN = re.compile(r"/lights/\w+/state/\w+", re.ASCII)


def _first_error(exc: PydanticValidationError) -> str:
    err = exc.errors()[0]
    loc = ".".join(str(part) for part in err.get("loc", ()))
    return f"{loc}: {err.get('msg')}" if loc else str(err.get("msg"))


def parse_lights(raw: Any) -> list[Light]:
    """Validate a `GET /lights` body into a list of lights.

    Lights whose state reports `reachable: false` are left out. A single
    invalid entry fails the whole collection.
    """
    if not isinstance(raw, dict):
        raise ValidationError("Lights payload must be an object keyed by light id")

    lights: list[Light] = []
    for light_id, entry in raw.items():
        try:
            parsed = BridgeLight.model_validate(entry)
        except PydanticValidationError as exc:
            raise ValidationError(
                f"Invalid light {light_id}: {_first_error(exc)}",
                errors=exc.errors(),
            ) from exc
        if parsed.state.reachable is False:
            continue
        lights.append(Light(id=str(light_id), name=parsed.name, type=parsed.type, state=parsed.state))
    return lights


def validate_state(state: LightState | Mapping[str, Any]) -> LightState:
    if isinstance(state, LightState):
        return state
    try:
        return LightState.model_validate(dict(state))
    except PydanticValidationError as exc:
        raise ValidationError(f"Invalid light state: {_first_error(exc)}", errors=exc.errors()) from exc
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"Invalid light state: {exc}") from exc


def address_key(address: Any) -> str:
    """Return the fold key of an update address.

    The key is the fourth `/`-separated segment, which for
    `/lights/<id>/state/<attribute>` is the attribute name.
    """
    if not isinstance(address, str) or not ADDRESS_PATTERN.fullmatch(address):
        raise ValidationError(f"Invalid update address: {address!r}")
    return address.split("/")[4]


def _is_update_value(value: Any) -> bool:
    return isinstance(value, (bool, int, float))


def parse_update_response(raw: Any) -> UpdateOutcome:
    """Fold a `PUT /lights/<id>/state` reply into an UpdateOutcome.

    Entries are folded in order, last write wins: if two entries resolve to
    the same key, only the later value (or description) is kept.
    """
    if not isinstance(raw, list):
        raise ValidationError("Update response must be an array")

    confirmed: dict[str, bool | int | float] = {}
    errors: dict[str, str] = {}
    for index, entry in enumerate(raw):
        if isinstance(entry, dict) and "success" in entry:
            success = entry["success"]
            if not isinstance(success, dict) or not success:
                raise ValidationError(f"Update entry {index}: success must be a non-empty object")
            keys: list[str] = []
            for address, value in success.items():
                keys.append(address_key(address))
                if not _is_update_value(value):
                    raise ValidationError(f"Update entry {index}: value for {address} must be a bool or number")
            # Only the first pair of a success record is folded.
            confirmed[keys[0]] = next(iter(success.values()))
        elif isinstance(entry, dict) and "error" in entry:
            error = entry["error"]
            if not isinstance(error, dict):
                raise ValidationError(f"Update entry {index}: error must be an object")
            key = address_key(error.get("address"))
            description = error.get("description")
            if not isinstance(description, str):
                raise ValidationError(f"Update entry {index}: error description must be a string")
            errors[key] = description
        else:
            raise ValidationError(f"Update entry {index}: expected a success or error record")

    return UpdateOutcome(confirmed=confirmed, errors=errors)
