from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


EXTENDED_COLOR_LIGHT = "Extended color light"
ON_OFF_PLUG = "On/Off plug-in unit"

LightType = Literal["Extended color light", "On/Off plug-in unit"]

# Attributes a state update may carry; `reachable` is reported by the bridge only.
WRITABLE_STATE_FIELDS = ("on", "bri", "sat", "hue")


class LightState(BaseModel):
    model_config = ConfigDict(frozen=True)

    on: bool = Field(..., strict=True, description="Power state.")
    bri: int = Field(default=0, ge=0, le=254, strict=True, description="Brightness 0–254.")
    sat: int = Field(default=0, ge=0, le=254, strict=True, description="Saturation 0–254.")
    hue: int = Field(default=0, ge=0, le=65535, strict=True, description="Hue 0–65535.")
    reachable: bool | None = Field(
        default=None,
        strict=True,
        description="Bridge-reported connectivity; None when the bridge does not report it.",
    )

    def request_body(self) -> dict[str, bool | int]:
        return {name: getattr(self, name) for name in WRITABLE_STATE_FIELDS}


class BridgeLight(BaseModel):
    """A light object as found under its id in `GET /lights`."""

    name: str = Field(..., strict=True)
    type: LightType
    state: LightState


class Light(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Bridge light id (the key in `GET /lights`).")
    name: str
    type: LightType
    state: LightState


@dataclass(frozen=True)
class UpdateOutcome:
    """What the bridge reported for one `PUT /lights/<id>/state`.

    Both mappings are keyed by attribute name. Within one response a later
    entry for the same attribute overwrites an earlier one.
    """

    confirmed: dict[str, bool | int | float] = field(default_factory=dict)
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors
