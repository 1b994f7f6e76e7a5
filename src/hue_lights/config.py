from __future__ import annotations

from dataclasses import dataclass

import ipaddress
import os


def _require(name: str) -> str:
    value = (os.getenv(name) or "").strip()
    if not value:
        raise ValueError(f"{name} must be set")
    return value


@dataclass(frozen=True)
class AppConfig:
    bridge_host: str
    username: str
    request_timeout_seconds: float = 10.0

    def __post_init__(self) -> None:
        try:
            ipaddress.ip_address(self.bridge_host)
        except ValueError as exc:
            raise ValueError(f"bridge_host must be an IP address, got {self.bridge_host!r}") from exc
        if not self.username or "/" in self.username:
            raise ValueError("username must be a non-empty path segment")
        if self.request_timeout_seconds <= 0:
            raise ValueError("request_timeout_seconds must be positive")

    @property
    def base_url(self) -> str:
        host = self.bridge_host
        if ipaddress.ip_address(host).version == 6:
            host = f"[{host}]"
        return f"http://{host}/api/{self.username}"

    @staticmethod
    def from_env() -> "AppConfig":
        return AppConfig(
            bridge_host=_require("HUE_BRIDGE_HOST"),
            username=_require("HUE_USERNAME"),
            request_timeout_seconds=float(os.getenv("REQUEST_TIMEOUT_SECONDS", "10")),
        )
