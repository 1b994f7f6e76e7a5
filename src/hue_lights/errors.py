from __future__ import annotations

from typing import Any


class HueLightsError(Exception):
    pass


class ValidationError(HueLightsError):
    """A bridge payload or an outgoing request failed validation."""

    def __init__(self, message: str, *, errors: list[dict[str, Any]] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.errors = errors or []


class FetchError(HueLightsError):
    def __init__(self, message: str, *, status_code: int | None = None, body: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.body = body


class UpdateError(HueLightsError):
    """The bridge rejected at least one attribute of a single-light update."""

    def __init__(self, *, light_id: str, errors: dict[str, str]) -> None:
        details = ", ".join(f"{attr}: {description}" for attr, description in errors.items())
        super().__init__(f"Failed to update light {light_id} ({details})")
        self.light_id = light_id
        self.errors = dict(errors)


class AggregateError(HueLightsError):
    """One or more updates of a bulk toggle failed.

    Updates that succeeded were already applied on the bridge and are not
    rolled back; ``failures`` only lists the lights that failed.
    """

    def __init__(self, failures: dict[str, Exception]) -> None:
        super().__init__("; ".join(f"light {light_id}: {exc}" for light_id, exc in failures.items()))
        self.failures = dict(failures)

    @property
    def messages(self) -> list[str]:
        return [str(exc) for exc in self.failures.values()]
