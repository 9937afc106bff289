"""Error types raised by the VietQR codec and surfaced by the API."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class ServiceError(Exception):
    code: str
    message: str
    status_code: int = 400

    def __str__(self) -> str:  # noqa: D401 override
        return f"{self.code}: {self.message}"


@dataclass(slots=True)
class InvalidInput(ServiceError):
    """Caller-supplied build arguments violate a precondition."""

    code: str = "ERR_INVALID_INPUT"
    message: str = "Invalid input"
    status_code: int = 400


@dataclass(slots=True)
class MalformedPayload(ServiceError):
    """An untrusted payload string failed structural or semantic validation."""

    code: str = "ERR_MALFORMED_PAYLOAD"
    message: str = "Malformed payload"
    status_code: int = 422
    field: str | None = None
    position: int | None = None


def err_invalid_input(message: str | None = None) -> InvalidInput:
    return InvalidInput(message=message or "Invalid input")


def err_malformed(message: str | None = None, *, field: str | None = None, position: int | None = None) -> MalformedPayload:
    return MalformedPayload(message=message or "Malformed payload", field=field, position=position)
