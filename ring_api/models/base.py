"""Shared pydantic plumbing for request and response models."""

from __future__ import annotations

from typing import Any, Dict, Tuple, Type, TypeVar, Union

from pydantic import BaseModel, ConfigDict, ValidationError

from ring_api.core.errors import InvalidParameter, MalformedResponse

ResponseT = TypeVar("ResponseT", bound="ResponseModel")


class PayloadError(ValueError):
    """Validator failure that knows which part of the payload is at fault."""

    def __init__(self, location: str, message: str) -> None:
        super().__init__(message)
        self.location = location
        self.message = message


def describe_validation_error(exc: ValidationError) -> Tuple[str, str]:
    """Reduce a pydantic error to ``(location, message)`` for the first problem.

    Nested request models raise :class:`InvalidParameter` from their own
    constructor, which pydantic reports at the parent's location; the inner
    field path is appended so the result names the innermost field.
    """
    error = exc.errors()[0]
    cause = (error.get("ctx") or {}).get("error")
    if isinstance(cause, PayloadError):
        return cause.location, cause.message
    parts = [str(part) for part in error["loc"]]
    message = error["msg"]
    if isinstance(cause, InvalidParameter):
        if cause.field != "$":
            parts.append(cause.field)
        message = cause.reason
    return ".".join(parts) or "$", message


class RingModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, allow_inf_nan=False)


class RequestModel(RingModel):
    """Caller-built value object; bad input raises :class:`InvalidParameter`."""

    model_config = ConfigDict(extra="forbid")

    def __init__(self, **data: Any) -> None:
        try:
            super().__init__(**data)
        except ValidationError as exc:
            field, message = describe_validation_error(exc)
            raise InvalidParameter(field, message) from exc


class ResponseModel(RingModel):
    """Service-built value object; bad payloads raise :class:`MalformedResponse`."""

    @classmethod
    def from_body(cls: Type[ResponseT], body: Union[bytes, str]) -> ResponseT:
        try:
            return cls.model_validate_json(body)
        except ValidationError as exc:
            location, message = describe_validation_error(exc)
            raise MalformedResponse(message, location=location, body=body) from exc

    def to_payload(self) -> Dict[str, Any]:
        """Render the model back into the service's JSON shape."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


__all__ = [
    "PayloadError",
    "RequestModel",
    "ResponseModel",
    "RingModel",
    "describe_validation_error",
]
