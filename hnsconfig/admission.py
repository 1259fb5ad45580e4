"""Admission responses with a readable message, a machine reason and an HTTP code."""

from __future__ import annotations

import dataclasses
from enum import Enum


class StatusReason(str, Enum):
    """Machine-readable reason attached to a denied request."""

    UNKNOWN = ""
    UNAUTHORIZED = "Unauthorized"
    FORBIDDEN = "Forbidden"
    CONFLICT = "Conflict"
    BAD_REQUEST = "BadRequest"
    INVALID = "Invalid"
    INTERNAL_ERROR = "InternalError"
    SERVICE_UNAVAILABLE = "ServiceUnavailable"


_CODES = {
    StatusReason.UNKNOWN: 500,
    StatusReason.UNAUTHORIZED: 401,
    StatusReason.FORBIDDEN: 403,
    StatusReason.CONFLICT: 409,
    StatusReason.BAD_REQUEST: 400,
    StatusReason.INVALID: 422,
    StatusReason.INTERNAL_ERROR: 500,
    StatusReason.SERVICE_UNAVAILABLE: 503,
}


@dataclasses.dataclass
class StatusCause:
    """A single cause of an invalid request, tied to a field path."""

    message: str
    field: str


@dataclasses.dataclass
class Status:
    """Result carried by an admission response."""

    code: int = 0
    message: str = ""
    reason: StatusReason = StatusReason.UNKNOWN
    causes: list[StatusCause] = dataclasses.field(default_factory=list)


@dataclasses.dataclass
class AdmissionResponse:
    """Whether a request is allowed, and why."""

    allowed: bool
    result: Status


def code_from_reason(reason: StatusReason | str) -> int:
    """Return the HTTP status code for a status reason; unknown reasons map to 500."""
    try:
        reason = StatusReason(reason)
    except ValueError:
        return 500
    return _CODES.get(reason, 500)


def allow(msg: str) -> AdmissionResponse:
    """Allow a request, with a human-readable message."""
    return AdmissionResponse(allowed=True, result=Status(code=0, message=msg))


def deny(reason: StatusReason | str, msg: str) -> AdmissionResponse:
    """Deny a request with both a reason and a message, and the matching code."""
    try:
        status_reason = StatusReason(reason)
    except ValueError:
        status_reason = StatusReason.UNKNOWN
    return AdmissionResponse(
        allowed=False,
        result=Status(code=code_from_reason(reason), message=msg, reason=status_reason),
    )


def deny_invalid(field: str, msg: str) -> AdmissionResponse:
    """Deny a request as invalid, repeating the message in the causes for the field."""
    resp = deny(StatusReason.INVALID, msg)
    resp.result.causes = [StatusCause(message=msg, field=str(field))]
    return resp