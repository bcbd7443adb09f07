"""
cep_weather.domain.errors

Error taxonomy shared by the front and back services.

Responsibilities:
- Tag every failed resolution step with one of three kinds.
- Map kinds to HTTP statuses, and downstream HTTP statuses back to kinds.
- Hold each service's client-facing message table.
"""

from __future__ import annotations

import enum

from pydantic import BaseModel
from starlette.status import (
    HTTP_200_OK,
    HTTP_404_NOT_FOUND,
    HTTP_422_UNPROCESSABLE_CONTENT,
    HTTP_500_INTERNAL_SERVER_ERROR,
)


class ErrorKind(enum.StrEnum):
    # Recorded on spans as `error.kind`; treat values as a stable contract.
    malformed_input = "MALFORMED_INPUT"
    not_found = "NOT_FOUND"
    upstream_failure = "UPSTREAM_FAILURE"


STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.malformed_input: HTTP_422_UNPROCESSABLE_CONTENT,
    ErrorKind.not_found: HTTP_404_NOT_FOUND,
    ErrorKind.upstream_failure: HTTP_500_INTERNAL_SERVER_ERROR,
}

# Client-facing messages per service. These are output only; nothing branches on them.
FRONT_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.malformed_input: "invalid zipcode",
    ErrorKind.not_found: "can not find zipcode",
    ErrorKind.upstream_failure: "failed to get weather data",
}

BACK_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.malformed_input: "invalid zipcode",
    ErrorKind.not_found: "can not find zipcode",
    ErrorKind.upstream_failure: "internal error",
}


class ErrorOutcome(Exception):
    """
    A failed resolution step.

    - `kind` is the structural tag callers branch on.
    - `message` is what the client sees.
    - `status_code` defaults from the kind; body-shape errors override it with 400.
    - `detail` is the internal description recorded on spans and logs.
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        *,
        status_code: int | None = None,
        detail: str | None = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.status_code = status_code if status_code is not None else STATUS_BY_KIND[kind]
        self.detail = detail or message

    def __repr__(self) -> str:
        return (
            f"ErrorOutcome(kind={self.kind.value!r}, status_code={self.status_code}, "
            f"message={self.message!r})"
        )


class ErrorMessage(BaseModel):
    message: str


def kind_for_status(status_code: int) -> ErrorKind | None:
    # Classification of a downstream response; None means success.
    if status_code == HTTP_200_OK:
        return None
    if status_code == HTTP_404_NOT_FOUND:
        return ErrorKind.not_found
    if status_code == HTTP_422_UNPROCESSABLE_CONTENT:
        return ErrorKind.malformed_input
    return ErrorKind.upstream_failure


# --- Module Notes -----------------------------------------------------------
# The back service encodes the kind as its response status; the front service decodes it
# with `kind_for_status` and re-maps it to its own message table.
