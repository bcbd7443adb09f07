"""
cep_weather.domain.cep

Syntactic validation of Brazilian postal codes (CEP).

Responsibilities:
- Decide whether a CEP is well-formed (exactly 8 ASCII digits).
- Raise the MALFORMED_INPUT outcome for anything else.
"""

from __future__ import annotations

import re

from cep_weather.domain.errors import ErrorKind, ErrorOutcome

# `\d` would also accept non-ASCII digits, and `$` a trailing newline.
CEP_PATTERN = re.compile(r"[0-9]{8}")


def is_valid_cep(cep: str) -> bool:
    return CEP_PATTERN.fullmatch(cep) is not None


def validate_cep(cep: str) -> str:
    if not is_valid_cep(cep):
        raise ErrorOutcome(
            ErrorKind.malformed_input,
            "invalid zipcode",
            detail=f"invalid zipcode: {cep!r}",
        )
    return cep


# --- Module Notes -----------------------------------------------------------
# Both services call `validate_cep` independently; the back service never trusts the
# front service's check since they run as separate processes.
