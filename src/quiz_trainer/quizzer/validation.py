"""Validation of record identifiers typed at the prompt."""

from __future__ import annotations

import re
from typing import NewType

from .errors import QuizError

ValidatedId = NewType("ValidatedId", int)

_leading_int_re = re.compile(r"\s*([+-]?)(?:0[xX]([0-9a-fA-F]*)|([0-9]+))")


def validate_id(raw: str | int | None) -> ValidatedId:
    """Parse ``raw`` into a record identifier.

    Only the leading signed integer counts, so ``"5abc"`` gives 5 and
    ``"1.9"`` gives 1. Digits are ASCII only, and a ``0x`` prefix switches
    to hexadecimal, so ``"0x2"`` gives 2. Zero and negative values are
    accepted; whether a record exists is for the repository lookup to
    decide.
    """

    if raw is None:
        raise QuizError.missing_parameter()
    if isinstance(raw, bool):
        raise QuizError.not_a_number(raw)
    if isinstance(raw, int):
        return ValidatedId(raw)
    match = _leading_int_re.match(str(raw))
    if match is None:
        raise QuizError.not_a_number(raw)
    sign, hex_digits, digits = match.groups()
    if hex_digits is None:
        value = int(digits)
    elif hex_digits:
        value = int(hex_digits, 16)
    else:
        raise QuizError.not_a_number(raw)
    return ValidatedId(-value if sign == "-" else value)


def answers_match(given: str, expected: str) -> bool:
    """Compare answers ignoring surrounding whitespace and letter case."""

    return given.strip().casefold() == expected.strip().casefold()
