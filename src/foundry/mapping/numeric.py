"""Leading-number extraction from display text.

A number is read from the start of the trimmed text only: ``"230V"`` gives
230, ``"1.5 m"`` gives 1.5, while ``"N/A"`` and ``"V230"`` give nothing.
"""

from __future__ import annotations

import re

from foundry.core.errors import CoercionError

_INTEGER = re.compile(r"^-?\d+")
_FLOAT = re.compile(r"^-?\d*\.?\d+")


def can_extract_integer(text: str | None) -> bool:
    if text is None or not text.strip():
        return False
    trimmed = text.strip()
    if not (trimmed[0].isdigit() or trimmed[0] == "-"):
        return False
    return _INTEGER.match(trimmed) is not None


def can_extract_float(text: str | None) -> bool:
    if text is None or not text.strip():
        return False
    trimmed = text.strip()
    if not (trimmed[0].isdigit() or trimmed[0] in "-."):
        return False
    return _FLOAT.match(trimmed) is not None


def extract_integer(text: str) -> int:
    """Integer at the start of ``text``; raises ``CoercionError`` when there is none."""
    match = _INTEGER.match(text.strip())
    if match is None:
        raise CoercionError(f"No valid integer found at the start of string: {text}")
    return int(match.group())


def extract_float(text: str) -> float:
    """Number at the start of ``text``; raises ``CoercionError`` when there is none."""
    match = _FLOAT.match(text.strip())
    if match is None:
        raise CoercionError(f"No valid numeric value found at the start of string: {text}")
    return float(match.group())
