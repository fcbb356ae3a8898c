"""Normalization helpers.

Centralizes defensive parsing of bundle values that may arrive as strings,
numbers or placeholders.
"""

from __future__ import annotations

import math
from typing import Any


def safe_float(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if value in ("", "--"):
            return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(result) or math.isinf(result):
        return None
    return result


def safe_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text if text else None


def is_meaningful(value: Any) -> bool:
    """Return True if the value carries information worth keeping."""

    if value is None:
        return False
    if isinstance(value, str) and value.strip() in ("", "--", "NaN", "nan"):
        return False
    if isinstance(value, float) and math.isnan(value):
        return False
    return True
