import math
import re
from typing import Any, Iterable

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def require_non_empty(name: str, value: Any) -> str:
    text = "" if value is None else str(value).strip()
    if not text:
        raise ValueError(f"{name} must not be empty")
    return text

def parse_int(name: str, value: Any) -> int:
    # leading integer part, like a form field's parseInt: "5.7" -> 5, "12abc" -> 12
    if isinstance(value, bool):
        raise ValueError(f"{name} must be an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValueError(f"{name} must be an integer")
        return int(value)
    match = _LEADING_INT.match("" if value is None else str(value))
    if match is None:
        raise ValueError(f"{name} must be an integer")
    return int(match.group(1))

def require_positive(name: str, value: float) -> None:
    if value is None or value <= 0:
        raise ValueError(f"{name} must be > 0")

def require_non_negative(name: str, value: float) -> None:
    if value is None or value < 0:
        raise ValueError(f"{name} must be >= 0")

def require_choice(name: str, value: Any, choices: Iterable[str]) -> str:
    allowed = list(choices)
    if value not in allowed:
        raise ValueError(f"{name} must be one of: {', '.join(allowed)}")
    return value
