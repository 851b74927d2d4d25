"""
Request field checks shared by the services.

Presence is truthiness: an empty string counts as missing.
"""

import math
import re
from typing import Mapping, Optional, Union

from roshdman.core.errors import ValidationError

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def require(fields: Mapping[str, object], message: Optional[str] = None) -> None:
    """Raise ValidationError naming every field whose value is falsy."""
    missing = [name for name, value in fields.items() if not value]
    if missing:
        raise ValidationError(message or f"Missing required fields: {', '.join(missing)}")


def parse_positive_int(value: Union[int, float, str, None], field: str) -> int:
    """Leading-integer parse (``"5"``, ``" 5 days"``, ``5.9`` -> 5); must be > 0."""
    parsed: Optional[int] = None
    if isinstance(value, bool):
        parsed = None
    elif isinstance(value, int):
        parsed = value
    elif isinstance(value, float):
        parsed = int(value) if math.isfinite(value) else None
    elif isinstance(value, str):
        match = _LEADING_INT.match(value)
        parsed = int(match.group(1)) if match else None

    if parsed is None:
        raise ValidationError(f"{field} must be a number")
    if parsed <= 0:
        raise ValidationError(f"{field} must be a positive integer")
    return parsed
