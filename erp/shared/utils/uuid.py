"""UUID validation helpers for identifiers crossing the HTTP boundary."""

import re

UUID_V4_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$",
    re.IGNORECASE,
)


def is_valid_uuid(value: object) -> bool:
    """Return True if value is a string in canonical UUID v4 form."""
    if not value or not isinstance(value, str):
        return False
    return bool(UUID_V4_PATTERN.fullmatch(value))
