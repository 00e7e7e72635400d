"""ID and value generators (UUID for entities, CUID for audit rows, document numbers)."""

import uuid

from cuid2 import cuid_wrapper

cuid_generator = cuid_wrapper()


def generate_uuid() -> str:
    """Return a new random UUID v4 as lowercase text (entity primary keys)."""
    return str(uuid.uuid4())


def generate_cuid() -> str:
    """Generate a collision-resistant unique identifier (CUID2).

    Returns:
        A new CUID string.
    """
    result = cuid_generator()
    if not isinstance(result, str):
        raise TypeError(
            f"Expected str from cuid_generator, got {type(result).__name__}"
        )
    return result


def format_document_number(prefix: str, year: int, sequence: int) -> str:
    """Return a document number such as ENQ-2026-007 (sequence zero-padded to 3)."""
    return f"{prefix}-{year}-{sequence:03d}"
