import secrets
import string
from datetime import datetime, timezone

_ALPHABET = string.ascii_uppercase + string.digits


def generate_reference_number(prefix, length=6, year=None):
    """Human-readable record number, e.g. ``EVD-2025-7KQ2M9XA``."""
    year = year or datetime.now(timezone.utc).year
    suffix = "".join(secrets.choice(_ALPHABET) for _ in range(length))
    return f"{prefix}-{year}-{suffix}"
