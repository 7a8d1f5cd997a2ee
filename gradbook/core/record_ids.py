"""Record Ids: opaque string identifiers for new graduate records.

Invariants:
    - Ids start with "g_" and contain only [0-9a-z_]
    - Random fragment first, millisecond timestamp last (both base36)
"""

import secrets
import time

from gradbook.core.domain_types import RecordId

ID_PREFIX = "g_"
_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"


def generate_record_id() -> RecordId:
    """Generate a new record id, unique for all practical purposes."""
    random_part = to_base36(secrets.randbits(52))
    time_part = to_base36(int(time.time() * 1000))
    return RecordId(f"{ID_PREFIX}{random_part}{time_part}")


def to_base36(number: int) -> str:
    if number < 0:
        raise ValueError("base36 encoding requires a non-negative integer")
    if number == 0:
        return "0"
    digits = []
    while number:
        number, rem = divmod(number, 36)
        digits.append(_ALPHABET[rem])
    return "".join(reversed(digits))
