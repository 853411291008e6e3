"""Record identifiers and the millisecond clock the ledger stamps records with."""

import secrets
import time

_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


def current_millis() -> int:
    """Milliseconds since the epoch."""
    return int(time.time() * 1000)


def _to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


def generate_id() -> str:
    """Return a new record id: base-36 time followed by a base-36 random part.

    Unique enough for interactive use; not meant to be unpredictable.
    """
    random_part = "".join(secrets.choice(_BASE36) for _ in range(11))
    return _to_base36(current_millis()) + random_part
