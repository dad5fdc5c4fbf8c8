"""User identifier gate.

User-scoped reads and writes (favorites, events, personal files and
folders) only run for ids shaped like an RFC 4122 UUID. Anything else
yields an empty result instead of an error, and subscriptions for it
never fire.
"""

import re
from typing import Optional

_UUID_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[1-5][0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$",
    re.IGNORECASE,
)


def is_valid_uuid(value: Optional[str]) -> bool:
    """True when ``value`` is a version 1-5 UUID string with the RFC 4122 variant."""
    if not value or not isinstance(value, str):
        return False
    return _UUID_PATTERN.match(value) is not None
