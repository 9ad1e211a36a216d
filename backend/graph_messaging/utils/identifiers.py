import re
import uuid

from graph_messaging.errors import InvalidIdentifier

# Node and edge ids are 128-bit values rendered as 32 hex characters
_ID_PATTERN = re.compile(r"^[0-9a-fA-F]{32}$")


def is_valid_id(value) -> bool:
    """Return True iff value is exactly 32 hexadecimal characters."""
    if not isinstance(value, str):
        return False
    # fullmatch so a trailing newline is not accepted the way `$` would
    return _ID_PATTERN.fullmatch(value) is not None


def require_id(value, field: str = "id") -> str:
    """Return value unchanged, or raise InvalidIdentifier naming the offending field."""
    if not is_valid_id(value):
        raise InvalidIdentifier(field, value)
    return value


def canonical_id(value, field: str = "id") -> str:
    """Validate like require_id, then lowercase so lookups match stored ids.

    Stores key ids exactly as new_id() renders them.
    """
    return require_id(value, field).lower()


def new_id() -> str:
    return uuid.uuid4().hex
