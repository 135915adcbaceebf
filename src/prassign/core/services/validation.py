"""Input normalization helpers."""
from typing import Iterable, Optional

from ..domain import InvalidArgumentError


def require(value: Optional[str], field: str) -> str:
    """Trim ``value`` and reject it when blank."""
    value = (value or "").strip()
    if not value:
        raise InvalidArgumentError(f"{field} must not be empty")
    return value


def normalize_ids(user_ids: Iterable[str], field: str = "user_ids") -> list[str]:
    """Trim and de-duplicate ids, keeping first occurrences in order.

    Raises:
        InvalidArgumentError: If the collection is empty or any id is blank
    """
    normalized: list[str] = []
    seen: set[str] = set()
    for raw in user_ids or []:
        user_id = require(raw, field)
        if user_id in seen:
            continue
        seen.add(user_id)
        normalized.append(user_id)

    if not normalized:
        raise InvalidArgumentError(f"{field} must not be empty")
    return normalized
