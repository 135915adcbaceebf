"""Reassignment output record."""
from dataclasses import dataclass


@dataclass(frozen=True)
class Reassignment:
    """One reviewer replacement performed on an open pull request."""
    pull_request_id: str
    old_user_id: str
    new_user_id: str
