"""API route modules."""
from . import pull_requests, stats, team, users

__all__ = [
    "team",
    "users",
    "pull_requests",
    "stats",
]
