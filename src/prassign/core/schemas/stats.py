"""Statistics and health schemas."""
from pydantic import BaseModel


class AssignmentStatsResponse(BaseModel):
    """Reviewer assignment counts per user and per pull request."""
    by_user: dict[str, int]
    by_pr: dict[str, int]


class HealthResponse(BaseModel):
    """Health check payload."""
    status: str
    service: str
    timestamp: str
    uptime_seconds: int
