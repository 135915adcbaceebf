"""FastAPI dependencies."""
from fastapi import Request

from ..core.services import PullRequestService, Services, TeamService, UserService


def get_services(request: Request) -> Services:
    """Services built during application startup."""
    return request.app.state.services


def get_team_service(request: Request) -> TeamService:
    return get_services(request).teams


def get_user_service(request: Request) -> UserService:
    return get_services(request).users


def get_pull_request_service(request: Request) -> PullRequestService:
    return get_services(request).pull_requests
