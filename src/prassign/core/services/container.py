"""Wiring of repositories, transactor, strategy and services."""
import random
from dataclasses import dataclass
from typing import Optional

from ..assignment import AssignmentStrategy
from ..storage.database import Database
from ..storage.repositories import SQLPullRequestRepository, SQLTeamRepository, SQLUserRepository
from ..storage.transaction import SQLAlchemyTransactor
from .pull_request import PullRequestService
from .team import TeamService
from .user import UserService


@dataclass
class Services:
    """Service instances shared by all requests."""
    teams: TeamService
    users: UserService
    pull_requests: PullRequestService


def build_services(database: Database, random_seed: Optional[int] = None) -> Services:
    """Build the service graph on top of a database.

    Args:
        database: Initialized database
        random_seed: Seed for reviewer selection; random when omitted

    Returns:
        Services instance
    """
    transactor = SQLAlchemyTransactor(database)
    team_repo = SQLTeamRepository()
    user_repo = SQLUserRepository()
    pr_repo = SQLPullRequestRepository()

    rng = random.Random(random_seed) if random_seed is not None else None
    strategy = AssignmentStrategy(rng)

    return Services(
        teams=TeamService(team_repo, user_repo, transactor),
        users=UserService(user_repo, pr_repo, transactor, strategy),
        pull_requests=PullRequestService(pr_repo, user_repo, transactor, strategy),
    )
