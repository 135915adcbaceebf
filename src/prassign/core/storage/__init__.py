"""Persistence layer: database, transactions and repositories."""
from .database import Base, Database, get_db, init_db
from .interfaces import PullRequestRepository, TeamRepository, Transactor, UserRepository
from .repositories import SQLPullRequestRepository, SQLTeamRepository, SQLUserRepository
from .transaction import SQLAlchemyTransactor, Transaction

__all__ = [
    # Database
    "Base",
    "Database",
    "init_db",
    "get_db",
    # Contracts
    "Transactor",
    "TeamRepository",
    "UserRepository",
    "PullRequestRepository",
    # Implementations
    "Transaction",
    "SQLAlchemyTransactor",
    "SQLTeamRepository",
    "SQLUserRepository",
    "SQLPullRequestRepository",
]
