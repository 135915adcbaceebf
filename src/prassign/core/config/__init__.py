"""Configuration."""
from .settings import PRAssignConfig, get_config, init_config

__all__ = [
    "PRAssignConfig",
    "get_config",
    "init_config",
]
