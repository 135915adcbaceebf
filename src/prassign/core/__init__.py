"""prassign core library: domain, persistence, assignment and services."""
# storage must load before models; the ORM models import its declarative base
from . import storage
from . import models
from . import domain
from . import assignment
from . import schemas
from . import services
from . import config

__all__ = [
    "storage",
    "models",
    "domain",
    "assignment",
    "schemas",
    "services",
    "config",
]
