"""Shared pytest fixtures for database, services and authentication."""

from .auth import *  # noqa: F401,F403
from .core import *  # noqa: F401,F403
