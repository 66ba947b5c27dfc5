"""Shared pytest fixtures for database, auth and API tests."""

from .auth import *  # noqa: F401,F403
from .core import *  # noqa: F401,F403
