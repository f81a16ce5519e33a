"""Test configuration and fixtures for the tables service."""

from tests.fixtures import *  # noqa: F401,F403
