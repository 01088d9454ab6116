"""Externally facing APIs authenticated with API tokens."""

from .issues_api import issues_api

__all__ = ["issues_api"]
