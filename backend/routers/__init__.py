"""Routers module - FastAPI route handlers"""

from . import config, diff, git

__all__ = ["diff", "git", "config"]
