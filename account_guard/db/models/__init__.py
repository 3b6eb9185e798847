"""SQLAlchemy models for database tables."""

from .base import Base
from .account import Account
from .agent import Agent

__all__ = [
    'Base',
    'Account',
    'Agent'
]
