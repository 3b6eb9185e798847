"""Database models and session handling."""

from .models import Base, Account, Agent
from .session import SessionManager

__all__ = ['Base', 'Account', 'Agent', 'SessionManager']
