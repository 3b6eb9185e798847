"""
Processors for checking files of proposed accounts.
"""

from .base import BaseProcessor, ProcessingStats
from .account import AccountCheckProcessor
from .error_tracker import ErrorTracker

__all__ = ['BaseProcessor', 'ProcessingStats', 'AccountCheckProcessor', 'ErrorTracker']
