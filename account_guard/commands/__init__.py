"""
Command implementations for the account-guard CLI.
Each submodule provides specific command functionality.
"""

from .accounts import (
    CheckNameCommand,
    WatchNamesCommand,
    AddAccountCommand,
    ListAccountsCommand,
    CheckFileCommand
)
from .agents import AddAgentCommand
from .utils import TestConnectionCommand, InitDbCommand

__all__ = [
    'CheckNameCommand',
    'WatchNamesCommand',
    'AddAccountCommand',
    'ListAccountsCommand',
    'CheckFileCommand',
    'AddAgentCommand',
    'TestConnectionCommand',
    'InitDbCommand'
]
