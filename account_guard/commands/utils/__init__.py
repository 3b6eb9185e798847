"""
Utility commands for the account-guard CLI.
Provides helper commands for database setup and diagnostics.
"""

import click
from sqlalchemy import text

from ...cli.base import BaseCommand, command_error_handler

class TestConnectionCommand(BaseCommand):
    """Command to test database connectivity."""

    @command_error_handler
    def execute(self) -> None:
        """Execute the connection test."""
        self.logger.info("Testing database connection...")

        with self.get_session() as session:
            session.execute(text("SELECT 1")).scalar()

        click.secho("Successfully connected to the database!", fg='green')

class InitDbCommand(BaseCommand):
    """Command to create the account and agent tables."""

    @command_error_handler
    def execute(self) -> None:
        """Create any missing tables."""
        self.session_manager.create_tables()
        click.secho("Database tables are ready.", fg='green')

__all__ = ['TestConnectionCommand', 'InitDbCommand']
