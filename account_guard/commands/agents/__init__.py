"""
Agent commands for the account-guard CLI.
Maintains the owner directory used to name account owners.
"""

import click

from ...cli.base import BaseCommand, command_error_handler
from ...cli.config import Config
from ...db.models import Agent

class AddAgentCommand(BaseCommand):
    """Command to add or rename an agent in the owner directory."""

    def __init__(self, config: Config, referenceid: str, firstname: str, lastname: str):
        super().__init__(config)
        self.referenceid = referenceid
        self.firstname = firstname
        self.lastname = lastname

    @command_error_handler
    def execute(self) -> None:
        """Insert the agent, or update the name of an existing one."""
        with self.session_manager as session:
            agent = session.get(Agent, self.referenceid)
            if agent is None:
                agent = Agent(referenceid=self.referenceid)
                session.add(agent)
            agent.firstname = self.firstname.strip()
            agent.lastname = self.lastname.strip()
            display_name = agent.display_name

        click.secho(f"Saved agent {self.referenceid}: {display_name}", fg='green')

__all__ = ['AddAgentCommand']
